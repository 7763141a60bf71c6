"""FastAPI app serving the GraphQL endpoint, health and info routes."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.fastapi import GraphQLRouter

from . import bootstrap
from .config import settings
from .db import engine, get_session
from .logging_config import setup_logging
from .schema import schema

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown logic."""
    # Startup
    setup_logging()
    logger.info(f"{settings.app_name} starting up")
    await bootstrap.startup()
    logger.info(
        f"Server is running, GraphQL available at "
        f"http://{settings.server.host}:{settings.server.port}{settings.graphql.path}"
    )

    yield

    # Shutdown
    await engine.dispose()
    logger.info(f"{settings.app_name} shutting down")


async def get_context(session: AsyncSession = Depends(get_session)) -> dict:
    """Per-request GraphQL context carrying the database session."""
    return {"session": session}


graphql_app = GraphQLRouter(
    schema,
    context_getter=get_context,
    graphql_ide="graphiql" if settings.graphql.graphiql else None,
)


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Audited entities with a GraphQL read API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graphql_app, prefix=settings.graphql.path)


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        version=settings.version,
    )


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.version,
        "endpoints": {
            "health": "/health",
            "graphql": settings.graphql.path,
            "queries": ["getSomeClass", "getNoteClass"],
        },
    }
