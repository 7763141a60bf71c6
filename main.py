"""Main entry point for running the FastAPI application."""
import uvicorn

from entity_notes.api import app
from entity_notes.config import settings

if __name__ == "__main__":
    print(f"Starting {settings.app_name} v{settings.version}")
    print(f"Debug mode: {settings.debug}")
    print(f"Database: {settings.db.url.split('@')[-1] if '@' in settings.db.url else settings.db.url}")
    print(f"GraphQL: http://{settings.server.host}:{settings.server.port}{settings.graphql.path}")
    print("-" * 50)

    uvicorn.run(
        "entity_notes.api:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.server.reload,
        reload_dirs=["entity_notes"] if settings.server.reload else None,
        log_level=settings.logging.level.lower(),
    )
