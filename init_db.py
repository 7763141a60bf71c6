"""Initialize database schema for the entity notes service.

Drops and recreates every table. Run this for a clean start.
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from entity_notes.config import settings
from entity_notes.db import create_schema, drop_schema, engine
from entity_notes.models import Base


async def init_database():
    """Drop and create all database tables."""
    print(f"Initializing database: {settings.db.url}")

    await drop_schema(engine)
    print("✓ Dropped existing tables")

    await create_schema(engine)
    print("✓ Created all tables")

    print(f"Tables created: {', '.join(Base.metadata.tables.keys())}")
    await engine.dispose()


async def main():
    """Main entry point."""
    try:
        await init_database()
    except Exception as e:
        print(f"\n❌ Error initializing database: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
