#!/usr/bin/env python3
"""
Create the poster gallery schema and seed the default political parties
"""

import asyncio
import sys
from pathlib import Path

# Add the app directory to the Python path
sys.path.insert(0, str(Path(__file__).parent))

from app.db import init_db, close_db
from app.services.catalog import seed_parties

async def initialize_database():
    """Initialize the database for deployment"""
    print("Initializing poster gallery database...")

    try:
        await init_db()
        added = await seed_parties()
        print(f"Database initialized successfully! ({added} parties seeded)")
        return True
    except (OSError, ValueError) as e:
        print(f"Database initialization failed: {e}")
        return False
    finally:
        await close_db()

if __name__ == "__main__":
    success = asyncio.run(initialize_database())
    if not success:
        sys.exit(1)
