#!/usr/bin/env python3
"""
Run Alembic Migrations Script (Python)
Runs migrations on both development and test databases using .env configuration

This script uses Pydantic Settings to load the .env file.
"""

import os
import subprocess
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from app.config import settings  # noqa: E402

DEV_DATABASE = "office_dev"
TEST_DATABASE = "office_test"


def mask_password(url: str) -> str:
    return url.replace("postgres:postgres@", "postgres:***@")


def run_migrations(database_name: str = DEV_DATABASE):
    """Run Alembic migrations on specified database"""
    # Get base URL from settings (reads from .env)
    new_url = settings.DATABASE_URL.replace(DEV_DATABASE, database_name)

    # alembic/env.py reads DATABASE_URL from the environment first
    env = os.environ.copy()
    env["DATABASE_URL"] = new_url

    print(f"📊 Migrating {database_name} database...")
    print(f"   URL: {mask_password(new_url)}")

    result = subprocess.run(["alembic", "upgrade", "head"], cwd=project_root, env=env)

    if result.returncode != 0:
        print(f"❌ Migration failed for {database_name}")
        sys.exit(1)

    print(f"✅ {database_name} migration complete!")


def main():
    """Main entry point"""
    print("🔄 Running Alembic migrations...")
    print(f"📄 Using .env file: {project_root / '.env'}")
    print(f"📄 Current DATABASE_URL: {mask_password(settings.DATABASE_URL)}")
    print()

    run_migrations(DEV_DATABASE)
    print()
    run_migrations(TEST_DATABASE)

    print()
    print("✅ All migrations complete!")


if __name__ == "__main__":
    main()
