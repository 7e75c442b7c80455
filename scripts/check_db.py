"""Check the connection to the training log database and its tables."""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Load .env file
from dotenv import load_dotenv

load_dotenv()

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, text

from training_analytics.core.config import settings
from training_analytics.db.session import get_engine

TABLES = ("workouts", "workout_exercises", "workout_sets")

print("=" * 60)
print("Testing training log connection")
print("=" * 60)
print(f"Database URL: {settings.DATABASE_URL.split('@')[1]}")  # Hide password
print()

try:
    engine = get_engine()

    with Session(engine) as session:
        result = session.exec(text("SELECT version()")).first()
        print("✓ Connection successful!")
        print(f"PostgreSQL version: {result}")

        for table in TABLES:
            exists = session.exec(text("SELECT EXISTS (SELECT FROM information_schema.tables "
                                       f"WHERE table_name = '{table}')")).first()
            if exists and exists[0]:
                print(f"✓ '{table}' table found")
            else:
                print(f"✗ '{table}' table does not exist")

except SQLAlchemyError as e:
    print(f"✗ Connection failed: {e}")
    sys.exit(1)

print("=" * 60)
