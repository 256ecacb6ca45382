"""Create (or recreate with --drop) the ledger tables on DATABASE_URL."""

import os
import sys

# Add parent dir to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy.exc import SQLAlchemyError

from khata.config import get_settings
from khata.infrastructure.database import Base, Database


def init_db(drop: bool = False) -> int:
    settings = get_settings()
    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    try:
        if drop:
            print("Dropping existing tables...")
            database.drop_all()
        database.create_all()
        for table in Base.metadata.sorted_tables:
            print(f"✓ Table ready: {table.name}")
        print("\nDatabase schema created successfully!")
        return 0
    except SQLAlchemyError as e:
        print(f"Database initialization failed: {e}")
        return 1
    finally:
        database.dispose()


if __name__ == "__main__":
    sys.exit(init_db(drop="--drop" in sys.argv[1:]))
