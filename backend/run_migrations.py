"""Create the database schema for the configured DATABASE_URL."""
from sweem.config import settings
from sweem.database import create_db_and_tables


def run():
    """Create any missing tables.

    Existing tables and rows are left as they are, so running this
    repeatedly is safe.
    """
    print("Using database:", settings.DATABASE_URL)
    create_db_and_tables()
    print("Schema ready.")


if __name__ == '__main__':
    run()
