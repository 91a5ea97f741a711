"""
db/init_db.py
-------------
Creates the database schema (the Users table and its unique email index)
if it does not already exist. There is no versioned migration history.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: one row per user record managed from the console
CREATE TABLE IF NOT EXISTS "Users" (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL CHECK (char_length(name) > 0),
    email           VARCHAR(150) NOT NULL CHECK (char_length(email) > 0),
    age             INTEGER NOT NULL,
    created_at      TIMESTAMPTZ NOT NULL DEFAULT NOW()
);

-- No two users may share an email address
CREATE UNIQUE INDEX IF NOT EXISTS ux_users_email ON "Users"(email);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create the Users table and index.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import database
    with database():
        create_tables()
    print("✅ Database schema created successfully.")
