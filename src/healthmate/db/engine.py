"""Database engine setup and initialization."""

from pathlib import Path

import aiosqlite

from ..config import DATA_DIR

# Seconds a writer waits on another transaction's lock before giving up
BUSY_TIMEOUT = 10.0


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "healthmate.db"


def connect(db_path: Path, autocommit: bool = False) -> aiosqlite.Connection:
    """Open a connection with the shared busy timeout.

    With ``autocommit`` the connection issues no implicit BEGIN, so the
    caller controls transactions explicitly.
    """
    if autocommit:
        return aiosqlite.connect(db_path, timeout=BUSY_TIMEOUT, isolation_level=None)
    return aiosqlite.connect(db_path, timeout=BUSY_TIMEOUT)


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)

    async with connect(db_path) as db:
        await db.execute("PRAGMA journal_mode=WAL")

        # User profiles table
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_profiles (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                age INTEGER,
                gender TEXT,
                height REAL,
                weight REAL,
                activity_level TEXT NOT NULL DEFAULT 'moderate',
                health_goals TEXT NOT NULL DEFAULT '[]',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # One row per user per calendar day
        await db.execute("""
            CREATE TABLE IF NOT EXISTS health_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER NOT NULL,
                day TEXT NOT NULL,
                date TIMESTAMP NOT NULL,
                data TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (user_id, day),
                FOREIGN KEY (user_id) REFERENCES user_profiles(id)
            )
        """)

        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_health_logs_user_date
            ON health_logs(user_id, date)
        """)

        await db.commit()
