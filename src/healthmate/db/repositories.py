"""Data access layer for healthmate."""

import asyncio
import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Callable

import aiosqlite

from ..errors import PersistenceConflict
from ..models.health_log import DailyLog
from ..models.user_profile import UserProfile
from .engine import connect, get_db_path

logger = logging.getLogger(__name__)

# Attempts at an atomic day update before reporting a conflict
MAX_WRITE_ATTEMPTS = 5
RETRY_DELAY = 0.05


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class UserProfileRepository:
    """Repository for user profiles."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def create(self, profile: UserProfile) -> int:
        """Create a new user profile."""
        data = profile.to_dict()
        async with connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO user_profiles
                (name, age, gender, height, weight, activity_level, health_goals)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    data["name"],
                    data["age"],
                    data["gender"],
                    data["height"],
                    data["weight"],
                    data["activity_level"],
                    json.dumps(data["health_goals"]),
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def get(self, profile_id: int) -> UserProfile | None:
        """Get a user profile by ID."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_profiles WHERE id = ?", (profile_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def get_latest(self) -> UserProfile | None:
        """Get the most recently created/updated profile."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM user_profiles ORDER BY updated_at DESC, id DESC LIMIT 1"
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_profile(row)

    async def list_all(self) -> list[UserProfile]:
        """List all user profiles."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM user_profiles ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_profile(row) for row in rows]

    async def update(self, profile: UserProfile) -> None:
        """Update an existing profile."""
        if profile.id is None:
            raise ValueError("Profile must have an ID to update")

        data = profile.to_dict()
        async with connect(self.db_path) as db:
            await db.execute(
                """
                UPDATE user_profiles SET
                    name = ?, age = ?, gender = ?, height = ?, weight = ?,
                    activity_level = ?, health_goals = ?,
                    updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (
                    data["name"],
                    data["age"],
                    data["gender"],
                    data["height"],
                    data["weight"],
                    data["activity_level"],
                    json.dumps(data["health_goals"]),
                    profile.id,
                ),
            )
            await db.commit()

    def _row_to_profile(self, row: aiosqlite.Row) -> UserProfile:
        """Convert a database row to a UserProfile."""
        data = {
            "name": row["name"],
            "age": row["age"],
            "gender": row["gender"],
            "height": row["height"],
            "weight": row["weight"],
            "activity_level": row["activity_level"],
            "health_goals": json.loads(row["health_goals"]),
        }
        return UserProfile.from_dict(
            data,
            id=row["id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )


class HealthLogRepository:
    """Repository for daily health logs.

    Logs are keyed by (user_id, day); the day is the calendar date of the
    log's timestamp and is unique per user.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get_by_day(self, user_id: int, day: date) -> DailyLog | None:
        """Get a user's log for a calendar day."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM health_logs WHERE user_id = ? AND day = ?",
                (user_id, day.isoformat()),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def get_latest(self, user_id: int) -> DailyLog | None:
        """Get the user's most recent log by date."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM health_logs WHERE user_id = ? ORDER BY date DESC LIMIT 1",
                (user_id,),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_log(row)

    async def list_since(self, user_id: int, start: datetime) -> list[DailyLog]:
        """Logs with ``date >= start``, oldest first."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM health_logs
                WHERE user_id = ? AND date >= ?
                ORDER BY date ASC
                """,
                (user_id, start.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def list_between(
        self, user_id: int, start: datetime, end: datetime
    ) -> list[DailyLog]:
        """Logs with ``start <= date <= end``, oldest first."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM health_logs
                WHERE user_id = ? AND date >= ? AND date <= ?
                ORDER BY date ASC
                """,
                (user_id, start.isoformat(), end.isoformat()),
            )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def list_recent(
        self,
        user_id: int,
        start: datetime | None = None,
        end: datetime | None = None,
        limit: int = 30,
    ) -> list[DailyLog]:
        """Newest-first listing, bounded inclusively when both ends are given."""
        async with connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if start and end:
                cursor = await db.execute(
                    """
                    SELECT * FROM health_logs
                    WHERE user_id = ? AND date >= ? AND date <= ?
                    ORDER BY date DESC LIMIT ?
                    """,
                    (user_id, start.isoformat(), end.isoformat(), limit),
                )
            else:
                cursor = await db.execute(
                    "SELECT * FROM health_logs WHERE user_id = ? ORDER BY date DESC LIMIT ?",
                    (user_id, limit),
                )
            rows = await cursor.fetchall()
            return [self._row_to_log(row) for row in rows]

    async def upsert(self, log: DailyLog) -> int:
        """Insert the log, or replace the stored one for the same day."""
        async with connect(self.db_path) as db:
            log_id = await self._write(db, log)
            await db.commit()
            return log_id

    async def update_day(
        self,
        user_id: int,
        day: date,
        mutate: Callable[[DailyLog | None], DailyLog],
    ) -> DailyLog:
        """Atomically find-or-create, mutate and store a user's day.

        ``mutate`` receives the stored log (or None) inside a write
        transaction and returns the log to store. Concurrent callers for
        the same database serialize on the transaction, so none of them
        can overwrite another's changes.

        Raises:
            PersistenceConflict: if the write lock could not be acquired
                after MAX_WRITE_ATTEMPTS attempts
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            try:
                return await self._update_day_once(user_id, day, mutate)
            except aiosqlite.OperationalError as e:
                if "locked" not in str(e) and "busy" not in str(e):
                    raise
                logger.info(
                    "Log for user %s on %s is locked (attempt %d/%d), retrying",
                    user_id,
                    day,
                    attempt,
                    MAX_WRITE_ATTEMPTS,
                )
                await asyncio.sleep(RETRY_DELAY * attempt)

        raise PersistenceConflict(
            f"Could not update log for user {user_id} on {day} "
            f"after {MAX_WRITE_ATTEMPTS} attempts"
        )

    async def _update_day_once(
        self,
        user_id: int,
        day: date,
        mutate: Callable[[DailyLog | None], DailyLog],
    ) -> DailyLog:
        async with connect(self.db_path, autocommit=True) as db:
            db.row_factory = aiosqlite.Row
            # Take the write lock before reading so the read-modify-write is atomic
            await db.execute("BEGIN IMMEDIATE")
            try:
                cursor = await db.execute(
                    "SELECT * FROM health_logs WHERE user_id = ? AND day = ?",
                    (user_id, day.isoformat()),
                )
                row = await cursor.fetchone()
                existing = self._row_to_log(row) if row else None

                log = mutate(existing)
                if log.user_id != user_id or log.day != day:
                    raise ValueError(
                        f"Mutation moved log to user {log.user_id} on {log.day}"
                    )
                log.id = await self._write(db, log)
                await db.execute("COMMIT")
            except Exception:
                await db.execute("ROLLBACK")
                raise
            return log

    async def clear_all(self) -> int:
        """Delete every health log. User profiles are kept."""
        async with connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM health_logs")
            await db.commit()
            return cursor.rowcount

    async def _write(self, db: aiosqlite.Connection, log: DailyLog) -> int:
        """Upsert a log on an open connection and return its row id."""
        await db.execute(
            """
            INSERT INTO health_logs (user_id, day, date, data)
            VALUES (?, ?, ?, ?)
            ON CONFLICT (user_id, day) DO UPDATE SET
                data = excluded.data,
                updated_at = CURRENT_TIMESTAMP
            """,
            (
                log.user_id,
                log.day.isoformat(),
                log.date.isoformat(),
                json.dumps(log.to_dict()),
            ),
        )
        cursor = await db.execute(
            "SELECT id FROM health_logs WHERE user_id = ? AND day = ?",
            (log.user_id, log.day.isoformat()),
        )
        row = await cursor.fetchone()
        return row[0]

    def _row_to_log(self, row: aiosqlite.Row) -> DailyLog:
        """Convert a database row to a DailyLog."""
        return DailyLog.from_dict(
            json.loads(row["data"]),
            id=row["id"],
            created_at=_parse_timestamp(row["created_at"]),
            updated_at=_parse_timestamp(row["updated_at"]),
        )
