# exercise_tracker/db/queries.py
"""
Data-access functions for users and their exercise logs.

Each function takes the engine to run against and either returns the
response model for the caller or raises one of the errors in
exercise_tracker.errors.
"""

import logging
import secrets
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from exercise_tracker.db.schema import exercises, users
from exercise_tracker.errors import (
    INVALID_USER_ID,
    StorageError,
    StoreValidationError,
    UserNotFound,
    UsernameTaken,
    required_message,
)
from exercise_tracker.models.exercises import ExerciseLogOut, ExerciseOut, LogEntry
from exercise_tracker.models.users import NewUserOut, UserOut
from exercise_tracker.validation import (
    is_valid_date,
    is_valid_int,
    parse_date,
    to_calendar_string,
)

logger = logging.getLogger(__name__)

# largest value the store keeps in an INTEGER column
MAX_STORE_INT = 2 ** 63 - 1


def _fits_store_int(digits: str) -> bool:
    # length first: int() refuses very long digit strings outright
    return len(digits) <= len(str(MAX_STORE_INT)) and int(digits) <= MAX_STORE_INT


def new_id() -> str:
    return secrets.token_hex(12)


def _now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _find_user(conn, user_id: str):
    stmt = select(users.c.id, users.c.username).where(users.c.id == user_id)
    return conn.execute(stmt).mappings().first()


def create_user(engine: Engine, username: Optional[str]) -> NewUserOut:
    if not username:
        raise StoreValidationError({"username": required_message("username")})

    user_id = new_id()
    try:
        with engine.begin() as conn:
            conn.execute(
                insert(users).values(id=user_id, username=username, created_at=_now())
            )
    except IntegrityError:
        logger.info("Username %r already taken", username)
        raise UsernameTaken()

    # Re-read what was stored, without the metadata columns
    with engine.connect() as conn:
        row = _find_user(conn, user_id)

    logger.info("Created user %s (%s)", row["id"], row["username"])
    return NewUserOut(id=row["id"], username=row["username"])


def list_users(engine: Engine) -> List[UserOut]:
    with engine.connect() as conn:
        stmt = (
            select(users.c.id, users.c.username, users.c.created_at)
            .order_by(users.c.created_at, users.c.id)
        )
        rows = conn.execute(stmt).mappings().all()

    return [
        UserOut(id=row["id"], username=row["username"], created_at=row["created_at"])
        for row in rows
    ]


def add_exercise(
    engine: Engine,
    user_id: Optional[str],
    description: Optional[str],
    duration: Optional[str],
    date_str: Optional[str] = None,
) -> ExerciseOut:
    """
    Save an exercise, then check that its user exists.

    If the user is missing the saved row is deleted again before
    UserNotFound is raised, so a failed add leaves no orphaned record.
    """
    missing = {
        field: required_message(field)
        for field, value in (
            ("userId", user_id),
            ("description", description),
            ("duration", duration),
        )
        if value is None or value == ""
    }
    if missing:
        raise StoreValidationError(missing)
    if not is_valid_int(duration) or not _fits_store_int(duration):
        raise StoreValidationError(
            {"duration": f'Cast to Number failed for value "{duration}" at path "duration"'}
        )

    exercise_date = parse_date(date_str) if is_valid_date(date_str) else date.today()
    exercise_id = new_id()
    values = dict(
        id=exercise_id,
        user_id=user_id,
        description=description,
        duration=int(duration),
        date=exercise_date,
        created_at=_now(),
    )

    with engine.begin() as conn:
        conn.execute(insert(exercises).values(**values))

    with engine.connect() as conn:
        user = _find_user(conn, user_id)

    if user is None:
        with engine.begin() as conn:
            conn.execute(delete(exercises).where(exercises.c.id == exercise_id))
        logger.warning(
            "Removed exercise %s: no user with id %r", exercise_id, user_id
        )
        raise UserNotFound()

    logger.info("Added exercise %s for user %s", exercise_id, user["id"])
    return ExerciseOut(
        id=user["id"],
        username=user["username"],
        date=to_calendar_string(values["date"]),
        duration=values["duration"],
        description=values["description"],
    )


def get_exercise_log(
    engine: Engine,
    user_id: str,
    from_: Optional[str] = None,
    to: Optional[str] = None,
    limit: Optional[str] = None,
) -> ExerciseLogOut:
    # a limit past the store's integer range means no limit
    limit_n = int(limit) if is_valid_int(limit) and _fits_store_int(limit) else 0
    from_date = parse_date(from_) if is_valid_date(from_) else date.min
    to_date = parse_date(to) if is_valid_date(to) else date.max

    try:
        with engine.connect() as conn:
            user = _find_user(conn, user_id)
            if user is None:
                raise UserNotFound()

            stmt = (
                select(
                    exercises.c.description,
                    exercises.c.duration,
                    exercises.c.date,
                )
                .where(
                    exercises.c.user_id == user["id"],
                    exercises.c.date >= from_date,
                    exercises.c.date <= to_date,
                )
                .order_by(exercises.c.date.asc(), exercises.c.created_at.asc())
            )
            if limit_n > 0:
                stmt = stmt.limit(limit_n)

            rows = conn.execute(stmt).mappings().all()
    except SQLAlchemyError as exc:
        logger.exception("Exercise log query failed for user %r", user_id)
        raise StorageError(INVALID_USER_ID) from exc

    log = [
        LogEntry(
            description=row["description"],
            duration=row["duration"],
            date=to_calendar_string(row["date"]),
        )
        for row in rows
    ]

    return ExerciseLogOut(
        id=user["id"],
        username=user["username"],
        count=limit_n if limit_n else len(log),
        log=log,
    )
