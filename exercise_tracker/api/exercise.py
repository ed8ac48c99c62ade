# exercise_tracker/api/exercise.py

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.engine import Engine

from exercise_tracker.db import queries
from exercise_tracker.errors import (
    ExerciseTrackerError,
    InvalidDateFormat,
    InvalidDuration,
    InvalidUserId,
)
from exercise_tracker.guard import run_guarded
from exercise_tracker.models.exercises import ExerciseLogOut, ExerciseOut
from exercise_tracker.models.users import NewUserOut, UserOut
from exercise_tracker.validation import is_valid_date, is_valid_int

router = APIRouter(prefix="/exercise", tags=["exercise"])


def get_db(request: Request) -> Engine:
    return request.app.state.engine


def get_timeout(request: Request) -> float:
    return request.app.state.settings.request_timeout_seconds


async def read_body(request: Request) -> Dict[str, Any]:
    """Accept both form-encoded and JSON request bodies."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise ExerciseTrackerError("Invalid JSON body", status_code=400)
        return body if isinstance(body, dict) else {}
    form = await request.form()
    return {key: value for key, value in form.items() if isinstance(value, str)}


def _str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


@router.get("/users", response_model=List[UserOut])
async def list_users(
    engine: Engine = Depends(get_db),
    timeout: float = Depends(get_timeout),
) -> List[UserOut]:
    """
    Return every stored user.
    """
    return await run_guarded(queries.list_users, engine, timeout=timeout)


@router.get("/log", response_model=ExerciseLogOut)
async def get_exercise_log(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    from_: Optional[str] = Query(default=None, alias="from", description="yyyy-mm-dd"),
    to: Optional[str] = Query(default=None, description="yyyy-mm-dd"),
    limit: Optional[str] = Query(default=None, description="Maximum number of entries"),
    engine: Engine = Depends(get_db),
    timeout: float = Depends(get_timeout),
) -> ExerciseLogOut:
    """
    Return a user's exercise log, optionally bounded by date range and count.
    """
    if not user_id:
        raise InvalidUserId()

    return await run_guarded(
        queries.get_exercise_log, engine, user_id, from_, to, limit, timeout=timeout
    )


@router.post("/new-user", response_model=NewUserOut)
async def create_user(
    body: Dict[str, Any] = Depends(read_body),
    engine: Engine = Depends(get_db),
    timeout: float = Depends(get_timeout),
) -> NewUserOut:
    return await run_guarded(
        queries.create_user, engine, _str_or_none(body.get("username")), timeout=timeout
    )


@router.post("/add", response_model=ExerciseOut)
async def add_exercise(
    body: Dict[str, Any] = Depends(read_body),
    engine: Engine = Depends(get_db),
    timeout: float = Depends(get_timeout),
) -> ExerciseOut:
    """
    Add an exercise for a user. duration and date are checked before the store is touched.
    """
    duration = _str_or_none(body.get("duration"))
    date_str = _str_or_none(body.get("date"))

    if not is_valid_int(duration):
        raise InvalidDuration()
    if date_str and not is_valid_date(date_str):
        raise InvalidDateFormat()

    return await run_guarded(
        queries.add_exercise,
        engine,
        _str_or_none(body.get("userId")),
        _str_or_none(body.get("description")),
        duration,
        date_str,
        timeout=timeout,
    )
