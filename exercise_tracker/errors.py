# exercise_tracker/errors.py
"""
Error kinds raised by the data-access layer and the route handlers.

Every error carries the HTTP status and the plain-text message the error
handlers in main.py render.
"""

from typing import Dict, Optional

INVALID_DATE = "Invalid date format. Need to be yyyy-mm-dd"
INVALID_DURATION = "Invalid duration type. Must be an int."
INVALID_USERNAME = "Username already taken."
INVALID_USER_ID = "Invalid userId."


class ExerciseTrackerError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class UsernameTaken(ExerciseTrackerError):
    status_code = 400
    message = INVALID_USERNAME


class InvalidUserId(ExerciseTrackerError):
    status_code = 400
    message = INVALID_USER_ID


class UserNotFound(InvalidUserId):
    """No user matches the given id."""


class StorageError(ExerciseTrackerError):
    status_code = 500


class InvalidDateFormat(ExerciseTrackerError):
    status_code = 400
    message = INVALID_DATE


class InvalidDuration(ExerciseTrackerError):
    status_code = 400
    message = INVALID_DURATION


class RequestTimeout(ExerciseTrackerError):
    message = "timeout"


class MissingResult(ExerciseTrackerError):
    message = "Missing callback argument"


class StoreValidationError(ExerciseTrackerError):
    """
    Field-level validation failure reported by the store layer.

    `errors` maps field name -> message, in schema order.
    """

    status_code = 400

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        first = next(iter(self.errors.values()), "Validation failed")
        super().__init__(first)


def required_message(field: str) -> str:
    return f"Path `{field}` is required."
