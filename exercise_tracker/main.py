# exercise_tracker/main.py

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from exercise_tracker.api.exercise import router as exercise_router
from exercise_tracker.config import Settings, load_settings
from exercise_tracker.db.engine import get_engine
from exercise_tracker.errors import ExerciseTrackerError

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PUBLIC_DIR = PROJECT_ROOT / "public"
INDEX_HTML = PROJECT_ROOT / "views" / "index.html"


def _text(status_code: int, message: str) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code)


async def handle_tracker_error(request: Request, exc: ExerciseTrackerError):
    errors = getattr(exc, "errors", None)
    if errors:
        # store validation error: report the first field
        return _text(400, next(iter(errors.values())))
    return _text(exc.status_code or 500, exc.message or "Internal Server Error")


async def handle_request_validation(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Bad Request") if errors else "Bad Request"
    return _text(400, message)


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return _text(404, "not found")
    return _text(exc.status_code, str(exc.detail))


async def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _text(500, "Internal Server Error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    cfg = settings or load_settings()

    app = FastAPI(
        title="Exercise Tracker API",
        version="0.1.0",
    )
    app.state.settings = cfg
    app.state.engine = get_engine(cfg.database_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    @app.get("/", include_in_schema=False)
    def index():
        return FileResponse(INDEX_HTML)

    app.include_router(exercise_router, prefix="/api")
    app.mount("/public", StaticFiles(directory=PUBLIC_DIR, check_dir=False), name="public")

    app.add_exception_handler(ExerciseTrackerError, handle_tracker_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected)

    return app
