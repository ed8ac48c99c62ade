# app.py
"""
Thin entrypoint for the API.

Usage example:
    uvicorn app:app --reload
    python app.py            # listens on $PORT (default 3000)
"""

import logging

import uvicorn

from exercise_tracker.config import configure_logging, load_settings
from exercise_tracker.main import create_app

settings = load_settings()
configure_logging(settings)

app = create_app(settings)

logger = logging.getLogger("exercise_tracker")


def main():
    logger.info("Your app is listening on port %s", settings.port)
    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
