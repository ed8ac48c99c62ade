# exercise_tracker/__init__.py
"""
Package entrypoint for the FastAPI application.

The application is assembled by create_app(); app.py at the project root
builds the default instance:
    uvicorn app:app --reload
"""

from .main import create_app

__all__ = ["create_app"]
