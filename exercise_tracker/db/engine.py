# exercise_tracker/db/engine.py

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from exercise_tracker.db.schema import metadata

DB_URL = "sqlite:///db.sqlite"  # file in project root


@lru_cache(maxsize=None)
def get_engine(url: str = DB_URL) -> Engine:
    # echo=True if you want to see SQL printed in the terminal
    engine = create_engine(url, future=True)
    metadata.create_all(engine)
    return engine
