# exercise_tracker/db/schema.py

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Date, DateTime, CheckConstraint
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", String(24), primary_key=True),
    Column("username", String, nullable=False, unique=True),
    Column("created_at", DateTime, nullable=False),
)

# user_id is checked by the application, not by a foreign key
exercises = Table(
    "exercises",
    metadata,
    Column("id", String(24), primary_key=True),
    Column("user_id", String, nullable=False, index=True),
    Column("description", String, nullable=False),
    Column("duration", Integer, nullable=False),
    Column("date", Date, nullable=False),
    Column("created_at", DateTime, nullable=False),
    CheckConstraint("duration >= 0", name="ck_exercises_duration_nonneg"),
)
