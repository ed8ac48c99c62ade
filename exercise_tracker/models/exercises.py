# exercise_tracker/models/exercises.py

from typing import List

from pydantic import BaseModel


class ExerciseOut(BaseModel):
    id: str
    username: str
    date: str
    duration: int
    description: str


class LogEntry(BaseModel):
    description: str
    duration: int
    date: str


class ExerciseLogOut(BaseModel):
    id: str
    username: str
    count: int
    log: List[LogEntry]
