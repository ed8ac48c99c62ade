# exercise_tracker/models/users.py

from datetime import datetime

from pydantic import BaseModel


class NewUserOut(BaseModel):
    id: str
    username: str

    class Config:
        from_attributes = True


class UserOut(BaseModel):
    id: str
    username: str
    created_at: datetime

    class Config:
        from_attributes = True
