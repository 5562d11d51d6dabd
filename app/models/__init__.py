"""Database models."""

from app.models.appointments import appointments
from app.models.physicians import physicians
from app.models.reminders import reminders
from app.models.users import users

__all__ = [
    "appointments",
    "physicians",
    "reminders",
    "users",
]
