"""Reusable FastAPI dependencies."""

from .container import get_app_container, get_expiration_trigger
from .database import get_db_session

__all__ = [
    "get_app_container",
    "get_db_session",
    "get_expiration_trigger",
]
