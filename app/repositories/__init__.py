"""
Repositories Package - Faculty Appraisal Dashboard
app/repositories/__init__.py

Data access layer for Snowflake database operations.
"""

from app.repositories.base import BaseRepository
from app.repositories.appraisal_repository import AppraisalRepository
from app.repositories.cycle_repository import CycleRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "AppraisalRepository",
    "CycleRepository",
    "UserRepository",
]
