"""
Dependencies - Faculty Appraisal Dashboard
app/core/dependencies.py

FastAPI dependency injection for repositories and services.
"""

from functools import lru_cache

from app.config import get_settings
from app.repositories.appraisal_repository import AppraisalRepository
from app.repositories.cycle_repository import CycleRepository
from app.repositories.user_repository import UserRepository
from app.scoring.integration_service import AppraisalScoringService


@lru_cache()
def get_appraisal_repository() -> AppraisalRepository:
    """Get cached AppraisalRepository instance."""
    return AppraisalRepository()


@lru_cache()
def get_cycle_repository() -> CycleRepository:
    """Get cached CycleRepository instance."""
    return CycleRepository()


@lru_cache()
def get_user_repository() -> UserRepository:
    """Get cached UserRepository instance."""
    return UserRepository()


@lru_cache()
def get_scoring_service() -> AppraisalScoringService:
    """Get cached AppraisalScoringService configured from settings."""
    return AppraisalScoringService(window_months=get_settings().EVALUATION_WINDOW_MONTHS)
