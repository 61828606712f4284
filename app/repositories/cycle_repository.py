"""
Cycle Repository - Faculty Appraisal Dashboard
app/repositories/cycle_repository.py

Data access for appraisal cycles (reference data, cached in Redis).
"""

import logging
from typing import Any, Dict, List

from pydantic import BaseModel

from app.models.appraisal import AppraisalCycle
from app.repositories.base import BaseRepository
from app.services.cache import get_cache, CYCLES_CACHE_KEY, TTL_CYCLES

logger = logging.getLogger(__name__)


class CycleList(BaseModel):
    """Cache envelope for the cycles list."""

    items: List[AppraisalCycle]


class CycleRepository(BaseRepository):
    """Repository for AppraisalCycle reads."""

    def get_all(self) -> List[AppraisalCycle]:
        """
        Retrieve all cycles, newest start date first.

        Served from Redis when available; falls back to Snowflake.
        """
        cache = get_cache()
        if cache:
            try:
                cached = cache.get(CYCLES_CACHE_KEY, CycleList)
                if cached is not None:
                    return cached.items
            except Exception as e:
                logger.warning(f"Cycle cache read failed: {e}")

        sql = """
            SELECT ID, ACADEMIC_YEAR, START_DATE, END_DATE, IS_ACTIVE
            FROM APPRAISAL_CYCLES
            ORDER BY START_DATE DESC
        """
        rows = self.execute_query(sql, fetch_all=True) or []
        cycles = [self._row_to_cycle(r) for r in rows]

        if cache:
            try:
                cache.set(CYCLES_CACHE_KEY, CycleList(items=cycles), TTL_CYCLES)
            except Exception as e:
                logger.warning(f"Cycle cache write failed: {e}")

        return cycles

    def _row_to_cycle(self, row: Dict[str, Any]) -> AppraisalCycle:
        return AppraisalCycle(
            id=row["ID"],
            academic_year=row["ACADEMIC_YEAR"],
            start_date=row["START_DATE"],
            end_date=row["END_DATE"],
            is_active=bool(row["IS_ACTIVE"]),
        )
