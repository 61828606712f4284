"""
scoring/integration_service.py

Full pipeline: raw appraisal record → AppraisalView.

Class: AppraisalScoringService
Methods: build_view(appraisal) → AppraisalView
         build_views(appraisals) → List[AppraisalView]

Pipeline steps:
  1. select latest evaluation (zero-filled if none)
  2. CapacityNormalizer → five canonical ratings
  3. ScoreAggregator → raw, scaled and overall scores
  4. eligibility gate → evaluation_enabled

Views are derived on every call and never stored. Rows are independent and
output order equals input order.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from app.models.appraisal import Appraisal, AppraisalBase, AppraisalView
from app.scoring.eligibility import DEFAULT_WINDOW_MONTHS, is_evaluation_enabled
from app.scoring.evaluation_selector import select_evaluation_view
from app.scoring.score_aggregator import ScoreAggregator

logger = logging.getLogger(__name__)

_BASE_FIELDS = set(AppraisalBase.model_fields)


class AppraisalScoringService:
    """Reshape raw appraisal records into scored view models."""

    def __init__(self, window_months: int = DEFAULT_WINDOW_MONTHS):
        self.window_months = window_months
        self.aggregator = ScoreAggregator()

    def build_view(self, appraisal: Appraisal, now: Optional[datetime] = None) -> AppraisalView:
        """
        Score a single appraisal.

        Args:
            appraisal: Raw record with evaluations ordered newest first
            now: Clock value for the eligibility check (defaults to now)

        Returns:
            AppraisalView with evaluation, scores and evaluation_enabled
        """
        evaluation = select_evaluation_view(appraisal.evaluations)
        breakdown = self.aggregator.calculate(evaluation)
        enabled = is_evaluation_enabled(
            appraisal.status,
            appraisal.cycle.end_date,
            now=now,
            window_months=self.window_months,
        )

        return AppraisalView(
            **appraisal.model_dump(include=_BASE_FIELDS),
            evaluation=evaluation,
            scores=breakdown.to_summary(),
            evaluation_enabled=enabled,
        )

    def build_views(
        self,
        appraisals: Iterable[Appraisal],
        now: Optional[datetime] = None,
    ) -> List[AppraisalView]:
        """Score a batch; every row sees the same clock value."""
        now = now or datetime.now(timezone.utc)
        views = [self.build_view(a, now=now) for a in appraisals]
        logger.info(f"Scored {len(views)} appraisals")
        return views
