"""
scoring/evaluation_selector.py

Picks the latest evaluation of an appraisal and reshapes it into an
EvaluationView. Appraisals without an evaluation get a zero-filled view, so
every row in a result set has the same evaluation shape.
"""

from typing import Optional, Sequence

from app.models.appraisal import Evaluation, EvaluationView
from app.scoring.capacity_normalizer import CapacityNormalizer
from app.scoring.utils import points_or_zero

_normalizer = CapacityNormalizer()


def latest_evaluation(evaluations: Sequence[Evaluation]) -> Optional[Evaluation]:
    """Evaluations arrive newest first; older ones are ignored, never merged."""
    return evaluations[0] if evaluations else None


def select_evaluation_view(evaluations: Sequence[Evaluation]) -> EvaluationView:
    """Build the evaluation view for an appraisal. Never returns None."""
    latest = latest_evaluation(evaluations)
    if latest is None:
        return EvaluationView(behavior_ratings=_normalizer.normalize([]))

    return EvaluationView(
        total_score=points_or_zero(latest.total_score),
        research_pts=points_or_zero(latest.research_pts),
        university_service_pts=points_or_zero(latest.university_service_pts),
        community_service_pts=points_or_zero(latest.community_service_pts),
        teaching_quality_pts=points_or_zero(latest.teaching_quality_pts),
        behavior_ratings=_normalizer.normalize(latest.behavior_ratings),
    )
