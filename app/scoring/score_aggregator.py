# app/scoring/score_aggregator.py
"""
Score Aggregator
-------------------------------
Computes raw and scaled appraisal totals from an EvaluationView.

Formula:
    raw_performance     = research + university_service + community_service + teaching_quality
    raw_capabilities    = Σ five capacity points
    scaled_performance  = round2(raw_performance × 3 / 100)     100 → 3.00
    scaled_capabilities = round2(raw_capabilities × 7 / 100)    100 → 7.00
    overall             = round2((scaled_performance + scaled_capabilities) / 2)

Each scaled quantity is rounded on its own; the overall score is computed
from the already-rounded scaled values. The overall score is the plain mean
of a 3-point and a 7-point value.
"""
import structlog
from dataclasses import dataclass
from decimal import Decimal

from app.models.appraisal import EvaluationView, ScoreSummary
from app.scoring.utils import round2

logger = structlog.get_logger(__name__)

PERFORMANCE_SCALE = 3
CAPABILITIES_SCALE = 7
POINTS_BASE = 100


@dataclass
class ScoreBreakdown:
    """Output of ScoreAggregator.calculate()."""
    raw_performance: float
    raw_capabilities: float
    scaled_performance: Decimal   # 0.01 precision
    scaled_capabilities: Decimal  # 0.01 precision
    overall: Decimal              # 0.01 precision

    def to_summary(self) -> ScoreSummary:
        return ScoreSummary(
            raw_performance=self.raw_performance,
            scaled_performance=float(self.scaled_performance),
            raw_capabilities=self.raw_capabilities,
            scaled_capabilities=float(self.scaled_capabilities),
            overall=float(self.overall),
        )


def scale_performance(raw_performance: float) -> Decimal:
    return round2(raw_performance * PERFORMANCE_SCALE / POINTS_BASE)


def scale_capabilities(raw_capabilities: float) -> Decimal:
    return round2(raw_capabilities * CAPABILITIES_SCALE / POINTS_BASE)


def overall_score(scaled_performance: Decimal, scaled_capabilities: Decimal) -> Decimal:
    # float sum of the rounded parts, matching the display pipeline
    return round2((float(scaled_performance) + float(scaled_capabilities)) / 2)


class ScoreAggregator:
    """Aggregate category points and capacity ratings into display scores."""

    def calculate(self, evaluation: EvaluationView) -> ScoreBreakdown:
        """
        Calculate raw totals, scaled sub-scores and the overall score.

        Args:
            evaluation: Normalized evaluation (always five ratings)

        Returns:
            ScoreBreakdown with raw sums and 2-place scaled values

        Examples:
            >>> from app.scoring.capacity_normalizer import CapacityNormalizer
            >>> view = EvaluationView(
            ...     research_pts=25, university_service_pts=25,
            ...     community_service_pts=25, teaching_quality_pts=25,
            ...     behavior_ratings=CapacityNormalizer().normalize([("Professionalism", 100)]),
            ... )
            >>> ScoreAggregator().calculate(view).overall
            Decimal('5.00')
        """
        raw_performance = (
            evaluation.research_pts
            + evaluation.university_service_pts
            + evaluation.community_service_pts
            + evaluation.teaching_quality_pts
        )
        raw_capabilities = 0
        for rating in evaluation.behavior_ratings:
            raw_capabilities += rating.points

        scaled_performance = scale_performance(raw_performance)
        scaled_capabilities = scale_capabilities(raw_capabilities)
        overall = overall_score(scaled_performance, scaled_capabilities)

        logger.debug(
            "appraisal_scores_calculated",
            raw_performance=raw_performance,
            raw_capabilities=raw_capabilities,
            scaled_performance=str(scaled_performance),
            scaled_capabilities=str(scaled_capabilities),
            overall=str(overall),
        )

        return ScoreBreakdown(
            raw_performance=raw_performance,
            raw_capabilities=raw_capabilities,
            scaled_performance=scaled_performance,
            scaled_capabilities=scaled_capabilities,
            overall=overall,
        )
