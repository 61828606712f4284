# tests/test_property_based.py
"""
Property-Based Tests

Hypothesis properties for the capacity normalizer, the score aggregator and
the batch scoring pipeline.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from app.models.appraisal import Appraisal, AppraisalCycle, Evaluation, EvaluationView, Faculty
from app.models.enumerations import AppraisalStatus, Capacity
from app.scoring.capacity_normalizer import CapacityNormalizer
from app.scoring.integration_service import AppraisalScoringService
from app.scoring.score_aggregator import ScoreAggregator, scale_capabilities, scale_performance

# ---------------------------------------------------------------------------
# Shared strategies
# ---------------------------------------------------------------------------

points_st = st.floats(min_value=0.0, max_value=100.0, allow_nan=False, allow_infinity=False)

label_st = st.one_of(
    st.sampled_from([c.value for c in Capacity]),
    st.sampled_from([c.keyword.upper() for c in Capacity]),
    st.text(max_size=30),
)

ratings_st = st.lists(st.tuples(label_st, points_st), max_size=12)


@st.composite
def evaluation_view_st(draw):
    return EvaluationView(
        research_pts=draw(points_st),
        university_service_pts=draw(points_st),
        community_service_pts=draw(points_st),
        teaching_quality_pts=draw(points_st),
        behavior_ratings=CapacityNormalizer().normalize(draw(ratings_st)),
    )


CYCLE = AppraisalCycle(
    id=1, academic_year="2023-2024", start_date=date(2023, 9, 1), end_date=date(2024, 6, 30)
)


@st.composite
def appraisal_st(draw, appraisal_id):
    evaluations = []
    if draw(st.booleans()):
        evaluations.append(Evaluation(
            research_pts=draw(st.one_of(st.none(), points_st)),
            teaching_quality_pts=draw(st.one_of(st.none(), points_st)),
        ))
    return Appraisal(
        id=appraisal_id,
        status=draw(st.sampled_from(list(AppraisalStatus))),
        faculty=Faculty(id=appraisal_id, name=f"Faculty {appraisal_id}"),
        cycle=CYCLE,
        updated_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        evaluations=evaluations,
    )


# ---------------------------------------------------------------------------
# Normalizer properties
# ---------------------------------------------------------------------------

class TestNormalizerProperties:

    @given(ratings=ratings_st)
    @settings(max_examples=500)
    def test_always_five_in_canonical_order(self, ratings):
        result = CapacityNormalizer().normalize(ratings)
        assert [r.capacity for r in result] == list(Capacity)

    @given(ratings=ratings_st)
    @settings(max_examples=500)
    def test_idempotent(self, ratings):
        normalizer = CapacityNormalizer()
        once = normalizer.normalize(ratings)
        assert normalizer.normalize(once) == once

    @given(ratings=ratings_st)
    @settings(max_examples=500)
    def test_points_come_from_input(self, ratings):
        result = CapacityNormalizer().normalize(ratings)
        supplied = {p for _, p in ratings}
        for rating in result:
            assert rating.points == 0 or rating.points in supplied


# ---------------------------------------------------------------------------
# Aggregator properties
# ---------------------------------------------------------------------------

class TestAggregatorProperties:

    @given(view=evaluation_view_st())
    @settings(max_examples=500)
    def test_two_decimal_places(self, view):
        result = ScoreAggregator().calculate(view)
        for value in (result.scaled_performance, result.scaled_capabilities, result.overall):
            assert value.as_tuple().exponent == -2

    @given(view=evaluation_view_st())
    @settings(max_examples=500)
    def test_bounded_by_category_maximums(self, view):
        result = ScoreAggregator().calculate(view)
        assert Decimal("0") <= result.scaled_performance <= Decimal("12.00")
        assert Decimal("0") <= result.scaled_capabilities <= Decimal("35.00")

    @given(a=st.floats(min_value=0, max_value=400, allow_nan=False),
           b=st.floats(min_value=0, max_value=400, allow_nan=False))
    @settings(max_examples=500)
    def test_scaling_monotonic(self, a, b):
        low, high = sorted((a, b))
        assert scale_performance(low) <= scale_performance(high)
        assert scale_capabilities(low) <= scale_capabilities(high)


# ---------------------------------------------------------------------------
# Pipeline properties
# ---------------------------------------------------------------------------

class TestPipelineProperties:

    @given(data=st.data(), size=st.integers(min_value=0, max_value=8))
    @settings(max_examples=200)
    def test_order_preserved(self, data, size):
        batch = [data.draw(appraisal_st(i)) for i in range(1, size + 1)]
        data.draw(st.randoms()).shuffle(batch)
        views = AppraisalScoringService().build_views(
            batch, now=datetime(2024, 6, 15, tzinfo=timezone.utc)
        )
        assert [v.id for v in views] == [a.id for a in batch]

    @given(appraisal=appraisal_st(1))
    @settings(max_examples=200)
    def test_evaluation_always_present(self, appraisal):
        view = AppraisalScoringService().build_view(appraisal)
        assert len(view.evaluation.behavior_ratings) == 5
        if not appraisal.evaluations:
            assert view.evaluation.total_score == 0
            assert view.scores.overall == 0.0
