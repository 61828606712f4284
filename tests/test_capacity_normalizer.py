# tests/test_capacity_normalizer.py

"""
Tests for capacity normalization and latest-evaluation selection
"""

from datetime import datetime, timezone

import pytest

from app.models.appraisal import BehaviorRating, Evaluation
from app.models.enumerations import Capacity
from app.scoring.capacity_normalizer import CapacityNormalizer
from app.scoring.evaluation_selector import latest_evaluation, select_evaluation_view


@pytest.fixture
def normalizer():
    return CapacityNormalizer()


def points(normalized):
    return [r.points for r in normalized]


class TestCapacityNormalizer:

    def test_empty_input_zero_fills(self, normalizer):
        result = normalizer.normalize([])
        assert [r.capacity for r in result] == list(Capacity)
        assert points(result) == [0, 0, 0, 0, 0]

    def test_reorders_to_canonical_order(self, normalizer):
        result = normalizer.normalize([
            ("Achieving Results", 5),
            ("Client Service", 4),
            ("Professionalism", 3),
            ("Collaboration & Teamwork", 2),
            ("Institutional Commitment", 1),
        ])
        assert points(result) == [1, 2, 3, 4, 5]

    def test_keyword_match_is_case_insensitive_substring(self, normalizer):
        result = normalizer.normalize([
            ("INSTITUTIONAL loyalty", 10),
            ("teamwork and collaboration", 20),
            ("client-facing service", 30),
        ])
        assert points(result) == [10, 20, 0, 30, 0]

    def test_label_with_two_keywords_feeds_both(self, normalizer):
        result = normalizer.normalize([("Institutional collaboration", 40)])
        assert points(result) == [40, 40, 0, 0, 0]

    def test_first_match_wins(self, normalizer):
        result = normalizer.normalize([("Professionalism", 15), ("professionalism (repeat)", 99)])
        assert result[2].points == 15

    def test_unmatched_labels_dropped(self, normalizer):
        result = normalizer.normalize([("Punctuality", 50), ("Client Service", 8)])
        assert len(result) == 5
        assert sum(points(result)) == 8

    def test_accepts_behavior_ratings(self, normalizer):
        result = normalizer.normalize([BehaviorRating(capacity="Achieving Results", points=12)])
        assert result[4].points == 12

    def test_missing_points_count_as_zero(self, normalizer):
        result = normalizer.normalize([("Professionalism", None)])
        assert result[2].points == 0

    def test_idempotent(self, normalizer):
        once = normalizer.normalize([("Client Service", 7), ("Professionalism", 3)])
        assert normalizer.normalize(once) == once


class TestEvaluationSelector:

    def test_latest_is_first(self):
        newer = Evaluation(id=2, created_at=datetime(2024, 5, 1, tzinfo=timezone.utc))
        older = Evaluation(id=1, created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        assert latest_evaluation([newer, older]) is newer
        assert latest_evaluation([]) is None

    def test_no_evaluation_gives_zero_view(self):
        view = select_evaluation_view([])
        assert view.total_score == 0
        assert view.research_pts == 0
        assert view.university_service_pts == 0
        assert view.community_service_pts == 0
        assert view.teaching_quality_pts == 0
        assert points(view.behavior_ratings) == [0] * 5

    def test_absent_points_become_zero(self):
        view = select_evaluation_view([Evaluation(research_pts=30)])
        assert view.research_pts == 30
        assert view.community_service_pts == 0
        assert view.total_score == 0

    def test_older_evaluations_not_merged(self, full_marks_evaluation, stale_evaluation):
        view = select_evaluation_view([full_marks_evaluation, stale_evaluation])
        assert view.research_pts == 25
        assert view.points_for(Capacity.PROFESSIONALISM) == 20
