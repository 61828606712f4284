# tests/test_integration_service.py

"""
Appraisal Scoring Pipeline Tests
"""

from datetime import datetime, timezone

from app.models.appraisal import AppraisalView
from app.models.enumerations import AppraisalStatus

NOW = datetime(2024, 6, 15, tzinfo=timezone.utc)


class TestBuildView:

    def test_scored_view(self, scoring_service, appraisals):
        view = scoring_service.build_view(appraisals[0], now=NOW)
        assert isinstance(view, AppraisalView)
        assert view.id == 101
        assert view.scores.overall == 5.0
        assert view.evaluation_enabled is True
        assert view.awards[0].name == "Best Paper"
        assert view.courses[0].course_code == "CS101"

    def test_record_without_evaluation(self, scoring_service, appraisals):
        view = scoring_service.build_view(appraisals[1], now=NOW)
        assert view.evaluation.research_pts == 0
        assert len(view.evaluation.behavior_ratings) == 5
        assert view.scores.raw_performance == 0
        assert view.scores.overall == 0.0

    def test_new_appraisal_inside_window(self, scoring_service, appraisals):
        bob = appraisals[1]
        assert bob.status is AppraisalStatus.NEW
        assert scoring_service.build_view(bob, now=NOW).evaluation_enabled is True
        assert scoring_service.build_view(bob, now=datetime(2024, 5, 1, tzinfo=timezone.utc)).evaluation_enabled is False

    def test_complete_appraisal(self, scoring_service, appraisals):
        assert scoring_service.build_view(appraisals[2], now=NOW).evaluation_enabled is False

    def test_input_not_mutated(self, scoring_service, appraisals):
        before = appraisals[0].model_dump()
        scoring_service.build_view(appraisals[0], now=NOW)
        assert appraisals[0].model_dump() == before


class TestBuildViews:

    def test_preserves_order(self, scoring_service, appraisals):
        ordered = [appraisals[2], appraisals[0], appraisals[1]]
        views = scoring_service.build_views(ordered, now=NOW)
        assert [v.id for v in views] == [103, 101, 102]

    def test_empty_batch(self, scoring_service):
        assert scoring_service.build_views([], now=NOW) == []

    def test_same_result_as_single(self, scoring_service, appraisals):
        views = scoring_service.build_views(appraisals, now=NOW)
        assert views[0] == scoring_service.build_view(appraisals[0], now=NOW)
