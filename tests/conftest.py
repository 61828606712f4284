# tests/conftest.py

"""
Pytest Fixtures - Shared test data and in-memory repositories

SEED DATA ID REFERENCE:
- Departments: 1 Computer Science, 2 Mathematics
- Cycles:      1 2023-2024 (active, ends 2024-06-30), 2 2022-2023
- Appraisals:  101-104 instructors, 201-202 HODs
"""

from datetime import date, datetime, timezone
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.dependencies import (
    get_appraisal_repository,
    get_cycle_repository,
    get_scoring_service,
    get_user_repository,
)
from app.main import app
from app.models.appraisal import (
    Appraisal,
    AppraisalCycle,
    Award,
    BehaviorRating,
    Course,
    Department,
    Evaluation,
    Faculty,
    ResearchActivity,
    ServiceActivity,
    UserRecord,
)
from app.models.enumerations import AppraisalStatus, UserRole
from app.scoring.integration_service import AppraisalScoringService


# =============================================================================
# SESSION HEADERS
# =============================================================================

HOD_EMAIL = "hod.cs@uni.edu"
HOD_NO_DEPT_EMAIL = "hod.floating@uni.edu"
DEAN_EMAIL = "dean@uni.edu"
INSTRUCTOR_EMAIL = "alice@uni.edu"


# =============================================================================
# IN-MEMORY REPOSITORIES
# =============================================================================

class FakeUserRepository:
    def __init__(self, users: List[UserRecord]):
        self.users = {u.email.lower(): u for u in users}

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        return self.users.get(email.lower())


class FakeAppraisalRepository:
    """Applies the same scoping and filters as the SQL WHERE clause."""

    def __init__(self, appraisals: List[Appraisal], error: Optional[Exception] = None):
        self.appraisals = appraisals
        self.error = error
        self.list_calls = []

    def _in_scope(self, a: Appraisal, faculty_role, department_id) -> bool:
        if a.faculty.role != faculty_role:
            return False
        if department_id is None:
            return True
        return a.faculty.department is not None and a.faculty.department.id == department_id

    def list_appraisals(self, faculty_role, department_id=None, cycle_id=None, status=None, search=None):
        if self.error:
            raise self.error
        self.list_calls.append(
            {"faculty_role": faculty_role, "department_id": department_id,
             "cycle_id": cycle_id, "status": status, "search": search}
        )
        result = [
            a for a in self.appraisals
            if self._in_scope(a, faculty_role, department_id)
            and (cycle_id is None or a.cycle.id == cycle_id)
            and (status is None or a.status == status)
            and (not search or search.lower() in a.faculty.name.lower())
        ]
        return sorted(result, key=lambda a: a.updated_at, reverse=True)

    def get_by_id(self, appraisal_id, faculty_role, department_id=None):
        if self.error:
            raise self.error
        for a in self.appraisals:
            if a.id == appraisal_id and self._in_scope(a, faculty_role, department_id):
                return a
        return None


class FakeCycleRepository:
    def __init__(self, cycles: List[AppraisalCycle]):
        self.cycles = cycles

    def get_all(self) -> List[AppraisalCycle]:
        return sorted(self.cycles, key=lambda c: c.start_date, reverse=True)


# =============================================================================
# REFERENCE DATA FIXTURES
# =============================================================================

@pytest.fixture
def cs_department():
    return Department(id=1, name="Computer Science")


@pytest.fixture
def math_department():
    return Department(id=2, name="Mathematics")


@pytest.fixture
def current_cycle():
    """Active cycle ending 2024-06-30."""
    return AppraisalCycle(
        id=1,
        academic_year="2023-2024",
        start_date=date(2023, 9, 1),
        end_date=date(2024, 6, 30),
        is_active=True,
    )


@pytest.fixture
def previous_cycle():
    return AppraisalCycle(
        id=2,
        academic_year="2022-2023",
        start_date=date(2022, 9, 1),
        end_date=date(2023, 6, 30),
    )


@pytest.fixture
def users():
    return [
        UserRecord(id=10, email=HOD_EMAIL, name="Hana Haddad", role=UserRole.HOD, department_id=1),
        UserRecord(id=11, email=HOD_NO_DEPT_EMAIL, name="Fadi Nader", role=UserRole.HOD),
        UserRecord(id=12, email=DEAN_EMAIL, name="Dana Dean", role=UserRole.DEAN),
        UserRecord(id=1, email=INSTRUCTOR_EMAIL, name="Alice Example", role=UserRole.INSTRUCTOR, department_id=1),
    ]


# =============================================================================
# EVALUATION FIXTURES
# =============================================================================

@pytest.fixture
def full_marks_evaluation():
    """25 per category and 20 per capacity: performance 100, capabilities 100."""
    return Evaluation(
        id=1,
        created_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        research_pts=25,
        university_service_pts=25,
        community_service_pts=25,
        teaching_quality_pts=25,
        total_score=100,
        behavior_ratings=[
            BehaviorRating(capacity="Institutional Commitment", points=20),
            BehaviorRating(capacity="Collaboration & Teamwork", points=20),
            BehaviorRating(capacity="Professionalism", points=20),
            BehaviorRating(capacity="Client Service", points=20),
            BehaviorRating(capacity="Achieving Results", points=20),
        ],
    )


@pytest.fixture
def stale_evaluation():
    """Older evaluation that must be ignored when a newer one exists."""
    return Evaluation(
        id=0,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        research_pts=90,
        university_service_pts=90,
        community_service_pts=90,
        teaching_quality_pts=90,
        behavior_ratings=[BehaviorRating(capacity="Professionalism", points=90)],
    )


# =============================================================================
# APPRAISAL FIXTURES
# =============================================================================

def make_faculty(id: int, name: str, role: UserRole, department: Optional[Department]) -> Faculty:
    return Faculty(id=id, name=name, role=role, department=department)


@pytest.fixture
def appraisals(cs_department, math_department, current_cycle, previous_cycle,
               full_marks_evaluation, stale_evaluation):
    alice = make_faculty(1, "Alice Example", UserRole.INSTRUCTOR, cs_department)
    bob = make_faculty(2, "Bob Builder", UserRole.INSTRUCTOR, cs_department)
    carol = make_faculty(3, "Carol Math", UserRole.INSTRUCTOR, math_department)
    hana = make_faculty(10, "Hana Haddad", UserRole.HOD, cs_department)
    omar = make_faculty(20, "Omar Saleh", UserRole.HOD, math_department)

    return [
        Appraisal(
            id=101, status=AppraisalStatus.IN_PROGRESS, faculty=alice, cycle=current_cycle,
            updated_at=datetime(2024, 5, 3, tzinfo=timezone.utc),
            evaluations=[full_marks_evaluation, stale_evaluation],
            awards=[Award(name="Best Paper", area="Research", organization="IEEE",
                          date_obtained=date(2024, 2, 1))],
            courses=[Course(academic_year="2023-2024", semester="Fall", course_code="CS101",
                            section="A", course_title="Intro to Programming", credit=3,
                            students_count=40, students_eval_avg=4.5)],
            research_activities=[ResearchActivity(title="Graph Kernels", type="Journal",
                                                  kind="Article", publication_date=date(2024, 3, 1))],
            university_services=[ServiceActivity(committee_or_task="Curriculum Committee",
                                                 authority="Faculty Council")],
        ),
        Appraisal(
            id=102, status=AppraisalStatus.NEW, faculty=bob, cycle=current_cycle,
            updated_at=datetime(2024, 5, 2, tzinfo=timezone.utc),
        ),
        Appraisal(
            id=103, status=AppraisalStatus.COMPLETE, faculty=carol, cycle=current_cycle,
            updated_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
        ),
        Appraisal(
            id=104, status=AppraisalStatus.SENT, faculty=alice, cycle=previous_cycle,
            updated_at=datetime(2023, 6, 1, tzinfo=timezone.utc),
        ),
        Appraisal(
            id=201, status=AppraisalStatus.IN_PROGRESS, faculty=hana, cycle=current_cycle,
            updated_at=datetime(2024, 5, 4, tzinfo=timezone.utc),
            evaluations=[full_marks_evaluation],
        ),
        Appraisal(
            id=202, status=AppraisalStatus.COMPLETE, faculty=omar, cycle=current_cycle,
            updated_at=datetime(2024, 5, 5, tzinfo=timezone.utc),
        ),
    ]


@pytest.fixture
def scoring_service():
    return AppraisalScoringService(window_months=1)


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def appraisal_repo(appraisals):
    return FakeAppraisalRepository(appraisals)


@pytest.fixture
def client(users, appraisal_repo, current_cycle, previous_cycle, scoring_service):
    """TestClient with repositories replaced by in-memory fakes."""
    app.dependency_overrides[get_user_repository] = lambda: FakeUserRepository(users)
    app.dependency_overrides[get_appraisal_repository] = lambda: appraisal_repo
    app.dependency_overrides[get_cycle_repository] = lambda: FakeCycleRepository([previous_cycle, current_cycle])
    app.dependency_overrides[get_scoring_service] = lambda: scoring_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
