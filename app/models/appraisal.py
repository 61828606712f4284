from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional, List

from app.models.enumerations import AppraisalStatus, Capacity, UserRole


# =============================================================================
# REFERENCE ENTITIES
# =============================================================================

class Department(BaseModel):
    id: int
    name: str


class Faculty(BaseModel):
    """
    Faculty member owning an appraisal.
    """

    id: int
    name: str
    role: UserRole = Field(
        default=UserRole.INSTRUCTOR,
        description="Role of the appraised faculty member (instructor or hod)"
    )
    department: Optional[Department] = None


class UserRecord(BaseModel):
    """
    Authenticated dashboard user, resolved from the session email.
    """

    id: int
    email: str
    name: str
    role: UserRole
    department_id: Optional[int] = None


class AppraisalCycle(BaseModel):
    """
    Scoring period. At most one cycle is active by convention.
    """

    id: int
    academic_year: str = Field(..., description="Academic-year label, e.g. 2023-2024")
    start_date: date
    end_date: date
    is_active: bool = False


# =============================================================================
# ACHIEVEMENT RECORDS (listed in the PDF export, never scored)
# =============================================================================

class Award(BaseModel):
    name: str
    area: Optional[str] = None
    organization: Optional[str] = None
    date_obtained: Optional[date] = None


class Course(BaseModel):
    academic_year: str
    semester: str
    course_code: Optional[str] = None
    section: Optional[str] = None
    course_title: str
    credit: Optional[float] = None
    students_count: Optional[int] = None
    students_eval_avg: Optional[float] = None


class ResearchActivity(BaseModel):
    title: str
    type: str
    kind: str
    journal_or_publisher: Optional[str] = None
    participation: Optional[str] = None
    publication_date: Optional[date] = None


class ScientificActivity(BaseModel):
    title: str
    type: str
    activity_date: Optional[date] = None
    participation: Optional[str] = None
    organizing_auth: Optional[str] = None
    venue: Optional[str] = None


class ServiceActivity(BaseModel):
    """Committee or task served on; shared by community and university services."""

    committee_or_task: str
    authority: Optional[str] = None
    participation: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


# =============================================================================
# RAW EVALUATION INPUT
# =============================================================================

class BehaviorRating(BaseModel):
    capacity: str = Field(..., description="Free-text capacity label as stored")
    points: float = 0


class Evaluation(BaseModel):
    """
    One scored review of an appraisal as supplied by the data layer.

    Category points are nominally 0-100 and may be absent.
    """

    id: Optional[int] = None
    created_at: Optional[datetime] = None
    research_pts: Optional[float] = None
    university_service_pts: Optional[float] = None
    community_service_pts: Optional[float] = None
    teaching_quality_pts: Optional[float] = None
    total_score: Optional[float] = None
    behavior_ratings: List[BehaviorRating] = Field(default_factory=list)


class AppraisalBase(BaseModel):
    """
    Fields shared by the raw appraisal record and its view.
    """

    id: int
    status: AppraisalStatus
    faculty: Faculty
    cycle: AppraisalCycle
    updated_at: datetime
    total_score: Optional[float] = None

    awards: List[Award] = Field(default_factory=list)
    courses: List[Course] = Field(default_factory=list)
    research_activities: List[ResearchActivity] = Field(default_factory=list)
    scientific_activities: List[ScientificActivity] = Field(default_factory=list)
    community_services: List[ServiceActivity] = Field(default_factory=list)
    university_services: List[ServiceActivity] = Field(default_factory=list)


class Appraisal(AppraisalBase):
    """
    Raw appraisal record. Evaluations are ordered newest first.
    """

    evaluations: List[Evaluation] = Field(default_factory=list)


# =============================================================================
# NORMALIZED VIEW MODEL
# =============================================================================

class NormalizedRating(BaseModel):
    capacity: Capacity
    points: float = 0


class EvaluationView(BaseModel):
    """
    Fully populated evaluation shape. Never absent on an AppraisalView.
    """

    total_score: float = 0
    research_pts: float = 0
    university_service_pts: float = 0
    community_service_pts: float = 0
    teaching_quality_pts: float = 0
    behavior_ratings: List[NormalizedRating] = Field(
        ...,
        min_length=5,
        max_length=5,
        description="Exactly one entry per capacity, in canonical order"
    )

    def points_for(self, capacity: Capacity) -> float:
        for rating in self.behavior_ratings:
            if rating.capacity == capacity:
                return rating.points
        return 0


class ScoreSummary(BaseModel):
    """
    Raw and scaled totals for display.
    """

    raw_performance: float = Field(..., description="Sum of the four category points (0-400)")
    scaled_performance: float = Field(..., description="Performance on the 3-point scale")
    raw_capabilities: float = Field(..., description="Sum of the five capacity points (0-500)")
    scaled_capabilities: float = Field(..., description="Capabilities on the 7-point scale")
    overall: float = Field(..., description="Average of the two scaled totals")


class AppraisalView(AppraisalBase):
    """
    Appraisal as returned to the dashboard.
    """

    evaluation: EvaluationView
    scores: ScoreSummary
    evaluation_enabled: bool = Field(
        ...,
        description="Whether the evaluate action is currently available"
    )


class AppraisalListResponse(BaseModel):
    appraisals: List[AppraisalView]
    cycles: List[AppraisalCycle]
    active_cycle_id: Optional[int] = None


class ErrorResponse(BaseModel):
    """
    Standard error response model.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[dict] = Field(default=None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error occurrence timestamp")
