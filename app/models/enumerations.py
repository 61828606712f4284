from enum import Enum

class AppraisalStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    SENT = "sent"

class UserRole(str, Enum):
    INSTRUCTOR = "instructor"
    HOD = "hod"
    DEAN = "dean"
    ADMIN = "admin"

class Capacity(str, Enum):
    INSTITUTIONAL_COMMITMENT = "Institutional Commitment"
    COLLABORATION_TEAMWORK = "Collaboration & Teamwork"
    PROFESSIONALISM = "Professionalism"
    CLIENT_SERVICE = "Client Service"
    ACHIEVING_RESULTS = "Achieving Results"

    @property
    def keyword(self) -> str:
        """Lower-case keyword identifying this capacity inside a free-text label."""
        return CAPACITY_KEYWORDS[self]

# Declaration order of Capacity is the canonical rating order
CAPACITY_KEYWORDS = {
    Capacity.INSTITUTIONAL_COMMITMENT: "institutional",
    Capacity.COLLABORATION_TEAMWORK: "collaboration",
    Capacity.PROFESSIONALISM: "professionalism",
    Capacity.CLIENT_SERVICE: "client",
    Capacity.ACHIEVING_RESULTS: "achieving",
}
