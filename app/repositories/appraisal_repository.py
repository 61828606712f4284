"""
Appraisal Repository - Faculty Appraisal Dashboard
app/repositories/appraisal_repository.py

Data access layer for appraisal records with their evaluations, behavior
ratings and achievement collections.
"""

from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

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
    ScientificActivity,
    ServiceActivity,
)
from app.models.enumerations import AppraisalStatus, UserRole
from app.repositories.base import BaseRepository

# (table, columns, model) for each achievement collection on Appraisal
ACHIEVEMENT_TABLES = {
    "awards": (
        "AWARDS",
        "NAME, AREA, ORGANIZATION, DATE_OBTAINED",
        Award,
    ),
    "courses": (
        "COURSES",
        "ACADEMIC_YEAR, SEMESTER, COURSE_CODE, SECTION, COURSE_TITLE, "
        "CREDIT, STUDENTS_COUNT, STUDENTS_EVAL_AVG",
        Course,
    ),
    "research_activities": (
        "RESEARCH_ACTIVITIES",
        "TITLE, TYPE, KIND, JOURNAL_OR_PUBLISHER, PARTICIPATION, PUBLICATION_DATE",
        ResearchActivity,
    ),
    "scientific_activities": (
        "SCIENTIFIC_ACTIVITIES",
        "TITLE, TYPE, ACTIVITY_DATE, PARTICIPATION, ORGANIZING_AUTH, VENUE",
        ScientificActivity,
    ),
    "community_services": (
        "COMMUNITY_SERVICES",
        "COMMITTEE_OR_TASK, AUTHORITY, PARTICIPATION, DATE_FROM, DATE_TO",
        ServiceActivity,
    ),
    "university_services": (
        "UNIVERSITY_SERVICES",
        "COMMITTEE_OR_TASK, AUTHORITY, PARTICIPATION, DATE_FROM, DATE_TO",
        ServiceActivity,
    ),
}

_APPRAISAL_SELECT = """
    SELECT a.ID, a.STATUS, a.TOTAL_SCORE, a.UPDATED_AT,
           u.ID AS FACULTY_ID, u.NAME AS FACULTY_NAME, u.ROLE AS FACULTY_ROLE,
           d.ID AS DEPARTMENT_ID, d.NAME AS DEPARTMENT_NAME,
           c.ID AS CYCLE_ID, c.ACADEMIC_YEAR, c.START_DATE, c.END_DATE, c.IS_ACTIVE
    FROM APPRAISALS a
    JOIN USERS u ON a.FACULTY_ID = u.ID
    LEFT JOIN DEPARTMENTS d ON u.DEPARTMENT_ID = d.ID
    JOIN APPRAISAL_CYCLES c ON a.CYCLE_ID = c.ID
"""


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so search text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class AppraisalRepository(BaseRepository):
    """Repository for Appraisal reads."""

    def build_filters(
        self,
        faculty_role: UserRole,
        department_id: Optional[int] = None,
        cycle_id: Optional[int] = None,
        status: Optional[AppraisalStatus] = None,
        search: Optional[str] = None,
    ) -> tuple:
        """
        Build the WHERE clause and params for an appraisal listing.

        Returns:
            Tuple of (where_sql, params)
        """
        where_clauses = ["LOWER(u.ROLE) = %s"]
        params: List[Any] = [faculty_role.value]

        if department_id is not None:
            where_clauses.append("u.DEPARTMENT_ID = %s")
            params.append(department_id)

        if cycle_id is not None:
            where_clauses.append("a.CYCLE_ID = %s")
            params.append(cycle_id)

        if status:
            where_clauses.append("LOWER(a.STATUS) = %s")
            params.append(status.value)

        if search:
            where_clauses.append("u.NAME ILIKE %s ESCAPE '\\\\'")
            params.append(f"%{escape_like(search)}%")

        return " AND ".join(where_clauses), params

    def list_appraisals(
        self,
        faculty_role: UserRole,
        department_id: Optional[int] = None,
        cycle_id: Optional[int] = None,
        status: Optional[AppraisalStatus] = None,
        search: Optional[str] = None,
    ) -> List[Appraisal]:
        """
        Retrieve appraisals, most recently updated first.

        Args:
            faculty_role: Role of the appraised faculty (instructor for HOD, hod for Dean)
            department_id: Restrict to one department
            cycle_id: Optional filter by cycle
            status: Optional filter by status
            search: Case-insensitive substring of the faculty name

        Returns:
            List of Appraisal records with evaluations newest first
        """
        where_sql, params = self.build_filters(
            faculty_role, department_id, cycle_id, status, search
        )
        sql = f"""
            {_APPRAISAL_SELECT}
            WHERE {where_sql}
            ORDER BY a.UPDATED_AT DESC
        """
        rows = self.execute_query(sql, tuple(params), fetch_all=True) or []
        return self._assemble(rows)

    def get_by_id(
        self,
        appraisal_id: int,
        faculty_role: UserRole,
        department_id: Optional[int] = None,
    ) -> Optional[Appraisal]:
        """
        Retrieve one appraisal inside the caller's scope.

        Returns:
            Appraisal or None if absent or out of scope
        """
        where_sql, params = self.build_filters(faculty_role, department_id)
        sql = f"""
            {_APPRAISAL_SELECT}
            WHERE a.ID = %s AND {where_sql}
        """
        row = self.execute_query(sql, (appraisal_id, *params), fetch_one=True)
        if not row:
            return None
        return self._assemble([row])[0]

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def _assemble(self, rows: Sequence[Dict[str, Any]]) -> List[Appraisal]:
        if not rows:
            return []

        ids = [r["ID"] for r in rows]
        evaluations = self._fetch_evaluations(ids)
        achievements = {
            field: self._fetch_children(table, columns, model, ids)
            for field, (table, columns, model) in ACHIEVEMENT_TABLES.items()
        }

        appraisals = []
        for row in rows:
            appraisal_id = row["ID"]
            appraisals.append(
                Appraisal(
                    id=appraisal_id,
                    status=AppraisalStatus(row["STATUS"].lower()),
                    total_score=row["TOTAL_SCORE"],
                    updated_at=self.normalize_timestamp(row["UPDATED_AT"]),
                    faculty=self._row_to_faculty(row),
                    cycle=AppraisalCycle(
                        id=row["CYCLE_ID"],
                        academic_year=row["ACADEMIC_YEAR"],
                        start_date=row["START_DATE"],
                        end_date=row["END_DATE"],
                        is_active=bool(row["IS_ACTIVE"]),
                    ),
                    evaluations=evaluations.get(appraisal_id, []),
                    **{field: items.get(appraisal_id, []) for field, items in achievements.items()},
                )
            )
        return appraisals

    def _row_to_faculty(self, row: Dict[str, Any]) -> Faculty:
        department = None
        if row["DEPARTMENT_ID"] is not None:
            department = Department(id=row["DEPARTMENT_ID"], name=row["DEPARTMENT_NAME"])
        return Faculty(
            id=row["FACULTY_ID"],
            name=row["FACULTY_NAME"],
            role=UserRole(row["FACULTY_ROLE"].lower()),
            department=department,
        )

    def _fetch_evaluations(self, appraisal_ids: List[int]) -> Dict[int, List[Evaluation]]:
        """Evaluations per appraisal, newest first, with their ratings."""
        sql = f"""
            SELECT ID, APPRAISAL_ID, CREATED_AT, RESEARCH_PTS, UNIVERSITY_SERVICE_PTS,
                   COMMUNITY_SERVICE_PTS, TEACHING_QUALITY_PTS, TOTAL_SCORE
            FROM EVALUATIONS
            WHERE APPRAISAL_ID IN ({self.placeholders(appraisal_ids)})
            ORDER BY CREATED_AT DESC
        """
        rows = self.rows_to_dicts(self.execute_query(sql, tuple(appraisal_ids), fetch_all=True))
        if not rows:
            return {}

        ratings = self._fetch_ratings([r["id"] for r in rows])

        grouped: Dict[int, List[Evaluation]] = defaultdict(list)
        for r in rows:
            grouped[r["appraisal_id"]].append(
                Evaluation(
                    id=r["id"],
                    created_at=self.normalize_timestamp(r["created_at"]),
                    research_pts=r["research_pts"],
                    university_service_pts=r["university_service_pts"],
                    community_service_pts=r["community_service_pts"],
                    teaching_quality_pts=r["teaching_quality_pts"],
                    total_score=r["total_score"],
                    behavior_ratings=ratings.get(r["id"], []),
                )
            )
        return grouped

    def _fetch_ratings(self, evaluation_ids: List[int]) -> Dict[int, List[BehaviorRating]]:
        sql = f"""
            SELECT EVALUATION_ID, CAPACITY, POINTS
            FROM BEHAVIOR_RATINGS
            WHERE EVALUATION_ID IN ({self.placeholders(evaluation_ids)})
            ORDER BY ID
        """
        rows = self.rows_to_dicts(self.execute_query(sql, tuple(evaluation_ids), fetch_all=True))
        grouped: Dict[int, List[BehaviorRating]] = defaultdict(list)
        for r in rows:
            grouped[r["evaluation_id"]].append(
                BehaviorRating(capacity=r["capacity"] or "", points=r["points"] or 0)
            )
        return grouped

    def _fetch_children(self, table: str, columns: str, model, appraisal_ids: List[int]) -> Dict[int, list]:
        sql = f"""
            SELECT APPRAISAL_ID, {columns}
            FROM {table}
            WHERE APPRAISAL_ID IN ({self.placeholders(appraisal_ids)})
            ORDER BY ID
        """
        rows = self.rows_to_dicts(self.execute_query(sql, tuple(appraisal_ids), fetch_all=True))
        grouped: Dict[int, list] = defaultdict(list)
        for r in rows:
            appraisal_id = r.pop("appraisal_id")
            grouped[appraisal_id].append(model(**r))
        return grouped
