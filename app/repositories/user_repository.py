"""
User Repository - Faculty Appraisal Dashboard
app/repositories/user_repository.py

Resolves dashboard users by session email.
"""

from typing import Any, Dict, Optional

from app.models.appraisal import UserRecord
from app.models.enumerations import UserRole
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for User lookups."""

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        """
        Retrieve a user by email.

        Args:
            email: Session email address

        Returns:
            UserRecord or None if not found
        """
        sql = """
            SELECT ID, EMAIL, NAME, ROLE, DEPARTMENT_ID
            FROM USERS
            WHERE LOWER(EMAIL) = LOWER(%s)
        """
        row = self.execute_query(sql, (email,), fetch_one=True)

        if not row:
            return None

        return self._row_to_user(row)

    def _row_to_user(self, row: Dict[str, Any]) -> UserRecord:
        return UserRecord(
            id=row["ID"],
            email=row["EMAIL"],
            name=row["NAME"],
            role=UserRole(row["ROLE"].lower()),
            department_id=row["DEPARTMENT_ID"],
        )
