"""
Custom Exceptions - Faculty Appraisal Dashboard
app/core/exceptions.py

Custom exception classes for repository and access-control operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class AuthorizationException(Exception):
    """Caller lacks the required role or department scope."""

    def __init__(self, message: str = "Unauthorized"):
        self.message = message
        super().__init__(message)
