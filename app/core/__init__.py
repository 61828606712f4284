"""
Core Package - Faculty Appraisal Dashboard
app/core/__init__.py

Core infrastructure: dependencies, exceptions, access control.

Dependencies and access control are imported from their modules directly;
the repositories import this package for its exceptions.
"""

from app.core.exceptions import (
    AuthorizationException,
    DatabaseConnectionException,
    RepositoryException,
)

__all__ = [
    "AuthorizationException",
    "DatabaseConnectionException",
    "RepositoryException",
]
