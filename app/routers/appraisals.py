"""
Appraisal Dashboard Router - Faculty Appraisal Dashboard
app/routers/appraisals.py

Role-scoped appraisal listings for HODs and Deans, with CSV and PDF exports.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from fastapi import APIRouter, Depends, Path, Query, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse, Response

from app.config import settings
from app.core.dependencies import (
    get_appraisal_repository,
    get_cycle_repository,
    get_scoring_service,
)
from app.core.exceptions import AuthorizationException, RepositoryException
from app.core.security import AppraisalScope, dean_scope, hod_scope
from app.models.appraisal import (
    AppraisalCycle,
    AppraisalListResponse,
    AppraisalView,
    ErrorResponse,
)
from app.models.enumerations import AppraisalStatus
from app.repositories.appraisal_repository import AppraisalRepository
from app.repositories.cycle_repository import CycleRepository
from app.scoring.integration_service import AppraisalScoringService
from app.services.csv_export import export_csv
from app.services.report_generator import achievements_filename, generate_achievements_report

logger = logging.getLogger(__name__)

hod_router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/hod/appraisals", tags=["HOD Appraisals"])
dean_router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/dean/appraisals", tags=["Dean Appraisals"])


#  Custom Exception Handlers
# Registered in main.py

FIELD_MESSAGES = {
    "appraisal_id": {
        "int_parsing": "Appraisal ID must be a valid integer",
        "int_type": "Appraisal ID must be an integer",
        "greater_than_equal": "Appraisal ID must be greater than or equal to 1",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "string_type": "Field '{field}' must be a string",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "enum": "Field '{field}' has an invalid value",
}


def get_validation_message(field: str, error_type: str) -> str:
    if field in FIELD_MESSAGES:
        field_msgs = FIELD_MESSAGES[field]
        for key in field_msgs:
            if key in error_type:
                return field_msgs[key]

    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)

    return f"Invalid value for field '{field}'"


def _error_content(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()

    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_content("VALIDATION_ERROR", "Request validation failed"),
        )

    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])

    # loc is ("path" | "query" | "header", name)
    field = ".".join(str(l) for l in loc[1:]) if len(loc) > 1 else ".".join(str(l) for l in loc)
    message = get_validation_message(field, error_type)

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_content(
            "VALIDATION_ERROR",
            message,
            {"field": field, "type": error_type} if field else None,
        ),
    )


async def authorization_exception_handler(request: Request, exc: AuthorizationException):
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content=_error_content("UNAUTHORIZED", exc.message),
    )


#  Exception Helpers

def raise_error(status_code: int, error_code: str, message: str):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(
            error_code=error_code,
            message=message,
            timestamp=datetime.now(timezone.utc)
        ).model_dump(mode="json")
    )


def raise_appraisal_not_found():
    raise_error(status.HTTP_404_NOT_FOUND, "APPRAISAL_NOT_FOUND", "Appraisal not found")


def raise_internal_error():
    raise_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", "Unexpected server error")


#  Filter Parsing

def parse_filters(
    cycle_id: Optional[str],
    status_value: Optional[str],
) -> Tuple[bool, Optional[int], Optional[AppraisalStatus]]:
    """
    Parse the optional listing filters.

    Blank values mean "no filter". Malformed values make the filter
    unsatisfiable rather than failing the request.

    Returns:
        Tuple of (satisfiable, cycle_id, status)
    """
    parsed_cycle = None
    parsed_status = None

    if cycle_id is not None and cycle_id.strip():
        try:
            parsed_cycle = int(cycle_id.strip())
        except ValueError:
            logger.info(f"Unparseable cycle filter {cycle_id!r}; returning no appraisals")
            return False, None, None

    if status_value is not None and status_value.strip():
        try:
            parsed_status = AppraisalStatus(status_value.strip().lower())
        except ValueError:
            logger.info(f"Unknown status filter {status_value!r}; returning no appraisals")
            return False, None, None

    return True, parsed_cycle, parsed_status


def active_cycle_id(cycles: List[AppraisalCycle]) -> Optional[int]:
    for cycle in cycles:
        if cycle.is_active:
            return cycle.id
    return None


#  Shared Handlers

def _scoped_views(
    scope: AppraisalScope,
    repo: AppraisalRepository,
    scoring: AppraisalScoringService,
    cycle_id: Optional[str],
    status_value: Optional[str],
    search: Optional[str],
) -> List[AppraisalView]:
    if not scope.has_department:
        return []

    satisfiable, parsed_cycle, parsed_status = parse_filters(cycle_id, status_value)
    if not satisfiable:
        return []

    appraisals = repo.list_appraisals(
        faculty_role=scope.faculty_role,
        department_id=scope.department_id,
        cycle_id=parsed_cycle,
        status=parsed_status,
        search=search.strip() if search else None,
    )
    return scoring.build_views(appraisals)


def _list_response(
    scope: AppraisalScope,
    repo: AppraisalRepository,
    cycle_repo: CycleRepository,
    scoring: AppraisalScoringService,
    cycle_id: Optional[str],
    status_value: Optional[str],
    search: Optional[str],
) -> AppraisalListResponse:
    if not scope.has_department:
        logger.info(f"HOD {scope.reviewer.email} has no department; empty listing")
        return AppraisalListResponse(appraisals=[], cycles=[])

    try:
        views = _scoped_views(scope, repo, scoring, cycle_id, status_value, search)
        cycles = cycle_repo.get_all()
    except RepositoryException:
        logger.exception(f"Failed to list appraisals for {scope.reviewer.email}")
        raise_internal_error()

    return AppraisalListResponse(
        appraisals=views,
        cycles=cycles,
        active_cycle_id=active_cycle_id(cycles),
    )


def _csv_response(
    scope: AppraisalScope,
    repo: AppraisalRepository,
    scoring: AppraisalScoringService,
    cycle_id: Optional[str],
    status_value: Optional[str],
    search: Optional[str],
    filename: str,
) -> Response:
    try:
        views = _scoped_views(scope, repo, scoring, cycle_id, status_value, search)
    except RepositoryException:
        logger.exception(f"Failed to export appraisals for {scope.reviewer.email}")
        raise_internal_error()

    return Response(
        content=export_csv(views),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _pdf_response(
    scope: AppraisalScope,
    repo: AppraisalRepository,
    appraisal_id: int,
    subject_label: str,
) -> Response:
    if not scope.has_department:
        raise_appraisal_not_found()

    try:
        appraisal = repo.get_by_id(
            appraisal_id,
            faculty_role=scope.faculty_role,
            department_id=scope.department_id,
        )
    except RepositoryException:
        logger.exception(f"Failed to load appraisal {appraisal_id}")
        raise_internal_error()

    if appraisal is None:
        raise_appraisal_not_found()

    return Response(
        content=generate_achievements_report(appraisal, subject_label=subject_label),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{achievements_filename(appraisal)}"'},
    )


_ERROR_RESPONSES = {
    401: {
        "model": ErrorResponse,
        "description": "Missing session or wrong role",
        "content": {
            "application/json": {
                "example": {
                    "error_code": "UNAUTHORIZED",
                    "message": "Unauthorized",
                    "details": None,
                    "timestamp": "2024-06-15T10:30:00Z"
                }
            }
        },
    },
    500: {
        "model": ErrorResponse,
        "description": "Internal server error",
        "content": {
            "application/json": {
                "example": {
                    "error_code": "INTERNAL_SERVER_ERROR",
                    "message": "Unexpected server error",
                    "details": None,
                    "timestamp": "2024-06-15T10:30:00Z"
                }
            }
        },
    },
}

_NOT_FOUND_RESPONSE = {
    404: {
        "model": ErrorResponse,
        "description": "Appraisal not found or outside the caller's scope",
        "content": {
            "application/json": {
                "example": {
                    "error_code": "APPRAISAL_NOT_FOUND",
                    "message": "Appraisal not found",
                    "details": None,
                    "timestamp": "2024-06-15T10:30:00Z"
                }
            }
        },
    },
}

#  HOD Routes

@hod_router.get(
    "",
    response_model=AppraisalListResponse,
    responses=_ERROR_RESPONSES,
    summary="List instructor appraisals in the HOD's department",
    description="Scored instructor appraisals, most recently updated first, with all cycles.",
)
async def list_hod_appraisals(
    cycle_id: Optional[str] = Query(default=None, description="Cycle ID; malformed values match nothing"),
    status_value: Optional[str] = Query(default=None, alias="status", description="new, in_progress, complete or sent"),
    search: Optional[str] = Query(default=None, description="Faculty name substring"),
    scope: AppraisalScope = Depends(hod_scope),
    repo: AppraisalRepository = Depends(get_appraisal_repository),
    cycle_repo: CycleRepository = Depends(get_cycle_repository),
    scoring: AppraisalScoringService = Depends(get_scoring_service),
) -> AppraisalListResponse:
    return _list_response(scope, repo, cycle_repo, scoring, cycle_id, status_value, search)


@hod_router.get(
    "/export",
    responses={200: {"content": {"text/csv": {}}}, **_ERROR_RESPONSES},
    summary="Export instructor appraisals as CSV",
    response_class=Response,
)
async def export_hod_appraisals(
    cycle_id: Optional[str] = Query(default=None, description="Cycle ID; malformed values match nothing"),
    status_value: Optional[str] = Query(default=None, alias="status", description="new, in_progress, complete or sent"),
    search: Optional[str] = Query(default=None, description="Faculty name substring"),
    scope: AppraisalScope = Depends(hod_scope),
    repo: AppraisalRepository = Depends(get_appraisal_repository),
    scoring: AppraisalScoringService = Depends(get_scoring_service),
) -> Response:
    return _csv_response(
        scope, repo, scoring, cycle_id, status_value, search, settings.HOD_EXPORT_FILENAME
    )


@hod_router.get(
    "/{appraisal_id}/achievements",
    responses={200: {"content": {"application/pdf": {}}}, **_ERROR_RESPONSES, **_NOT_FOUND_RESPONSE},
    summary="Download an instructor's achievements as PDF",
    response_class=Response,
)
async def hod_achievements_pdf(
    appraisal_id: int = Path(..., ge=1),
    scope: AppraisalScope = Depends(hod_scope),
    repo: AppraisalRepository = Depends(get_appraisal_repository),
) -> Response:
    return _pdf_response(scope, repo, appraisal_id, subject_label="Instructor")


#  Dean Routes

@dean_router.get(
    "",
    response_model=AppraisalListResponse,
    responses=_ERROR_RESPONSES,
    summary="List HOD appraisals across all departments",
    description="Scored HOD appraisals, most recently updated first, with all cycles.",
)
async def list_dean_appraisals(
    cycle_id: Optional[str] = Query(default=None, description="Cycle ID; malformed values match nothing"),
    status_value: Optional[str] = Query(default=None, alias="status", description="new, in_progress, complete or sent"),
    search: Optional[str] = Query(default=None, description="Faculty name substring"),
    scope: AppraisalScope = Depends(dean_scope),
    repo: AppraisalRepository = Depends(get_appraisal_repository),
    cycle_repo: CycleRepository = Depends(get_cycle_repository),
    scoring: AppraisalScoringService = Depends(get_scoring_service),
) -> AppraisalListResponse:
    return _list_response(scope, repo, cycle_repo, scoring, cycle_id, status_value, search)


@dean_router.get(
    "/export",
    responses={200: {"content": {"text/csv": {}}}, **_ERROR_RESPONSES},
    summary="Export HOD appraisals as CSV",
    response_class=Response,
)
async def export_dean_appraisals(
    cycle_id: Optional[str] = Query(default=None, description="Cycle ID; malformed values match nothing"),
    status_value: Optional[str] = Query(default=None, alias="status", description="new, in_progress, complete or sent"),
    search: Optional[str] = Query(default=None, description="Faculty name substring"),
    scope: AppraisalScope = Depends(dean_scope),
    repo: AppraisalRepository = Depends(get_appraisal_repository),
    scoring: AppraisalScoringService = Depends(get_scoring_service),
) -> Response:
    return _csv_response(
        scope, repo, scoring, cycle_id, status_value, search, settings.DEAN_EXPORT_FILENAME
    )


@dean_router.get(
    "/{appraisal_id}/achievements",
    responses={200: {"content": {"application/pdf": {}}}, **_ERROR_RESPONSES, **_NOT_FOUND_RESPONSE},
    summary="Download an HOD's achievements as PDF",
    response_class=Response,
)
async def dean_achievements_pdf(
    appraisal_id: int = Path(..., ge=1),
    scope: AppraisalScope = Depends(dean_scope),
    repo: AppraisalRepository = Depends(get_appraisal_repository),
) -> Response:
    return _pdf_response(scope, repo, appraisal_id, subject_label="HOD")
