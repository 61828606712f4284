"""
Health Check Router - Faculty Appraisal Dashboard
app/routers/health.py

Returns health status of the service and its Snowflake and Redis dependencies.
"""
from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import settings
from app.services.cache import get_cache
from app.services.snowflake import get_snowflake_connection

router = APIRouter(tags=["Health"])


#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


#  Dependency Health Checks


def _short(e: Exception) -> str:
    msg = str(e)
    return msg[:100] + "..." if len(msg) > 100 else msg


async def check_snowflake() -> str:
    """Check Snowflake connection health."""
    if not all([settings.SNOWFLAKE_ACCOUNT, settings.SNOWFLAKE_USER, settings.snowflake_password]):
        missing = []
        if not settings.SNOWFLAKE_ACCOUNT: missing.append("SNOWFLAKE_ACCOUNT")
        if not settings.SNOWFLAKE_USER: missing.append("SNOWFLAKE_USER")
        if not settings.snowflake_password: missing.append("SNOWFLAKE_PASSWORD")
        return f"unhealthy: Missing env vars: {', '.join(missing)}"

    try:
        conn = get_snowflake_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT CURRENT_USER()")
            result = cursor.fetchone()
            cursor.close()
        finally:
            conn.close()
        return f"healthy (User: {result[0]})"
    except Exception as e:
        return f"unhealthy: {_short(e)}"


async def check_redis() -> str:
    """Redis is optional; its absence degrades to uncached reads."""
    cache = get_cache()
    if cache is None:
        return "unavailable (caching disabled)"
    try:
        cache.client.ping()
        return "healthy"
    except Exception as e:
        return f"unhealthy: {_short(e)}"


#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "Snowflake reachable"},
        503: {"description": "Snowflake unreachable"},
    },
    summary="Health check",
    description="Check health of the warehouse and cache dependencies.",
)
async def health_check():
    dependencies = {
        "snowflake": await check_snowflake(),
        "redis": await check_redis(),
    }

    # Redis is not required for service
    healthy = dependencies["snowflake"].startswith("healthy")

    response = HealthResponse(
        status="healthy" if healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )
