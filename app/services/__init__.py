"""
Services module for the Faculty Appraisal Dashboard.
"""

from app.services.cache import get_cache
from app.services.csv_export import export_csv
from app.services.redis_cache import RedisCache
from app.services.report_generator import generate_achievements_report
from app.services.snowflake import get_snowflake_connection


__all__ = [
    # Infrastructure
    "get_cache",
    "RedisCache",
    "get_snowflake_connection",

    # Exports
    "export_csv",
    "generate_achievements_report",
]
