"""
Snowflake connection factory used by the repositories.
"""

import snowflake.connector

from app.config import get_settings


def get_snowflake_connection():
    """
    Open a new Snowflake connection from application settings.
    Used by repositories via BaseRepository.get_connection().
    """
    settings = get_settings()

    return snowflake.connector.connect(
        account=settings.SNOWFLAKE_ACCOUNT,
        user=settings.SNOWFLAKE_USER,
        password=settings.snowflake_password,
        warehouse=settings.SNOWFLAKE_WAREHOUSE,
        database=settings.SNOWFLAKE_DATABASE,
        schema=settings.SNOWFLAKE_SCHEMA,
        role=settings.SNOWFLAKE_ROLE,
    )
