"""
Supabase clients for the brands table and the image bucket.

One anon client is shared by every service. A service-role client is only
built when a service key is configured, for storage uploads.
"""

from supabase import create_client, Client
from functools import lru_cache
from typing import Optional
import structlog

from config.settings import settings
from exceptions import ExternalServiceError
from utils.error_format import describe_error

logger = structlog.get_logger(__name__)


@lru_cache()
def get_supabase_client() -> Client:
    """
    Shared Supabase client, created on first use.

    Reads the brands table once so a wrong URL or key fails at startup
    rather than on the first save.

    Raises:
        ExternalServiceError: Client creation or the brands table check failed
    """
    logger.info(
        "connecting_to_supabase",
        url=settings.supabase_url[:30] + "...",
        table=settings.brands_table
    )

    try:
        client = create_client(settings.supabase_url, settings.supabase_key)
        client.table(settings.brands_table).select("id").limit(1).execute()
    except Exception as e:
        detail = describe_error(e)
        logger.error(
            "supabase_connection_failed",
            error=detail,
            error_type=type(e).__name__
        )
        raise ExternalServiceError(
            "supabase",
            f"Failed to connect to Supabase: {detail}"
        ) from e

    logger.info("supabase_connected", table=settings.brands_table)
    return client


def get_admin_client() -> Optional[Client]:
    """
    Service-role client for bucket uploads.

    Returns:
        Client, or None when SUPABASE_SERVICE_KEY is not set or the client
        cannot be built (callers fall back to the shared client)
    """
    if not settings.supabase_service_key:
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_service_key)
    except Exception as e:
        logger.warning("admin_client_failed", error=describe_error(e))
        return None


class DatabaseSession:
    """
    Logs the start, end and failure of one database operation.

    Usage:
        with DatabaseSession("brand_insert", client) as db:
            db.table("brands").insert(row).execute()
    """

    def __init__(self, operation_name: str, client: Optional[Client] = None):
        self.operation_name = operation_name
        self.client = client

    def __enter__(self) -> Client:
        logger.debug("db_operation_start", operation=self.operation_name)
        if self.client is None:
            self.client = get_supabase_client()
        return self.client

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "db_operation_failed",
                operation=self.operation_name,
                error=describe_error(exc_val),
                error_type=exc_type.__name__
            )
        else:
            logger.debug("db_operation_complete", operation=self.operation_name)
        return False  # Don't suppress exceptions


def check_connection() -> dict:
    """
    Health check: count brands.

    Returns:
        {"status": "healthy", "brands_count": n} or
        {"status": "unhealthy", "error": "..."}
    """
    try:
        result = (
            get_supabase_client()
            .table(settings.brands_table)
            .select("id", count="exact")
            .execute()
        )
    except Exception as e:
        return {"status": "unhealthy", "error": describe_error(e)}

    return {"status": "healthy", "brands_count": result.count}
