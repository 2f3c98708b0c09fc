# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Small helpers shared by the data-access layer and the services.
# =============================================================================

from datetime import datetime, timezone
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Example:
        media_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        media_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


def is_valid_uuid(value: str | UUID | None) -> bool:
    """True if value is a UUID or parses as one."""
    if isinstance(value, UUID):
        return True
    if not value:
        return False
    try:
        UUID(str(value))
    except ValueError:
        return False
    return True


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def parse_timestamp(value: str | datetime) -> datetime:
    """
    Parse a Postgres/ISO timestamp into an aware datetime.

    Supabase returns e.g. "2024-05-01T10:00:00.123+00:00" or a trailing "Z".
    Naive values are taken as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
