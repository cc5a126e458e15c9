from flask import request
from datetime import timezone
from dateutil.parser import parse
from pagecms.domain.exceptions import ConflictError, InvariantViolation


def normalize_ts(ts):
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def enforce_optimistic_lock(entity):
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Raises ConflictError if the entity has been modified since.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ValueError, OverflowError):
        raise InvariantViolation("Invalid If-Unmodified-Since header")

    server_ts = normalize_ts(entity.updated_at)

    # HTTP dates carry whole seconds only
    if server_ts.replace(microsecond=0) > client_ts:
        raise ConflictError("Conflict detected. Resource has been modified.")
