import uuid
from enum import Enum
from typing import Any, Optional, Type
from datetime import datetime, timezone
from dateutil.parser import parse

from pagecms.models.enums import PageLanguage, PageMode, PublishStatus, WorkflowStatus
from ..exceptions import InvariantViolation


def _normalize_choice(value: Any, enum_cls: Type[Enum], label: str) -> str:
    if isinstance(value, enum_cls):
        return value.value
    if isinstance(value, str):
        for member in enum_cls:
            if value.strip().lower() == member.value.lower():
                return member.value
    raise InvariantViolation(f"Invalid {label}: {value!r}")


def normalize_language(language: Any) -> str:
    return _normalize_choice(language, PageLanguage, "language code")


def normalize_mode(mode: Any) -> str:
    return _normalize_choice(mode, PageMode, "mode")


def normalize_workflow_status(status: Any) -> str:
    return _normalize_choice(status, WorkflowStatus, "workflow status")


def normalize_publish_status(status: Any) -> str:
    return _normalize_choice(status, PublishStatus, "publish status")


def parse_id(raw: Any, label: str = "id") -> str:
    """Validate a UUID string and return its canonical form."""
    try:
        return str(uuid.UUID(str(raw)))
    except (TypeError, ValueError, AttributeError):
        raise InvariantViolation(f"Malformed {label}: {raw!r}")


def parse_datetime(raw: Any) -> Optional[datetime]:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        value = raw
    else:
        try:
            value = parse(str(raw))
        except (ValueError, OverflowError):
            raise InvariantViolation(f"Invalid datetime: {raw!r}")

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
