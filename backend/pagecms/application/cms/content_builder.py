"""
Materializes a content graph (row + meta tag + components + categories +
revision) from request data or from a stored snapshot.

Every write path goes through here, so a clone is shaped exactly like an
ordinary update.
"""
from typing import Any, Dict, List, Optional

from pagecms.models import Category, Component, MetaTag, Revision
from pagecms.models.enums import PublishStatus, WorkflowStatus
from pagecms.domain.exceptions import InvariantViolation
from pagecms.domain.invariants.values import (
    normalize_language,
    normalize_publish_status,
    normalize_workflow_status,
    parse_datetime,
)
from pagecms.utils.order import compact_order
from .page_types import PageType


def _coerce(model, field: str, value: Any) -> Any:
    if field == "language":
        return normalize_language(value)
    if field == "workflow_status":
        return normalize_workflow_status(value)
    if field == "publish_status":
        return normalize_publish_status(value)
    if field in model.DATETIME_FIELDS:
        return parse_datetime(value)
    if field == "approval_email":
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise InvariantViolation("approval_email must be a list of email addresses")
        return list(value)
    if field == "is_recommended":
        return bool(value)
    if field == "url_alias":
        return value or ""
    return value


def apply_body(content, data: Dict[str, Any]) -> None:
    """Copy the scalar body fields the content type knows about."""
    model = type(content)

    for field in model.body_fields():
        if field in data:
            setattr(content, field, _coerce(model, field, data[field]))

    if content.language is None:
        raise InvariantViolation("Content language is required")
    if content.workflow_status is None:
        content.workflow_status = WorkflowStatus.DRAFT.value
    if content.publish_status is None:
        content.publish_status = PublishStatus.UNPUBLISHED.value
    if content.url_alias is None:
        content.url_alias = ""


def build_meta_tag(data: Optional[Dict[str, Any]]) -> Optional[MetaTag]:
    if not data:
        return None
    if not isinstance(data, dict):
        raise InvariantViolation("meta_tag must be an object")

    meta_tag = MetaTag()
    for field in MetaTag.FIELDS:
        setattr(meta_tag, field, data.get(field))
    return meta_tag


def build_components(items: Optional[List[Dict[str, Any]]]) -> List[Component]:
    components: List[Component] = []

    for index, item in enumerate(items or [], start=1):
        if not isinstance(item, dict):
            raise InvariantViolation("Component must be an object")

        component = Component()
        component.type = item.get("type")
        component.props = item.get("props") or {}
        component.position = item.get("position") or index
        components.append(component)

    return compact_order(components)


def build_revision(data: Optional[Dict[str, Any]]) -> Revision:
    if not data or not isinstance(data, dict):
        raise InvariantViolation("A revision (author, message) is required")
    if not data.get("author"):
        raise InvariantViolation("Revision author is required")

    revision = Revision()
    revision.author = data["author"]
    revision.message = data.get("message")
    revision.description = data.get("description")
    revision.publish_status = normalize_publish_status(
        data.get("publish_status") or PublishStatus.UNPUBLISHED.value
    )
    return revision


def build_content(
    page_type: PageType,
    data: Dict[str, Any],
    *,
    mode: str,
    categories: Optional[List[Category]] = None,
    revision: Optional[Dict[str, Any]] = None,
):
    """
    New, unsaved content row. Preview rows get neither revision nor categories.
    """
    content = page_type.content_model()
    apply_body(content, data)
    content.mode = mode

    content.meta_tag = build_meta_tag(data.get("meta_tag"))
    content.components = build_components(data.get("components"))

    if not content.is_preview:
        content.revision = build_revision(revision)
        content.categories = list(categories or [])

    return content


def snapshot_data(snapshot: Dict[str, Any], **overrides: Any) -> Dict[str, Any]:
    """Flatten a stored snapshot back into build_content() input."""
    data = {
        key: value
        for key, value in snapshot["content"].items()
        if key not in ("id", "page_id", "mode")
    }
    data["meta_tag"] = snapshot["meta_tag"]
    data["components"] = snapshot["components"]
    data.update(overrides)
    return data
