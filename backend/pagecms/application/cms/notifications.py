"""
Approval e-mail hook for Landing / Partner content.

The actual mail delivery is an external collaborator registered as
``app.extensions["cms_notifier"]``: any callable taking
``(template, recipients, data)``. Delivery failures are logged and never
undo the content write that triggered them.
"""
from typing import Any, Dict, List

from flask import current_app

from pagecms.models.enums import WorkflowStatus
from pagecms.utils.preview_url import build_preview_url
from .page_types import PageType

APPROVAL_TEMPLATE = "email_to_admin"


def log_notifier(template: str, recipients: List[str], data: Dict[str, Any]) -> None:
    """Default notifier: record the message instead of sending it."""
    current_app.logger.info(
        "Notification %s to %s: %s", template, ", ".join(recipients), data
    )


def needs_approval(page_type: PageType, content) -> bool:
    return (
        page_type.notify_on_approval
        and content.workflow_status == WorkflowStatus.WAITING_DESIGN_APPROVED.value
        and bool(getattr(content, "approval_email", None))
    )


def notify_approvers(page_type: PageType, content) -> bool:
    """
    Fire-and-forget. Returns True when the notifier accepted the message.
    """
    if not needs_approval(page_type, content):
        return False

    notifier = current_app.extensions.get("cms_notifier", log_notifier)
    author = content.revision.author if content.revision else None

    data = {
        "page_type": page_type.code,
        "page_id": content.page_id,
        "content_id": content.id,
        "title": content.title,
        "language": content.language,
        "author": author,
        "preview_url": build_preview_url(
            current_app.config["PREVIEW_BASE_URL"],
            content.language,
            page_type.preview_path,
            content.id,
        ),
    }

    try:
        notifier(APPROVAL_TEMPLATE, list(content.approval_email), data)
    except Exception:
        current_app.logger.exception(
            "Failed to send approval notification for %s content %s", page_type.code, content.id
        )
        return False

    return True
