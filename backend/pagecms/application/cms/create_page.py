from typing import Any, Dict

from flask import current_app

from pagecms.extensions import db
from pagecms.models.enums import PageMode
from pagecms.domain.exceptions import InvariantViolation
from pagecms.domain.invariants.content import assert_content, assert_single_mode
from pagecms.utils.transaction import transactional
from .categories import resolve_categories
from .content_builder import build_content
from .notifications import notify_approvers
from .page_types import PageType
from .uniqueness import assert_unique_urls


def create_page(
    *,
    page_type: PageType,
    data: Dict[str, Any],
):
    """
    Create a page with its first content in Published mode.

    Edge cases handled:
    - Exactly one content must be sent
    - Duplicate URL / URL alias within the page type
    - Missing revision
    """
    contents = data.get("contents") or []

    if len(contents) > 1:
        raise InvariantViolation("A new page takes exactly one content")
    if not contents:
        raise InvariantViolation("A new page needs a content")

    content_data = contents[0]
    if not isinstance(content_data, dict):
        raise InvariantViolation("Content must be an object")

    assert_unique_urls(
        page_type,
        url=content_data.get("url"),
        url_alias=content_data.get("url_alias"),
    )

    content = build_content(
        page_type,
        content_data,
        mode=PageMode.PUBLISHED.value,
        revision=content_data.get("revision"),
    )
    assert_content(content)

    page = page_type.page_model()

    with transactional():
        content.categories = resolve_categories(
            content_data.get("categories"), default_language=content.language
        )
        page.contents.append(content)
        db.session.add(page)
        db.session.flush()  # ensures page.id / content.id are available

        assert_single_mode(page_type.content_model, page_id=page.id, language=content.language)

    current_app.logger.info(
        "Created %s page %s with %s content %s", page_type.code, page.id, content.language, content.id
    )
    notify_approvers(page_type, content)

    return page
