from typing import Any, Dict

from flask import current_app

from pagecms.extensions import db
from pagecms.models.enums import PageMode
from pagecms.domain.exceptions import ConflictError, InvariantViolation
from pagecms.domain.invariants.content import assert_content, assert_single_mode
from pagecms.domain.invariants.values import parse_id
from pagecms.domain.lifecycle.content import demote
from pagecms.utils.transaction import transactional
from .categories import resolve_categories
from .content_builder import build_content
from .notifications import notify_approvers
from .page_types import PageType
from .queries import current_content, get_content, get_page, stamp_page
from .uniqueness import assert_unique_urls


def update_content(
    *,
    page_type: PageType,
    prev_content_id: str,
    data: Dict[str, Any],
):
    """
    Publish a new version of a page's content for one language.

    ``prev_content_id`` is the version the client edited. If another writer
    published since then, the update is rejected with ConflictError instead
    of silently forking the history.
    """
    prev_content_id = parse_id(prev_content_id, "content id")
    previous = get_content(page_type, prev_content_id)

    if previous.is_preview:
        raise InvariantViolation("Preview content cannot be the base of an update")

    page_id = previous.page_id
    language = previous.language

    assert_unique_urls(
        page_type,
        url=data.get("url"),
        url_alias=data.get("url_alias"),
        exclude_page_id=page_id,
    )

    # language is fixed by the edited version
    content = build_content(
        page_type,
        {**data, "language": language},
        mode=PageMode.PUBLISHED.value,
        revision=data.get("revision"),
    )
    content.page_id = page_id
    assert_content(content)

    with transactional():
        page = get_page(page_type, page_id, lock=True)
        published = current_content(
            page_type, page_id, language, PageMode.PUBLISHED.value, lock=True
        )

        if published is not None and published.id != prev_content_id:
            current_app.logger.warning(
                "Stale update of %s page %s (%s): based on %s, current is %s",
                page_type.code, page_id, language, prev_content_id, published.id,
            )
            raise ConflictError(
                f"Content {prev_content_id} is no longer the published version of page {page_id}"
            )

        if published is not None:
            demote(published)

        content.categories = resolve_categories(data.get("categories"), default_language=language)
        db.session.add(content)
        db.session.flush()

        assert_single_mode(page_type.content_model, page_id=page_id, language=language)
        stamp_page(page)

    current_app.logger.info(
        "Updated %s page %s (%s): %s -> %s", page_type.code, page_id, language, prev_content_id, content.id
    )
    notify_approvers(page_type, content)

    return content
