from typing import Any, Dict

from flask import current_app

from pagecms.extensions import db
from pagecms.models import Revision
from pagecms.models.enums import PageMode
from pagecms.domain.exceptions import InvariantViolation, NotFound
from pagecms.domain.invariants.content import assert_content, assert_single_mode
from pagecms.domain.invariants.values import parse_id
from pagecms.domain.lifecycle.content import demote
from pagecms.utils.transaction import transactional
from pagecms.utils.versioning import load_snapshot
from .categories import resolve_categories
from .content_builder import build_content, snapshot_data
from .page_types import PageType
from .queries import current_content, get_page, stamp_page
from .uniqueness import assert_unique_urls


def revert_content(
    *,
    page_type: PageType,
    revision_id: str,
    revision: Dict[str, Any],
):
    """
    Republish the content a revision points at.

    The old row is left untouched; its values are cloned into a brand-new
    Published row carrying ``revision``, and whatever was Published for
    that language moves to History.
    """
    revision_id = parse_id(revision_id, "revision id")
    model = page_type.content_model

    target = db.session.get(Revision, revision_id)
    content_id = getattr(target, model.OWNER_KEY) if target is not None else None
    if content_id is None:
        raise NotFound(f"{page_type.code} revision {revision_id} not found")

    snapshot = load_snapshot(model, content_id)
    if snapshot is None:
        raise NotFound(f"{page_type.code} content {content_id} not found")
    if snapshot["content"]["mode"] == PageMode.PREVIEW.value:
        raise InvariantViolation("Preview content cannot be reverted to")

    page_id = snapshot["content"]["page_id"]
    language = snapshot["content"]["language"]
    data = snapshot_data(snapshot)

    assert_unique_urls(
        page_type,
        url=data.get("url"),
        url_alias=data.get("url_alias"),
        exclude_page_id=page_id,
    )

    content = build_content(page_type, data, mode=PageMode.PUBLISHED.value, revision=revision)
    content.page_id = page_id
    assert_content(content)

    with transactional():
        page = get_page(page_type, page_id, lock=True)
        published = current_content(
            page_type, page_id, language, PageMode.PUBLISHED.value, lock=True
        )
        if published is not None:
            demote(published)

        content.categories = resolve_categories(snapshot["categories"], default_language=language)
        db.session.add(content)
        db.session.flush()

        assert_single_mode(model, page_id=page_id, language=language)
        stamp_page(page)

    current_app.logger.info(
        "Reverted %s page %s (%s) to revision %s as content %s",
        page_type.code, page_id, language, revision_id, content.id,
    )
    return content
