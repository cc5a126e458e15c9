from typing import Any, Dict, Optional

from flask import current_app

from pagecms.extensions import db
from pagecms.models.enums import PageMode
from pagecms.domain.exceptions import InvariantViolation, NotFound
from pagecms.domain.invariants.content import assert_content, assert_single_mode
from pagecms.domain.invariants.values import normalize_language, parse_id
from pagecms.domain.lifecycle.content import demote
from pagecms.utils.transaction import transactional
from pagecms.utils.versioning import load_snapshot
from .categories import resolve_categories
from .content_builder import build_content, snapshot_data
from .page_types import PageType
from .queries import current_content, get_page, stamp_page


def _other_language(language: str) -> str:
    others = [
        code for code in current_app.config["SUPPORTED_LANGUAGES"] if code != language
    ]
    if len(others) != 1:
        raise InvariantViolation("Target language must be given explicitly")
    return others[0]


def duplicate_content_to_another_language(
    *,
    page_type: PageType,
    content_id: str,
    revision: Dict[str, Any],
    language: Optional[str] = None,
):
    """
    Clone a content into another language of the same page as its new
    Published content. Categories keep their own language.
    """
    content_id = parse_id(content_id, "content id")
    model = page_type.content_model

    snapshot = load_snapshot(model, content_id)
    if snapshot is None:
        raise NotFound(f"{page_type.code} content {content_id} not found")
    if snapshot["content"]["mode"] == PageMode.PREVIEW.value:
        raise InvariantViolation("Preview content cannot be duplicated")

    source_language = snapshot["content"]["language"]
    target_language = normalize_language(language) if language else _other_language(source_language)

    if target_language == source_language:
        raise InvariantViolation("Target language must differ from the source language")

    page_id = snapshot["content"]["page_id"]

    content = build_content(
        page_type,
        snapshot_data(snapshot, language=target_language),
        mode=PageMode.PUBLISHED.value,
        revision=revision,
    )
    content.page_id = page_id
    assert_content(content)

    with transactional():
        page = get_page(page_type, page_id, lock=True)
        existing = current_content(
            page_type, page_id, target_language, PageMode.PUBLISHED.value, lock=True
        )
        if existing is not None:
            demote(existing)

        content.categories = resolve_categories(
            snapshot["categories"], default_language=source_language
        )
        db.session.add(content)
        db.session.flush()

        assert_single_mode(model, page_id=page_id, language=target_language)
        stamp_page(page)

    current_app.logger.info(
        "Duplicated %s content %s (%s) to %s as %s",
        page_type.code, content_id, source_language, target_language, content.id,
    )
    return content
