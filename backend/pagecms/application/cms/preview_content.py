from datetime import timedelta
from typing import Any, Dict

from flask import current_app

from pagecms.extensions import db
from pagecms.models.base import utcnow
from pagecms.models.enums import PageMode, PublishStatus, WorkflowStatus
from pagecms.domain.exceptions import NotFound
from pagecms.domain.invariants.content import assert_content, assert_single_mode
from pagecms.domain.invariants.values import normalize_language, parse_id
from pagecms.utils.preview_url import build_preview_url
from pagecms.utils.transaction import transactional
from .content_builder import apply_body, build_components, build_content, build_meta_tag
from .page_types import PageType
from .queries import current_content, get_page
from .uniqueness import assert_unique_urls


def find_preview(page_type: PageType, page_id: str, language: str):
    content = current_content(page_type, page_id, language, PageMode.PREVIEW.value)
    if content is None:
        raise NotFound(f"No preview for page {page_id} in '{language}'")
    return content


def _preview_data(draft: Dict[str, Any]) -> Dict[str, Any]:
    data = dict(draft)
    data["workflow_status"] = WorkflowStatus.UNPUBLISHED.value
    data["publish_status"] = PublishStatus.UNPUBLISHED.value
    data["expired_at"] = utcnow() + timedelta(hours=current_app.config["PREVIEW_TTL_HOURS"])
    return data


def preview_content(*, page_type: PageType, page_id: str, draft: Dict[str, Any]) -> str:
    """
    Store a draft as the page's Preview content for its language and
    return the URL the frontend renders it at.

    There is at most one Preview row per (page, language); a later draft
    overwrites it in place. Preview rows have no revision and never enter
    the history chain.
    """
    page_id = parse_id(page_id, "page id")
    get_page(page_type, page_id)

    data = _preview_data(draft)
    language = normalize_language(data.get("language"))

    assert_unique_urls(
        page_type,
        url=data.get("url"),
        url_alias=data.get("url_alias"),
        exclude_page_id=page_id,
    )

    try:
        preview = find_preview(page_type, page_id, language)
    except NotFound:
        preview = None

    with transactional():
        if preview is None:
            preview = build_content(page_type, data, mode=PageMode.PREVIEW.value)
            preview.page_id = page_id
            assert_content(preview)
            db.session.add(preview)
        else:
            apply_body(preview, data)
            preview.meta_tag = build_meta_tag(data.get("meta_tag"))
            preview.components = build_components(data.get("components"))
            assert_content(preview)

        db.session.flush()
        assert_single_mode(page_type.content_model, page_id=page_id, language=language)

    current_app.logger.info(
        "Stored %s preview %s for page %s (%s)", page_type.code, preview.id, page_id, language
    )

    return build_preview_url(
        current_app.config["PREVIEW_BASE_URL"], language, page_type.preview_path, preview.id
    )
