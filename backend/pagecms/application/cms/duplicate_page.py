from flask import current_app

from pagecms.extensions import db
from pagecms.models.enums import PageMode
from pagecms.domain.exceptions import InvariantViolation
from pagecms.domain.invariants.content import assert_content, assert_single_mode
from pagecms.domain.invariants.values import parse_id
from pagecms.utils.transaction import transactional
from pagecms.utils.versioning import load_snapshot
from .categories import resolve_categories
from .content_builder import build_content, snapshot_data
from .page_types import PageType
from .queries import get_page
from .uniqueness import unique_copy_of


def duplicate_page(*, page_type: PageType, page_id: str):
    """
    Copy a page into a new one.

    For every language the newest non-Preview content is cloned as the new
    page's Published content. URL and URL alias get a random suffix so the
    copy never collides with its source.
    """
    page_id = parse_id(page_id, "page id")
    source = get_page(page_type, page_id)
    model = page_type.content_model

    latest = {}
    for content in source.contents:  # newest first
        if content.is_preview:
            continue
        latest.setdefault(content.language, content.id)

    if not latest:
        raise InvariantViolation(f"Page {page_id} has no content to duplicate")

    snapshots = [load_snapshot(model, content_id) for content_id in latest.values()]

    clones = []
    for snapshot in snapshots:
        overrides = {}
        if model.has_url():
            overrides["url"] = unique_copy_of(page_type, "url", snapshot["content"]["url"])
        if snapshot["content"]["url_alias"]:
            overrides["url_alias"] = unique_copy_of(
                page_type, "url_alias", snapshot["content"]["url_alias"]
            )

        clone = build_content(
            page_type,
            snapshot_data(snapshot, **overrides),
            mode=PageMode.PUBLISHED.value,
            revision=snapshot["revision"],
        )
        assert_content(clone)
        clones.append((clone, snapshot))

    page = page_type.page_model()

    with transactional():
        for clone, snapshot in clones:
            clone.categories = resolve_categories(
                snapshot["categories"], default_language=clone.language
            )
            page.contents.append(clone)

        db.session.add(page)
        db.session.flush()

        for clone, _ in clones:
            assert_single_mode(model, page_id=page.id, language=clone.language)

    current_app.logger.info(
        "Duplicated %s page %s into %s (%s)",
        page_type.code, page_id, page.id, ", ".join(sorted(latest)),
    )
    return page
