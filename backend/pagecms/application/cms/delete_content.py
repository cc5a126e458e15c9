from flask import current_app

from pagecms.domain.exceptions import NotFound
from pagecms.domain.invariants.values import normalize_language, normalize_mode, parse_id
from pagecms.utils.transaction import transactional
from .page_types import PageType
from .queries import current_content, get_page, stamp_page


def delete_content(*, page_type: PageType, page_id: str, language: str, mode: str) -> None:
    """
    Delete the (page, language, mode) content with its owned rows.

    No History row is promoted when the Published one goes away; the
    language simply has no Published content until the next update.
    """
    page_id = parse_id(page_id, "page id")
    language = normalize_language(language)
    mode = normalize_mode(mode)

    page = get_page(page_type, page_id)
    content = current_content(page_type, page_id, language, mode)
    if content is None:
        raise NotFound(f"No {mode} content for page {page_id} in '{language}'")

    content_id = content.id

    # delete-orphan on page.contents removes the row and what it owns
    with transactional():
        page.contents.remove(content)
        stamp_page(page)

    current_app.logger.info(
        "Deleted %s content %s of page %s (%s, %s)", page_type.code, content_id, page_id, language, mode
    )
