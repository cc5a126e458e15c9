from flask import current_app

from pagecms.extensions import db
from pagecms.domain.invariants.values import parse_id
from pagecms.utils.transaction import transactional
from .page_types import PageType
from .queries import get_page


def delete_page(*, page_type: PageType, page_id: str) -> None:
    """
    Remove a page and everything it owns: every content in every mode and
    language, their meta tags, components, revisions and category links.
    Shared categories themselves survive.
    """
    page_id = parse_id(page_id, "page id")
    page = get_page(page_type, page_id)
    content_count = len(page.contents)

    with transactional():
        db.session.delete(page)

    current_app.logger.info(
        "Deleted %s page %s with %d contents", page_type.code, page_id, content_count
    )
