from sqlalchemy import select

from pagecms.extensions import db
from pagecms.models.enums import PageMode
from pagecms.domain.exceptions import NotFound
from pagecms.domain.invariants.values import normalize_language, normalize_mode, parse_id
from .page_types import PageType
from .queries import current_content


def find_content_by_page_id(*, page_type: PageType, page_id: str, language: str, mode: str):
    page_id = parse_id(page_id, "page id")
    language = normalize_language(language)
    mode = normalize_mode(mode)

    content = current_content(page_type, page_id, language, mode)
    if content is None:
        raise NotFound(f"No {mode} content for page {page_id} in '{language}'")
    return content


def find_latest_content_by_page_id(*, page_type: PageType, page_id: str, language: str):
    """Newest Published or History row; previews are not versions."""
    page_id = parse_id(page_id, "page id")
    language = normalize_language(language)
    model = page_type.content_model

    content = db.session.execute(
        select(model)
        .where(
            model.page_id == page_id,
            model.language == language,
            model.mode != PageMode.PREVIEW.value,
        )
        .order_by(model.created_at.desc())
    ).scalars().first()

    if content is None:
        raise NotFound(f"No content for page {page_id} in '{language}'")
    return content
