from typing import Optional

from sqlalchemy import select

from pagecms.extensions import db
from pagecms.models.base import utcnow
from pagecms.domain.exceptions import NotFound
from .page_types import PageType


def get_page(page_type: PageType, page_id: str, *, lock: bool = False):
    stmt = select(page_type.page_model).where(page_type.page_model.id == page_id)
    if lock:
        stmt = stmt.with_for_update()

    page = db.session.execute(stmt).scalar_one_or_none()
    if page is None:
        raise NotFound(f"{page_type.code} page {page_id} not found")
    return page


def get_content(page_type: PageType, content_id: str):
    content = db.session.get(page_type.content_model, content_id)
    if content is None:
        raise NotFound(f"{page_type.code} content {content_id} not found")
    return content


def current_content(
    page_type: PageType,
    page_id: str,
    language: str,
    mode: str,
    *,
    lock: bool = False,
) -> Optional[object]:
    """The singleton row for (page, language, mode), if any."""
    model = page_type.content_model
    stmt = (
        select(model)
        .where(model.page_id == page_id, model.language == language, model.mode == mode)
        .order_by(model.created_at.desc())
    )
    if lock:
        stmt = stmt.with_for_update()

    return db.session.execute(stmt).scalars().first()


def stamp_page(page) -> None:
    page.updated_at = utcnow()
