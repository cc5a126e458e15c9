from typing import List

from sqlalchemy import select

from pagecms.extensions import db
from pagecms.models import Revision
from pagecms.domain.invariants.values import normalize_language, parse_id
from .page_types import PageType
from .queries import get_page


def get_revisions(*, page_type: PageType, page_id: str, language: str) -> List[Revision]:
    """Every revision of a page in one language, newest first."""
    page_id = parse_id(page_id, "page id")
    language = normalize_language(language)
    get_page(page_type, page_id)

    model = page_type.content_model
    owner = getattr(Revision, model.OWNER_KEY)

    return db.session.execute(
        select(Revision)
        .join(model, model.id == owner)
        .where(model.page_id == page_id, model.language == language)
        .order_by(Revision.created_at.desc())
    ).scalars().all()
