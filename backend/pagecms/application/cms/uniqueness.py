import secrets
import string
from typing import Optional

from flask import current_app
from sqlalchemy import func, select

from pagecms.extensions import db
from pagecms.domain.exceptions import DuplicateURL, DuplicateURLAlias, InvariantViolation
from .page_types import PageType


def _is_taken(page_type: PageType, column: str, value: str, exclude_page_id: Optional[str]) -> bool:
    model = page_type.content_model
    stmt = select(func.count(model.id)).where(getattr(model, column) == value)

    if exclude_page_id is not None:  # a page may keep its own URL
        stmt = stmt.where(model.page_id != exclude_page_id)

    return db.session.execute(stmt).scalar_one() > 0


def assert_unique_urls(
    page_type: PageType,
    *,
    url: Optional[str],
    url_alias: Optional[str],
    exclude_page_id: Optional[str] = None,
) -> None:
    """
    Pre-flight collision check, run before any transaction is opened.
    Scoped to the page type's own content table.
    """
    if page_type.content_model.has_url() and url and _is_taken(page_type, "url", url, exclude_page_id):
        current_app.logger.warning("Rejected duplicate %s URL %s", page_type.code, url)
        raise DuplicateURL(url)

    if url_alias and _is_taken(page_type, "url_alias", url_alias, exclude_page_id):
        current_app.logger.warning("Rejected duplicate %s URL alias %s", page_type.code, url_alias)
        raise DuplicateURLAlias(url_alias)


COPY_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
COPY_SUFFIX_LENGTH = 3
COPY_ATTEMPTS = 20


def unique_copy_of(page_type: PageType, column: str, value: str) -> str:
    """
    ``value`` plus a short random suffix that no row of the page type uses yet.
    """
    for _ in range(COPY_ATTEMPTS):
        suffix = "".join(secrets.choice(COPY_SUFFIX_ALPHABET) for _ in range(COPY_SUFFIX_LENGTH))
        candidate = f"{value}-{suffix}"
        if not _is_taken(page_type, column, candidate, None):
            return candidate

    raise InvariantViolation(f"Could not find a free {column} for a copy of {value!r}")
