from typing import Any, Dict, List, Optional, Tuple

from flask import current_app
from sqlalchemy import func, select

from pagecms.extensions import db
from pagecms.models import Category, CategoryType
from pagecms.models.enums import PageMode
from pagecms.domain.exceptions import InvariantViolation
from pagecms.domain.invariants.values import (
    normalize_language,
    normalize_workflow_status,
    parse_id,
)
from .page_types import PageType
from .queries import get_page

TEXT_FILTERS = ("title", "url", "url_alias")
CONTENT_SORT_COLUMNS = {
    "title": "title",
    "url": "url",
    "url_alias": "url_alias",
    "status": "workflow_status",
    "language": "language",
}
PAGE_SORT_COLUMNS = ("created_at", "updated_at")


def _category_condition(page_type: PageType, type_code: str, name: str):
    link = page_type.category_table
    model = page_type.content_model

    tagged = (
        select(link.c.content_id)
        .join(Category, Category.id == link.c.category_id)
        .join(CategoryType, CategoryType.id == Category.category_type_id)
        .where(CategoryType.type_code == type_code, Category.name.ilike(f"%{name}%"))
    )
    return model.id.in_(tagged)


def _conditions(page_type: PageType, query: Dict[str, Any], language: Optional[str]) -> List[Any]:
    model = page_type.content_model
    conditions = [model.mode == PageMode.PUBLISHED.value]

    for field in TEXT_FILTERS:
        value = query.get(field)
        if not value:
            continue
        if field == "url" and not model.has_url():
            raise InvariantViolation(f"{page_type.code} pages have no url")
        conditions.append(getattr(model, field).ilike(f"%{value}%"))

    if query.get("status"):
        conditions.append(model.workflow_status == normalize_workflow_status(query["status"]))

    if language:
        conditions.append(model.language == normalize_language(language))

    for type_code, name in (query.get("categories") or {}).items():
        if type_code not in page_type.filter_category_codes:
            raise InvariantViolation(
                f"{page_type.code} pages cannot be filtered by category type '{type_code}'"
            )
        if name:
            conditions.append(_category_condition(page_type, type_code, name))

    return conditions


def _order_by(page_type: PageType, sort: Optional[str]):
    page_model = page_type.page_model
    if not sort:
        return page_model.created_at.desc()

    column, _, direction = sort.partition(":")
    direction = (direction or "asc").lower()
    if direction not in ("asc", "desc"):
        raise InvariantViolation(f"Invalid sort direction: {direction!r}")

    if column in CONTENT_SORT_COLUMNS:
        field = CONTENT_SORT_COLUMNS[column]
        if field == "url" and not page_type.content_model.has_url():
            raise InvariantViolation(f"{page_type.code} pages have no url")
        # a page may have several Published rows (one per language)
        expr = func.min(getattr(page_type.content_model, field))
    elif column in PAGE_SORT_COLUMNS:
        expr = getattr(page_model, column)
    else:
        raise InvariantViolation(f"Invalid sort column: {column!r}")

    return expr.asc() if direction == "asc" else expr.desc()


def find_pages(
    *,
    page_type: PageType,
    query: Optional[Dict[str, Any]] = None,
    sort: Optional[str] = None,
    page: int = 1,
    limit: Optional[int] = None,
    language: Optional[str] = None,
) -> Tuple[list, int]:
    """
    List pages that have Published content matching ``query``.

    Returns ``(pages, total)``; ``total`` counts every matching page, not
    just the returned slice.
    """
    limit = limit or current_app.config["DEFAULT_PAGE_LIMIT"]
    if page < 1:
        raise InvariantViolation("page must be >= 1")
    if limit < 1 or limit > current_app.config["MAX_PAGE_LIMIT"]:
        raise InvariantViolation(
            f"limit must be between 1 and {current_app.config['MAX_PAGE_LIMIT']}"
        )

    page_model = page_type.page_model
    model = page_type.content_model
    conditions = _conditions(page_type, query or {}, language)

    total = db.session.execute(
        select(func.count(func.distinct(page_model.id)))
        .select_from(page_model)
        .join(model, model.page_id == page_model.id)
        .where(*conditions)
    ).scalar_one()

    pages = db.session.execute(
        select(page_model)
        .join(model, model.page_id == page_model.id)
        .where(*conditions)
        .group_by(page_model.id)
        .order_by(_order_by(page_type, sort), page_model.id)
        .offset((page - 1) * limit)
        .limit(limit)
    ).scalars().all()

    return pages, total


def find_page_by_id(*, page_type: PageType, page_id: str):
    return get_page(page_type, parse_id(page_id, "page id"))
