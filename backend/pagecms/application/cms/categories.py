"""
Category taxonomy service.

Categories are shared by unrelated contents, so resolution is an explicit,
idempotent lookup-or-create:

    resolve_category_type(code) -> resolve_category(type, name, language) -> join row

Nothing here commits; callers own the transaction.
"""
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy import func, select

from pagecms.extensions import db
from pagecms.models import Category, CategoryType
from pagecms.domain.exceptions import InvariantViolation, NotFound, ReferentialError
from pagecms.domain.invariants.values import (
    normalize_language,
    normalize_mode,
    normalize_publish_status,
    parse_id,
)
from pagecms.utils.transaction import transactional
from .page_types import PageType


def resolve_category_type(type_code: str, *, name: Optional[str] = None) -> CategoryType:
    if not type_code or not isinstance(type_code, str):
        raise InvariantViolation("Category type code is required")

    category_type = CategoryType.query.filter_by(type_code=type_code).first()
    if category_type:
        return category_type

    category_type = CategoryType()
    category_type.type_code = type_code
    category_type.name = name or type_code
    category_type.is_active = True
    db.session.add(category_type)
    db.session.flush()

    current_app.logger.info("Created category type %s", type_code)
    return category_type


def resolve_category(
    category_type: CategoryType,
    *,
    name: str,
    language_code: str,
    description: Optional[str] = None,
    weight: int = 0,
    publish_status: Optional[str] = None,
) -> Category:
    """Logical key: (category type, language, name)."""
    if not name:
        raise InvariantViolation("Category name is required")

    language_code = normalize_language(language_code)

    category = Category.query.filter_by(
        category_type_id=category_type.id,
        language_code=language_code,
        name=name,
    ).first()
    if category:
        return category

    category = Category()
    category.category_type = category_type
    category.category_type_id = category_type.id
    category.language_code = language_code
    category.name = name
    category.description = description
    category.weight = weight or 0
    category.publish_status = normalize_publish_status(publish_status or "UnPublished")
    db.session.add(category)
    db.session.flush()

    return category


def resolve_categories(refs: Optional[List[Dict[str, Any]]], *, default_language: str) -> List[Category]:
    """
    Turn category references into Category rows.

    A reference is either {"id": <existing category id>} or a value:
    {"type_code", "name", "language_code"?, "description"?, "weight"?, "publish_status"?}
    """
    resolved: List[Category] = []
    seen = set()

    for ref in refs or []:
        if not isinstance(ref, dict):
            raise InvariantViolation("Category reference must be an object")

        if ref.get("id"):
            category = db.session.get(Category, parse_id(ref["id"], "category id"))
            if category is None:
                raise NotFound(f"Category {ref['id']} not found")
        else:
            type_code = ref.get("type_code") or ref.get("category_type_code")
            category_type = resolve_category_type(type_code)
            category = resolve_category(
                category_type,
                name=ref.get("name"),
                language_code=ref.get("language_code") or default_language,
                description=ref.get("description"),
                weight=ref.get("weight", 0),
                publish_status=ref.get("publish_status"),
            )

        if category.id not in seen:
            seen.add(category.id)
            resolved.append(category)

    return resolved


def get_categories(
    *,
    page_type: PageType,
    page_id: str,
    category_type_code: str,
    language: str,
    mode: str,
) -> List[Category]:
    """Categories of one type attached to the (page, language, mode) content."""
    if not category_type_code:
        raise InvariantViolation("type_code is required")

    model = page_type.content_model
    page_id = parse_id(page_id, "page id")
    language = normalize_language(language)
    mode = normalize_mode(mode)

    content_id = db.session.execute(
        select(model.id).where(
            model.page_id == page_id,
            model.language == language,
            model.mode == mode,
        )
    ).scalars().first()

    if content_id is None:
        raise NotFound(f"No {mode} content for page {page_id} in '{language}'")

    link = page_type.category_table
    return (
        Category.query
        .join(CategoryType, CategoryType.id == Category.category_type_id)
        .join(link, link.c.category_id == Category.id)
        .filter(link.c.content_id == content_id, CategoryType.type_code == category_type_code)
        .order_by(Category.weight.asc(), Category.created_at.asc())
        .all()
    )


def list_categories(
    *,
    category_type_code: Optional[str] = None,
    language: Optional[str] = None,
    name: Optional[str] = None,
) -> List[Category]:
    query = Category.query.join(CategoryType, CategoryType.id == Category.category_type_id)

    if category_type_code:
        query = query.filter(CategoryType.type_code == category_type_code)
    if language:
        query = query.filter(Category.language_code == normalize_language(language))
    if name:
        query = query.filter(Category.name.ilike(f"%{name}%"))

    return query.order_by(Category.weight.asc(), Category.created_at.asc()).all()


def list_category_types(*, is_active: Optional[bool] = None) -> List[CategoryType]:
    query = CategoryType.query
    if is_active is not None:
        query = query.filter_by(is_active=is_active)
    return query.order_by(CategoryType.type_code.asc()).all()


def create_category_type(*, data: Dict[str, Any]) -> CategoryType:
    type_code = data.get("type_code")
    if not type_code:
        raise InvariantViolation("type_code is required")

    if CategoryType.query.filter_by(type_code=type_code).first():
        raise InvariantViolation(f"type_code '{type_code}' already exists")

    category_type = CategoryType()
    category_type.type_code = type_code
    category_type.name = data.get("name") or type_code
    category_type.is_active = bool(data.get("is_active", True))

    with transactional():
        db.session.add(category_type)

    return category_type


def delete_category_type(*, category_type_id: str) -> None:
    category_type_id = parse_id(category_type_id, "category type id")
    category_type = db.session.get(CategoryType, category_type_id)
    if category_type is None:
        raise NotFound(f"Category type {category_type_id} not found")

    in_use = db.session.execute(
        select(func.count(Category.id)).where(Category.category_type_id == category_type_id)
    ).scalar_one()

    if in_use:
        raise ReferentialError(
            f"Cannot delete category type: it is still in use by {in_use} categories"
        )

    with transactional():
        db.session.delete(category_type)

    current_app.logger.info("Deleted category type %s", category_type.type_code)
