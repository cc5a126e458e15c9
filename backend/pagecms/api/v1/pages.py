# pagecms/api/v1/pages.py
from flask import current_app, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt_identity
from pagecms.utils.decorators import roles_required
from pagecms.utils.optimistic_lock import enforce_optimistic_lock
from pagecms.application.cms.page_types import get_page_type
from pagecms.application.cms.queries import get_content
from pagecms.application.cms.create_page import create_page
from pagecms.application.cms.find_pages import find_pages, find_page_by_id
from pagecms.application.cms.find_content import (
    find_content_by_page_id,
    find_latest_content_by_page_id,
)
from pagecms.application.cms.update_content import update_content
from pagecms.application.cms.delete_page import delete_page
from pagecms.application.cms.delete_content import delete_content
from pagecms.application.cms.duplicate_page import duplicate_page
from pagecms.application.cms.duplicate_content import duplicate_content_to_another_language
from pagecms.application.cms.revert_content import revert_content
from pagecms.application.cms.revisions import get_revisions
from pagecms.application.cms.preview_content import preview_content
from pagecms.application.cms.categories import get_categories
from pagecms.domain.invariants.values import parse_id
from pagecms.models.enums import PageMode
from pagecms.normalizers.page import normalize_page
from pagecms.normalizers.content import normalize_content
from pagecms.normalizers.revision import normalize_revision
from pagecms.normalizers.category import normalize_category
from pagecms.normalizers.pagination import normalize_pagination
from . import v1_bp

EDITOR_ROLES = ("admin", "editor")
CATEGORY_FILTER_PREFIX = "category."


def _with_author(revision):
    """The revision author defaults to the caller."""
    revision = dict(revision or {})
    if not revision.get("author"):
        revision["author"] = get_jwt_identity()
    return revision


def _is_true(value):
    return str(value).lower() in ("1", "true", "yes")


# ------------------------
# Pages
# ------------------------

@v1_bp.route("/cms/<page_type>/pages", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def create_page_route(page_type):
    page_type = get_page_type(page_type)
    data = request.get_json(silent=True) or {}

    contents = data.get("contents")
    if contents is None and data.get("content"):
        contents = [data["content"]]

    contents = [
        {**c, "revision": _with_author(c.get("revision") or data.get("revision"))}
        if isinstance(c, dict) else c
        for c in contents or []
    ]

    page = create_page(page_type=page_type, data={"contents": contents})

    return jsonify(normalize_page(page, admin=True)), 201


@v1_bp.route("/cms/<page_type>/pages", methods=["GET"])
@jwt_required()
def list_pages_route(page_type):
    page_type = get_page_type(page_type)
    page_num = request.args.get("page", 1, type=int)
    limit = request.args.get("limit", current_app.config["DEFAULT_PAGE_LIMIT"], type=int)

    query = {
        field: request.args.get(field)
        for field in ("title", "url", "url_alias", "status")
        if request.args.get(field)
    }
    query["categories"] = {
        key[len(CATEGORY_FILTER_PREFIX):]: value
        for key, value in request.args.items()
        if key.startswith(CATEGORY_FILTER_PREFIX)
    }

    pages, total = find_pages(
        page_type=page_type,
        query=query,
        sort=request.args.get("sort"),
        page=page_num,
        limit=limit,
        language=request.args.get("language"),
    )

    return jsonify(normalize_pagination(
        pages,
        lambda p: normalize_page(p, admin=True),
        page=page_num,
        per_page=limit,
        total=total,
    ))


@v1_bp.route("/cms/<page_type>/pages/<page_id>", methods=["GET"])
@jwt_required()
def get_page_route(page_type, page_id):
    page_type = get_page_type(page_type)
    page = find_page_by_id(page_type=page_type, page_id=page_id)

    return jsonify(normalize_page(
        page,
        admin=True,
        include_history=_is_true(request.args.get("history")),
    ))


@v1_bp.route("/cms/<page_type>/pages/<page_id>", methods=["DELETE"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def delete_page_route(page_type, page_id):
    page_type = get_page_type(page_type)
    page = find_page_by_id(page_type=page_type, page_id=page_id)
    enforce_optimistic_lock(page)

    delete_page(page_type=page_type, page_id=page.id)

    return jsonify({"message": "Page deleted successfully"}), 200


@v1_bp.route("/cms/<page_type>/pages/<page_id>/duplicate", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def duplicate_page_route(page_type, page_id):
    page_type = get_page_type(page_type)
    page = duplicate_page(page_type=page_type, page_id=page_id)

    return jsonify(normalize_page(page, admin=True)), 201


# ------------------------
# Contents
# ------------------------

@v1_bp.route("/cms/<page_type>/pages/<page_id>/contents", methods=["GET"])
@jwt_required()
def get_content_route(page_type, page_id):
    page_type = get_page_type(page_type)
    content = find_content_by_page_id(
        page_type=page_type,
        page_id=page_id,
        language=request.args.get("language"),
        mode=request.args.get("mode", PageMode.PUBLISHED.value),
    )

    return jsonify(normalize_content(content, admin=True))


@v1_bp.route("/cms/<page_type>/pages/<page_id>/contents/latest", methods=["GET"])
@jwt_required()
def get_latest_content_route(page_type, page_id):
    page_type = get_page_type(page_type)
    content = find_latest_content_by_page_id(
        page_type=page_type,
        page_id=page_id,
        language=request.args.get("language"),
    )

    return jsonify(normalize_content(content, admin=True))


@v1_bp.route("/cms/<page_type>/pages/<page_id>/contents", methods=["DELETE"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def delete_content_route(page_type, page_id):
    page_type = get_page_type(page_type)
    delete_content(
        page_type=page_type,
        page_id=page_id,
        language=request.args.get("language"),
        mode=request.args.get("mode"),
    )

    return jsonify({"message": "Content deleted successfully"}), 200


@v1_bp.route("/cms/<page_type>/contents/<content_id>", methods=["PUT"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def update_content_route(page_type, content_id):
    page_type = get_page_type(page_type)
    previous = get_content(page_type, parse_id(content_id, "content id"))

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(previous.page)

    data = request.get_json(silent=True) or {}
    data["revision"] = _with_author(data.get("revision"))

    content = update_content(
        page_type=page_type,
        prev_content_id=previous.id,
        data=data,
    )

    return jsonify(normalize_content(content, admin=True)), 200


@v1_bp.route("/cms/<page_type>/contents/<content_id>/duplicate-language", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def duplicate_content_route(page_type, content_id):
    page_type = get_page_type(page_type)
    data = request.get_json(silent=True) or {}

    content = duplicate_content_to_another_language(
        page_type=page_type,
        content_id=content_id,
        revision=_with_author(data.get("revision")),
        language=data.get("language"),
    )

    return jsonify(normalize_content(content, admin=True)), 201


@v1_bp.route("/cms/<page_type>/pages/<page_id>/preview", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def preview_content_route(page_type, page_id):
    page_type = get_page_type(page_type)
    draft = request.get_json(silent=True) or {}

    url = preview_content(page_type=page_type, page_id=page_id, draft=draft)

    return jsonify({"preview_url": url}), 200


# ------------------------
# Revisions
# ------------------------

@v1_bp.route("/cms/<page_type>/pages/<page_id>/revisions", methods=["GET"])
@jwt_required()
def list_revisions_route(page_type, page_id):
    page_type = get_page_type(page_type)
    revisions = get_revisions(
        page_type=page_type,
        page_id=page_id,
        language=request.args.get("language"),
    )

    return jsonify([normalize_revision(r) for r in revisions])


@v1_bp.route("/cms/<page_type>/revisions/<revision_id>/revert", methods=["POST"])
@jwt_required()
@roles_required(*EDITOR_ROLES)
def revert_content_route(page_type, revision_id):
    page_type = get_page_type(page_type)
    data = request.get_json(silent=True) or {}

    content = revert_content(
        page_type=page_type,
        revision_id=revision_id,
        revision=_with_author(data.get("revision")),
    )

    return jsonify(normalize_content(content, admin=True)), 201


# ------------------------
# Categories of a page
# ------------------------

@v1_bp.route("/cms/<page_type>/pages/<page_id>/categories", methods=["GET"])
@jwt_required()
def page_categories_route(page_type, page_id):
    page_type = get_page_type(page_type)
    categories = get_categories(
        page_type=page_type,
        page_id=page_id,
        category_type_code=request.args.get("type_code"),
        language=request.args.get("language"),
        mode=request.args.get("mode", PageMode.PUBLISHED.value),
    )

    return jsonify([normalize_category(c) for c in categories])
