from flask import request, jsonify
from flask_jwt_extended import jwt_required
from pagecms.utils.decorators import roles_required
from pagecms.application.cms.categories import (
    create_category_type,
    delete_category_type,
    list_categories,
    list_category_types,
)
from pagecms.normalizers.category import normalize_category, normalize_category_type
from . import v1_bp


@v1_bp.route("/cms/category-types", methods=["GET"])
@jwt_required()
def list_category_types_route():
    active = request.args.get("active")
    is_active = None if active is None else active.lower() in ("1", "true", "yes")

    return jsonify([
        normalize_category_type(t) for t in list_category_types(is_active=is_active)
    ])


@v1_bp.route("/cms/category-types", methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_category_type_route():
    data = request.get_json(silent=True) or {}
    category_type = create_category_type(data=data)

    return jsonify(normalize_category_type(category_type)), 201


@v1_bp.route("/cms/category-types/<category_type_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_category_type_route(category_type_id):
    delete_category_type(category_type_id=category_type_id)

    return jsonify({"message": "Category type deleted successfully"}), 200


@v1_bp.route("/cms/categories", methods=["GET"])
@jwt_required()
def list_categories_route():
    categories = list_categories(
        category_type_code=request.args.get("type_code"),
        language=request.args.get("language"),
        name=request.args.get("name"),
    )

    return jsonify([normalize_category(c) for c in categories])
