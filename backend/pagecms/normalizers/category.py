def normalize_category_type(category_type):
    return {
        "id": category_type.id,
        "type_code": category_type.type_code,
        "name": category_type.name,
        "is_active": category_type.is_active,
    }


def normalize_category(category, include_type=True):
    data = {
        "id": category.id,
        "name": category.name,
        "language_code": category.language_code,
        "description": category.description,
        "weight": category.weight,
        "publish_status": category.publish_status,
    }

    if include_type:
        data["category_type"] = normalize_category_type(category.category_type)

    return data
