from .category import normalize_category
from .component import normalize_component
from .revision import normalize_revision


def normalize_content(content, admin=False):
    data = {
        "id": content.id,
        "page_id": content.page_id,
        "mode": content.mode,
        **content.body(),
        "meta_tag": content.meta_tag.values() if content.meta_tag else None,
        "components": [normalize_component(c) for c in content.components],
        "categories": [normalize_category(c) for c in content.categories],
    }

    if admin:
        data["revision"] = normalize_revision(content.revision) if content.revision else None
        data["created_at"] = content.created_at
        data["updated_at"] = content.updated_at

    return data
