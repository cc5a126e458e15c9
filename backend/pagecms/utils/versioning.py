from pagecms.extensions import db


def snapshot_content(content):
    """
    Plain-value copy of a content sub-graph.

    Only values leave this function, never ORM instances, so the result can be
    re-materialized as a brand-new graph without sharing rows with the source.
    """
    return {
        "content": {
            "id": content.id,
            "page_id": content.page_id,
            "mode": content.mode,
            **content.body(),
        },
        "meta_tag": content.meta_tag.values() if content.meta_tag else None,
        "components": [
            {
                "type": c.type,
                "position": c.position,
                "props": dict(c.props or {}),
            }
            for c in content.components
        ],
        "categories": [
            {
                "type_code": cat.category_type.type_code,
                "name": cat.name,
                "language_code": cat.language_code,
                "description": cat.description,
                "weight": cat.weight,
                "publish_status": cat.publish_status,
            }
            for cat in content.categories
        ],
        "revision": content.revision.meta() if content.revision else None,
    }


def load_snapshot(content_model, content_id):
    """
    Re-read a content row from storage and snapshot it.

    Expires the identity map first so a stale in-session copy can never
    leak into the clone.
    """
    db.session.expire_all()
    content = db.session.get(content_model, content_id)
    if content is None:
        return None
    return snapshot_content(content)
