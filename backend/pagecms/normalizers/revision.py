def normalize_revision(revision):
    return {
        "id": revision.id,
        "content_id": revision.content_id,
        "author": revision.author,
        "message": revision.message,
        "description": revision.description,
        "publish_status": revision.publish_status,
        "created_at": revision.created_at,
    }
