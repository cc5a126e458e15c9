from pagecms.models.enums import PageMode
from .content import normalize_content


def normalize_page(page, admin=False, include_history=False):
    """Previews never leave through a page; history only when asked for."""
    visible = {PageMode.PUBLISHED.value}
    if include_history:
        visible.add(PageMode.HISTORIES.value)

    return {
        "id": page.id,
        "created_at": page.created_at,
        "updated_at": page.updated_at,
        "contents": [
            normalize_content(c, admin=admin)
            for c in page.contents
            if c.mode in visible
        ],
    }
