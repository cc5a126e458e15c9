import posixpath
from urllib.parse import urlencode, urlsplit, urlunsplit


def build_preview_url(base: str, language: str, url_path: str, content_id: str) -> str:
    """
    {base}/preview/{language}/{url_path}?id={content_id}
    """
    parts = urlsplit(base)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"Invalid preview base url: {base!r}")

    path = posixpath.join(parts.path or "/", "preview", language, url_path.strip("/"))
    query = urlencode({"id": content_id})

    return urlunsplit((parts.scheme, parts.netloc, path, query, ""))
