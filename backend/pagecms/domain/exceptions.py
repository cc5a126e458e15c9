class CMSError(Exception):
    """Base class for every error the versioning engine raises on purpose."""

    status_code = 500


class InvariantViolation(CMSError):
    """Validation failure: the request can never succeed as written."""

    status_code = 400


class DuplicateURL(InvariantViolation):
    def __init__(self, url):
        super().__init__(f"URL '{url}' is already used by another page")
        self.url = url


class DuplicateURLAlias(InvariantViolation):
    def __init__(self, url_alias):
        super().__init__(f"URL alias '{url_alias}' is already used by another page")
        self.url_alias = url_alias


class NotFound(CMSError):
    status_code = 404


class ConflictError(CMSError):
    """Another writer changed the resource since the caller last read it."""

    status_code = 409


class ReferentialError(CMSError):
    """The row is still referenced and cannot be removed."""

    status_code = 409
