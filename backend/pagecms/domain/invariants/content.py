from sqlalchemy import func, select
from pagecms.extensions import db
from pagecms.models.enums import PageMode
from .component import assert_component, assert_component_order
from ..exceptions import InvariantViolation

SINGLETON_MODES = (PageMode.PUBLISHED.value, PageMode.PREVIEW.value)


def assert_content(content):
    if not content.title:
        raise InvariantViolation("Content title is required.")

    if content.has_url() and not content.url:
        raise InvariantViolation("Content URL is required.")

    if not content.has_url() and not content.url_alias:
        raise InvariantViolation("Content URL alias is required.")

    if not content.is_preview and content.revision is None:
        raise InvariantViolation("Versioned content must carry a revision.")

    if content.is_preview and content.revision is not None:
        raise InvariantViolation("Preview content cannot carry a revision.")

    assert_component_order(content.components)
    for component in content.components:
        assert_component(component)


def assert_single_mode(content_model, *, page_id, language):
    """
    At most one Published and one Preview row per (page, language).
    Must run after flush, inside the transaction doing the write.
    """
    rows = db.session.execute(
        select(content_model.mode, func.count(content_model.id))
        .where(
            content_model.page_id == page_id,
            content_model.language == language,
            content_model.mode.in_(SINGLETON_MODES),
        )
        .group_by(content_model.mode)
    ).all()

    for mode, count in rows:
        if count > 1:
            raise InvariantViolation(
                f"Page {page_id} has {count} {mode} contents for language '{language}'"
            )
