from typing import Set
from pagecms.models.enums import PageMode
from ..exceptions import InvariantViolation

# Explicit allowed mode transitions for an existing content row
ALLOWED_MODE_TRANSITIONS: dict[str, Set[str]] = {
    PageMode.PUBLISHED.value: {PageMode.HISTORIES.value},
    PageMode.HISTORIES.value: set(),  # history is terminal until the page is deleted
    PageMode.PREVIEW.value: set(),  # preview is overwritten in place, never promoted
}


def assert_mode_transition(*, from_mode: str, to_mode: str) -> None:
    """
    Guards content mode transitions.
    Single source of truth for mode changes.
    """
    allowed = ALLOWED_MODE_TRANSITIONS.get(from_mode, set())

    if to_mode not in allowed:
        raise InvariantViolation(
            f"Illegal content transition: {from_mode} → {to_mode}"
        )


def demote(content) -> None:
    """Move a Published row into the History chain."""
    assert_mode_transition(from_mode=content.mode, to_mode=PageMode.HISTORIES.value)
    content.mode = PageMode.HISTORIES.value
