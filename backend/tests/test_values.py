from datetime import datetime, timezone

import pytest

from pagecms.domain.exceptions import InvariantViolation
from pagecms.domain.invariants.values import (
    normalize_language,
    normalize_mode,
    normalize_publish_status,
    normalize_workflow_status,
    parse_datetime,
    parse_id,
)
from pagecms.domain.lifecycle.content import assert_mode_transition
from pagecms.models import Component
from pagecms.utils.order import compact_order
from pagecms.utils.preview_url import build_preview_url


@pytest.mark.parametrize("raw, expected", [("en", "en"), ("EN", "en"), (" th ", "th")])
def test_normalize_language(raw, expected):
    assert normalize_language(raw) == expected


def test_normalize_language_rejects_unknown():
    with pytest.raises(InvariantViolation):
        normalize_language("fr")
    with pytest.raises(InvariantViolation):
        normalize_language(None)


def test_normalize_statuses_case_insensitive():
    assert normalize_mode("published") == "Published"
    assert normalize_mode("HISTORIES") == "Histories"
    assert normalize_publish_status("unpublished") == "UnPublished"
    assert normalize_workflow_status("waiting_design_approved") == "Waiting_Design_Approved"


def test_parse_id_canonicalizes_and_rejects_garbage():
    raw = "6F9619FF-8B86-D011-B42D-00C04FC964FF"
    assert parse_id(raw) == raw.lower()

    with pytest.raises(InvariantViolation):
        parse_id("not-a-uuid", "page id")


def test_parse_datetime_assumes_utc():
    value = parse_datetime("2024-05-01T10:00:00")
    assert value == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)
    assert parse_datetime("") is None

    with pytest.raises(InvariantViolation):
        parse_datetime("yesterday-ish")


def test_mode_transitions():
    assert_mode_transition(from_mode="Published", to_mode="Histories")

    for from_mode, to_mode in [
        ("Histories", "Published"),
        ("Preview", "Published"),
        ("Published", "Preview"),
    ]:
        with pytest.raises(InvariantViolation):
            assert_mode_transition(from_mode=from_mode, to_mode=to_mode)


def test_compact_order_renumbers_from_one():
    items = []
    for position in (5, 2, 9):
        component = Component()
        component.position = position
        items.append(component)

    ordered = compact_order(items)

    assert [c.position for c in ordered] == [1, 2, 3]
    assert ordered[0] is items[1]


def test_build_preview_url():
    url = build_preview_url("http://web.test/", "th", "faq", "abc")
    assert url == "http://web.test/preview/th/faq?id=abc"

    with pytest.raises(ValueError):
        build_preview_url("web.test", "th", "faq", "abc")
