import pytest

from pagecms.extensions import db
from pagecms.models import Category, FaqContent, PartnerContent, Revision
from pagecms.domain.exceptions import InvariantViolation, NotFound
from pagecms.application.cms.delete_content import delete_content
from pagecms.application.cms.duplicate_content import duplicate_content_to_another_language
from pagecms.application.cms.duplicate_page import duplicate_page
from pagecms.application.cms.page_types import FAQ, LANDING, PARTNER
from pagecms.application.cms.preview_content import preview_content
from pagecms.application.cms.update_content import update_content


def test_duplicate_page_copies_latest_content_with_suffixed_urls(make_page, content_data):
    source = make_page()
    source_id = source.id
    latest = update_content(
        page_type=FAQ,
        prev_content_id=source.contents[0].id,
        data=content_data(title="Latest"),
    )
    latest_id = latest.id

    copy = duplicate_page(page_type=FAQ, page_id=source_id)

    assert copy.id != source_id
    assert len(copy.contents) == 1
    clone = copy.contents[0]
    assert clone.id != latest_id
    assert clone.mode == "Published"
    assert clone.title == "Latest"
    assert clone.url.startswith("/faq/reset-password-")
    assert len(clone.url) == len("/faq/reset-password-") + 3
    assert clone.url_alias.startswith("reset-password-")
    assert [c.type for c in clone.components] == ["LeadComponent", "Divider"]
    assert sorted(c.name for c in clone.categories) == ["Account", "password"]
    assert clone.revision.author == "alice"

    # the source is untouched
    assert db.session.get(FaqContent, latest_id).mode == "Published"
    assert FaqContent.query.filter_by(page_id=source_id).count() == 2


def test_duplicate_page_copies_every_language(make_page, content_data):
    source = make_page()
    duplicate_content_to_another_language(
        page_type=FAQ,
        content_id=source.contents[0].id,
        revision={"author": "bob"},
    )

    copy = duplicate_page(page_type=FAQ, page_id=source.id)

    assert sorted(c.language for c in copy.contents) == ["en", "th"]


def test_duplicate_page_skips_preview(make_page, content_data):
    source = make_page()
    preview_content(page_type=FAQ, page_id=source.id, draft=content_data(title="draft"))

    copy = duplicate_page(page_type=FAQ, page_id=source.id)

    assert [c.title for c in copy.contents] == ["How do I reset my password?"]
    assert all(c.mode == "Published" for c in copy.contents)


def test_duplicate_page_without_content(make_page):
    page = make_page()
    page_id = page.id
    delete_content(page_type=FAQ, page_id=page_id, language="en", mode="Published")

    with pytest.raises(InvariantViolation):
        duplicate_page(page_type=FAQ, page_id=page_id)


def test_duplicate_missing_page(app):
    with pytest.raises(NotFound):
        duplicate_page(page_type=FAQ, page_id="00000000-0000-0000-0000-000000000000")


def test_duplicate_landing_page_suffixes_alias_only(make_page):
    source = make_page(LANDING)

    copy = duplicate_page(page_type=LANDING, page_id=source.id)

    assert copy.contents[0].url_alias.startswith("summer-campaign-")


def test_duplicate_content_to_other_language(make_page):
    page = make_page(PARTNER)
    source = page.contents[0]
    source_id = source.id

    th = duplicate_content_to_another_language(
        page_type=PARTNER,
        content_id=source_id,
        revision={"author": "bob", "message": "translate"},
    )

    assert th.language == "th"
    assert th.page_id == page.id
    assert th.mode == "Published"
    assert th.company_name == "Acme"
    assert th.revision.message == "translate"
    # categories keep their own language
    assert [c.language_code for c in th.categories] == ["en"]
    assert Category.query.count() == 1
    assert db.session.get(PartnerContent, source_id).mode == "Published"


def test_duplicate_content_demotes_existing_target(make_page):
    page = make_page()
    source_id = page.contents[0].id

    first = duplicate_content_to_another_language(
        page_type=FAQ, content_id=source_id, revision={"author": "bob"}
    )
    first_id = first.id
    second = duplicate_content_to_another_language(
        page_type=FAQ, content_id=source_id, language="TH", revision={"author": "bob"}
    )

    assert db.session.get(FaqContent, first_id).mode == "Histories"
    assert second.mode == "Published"
    assert FaqContent.query.filter_by(page_id=page.id, language="th", mode="Published").count() == 1


def test_duplicate_content_rejects_same_language(make_page):
    page = make_page()

    with pytest.raises(InvariantViolation):
        duplicate_content_to_another_language(
            page_type=FAQ,
            content_id=page.contents[0].id,
            language="en",
            revision={"author": "bob"},
        )


def test_failed_duplicate_content_rolls_back_demotion(make_page, monkeypatch):
    page = make_page()
    source_id = page.contents[0].id
    first_id = duplicate_content_to_another_language(
        page_type=FAQ, content_id=source_id, revision={"author": "bob"}
    ).id
    revisions_before = Revision.query.count()

    def fail(refs, *, default_language):
        raise InvariantViolation("category store unavailable")

    monkeypatch.setattr("pagecms.application.cms.duplicate_content.resolve_categories", fail)

    with pytest.raises(InvariantViolation):
        duplicate_content_to_another_language(
            page_type=FAQ, content_id=source_id, revision={"author": "bob"}
        )

    published = FaqContent.query.filter_by(page_id=page.id, language="th", mode="Published").all()
    assert [c.id for c in published] == [first_id]
    assert FaqContent.query.count() == 2
    assert Revision.query.count() == revisions_before
