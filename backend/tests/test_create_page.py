import pytest

from pagecms.extensions import db
from pagecms.models import Category, CategoryType, FaqContent, FaqPage, Revision
from pagecms.domain.exceptions import DuplicateURL, DuplicateURLAlias, InvariantViolation
from pagecms.application.cms.create_page import create_page
from pagecms.application.cms.page_types import FAQ, LANDING, PARTNER


def test_create_page_publishes_single_content(make_page):
    page = make_page()

    assert len(page.contents) == 1
    content = page.contents[0]
    assert content.mode == "Published"
    assert content.language == "en"
    assert content.revision.author == "alice"
    assert content.revision.publish_status == "UnPublished"
    assert content.meta_tag.title == "Reset password"
    assert [c.type for c in content.components] == ["LeadComponent", "Divider"]
    assert [c.position for c in content.components] == [1, 2]
    assert sorted(c.name for c in content.categories) == ["Account", "password"]


def test_create_page_for_every_page_type(make_page):
    landing = make_page(LANDING)
    partner = make_page(PARTNER)

    assert landing.contents[0].url_alias == "summer-campaign"
    assert partner.contents[0].company_name == "Acme"
    assert partner.contents[0].is_recommended is True


def test_create_page_requires_exactly_one_content(app, content_data):
    with pytest.raises(InvariantViolation):
        create_page(page_type=FAQ, data={"contents": []})

    with pytest.raises(InvariantViolation):
        create_page(
            page_type=FAQ,
            data={"contents": [content_data(), content_data(language="th")]},
        )

    assert FaqPage.query.count() == 0


def test_create_page_requires_revision_author(app, content_data):
    with pytest.raises(InvariantViolation):
        create_page(page_type=FAQ, data={"contents": [content_data(revision={})]})

    assert FaqPage.query.count() == 0
    assert Revision.query.count() == 0


def test_create_page_rejects_duplicate_url(make_page):
    make_page()

    with pytest.raises(DuplicateURL):
        make_page(url_alias="other-alias")

    with pytest.raises(DuplicateURLAlias):
        make_page(url="/faq/other")

    assert FaqPage.query.count() == 1


def test_duplicate_url_is_scoped_to_page_type(make_page):
    make_page(FAQ, url="/shared")
    page = make_page(PARTNER, url="/shared", url_alias="reset-password")

    assert page.contents[0].url == "/shared"


def test_landing_requires_url_alias(app, content_data):
    with pytest.raises(InvariantViolation):
        create_page(page_type=LANDING, data={"contents": [content_data(LANDING, url_alias="")]})


def test_invalid_language_rolls_back_nothing_written(app, content_data):
    with pytest.raises(InvariantViolation):
        create_page(page_type=FAQ, data={"contents": [content_data(language="fr")]})

    assert FaqContent.query.count() == 0
    assert CategoryType.query.count() == 0


def test_categories_are_shared_between_pages(make_page):
    make_page()
    make_page(url="/faq/second", url_alias="second")

    # (type, language, name) resolves to the same row every time
    assert Category.query.filter_by(name="Account").count() == 1
    assert CategoryType.query.filter_by(type_code="faq").count() == 1


def test_create_page_stores_bad_component_nowhere(app, content_data):
    with pytest.raises(InvariantViolation):
        create_page(
            page_type=FAQ,
            data={"contents": [content_data(components=[{"props": {}}])]},
        )

    assert db.session.query(FaqContent).count() == 0
