import copy

import pytest
from flask_jwt_extended import create_access_token

from pagecms import create_app
from pagecms.extensions import db
from pagecms.application.cms.page_types import FAQ, LANDING, PARTNER


@pytest.fixture
def app():
    app = create_app("testing")

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def notifications(app):
    """Capture approval e-mails instead of logging them."""
    sent = []

    def notifier(template, recipients, data):
        sent.append({"template": template, "recipients": recipients, "data": data})

    app.extensions["cms_notifier"] = notifier
    return sent


def _headers(app, identity, role):
    token = create_access_token(identity=identity, additional_claims={"role": role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(app):
    return _headers(app, "editor@example.com", "editor")


@pytest.fixture
def admin_headers(app):
    return _headers(app, "admin@example.com", "admin")


@pytest.fixture
def viewer_headers(app):
    return _headers(app, "viewer@example.com", "viewer")


FAQ_CONTENT = {
    "language": "en",
    "title": "How do I reset my password?",
    "url": "/faq/reset-password",
    "url_alias": "reset-password",
    "html_input": "<p>Use the forgot password link.</p>",
    "workflow_status": "Draft",
    "meta_tag": {
        "title": "Reset password",
        "description": "Steps to reset a password",
        "cover_image": "https://cdn.example.com/reset.png",
    },
    "components": [
        {"type": "LeadComponent", "props": {"text": "Forgot it?"}},
        {"type": "Divider", "props": {}},
    ],
    "categories": [
        {"type_code": "faq", "name": "Account"},
        {"type_code": "category-keywords", "name": "password"},
    ],
    "revision": {"author": "alice", "message": "first draft"},
}

LANDING_CONTENT = {
    "language": "en",
    "title": "Summer campaign",
    "url_alias": "summer-campaign",
    "workflow_status": "Draft",
    "approval_email": [],
    "components": [{"type": "Box", "props": {"color": "blue"}}],
    "categories": [{"type_code": "landing", "name": "Campaign"}],
    "revision": {"author": "alice", "message": "landing draft"},
}

PARTNER_CONTENT = {
    "language": "en",
    "title": "Acme case study",
    "url": "/partners/acme",
    "url_alias": "acme",
    "company_name": "Acme",
    "challenges": "Legacy billing",
    "solutions": "New billing",
    "results": "Faster invoices",
    "is_recommended": True,
    "approval_email": [],
    "categories": [{"type_code": "partner", "name": "Finance"}],
    "revision": {"author": "alice", "message": "partner draft"},
}

CONTENT_BY_TYPE = {
    FAQ.code: FAQ_CONTENT,
    LANDING.code: LANDING_CONTENT,
    PARTNER.code: PARTNER_CONTENT,
}


@pytest.fixture
def content_data():
    """Fresh copy of a valid content payload, with optional overrides."""

    def build(page_type=FAQ, **overrides):
        data = copy.deepcopy(CONTENT_BY_TYPE[page_type.code])
        data.update(overrides)
        return data

    return build


@pytest.fixture
def make_page(app, content_data):
    from pagecms.application.cms.create_page import create_page

    def build(page_type=FAQ, **overrides):
        return create_page(
            page_type=page_type,
            data={"contents": [content_data(page_type, **overrides)]},
        )

    return build
