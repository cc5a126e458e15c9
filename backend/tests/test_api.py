from datetime import timedelta

from pagecms.extensions import db
from pagecms.models import FaqContent


def _create(client, headers, content_data, **overrides):
    data = content_data(**overrides)
    data.pop("revision")
    return client.post("/api/v1/cms/faq/pages", json={"content": data}, headers=headers)


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "ok"


def test_openapi_document_is_served(client):
    response = client.get("/openapi/cms.yaml")

    assert response.status_code == 200
    assert b"openapi: 3.0.3" in response.data


def test_requires_token(client):
    assert client.get("/api/v1/cms/faq/pages").status_code == 401


def test_viewer_cannot_write(client, viewer_headers, content_data):
    response = _create(client, viewer_headers, content_data)

    assert response.status_code == 403
    assert client.get("/api/v1/cms/faq/pages", headers=viewer_headers).status_code == 200


def test_unknown_page_type(client, editor_headers):
    response = client.get("/api/v1/cms/blog/pages", headers=editor_headers)

    assert response.status_code == 404
    assert response.get_json()["error"] == "NotFound"


def test_create_and_read_page(client, editor_headers, content_data):
    response = _create(client, editor_headers, content_data)

    assert response.status_code == 201
    body = response.get_json()
    content = body["contents"][0]
    assert content["mode"] == "Published"
    assert content["revision"]["author"] == "editor@example.com"
    assert [c["position"] for c in content["components"]] == [1, 2]

    page = client.get(f"/api/v1/cms/faq/pages/{body['id']}", headers=editor_headers)
    assert page.status_code == 200
    assert page.get_json()["contents"][0]["id"] == content["id"]

    listing = client.get("/api/v1/cms/faq/pages?title=reset", headers=editor_headers).get_json()
    assert listing["pagination"]["total"] == 1
    assert listing["items"][0]["id"] == body["id"]


def test_validation_errors_are_json(client, editor_headers, content_data):
    _create(client, editor_headers, content_data)

    duplicate = _create(client, editor_headers, content_data)
    assert duplicate.status_code == 400
    assert duplicate.get_json()["error"] == "DuplicateURL"

    missing = client.post("/api/v1/cms/faq/pages", json={}, headers=editor_headers)
    assert missing.status_code == 400
    assert missing.get_json()["error"] == "InvariantViolation"

    bad_id = client.get("/api/v1/cms/faq/pages/123", headers=editor_headers)
    assert bad_id.status_code == 400


def test_update_and_conflict(client, editor_headers, content_data):
    page = _create(client, editor_headers, content_data).get_json()
    first_id = page["contents"][0]["id"]

    payload = content_data(title="v2")
    updated = client.put(f"/api/v1/cms/faq/contents/{first_id}", json=payload, headers=editor_headers)
    assert updated.status_code == 200
    assert updated.get_json()["title"] == "v2"

    stale = client.put(f"/api/v1/cms/faq/contents/{first_id}", json=payload, headers=editor_headers)
    assert stale.status_code == 409
    assert stale.get_json()["error"] == "ConflictError"

    history = client.get(
        f"/api/v1/cms/faq/pages/{page['id']}?history=true", headers=editor_headers
    ).get_json()
    assert sorted(c["mode"] for c in history["contents"]) == ["Histories", "Published"]


def test_if_unmodified_since(client, editor_headers, content_data):
    page = _create(client, editor_headers, content_data).get_json()
    content_id = page["contents"][0]["id"]
    stored = db.session.get(FaqContent, content_id).page.updated_at

    too_old = (stored - timedelta(days=1)).strftime("%a, %d %b %Y %H:%M:%S GMT")
    response = client.put(
        f"/api/v1/cms/faq/contents/{content_id}",
        json=content_data(title="late"),
        headers={**editor_headers, "If-Unmodified-Since": too_old},
    )
    assert response.status_code == 409

    fresh = (stored + timedelta(days=1)).strftime("%a, %d %b %Y %H:%M:%S GMT")
    response = client.put(
        f"/api/v1/cms/faq/contents/{content_id}",
        json=content_data(title="on time"),
        headers={**editor_headers, "If-Unmodified-Since": fresh},
    )
    assert response.status_code == 200

    garbage = client.delete(
        f"/api/v1/cms/faq/pages/{page['id']}",
        headers={**editor_headers, "If-Unmodified-Since": "not a date"},
    )
    assert garbage.status_code == 400


def test_preview_revisions_and_revert(client, editor_headers, content_data):
    page = _create(client, editor_headers, content_data).get_json()
    page_id = page["id"]
    first_id = page["contents"][0]["id"]

    client.put(
        f"/api/v1/cms/faq/contents/{first_id}",
        json=content_data(title="v2"),
        headers=editor_headers,
    )

    preview = client.post(
        f"/api/v1/cms/faq/pages/{page_id}/preview",
        json=content_data(title="draft"),
        headers=editor_headers,
    )
    assert preview.status_code == 200
    assert preview.get_json()["preview_url"].startswith("http://web.test/preview/en/faq?id=")

    revisions = client.get(
        f"/api/v1/cms/faq/pages/{page_id}/revisions?language=en", headers=editor_headers
    ).get_json()
    assert len(revisions) == 2
    oldest = revisions[-1]
    assert oldest["content_id"] == first_id

    reverted = client.post(
        f"/api/v1/cms/faq/revisions/{oldest['id']}/revert",
        json={"revision": {"message": "back to v1"}},
        headers=editor_headers,
    )
    assert reverted.status_code == 201
    assert reverted.get_json()["title"] == "How do I reset my password?"

    latest = client.get(
        f"/api/v1/cms/faq/pages/{page_id}/contents/latest?language=en", headers=editor_headers
    ).get_json()
    assert latest["id"] == reverted.get_json()["id"]


def test_duplicate_and_delete_routes(client, editor_headers, content_data):
    page = _create(client, editor_headers, content_data).get_json()
    page_id = page["id"]
    content_id = page["contents"][0]["id"]

    th = client.post(
        f"/api/v1/cms/faq/contents/{content_id}/duplicate-language", json={}, headers=editor_headers
    )
    assert th.status_code == 201
    assert th.get_json()["language"] == "th"

    copy = client.post(f"/api/v1/cms/faq/pages/{page_id}/duplicate", headers=editor_headers)
    assert copy.status_code == 201
    assert len(copy.get_json()["contents"]) == 2

    categories = client.get(
        f"/api/v1/cms/faq/pages/{page_id}/categories?type_code=faq&language=th",
        headers=editor_headers,
    ).get_json()
    assert [c["name"] for c in categories] == ["Account"]

    deleted = client.delete(
        f"/api/v1/cms/faq/pages/{page_id}/contents?language=th&mode=Published",
        headers=editor_headers,
    )
    assert deleted.status_code == 200

    assert client.delete(f"/api/v1/cms/faq/pages/{page_id}", headers=editor_headers).status_code == 200
    assert client.get(f"/api/v1/cms/faq/pages/{page_id}", headers=editor_headers).status_code == 404


def test_category_type_routes(client, admin_headers, editor_headers, content_data):
    created = client.post(
        "/api/v1/cms/category-types", json={"type_code": "news"}, headers=admin_headers
    )
    assert created.status_code == 201

    forbidden = client.post(
        "/api/v1/cms/category-types", json={"type_code": "other"}, headers=editor_headers
    )
    assert forbidden.status_code == 403

    _create(client, editor_headers, content_data)
    types = client.get("/api/v1/cms/category-types", headers=editor_headers).get_json()
    faq_type = next(t for t in types if t["type_code"] == "faq")

    in_use = client.delete(f"/api/v1/cms/category-types/{faq_type['id']}", headers=admin_headers)
    assert in_use.status_code == 409
    assert in_use.get_json()["error"] == "ReferentialError"

    unused = client.delete(
        f"/api/v1/cms/category-types/{created.get_json()['id']}", headers=admin_headers
    )
    assert unused.status_code == 200

    listing = client.get("/api/v1/cms/categories?type_code=faq", headers=editor_headers).get_json()
    assert [c["name"] for c in listing] == ["Account"]


def test_null_author_defaults_to_caller(client, editor_headers, content_data):
    data = content_data()
    data["revision"] = {"author": None, "message": "first"}

    response = client.post("/api/v1/cms/faq/pages", json={"content": data}, headers=editor_headers)

    assert response.status_code == 201
    assert response.get_json()["contents"][0]["revision"]["author"] == "editor@example.com"


def test_page_categories_route_requires_type_code(client, editor_headers, content_data):
    page = _create(client, editor_headers, content_data).get_json()

    response = client.get(
        f"/api/v1/cms/faq/pages/{page['id']}/categories?language=en", headers=editor_headers
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "InvariantViolation"
