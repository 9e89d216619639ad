"""Integration tests for the article management endpoints."""

import pytest

from fakes import EDITOR_HEADERS

ARTICLE = {
    "title": "Buzzer beater",
    "content": "Won it at the horn.",
    "category": "Basketball",
    "author_name": "Jo Writer",
    "image_url": "",
    "score": "88 - 87",
}


@pytest.mark.asyncio
async def test_admin_requires_sign_in(api, gateway):
    async with api as client:
        listed = await client.get("/api/v1/admin/articles")
        created = await client.post("/api/v1/admin/articles", json=ARTICLE)

    assert listed.status_code == 401
    assert created.status_code == 401
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_create_then_list_includes_new_article(api, gateway):
    async with api as client:
        created = await client.post("/api/v1/admin/articles", json=ARTICLE, headers=EDITOR_HEADERS)
        listed = await client.get("/api/v1/admin/articles", headers=EDITOR_HEADERS)

    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "published"
    assert body["image_url"] is None
    assert gateway.calls_for("insert", "articles") == 1
    assert [a["id"] for a in listed.json()] == [body["id"]]


@pytest.mark.asyncio
async def test_create_with_empty_title_sends_nothing(api, gateway):
    async with api as client:
        response = await client.post(
            "/api/v1/admin/articles", json={**ARTICLE, "title": ""}, headers=EDITOR_HEADERS
        )
    assert response.status_code == 422
    assert gateway.calls_for("insert") == 0


@pytest.mark.asyncio
async def test_admin_list_includes_drafts(api, seed_article):
    seed_article(status="draft")
    seed_article()
    async with api as client:
        response = await client.get("/api/v1/admin/articles", headers=EDITOR_HEADERS)
    assert sorted(a["status"] for a in response.json()) == ["draft", "published"]


@pytest.mark.asyncio
async def test_delete_needs_confirmation(api, gateway, seed_article):
    row = seed_article()
    async with api as client:
        refused = await client.delete(f"/api/v1/admin/articles/{row['id']}", headers=EDITOR_HEADERS)
        deleted = await client.delete(
            f"/api/v1/admin/articles/{row['id']}", params={"confirm": "true"}, headers=EDITOR_HEADERS
        )

    assert refused.status_code == 400
    assert deleted.status_code == 204
    assert gateway.tables["articles"] == []


@pytest.mark.asyncio
async def test_create_store_failure_is_502(api, gateway):
    gateway.fail("insert", "articles")
    async with api as client:
        response = await client.post("/api/v1/admin/articles", json=ARTICLE, headers=EDITOR_HEADERS)
    assert response.status_code == 502
