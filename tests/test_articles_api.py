"""API tests for /api/articles and /api/admin/articles."""

from datetime import datetime, timedelta, timezone

from liteblog.core.config import settings
from tests.conftest import article_payload, auth_headers, make_article, make_user

LONG = "Intro paragraph for everyone.\n\n" + "Members only text. " * 60


def _member_article(db, admin, slug="members-only"):
    return make_article(
        db, admin, slug=slug, content=LONG, visibility="member_full",
        preview_percentage=1, preview_min_chars=0,
    )


class TestReadArticle:

    def test_guest_gets_preview_of_member_article(self, client, db, admin):
        _member_article(db, admin)
        resp = client.get("/api/articles/members-only")
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_preview"] is True
        assert data["content"] == "Intro paragraph for everyone.\n\n"

    def test_member_role_gets_full_content(self, client, db, admin):
        _member_article(db, admin)
        member = make_user(db, email="m@example.com", roles=("user", "member"))
        data = client.get("/api/articles/members-only", headers=auth_headers(member)).json()
        assert data["is_preview"] is False
        assert data["content"] == LONG

    def test_unexpired_membership_gets_full_content(self, client, db, admin):
        _member_article(db, admin)
        user = make_user(
            db, email="paid@example.com",
            member_expire_at=datetime.now(timezone.utc) + timedelta(days=30),
        )
        data = client.get("/api/articles/members-only", headers=auth_headers(user)).json()
        assert data["is_preview"] is False

    def test_expired_membership_gets_preview(self, client, db, admin):
        _member_article(db, admin)
        user = make_user(
            db, email="lapsed@example.com",
            member_expire_at=datetime.now(timezone.utc) - timedelta(days=1),
        )
        data = client.get("/api/articles/members-only", headers=auth_headers(user)).json()
        assert data["is_preview"] is True

    def test_cookie_token_is_accepted(self, client, db, admin):
        _member_article(db, admin)
        member = make_user(db, email="m@example.com", roles=("member",))
        token = auth_headers(member)["Authorization"].split(" ", 1)[1]
        client.cookies.set(settings.auth_cookie_name, token)
        assert client.get("/api/articles/members-only").json()["is_preview"] is False

    def test_invalid_token_is_treated_as_guest(self, client, db, admin):
        _member_article(db, admin)
        resp = client.get("/api/articles/members-only", headers={"Authorization": "Bearer garbage"})
        assert resp.status_code == 200
        assert resp.json()["is_preview"] is True

    def test_hidden_article_looks_missing(self, client, db, admin):
        make_article(db, admin, slug="secret", visibility="hidden")
        hidden = client.get("/api/articles/secret")
        missing = client.get("/api/articles/no-such-article")
        assert hidden.status_code == missing.status_code == 404
        assert hidden.json()["error"] == missing.json()["error"] == "ARTICLE_NOT_FOUND"
        assert hidden.json()["message"] == missing.json()["message"]

    def test_admin_reads_hidden_article(self, client, db, admin, admin_headers):
        make_article(db, admin, slug="secret", visibility="hidden")
        resp = client.get("/api/articles/secret", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["is_preview"] is False

    def test_draft_not_found_for_reader(self, client, db, admin):
        make_article(db, admin, slug="wip", published=False)
        assert client.get("/api/articles/wip").status_code == 404


class TestListArticles:

    def test_lists_published_visible_articles(self, client, db, admin):
        make_article(db, admin, slug="a", visibility="public_full")
        make_article(db, admin, slug="b", visibility="member_full")
        make_article(db, admin, slug="c", visibility="hidden")
        make_article(db, admin, slug="d", published=False)

        data = client.get("/api/articles").json()
        assert data["total"] == 2
        assert {a["slug"] for a in data["articles"]} == {"a", "b"}
        assert "content" not in data["articles"][0]
        assert "excerpt" in data["articles"][0]

    def test_pagination(self, client, db, admin):
        for i in range(3):
            make_article(db, admin, slug=f"post-{i}")
        data = client.get("/api/articles", params={"page": 2, "page_size": 2}).json()
        assert data["page"] == 2
        assert data["page_size"] == 2
        assert data["total"] == 3
        assert data["total_pages"] == 2
        assert len(data["articles"]) == 1

    def test_out_of_range_paging_falls_back_to_defaults(self, client):
        data = client.get("/api/articles", params={"page": 0, "page_size": 500}).json()
        assert data["page"] == 1
        assert data["page_size"] == 10


class TestAdminArticles:

    def test_create_requires_admin(self, client, db):
        user = make_user(db)
        assert client.post("/api/admin/articles", json=article_payload()).status_code == 401
        resp = client.post("/api/admin/articles", json=article_payload(), headers=auth_headers(user))
        assert resp.status_code == 403

    def test_create_returns_draft(self, client, admin_headers):
        resp = client.post(
            "/api/admin/articles", json=article_payload(slug="My First Post"), headers=admin_headers
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["slug"] == "my-first-post"
        assert data["status"] == 0
        assert data["is_preview"] is False

    def test_create_defaults_preview_settings(self, client, admin_headers):
        payload = article_payload()
        del payload["visibility"]
        data = client.post("/api/admin/articles", json=payload, headers=admin_headers).json()
        assert data["visibility"] == "member_full"
        assert data["preview_percentage"] == 30
        assert data["preview_min_chars"] == 200
        assert data["preview_smart_paragraph"] is True

    def test_create_rejects_bad_visibility(self, client, admin_headers):
        resp = client.post(
            "/api/admin/articles", json=article_payload(visibility="secret"), headers=admin_headers
        )
        assert resp.status_code == 422

    def test_create_duplicate_slug_conflicts(self, client, admin_headers):
        client.post("/api/admin/articles", json=article_payload(), headers=admin_headers)
        resp = client.post("/api/admin/articles", json=article_payload(), headers=admin_headers)
        assert resp.status_code == 409
        assert resp.json()["error"] == "SLUG_EXISTS"

    def test_invalid_slug_rejected(self, client, admin_headers):
        resp = client.post(
            "/api/admin/articles", json=article_payload(slug="no_underscores"), headers=admin_headers
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == "INVALID_SLUG"

    def test_publish_makes_article_public(self, client, admin_headers):
        article_id = client.post(
            "/api/admin/articles", json=article_payload(), headers=admin_headers
        ).json()["id"]
        assert client.get("/api/articles/test-article").status_code == 404

        resp = client.post(f"/api/admin/articles/{article_id}/publish", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == 1
        assert resp.json()["published_at"] is not None
        assert client.get("/api/articles/test-article").status_code == 200

        client.post(f"/api/admin/articles/{article_id}/unpublish", headers=admin_headers)
        assert client.get("/api/articles/test-article").status_code == 404

    def test_update(self, client, admin_headers):
        article_id = client.post(
            "/api/admin/articles", json=article_payload(), headers=admin_headers
        ).json()["id"]
        resp = client.put(
            f"/api/admin/articles/{article_id}",
            json=article_payload(title="Renamed", slug="renamed", visibility="hidden"),
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["slug"] == "renamed"
        assert resp.json()["visibility"] == "hidden"

    def test_admin_get_returns_unmasked_content(self, client, db, admin, admin_headers):
        article = _member_article(db, admin)
        data = client.get(f"/api/admin/articles/{article.id}", headers=admin_headers).json()
        assert data["content"] == LONG

    def test_delete(self, client, db, admin, admin_headers):
        article = make_article(db, admin, slug="bye")
        assert client.delete(f"/api/admin/articles/{article.id}", headers=admin_headers).status_code == 204
        assert client.get("/api/articles/bye").status_code == 404
        assert client.get(f"/api/admin/articles/{article.id}", headers=admin_headers).status_code == 404

    def test_admin_list_includes_drafts_and_hidden(self, client, db, admin, admin_headers):
        make_article(db, admin, slug="draft", published=False)
        make_article(db, admin, slug="hidden", visibility="hidden")
        data = client.get("/api/admin/articles", headers=admin_headers).json()
        assert data["total"] == 2
