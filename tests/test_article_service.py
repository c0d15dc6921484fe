"""Tests for article rendering, slug rules and the ArticleService lifecycle."""

from types import SimpleNamespace

import pytest

from liteblog.exceptions import ArticleNotFoundError, InvalidSlugError, SlugExistsError
from liteblog.models.article import ARTICLE_STATUS_DRAFT, ARTICLE_STATUS_PUBLISHED
from liteblog.schemas.article import ArticleCreate, ArticleUpdate
from liteblog.services.article_service import (
    ArticleService,
    is_valid_slug,
    normalize_slug,
    render_article,
)
from liteblog.services.visibility_policy import Viewer
from tests.conftest import make_article, make_user

LONG_CONTENT = "Opening paragraph of the article.\n\n" + "Body text goes here. " * 50

USER = Viewer()
MEMBER = Viewer(is_member=True)
ADMIN = Viewer(is_admin=True)


def stored(visibility="member_full", content=LONG_CONTENT, **overrides):
    """An in-memory stand-in for an Article row."""
    fields = dict(
        id=1,
        title="Title",
        slug="title",
        content=content,
        author_id=7,
        author_email="author@example.com",
        visibility=visibility,
        preview_percentage=1,
        preview_min_chars=0,
        preview_smart_paragraph=True,
        status=ARTICLE_STATUS_PUBLISHED,
        published_at=None,
        created_at=None,
        updated_at=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


class TestRenderArticle:

    def test_public_article_in_full_for_guest(self):
        response = render_article(stored("public_full"), None)
        assert response.content == LONG_CONTENT
        assert response.is_preview is False

    def test_member_article_previewed_for_guest(self):
        response = render_article(stored("member_full"), None)
        assert response.is_preview is True
        assert response.content == "Opening paragraph of the article.\n\n"

    def test_member_article_previewed_for_plain_user(self):
        assert render_article(stored("member_full"), USER).is_preview is True

    @pytest.mark.parametrize("viewer", [MEMBER, ADMIN])
    def test_member_article_in_full_for_members_and_admins(self, viewer):
        response = render_article(stored("member_full"), viewer)
        assert response.is_preview is False
        assert response.content == LONG_CONTENT

    @pytest.mark.parametrize("viewer", [None, USER, MEMBER])
    def test_hidden_article_not_found_for_non_admins(self, viewer):
        with pytest.raises(ArticleNotFoundError) as exc_info:
            render_article(stored("hidden"), viewer)
        assert exc_info.value.message == "Article not found"

    def test_hidden_article_in_full_for_admin(self):
        response = render_article(stored("hidden"), ADMIN)
        assert response.is_preview is False
        assert response.content == LONG_CONTENT

    @pytest.mark.parametrize("viewer", [None, USER, MEMBER])
    def test_unrecognised_visibility_not_found_for_non_admins(self, viewer):
        with pytest.raises(ArticleNotFoundError):
            render_article(stored("premium"), viewer)

    def test_unrecognised_visibility_previewed_for_admin(self):
        response = render_article(stored("premium"), ADMIN)
        assert response.is_preview is True
        assert response.content == "Opening paragraph of the article.\n\n"
        assert response.visibility == "premium"

    def test_short_content_preview_is_whole_content(self):
        response = render_article(stored("member_full", content="Tiny.", preview_min_chars=200), None)
        assert response.is_preview is True
        assert response.content == "Tiny."

    def test_carries_metadata(self):
        response = render_article(stored("public_full"), None)
        assert response.author_email == "author@example.com"
        assert response.visibility == "public_full"
        assert response.preview_percentage == 1


class TestSlugRules:

    @pytest.mark.parametrize("raw,expected", [
        ("Hello World", "hello-world"),
        ("  Trim Me  ", "trim-me"),
        ("a---b", "a-b"),
        ("-edge-", "edge"),
        ("multi   space", "multi-space"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_slug(raw) == expected

    @pytest.mark.parametrize("slug,valid", [
        ("hello-world", True),
        ("abc123", True),
        ("", False),
        ("under_score", False),
        ("émoji", False),
        ("trailing-", False),
    ])
    def test_validity(self, slug, valid):
        assert is_valid_slug(slug) is valid


class TestArticleService:

    def test_create_is_draft_with_normalized_slug(self, db):
        author = make_user(db, email="a@example.com", roles=("admin",))
        article = ArticleService(db).create_article(
            ArticleCreate(title="Hello", slug="Hello World", content="Body"), author_id=author.id
        )
        assert article.slug == "hello-world"
        assert article.status == ARTICLE_STATUS_DRAFT
        assert article.published_at is None
        assert article.visibility == "member_full"
        assert (article.preview_percentage, article.preview_min_chars) == (30, 200)

    def test_create_rejects_invalid_slug(self, db):
        author = make_user(db, roles=("admin",))
        with pytest.raises(InvalidSlugError):
            ArticleService(db).create_article(
                ArticleCreate(title="Bad", slug="bad_slug!", content="Body"), author_id=author.id
            )

    def test_create_rejects_duplicate_slug(self, db):
        author = make_user(db, roles=("admin",))
        make_article(db, author, slug="taken")
        with pytest.raises(SlugExistsError):
            ArticleService(db).create_article(
                ArticleCreate(title="Again", slug="Taken", content="Body"), author_id=author.id
            )

    def test_update_keeps_own_slug(self, db):
        author = make_user(db, roles=("admin",))
        article = make_article(db, author, slug="mine")
        updated = ArticleService(db).update_article(
            article.id, ArticleUpdate(title="New title", slug="mine", content="New body")
        )
        assert updated.title == "New title"
        assert updated.content == "New body"

    def test_update_rejects_other_articles_slug(self, db):
        author = make_user(db, roles=("admin",))
        make_article(db, author, slug="first")
        second = make_article(db, author, slug="second")
        with pytest.raises(SlugExistsError):
            ArticleService(db).update_article(
                second.id, ArticleUpdate(title="x", slug="first", content="x")
            )

    def test_publish_and_unpublish(self, db):
        author = make_user(db, roles=("admin",))
        article = make_article(db, author, slug="cycle", published=False)
        service = ArticleService(db)

        published = service.publish_article(article.id)
        assert published.status == ARTICLE_STATUS_PUBLISHED
        assert published.published_at is not None

        assert service.unpublish_article(article.id).status == ARTICLE_STATUS_DRAFT

    def test_deleted_article_is_gone(self, db):
        author = make_user(db, roles=("admin",))
        article = make_article(db, author, slug="gone")
        service = ArticleService(db)
        service.delete_article(article.id)
        with pytest.raises(ArticleNotFoundError):
            service.get_article(article.id)
        with pytest.raises(ArticleNotFoundError):
            service.get_article_by_slug("gone", ADMIN)

    def test_draft_hidden_from_readers_visible_to_admin(self, db):
        author = make_user(db, roles=("admin",))
        make_article(db, author, slug="draft", published=False)
        service = ArticleService(db)
        with pytest.raises(ArticleNotFoundError):
            service.get_article_by_slug("draft", MEMBER)
        assert service.get_article_by_slug("draft", ADMIN).slug == "draft"

    def test_list_published_excludes_hidden_and_drafts(self, db):
        author = make_user(db, roles=("admin",))
        make_article(db, author, slug="visible", visibility="public_full")
        make_article(db, author, slug="members", visibility="member_full")
        make_article(db, author, slug="secret", visibility="hidden")
        make_article(db, author, slug="draft", published=False)

        items, total = ArticleService(db).list_published(page=1, page_size=10)
        assert total == 2
        assert {i.slug for i in items} == {"visible", "members"}

    def test_list_all_includes_everything(self, db):
        author = make_user(db, roles=("admin",))
        make_article(db, author, slug="one", visibility="hidden")
        make_article(db, author, slug="two", published=False)
        items, total = ArticleService(db).list_all(page=1, page_size=10)
        assert total == 2

    def test_list_items_carry_excerpt(self, db):
        author = make_user(db, roles=("admin",))
        make_article(db, author, slug="long", content="# Title\n\n" + "word " * 100)
        items, _ = ArticleService(db).list_published(page=1, page_size=10)
        assert items[0].excerpt.startswith("Title word")
        assert items[0].excerpt.endswith("...")
