"""
Tests for the blog service and HTTP routes.
"""
import asyncio

import pytest

from devhub_api.app.schemas.blog import BlogCreate, BlogQuery
from devhub_api.app.services.blog_service import BlogService


def create_post(**fields):
    data = {"title": "Untitled", "slug": fields.get("slug", "untitled"), "content": ""}
    data.update(fields)
    return asyncio.run(BlogService.create_blog(BlogCreate(**data)))


def list_posts(**filters):
    return asyncio.run(BlogService.list_blogs(BlogQuery(**filters)))


@pytest.fixture
def posts(database):
    """A small corpus covering every filter."""
    return [
        create_post(
            title="Learning NestJS",
            slug="learning-nestjs",
            content="Modules, controllers and providers.",
            excerpt="An intro",
            published=True,
            author="Alice Smith",
            tags=["nestjs", "typescript"],
        ),
        create_post(
            title="Cooking pasta",
            slug="cooking-pasta",
            content="Boil water. Then read the NESTJS docs while waiting.",
            published=False,
            author="Bob",
        ),
        create_post(
            title="Gardening",
            slug="gardening",
            content="Tomatoes need sun.",
            excerpt="Backyard notes on nestjs-free living",
            published=True,
            author="alice cooper",
        ),
        create_post(
            title="Rust ownership",
            slug="rust-ownership",
            content="Borrowing rules.",
            published=True,
            author=None,
        ),
    ]


class TestListBlogs:
    """Test suite for BlogService.list_blogs."""

    def test_empty_store(self, database):
        result = list_posts()
        assert result.data == []
        assert result.total == 0
        assert result.page == 1
        assert result.limit == 10
        assert result.total_pages == 0

    def test_list_projection_has_no_content(self, posts):
        result = list_posts()
        assert result.total == 4
        for item in result.data:
            assert not hasattr(item, "content")
            assert "content" not in item.model_dump(by_alias=True)

    def test_search_matches_title_content_or_excerpt(self, posts):
        result = list_posts(search="nestjs")
        assert {item.slug for item in result.data} == {"learning-nestjs", "cooking-pasta", "gardening"}
        assert result.total == 3

    def test_search_and_published_are_combined(self, posts):
        result = list_posts(search="nestjs", published=True)
        assert {item.slug for item in result.data} == {"learning-nestjs", "gardening"}

    def test_published_false(self, posts):
        result = list_posts(published=False)
        assert [item.slug for item in result.data] == ["cooking-pasta"]

    def test_author_substring_case_insensitive(self, posts):
        result = list_posts(author="ALICE")
        assert {item.slug for item in result.data} == {"learning-nestjs", "gardening"}

    def test_all_filters_combined(self, posts):
        result = list_posts(search="nestjs", published=True, author="smith")
        assert [item.slug for item in result.data] == ["learning-nestjs"]

    def test_wildcards_in_search_are_literal(self, posts):
        assert list_posts(search="%").total == 0
        assert list_posts(search="_").total == 0

    def test_non_ascii_matching_is_case_insensitive(self, database):
        """Accented and non-Latin letters fold the same way as ASCII ones."""
        create_post(title="Über Python", slug="uber-python", author="Élodie", content="Привет, МИР")
        for filters in [
            {"search": "über"},
            {"search": "ÜBER"},
            {"search": "мир"},
            {"author": "élodie"},
            {"author": "ÉLODIE"},
        ]:
            result = list_posts(**filters)
            assert result.total == 1, filters
            assert result.data[0].slug == "uber-python"

    def test_pagination(self, posts):
        first = list_posts(page=1, limit=3)
        second = list_posts(page=2, limit=3)
        assert len(first.data) == 3
        assert len(second.data) == 1
        assert first.total == second.total == 4
        assert first.total_pages == second.total_pages == 2
        slugs = {item.slug for item in first.data} | {item.slug for item in second.data}
        assert len(slugs) == 4

    def test_page_past_the_end(self, posts):
        result = list_posts(page=5, limit=3)
        assert result.data == []
        assert result.total == 4

    def test_tags_round_trip_in_order(self, posts):
        item = next(i for i in list_posts().data if i.slug == "learning-nestjs")
        assert item.tags == ["nestjs", "typescript"]


class TestGetBlog:
    """Test suite for detail lookups."""

    def test_get_by_id_includes_content(self, posts):
        blog = asyncio.run(BlogService.get_blog(posts[0].id))
        assert blog is not None
        assert blog.title == "Learning NestJS"
        assert blog.content == "Modules, controllers and providers."

    def test_get_missing_returns_none(self, database):
        assert asyncio.run(BlogService.get_blog("does-not-exist")) is None

    def test_get_by_slug(self, posts):
        blog = asyncio.run(BlogService.get_blog_by_slug("gardening"))
        assert blog.id == posts[2].id
        assert blog.content == "Tomatoes need sun."

    def test_duplicate_slug_rejected(self, posts):
        with pytest.raises(ValueError, match="already exists"):
            create_post(title="Again", slug="gardening")


class TestBlogRoutes:
    """Test suite for the /blogs HTTP routes."""

    def test_empty_list(self, client):
        response = client.get("/blogs")
        assert response.status_code == 200
        assert response.json() == {"data": [], "total": 0, "page": 1, "limit": 10, "totalPages": 0}

    def test_list_without_content(self, client, posts):
        body = client.get("/blogs", params={"limit": 2}).json()
        assert body["total"] == 4
        assert body["totalPages"] == 2
        assert len(body["data"]) == 2
        for item in body["data"]:
            assert "content" not in item
            assert "createdAt" in item
            assert "updatedAt" in item

    def test_list_filters(self, client, posts):
        body = client.get("/blogs", params={"search": "NestJS", "published": "true"}).json()
        assert {item["slug"] for item in body["data"]} == {"learning-nestjs", "gardening"}

    def test_list_rejects_bad_pagination(self, client):
        assert client.get("/blogs", params={"page": 0}).status_code == 422
        assert client.get("/blogs", params={"limit": 0}).status_code == 422

    def test_detail(self, client, posts):
        response = client.get(f"/blogs/{posts[0].id}")
        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "Modules, controllers and providers."
        assert body["tags"] == ["nestjs", "typescript"]

    def test_detail_not_found(self, client, posts):
        response = client.get("/blogs/nonexistent-id")
        assert response.status_code == 404
        assert response.json()["detail"] == "Blog post not found"

    def test_detail_by_slug(self, client, posts):
        response = client.get("/blogs/slug/rust-ownership")
        assert response.status_code == 200
        assert response.json()["content"] == "Borrowing rules."
        assert client.get("/blogs/slug/missing").status_code == 404

    def test_store_failure_is_internal_error(self, client, monkeypatch):
        async def broken(query):
            raise RuntimeError("disk on fire")

        monkeypatch.setattr(BlogService, "list_blogs", broken)
        response = client.get("/blogs")
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to fetch blog list"


class TestHealth:
    """Test suite for GET /health."""

    def test_healthy(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["database"] == "healthy"
        assert body["timestamp"]
