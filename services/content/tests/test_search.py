from datetime import datetime, timezone

import pytest

from shared.schemas.content import Article, PageUpdate


@pytest.mark.asyncio
async def test_blank_query_returns_nothing(service):
    assert await service.search("") == []
    assert await service.search("   ") == []


@pytest.mark.asyncio
async def test_blank_query_can_enumerate_everything(service):
    results = await service.search("", enumerate_all=True)
    articles = [r for r in results if r.type == "article"]
    pages = [r for r in results if r.type == "page"]
    assert len(articles) == 4
    assert len(pages) == 11
    assert results[: len(articles)] == articles


@pytest.mark.asyncio
async def test_matches_title_case_insensitively(service):
    results = await service.search("VARSITY")
    assert [(r.type, r.url) for r in results] == [("article", "/article/varsity-finals")]
    assert results[0].description == (await service.get_article("103")).excerpt


@pytest.mark.asyncio
async def test_matches_article_content(service):
    results = await service.search("reprehenderit")
    assert "/article/light-shines-brighter" in [r.url for r in results]


@pytest.mark.asyncio
async def test_unpublished_articles_are_not_found(service):
    assert await service.search("canteen") == []


@pytest.mark.asyncio
async def test_articles_come_before_pages(service):
    await service.articles.insert(
        Article(
            id="s1",
            title="Sports Day Recap",
            slug="sports-day-recap",
            content="Relays and races.",
            author_id="3",
            author_name="John Head",
            category_slug="sports",
            published_at=datetime.now(timezone.utc),
            status="published",
        )
    )
    results = await service.search("sports")
    assert [(r.type, r.url) for r in results] == [
        ("article", "/article/sports-day-recap"),
        ("page", "/category/sports"),
    ]


@pytest.mark.asyncio
async def test_page_urls_and_descriptions(service):
    (category,) = await service.search("Sci-Tech")
    assert category.url == "/category/sci-tech"
    assert category.description == "Science and Technology."

    (static,) = await service.search("Gallery")
    assert static.url == "/gallery"

    await service.update_page("10", PageUpdate(description=None))
    (about,) = await service.search("About")
    assert about.description == "Page"


@pytest.mark.asyncio
async def test_hidden_pages_are_not_found(service):
    await service.update_page("11", PageUpdate(is_visible=False))
    assert await service.search("Contact") == []
