import asyncio
import re
from datetime import datetime, timezone

import pytest

from services.content.app.defaults import default_articles
from services.content.app.exceptions import ValidationError
from services.content.app.repositories.articles import ArticleRepository, slugify
from shared.schemas.content import Article


@pytest.fixture
def articles(kv_store):
    return ArticleRepository(kv_store, default_articles)


def make_article(article_id: str, slug: str, **overrides) -> Article:
    fields = dict(
        id=article_id,
        title="Title",
        slug=slug,
        content="Body",
        author_id="4",
        author_name="Jimmy Pen",
        category_slug="news",
        published_at=datetime.now(timezone.utc),
        status="published",
    )
    fields.update(overrides)
    return Article(**fields)


@pytest.mark.parametrize(
    "title,expected",
    [
        ("Hello, World! Test", "hello-world-test"),
        ("  --Leading and trailing--  ", "leading-and-trailing"),
        ("Grade 12 Wins!!!", "grade-12-wins"),
        ("Ünïcode Café", "n-code-caf"),
    ],
)
def test_slugify(title, expected):
    assert slugify(title) == expected


def test_slugify_only_emits_safe_characters():
    for title in ["A  B", "x/y\\z", "!!!Wow???", "Tab\tSeparated"]:
        slug = slugify(title)
        assert re.fullmatch(r"[a-z0-9]+(-[a-z0-9]+)*", slug)


@pytest.mark.asyncio
async def test_list_published_is_newest_first_and_excludes_unpublished(articles):
    published = await articles.list_published()
    assert [a.id for a in published] == ["101", "102", "103", "104"]
    assert all(a.status == "published" for a in published)


@pytest.mark.asyncio
async def test_list_published_by_category(articles):
    sports = await articles.list_published("sports")
    assert [a.slug for a in sports] == ["varsity-finals"]


@pytest.mark.asyncio
async def test_list_all_includes_every_status(articles):
    statuses = {a.status for a in await articles.list_all()}
    assert statuses == {"published", "draft", "pending"}


@pytest.mark.asyncio
async def test_list_by_author_hides_archived_unless_asked(articles):
    await articles.insert(make_article("a1", "old-piece", status="archived"))
    mine = {a.id for a in await articles.list_by_author("4")}
    assert "a1" not in mine
    assert "a1" in {a.id for a in await articles.list_by_author("4", include_archived=True)}


@pytest.mark.asyncio
async def test_list_related_same_category_excluding_self(articles):
    await articles.insert(make_article("n1", "news-one"))
    await articles.insert(make_article("n2", "news-two", status="draft"))
    related = await articles.list_related("101", "news")
    assert [a.id for a in related] == ["n1"]


@pytest.mark.asyncio
async def test_list_by_slugs_for_bookmarks(articles):
    found = await articles.list_by_slugs(["varsity-finals", "missing", "new-science-lab"])
    assert {a.id for a in found} == {"103", "104"}


@pytest.mark.asyncio
async def test_insert_prepends_and_makes_slug_unique(articles):
    first = await articles.insert(make_article("n1", "varsity-finals"))
    second = await articles.insert(make_article("n2", "varsity-finals"))
    assert first.slug == "varsity-finals-2"
    assert second.slug == "varsity-finals-3"
    assert [a.id for a in await articles.list()][:2] == ["n2", "n1"]


@pytest.mark.asyncio
async def test_returned_articles_are_copies(articles):
    article = await articles.get("101")
    article.title = "Changed outside"
    article.reactions.like = 999
    stored = await articles.get("101")
    assert stored.title != "Changed outside"
    assert stored.reactions.like == 15


@pytest.mark.asyncio
async def test_update_keeps_counters_and_rejects_taken_slug(articles):
    article = await articles.get("103")
    article.title = "Varsity Team Wins Finals"
    article.views = 0
    previous, updated = await articles.update(article)
    assert previous.title == "Varsity Team Qualifies for Finals"
    assert updated.title == "Varsity Team Wins Finals"
    assert updated.views == previous.views

    article.slug = "new-science-lab"
    with pytest.raises(ValidationError):
        await articles.update(article)


@pytest.mark.asyncio
async def test_update_unknown_article(articles):
    assert await articles.update(make_article("nope", "nope")) is None


@pytest.mark.asyncio
async def test_increment_views_counts_exactly(articles):
    start = (await articles.get("103")).views
    for _ in range(5):
        await articles.increment_views("103")
    assert (await articles.get("103")).views == start + 5


@pytest.mark.asyncio
async def test_concurrent_increments_are_not_lost(articles):
    start = (await articles.get("104")).views
    await asyncio.gather(*(articles.increment_views("104") for _ in range(50)))
    assert (await articles.get("104")).views == start + 50


@pytest.mark.asyncio
async def test_increment_views_unknown_article(articles):
    assert await articles.increment_views("missing") is None


@pytest.mark.asyncio
async def test_react_counts_once_per_identity(articles):
    first = await articles.react("103", "love", identity="reader-1")
    again = await articles.react("103", "love", identity="reader-1")
    other = await articles.react("103", "love", identity="reader-2")
    assert first.love == 11
    assert again.love == 11
    assert other.love == 12


@pytest.mark.asyncio
async def test_anonymous_reactions_always_count(articles):
    await articles.react("103", "sad")
    result = await articles.react("103", "sad")
    assert result.sad == 2


@pytest.mark.asyncio
async def test_reaction_ledger_survives_restart(kv_store):
    first = ArticleRepository(kv_store, default_articles)
    await first.react("104", "insightful", identity="reader-1")

    restarted = ArticleRepository(kv_store, default_articles)
    result = await restarted.react("104", "insightful", identity="reader-1")
    assert result.insightful == 13


@pytest.mark.asyncio
async def test_reactions_may_repeat_when_uniqueness_is_off(kv_store):
    articles = ArticleRepository(kv_store, default_articles, unique_reactions=False)
    await articles.react("103", "like", identity="reader-1")
    result = await articles.react("103", "like", identity="reader-1")
    assert result.like == 52


@pytest.mark.asyncio
async def test_react_rejects_unknown_key_and_article(articles):
    with pytest.raises(ValueError):
        await articles.react("103", "angry")
    assert await articles.react("missing", "like") is None


@pytest.mark.asyncio
async def test_knowledge_base_lists_published_articles(articles):
    kb = await articles.knowledge_base()
    assert "TITLE: Varsity Team Qualifies for Finals" in kb
    assert "Draft: Canteen Prices Rising" not in kb
    assert kb.count("TITLE:") == 4


@pytest.mark.asyncio
async def test_knowledge_base_when_nothing_published(kv_store):
    articles = ArticleRepository(kv_store)
    assert await articles.knowledge_base() == "No articles published yet."


@pytest.mark.asyncio
async def test_knowledge_sections_one_per_published_article(articles):
    sections = await articles.knowledge_sections()
    assert len(sections) == 4
    assert all(section.startswith("TITLE: ") for section in sections)
