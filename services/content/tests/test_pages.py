import asyncio
import json

import pytest

from services.content.app.exceptions import PermissionDeniedError, ProtectedResourceError, ValidationError
from shared.schemas.content import PageConfig, PageUpdate


def new_page(**overrides) -> PageConfig:
    fields = dict(id="12", title="Opinion", slug="opinion", type="category", order_score=0)
    fields.update(overrides)
    return PageConfig(**fields)


@pytest.mark.asyncio
async def test_pages_are_ordered_by_order_score(service):
    await service.create_page(new_page(order_score=0))
    pages = await service.list_pages()
    assert pages[0].slug == "opinion"
    scores = [p.order_score for p in pages]
    assert scores == sorted(scores)


@pytest.mark.asyncio
async def test_create_page_validation(service):
    with pytest.raises(ValidationError):
        await service.create_page(new_page(title=" "))
    with pytest.raises(ValidationError):
        await service.create_page(new_page(slug="news"))


@pytest.mark.asyncio
async def test_delete_non_system_page(service):
    assert await service.delete_page("5") is True
    assert "sci-tech" not in {p.slug for p in await service.list_pages()}


@pytest.mark.asyncio
async def test_delete_system_page_is_refused(service):
    with pytest.raises(ProtectedResourceError):
        await service.delete_page("1")
    assert "editorial" in {p.slug for p in await service.list_pages()}


@pytest.mark.asyncio
async def test_delete_unknown_page(service):
    assert await service.delete_page("missing") is False


@pytest.mark.asyncio
async def test_update_applies_only_given_fields(service):
    updated = await service.update_page("6", PageUpdate(title="Literary Folio", order_score=99))
    assert updated.title == "Literary Folio"
    assert updated.order_score == 99
    assert updated.slug == "literary"
    assert updated.description == "Poems and Stories."
    assert (await service.list_pages())[-1].id == "6"


@pytest.mark.asyncio
async def test_update_ignores_nulls_except_description(service):
    updated = await service.update_page("6", PageUpdate(title=None, description=None))
    assert updated.title == "Literary"
    assert updated.description is None


@pytest.mark.asyncio
async def test_update_rejects_duplicate_slug(service):
    with pytest.raises(ValidationError):
        await service.update_page("6", PageUpdate(slug="news"))


@pytest.mark.asyncio
async def test_update_unknown_page(service):
    assert await service.update_page("missing", PageUpdate(title="x")) is None


@pytest.mark.asyncio
async def test_navigation_respects_access_level(service, guest, journalist):
    await service.update_page("7", PageUpdate(access_level="member"))
    await service.update_page("8", PageUpdate(access_level="staff"))
    await service.update_page("9", PageUpdate(is_visible=False))

    anonymous = {p.slug for p in await service.list_navigation()}
    as_guest = {p.slug for p in await service.list_navigation(guest)}
    as_staff = {p.slug for p in await service.list_navigation(journalist)}

    assert {"gallery", "videos", "events"}.isdisjoint(anonymous)
    assert "gallery" in as_guest and "videos" not in as_guest
    assert {"gallery", "videos"} <= as_staff
    assert "events" not in as_staff


@pytest.mark.asyncio
async def test_page_management_is_privileged(service, head, eic):
    with pytest.raises(PermissionDeniedError):
        await service.delete_page("5", head)
    assert await service.delete_page("5", eic) is True


@pytest.mark.asyncio
async def test_concurrent_deletes_remove_page_once(service, fake_redis):
    results = await asyncio.gather(service.delete_page("5"), service.delete_page("5"))
    assert sorted(results) == [False, True]
    stored = json.loads(await fake_redis.get("tl_pages"))
    assert "5" not in {p["id"] for p in stored}
    assert "1" in {p["id"] for p in stored}
