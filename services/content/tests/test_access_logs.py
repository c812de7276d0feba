import asyncio

import pytest

from services.content.app.exceptions import PermissionDeniedError
from services.content.app.repositories.access_logs import AccessLogRepository


@pytest.mark.asyncio
async def test_record_is_most_recent_first(kv_store, journalist):
    logs = AccessLogRepository(kv_store)
    await logs.record("LOGIN", "first", journalist)
    await logs.record("VIEW_ARTICLE", "second")
    entries = await logs.list()
    assert [e.details for e in entries] == ["second", "first"]
    assert entries[0].user_name == "Guest"
    assert entries[0].user_id is None
    assert entries[1].user_id == "4"


@pytest.mark.asyncio
async def test_ring_buffer_keeps_most_recent_200(kv_store):
    logs = AccessLogRepository(kv_store)
    for i in range(250):
        await logs.record("VIEW_ARTICLE", f"entry {i}")
    entries = await logs.list()
    assert len(entries) == 200
    assert entries[0].details == "entry 249"
    assert entries[-1].details == "entry 50"


@pytest.mark.asyncio
async def test_ring_buffer_under_concurrent_writers(kv_store):
    logs = AccessLogRepository(kv_store, limit=10)
    await asyncio.gather(*(logs.record("LOGIN", f"entry {i}") for i in range(40)))
    assert len(await logs.list()) == 10


@pytest.mark.asyncio
async def test_ring_buffer_is_persisted(kv_store):
    logs = AccessLogRepository(kv_store, limit=3)
    for i in range(5):
        await logs.record("LOGIN", f"entry {i}")
    reloaded = AccessLogRepository(kv_store, limit=3)
    assert [e.details for e in await reloaded.list()] == ["entry 4", "entry 3", "entry 2"]


@pytest.mark.asyncio
async def test_viewing_an_article_is_logged(service, journalist):
    await service.increment_views("103", journalist)
    await service.increment_views("103")
    logs = await service.get_access_logs()
    assert logs[0].details == "Guest viewed article: Varsity Team Qualifies for Finals"
    assert logs[1].details == "Viewed article: Varsity Team Qualifies for Finals"
    assert logs[1].user_name == "Jimmy Pen"


@pytest.mark.asyncio
async def test_log_activity_and_admin_only_reading(service, auditor, eic):
    await service.log_activity("LOGIN", "manual entry", eic)
    assert (await service.get_access_logs(auditor))[0].details == "manual entry"
    with pytest.raises(PermissionDeniedError):
        await service.get_access_logs(eic)
