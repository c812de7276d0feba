"""Events, comments, polls, contact form, newsletter, notifications and catalog."""

import asyncio
from datetime import date

import pytest

from services.content.app.exceptions import PermissionDeniedError, ValidationError
from shared.schemas.content import SchoolEvent


@pytest.mark.asyncio
async def test_events_are_chronological(service):
    await service.create_event(
        SchoolEvent(id="e1", title="Orientation", date=date(2000, 1, 1), location="Gym", description="Welcome")
    )
    events = await service.list_events()
    assert events[0].id == "e1"
    dates = [e.date for e in events]
    assert dates == sorted(dates)


@pytest.mark.asyncio
async def test_event_lifecycle(service, eic):
    moved = await service.reschedule_event("2", date(2030, 5, 1), eic)
    assert moved.status == "rescheduled"
    assert moved.date == date(2030, 5, 1)

    cancelled = await service.cancel_event("3", eic)
    assert cancelled.status == "cancelled"

    assert await service.delete_event("3", eic) is True
    assert "3" not in {e.id for e in await service.list_events()}
    assert await service.cancel_event("missing") is None


@pytest.mark.asyncio
async def test_event_requires_title_and_privilege(service, journalist):
    with pytest.raises(ValidationError):
        await service.create_event(
            SchoolEvent(id="e2", title=" ", date=date(2030, 1, 1), location="Gym", description="x")
        )
    with pytest.raises(PermissionDeniedError):
        await service.cancel_event("2", journalist)


@pytest.mark.asyncio
async def test_comments_newest_first_per_article(service, journalist, eic):
    first = await service.add_comment("103", "Great game!", journalist)
    second = await service.add_comment("103", "Agreed.", eic)
    await service.add_comment("104", "Nice lab.", eic)

    comments = await service.list_comments("103")
    assert [c.id for c in comments] == [second.id, first.id]
    assert comments[0].article_title == "Varsity Team Qualifies for Finals"
    assert len(await service.list_comments()) == 3


@pytest.mark.asyncio
async def test_empty_comment_is_rejected(service, journalist):
    with pytest.raises(ValidationError):
        await service.add_comment("103", "   ", journalist)


@pytest.mark.asyncio
async def test_comment_deletion_rules(service, journalist, eic, guest):
    comment = await service.add_comment("103", "Mine", journalist)
    with pytest.raises(PermissionDeniedError):
        await service.delete_comment(comment.id, guest)
    assert await service.delete_comment(comment.id, eic) is True
    assert await service.delete_comment(comment.id, eic) is False


@pytest.mark.asyncio
async def test_poll_vote_moves_option_and_total(service):
    poll = await service.get_active_poll()
    voted = await service.vote_poll(poll.id, "opt-2")
    assert voted.total_votes == poll.total_votes + 1
    assert voted.options[1].votes == poll.options[1].votes + 1


@pytest.mark.asyncio
async def test_concurrent_votes_are_all_counted(service):
    poll = await service.get_active_poll()
    await asyncio.gather(*(service.vote_poll(poll.id, "opt-1") for _ in range(20)))
    after = await service.get_active_poll()
    assert after.total_votes == poll.total_votes + 20
    assert sum(o.votes for o in after.options) == after.total_votes


@pytest.mark.asyncio
async def test_unknown_poll_or_option_is_ignored(service):
    poll = await service.get_active_poll()
    assert await service.vote_poll("other-poll", "opt-1") == poll
    assert await service.vote_poll(poll.id, "opt-9") == poll


@pytest.mark.asyncio
async def test_contact_messages(service, eic):
    first = await service.send_contact_message("Ana", "ana@example.com", "Hello")
    second = await service.send_contact_message("Ben", "ben@example.com", "Hi there")
    messages = await service.list_contact_messages(eic)
    assert [m.id for m in messages] == [second.id, first.id]

    read = await service.mark_message_read(first.id, eic)
    assert read.is_read is True


@pytest.mark.asyncio
async def test_contact_message_validation(service):
    with pytest.raises(ValidationError):
        await service.send_contact_message("Ana", "not-an-email", "Hello")
    with pytest.raises(ValidationError):
        await service.send_contact_message("Ana", "ana@example.com", "  ")


@pytest.mark.asyncio
async def test_subscribe_is_idempotent(service):
    assert await service.subscribe("reader@example.com") is True
    assert await service.subscribe("reader@example.com") is False
    assert await service.list_subscribers() == ["reader@example.com"]
    with pytest.raises(ValidationError):
        await service.subscribe("nope")


@pytest.mark.asyncio
async def test_notifications_unread_and_mark_read(service):
    await service.set_article_status("202", "rejected", "Rework")
    await service.set_article_status("202", "pending")
    await service.set_article_status("202", "published")

    inbox = await service.list_notifications("4")
    assert len(inbox) == 3
    assert await service.unread_notification_count("4") == 3

    await service.mark_notification_read(inbox[0].id)
    assert await service.unread_notification_count("4") == 2
    assert await service.mark_notification_read("missing") is None


@pytest.mark.asyncio
async def test_catalog(service):
    assert (await service.list_print_editions())[0].title == "The Light: Volume 24"
    assert len(await service.list_team_members()) == 5
    assert (await service.list_gallery_albums())[0].title == "Intramurals 2024"
    assert (await service.list_videos())[0].title == "Campus Tour 2024"
