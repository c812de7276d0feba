import pytest

from services.content.app.container import ContentService
from services.content.app.exceptions import PermissionDeniedError, ValidationError
from shared.schemas.content import BreakingNews, SystemConfigUpdate, ThemeConfig


@pytest.mark.asyncio
async def test_defaults_on_first_boot(service):
    config = await service.get_system_config()
    assert config.maintenance_mode is False
    assert config.theme.publication_name == "THE LIGHT"
    assert config.breaking_news.enabled is True


@pytest.mark.asyncio
async def test_partial_update_round_trip(service):
    before = await service.get_system_config()
    await service.update_system_config(SystemConfigUpdate(maintenance_mode=True))
    after = await service.get_system_config()

    assert after.maintenance_mode is True
    assert after.allow_guest_signup == before.allow_guest_signup
    assert after.theme == before.theme
    assert after.breaking_news == before.breaking_news


@pytest.mark.asyncio
async def test_nested_objects_are_replaced_whole(service):
    theme = ThemeConfig(
        publication_name="THE DAWN",
        publication_subtext="Weekly",
        logo_url="https://example.com/logo.png",
        primary_color="#000000",
        accent_color="#FFFFFF",
    )
    config = await service.update_system_config(SystemConfigUpdate(theme=theme))
    assert config.theme == theme


@pytest.mark.asyncio
async def test_update_is_audited(service, eic):
    await service.update_system_config(SystemConfigUpdate(allow_guest_signup=False), eic)
    logs = await service.get_access_logs()
    assert logs[0].action == "SYSTEM_CHANGE"
    assert logs[0].details == "Updated system configuration or theme."
    assert logs[0].user_name == "Jane EIC"


@pytest.mark.asyncio
async def test_update_theme_keeps_sibling_fields(service):
    before = await service.get_system_config()
    config = await service.update_theme(primary_color="#123456")
    assert config.theme.primary_color == "#123456"
    assert config.theme.publication_name == before.theme.publication_name
    assert config.theme.accent_color == before.theme.accent_color


@pytest.mark.asyncio
async def test_update_breaking_news_keeps_sibling_fields(service):
    config = await service.update_breaking_news(enabled=False)
    assert config.breaking_news.enabled is False
    assert config.breaking_news.text.startswith("CLASSES SUSPENDED")


@pytest.mark.asyncio
async def test_update_breaking_news_from_nothing(service):
    await service.update_system_config(SystemConfigUpdate(breaking_news=None))
    config = await service.update_breaking_news(text="Finals week", speed="fast")
    assert config.breaking_news == BreakingNews(text="Finals week", speed="fast")


@pytest.mark.asyncio
async def test_builders_reject_unknown_or_invalid_fields(service):
    with pytest.raises(ValidationError):
        await service.update_theme(font="Comic Sans")
    with pytest.raises(ValidationError):
        await service.update_breaking_news(speed="warp")


@pytest.mark.asyncio
async def test_theme_cannot_be_removed(service):
    with pytest.raises(ValidationError):
        await service.update_system_config(SystemConfigUpdate(theme=None))
    assert (await service.get_system_config()).theme is not None


@pytest.mark.asyncio
async def test_config_survives_restart(service, redis_client):
    await service.update_system_config(SystemConfigUpdate(maintenance_mode=True))

    restarted = ContentService(redis_client)
    assert (await restarted.get_system_config()).maintenance_mode is True


@pytest.mark.asyncio
async def test_only_privileged_roles_change_settings(service, head, auditor):
    with pytest.raises(PermissionDeniedError):
        await service.update_system_config(SystemConfigUpdate(maintenance_mode=True), head)
    config = await service.update_system_config(SystemConfigUpdate(maintenance_mode=True), auditor)
    assert config.maintenance_mode is True
