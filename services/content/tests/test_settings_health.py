import json
import logging
from unittest.mock import AsyncMock, Mock

import pytest

from shared.app_logging.logger import CorrelationContext, JSONFormatter, get_correlation_id
from shared.config.settings import ContentSettings, RedisSettings
from shared.utils.health import HealthStatus, create_content_health_checker
from shared.utils.redis_client import RedisClient


def test_redis_url_built_from_components(monkeypatch):
    monkeypatch.delenv("REDIS_URL", raising=False)
    monkeypatch.setenv("REDIS_HOST", "cache")
    monkeypatch.setenv("REDIS_PORT", "6380")
    monkeypatch.setenv("REDIS_PASSWORD", "s3cret")
    settings = RedisSettings(_env_file=None)
    assert settings.redis_url == "redis://:s3cret@cache:6380/0"


def test_explicit_redis_url_wins(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "redis://elsewhere:6379/2")
    assert RedisSettings(_env_file=None).redis_url == "redis://elsewhere:6379/2"


def test_content_settings_defaults(monkeypatch):
    for name in ("CONTENT_KEY_PREFIX", "ACCESS_LOG_LIMIT", "EDITOR_USER_ID", "UNIQUE_REACTIONS"):
        monkeypatch.delenv(name, raising=False)
    settings = ContentSettings(_env_file=None)
    assert settings.key_prefix == "tl_"
    assert settings.access_log_limit == 200
    assert settings.editor_user_id == "2"
    assert settings.unique_reactions is True


def test_content_settings_from_env(monkeypatch):
    monkeypatch.setenv("ACCESS_LOG_LIMIT", "50")
    monkeypatch.setenv("UNIQUE_REACTIONS", "false")
    settings = ContentSettings(_env_file=None)
    assert settings.access_log_limit == 50
    assert settings.unique_reactions is False


def test_key_prefix_rejects_whitespace(monkeypatch):
    monkeypatch.setenv("CONTENT_KEY_PREFIX", "tl _")
    with pytest.raises(ValueError):
        ContentSettings(_env_file=None)


def test_json_formatter_includes_correlation_id():
    record = logging.LogRecord("services.content", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.correlation_id = "abc-123"
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "hello world"
    assert entry["correlation_id"] == "abc-123"
    assert entry["level"] == "INFO"


def test_correlation_context_restores_previous_id():
    with CorrelationContext("outer"):
        with CorrelationContext("inner") as inner:
            assert inner == "inner"
            assert get_correlation_id() == "inner"
        assert get_correlation_id() == "outer"
    assert get_correlation_id() is None


@pytest.mark.asyncio
async def test_health_reports_redis_up(redis_client):
    checker = create_content_health_checker(redis_client)
    health = await checker.run_all_checks()
    assert health["status"] == HealthStatus.HEALTHY.value
    assert health["checks"][0]["name"] == "redis"

    ready = await checker.readiness(["redis"])
    assert ready["status"] == "ready"


@pytest.mark.asyncio
async def test_health_reports_redis_down():
    broken = Mock()
    broken.ping = AsyncMock(side_effect=ConnectionError("down"))
    checker = create_content_health_checker(RedisClient("content-test", client=broken))

    health = await checker.run_all_checks()
    assert health["status"] == "unhealthy"
    ready = await checker.readiness(["redis"])
    assert ready == {
        "status": "not_ready",
        "service": "content",
        "critical_dependencies": {"redis": "unhealthy"},
    }
