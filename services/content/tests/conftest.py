import fakeredis
import pytest

from services.content.app.container import ContentService
from services.content.app.store import KeyValueStore
from shared.schemas.content import User, UserRole
from shared.utils.redis_client import RedisClient


@pytest.fixture
def fake_redis():
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def redis_client(fake_redis):
    return RedisClient("content-test", client=fake_redis)


@pytest.fixture
def kv_store(redis_client):
    return KeyValueStore(redis_client)


@pytest.fixture
def service(redis_client):
    return ContentService(redis_client)


@pytest.fixture
def auditor():
    return User(id="1", name="Auditor Admin", email="auditor@light.edu", role=UserRole.AUDITOR)


@pytest.fixture
def eic():
    return User(id="2", name="Jane EIC", email="eic@light.edu", role=UserRole.EIC)


@pytest.fixture
def head():
    return User(id="3", name="John Head", email="head@light.edu", role=UserRole.HEAD)


@pytest.fixture
def journalist():
    return User(id="4", name="Jimmy Pen", email="writer@light.edu", role=UserRole.JOURNALIST)


@pytest.fixture
def guest():
    return User(id="99", name="Visitor", email="visitor@example.com", role=UserRole.GUEST)
