from unittest.mock import MagicMock

import pytest
import redis


@pytest.fixture
def app_prefix() -> str:
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def insert_script() -> MagicMock:
    """Mock the registered Lua script used for conditional inserts (1 = inserted)."""
    return MagicMock(spec=redis.commands.core.Script, return_value=1)


@pytest.fixture
def redis_client(insert_script) -> redis.Redis:
    """Mock a Redis client."""
    client = MagicMock(spec=redis.Redis)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.ping.return_value = True
    client.register_script.return_value = insert_script
    return client
