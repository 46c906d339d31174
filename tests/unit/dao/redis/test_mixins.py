"""Unit tests for the Redis client mixin.

Test coverage includes:

1. Client construction
   - AppConfig connection parameters build a redis.Redis client (string port/db coerced).
   - An injected client is used as is and no connection is opened.

2. Healthcheck on construction
   - Construction PINGs Redis once.
   - Connection errors and timeouts raise DataStoreError naming the Redis location.
"""

import re
from unittest.mock import patch

import pytest
import redis

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.redis.mixins import RedisClientMixin


# -------------------------------
# 1. Client construction
# -------------------------------


def test_connect_from_appconfig_parameters():
    """Ensure redis_* parameters from AppConfig build the Redis client."""
    with patch('linkshortener.dao.redis.mixins.redis.Redis', autospec=True) as redis_cls:
        mixin = RedisClientMixin(
            redis_host='redis.local',
            redis_port='6380',
            redis_db='2',
            redis_username='linkshortener',
            redis_password='secret',
            prefix='linkshortener:prod',
        )

    redis_cls.assert_called_once_with(
        host='redis.local',
        port=6380,
        db=2,
        decode_responses=True,
        username='linkshortener',
        password='secret',
    )
    assert mixin.redis is redis_cls.return_value
    assert mixin.keys.links_index_key() == 'linkshortener:prod:links:index'


def test_injected_client_is_used(redis_client):
    with patch('linkshortener.dao.redis.mixins.redis.Redis', autospec=True) as redis_cls:
        mixin = RedisClientMixin(redis_client=redis_client)

    redis_cls.assert_not_called()
    assert mixin.redis is redis_client
    assert mixin.keys.links_index_key() == 'links:index'


# -------------------------------
# 2. Healthcheck on construction
# -------------------------------


def test_construction_pings_redis(redis_client):
    RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    redis_client.ping.assert_called_once_with()


@pytest.mark.parametrize(
    'error',
    [redis.exceptions.ConnectionError('Connection refused'), redis.exceptions.TimeoutError('Timeout')],
)
def test_construction_with_unreachable_redis(redis_client, error):
    """Ensure an unreachable Redis fails construction with DataStoreError."""
    redis_client.ping.side_effect = error
    message = "Can't connect to Redis at redis.test:6379/0. Check the provided configuration parameters."

    with pytest.raises(DataStoreError, match=re.escape(message)) as exc_info:
        RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    assert exc_info.value.__cause__ is error
