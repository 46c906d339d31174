"""Shared Redis client setup for Redis-backed DAOs.

Example:
    >>> class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    ...     pass
    ...
    >>> dao = ShortURLRedisDAO(redis_host='redis.local', prefix='linkshortener:prod')
    >>> dao.keys.links_index_key()
    'linkshortener:prod:links:index'
"""

import redis

from linkshortener.dao.exceptions import DataStoreError
from linkshortener.dao.redis.helpers import redis_location
from linkshortener.dao.redis.redis_key_schema import RedisKeySchema


class RedisClientMixin:
    """Give a DAO a verified Redis client and a namespaced key schema.

    Either pass a ready `redis_client` or the `redis_*` connection parameters
    found in a Lambda's AppConfig section. The client is PINGed on construction.

    Attributes:
        redis (redis.Redis):
            Client used by the DAO methods.
        keys (RedisKeySchema):
            Key names under the DAO's prefix.

    Raises:
        DataStoreError:
            If Redis doesn't answer the PING.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_decode_responses: bool = True,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
    ):
        if redis_client is None:
            redis_client = self._connect(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    @staticmethod
    def _connect(*, host, port, db, decode_responses, username, password) -> redis.Redis:
        # AppConfig documents may carry port/db as strings
        return redis.Redis(
            host=host,
            port=int(port),
            db=int(db),
            decode_responses=decode_responses,
            username=username,
            password=password,
        )

    def _healthcheck(self) -> None:
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(
                f"Can't connect to Redis at {redis_location(self.redis)}. Check the provided configuration parameters."
            ) from e
