"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO for
insert and lookup operations with ShortURLModel instances.

Responsibilities:
    - Conditionally insert short URLs together with their index entries in
      one Lua script, so a mapping is either fully written or not at all;
    - Keep a reverse index from full URL to the first alias stored for it;
    - Keep a set of all aliases for listing;
    - Raise appropriate DAO exceptions on missing or conflicting records.

Redis layout (with optional "<app>:<env>:" prefix):
    links:<alias>:url             -> full URL
    targets:<xxh3_128>:alias      -> first alias stored for the full URL
    links:index                   -> SET of all aliases

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from linkshortener.models import ShortURLModel
    >>> from linkshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="app:dev")

    >>> short_url = ShortURLModel(
    ...     full_url="https://example.com/page",
    ...     short_url="abc123"
    ... )
    >>> dao.insert(short_url)
    <ShortURLRedisDAO>

    >>> dao.get("abc123").full_url
    'https://example.com/page'
    >>> dao.find_by_full_url("https://example.com/page").short_url
    'abc123'
"""

from beartype import beartype

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


# KEYS: alias key, target key, links index
# ARGV: full URL, alias
# Returns 1 if the mapping was written, 0 if the alias is taken.
INSERT_SHORT_URL_SCRIPT = """
if not redis.call('SET', KEYS[1], ARGV[1], 'NX') then
    return 0
end
redis.call('SET', KEYS[2], ARGV[2], 'NX')
redis.call('SADD', KEYS[3], ARGV[2])
return 1
"""


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Example:
        >>> dao = ShortURLRedisDAO(redis_host="localhost", prefix="shortener:test")
        >>> short_url = ShortURLModel(full_url="https://example.com", short_url="abc123")
        >>> dao.insert(short_url)
        <ShortURLRedisDAO>
        >>> dao.get("abc123").full_url
        'https://example.com'
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Script objects are registered client side; EVALSHA loads them lazily
        self._insert_script = self.redis.register_script(INSERT_SHORT_URL_SCRIPT)

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Conditionally insert a short URL mapping into Redis

        The alias key (SET NX), the reverse index and the links index are
        written by one Lua script, which Redis runs atomically. Of two
        concurrent inserts for the same alias, exactly one succeeds, and a
        failed call never leaves an alias without its index entries.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same alias already exists.
            DataStoreError:
                If a Redis connection issue occurs.

        Example:
            >>> short_url = ShortURLModel(full_url='https://example.com', short_url='abc123')
            >>> dao.insert(short_url)
            <ShortURLRedisDAO>
        """
        # NOTE: The reverse index uses SET NX as well, so the first alias stored for
        #       a full URL wins. Two concurrent shortens of the same new URL can both
        #       create a link (best-effort idempotence), but every later request
        #       converges on the indexed one.
        inserted = self._insert_script(
            keys=[
                self.keys.link_url_key(short_url.short_url),
                self.keys.target_key(short_url.full_url),
                self.keys.links_index_key(),
            ],
            args=[short_url.full_url, short_url.short_url],
        )
        if not inserted:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.short_url}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, short_url: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by alias

        Args:
            short_url (str):
                The alias of the shortened URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                The retrieved ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('abc123')
            ShortURLModel(full_url='https://example.com', short_url='abc123')
        """
        full_url = self.redis.get(self.keys.link_url_key(short_url))
        if full_url is None:
            raise ShortURLNotFoundError(f"Short URL with code '{short_url}' not found.")

        return ShortURLModel(full_url=full_url, short_url=short_url)

    @handle_redis_connection_error
    @beartype
    def find_by_full_url(self, full_url: str, **kwargs) -> ShortURLModel:
        """Retrieve the first short URL mapping stored for a full URL

        Args:
            full_url (str):
                The original long URL.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLModel:
                The indexed mapping for the full URL.

        Raises:
            ShortURLNotFoundError:
                If the full URL was never shortened.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        short_url = self.redis.get(self.keys.target_key(full_url))
        if short_url is None:
            raise ShortURLNotFoundError(f"No short URL found for '{full_url}'.")

        # Digest collision between two different full URLs
        if self.redis.get(self.keys.link_url_key(short_url)) != full_url:
            raise ShortURLNotFoundError(f"No short URL found for '{full_url}'.")

        return ShortURLModel(full_url=full_url, short_url=short_url)

    @handle_redis_connection_error
    def all(self, **kwargs) -> list[ShortURLModel]:
        """Retrieve every stored short URL mapping

        Returns:
            list[ShortURLModel]:
                All mappings, sorted by alias.

        Raises:
            DataStoreError:
                If Redis connectivity issues occur.
        """
        short_urls = sorted(self.redis.smembers(self.keys.links_index_key()))
        if not short_urls:
            return []

        full_urls = self.redis.mget([self.keys.link_url_key(short_url) for short_url in short_urls])
        return [
            ShortURLModel(full_url=full_url, short_url=short_url)
            for short_url, full_url in zip(short_urls, full_urls, strict=True)
            if full_url is not None
        ]
