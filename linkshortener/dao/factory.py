"""Build the short URL DAO selected by the Lambda's AppConfig section."""

import functools
import logging

from linkshortener.types import LambdaConfiguration
from linkshortener.constants import Backend
from linkshortener.exceptions import BadConfigurationError
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.memory import ShortURLMemoryDAO
from linkshortener.dao.redis import ShortURLRedisDAO
from linkshortener.utils.config import app_prefix


logger = logging.getLogger(__name__)


@functools.cache
def _shared_memory_dao() -> ShortURLMemoryDAO:
    # One store per warm Lambda container, so links survive between invocations
    return ShortURLMemoryDAO()


def build_short_url_dao(app_config: LambdaConfiguration) -> ShortURLBaseDAO:
    """Instantiate the DAO for the configured backend.

    Args:
        app_config (dict):
            Output of load_config(), i.e. {"<backend>": { ... backend config ... }}.

    Returns:
        ShortURLBaseDAO: a Redis- or memory-backed DAO.

    Raises:
        BadConfigurationError: if the backend is unknown.
        DataStoreError: if Redis is unreachable.

    Example:
        >>> dao = build_short_url_dao({'redis': {'host': 'redis.local', 'port': 6379, 'db': 0}})
        >>> type(dao).__name__
        'ShortURLRedisDAO'
    """
    if len(app_config) != 1:
        raise BadConfigurationError(f'Expected exactly one backend configuration (given: {sorted(app_config)}).')

    (name, backend_config), = app_config.items()
    try:
        backend = Backend(name)
    except ValueError as e:
        raise BadConfigurationError(f"Unsupported short URL backend '{name}'.") from e

    if backend is Backend.MEMORY:
        logger.debug('Using in-memory backend for short URLs.')
        return _shared_memory_dao()

    logger.debug('Using Redis backend for short URLs.')
    redis_config = {f'redis_{k}': v for k, v in (backend_config or {}).items()}
    return ShortURLRedisDAO(**redis_config, prefix=app_prefix())
