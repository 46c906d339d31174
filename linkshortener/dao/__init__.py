from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.memory import ShortURLMemoryDAO
from linkshortener.dao.redis import ShortURLRedisDAO
from linkshortener.dao.factory import build_short_url_dao


__all__ = [
    'ShortURLBaseDAO',
    'ShortURLMemoryDAO',
    'ShortURLRedisDAO',
    'build_short_url_dao',
]
