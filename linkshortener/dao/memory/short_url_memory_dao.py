"""In-memory implementation of ShortURLBaseDAO

Keeps mappings in process-local dictionaries. Meant for tests and local runs
(`"active_backend": "memory"`); nothing survives a cold start.
"""

import threading

from beartype import beartype

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """Dictionary-backed DAO with the same conditional insert semantics as Redis.

    Attributes:
        links (dict[str, str]):
            alias -> full URL
        targets (dict[str, str]):
            full URL -> first alias stored for it
    """

    def __init__(self, **kwargs):
        self.links: dict[str, str] = {}
        self.targets: dict[str, str] = {}
        self._lock = threading.Lock()

    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLMemoryDAO':
        with self._lock:
            if short_url.short_url in self.links:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.short_url}' already exists.")
            self.links[short_url.short_url] = short_url.full_url
            self.targets.setdefault(short_url.full_url, short_url.short_url)
        return self

    @beartype
    def get(self, short_url: str, **kwargs) -> ShortURLModel:
        full_url = self.links.get(short_url)
        if full_url is None:
            raise ShortURLNotFoundError(f"Short URL with code '{short_url}' not found.")
        return ShortURLModel(full_url=full_url, short_url=short_url)

    @beartype
    def find_by_full_url(self, full_url: str, **kwargs) -> ShortURLModel:
        short_url = self.targets.get(full_url)
        if short_url is None:
            raise ShortURLNotFoundError(f"No short URL found for '{full_url}'.")
        return ShortURLModel(full_url=full_url, short_url=short_url)

    def all(self, **kwargs) -> list[ShortURLModel]:
        with self._lock:
            links = sorted(self.links.items())
        return [ShortURLModel(full_url=full_url, short_url=short_url) for short_url, full_url in links]
