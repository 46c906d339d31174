"""Data models shared by the DAO, service and Lambda layers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Attributes:
        full_url (str):
            The original long URL that the alias redirects to.
        short_url (str):
            The unique alias (single URL path segment) of the mapping.

    Example:
        >>> url = ShortURLModel(full_url='https://example.com/article/123', short_url='abc123')
        >>> url.to_dict()
        {'fullUrl': 'https://example.com/article/123', 'shortUrl': 'abc123'}
    """

    full_url: str
    short_url: str

    def to_dict(self) -> dict[str, str]:
        """Serialize to the JSON shape exposed over HTTP."""
        return {'fullUrl': self.full_url, 'shortUrl': self.short_url}
