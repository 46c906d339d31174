"""URL-mapping service: creates and resolves short URL mappings

The service sits between the Lambda handlers and a ShortURLBaseDAO. It owns
the rules the data store can't express on its own:

    - full URLs must be https:// URLs;
    - custom aliases must be unique and are never silently reused;
    - shortening an already shortened URL without a custom alias returns the
      existing mapping instead of creating a new one;
    - a generated alias that collides with an existing one is regenerated.

Alias uniqueness itself is enforced by the DAO's conditional insert, which is
the final arbiter when concurrent requests race for the same alias.

Concurrency NOTE:
    Two concurrent shortens of the same new full URL (no custom alias) can both
    miss the reuse lookup and both create a mapping. Idempotence is guaranteed
    for sequential requests only. The DAO indexes the first mapping stored for
    a full URL, so all later requests converge on that one.

Example:
    >>> from linkshortener.dao import ShortURLMemoryDAO
    >>> service = URLMappingService(dao=ShortURLMemoryDAO())
    >>> result = service.shorten('https://example.com/a')
    >>> service.shorten('https://example.com/a').value == result.value
    True
    >>> service.resolve(result.value.short_url).value.full_url
    'https://example.com/a'
"""

import logging
from collections.abc import Callable

from linkshortener.models import ShortURLModel
from linkshortener.constants import Shortcode
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from linkshortener.services.results import ErrorKind, Result
from linkshortener.utils.shortener import generate_shortcode
from linkshortener.utils.validators import is_valid_custom_alias, is_valid_full_url


logger = logging.getLogger(__name__)


class URLMappingService:
    """Coordinate validation, alias selection, conflict handling and persistence.

    Args:
        dao (ShortURLBaseDAO):
            Data store for short URL mappings.
        generator (Callable[[], str]):
            Produces candidate aliases when no custom alias is given.
        max_attempts (int):
            Number of generated aliases to try before reporting ALIAS_CONFLICT.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        generator: Callable[[], str] = generate_shortcode,
        max_attempts: int = Shortcode.MAX_GENERATION_ATTEMPTS,
    ):
        if max_attempts < 1:
            raise ValueError(f'max_attempts must be at least 1 (given value: {max_attempts}).')

        self.dao = dao
        self.generator = generator
        self.max_attempts = max_attempts

    def shorten(self, full_url: str, custom_alias: str | None = None) -> Result[ShortURLModel]:
        """Create a mapping for full_url, or return the one that already exists.

        Procedure:
        - Step 1: Validate the full URL (and the custom alias, if any)
        - Step 2: Pick a candidate alias (custom or generated)
        - Step 3: Reject a taken custom alias; regenerate a taken generated one
        - Step 4: Without a custom alias, reuse an existing mapping for full_url
        - Step 5: Conditionally insert the new mapping

        At most one write reaches the data store per call.

        Returns:
            Result[ShortURLModel]:
                The new or reused mapping, or one of INVALID_INPUT,
                ALIAS_CONFLICT or STORE_FAILURE.
        """
        # 1- Validate input
        if not is_valid_full_url(full_url):
            return Result.failure(ErrorKind.INVALID_INPUT, 'Invalid URL format. Must start with "https://"')

        custom_alias = custom_alias or None
        if custom_alias is not None and not is_valid_custom_alias(custom_alias):
            return Result.failure(
                ErrorKind.INVALID_INPUT,
                'Invalid custom short name. Use 1 to 64 letters, digits, "-" or "_".',
            )

        try:
            if custom_alias is not None:
                return self._shorten_custom(full_url, custom_alias)
            return self._shorten_generated(full_url)
        except DataStoreError:
            logger.exception('Data store failure while shortening URL.', extra={'fullUrl': full_url})
            return Result.failure(ErrorKind.STORE_FAILURE, 'Internal server error')

    def _shorten_custom(self, full_url: str, custom_alias: str) -> Result[ShortURLModel]:
        # 3- Custom aliases must be unique, never silently reused
        if self._alias_taken(custom_alias):
            return self._custom_alias_conflict(custom_alias)

        # 5- Custom aliases always create a new mapping
        short_url = ShortURLModel(full_url=full_url, short_url=custom_alias)
        try:
            self.dao.insert(short_url)
        except ShortURLAlreadyExistsError:
            # Lost the race against a concurrent request for the same alias
            return self._custom_alias_conflict(custom_alias)

        logger.info('Created short URL with custom alias.', extra={'shortUrl': custom_alias, 'fullUrl': full_url})
        return Result.success(short_url)

    def _shorten_generated(self, full_url: str) -> Result[ShortURLModel]:
        for attempt in range(1, self.max_attempts + 1):
            # 2- Generate candidate alias
            candidate = self.generator()

            # 3- Collision with an unrelated record: regenerate
            if self._alias_taken(candidate):
                logger.warning('Generated alias collides with an existing one.', extra={'shortUrl': candidate, 'attempt': attempt})
                continue

            # 4- Reuse the existing mapping for this full URL
            try:
                existing = self.dao.find_by_full_url(full_url)
            except ShortURLNotFoundError:
                pass
            else:
                logger.info('Reusing existing short URL.', extra={'shortUrl': existing.short_url, 'fullUrl': full_url})
                return Result.success(existing)

            # 5- Create the new mapping
            short_url = ShortURLModel(full_url=full_url, short_url=candidate)
            try:
                self.dao.insert(short_url)
            except ShortURLAlreadyExistsError:
                logger.warning('Generated alias was taken concurrently.', extra={'shortUrl': candidate, 'attempt': attempt})
                continue

            logger.info('Created short URL.', extra={'shortUrl': candidate, 'fullUrl': full_url})
            return Result.success(short_url)

        logger.error('Exhausted alias generation attempts.', extra={'fullUrl': full_url, 'attempts': self.max_attempts})
        return Result.failure(ErrorKind.ALIAS_CONFLICT, 'Could not generate a unique short name. Please try again.')

    def resolve(self, alias: str) -> Result[ShortURLModel]:
        """Look up the mapping for an alias.

        Returns:
            Result[ShortURLModel]:
                The mapping, NOT_FOUND or STORE_FAILURE.
        """
        if not isinstance(alias, str) or not alias:
            return Result.failure(ErrorKind.NOT_FOUND, 'Short URL not found')

        try:
            return Result.success(self.dao.get(alias))
        except ShortURLNotFoundError:
            return Result.failure(ErrorKind.NOT_FOUND, 'Short URL not found')
        except DataStoreError:
            logger.exception('Data store failure while resolving short URL.', extra={'shortUrl': alias})
            return Result.failure(ErrorKind.STORE_FAILURE, 'Internal server error')

    def list_all(self) -> Result[list[ShortURLModel]]:
        """Return every stored mapping (administrative visibility only)."""
        try:
            return Result.success(self.dao.all())
        except DataStoreError:
            logger.exception('Data store failure while listing short URLs.')
            return Result.failure(ErrorKind.STORE_FAILURE, 'Internal server error')

    def _alias_taken(self, alias: str) -> bool:
        try:
            self.dao.get(alias)
        except ShortURLNotFoundError:
            return False
        return True

    @staticmethod
    def _custom_alias_conflict(custom_alias: str) -> Result[ShortURLModel]:
        logger.info('Custom alias already in use.', extra={'shortUrl': custom_alias})
        return Result.failure(ErrorKind.ALIAS_CONFLICT, 'Custom short name already in use. Please choose another.')
