"""Unit tests for URLMappingService

Test coverage includes:

1. Shorten with generated aliases
   - Creates a mapping; repeated calls return the same mapping without writes.
   - Generator collisions are regenerated; exhausted attempts yield ALIAS_CONFLICT.
   - Losing the insert race on a generated alias regenerates.

2. Shorten with custom aliases
   - Creates a mapping; taken aliases yield ALIAS_CONFLICT with no write.
   - Losing the insert race on a custom alias yields ALIAS_CONFLICT.
   - Custom aliases may point at an already shortened URL.
   - Empty custom alias falls back to a generated alias.

3. Input validation
   - Non-https and malformed URLs yield INVALID_INPUT with no store access.
   - Unsafe custom aliases yield INVALID_INPUT.

4. Resolve and list
   - Resolves created aliases; unknown aliases yield NOT_FOUND.

5. Data store failures
   - Every operation reports STORE_FAILURE instead of raising.

6. Scenarios
"""

from unittest.mock import MagicMock

import pytest

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.memory import ShortURLMemoryDAO
from linkshortener.dao.exceptions import DataStoreError, ShortURLAlreadyExistsError, ShortURLNotFoundError
from linkshortener.services import ErrorKind, URLMappingService


# -------------------------------
# Fixtures
# -------------------------------


def aliases(*values: str):
    """Deterministic alias generator yielding the given values in order."""
    return iter(values).__next__


@pytest.fixture
def store():
    return ShortURLMemoryDAO()


@pytest.fixture
def dao(store):
    """Spy wrapping a real in-memory DAO, to assert on store calls."""
    return MagicMock(spec=ShortURLBaseDAO, wraps=store)


@pytest.fixture
def service(dao):
    return URLMappingService(dao=dao, generator=aliases('gen0001', 'gen0002', 'gen0003'))


@pytest.fixture
def failing_dao():
    _dao = MagicMock(spec=ShortURLBaseDAO)
    _dao.get.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")
    _dao.find_by_full_url.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")
    _dao.insert.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")
    _dao.all.side_effect = DataStoreError("Can't connect to Redis at redis.test:6379/0.")
    return _dao


# -------------------------------
# 1. Generated aliases
# -------------------------------


def test_shorten_creates_mapping(service, dao):
    result = service.shorten('https://example.com/a')

    assert result.ok
    assert result.value == ShortURLModel(full_url='https://example.com/a', short_url='gen0001')
    dao.insert.assert_called_once_with(result.value)


def test_shorten_twice_returns_same_mapping(service, dao):
    """Ensure repeated shortens of one URL reuse the mapping without writing."""
    first = service.shorten('https://example.com/a')
    second = service.shorten('https://example.com/a')

    assert first.ok and second.ok
    assert second.value == first.value
    assert dao.insert.call_count == 1


def test_shorten_reuses_mapping_created_with_custom_alias(service, dao):
    service.shorten('https://example.com/a', 'mine')

    result = service.shorten('https://example.com/a')

    assert result.value == ShortURLModel(full_url='https://example.com/a', short_url='mine')
    assert dao.insert.call_count == 1


def test_shorten_regenerates_on_collision(dao, store):
    """Ensure a generated alias colliding with an unrelated record is regenerated."""
    store.insert(ShortURLModel(full_url='https://example.com/other', short_url='gen0001'))
    service = URLMappingService(dao=dao, generator=aliases('gen0001', 'gen0002'))

    result = service.shorten('https://example.com/a')

    assert result.value == ShortURLModel(full_url='https://example.com/a', short_url='gen0002')
    assert store.get('gen0001').full_url == 'https://example.com/other'


def test_shorten_gives_up_after_max_attempts(dao, store):
    store.insert(ShortURLModel(full_url='https://example.com/other', short_url='taken'))
    service = URLMappingService(dao=dao, generator=lambda: 'taken', max_attempts=3)

    result = service.shorten('https://example.com/a')

    assert result.error is ErrorKind.ALIAS_CONFLICT
    assert result.value is None
    assert dao.get.call_count == 3
    dao.insert.assert_not_called()


def test_shorten_regenerates_when_insert_race_is_lost():
    """Ensure a generated alias taken between check and insert is regenerated."""
    dao = MagicMock(spec=ShortURLBaseDAO)
    dao.get.side_effect = ShortURLNotFoundError()
    dao.find_by_full_url.side_effect = ShortURLNotFoundError()
    dao.insert.side_effect = [ShortURLAlreadyExistsError(), dao]
    service = URLMappingService(dao=dao, generator=aliases('gen0001', 'gen0002'))

    result = service.shorten('https://example.com/a')

    assert result.value.short_url == 'gen0002'
    assert dao.insert.call_count == 2


def test_invalid_max_attempts(dao):
    with pytest.raises(ValueError):
        URLMappingService(dao=dao, max_attempts=0)


def test_default_generator_produces_aliases(dao):
    result = URLMappingService(dao=dao).shorten('https://example.com/a')

    assert result.ok
    assert len(result.value.short_url) == 7
    assert result.value.short_url.isalnum()


# -------------------------------
# 2. Custom aliases
# -------------------------------


def test_shorten_with_custom_alias(service, dao):
    result = service.shorten('https://example.com/b', 'custom1')

    assert result.value == ShortURLModel(full_url='https://example.com/b', short_url='custom1')
    dao.find_by_full_url.assert_not_called()


def test_shorten_with_taken_custom_alias(service, dao):
    """Ensure a taken custom alias fails with ALIAS_CONFLICT and no write."""
    service.shorten('https://example.com/b', 'custom1')
    dao.insert.reset_mock()

    result = service.shorten('https://example.com/c', 'custom1')

    assert result.error is ErrorKind.ALIAS_CONFLICT
    assert result.message == 'Custom short name already in use. Please choose another.'
    dao.insert.assert_not_called()


def test_shorten_with_same_custom_alias_and_url_is_not_reused(service):
    service.shorten('https://example.com/b', 'custom1')

    assert service.shorten('https://example.com/b', 'custom1').error is ErrorKind.ALIAS_CONFLICT


def test_shorten_with_custom_alias_race_lost():
    dao = MagicMock(spec=ShortURLBaseDAO)
    dao.get.side_effect = ShortURLNotFoundError()
    dao.insert.side_effect = ShortURLAlreadyExistsError()
    service = URLMappingService(dao=dao)

    result = service.shorten('https://example.com/b', 'custom1')

    assert result.error is ErrorKind.ALIAS_CONFLICT
    dao.insert.assert_called_once()


def test_custom_alias_for_already_shortened_url(service):
    generated = service.shorten('https://example.com/a')
    custom = service.shorten('https://example.com/a', 'second')

    assert custom.ok
    assert custom.value.short_url == 'second'
    assert generated.value.short_url != custom.value.short_url


@pytest.mark.parametrize('custom_alias', ['', None])
def test_empty_custom_alias_is_generated(service, custom_alias):
    assert service.shorten('https://example.com/a', custom_alias).value.short_url == 'gen0001'


# -------------------------------
# 3. Input validation
# -------------------------------


@pytest.mark.parametrize(
    'full_url',
    [
        'http://example.com/d',
        'ftp://example.com',
        'example.com',
        'HTTPS://example.com',
        'https://',
        '',
        None,
        42,
    ],
)
def test_shorten_with_invalid_url(service, dao, full_url):
    """Ensure invalid URLs fail with INVALID_INPUT before touching the store."""
    result = service.shorten(full_url)

    assert result.error is ErrorKind.INVALID_INPUT
    assert result.message == 'Invalid URL format. Must start with "https://"'
    assert dao.mock_calls == []


@pytest.mark.parametrize('custom_alias', ['with/slash', 'with space', 'a' * 65, '../etc', 'emoji🙂'])
def test_shorten_with_unsafe_custom_alias(service, dao, custom_alias):
    result = service.shorten('https://example.com/a', custom_alias)

    assert result.error is ErrorKind.INVALID_INPUT
    assert dao.mock_calls == []


# -------------------------------
# 4. Resolve and list
# -------------------------------


def test_resolve_after_shorten(service):
    created = service.shorten('https://example.com/a').value

    result = service.resolve(created.short_url)

    assert result.value.full_url == 'https://example.com/a'


@pytest.mark.parametrize('alias', ['doesnotexist', '', None])
def test_resolve_unknown_alias(service, alias):
    result = service.resolve(alias)

    assert result.error is ErrorKind.NOT_FOUND
    assert result.value is None


def test_list_all(service):
    service.shorten('https://example.com/a')
    service.shorten('https://example.com/b', 'custom1')

    result = service.list_all()

    assert result.ok
    assert {short_url.short_url for short_url in result.value} == {'gen0001', 'custom1'}


def test_list_all_empty(service):
    assert service.list_all().value == []


# -------------------------------
# 5. Data store failures
# -------------------------------


@pytest.mark.parametrize('custom_alias', [None, 'custom1'])
def test_shorten_store_failure(failing_dao, custom_alias):
    result = URLMappingService(dao=failing_dao).shorten('https://example.com/a', custom_alias)

    assert result.error is ErrorKind.STORE_FAILURE
    assert 'Redis' not in result.message


def test_shorten_store_failure_on_insert():
    dao = MagicMock(spec=ShortURLBaseDAO)
    dao.get.side_effect = ShortURLNotFoundError()
    dao.find_by_full_url.side_effect = ShortURLNotFoundError()
    dao.insert.side_effect = DataStoreError('write failed')

    assert URLMappingService(dao=dao).shorten('https://example.com/a').error is ErrorKind.STORE_FAILURE


def test_resolve_store_failure(failing_dao):
    assert URLMappingService(dao=failing_dao).resolve('abc123').error is ErrorKind.STORE_FAILURE


def test_list_all_store_failure(failing_dao):
    assert URLMappingService(dao=failing_dao).list_all().error is ErrorKind.STORE_FAILURE


# -------------------------------
# 6. Scenarios
# -------------------------------


def test_scenario_generated_alias_reuse_and_resolve(service, dao):
    created = service.shorten('https://example.com/a')
    again = service.shorten('https://example.com/a')
    resolved = service.resolve(created.value.short_url)

    assert created.value.full_url == 'https://example.com/a'
    assert again.value == created.value
    assert resolved.value.full_url == 'https://example.com/a'
    assert dao.insert.call_count == 1


def test_scenario_custom_alias_conflict(service):
    created = service.shorten('https://example.com/b', 'custom1')
    conflict = service.shorten('https://example.com/c', 'custom1')

    assert created.value == ShortURLModel(full_url='https://example.com/b', short_url='custom1')
    assert conflict.error is ErrorKind.ALIAS_CONFLICT


def test_scenario_wrong_scheme(service):
    assert service.shorten('http://example.com/d').error is ErrorKind.INVALID_INPUT


def test_scenario_unknown_alias(service):
    assert service.resolve('doesnotexist').error is ErrorKind.NOT_FOUND
