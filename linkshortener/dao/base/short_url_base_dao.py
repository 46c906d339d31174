"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory, DynamoDB).

Responsibilities:
    - Provide an interface for inserting and retrieving ShortURLModel objects.
    - Look up mappings either by alias or by full URL.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.models import ShortURLModel
        >>> from linkshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = ShortURLModel(
        ...     full_url="https://example.com/blog/article-123",
        ...     short_url="a1b2c3",
        ... )
        >>> dao.insert(short_url)

        >>> dao.get("a1b2c3").full_url
        'https://example.com/blog/article-123'

        >>> dao.find_by_full_url("https://example.com/blog/article-123").short_url
        'a1b2c3'
"""

from abc import ABC, abstractmethod

from linkshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert a new ShortURLModel into the data store if its alias is free.
            Raises ShortURLAlreadyExistsError if the alias already exists.
            Raises DataStoreError on connection or write failure.

        get(short_url: str, **kwargs) -> ShortURLModel:
            Retrieve a ShortURLModel from the data store by alias.
            Raises ShortURLNotFoundError if the entry does not exist.
            Raises DataStoreError on connection or read failure.

        find_by_full_url(full_url: str, **kwargs) -> ShortURLModel:
            Retrieve the first ShortURLModel stored for a full URL.
            Raises ShortURLNotFoundError if the URL was never shortened.
            Raises DataStoreError on connection or read failure.

        all(**kwargs) -> list[ShortURLModel]:
            Retrieve every ShortURLModel in the data store.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., ShortURLRedisDAO or
        ShortURLMemoryDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - Mappings are write-once. The DAO does not provide an interface to
          update or delete entries.
        - insert() must be a conditional insert: the check for an existing
          alias and the write happen as a single store operation.
    """

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a ShortURLModel with the same alias already exists

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, short_url: str, **kwargs) -> ShortURLModel:
        """Retrieve a ShortURLModel from the data store by its alias.

        Args:
            short_url (str):
                The alias of the ShortURLModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The ShortURLModel instance.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given alias exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_full_url(self, full_url: str, **kwargs) -> ShortURLModel:
        """Retrieve the first ShortURLModel stored for a full URL.

        Args:
            full_url (str):
                The original long URL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLModel: The earliest stored mapping pointing at full_url.

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel points at the given URL.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def all(self, **kwargs) -> list[ShortURLModel]:
        """Retrieve every ShortURLModel in the data store.

        Returns:
            list[ShortURLModel]: All stored mappings, sorted by alias.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
