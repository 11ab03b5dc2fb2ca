"""Abstract base class for short link data access objects (DAOs).

This class establishes a consistent contract for all short link registry
implementations, regardless of how records are stored.

Responsibilities:
    - Create short links with a click quota and a TTL.
    - Consume (click) short links and enforce quota and TTL.
    - List and count live short links, globally and per owner.
    - Standardize error handling across implementations.

Example:
    Typical usage with an implementation:

        >>> from tempshortener.dao.memory import ShortLinkMemoryDAO

        >>> dao = ShortLinkMemoryDAO()
        >>> shortcode = dao.create('https://example.com/blog/article-123', 'user-1', 1)

        >>> dao.consume(shortcode, 'user-1')
        'https://example.com/blog/article-123'

        >>> dao.consume(shortcode, 'user-1')
        Traceback (most recent call last):
            ...
        tempshortener.dao.exceptions.LinkQuotaExceededError: Click limit reached for short link '...'.

        >>> dao.count()
        0
"""

from abc import ABC, abstractmethod

from tempshortener.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for short link data access objects (DAOs).

    Methods:
        create(target: str, owner_id: str, click_limit: int, **kwargs) -> str:
            Store a new short link and return its shortcode.
            Raises InvalidArgumentError on a non-positive click limit.

        consume(shortcode: str, owner_id: str, **kwargs) -> str:
            Count one click and return the target URL.
            Raises ShortLinkNotFoundError, ShortLinkExpiredError or LinkQuotaExceededError.

        list_by_owner(owner_id: str, **kwargs) -> list[ShortLinkModel]:
            Return live short links of an owner in creation order.

        count(**kwargs) -> int:
            Return the number of live short links.

        count_by_owner(owner_id: str, **kwargs) -> int:
            Return the number of live short links of an owner.

        shutdown(timeout: float | None = None) -> None:
            Release background resources.

    Subclassing:
        Implementations (e.g., ShortLinkMemoryDAO) must extend this class and
        implement all abstract methods.

    NOTE:
        - Links expire automatically. There is no interface to manually
          delete entries.
    """

    @abstractmethod
    def create(self, target: str, owner_id: str, click_limit: int, **kwargs) -> str:
        """Store a new short link.

        Args:
            target (str):
                Original long URL.

            owner_id (str):
                Identity of the link's creator.

            click_limit (int):
                Number of permitted clicks. Must be positive.

            **kwargs:
                Additional keyword arguments, used by the implementation.

        Returns:
            str: the newly generated, unique shortcode.

        Raises:
            InvalidArgumentError:
                If click_limit isn't positive, or target/owner_id are empty.

            RegistryShutdownError:
                If the registry no longer accepts new links.
        """
        pass

    @abstractmethod
    def consume(self, shortcode: str, owner_id: str, **kwargs) -> str:
        """Count one click on a short link and return its target.

        The click that reaches the click limit succeeds; the link is evicted
        right after it.

        Args:
            shortcode (str):
                Code of the short link.

            owner_id (str):
                Identity of the requester. Accepted for future authorization,
                currently not compared with the link's owner.

            **kwargs:
                Additional keyword arguments, used by the implementation.

        Returns:
            str: the target URL.

        Raises:
            ShortLinkNotFoundError:
                If no live short link has this code.

            ShortLinkExpiredError:
                If the link outlived its TTL. The link is evicted.

            LinkQuotaExceededError:
                If the click limit was already reached. The link is evicted.
        """
        pass

    @abstractmethod
    def list_by_owner(self, owner_id: str, **kwargs) -> list[ShortLinkModel]:
        """Return snapshots of an owner's live short links in creation order."""
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Return the number of live short links."""
        pass

    def count_by_owner(self, owner_id: str, **kwargs) -> int:
        """Return the number of live short links of an owner."""
        return len(self.list_by_owner(owner_id, **kwargs))

    @abstractmethod
    def shutdown(self, timeout: float | None = None) -> None:
        """Stop accepting links and release background resources.

        Must not raise, and must return within a bounded time.
        """
        pass
