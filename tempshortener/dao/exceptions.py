"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a short link is not present in the registry.

    ShortLinkExpiredError:
        Raised when a short link outlived its TTL at consume time.
        The link is evicted before the error is raised.

    LinkQuotaExceededError:
        Raised when a short link already used up its click quota.
        The link is evicted before the error is raised.

    RegistryShutdownError:
        Raised when creating links on a registry that was shut down.

Example:
    >>> from tempshortener.dao.exceptions import ShortLinkNotFoundError
    >>> raise ShortLinkNotFoundError("Short link with code 'abc12345' not found.")
    Traceback (most recent call last):
        ...
    tempshortener.dao.exceptions.ShortLinkNotFoundError: Short link with code 'abc12345' not found.
"""

from tempshortener.exceptions import TempShortenerError


class DAOError(TempShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a short link is not found in the registry."""

    error_code = 'dao:short_link_not_found_error'


class ShortLinkExpiredError(DAOError):
    """Exception raised when a short link is consumed after its expiry time."""

    error_code = 'dao:short_link_expired_error'


class LinkQuotaExceededError(DAOError):
    """Exception raised when a short link is consumed after reaching its click limit."""

    error_code = 'dao:link_quota_exceeded_error'


class RegistryShutdownError(DAOError):
    """Exception raised when a registry no longer accepts new short links."""

    error_code = 'dao:registry_shutdown_error'
