class TempShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:tempshortener_error'


class InvalidArgumentError(TempShortenerError, ValueError):
    """Raised when a caller passes a semantically invalid argument (e.g. non-positive click limit)."""

    error_code = 'app:invalid_argument_error'


class ConfigurationError(TempShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
