"""Utility functions for application configuration management.

Configuration is resolved in three layers, later layers win:

    1. Built-in defaults (see `tempshortener.constants`)
    2. Optional YAML document, under its `registry` section
    3. Environment variables

The YAML document is located via the `path` argument or the
`TEMPSHORTENER_CONFIG` environment variable and follows this structure:

    registry:
        link_lifetime_seconds: 43200
        shutdown_timeout_seconds: 5
        owner_id_file: user_id.txt

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    load_config(path: str | Path | None = None) -> dict
        Load the YAML configuration document as a Python dictionary.

    load_settings(path: str | Path | None = None) -> RegistrySettings
        Merge defaults, YAML document and environment into RegistrySettings.

Example:
    >>> from tempshortener.utils.config import load_settings
    >>> os.environ['LINK_LIFETIME_SECONDS'] = '60'
    >>> load_settings().link_lifetime
    datetime.timedelta(seconds=60)
"""

import os
import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from tempshortener.constants import ENV, TTL, DefaultTimeout, DEFAULT_OWNER_ID_FILE
from tempshortener.exceptions import BadConfigurationError
from tempshortener.types import ConfigDocument


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistrySettings:
    """Runtime settings of a short link registry.

    Attributes:
        link_lifetime (timedelta):
            Time-To-Live of every created link.
        shutdown_timeout (float):
            Seconds to wait for outstanding expiry checks on shutdown.
        owner_id_file (Path):
            File holding the interactive shell's owner identity.
    """

    link_lifetime: timedelta = timedelta(seconds=TTL.TWELVE_HOURS)
    shutdown_timeout: float = DefaultTimeout.SHUTDOWN
    owner_id_file: Path = Path(DEFAULT_OWNER_ID_FILE)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def load_config(path: str | Path | None = None) -> ConfigDocument:
    """Load the YAML configuration document

    Args:
        path (str | Path | None):
            Location of the YAML file. Falls back to the `TEMPSHORTENER_CONFIG`
            environment variable when omitted.

    Returns:
        dict:
            Parsed configuration document. Empty if no file is configured.

    Raises:
        FileNotFoundError:
            If a configuration file is configured but doesn't exist.
        BadConfigurationError:
            If the file isn't valid YAML or its top level isn't a mapping.
    """
    path = path or os.environ.get(ENV.App.CONFIG_PATH)
    if not path:
        logger.debug('No configuration file given. Using defaults and environment.')
        return {}

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f'Configuration file not found: {path}')

    with path.open('r', encoding='utf-8') as f:
        try:
            document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise BadConfigurationError(f'Invalid YAML in configuration file {path}') from e

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a mapping at top level.')

    logger.debug('Loaded configuration file %s.', path)
    return document


def load_settings(path: str | Path | None = None) -> RegistrySettings:
    """Resolve RegistrySettings from defaults, YAML document and environment

    Args:
        path (str | Path | None):
            Optional YAML configuration file, see `load_config()`.

    Returns:
        RegistrySettings: the merged settings.

    Raises:
        BadConfigurationError:
            If a value isn't a positive number or the `registry` section isn't a mapping.
    """
    section = load_config(path).get('registry') or {}
    if not isinstance(section, dict):
        raise BadConfigurationError("'registry' section must be a mapping.")

    defaults = RegistrySettings()

    # fmt: off
    lifetime = _positive_number(
        os.environ.get(ENV.Registry.LINK_LIFETIME_SECONDS, section.get('link_lifetime_seconds')),
        name='link_lifetime_seconds',
        default=defaults.link_lifetime.total_seconds(),
    )
    shutdown_timeout = _positive_number(
        os.environ.get(ENV.Registry.SHUTDOWN_TIMEOUT_SECONDS, section.get('shutdown_timeout_seconds')),
        name='shutdown_timeout_seconds',
        default=defaults.shutdown_timeout,
    )
    owner_id_file = os.environ.get(ENV.Registry.OWNER_ID_FILE) \
                    or section.get('owner_id_file') \
                    or defaults.owner_id_file
    # fmt: on

    return RegistrySettings(
        link_lifetime=timedelta(seconds=lifetime),
        shutdown_timeout=shutdown_timeout,
        owner_id_file=Path(owner_id_file),
    )


def _positive_number(value: Any, name: str, default: float) -> float:
    if value is None or value == '':
        return default
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'Invalid {name} value: {value!r}') from e
    if number <= 0:
        raise BadConfigurationError(f'{name} must be positive (given value: {value!r}).')
    return number
