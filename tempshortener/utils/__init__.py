from tempshortener.utils.config import app_env, app_name, load_config, load_settings, RegistrySettings
from tempshortener.utils.helpers import utc_now, seconds_until
from tempshortener.utils.shortener import generate_shortcode, make_seed
from tempshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'make_seed',
    'app_env',
    'app_name',
    'load_config',
    'load_settings',
    'RegistrySettings',
    'utc_now',
    'seconds_until',
    'initialize_logging',
]
