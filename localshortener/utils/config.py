"""Utility functions for application configuration management.

Configuration is kept in YAML files, one per application environment
(`APP_ENV`), inside a `config/` directory at the project root:

    config/
    ├── local.yml
    └── dev.yml

A configuration file follows this structure (every key is optional, missing
keys fall back to the defaults below):

    redis:
      host: localhost
      port: 6379
      db: 0
      username: null
      password: null
    auth:
      login_delay: 0.5
      register_delay: 0.8
      seed_demo_accounts: true
    redirect:
      delay: 1.5

`CONFIG_PATH` points to an explicit file instead. Redis connection settings
can be overridden individually with the `REDIS_HOST`, `REDIS_PORT`,
`REDIS_DB`, `REDIS_USERNAME` and `REDIS_PASSWORD` environment variables.

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for DAOs, or None if `APP_NAME` is not set.

    project_root() -> Path
        Return the absolute path to the project root directory, using
        `PROJECT_ROOT` when available.

    config_path() -> Path
        Return the configuration file path for the current environment.

    load_config() -> dict
        Load the configuration document merged over defaults and
        environment overrides.

Example:
    >>> from localshortener.utils.config import load_config
    >>> config = load_config()
    >>> config['redis']['host']
    'localhost'
"""

import os
import copy
import logging
from pathlib import Path

import yaml

from localshortener.constants import ENV, Delay
from localshortener.exceptions import BadConfigurationError
from localshortener.types import AppConfig


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: AppConfig = {
    'redis': {
        'host': 'localhost',
        'port': 6379,
        'db': 0,
        'username': None,
        'password': None,
    },
    'auth': {
        'login_delay': Delay.LOGIN,
        'register_delay': Delay.REGISTER,
        'seed_demo_accounts': True,
    },
    'redirect': {
        'delay': Delay.REDIRECT,
    },
}

_REDIS_ENV_OVERRIDES = {
    'host': (ENV.Redis.HOST, str),
    'port': (ENV.Redis.PORT, int),
    'db': (ENV.Redis.DB, int),
    'username': (ENV.Redis.USERNAME, str),
    'password': (ENV.Redis.PASSWORD, str),
}


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


def project_root() -> Path:
    """Return the absolute path to the project root directory

    Reads the PROJECT_ROOT environment variable.
    Falls back to the parent directory of the package.
    """
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return key prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'localshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'localshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def config_path() -> Path:
    explicit = os.environ.get(ENV.App.CONFIG_PATH)
    if explicit:
        return Path(explicit)
    return project_root() / 'config' / f'{app_env()}.yml'


def _merge(base: dict, override: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _read_config_file(path: Path) -> AppConfig:
    """Read a YAML configuration document

    Raises:
        FileNotFoundError:
            If CONFIG_PATH was set explicitly and the file doesn't exist.
        BadConfigurationError:
            If the file isn't valid YAML or isn't a mapping.
    """
    if not path.exists():
        if os.environ.get(ENV.App.CONFIG_PATH):
            raise FileNotFoundError(f'Configuration file {path} does not exist.')
        logger.debug('No configuration file found. Using defaults.', extra={'configPath': str(path)})
        return {}

    try:
        with path.open(encoding='utf-8') as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Invalid YAML in configuration file {path}.') from e

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a mapping (given type: {type(document).__name__}).')
    return document


def _apply_environment_overrides(config: AppConfig) -> AppConfig:
    for option, (env_name, cast) in _REDIS_ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if not value:
            continue
        try:
            config['redis'][option] = cast(value)
        except ValueError as e:
            raise BadConfigurationError(f'Invalid value for {env_name}: {value!r}') from e
    return config


def load_config() -> AppConfig:
    """Load application configuration for the current environment

    Returns:
        dict: configuration with 'redis', 'auth' and 'redirect' sections.

    Raises:
        FileNotFoundError:
            If CONFIG_PATH points to a missing file.
        BadConfigurationError:
            If the configuration document or an override is malformed.

    Example:
        >>> app_config = load_config()
        >>> app_config['auth']['login_delay']
        0.5
    """
    path = config_path()
    logger.debug('Loading configuration.', extra={'configPath': str(path), 'appEnv': app_env()})

    config = _merge(DEFAULT_CONFIG, _read_config_file(path))
    return _apply_environment_overrides(config)
