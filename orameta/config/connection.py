"""Configuration management."""
import copy
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

import yaml

from orameta.models.filter import FilterSpec

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'database': {
        'user': '',
        'password': '',
        'dsn': '',
        'schema': '',
        'connection_timeout': 30,
        'query_timeout': 300,
    },
    'export': {
        'format': 'csv',
        'output': None,
        'include_comments': True,
        'pretty_print': True,
        'encoding': 'utf-8',
        'append': False,
    },
    'filter': {
        'include': [],
        'exclude': [],
        'case_sensitive': False,
        'regex': False,
        'exclude_system_tables': False,
    },
}

ENV_PREFIX = 'ORACLE'
ENV_PARAMS = ['USER', 'PASSWORD', 'DSN', 'SCHEMA']


class ConnectionConfigError(ValueError):
    """Raised when configuration loading or validation fails."""


def load_config(config_file: Optional[str] = None) -> Dict[str, Any]:
    """Load extraction configuration.

    Loads configuration with the following priority:
    1. Explicit --config path (highest priority)
    2. ~/.orameta/config.yaml
    3. ORACLE_* environment variables
    4. Defaults

    Whatever is found is merged over the defaults, so every section and key
    is always present.

    Args:
        config_file: Optional explicit configuration file path

    Returns:
        Dictionary with 'database', 'export' and 'filter' sections

    Raises:
        ConnectionConfigError: If the configuration file is invalid
    """
    if config_file:
        config = _merge(DEFAULT_CONFIG, _load_yaml_config(config_file))
        logger.info("Loaded config from: %s", config_file)
        return config

    default_path = Path.home() / '.orameta' / 'config.yaml'
    if default_path.exists():
        config = _merge(DEFAULT_CONFIG, _load_yaml_config(str(default_path)))
        logger.info("Loaded config from: %s", default_path)
        return config

    env_config = _load_from_env()
    if env_config:
        logger.info("Loaded database config from environment variables")
        return _merge(DEFAULT_CONFIG, {'database': env_config})

    logger.warning("No configuration found. Using defaults.")
    return copy.deepcopy(DEFAULT_CONFIG)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge ``override`` onto a copy of ``base``."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def _load_yaml_config(file_path: str) -> Dict[str, Any]:
    """Load YAML configuration file.

    Raises:
        ConnectionConfigError: If file is invalid or missing
    """
    try:
        if not os.path.exists(file_path):
            raise ConnectionConfigError(f"Configuration file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict):
            raise ConnectionConfigError(
                f"Configuration file must contain a YAML dictionary: {file_path}"
            )

        for section in ('database', 'export', 'filter'):
            if section in config and not isinstance(config[section], dict):
                raise ConnectionConfigError(
                    f"Section '{section}' must be a YAML dictionary: {file_path}"
                )

        return config

    except yaml.YAMLError as e:
        raise ConnectionConfigError(
            f"Invalid YAML configuration: {file_path}\n{e}"
        ) from e
    except OSError as e:
        raise ConnectionConfigError(
            f"Error reading configuration file: {file_path}\n{e}"
        ) from e


def _load_from_env() -> Optional[Dict[str, Any]]:
    """Load database settings from ORACLE_USER, ORACLE_PASSWORD, ORACLE_DSN, ORACLE_SCHEMA."""
    config = {}
    for param in ENV_PARAMS:
        value = os.getenv(f"{ENV_PREFIX}_{param}")
        if value:
            config[param.lower()] = value
    return config if config else None


def validate_connection_config(config: Dict[str, Any], require_schema: bool = True) -> bool:
    """Validate that the database section has what a connection needs.

    Returns:
        True if configuration has required parameters

    Raises:
        ConnectionConfigError: If required parameters are missing or invalid
    """
    database = config.get('database', {})
    required_fields = ['user', 'password', 'dsn'] + (['schema'] if require_schema else [])
    missing_fields = [f for f in required_fields if not database.get(f)]

    if missing_fields:
        raise ConnectionConfigError(
            f"Missing required connection parameters: {', '.join(missing_fields)}. "
            f"Provide via --config, ~/.orameta/config.yaml or ORACLE_* environment variables"
        )

    for field in ('connection_timeout', 'query_timeout'):
        try:
            value = int(database.get(field, 1))
        except (TypeError, ValueError) as e:
            raise ConnectionConfigError(f"{field} must be an integer") from e
        if value <= 0:
            raise ConnectionConfigError(f"{field} must be positive, got {value}")

    return True


def _as_list(value: Any, split: bool = True) -> list:
    if value is None:
        return []
    if isinstance(value, str):
        # commas are regex syntax ({2,4}), so a regex string is one pattern
        return [p.strip() for p in value.split(',')] if split else [value.strip()]
    return [str(p).strip() for p in value]


def build_filter_spec(
    config: Dict[str, Any],
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
    case_sensitive: Optional[bool] = None,
    use_regex: Optional[bool] = None,
    exclude_system: bool = False,
) -> FilterSpec:
    """Build the FilterSpec for one run.

    Command-line values replace the corresponding 'filter' config values when
    given. Blank patterns are dropped. A comma-separated string is split into
    wildcard patterns; in regex mode the string is kept as a single pattern,
    so several regexes must be given as a YAML list.
    """
    section = config.get('filter', {})

    regex = bool(section.get('regex', False) if use_regex is None else use_regex)
    includes = _as_list(include if include else section.get('include'), split=not regex)
    excludes = _as_list(exclude if exclude else section.get('exclude'), split=not regex)

    spec = FilterSpec(
        include_patterns=[p for p in includes if p],
        exclude_patterns=[p for p in excludes if p],
        case_sensitive=bool(section.get('case_sensitive', False)
                            if case_sensitive is None else case_sensitive),
        use_regex=regex,
    )

    if exclude_system or section.get('exclude_system_tables'):
        spec = spec.with_system_exclusions()
    return spec


def mask_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy safe for logging, with the password hidden."""
    masked = copy.deepcopy(config)
    if masked.get('database', {}).get('password'):
        masked['database']['password'] = '***'
    return masked
