"""Configuration management."""
from orameta.config.connection import (
    ConnectionConfigError,
    build_filter_spec,
    load_config,
    mask_config,
    validate_connection_config,
)

__all__ = [
    'ConnectionConfigError',
    'build_filter_spec',
    'load_config',
    'mask_config',
    'validate_connection_config',
]
