"""
Configuration Validation Utilities

Import Policy:
    from simelastic.config.validation import validate_config, create_validated_config

DO NOT use: from simelastic.config.validation import *
"""

from typing import List, Tuple

from simelastic.config.driver_config import ElasticityConfig, create_default_config


class ConfigurationError(Exception):
    """Raised when configuration validation fails."""

    pass


def validate_config(config: ElasticityConfig, raise_on_error: bool = True) -> Tuple[bool, List[str]]:
    """Validate a driver configuration.

    Args:
        config: ElasticityConfig to validate
        raise_on_error: If True, raise ConfigurationError on validation failure

    Returns:
        Tuple of (is_valid, error_messages)

    Raises:
        ConfigurationError: If validation fails and raise_on_error=True
    """
    errors = config.validate()

    if errors:
        if raise_on_error:
            raise ConfigurationError(
                f"Configuration validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {err}" for err in errors)
            )
        return False, errors

    return True, []


def create_validated_config(**kwargs) -> ElasticityConfig:
    """Create a driver configuration with validation.

    Args:
        **kwargs: Fields of ElasticityConfig to override

    Returns:
        Validated ElasticityConfig

    Raises:
        ConfigurationError: If the resulting configuration is invalid
        ValueError: If an unknown parameter is given

    Example:
        >>> config = create_validated_config(dimension=2, plane_strain=True)
    """
    config = create_default_config(kwargs.pop("dimension", None))

    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise ValueError(f"Unknown configuration parameter: {key}")
        setattr(config, key, value)

    validate_config(config)
    return config
