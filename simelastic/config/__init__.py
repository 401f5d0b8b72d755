"""Configuration Module for the simelastic driver

Default Configuration (loaded from defaults.yaml):
    from simelastic.config import get_default

    dim = get_default('driver.dimension')

Recommended Usage:
    from simelastic.config import create_validated_config

    config = create_validated_config(dimension=2, plane_strain=True)

Submodules:
    enums: PropertyKind, VecFuncType
    yaml_loader: YAML configuration loader (get_default, get_defaults)
    driver_config: ElasticityConfig dataclass
    validation: ConfigurationError, validate_config, create_validated_config
"""

from simelastic.config.enums import PropertyKind, VecFuncType
from simelastic.config.yaml_loader import get_default, get_defaults, reload_defaults
from simelastic.config.driver_config import ElasticityConfig, create_default_config
from simelastic.config.validation import (
    ConfigurationError,
    create_validated_config,
    validate_config,
)

__all__ = [
    # Enums
    "PropertyKind",
    "VecFuncType",
    # Config classes
    "ElasticityConfig",
    "create_default_config",
    "create_validated_config",
    # Validation
    "ConfigurationError",
    "validate_config",
    # YAML defaults access
    "get_default",
    "get_defaults",
    "reload_defaults",
]
