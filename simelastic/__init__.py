"""Property Resolution and Boundary Condition Binding for Linear Elasticity

Translates material assignments, body forces, pressures and Dirichlet/Neumann
conditions, written in either the line-oriented keyword format or the tag tree
(XML) format, into the bindings an integration engine needs while assembling
each patch of a partitioned patch-based model.

Key Principles:
- One set of binding commands behind two input syntaxes
- Last parsed material is the catalog default
- At most one Dirichlet condition bound to the analytical solution
- Analytical fields are borrowed, never released by the driver

Version: 1.0
"""

__version__ = "1.0"

from simelastic.config import ElasticityConfig, PropertyKind, create_validated_config
from simelastic.core import (
    AnalyticalSolution,
    LinearIsotropicMaterial,
    PropertyRecord,
    PropertyRegistry,
)
from simelastic.integrand import LinearElasticity
from simelastic.model import ElasticityDriver

__all__ = [
    # Version
    "__version__",
    # Config
    "ElasticityConfig",
    "PropertyKind",
    "create_validated_config",
    # Core
    "AnalyticalSolution",
    "LinearIsotropicMaterial",
    "PropertyRecord",
    "PropertyRegistry",
    # Integrand
    "LinearElasticity",
    # Driver
    "ElasticityDriver",
]
