"""Core data structures of the property binding engine.

This module contains the property registry, the material catalog, the load
binding maps, the analytical boundary condition override, and the function
and field types they hold.
"""

from simelastic.core.anasol import AnalyticalOverrideResolver, AnalyticalSolution
from simelastic.core.errors import InputError
from simelastic.core.fields import PressureField, TractionField, TractionFunc
from simelastic.core.functions import (
    ConstantVecFunc,
    ExpressionFunc,
    ExpressionVecFunc,
    LinearTimeFunc,
    RealFunc,
    STensorFunc,
    VecFunc,
    parse_real_func,
    parse_stensor_func,
    parse_vec_func,
)
from simelastic.core.loads import FieldBinding, LoadBindingResolver
from simelastic.core.materials import LinearIsotropicMaterial, MaterialCatalog
from simelastic.core.properties import PropertyRecord, PropertyRegistry

__all__ = [
    "PropertyRecord",
    "PropertyRegistry",
    "LinearIsotropicMaterial",
    "MaterialCatalog",
    "FieldBinding",
    "LoadBindingResolver",
    "AnalyticalSolution",
    "AnalyticalOverrideResolver",
    "InputError",
    # Functions and fields
    "RealFunc",
    "LinearTimeFunc",
    "ExpressionFunc",
    "VecFunc",
    "ConstantVecFunc",
    "ExpressionVecFunc",
    "STensorFunc",
    "parse_real_func",
    "parse_vec_func",
    "parse_stensor_func",
    "TractionFunc",
    "PressureField",
    "TractionField",
]
