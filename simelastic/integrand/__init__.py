"""Integrands the driver binds materials and loads into."""

from simelastic.integrand.capabilities import LoadBindable, MaterialBindable
from simelastic.integrand.linear_elasticity import LinearElasticity

__all__ = [
    "MaterialBindable",
    "LoadBindable",
    "LinearElasticity",
]
