"""Simulation models: generic model data and the elasticity driver."""

from simelastic.model.base import BaseModel, TopologyItem
from simelastic.model.driver import ElasticityDriver

__all__ = [
    "BaseModel",
    "TopologyItem",
    "ElasticityDriver",
]
