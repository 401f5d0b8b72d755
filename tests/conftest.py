"""Pytest configuration and shared fixtures for simelastic tests."""

import pytest

from simelastic.config import ElasticityConfig
from simelastic.core.anasol import AnalyticalSolution
from simelastic.core.functions import ConstantVecFunc, parse_stensor_func
from simelastic.core.materials import LinearIsotropicMaterial
from simelastic.model.driver import ElasticityDriver


# Fixtures for configurations


@pytest.fixture
def config_3d():
    """Default 3D configuration."""
    return ElasticityConfig(dimension=3)


@pytest.fixture
def config_2d():
    """2D plane strain configuration."""
    return ElasticityConfig(dimension=2, plane_strain=True)


# Fixtures for drivers


@pytest.fixture
def driver(config_3d):
    """3D driver for a four-patch model owning all patches."""
    return ElasticityDriver(config_3d, num_patches=4)


@pytest.fixture
def driver_2d(config_2d):
    """2D plane strain driver for a two-patch model."""
    return ElasticityDriver(config_2d, num_patches=2)


@pytest.fixture
def partitioned_driver(config_3d):
    """3D driver owning patches 2 and 4 of a four-patch model."""
    return ElasticityDriver(config_3d, num_patches=4, owned_patches=[2, 4])


# Fixtures for model data


@pytest.fixture
def steel():
    return LinearIsotropicMaterial(E=210e9, nu=0.3, rho=7850.0)


@pytest.fixture
def aluminium():
    return LinearIsotropicMaterial(E=70e9, nu=0.33, rho=2700.0)


@pytest.fixture
def analytical_solution():
    """Analytical solution with constant displacement and uniaxial stress."""
    return AnalyticalSolution(
        vector=ConstantVecFunc([1.0, 2.0, 3.0]),
        stress=parse_stensor_func("10 | 0 | 0 | 0 | 0 | 0"),
    )


@pytest.fixture
def displacement_only_solution():
    """Analytical solution without a stress field."""
    return AnalyticalSolution(vector=ConstantVecFunc([0.0, 0.0, 1.0]))
