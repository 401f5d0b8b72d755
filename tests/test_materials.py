"""Tests for the isotropic material and the material catalog."""

import numpy as np
import pytest

from simelastic.core.materials import LinearIsotropicMaterial, MaterialCatalog


class TestLinearIsotropicMaterial:
    """Tests for LinearIsotropicMaterial."""

    def test_invalid_constants(self):
        with pytest.raises(ValueError, match="Young's modulus"):
            LinearIsotropicMaterial(E=0.0, nu=0.3)
        with pytest.raises(ValueError, match="Poisson's ratio"):
            LinearIsotropicMaterial(E=1.0, nu=0.5)
        with pytest.raises(ValueError, match="Mass density"):
            LinearIsotropicMaterial(E=1.0, nu=0.3, rho=-1.0)

    def test_lame_parameters(self):
        lam, mu = LinearIsotropicMaterial(E=2.6, nu=0.3).lame_parameters
        assert mu == pytest.approx(1.0)
        assert lam == pytest.approx(1.5)

    def test_constitutive_matrix_3d(self, steel):
        C = steel.constitutive_matrix(3)
        lam, mu = steel.lame_parameters

        assert C.shape == (6, 6)
        np.testing.assert_allclose(C, C.T)
        assert C[0, 0] == pytest.approx(lam + 2.0 * mu)
        assert C[0, 1] == pytest.approx(lam)
        assert C[3, 3] == pytest.approx(mu)

    def test_plane_stress(self):
        mat = LinearIsotropicMaterial(E=1.0, nu=0.25, plane_strain=False)
        C = mat.constitutive_matrix(2)

        factor = 1.0 / (1.0 - 0.25**2)
        np.testing.assert_allclose(C[:2, :2], factor * np.array([[1.0, 0.25], [0.25, 1.0]]))
        assert C[2, 2] == pytest.approx(0.5 / 1.25)

    def test_plane_strain_is_stiffer(self):
        stress = LinearIsotropicMaterial(E=1.0, nu=0.3, plane_strain=False).constitutive_matrix(2)
        strain = LinearIsotropicMaterial(E=1.0, nu=0.3, plane_strain=True).constitutive_matrix(2)
        assert strain[0, 0] > stress[0, 0]
        assert strain[2, 2] == pytest.approx(stress[2, 2])

    def test_unsupported_dimension(self, steel):
        with pytest.raises(ValueError):
            steel.constitutive_matrix(1)


class TestMaterialCatalog:
    """Tests for MaterialCatalog."""

    def test_append_returns_index(self, steel, aluminium):
        catalog = MaterialCatalog()
        assert catalog.append(steel) == 0
        assert catalog.append(aluminium) == 1
        assert len(catalog) == 2
        assert list(catalog) == [steel, aluminium]

    def test_lookup_past_end_returns_last(self, steel, aluminium):
        catalog = MaterialCatalog()
        catalog.append(steel)
        catalog.append(aluminium)

        assert catalog.at(0) is steel
        assert catalog.at(1) is aluminium
        assert catalog.at(99) is aluminium

    def test_empty_catalog(self):
        with pytest.raises(IndexError):
            MaterialCatalog().at(0)

    def test_negative_index(self, steel):
        catalog = MaterialCatalog()
        catalog.append(steel)
        with pytest.raises(IndexError):
            catalog.at(-1)

    def test_clear(self, steel):
        catalog = MaterialCatalog()
        catalog.append(steel)
        catalog.clear()
        assert len(catalog) == 0
