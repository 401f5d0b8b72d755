"""Tests for driver configuration and the YAML defaults."""

import pytest

from simelastic.config import (
    ConfigurationError,
    ElasticityConfig,
    create_default_config,
    create_validated_config,
    get_default,
    get_defaults,
    validate_config,
)
from simelastic.config import yaml_loader


class TestDefaults:
    """Tests for defaults.yaml access."""

    def test_get_default(self):
        assert get_default("driver.dimension") == 3
        assert get_default("driver.context") == "elasticity"
        assert get_default("two_dimensional.plane_strain") is False
        assert get_default("property_codes.bodyforce_comp_3d") == 123

    def test_missing_key(self):
        assert get_default("driver.missing", "fallback") == "fallback"
        assert get_default("nonexistent.key") is None

    def test_get_defaults_sections(self):
        assert set(get_defaults()) >= {"driver", "two_dimensional", "property_codes"}

    def test_env_override(self, tmp_path, monkeypatch):
        path = tmp_path / "defaults.yaml"
        path.write_text("driver:\n  dimension: 2\n  context: solid\n")
        monkeypatch.setenv(yaml_loader.ENV_DEFAULTS_PATH, str(path))

        yaml_loader.reload_defaults()
        try:
            assert get_default("driver.context") == "solid"
            assert create_default_config().dimension == 2
            assert get_default("property_codes.bodyforce_comp_3d") == 123
        finally:
            monkeypatch.delenv(yaml_loader.ENV_DEFAULTS_PATH)
            yaml_loader.reload_defaults()

        assert get_default("driver.context") == "elasticity"


class TestElasticityConfig:
    """Tests for ElasticityConfig."""

    def test_default_is_valid(self):
        config = create_default_config()
        assert config.validate() == []
        assert config.dimension == 3
        assert config.bodyforce_comp == 123

    def test_2d(self):
        config = create_default_config(dimension=2)
        assert config.bodyforce_comp == 12

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"dimension": 1}, "dimension"),
            ({"context": ""}, "context"),
            ({"dimension": 3, "plane_strain": True}, "plane_strain"),
            ({"dimension": 3, "axisymmetric": True}, "axisymmetric"),
            ({"dimension": 3, "gauss_points_vtf": True}, "gauss_points_vtf"),
            ({"dimension": 2, "plane_strain": True, "axisymmetric": True}, "mutually exclusive"),
        ],
    )
    def test_invalid(self, kwargs, message):
        errors = ElasticityConfig(**kwargs).validate()
        assert any(message in e for e in errors)

    def test_dict_round_trip(self):
        config = ElasticityConfig(dimension=2, plane_strain=True, context="solid")
        assert ElasticityConfig.from_dict(config.to_dict()) == config

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "model.yaml"
        path.write_text("driver:\n  dimension: 2\ntwo_dimensional:\n  axisymmetric: true\n")

        config = ElasticityConfig.from_yaml(path)

        assert config.dimension == 2
        assert config.axisymmetric
        assert not config.plane_strain
        assert config.context == "elasticity"

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ElasticityConfig.from_yaml(tmp_path / "missing.yaml")


class TestValidation:
    """Tests for validate_config and create_validated_config."""

    def test_validate_config(self):
        assert validate_config(ElasticityConfig()) == (True, [])

        ok, errors = validate_config(ElasticityConfig(dimension=5), raise_on_error=False)
        assert not ok
        assert len(errors) == 1

        with pytest.raises(ConfigurationError, match="1 error"):
            validate_config(ElasticityConfig(dimension=5))

    def test_create_validated_config(self):
        config = create_validated_config(dimension=2, plane_strain=True)
        assert config.dimension == 2
        assert config.plane_strain

    def test_create_validated_config_invalid(self):
        with pytest.raises(ConfigurationError):
            create_validated_config(dimension=3, axisymmetric=True)

    def test_unknown_parameter(self):
        with pytest.raises(ValueError, match="Unknown configuration parameter"):
            create_validated_config(stiffness=1.0)
