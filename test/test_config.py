"""
Tests for tolerance configuration loading and validation.
"""

import pytest
import yaml
from pydantic import ValidationError

from frc_geometry import constants
from frc_geometry.config import (
    DEFAULT_TOLERANCES,
    ToleranceParams,
    load_tolerance_config,
    load_yaml_config,
    merge_configs,
)
from frc_geometry.geometry import Pose2d, Rotation2d, Translation2d


class TestToleranceParams:
    """Tests for the pydantic parameter model."""

    def test_defaults_match_constants(self):
        """Model defaults come from the constants module."""
        assert DEFAULT_TOLERANCES.translation_tolerance == constants.TRANSLATION_TOLERANCE_DEFAULT
        assert DEFAULT_TOLERANCES.rotation_tolerance == constants.ROTATION_TOLERANCE_DEFAULT
        assert DEFAULT_TOLERANCES.twist_tolerance == constants.TWIST_TOLERANCE_DEFAULT

    def test_rejects_unknown_keys(self):
        """Misspelled keys raise instead of being dropped."""
        with pytest.raises(ValidationError):
            ToleranceParams(angle_tolerance=1e-3)

    @pytest.mark.parametrize("value", [0.0, -1e-6])
    def test_rejects_non_positive(self, value):
        """Tolerances must be strictly positive."""
        with pytest.raises(ValidationError):
            ToleranceParams(translation_tolerance=value)

    def test_frozen(self):
        """Parameter objects are immutable."""
        with pytest.raises(ValidationError):
            DEFAULT_TOLERANCES.rotation_tolerance = 1.0

    def test_params_change_is_near(self):
        """Looser tolerances accept larger differences."""
        a = Pose2d.from_xy(0.0, 0.0)
        b = Pose2d.from_xy(1e-4, 0.0, Rotation2d(1e-4))
        loose = ToleranceParams(translation_tolerance=1e-3, rotation_tolerance=1e-3)
        assert not a.is_near(b)
        assert a.is_near(b, loose)


class TestLoading:
    """Tests for YAML loading and merging."""

    def test_load_yaml_config(self, tolerance_yaml):
        """Nested sections load as plain dicts."""
        data = load_yaml_config(tolerance_yaml["base"])
        assert data["tolerances"]["translation_tolerance"] == pytest.approx(1e-6)
        assert data["other_section"] == {"unused": True}

    def test_load_missing_file(self, tmp_path):
        """A missing path raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_yaml_config(tmp_path / "missing.yaml")

    def test_load_invalid_yaml(self, tmp_path):
        """Malformed YAML surfaces the parser error."""
        path = tmp_path / "broken.yaml"
        path.write_text("tolerances: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml_config(path)

    def test_empty_file_is_empty_dict(self, tmp_path):
        """An empty document loads as {}."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_merge_configs_is_deep(self):
        """Later dicts override earlier ones key by key at every depth."""
        merged = merge_configs(
            {"a": {"x": 1, "y": 2}, "b": 1},
            {"a": {"y": 3}},
            {},
            {"c": 4},
        )
        assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}

    def test_merge_does_not_mutate_inputs(self):
        """Merging leaves the source dicts untouched."""
        base = {"a": {"x": 1}}
        merge_configs(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestLoadToleranceConfig:
    """Tests for load_tolerance_config."""

    def test_no_sources_gives_defaults(self):
        """No files and no overrides gives the default tolerances."""
        assert load_tolerance_config() == DEFAULT_TOLERANCES

    def test_base_only(self, tolerance_yaml):
        """The tolerances section of the base file is applied."""
        params = load_tolerance_config(tolerance_yaml["base"])
        assert params.translation_tolerance == pytest.approx(1e-6)
        assert params.rotation_tolerance == pytest.approx(1e-6)

    def test_preset_overrides_base(self, tolerance_yaml):
        """Preset keys win; keys it omits keep the base values."""
        params = load_tolerance_config(tolerance_yaml["base"], preset_path=tolerance_yaml["preset"])
        assert params.rotation_tolerance == pytest.approx(1e-3)
        assert params.translation_tolerance == pytest.approx(1e-6)

    def test_overrides_win(self, tolerance_yaml):
        """Explicit overrides beat both files."""
        params = load_tolerance_config(
            tolerance_yaml["base"],
            preset_path=tolerance_yaml["preset"],
            overrides={"rotation_tolerance": 0.5},
        )
        assert params.rotation_tolerance == 0.5

    def test_invalid_values_rejected(self, tmp_path):
        """Validation runs on values read from disk."""
        path = tmp_path / "bad.yaml"
        path.write_text("tolerances:\n  twist_tolerance: -1.0\n")
        with pytest.raises(ValidationError):
            load_tolerance_config(path)

    def test_loaded_params_drive_comparisons(self, tolerance_yaml):
        """Loaded tolerances change is_near results."""
        params = load_tolerance_config(tolerance_yaml["base"])
        assert Translation2d(0.0, 0.0).is_near(Translation2d(5e-7, 0.0), params)
        assert not Translation2d(0.0, 0.0).is_near(Translation2d(5e-6, 0.0), params)
