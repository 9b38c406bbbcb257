"""Tests for tolerance settings and profile loading."""

import pytest
from pydantic import ValidationError

from polyclip.geometry.clipping import clip_rings
from polyclip.geometry.metrics import polygon_area
from polyclip.models.geometry import BooleanOperation
from polyclip.models.tolerance import ToleranceConfig
from polyclip.tolerance import (
    configure_tolerance,
    get_profile_path,
    get_tolerance,
    list_profiles,
    load_tolerance,
    reset_tolerance,
)


@pytest.fixture(autouse=True)
def clean_tolerance():
    """Each test starts and ends with the default tolerance."""
    reset_tolerance()
    yield
    reset_tolerance()


class TestToleranceConfig:
    """Test the settings model."""

    def test_defaults(self):
        config = ToleranceConfig()
        assert config.absolute == 1e-9
        assert config.relative == 1e-9
        assert config.sliver_area == 1e-12

    def test_scaled(self):
        config = ToleranceConfig(absolute=1e-9, relative=1e-6)
        assert config.scaled(1000.0) == pytest.approx(1e-9 + 1e-3)
        assert config.scaled(-1000.0) == pytest.approx(1e-9 + 1e-3)

    def test_absolute_must_be_positive(self):
        with pytest.raises(ValidationError):
            ToleranceConfig(absolute=0.0)

    def test_relative_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            ToleranceConfig(relative=-1.0)

    def test_from_yaml(self):
        config = ToleranceConfig.from_yaml("absolute: 0.5\nsliver_area: 0.01\n")
        assert config.absolute == 0.5
        assert config.relative == 1e-9
        assert config.sliver_area == 0.01

    def test_from_empty_yaml(self):
        assert ToleranceConfig.from_yaml("") == ToleranceConfig()

    def test_merge_override(self):
        config = ToleranceConfig().merge_override({"relative": 0.0})
        assert config.relative == 0.0
        assert config.absolute == 1e-9

    def test_merge_override_leaves_original(self):
        original = ToleranceConfig()
        original.merge_override({"absolute": 0.5})
        assert original.absolute == 1e-9

    def test_merge_override_is_validated(self):
        with pytest.raises(ValidationError):
            ToleranceConfig().merge_override({"absolute": -1.0})


class TestProfiles:
    """Test YAML profile discovery and loading."""

    def test_list_profiles(self):
        profiles = list_profiles()
        names = [p["name"] for p in profiles]

        assert names == sorted(names)
        assert {"default", "cad", "survey"} <= set(names)
        assert all(p["description"] for p in profiles)

    def test_description_is_header_comment(self):
        descriptions = {p["name"]: p["description"] for p in list_profiles()}
        assert descriptions["cad"] == "Millimetre drawings snapped to a micron grid"

    def test_load_default(self):
        assert load_tolerance() == ToleranceConfig()

    def test_load_survey(self):
        config = load_tolerance("survey")
        assert config.absolute == pytest.approx(1e-3)
        assert config.sliver_area == pytest.approx(1e-4)

    def test_load_with_override(self):
        config = load_tolerance("cad", override={"absolute": 1e-5})
        assert config.absolute == pytest.approx(1e-5)
        assert config.relative == pytest.approx(1e-12)

    def test_unknown_profile(self):
        with pytest.raises(FileNotFoundError):
            load_tolerance("no_such_profile")

    def test_profile_path(self):
        assert get_profile_path("cad").name == "cad.yaml"


class TestActiveTolerance:
    """Test the process-wide setting."""

    def test_default_loaded_lazily(self):
        assert get_tolerance() == load_tolerance("default")

    def test_configure_profile(self):
        configured = configure_tolerance(profile="cad")

        assert get_tolerance() is configured
        assert configured.absolute == pytest.approx(1e-6)

    def test_configure_explicit(self):
        config = ToleranceConfig(absolute=0.25, relative=0.0)
        configure_tolerance(config)
        assert get_tolerance() == config

    def test_configure_with_override(self):
        configured = configure_tolerance(profile="survey", override={"sliver_area": 0.0})
        assert configured.sliver_area == 0.0
        assert configured.absolute == pytest.approx(1e-3)

    def test_reset(self):
        configure_tolerance(profile="survey")
        reset_tolerance()
        assert get_tolerance() == load_tolerance("default")

    def test_coarse_tolerance_merges_near_coincident_rings(self):
        """Offsets below the configured epsilon are treated as the same ring."""
        unit = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
        shifted = [(x + 0.005, y) for x, y in unit]

        configure_tolerance(ToleranceConfig(absolute=0.01, relative=0.0))

        assert clip_rings(unit, shifted, BooleanOperation.DIFFERENCE) == []
        assert clip_rings(unit, shifted, BooleanOperation.UNION) == [unit]

    def test_explicit_tolerance_beats_active(self):
        unit = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]
        shifted = [(x + 0.005, y) for x, y in unit]

        configure_tolerance(ToleranceConfig(absolute=0.01, relative=0.0))
        strict = ToleranceConfig(absolute=1e-9, relative=0.0)

        rings = clip_rings(unit, shifted, BooleanOperation.DIFFERENCE, strict)
        assert len(rings) == 1
        assert polygon_area(rings[0]) == pytest.approx(0.005)
