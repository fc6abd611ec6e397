"""Tests for size and options models."""

import pytest

from playercore.exceptions import ConfigValidationError
from playercore.models import CoreOptions, PlayerInfo, Size, is_number


@pytest.mark.unit
class TestIsNumber:
    """Test unit-less number detection."""

    @pytest.mark.parametrize("value", [0, 200, 12.5, "200", "12.5"])
    def test_numbers(self, value):
        assert is_number(value)

    @pytest.mark.parametrize("value", ["50%", "200px", "", None, True, float("nan"), float("inf"), "auto"])
    def test_not_numbers(self, value):
        assert not is_number(value)


@pytest.mark.unit
class TestSize:
    """Test CSS rendering of sizes."""

    def test_numeric_pair_gets_pixels(self):
        assert Size(width=200, height=100).to_css() == ("200px", "100px")

    def test_string_pair_passes_through(self):
        assert Size(width="50%", height="50%").to_css() == ("50%", "50%")

    def test_mixed_pair_passes_through_unchanged(self):
        """A single numeric dimension is not suffixed on its own."""
        assert Size(width=200, height="50%").to_css() == ("200", "50%")

    def test_numeric_strings_get_pixels(self):
        assert Size(width="320", height="240").to_css() == ("320px", "240px")

    def test_player_info_defaults_are_independent(self):
        info = PlayerInfo()
        assert info.current_size is not info.previous_size
        assert info.computed_size == Size()


@pytest.mark.unit
class TestCoreOptions:
    """Test option validation and merging."""

    def test_defaults(self):
        options = CoreOptions()
        assert options.sources == []
        assert options.resize_poll_interval == 0.5
        assert options.player_id

    def test_player_ids_are_unique(self):
        assert CoreOptions().player_id != CoreOptions().player_id

    def test_from_value_returns_same_instance(self):
        options = CoreOptions()
        assert CoreOptions.from_value(options) is options

    def test_from_value_none(self):
        assert CoreOptions.from_value(None).sources == []

    def test_merge_is_in_place_and_keeps_extra_keys(self):
        options = CoreOptions(width=640)
        merged = options.merge({"width": "100%", "volume": 5})

        assert merged is options
        assert options.width == "100%"
        assert options.volume == 5
        assert options.get("volume") == 5
        assert options.get("missing", "default") == "default"

    def test_invalid_value_raises_config_validation_error(self):
        with pytest.raises(ConfigValidationError) as exc_info:
            CoreOptions.from_value({"resize_poll_interval": -1})

        error = exc_info.value
        assert error.field == "resize_poll_interval"
        assert error.recoverable
        assert "positive number of seconds" in error.recovery_hint
