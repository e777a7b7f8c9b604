"""
Tests cho config.counting_config va config.presets.
"""

import pytest

from config.counting_config import (
    DEFAULT_THRESHOLD_VALUES,
    MAX_THRESHOLDS,
    ConfigError,
    CountingConfig,
    CountMode,
    Threshold,
    apply_symbol_set,
    create_thresholds_with_symbols,
    limit_thresholds,
    normalize_extensions,
    parse_threshold_values,
)
from config.presets import (
    BUILT_IN_PRESETS,
    INDICATOR_SYMBOL_SETS,
    get_preset,
    get_preset_names,
    get_symbol_set,
    is_built_in_preset,
)


class TestThreshold:
    def test_from_dict(self):
        threshold = Threshold.from_dict({"value": 100, "indicator": "🔵", "description": "Small"})
        assert threshold == Threshold(100, "🔵", "Small")

    def test_from_dict_float_value(self):
        assert Threshold.from_dict({"value": 5.0, "indicator": "A"}).value == 5

    @pytest.mark.parametrize(
        "data",
        [
            {"indicator": "A"},
            {"value": True, "indicator": "A"},
            {"value": "10", "indicator": "A"},
            {"value": -1, "indicator": "A"},
            {"value": 1},
            {"value": 1, "indicator": ""},
        ],
    )
    def test_from_dict_invalid(self, data):
        with pytest.raises(ConfigError):
            Threshold.from_dict(data)


class TestCountingConfig:
    def test_from_dict_camel_case(self):
        config = CountingConfig.from_dict(
            {
                "countMode": "tokens",
                "supportedExtensions": [".md"],
                "thresholds": [{"value": 0, "indicator": "A"}],
                "indicatorSymbolSet": "Numbers",
            }
        )
        assert config.count_mode == CountMode.TOKENS
        assert config.supported_extensions == (".md",)
        assert config.thresholds == (Threshold(0, "A"),)
        assert config.indicator_symbol_set == "Numbers"

    def test_from_dict_unknown_mode_falls_back(self):
        assert CountingConfig.from_dict({"countMode": "words"}).count_mode == CountMode.LINES

    def test_to_dict_roundtrip(self):
        config = BUILT_IN_PRESETS["code-review"]
        assert CountingConfig.from_dict(config.to_dict()) == config

    def test_frozen(self):
        config = CountingConfig()
        with pytest.raises(AttributeError):
            config.count_mode = CountMode.TOKENS


class TestHelpers:
    def test_normalize_extensions(self):
        assert normalize_extensions(["py", ".TS ", ".py", "", " "]) == (".py", ".ts")

    def test_parse_threshold_values(self):
        assert parse_threshold_values("0, 100,500") == [0, 100, 500]

    def test_parse_threshold_values_empty(self):
        assert parse_threshold_values("  ") == list(DEFAULT_THRESHOLD_VALUES)

    def test_parse_threshold_values_invalid(self):
        assert parse_threshold_values("0, abc") == list(DEFAULT_THRESHOLD_VALUES)
        assert parse_threshold_values("0, -5") == list(DEFAULT_THRESHOLD_VALUES)
        assert parse_threshold_values("1.5") == list(DEFAULT_THRESHOLD_VALUES)
        assert parse_threshold_values("0, nan") == list(DEFAULT_THRESHOLD_VALUES)
        assert parse_threshold_values("0, inf") == list(DEFAULT_THRESHOLD_VALUES)
        assert parse_threshold_values("-inf") == list(DEFAULT_THRESHOLD_VALUES)

    def test_parse_threshold_values_only_separators(self):
        """Chi co dau phay, khong co value nao -> defaults."""
        assert parse_threshold_values(",") == list(DEFAULT_THRESHOLD_VALUES)
        assert parse_threshold_values(" , ,") == list(DEFAULT_THRESHOLD_VALUES)

    def test_limit_thresholds(self):
        values, warning = limit_thresholds(list(range(10)))
        assert values == list(range(MAX_THRESHOLDS))
        assert warning is not None

    def test_limit_thresholds_no_warning(self):
        assert limit_thresholds([0, 1]) == ([0, 1], None)

    def test_create_thresholds_with_symbols(self):
        thresholds = create_thresholds_with_symbols([500, 0, 100], "Colored Circles")
        assert [(t.value, t.indicator) for t in thresholds] == [
            (0, "⚪"),
            (100, "🔵"),
            (500, "🟢"),
        ]
        assert thresholds[0].description == "Tiny size"

    def test_create_thresholds_unknown_set(self):
        with pytest.raises(ConfigError):
            create_thresholds_with_symbols([0], "No Such Set")

    def test_create_thresholds_not_enough_symbols(self):
        with pytest.raises(ConfigError):
            create_thresholds_with_symbols(list(range(8)), "Numbers")

    def test_apply_symbol_set(self):
        thresholds = (Threshold(0, "⚪", "a"), Threshold(100, "🔵", "b"))
        result = apply_symbol_set(thresholds, "Numbers")
        assert [(t.value, t.indicator, t.description) for t in result] == [
            (0, "1", "a"),
            (100, "2", "b"),
        ]

    def test_apply_symbol_set_unknown_keeps_input(self):
        thresholds = (Threshold(0, "⚪"),)
        assert apply_symbol_set(thresholds, "No Such Set") == thresholds


class TestPresets:
    def test_built_in_names(self):
        assert get_preset_names() == ["default", "llm-context", "code-review", "documentation"]
        assert is_built_in_preset("default")
        assert not is_built_in_preset("mine")

    def test_default_preset_values(self):
        preset = get_preset("default")
        assert preset.count_mode == CountMode.LINES
        assert [t.value for t in preset.thresholds] == list(DEFAULT_THRESHOLD_VALUES)
        assert preset.thresholds[0].indicator == "⚪"

    def test_unknown_preset(self):
        assert get_preset("nope") is None

    def test_symbol_sets_have_seven_symbols(self):
        assert len(INDICATOR_SYMBOL_SETS) == 30
        for symbol_set in INDICATOR_SYMBOL_SETS.values():
            assert len(symbol_set.symbols) == MAX_THRESHOLDS, symbol_set.name

    def test_preset_symbol_sets_exist(self):
        for name, preset in BUILT_IN_PRESETS.items():
            assert get_symbol_set(preset.indicator_symbol_set) is not None, name
