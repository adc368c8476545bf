"""Tests for loading and saving signal configs as YAML."""
import pytest
from pathlib import Path

from synthmarket.shared.types import StrategyType
from synthmarket.signals.config import PREVIEW_CONFIG, DETAILED_CONFIG
from synthmarket.signals.config_loader import load_config_from_yaml, save_config_to_yaml

CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "profile.yaml"
    path.write_text(text)
    return path


class TestLoadConfig:
    def test_minimal_file_inherits_preview(self, tmp_path):
        config = load_config_from_yaml(_write(tmp_path, "name: minimal\n"))
        assert config.name == "minimal"
        assert config.rules == PREVIEW_CONFIG.rules
        assert config.trailing_bars == PREVIEW_CONFIG.trailing_bars

    def test_name_defaults_to_file_stem(self, tmp_path):
        config = load_config_from_yaml(_write(tmp_path, "base: detailed\n"))
        assert config.name == "profile"
        assert config.rules == DETAILED_CONFIG.rules
        assert config.trailing_bars == 2

    def test_rule_overrides_merge_with_base(self, tmp_path):
        path = _write(tmp_path, (
            "base: detailed\n"
            "rules:\n"
            "  mean_reversion:\n"
            "    rsi_oversold: 25\n"
        ))
        config = load_config_from_yaml(path)
        rule = config.rule_for(StrategyType.MEAN_REVERSION)
        assert rule.rsi_oversold == 25
        assert rule.rsi_overbought == 70
        assert rule.max_signals_per_side == 8
        assert config.rule_for("momentum") == DETAILED_CONFIG.rule_for("momentum")

    def test_scan_and_indicator_sections(self, tmp_path):
        path = _write(tmp_path, (
            "scan:\n"
            "  warmup_bars: 25\n"
            "  trailing_bars: 0\n"
            "indicators:\n"
            "  rsi:\n"
            "    period: 7\n"
            "  ema:\n"
            "    short_period: 9\n"
            "    long_period: 21\n"
        ))
        config = load_config_from_yaml(path)
        assert (config.warmup_bars, config.trailing_bars) == (25, 0)
        assert (config.rsi_period, config.ema_short_period, config.ema_long_period) == (7, 9, 21)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config_from_yaml(tmp_path / "nope.yaml")

    def test_empty_file_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Empty"):
            load_config_from_yaml(_write(tmp_path, ""))

    def test_unknown_base_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown base preset"):
            load_config_from_yaml(_write(tmp_path, "base: turbo\n"))

    def test_unknown_strategy_raises(self, tmp_path):
        path = _write(tmp_path, "rules:\n  grid:\n    lookback: 5\n")
        with pytest.raises(ValueError, match="Unknown strategy"):
            load_config_from_yaml(path)

    def test_unknown_rule_setting_raises(self, tmp_path):
        path = _write(tmp_path, "rules:\n  swing:\n    stop_loss: 5\n")
        with pytest.raises(ValueError, match="stop_loss"):
            load_config_from_yaml(path)

    def test_invalid_value_raises(self, tmp_path):
        path = _write(tmp_path, "rules:\n  swing:\n    rsi_oversold: 80\n")
        with pytest.raises(ValueError, match="oversold"):
            load_config_from_yaml(path)

    def test_wrong_type_raises_value_error(self, tmp_path):
        path = _write(tmp_path, "rules:\n  swing:\n    max_signals_per_side: many\n")
        with pytest.raises(ValueError):
            load_config_from_yaml(path)

    @pytest.mark.parametrize("text,section", [
        ("indicators:\n  rsi: 14\n", "indicators.rsi"),
        ("indicators:\n  ema: 20\n", "indicators.ema"),
        ("indicators: fast\n", "indicators"),
        ("scan: 5\n", "scan"),
        ("rules:\n  - swing\n", "rules"),
    ])
    def test_non_mapping_section_raises_value_error(self, tmp_path, text, section):
        path = _write(tmp_path, text)
        with pytest.raises(ValueError, match=f"'{section}' must be a mapping"):
            load_config_from_yaml(path)

    def test_null_section_uses_base(self, tmp_path):
        path = _write(tmp_path, "base: detailed\nscan:\nrules:\n")
        config = load_config_from_yaml(path)
        assert config.warmup_bars == DETAILED_CONFIG.warmup_bars
        assert config.rules == DETAILED_CONFIG.rules


class TestSaveConfig:
    def test_round_trip(self, tmp_path):
        config = DETAILED_CONFIG.with_rule("breakout", lookback=20, volume_threshold=1800.0)
        path = tmp_path / "nested" / "saved.yaml"
        save_config_to_yaml(config, path)
        loaded = load_config_from_yaml(path)
        assert loaded.rules == config.rules
        assert loaded.trailing_bars == config.trailing_bars
        assert loaded.name == config.name


class TestShippedConfigs:
    @pytest.mark.parametrize("filename", ["tight_swing.yaml", "detailed_breakout.yaml"])
    def test_configs_load(self, filename):
        config = load_config_from_yaml(CONFIGS_DIR / filename)
        assert StrategyType.SWING in config.rules

    def test_tight_swing_values(self):
        config = load_config_from_yaml(CONFIGS_DIR / "tight_swing.yaml")
        swing = config.rule_for("swing")
        assert swing.max_signals_per_side == 2
        assert (swing.rsi_oversold, swing.rsi_overbought) == (35, 70)
