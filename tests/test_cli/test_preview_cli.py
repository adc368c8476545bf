"""
Tests for the preview and params CLIs.
"""
import json
import dataclasses
from pathlib import Path

import pandas as pd

from cli import preview as cli_preview
from cli import params as cli_params
from synthmarket.preview import build_strategy_preview
from synthmarket.evaluation.trade_analysis import SimulatedTrade

CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


class TestPreviewCli:
    def test_text_report(self, capsys):
        exit_code = cli_preview.main(["Golden Cross", "--strategy-type", "momentum"])
        out = capsys.readouterr().out
        assert exit_code == 0
        assert "Golden Cross | momentum | 4H" in out
        assert "SIGNALS:" in out
        assert "Simulated P&L" in out
        assert "Last bar: close" in out
        assert "Band " in out

    def test_json_output(self, capsys):
        exit_code = cli_preview.main(["Golden Cross", "--shape", "candle", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        assert data["shape"] == "candle"
        assert len(data["bars"]) == 180
        assert data["config"] == "detailed"

    def test_length_and_timeframe(self, capsys):
        cli_preview.main(["X", "--length", "45", "--timeframe", "1D", "--json"])
        data = json.loads(capsys.readouterr().out)
        assert len(data["bars"]) == 45
        assert data["timeframe"] == "1D"

    def test_compact(self, capsys):
        cli_preview.main(["X", "--compact", "--json"])
        assert len(json.loads(capsys.readouterr().out)["bars"]) == 40

    def test_config_file(self, capsys):
        exit_code = cli_preview.main([
            "My Swing", "--strategy-type", "swing",
            "--config", str(CONFIGS_DIR / "tight_swing.yaml"), "--json",
        ])
        captured = capsys.readouterr()
        data = json.loads(captured.out)
        assert exit_code == 0
        assert data["config"] == "tight_swing"
        assert "Loaded signal config" in captured.err

    def test_preset(self, capsys):
        cli_preview.main(["X", "--preset", "detailed", "--json"])
        assert json.loads(capsys.readouterr().out)["config"] == "detailed"

    def test_invalid_length_exits_1(self, capsys):
        exit_code = cli_preview.main(["X", "--length", "0"])
        assert exit_code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_config_exits_1(self, tmp_path, capsys):
        exit_code = cli_preview.main(["X", "--config", str(tmp_path / "missing.yaml")])
        assert exit_code == 1
        assert "Config file not found" in capsys.readouterr().err

    def test_malformed_config_section_exits_1(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("indicators:\n  rsi: 14\n")
        exit_code = cli_preview.main(["X", "--config", str(path)])
        assert exit_code == 1
        assert "'indicators.rsi' must be a mapping" in capsys.readouterr().err

    def test_trades_csv(self, tmp_path, capsys):
        csv_path = tmp_path / "out" / "trades.csv"
        exit_code = cli_preview.main(["Golden Cross", "--json", "--trades-csv", str(csv_path)])
        data = json.loads(capsys.readouterr().out)
        assert exit_code == 0
        df = pd.read_csv(csv_path)
        assert len(df) == len(data["trades"])
        assert "pnl_pct" in df.columns


class TestPrintPreview:
    def test_entry_reason_breakdown(self, capsys):
        trades = [
            SimulatedTrade(20, 30, "21", "31", 100.0, 110.0, 10.0, 10.0, entry_reason="cross"),
            SimulatedTrade(32, 40, "33", "41", 100.0, 95.0, -5.0, -5.0, entry_reason="cross"),
        ]
        preview = dataclasses.replace(build_strategy_preview("Golden Cross"), trades=trades)
        cli_preview.print_preview(preview)
        out = capsys.readouterr().out
        assert "BY ENTRY REASON:" in out
        assert "win  50.0%" in out
        assert "avg +2.50%" in out

    def test_no_trades_skips_breakdown(self, capsys):
        preview = dataclasses.replace(build_strategy_preview("Golden Cross"), trades=[])
        cli_preview.print_preview(preview)
        assert "BY ENTRY REASON:" not in capsys.readouterr().out


class TestParamsCli:
    def test_prints_presets(self, capsys):
        assert cli_params.main() == 0
        out = capsys.readouterr().out
        assert "PARAMETER REFERENCE" in out
        assert "Preset 'preview'" in out
        assert "Preset 'detailed'" in out
        assert "EMA 20/50 Golden Cross" in out
