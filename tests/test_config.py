"""Tests for configuration and the export command."""

import json

import pytest

from benchmark_center import export
from benchmark_center.config import Config, Transport, get_config


class TestConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("BENCHMARK_RESULTS_PATH", raising=False)
        monkeypatch.delenv("BENCHMARK_EXPORT_DIR", raising=False)
        config = get_config([])
        assert config.results_path == "eval_results_array.json"
        assert config.export_dir == "exports"
        assert config.transport == Transport.STREAMABLE_HTTP

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("BENCHMARK_RESULTS_PATH", "/data/results.json")
        assert Config().results_path == "/data/results.json"

    def test_cli_overrides(self):
        config = get_config(["--export-dir", "/cli/exports", "--transport", "stdio"])
        assert config.export_dir == "/cli/exports"
        assert config.transport == Transport.STDIO

    def test_sse_rejected(self):
        with pytest.raises(ValueError):
            Config(transport="sse")


class TestExportCommand:
    def test_writes_filtered_csv(self, tmp_path, document, capsys):
        results = tmp_path / "results.json"
        results.write_text(json.dumps(document), encoding="utf-8")
        out_dir = tmp_path / "out"

        code = export.main([
            "--results-path", str(results),
            "--export-dir", str(out_dir),
            "--format", "csv",
            "--task", "gsm8k",
            "--benchmark", "mmlu",
        ])

        assert code == 0
        (written,) = list(out_dir.iterdir())
        assert written.name.startswith("benchmarks-export-")
        lines = written.read_text(encoding="utf-8").split("\n")
        assert len(lines) == 3
        assert capsys.readouterr().out.strip() == str(written)

    def test_nothing_to_export(self, tmp_path):
        results = tmp_path / "results.json"
        results.write_text(json.dumps({"eval_results": []}), encoding="utf-8")
        code = export.main(["--results-path", str(results), "--export-dir", str(tmp_path / "out")])
        assert code == 0
        assert not (tmp_path / "out").exists()
