"""Tests for the analysis pipeline and configuration loading."""

import json

import pytest

from deadwood.config import CONFIG_FILE, default_port, load_config
from deadwood.errors import ConfigError
from deadwood.models import AnalysisConfig, Classification
from deadwood.pipeline import run_analysis


class TestRunAnalysis:
    def test_sample_app(self, sample_app):
        report = run_analysis(AnalysisConfig(target_dir=sample_app))
        assert report.total_modules == 13
        assert report.reachable == {
            "src/index",
            "src/App",
            "src/components/index",
            "src/components/Button",
            "src/components/Card",
            "src/utils/format",
            "src/styles/setup",
        }
        buckets = report.by_classification()
        assert sorted(buckets[Classification.ORPHANED]) == [
            "src/components/Legacy", "src/lazy", "src/utils/old",
        ]
        assert sorted(buckets[Classification.TRANSITIVE_DEAD]) == [
            "src/cycle/a", "src/cycle/b", "src/utils/helpers",
        ]
        assert buckets[Classification.FALSE_POSITIVE] == []
        assert report.dynamic_import_modules == ("src/lazy",)

    def test_progress_callback(self, sample_app):
        stages = []
        run_analysis(AnalysisConfig(target_dir=sample_app), progress=lambda s, c, t: stages.append(s))
        assert stages[0] == "Scanning"
        assert "Extracting" in stages
        assert stages[-1] == "Analyzing"

    def test_parallel_extraction_same_result(self, sample_app):
        serial = run_analysis(AnalysisConfig(target_dir=sample_app))
        parallel = run_analysis(AnalysisConfig(target_dir=sample_app, workers=4))
        assert serial.to_dict() == parallel.to_dict()

    def test_extra_entry_point(self, sample_app):
        config = AnalysisConfig(target_dir=sample_app, extra_entry_points=("src/utils/old",))
        report = run_analysis(config)
        assert {"src/utils/old", "src/utils/helpers"} <= report.reachable

    def test_empty_directory(self, tmp_path):
        report = run_analysis(AnalysisConfig(target_dir=tmp_path))
        assert report.total_modules == 0
        assert report.unreachable == ()


class TestLoadConfig:
    def test_defaults(self, tmp_path):
        config = load_config(tmp_path)
        assert config.target_dir == tmp_path
        assert config.max_chains == 1000
        assert config.report_path == tmp_path / "deadwood-report.json"

    def test_config_file_and_overrides(self, tmp_path, caplog):
        (tmp_path / CONFIG_FILE).write_text(json.dumps({
            "extra_entry_points": ["scripts/seed"],
            "max_depth": 8,
            "workers": 2,
            "colour": "blue",
        }))
        config = load_config(tmp_path, workers=6, max_chains=None)
        assert config.extra_entry_points == ("scripts/seed",)
        assert config.max_depth == 8
        assert config.workers == 6
        assert config.max_chains == 1000
        assert "colour" in caplog.text

    def test_malformed_config_file(self, tmp_path):
        (tmp_path / CONFIG_FILE).write_text("{oops")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_wrong_type(self, tmp_path):
        (tmp_path / CONFIG_FILE).write_text(json.dumps({"max_chains": "many"}))
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_default_port_from_env(self, monkeypatch):
        monkeypatch.setenv("DEADWOOD_PORT", "9100")
        assert default_port() == 9100
        monkeypatch.setenv("DEADWOOD_PORT", "not-a-port")
        assert default_port(8420) == 8420
