"""Unit tests for run configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from zipinfo.config import ReportConfig, load_config, merge_cli
from zipinfo.core.errors import ConfigurationError
from zipinfo.core.mode import FailurePolicy, OutputMode
from zipinfo.core.types import STAT_FIELDS, StatSelection

pytestmark = pytest.mark.unit


class TestReportConfig:
    """Tests for ReportConfig defaults."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        cfg = ReportConfig()
        assert cfg.output is OutputMode.FLAT
        assert cfg.exclude is None
        assert cfg.on_error is FailurePolicy.FAIL_FAST
        assert cfg.jobs == 1
        assert cfg.selection == StatSelection.all()

    def test_min_jobs_constraint(self) -> None:
        """Test that jobs must be >= 1."""
        with pytest.raises(ValueError):
            ReportConfig(jobs=0)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_yaml(self, tmp_path: Path) -> None:
        """Test loading a YAML config file."""
        path = tmp_path / "zi.yaml"
        path.write_text(
            "output: pretty-json\nexclude: '*.pyc'\non_error: continue\njobs: 2\nstats:\n  compression_rate: true\n"
        )
        cfg = load_config(path)
        assert cfg.output is OutputMode.PRETTY_JSON
        assert cfg.exclude == "*.pyc"
        assert cfg.on_error is FailurePolicy.CONTINUE
        assert cfg.jobs == 2
        assert cfg.selection.enabled() == ["compression_rate"]

    def test_toml(self, tmp_path: Path) -> None:
        """Test loading a TOML config file."""
        path = tmp_path / "zi.toml"
        path.write_text('output = "json"\n\n[stats]\noriginal_size = true\ncompressed_size = true\n')
        cfg = load_config(path)
        assert cfg.output is OutputMode.JSON
        assert cfg.selection.enabled() == ["original_size", "compressed_size"]

    def test_toml_string_false_selects_all(self, tmp_path: Path) -> None:
        """Test that a quoted false toggle in TOML still selects every statistic."""
        path = tmp_path / "zi.toml"
        path.write_text('[stats]\ncompression_type = "false"\n')
        cfg = load_config(path)
        assert cfg.selection.enabled() == list(STAT_FIELDS)

    def test_empty_yaml_is_default(self, tmp_path: Path) -> None:
        """Test that an empty YAML file gives the defaults."""
        path = tmp_path / "zi.yml"
        path.write_text("")
        assert load_config(path) == ReportConfig()

    def test_unknown_key(self, tmp_path: Path) -> None:
        """Test that unknown keys are rejected."""
        path = tmp_path / "zi.yaml"
        path.write_text("colour: true\n")
        with pytest.raises(ConfigurationError, match="Invalid config file"):
            load_config(path)

    def test_invalid_output_mode(self, tmp_path: Path) -> None:
        """Test that unknown output modes are rejected."""
        path = tmp_path / "zi.toml"
        path.write_text('output = "xml"\n')
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_malformed_yaml(self, tmp_path: Path) -> None:
        """Test that YAML syntax errors are configuration errors."""
        path = tmp_path / "zi.yaml"
        path.write_text("output: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Failed to parse YAML"):
            load_config(path)

    def test_malformed_toml(self, tmp_path: Path) -> None:
        """Test that TOML syntax errors are configuration errors."""
        path = tmp_path / "zi.toml"
        path.write_text("output = \n")
        with pytest.raises(ConfigurationError, match="Failed to parse TOML"):
            load_config(path)

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Test that the top level must be a mapping."""
        path = tmp_path / "zi.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        """Test that unknown file types are rejected."""
        path = tmp_path / "zi.ini"
        path.write_text("[zi]\n")
        with pytest.raises(ConfigurationError, match="Unsupported config file type"):
            load_config(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is a configuration error."""
        with pytest.raises(ConfigurationError, match="Failed to read"):
            load_config(tmp_path / "missing.yaml")


class TestMergeCli:
    """Tests for merge_cli function."""

    def test_no_flags_keeps_config(self) -> None:
        """Test that absent flags keep the configured values."""
        base = ReportConfig(output=OutputMode.JSON, exclude="*.log", jobs=3)
        assert merge_cli(base) == base

    def test_conflicting_output_flags(self) -> None:
        """Test that both JSON flags together are rejected."""
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            merge_cli(ReportConfig(), json=True, pretty_json=True)

    def test_output_flags(self) -> None:
        """Test that output flags override the configured mode."""
        base = ReportConfig(output=OutputMode.JSON)
        assert merge_cli(base, pretty_json=True).output is OutputMode.PRETTY_JSON
        assert merge_cli(ReportConfig(), json=True).output is OutputMode.JSON

    def test_toggles_replace_config_stats(self) -> None:
        """Test that explicit stat flags replace configured stats."""
        base = ReportConfig(stats=StatSelection(original_size=True))
        cfg = merge_cli(base, toggles={"compression_type": True, "compression_rate": False})
        assert cfg.selection.enabled() == ["compression_type"]

    def test_all_false_toggles_keep_config_stats(self) -> None:
        """Test that unset stat flags leave configured stats alone."""
        base = ReportConfig(stats=StatSelection(original_size=True))
        cfg = merge_cli(base, toggles=dict.fromkeys(["compression_type", "compression_rate"], False))
        assert cfg.selection.enabled() == ["original_size"]

    def test_keep_going_and_jobs(self) -> None:
        """Test failure policy and concurrency overrides."""
        cfg = merge_cli(ReportConfig(), keep_going=True, jobs=4, exclude="*.tmp")
        assert cfg.on_error is FailurePolicy.CONTINUE
        assert cfg.jobs == 4
        assert cfg.exclude == "*.tmp"

    def test_invalid_jobs(self) -> None:
        """Test that invalid overrides are configuration errors."""
        with pytest.raises(ConfigurationError):
            merge_cli(ReportConfig(), jobs=0)
