"""Tests for secureai.yaml loading."""

from pathlib import Path

import pytest

from secureai.config import ConfigError, ScanConfig, load_config
from secureai.models.findings import Severity


class TestLoadConfig:
    """Project config is optional and validated."""

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_config(tmp_path) == ScanConfig()

    def test_full_config(self, tmp_path: Path):
        (tmp_path / "secureai.yaml").write_text(
            "severity: High\n"
            "rules: [ai001, AI003]\n"
            "only_ai: true\n"
            "exclude:\n  - generated\n"
            "baseline: .secureai/baseline.json\n"
        )
        config = load_config(tmp_path)
        assert config.severity is Severity.HIGH
        assert config.rules == ["AI001", "AI003"]
        assert config.only_ai
        assert config.exclude == ["generated"]
        assert config.baseline == ".secureai/baseline.json"

    def test_rules_as_comma_string(self, tmp_path: Path):
        (tmp_path / "secureai.yaml").write_text("rules: AI002,AI004\n")
        assert load_config(tmp_path).rules == ["AI002", "AI004"]

    def test_empty_file(self, tmp_path: Path):
        (tmp_path / "secureai.yaml").write_text("")
        assert load_config(tmp_path) == ScanConfig()

    def test_explicit_missing_path(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, tmp_path / "other.yaml")

    @pytest.mark.parametrize(
        "content",
        [
            "severity: [unclosed\n",
            "- just\n- a list\n",
            "severity: urgent\n",
            "rules: [AI999]\n",
        ],
    )
    def test_invalid_config(self, tmp_path: Path, content: str):
        (tmp_path / "secureai.yaml").write_text(content)
        with pytest.raises(ConfigError):
            load_config(tmp_path)
