"""Tests for baseline creation and diffing."""

import json
from pathlib import Path

import pytest

from secureai.models.baseline import BASELINE_SCHEMA, BaselineEntry
from secureai.models.findings import Finding, Severity
from secureai.scanner.baseline import (
    BaselineError,
    apply_baseline,
    is_new_or_regressed,
    read_baseline,
    write_baseline,
)


def _finding(
    line: int = 3,
    severity: Severity = Severity.HIGH,
    confidence: float = 0.7,
    rule_id: str = "AI004",
    file: str = "src/chat.ts",
) -> Finding:
    return Finding(
        rule_id=rule_id,
        title="Sensitive data sent to LLM",
        severity=severity,
        file=file,
        line=line,
        summary="Large user context sent directly to LLM.",
        confidence=confidence,
    )


class TestFirstRun:
    """No baseline file: create it, everything is new."""

    def test_creates_baseline(self, tmp_path: Path):
        path = tmp_path / ".secureai" / "baseline.json"
        findings = [_finding(line=9), _finding(line=2, rule_id="AI001")]
        result = apply_baseline(path, findings)

        assert result.created
        assert result.new_or_regressed_count == 2
        assert result.unchanged_count == 0
        data = json.loads(path.read_text())
        assert data["schema"] == BASELINE_SCHEMA
        assert "createdAt" in data
        assert [(e["rule_id"], e["line"]) for e in data["findings"]] == [("AI001", 2), ("AI004", 9)]

    def test_written_file_ends_with_newline(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        write_baseline(path, [])
        assert path.read_text().endswith("}\n")


class TestDiffRun:
    """Existing baseline: only new or regressed findings remain."""

    def test_unchanged_findings_are_dropped(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        findings = [_finding(line=1), _finding(line=5)]
        apply_baseline(path, findings)
        before = path.read_text()

        result = apply_baseline(path, findings)
        assert not result.created
        assert result.findings == []
        assert result.baseline_count == 2
        assert result.current_count == 2
        assert result.unchanged_count == 2
        assert path.read_text() == before

    def test_new_and_regressed(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        apply_baseline(path, [_finding(line=1), _finding(line=5, confidence=0.5)])

        current = [
            _finding(line=1),
            _finding(line=5, confidence=0.7),
            _finding(line=8),
        ]
        result = apply_baseline(path, current)
        assert [f.line for f in result.findings] == [5, 8]
        assert result.unchanged_count == 1

    def test_key_ignores_extension_and_case(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        apply_baseline(path, [_finding(file="src/Chat.ts")])
        result = apply_baseline(path, [_finding(file="src/chat.js")])
        assert result.findings == []


class TestIsNewOrRegressed:
    """Severity rank and confidence epsilon."""

    def test_missing_entry(self):
        assert is_new_or_regressed(_finding(), None)

    def test_severity_increase(self):
        previous = BaselineEntry.from_finding(_finding(severity=Severity.MEDIUM))
        assert is_new_or_regressed(_finding(severity=Severity.HIGH), previous)

    def test_confidence_within_epsilon(self):
        previous = BaselineEntry.from_finding(_finding(confidence=0.7))
        assert not is_new_or_regressed(_finding(confidence=0.7 + 1e-9), previous)

    def test_lower_values_are_unchanged(self):
        previous = BaselineEntry.from_finding(_finding(severity=Severity.CRITICAL, confidence=0.9))
        assert not is_new_or_regressed(_finding(severity=Severity.HIGH, confidence=0.2), previous)


class TestMalformedBaseline:
    """Unreadable or mismatched baselines are hard errors."""

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_text("{not json")
        with pytest.raises(BaselineError):
            read_baseline(path)

    def test_schema_mismatch(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"schema": "secureai-baseline/v0", "findings": []}))
        with pytest.raises(BaselineError):
            apply_baseline(path, [_finding()])

    def test_findings_not_a_list(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"schema": BASELINE_SCHEMA, "findings": {}}))
        with pytest.raises(BaselineError):
            read_baseline(path)

    def test_malformed_entry(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_text(json.dumps({"schema": BASELINE_SCHEMA, "findings": [{"rule_id": "AI001"}]}))
        with pytest.raises(BaselineError):
            read_baseline(path)

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(BaselineError, match="Cannot read baseline file"):
            apply_baseline(path, [_finding()])

    def test_directory_in_place_of_file(self, tmp_path: Path):
        path = tmp_path / "baseline.json"
        path.mkdir()
        with pytest.raises(BaselineError, match="Cannot read baseline file"):
            apply_baseline(path, [_finding()])
