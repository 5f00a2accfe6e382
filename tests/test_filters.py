"""Tests for severity filtering and rule selection."""

import pytest

from secureai.models.findings import Finding, Severity
from secureai.scanner.filters import (
    filter_findings_by_severity,
    parse_rule_ids,
    resolve_rule_selection,
    select_rules,
)
from secureai.scanner.rules import RULES


def _finding(severity: Severity) -> Finding:
    return Finding(
        rule_id="AI001", title="t", severity=severity, file="a.ts", line=1, summary="s", confidence=0.5
    )


class TestSeverityFilter:
    """Rank >= minimum rank is kept."""

    def test_no_minimum_keeps_everything(self):
        findings = [_finding(s) for s in Severity]
        assert filter_findings_by_severity(findings) == findings

    def test_minimum_high(self):
        findings = [_finding(s) for s in Severity]
        kept = filter_findings_by_severity(findings, Severity.HIGH)
        assert {f.severity for f in kept} == {Severity.HIGH, Severity.CRITICAL}

    def test_parse_is_case_insensitive(self):
        assert Severity.parse(" Critical ") is Severity.CRITICAL

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match="Expected one of"):
            Severity.parse("urgent")


class TestRuleSelection:
    """--rules and --only-ai handling."""

    def test_parse_rule_ids(self):
        assert parse_rule_ids("ai001, AI003,") == ["AI001", "AI003"]

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValueError, match="Unknown rule ID"):
            parse_rule_ids("AI001,XX9")

    def test_parse_rejects_empty(self):
        with pytest.raises(ValueError):
            parse_rule_ids(" , ")

    def test_select_rules(self):
        assert [r.id for r in select_rules(RULES, ["AI004", "AI001"])] == ["AI001", "AI004"]
        assert len(select_rules(RULES, None)) == len(RULES)

    def test_only_ai_without_rules(self):
        assert resolve_rule_selection(None, True) == ["AI001", "AI100", "AI002", "AI003", "AI004"]

    def test_only_ai_keeps_explicit_ai_rules(self):
        assert resolve_rule_selection(["AI002"], True) == ["AI002"]

    def test_without_only_ai_passthrough(self):
        assert resolve_rule_selection(None, False) is None
