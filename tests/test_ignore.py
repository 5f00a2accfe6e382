"""Tests for inline secureai-ignore directives."""

import pytest

from secureai.models.findings import Finding, Severity
from secureai.scanner.ignore import (
    DirectiveState,
    IgnoreDirective,
    apply_ignore_annotations,
    collect_directives,
    parse_ignore_directives,
)
from secureai.scanner.syntax import parse_source_unit


def _finding(line: int, rule_id: str = "AI003", file: str = "src/api.ts") -> Finding:
    return Finding(
        rule_id=rule_id,
        title="LLM call before authentication",
        severity=Severity.CRITICAL,
        file=file,
        line=line,
        summary="LLM call occurs before auth checks.",
        confidence=0.4,
    )


class TestParseDirectives:
    """Directive syntax."""

    def test_parses_rule_and_reason(self):
        directives = parse_ignore_directives(["const a = 1;", "  // secureai-ignore ai003:  reviewed by security  "])
        assert len(directives) == 1
        assert directives[0].rule_id == "AI003"
        assert directives[0].reason == "reviewed by security"
        assert directives[0].line == 2

    def test_empty_reason_is_discarded(self):
        assert parse_ignore_directives(["// secureai-ignore AI001:   "]) == []
        assert parse_ignore_directives(["// secureai-ignore AI001"]) == []

    def test_trailing_comment_is_not_a_directive(self):
        assert parse_ignore_directives(["foo(); // secureai-ignore AI001: nope"]) == []

    def test_collect_keys_by_normalized_path(self):
        unit = parse_source_unit("// secureai-ignore AI001: ok\nfoo();\n", "src/App.ts")
        assert list(collect_directives([unit])) == ["src/app"]


class TestDirectiveState:
    """Unconsumed -> Consumed, exactly once."""

    def test_consume_once(self):
        directive = IgnoreDirective(rule_id="AI003", reason="ok", line=1)
        directive.consume()
        assert directive.state is DirectiveState.CONSUMED
        with pytest.raises(RuntimeError):
            directive.consume()

    def test_consumed_directive_never_matches(self):
        directive = IgnoreDirective(rule_id="AI003", reason="ok", line=1, state=DirectiveState.CONSUMED)
        assert not directive.matches(_finding(5))


class TestApplyIgnoreAnnotations:
    """Matching after global sort."""

    def test_suppresses_following_finding(self):
        directives = {"src/api": parse_ignore_directives(["// secureai-ignore AI003: reviewed"])}
        active, ignored = apply_ignore_annotations(directives, [_finding(2)])
        assert active == []
        assert ignored[0].reason == "reviewed"
        assert ignored[0].annotation_line == 1

    def test_directive_must_precede_finding(self):
        directives = {"src/api": [IgnoreDirective(rule_id="AI003", reason="ok", line=5)]}
        active, ignored = apply_ignore_annotations(directives, [_finding(5), _finding(3)])
        assert [f.line for f in active] == [3, 5]
        assert ignored == []

    def test_at_most_one_suppression_per_directive(self):
        directives = {"src/api": [IgnoreDirective(rule_id="AI003", reason="ok", line=1)]}
        active, ignored = apply_ignore_annotations(directives, [_finding(9), _finding(4)])
        assert [i.finding.line for i in ignored] == [4]
        assert [f.line for f in active] == [9]

    def test_rule_and_file_must_match(self):
        directives = {"src/api": [IgnoreDirective(rule_id="AI001", reason="ok", line=1)]}
        findings = [_finding(2), _finding(2, rule_id="AI001", file="src/other.ts")]
        active, ignored = apply_ignore_annotations(directives, findings)
        assert len(active) == 2
        assert ignored == []

    def test_directive_applies_to_compiled_twin(self):
        directives = {"src/api": [IgnoreDirective(rule_id="AI003", reason="ok", line=1)]}
        active, ignored = apply_ignore_annotations(directives, [_finding(2, file="src/api.js")])
        assert active == []
        assert len(ignored) == 1

    def test_result_is_independent_of_input_order(self):
        def directives():
            return {
                "src/api": [
                    IgnoreDirective(rule_id="AI003", reason="first", line=1),
                    IgnoreDirective(rule_id="AI003", reason="second", line=4),
                ]
            }

        findings = [
            _finding(2),
            _finding(5),
            _finding(9),
            _finding(3, rule_id="AI001"),
            _finding(6, file="src/other.ts"),
        ]

        forward_active, forward_ignored = apply_ignore_annotations(directives(), findings)
        reverse_active, reverse_ignored = apply_ignore_annotations(directives(), list(reversed(findings)))

        def split(active, ignored):
            return (
                sorted((f.file, f.line, f.rule_id) for f in active),
                sorted((i.finding.line, i.reason, i.annotation_line) for i in ignored),
            )

        assert split(forward_active, forward_ignored) == split(reverse_active, reverse_ignored)
        assert split(forward_active, forward_ignored)[1] == [(2, "first", 1), (5, "second", 4)]
