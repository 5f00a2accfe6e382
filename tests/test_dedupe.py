"""Tests for finding deduplication."""

from secureai.models.findings import Finding, Severity
from secureai.scanner.dedupe import dedupe_findings, finding_key, normalize_file_key


def _finding(file: str = "src/app.ts", line: int = 10, rule_id: str = "AI001", **kwargs) -> Finding:
    defaults = dict(
        title="Prompt injection via user input",
        severity=Severity.HIGH,
        summary="User input is concatenated into a prompt.",
        confidence=0.8,
    )
    defaults.update(kwargs)
    return Finding(rule_id=rule_id, file=file, line=line, **defaults)


class TestNormalizeFileKey:
    """Canonical file form used by dedupe, ignore and baseline keys."""

    def test_lowercases_and_strips_extension(self):
        assert normalize_file_key("src/App.ts") == "src/app"

    def test_backslashes(self):
        assert normalize_file_key("src\\Handlers\\chat.jsx") == "src/handlers/chat"

    def test_only_source_extensions_are_stripped(self):
        assert normalize_file_key("lib/util.mjs") == "lib/util.mjs"
        assert normalize_file_key("types.d.ts") == "types.d"


class TestDedupeFindings:
    """First occurrence per canonical key wins."""

    def test_compiled_twin_collapses(self):
        source = _finding(file="src/app.ts", confidence=0.8)
        compiled = _finding(file="src/app.js", confidence=0.5)
        assert dedupe_findings([source, compiled]) == [source]

    def test_keeps_first_and_order(self):
        a = _finding(line=1)
        b = _finding(line=2)
        dup = _finding(line=1, confidence=0.1)
        c = _finding(line=3, rule_id="AI004", summary="Large user context sent directly to LLM.")
        assert dedupe_findings([a, b, dup, c]) == [a, b, c]

    def test_summary_is_part_of_the_key(self):
        a = _finding()
        b = _finding(summary="Something else.")
        assert len(dedupe_findings([a, b])) == 2
        assert finding_key(a) != finding_key(b)

    def test_empty(self):
        assert dedupe_findings([]) == []
