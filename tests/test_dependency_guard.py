"""Tests for the dependency registry and look-alike checks."""

import json
from pathlib import Path

import httpx
import pytest

from secureai.scanner.dependency_guard import (
    RegistryExistenceChecker,
    collect_dependency_candidates,
    edit_distance,
    is_reasonable_package_name,
    looks_like_typosquat,
    scan_dependency_files,
)


class FakeChecker:
    def __init__(self, missing: set[str] | None = None):
        self.missing = missing or set()
        self.calls: list[tuple[str, str]] = []

    def exists(self, ecosystem, name):
        self.calls.append((ecosystem, name))
        return name not in self.missing


def _project(tmp_path: Path) -> Path:
    (tmp_path / "package.json").write_text(
        json.dumps(
            {
                "name": "tmp",
                "version": "1.0.0",
                "dependencies": {"opena1": "1.0.0", "hallucinated-pkg": "1.0.0"},
                "devDependencies": {"typescript": "^5.0.0"},
            },
            indent=2,
        )
    )
    (tmp_path / "requirements.txt").write_text("# deps\nreqests==2.31.0\n-r base.txt\nflask>=3\n")
    return tmp_path


class TestCandidates:
    """package.json sections and requirements.txt lines."""

    def test_collects_both_ecosystems(self, tmp_path: Path):
        candidates = collect_dependency_candidates(_project(tmp_path))
        names = [(c.ecosystem, c.name, c.file) for c in candidates]
        assert names == [
            ("npm", "opena1", "package.json"),
            ("npm", "hallucinated-pkg", "package.json"),
            ("npm", "typescript", "package.json"),
            ("pypi", "reqests", "requirements.txt"),
            ("pypi", "flask", "requirements.txt"),
        ]

    def test_line_numbers(self, tmp_path: Path):
        candidates = collect_dependency_candidates(_project(tmp_path))
        by_name = {c.name: c.line for c in candidates}
        assert by_name["reqests"] == 2
        assert by_name["flask"] == 4
        assert by_name["opena1"] > 1

    def test_no_dependency_files(self, tmp_path: Path):
        assert collect_dependency_candidates(tmp_path) == []


class TestTyposquat:
    """Edit distance one from a trusted name."""

    def test_edit_distance(self):
        assert edit_distance("openai", "opena1") == 1
        assert edit_distance("openai", "openai") == 0
        assert edit_distance("a", "abc") == 2

    def test_looks_like_typosquat(self):
        assert looks_like_typosquat("reqests") == "requests"
        assert looks_like_typosquat("OpenAI") is None
        assert looks_like_typosquat("lodash") is None


class TestScanDependencyFiles:
    """LLM_DEP001 for missing packages, LLM_DEP002 for look-alikes."""

    def test_flags_missing_and_suspicious(self, tmp_path: Path):
        checker = FakeChecker(missing={"hallucinated-pkg"})
        findings = scan_dependency_files(_project(tmp_path), checker)
        found = {(f.rule_id, f.summary.split(" ")[0]) for f in findings}
        assert found == {
            ("LLM_DEP001", "hallucinated-pkg"),
            ("LLM_DEP002", "opena1"),
            ("LLM_DEP002", "reqests"),
        }
        confidences = {f.rule_id: f.confidence for f in findings}
        assert confidences == {"LLM_DEP001": 0.9, "LLM_DEP002": 0.6}
        assert all(f.is_informational for f in findings)

    def test_missing_package_skips_typosquat_check(self, tmp_path: Path):
        checker = FakeChecker(missing={"opena1"})
        findings = scan_dependency_files(_project(tmp_path), checker)
        assert [f.rule_id for f in findings if "opena1" in f.summary] == ["LLM_DEP001"]


class TestRegistryExistenceChecker:
    """Registry lookups over httpx."""

    def test_network_failure_fails_open(self, monkeypatch):
        def boom(*args, **kwargs):
            raise httpx.ConnectError("offline")

        monkeypatch.setattr(httpx, "get", boom)
        assert RegistryExistenceChecker().exists("npm", "left-pad")

    def test_not_found(self, monkeypatch):
        monkeypatch.setattr(httpx, "get", lambda *a, **kw: httpx.Response(404))
        assert not RegistryExistenceChecker().exists("pypi", "no-such-package")

    def test_found(self, monkeypatch):
        seen = {}

        def fake_get(url, **kwargs):
            seen["url"] = url
            return httpx.Response(200)

        monkeypatch.setattr(httpx, "get", fake_get)
        assert RegistryExistenceChecker().exists("npm", "@types/node")
        assert seen["url"] == "https://registry.npmjs.org/@types%2Fnode"

    def test_unreasonable_name_is_missing_without_request(self, monkeypatch):
        def fail(*args, **kwargs):
            raise AssertionError("should not be called")

        monkeypatch.setattr(httpx, "get", fail)
        assert not RegistryExistenceChecker().exists("npm", "bad name!")


class TestPackageNames:
    """Name sanity check applied before any registry request."""

    @pytest.mark.parametrize("name", ["left-pad", "@types/node", "@anthropic-ai/sdk", "zope.interface"])
    def test_accepts_plain_and_scoped_names(self, name):
        assert is_reasonable_package_name(name)

    @pytest.mark.parametrize("name", ["", "bad name!", "@scope", "@scope/", "a/b", "@a/b/c"])
    def test_rejects_malformed_names(self, name):
        assert not is_reasonable_package_name(name)
