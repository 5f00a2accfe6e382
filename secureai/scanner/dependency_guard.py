# SecureAI-Scan — Static analysis for LLM integration risks
# Copyright (C) 2026 SecureAI-Scan Contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Dependency guard — flags packages missing from their registry and
names one edit away from a popular package.

Registry lookups fail open: a network error counts as "exists" so that
an outage never blocks a scan.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional, Protocol
from urllib.parse import quote

import httpx

from secureai import __version__
from secureai.models.findings import Finding, Severity

logger = logging.getLogger(__name__)

Ecosystem = Literal["npm", "pypi"]

TRUSTED_PACKAGE_NAMES = (
    "openai",
    "anthropic",
    "langchain",
    "llamaindex",
    "transformers",
    "requests",
    "numpy",
    "pandas",
    "torch",
    "fastapi",
    "django",
    "flask",
)

NPM_SECTIONS = ("dependencies", "devDependencies", "peerDependencies", "optionalDependencies")

_PACKAGE_NAME_RE = re.compile(r"^(@[A-Za-z0-9._-]+/)?[A-Za-z0-9._-]{1,214}$")
_REQUIREMENT_NAME_RE = re.compile(r"^([A-Za-z0-9_.-]+)")


@dataclass(frozen=True)
class PackageCandidate:
    ecosystem: Ecosystem
    name: str
    file: str
    line: int


class PackageExistenceChecker(Protocol):
    def exists(self, ecosystem: Ecosystem, name: str) -> bool: ...


class RegistryExistenceChecker:
    """Checks npm / PyPI with a plain GET; any network failure means "exists"."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout

    def exists(self, ecosystem: Ecosystem, name: str) -> bool:
        if not is_reasonable_package_name(name):
            return False
        if ecosystem == "npm":
            endpoint = f"https://registry.npmjs.org/{quote(name, safe='@')}"
        else:
            endpoint = f"https://pypi.org/pypi/{quote(name)}/json"

        try:
            response = httpx.get(
                endpoint,
                headers={"user-agent": f"secureai-scan/{__version__}"},
                timeout=self.timeout,
                follow_redirects=True,
            )
        except httpx.HTTPError as e:
            logger.warning("Registry lookup for %s failed (%s); assuming it exists", name, e)
            return True
        return response.is_success


def is_reasonable_package_name(name: str) -> bool:
    return bool(_PACKAGE_NAME_RE.match(name))


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance, short-circuited to 2 for length gaps > 1."""
    if a == b:
        return 0
    if abs(len(a) - len(b)) > 1:
        return 2

    previous = list(range(len(b) + 1))
    for i in range(1, len(a) + 1):
        current = [i] + [0] * len(b)
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            current[j] = min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost)
        previous = current
    return previous[len(b)]


def looks_like_typosquat(name: str) -> Optional[str]:
    """Return the trusted name `name` is one edit away from, if any."""
    normalized = name.lower()
    if normalized in TRUSTED_PACKAGE_NAMES:
        return None
    for trusted in TRUSTED_PACKAGE_NAMES:
        if edit_distance(normalized, trusted) == 1:
            return trusted
    return None


def _find_line_number(lines: list[str], needle: str) -> int:
    for index, line in enumerate(lines, start=1):
        if needle in line:
            return index
    return 1


def read_npm_candidates(package_json: Path, root: Path) -> list[PackageCandidate]:
    try:
        raw = package_json.read_text(encoding="utf-8")
        parsed = json.loads(raw)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not read %s: %s", package_json, e)
        return []
    if not isinstance(parsed, dict):
        return []

    lines = raw.splitlines()
    rel = package_json.relative_to(root).as_posix()
    candidates = []
    for section in NPM_SECTIONS:
        deps = parsed.get(section) or {}
        if not isinstance(deps, dict):
            continue
        for name in deps:
            candidates.append(
                PackageCandidate("npm", name, rel, _find_line_number(lines, f'"{name}"'))
            )
    return candidates


def read_requirements_candidates(requirements: Path, root: Path) -> list[PackageCandidate]:
    try:
        lines = requirements.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        logger.debug("Could not read %s: %s", requirements, e)
        return []

    rel = requirements.relative_to(root).as_posix()
    candidates = []
    for index, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith(("#", "-")) or "://" in line:
            continue
        match = _REQUIREMENT_NAME_RE.match(line)
        if match:
            candidates.append(PackageCandidate("pypi", match.group(1), rel, index))
    return candidates


def collect_dependency_candidates(root: Path) -> list[PackageCandidate]:
    root = Path(root).resolve()
    candidates: list[PackageCandidate] = []

    package_json = root / "package.json"
    if package_json.exists():
        candidates.extend(read_npm_candidates(package_json, root))

    requirements = root / "requirements.txt"
    if requirements.exists():
        candidates.extend(read_requirements_candidates(requirements, root))

    seen: set[tuple[str, str, str]] = set()
    unique = []
    for candidate in candidates:
        key = (candidate.ecosystem, candidate.name.lower(), candidate.file)
        if key in seen:
            continue
        seen.add(key)
        unique.append(candidate)
    return unique


def scan_dependency_files(
    root: Path,
    checker: Optional[PackageExistenceChecker] = None,
) -> list[Finding]:
    """Emit LLM_DEP001 (missing) / LLM_DEP002 (typosquat-like) findings."""
    checker = checker or RegistryExistenceChecker()
    findings: list[Finding] = []

    for candidate in collect_dependency_candidates(root):
        if not checker.exists(candidate.ecosystem, candidate.name):
            findings.append(
                Finding(
                    rule_id="LLM_DEP001",
                    title="Dependency package not found in registry",
                    severity=Severity.LOW,
                    file=candidate.file,
                    line=candidate.line,
                    summary=f"{candidate.name} was not found in {candidate.ecosystem}.",
                    description=(
                        "The dependency name could be a typo, hallucinated package, "
                        "or stale reference."
                    ),
                    recommendation=(
                        "Verify package spelling and replace with a known, maintained "
                        "package before installation."
                    ),
                    confidence=0.9,
                )
            )
            continue

        target = looks_like_typosquat(candidate.name)
        if target:
            findings.append(
                Finding(
                    rule_id="LLM_DEP002",
                    title="Dependency name looks similar to a popular package",
                    severity=Severity.LOW,
                    file=candidate.file,
                    line=candidate.line,
                    summary=f"{candidate.name} may be confused with {target}.",
                    description=(
                        "Similar package names can indicate typosquatting or accidental "
                        "confusion in dependency selection."
                    ),
                    recommendation=(
                        "Confirm package ownership and intended source before installing "
                        "in production."
                    ),
                    confidence=0.6,
                )
            )

    logger.info("Dependency guard produced %d findings", len(findings))
    return findings
