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

"""Source discovery — walks a root directory for TypeScript/JavaScript files.

Build and dependency directories are excluded by default; extra patterns
come from a .secureaiignore file at the root or from the project config.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Directories never worth scanning (dependencies and build output)
DEFAULT_IGNORE_PATTERNS = {
    "node_modules",
    "dist",
    "build",
    "out",
    ".next",
    ".git",
    ".hg",
    ".svn",
    "coverage",
    "*.min.js",
    "*.d.ts",
}

SOURCE_EXTENSIONS = {".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs"}

IGNORE_FILE_NAME = ".secureaiignore"


def load_ignore_patterns(target_dir: Path, extra: Optional[list[str]] = None) -> set[str]:
    """Default patterns + .secureaiignore + caller-supplied extras."""
    patterns = set(DEFAULT_IGNORE_PATTERNS)
    if extra:
        patterns.update(p.strip() for p in extra if p.strip())

    ignore_file = target_dir / IGNORE_FILE_NAME
    if ignore_file.exists():
        for line in ignore_file.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                patterns.add(line.rstrip("/"))

    return patterns


def should_ignore(path: Path, ignore_patterns: set[str]) -> bool:
    """Check if a root-relative path matches any ignore pattern."""
    for pattern in ignore_patterns:
        if pattern.startswith("*"):
            # Glob-style suffix matching
            suffix = pattern.lstrip("*")
            if path.name.endswith(suffix):
                return True
        elif path.name == pattern or pattern in path.parts:
            return True
        elif "/" in pattern and path.as_posix().startswith(pattern + "/"):
            return True
    return False


def is_source_file(path: Path) -> bool:
    return path.suffix.lower() in SOURCE_EXTENSIONS


def discover_source_files(target_dir: Path, extra_ignore: Optional[list[str]] = None) -> list[Path]:
    """Return sorted root-relative paths of all scannable source files."""
    target_dir = Path(target_dir).resolve()

    if not target_dir.exists():
        raise FileNotFoundError(f"Target directory does not exist: {target_dir}")

    if not target_dir.is_dir():
        raise NotADirectoryError(f"Target path is not a directory: {target_dir}")

    ignore_patterns = load_ignore_patterns(target_dir, extra_ignore)
    files = []

    for item in sorted(target_dir.rglob("*")):
        if not item.is_file():
            continue
        rel_path = item.relative_to(target_dir)
        if not is_source_file(rel_path):
            continue
        if should_ignore(rel_path, ignore_patterns):
            continue
        files.append(rel_path)

    logger.info("Discovered %d source files under %s", len(files), target_dir)
    return sorted(files)
