"""🙈 Ignore File - Glob patterns excluding files from discovery.

Patterns are read from ``.bicepdocignore`` in the first source directory (or
an explicit path). Blank lines and ``#`` comments are skipped.

Pattern semantics:
- ``name.py`` / ``*_test.py``: no slash, matches a file name at any depth
- ``models/**``: contains a slash, matches relative or anywhere in the path
- ``*`` stays within one path segment, ``**`` spans segments, ``?`` is one char
"""

from __future__ import annotations

import re
from pathlib import Path

IGNORE_FILENAME = ".bicepdocignore"

DEFAULT_PATTERNS = [
    "**/__pycache__/**",
    "**/.git/**",
    "**/.venv/**",
    "**/node_modules/**",
]


def glob_to_regex(glob: str) -> str:
    """Convert an ignore glob into a regular expression."""
    escaped = (
        re.escape(glob)
        .replace(r"\*\*", "\0")
        .replace(r"\*", "[^/]*")
        .replace(r"\?", "[^/]")
        .replace("\0", ".*")
    )

    if "/" not in glob:
        # Bare file name pattern: match at any level
        return rf"(^|.*/){escaped}$"

    return rf"(^{escaped}$|.*/{escaped}$)"


class IgnoreFile:
    """A compiled set of ignore patterns."""

    def __init__(self, patterns: list[str] | None = None) -> None:
        self.patterns = list(DEFAULT_PATTERNS if patterns is None else patterns)
        self._compiled = [
            re.compile(glob_to_regex(p), re.IGNORECASE) for p in self.patterns
        ]

    @classmethod
    def load(
        cls,
        base_dir: Path | str,
        ignore_path: Path | str | None = None,
    ) -> "IgnoreFile":
        """Load patterns from an ignore file on top of the defaults.

        Args:
            base_dir: Directory holding the default ``.bicepdocignore``
            ignore_path: Explicit ignore file (must exist if given)

        Returns:
            IgnoreFile with default and file patterns
        """
        patterns = list(DEFAULT_PATTERNS)

        if ignore_path is not None:
            path = Path(ignore_path)
            if not path.exists():
                raise FileNotFoundError(f"Ignore file not found at: {path}")
        else:
            path = Path(base_dir) / IGNORE_FILENAME

        if path.exists():
            for line in path.read_text(encoding="utf-8").splitlines():
                line = line.strip()
                if line and not line.startswith("#"):
                    patterns.append(line)

        return cls(patterns)

    def is_ignored(self, path: Path | str) -> bool:
        normalized = str(path).replace("\\", "/")
        return any(pattern.match(normalized) for pattern in self._compiled)
