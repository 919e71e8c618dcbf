"""
frontmatter.py - Source file loading and front-matter parsing.

Front-matter is the ``---`` delimited ``key: value`` block at the top of a
memory-bank markdown file:

    ---
    description: Review a pull request
    model: GPT-5 (Preview)
    ---

Two parsing strategies are available:

- ``ParseMode.STRICT``: the first line must be exactly ``---`` and a closing
  ``---`` must follow. Problems raise ``FrontMatterError``.
- ``ParseMode.LENIENT``: never raises. Every ``key: value`` looking line in
  the whole file is collected, so a file with a broken header still exposes
  its keys to checks that only look for one field.

Values are raw strings; no YAML typing is applied because downstream checks
compare them byte-for-byte (e.g. the chatmode ``tools`` literal).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

FRONT_MATTER_DELIMITER = "---"

# Lenient mode key line: optional indent, identifier-ish key, colon.
_LENIENT_KEY_RE = re.compile(r"^\s*([A-Za-z0-9_.-]+):(.*)$")


def split_lines(text: str) -> Tuple[str, ...]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` from each line.

    Form feeds and other Unicode line boundaries stay inside their line so
    line numbers match what editors and ``grep -n`` report.
    """
    lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    return tuple(lines)


class ParseMode(Enum):
    """Front-matter parsing strategy."""
    STRICT = "strict"
    LENIENT = "lenient"


class FrontMatterErrorKind(Enum):
    """Which delimiter is missing."""
    MISSING_START = "missing front-matter start"
    MISSING_END = "missing front-matter end"


class FrontMatterError(ValueError):
    """Raised by strict parsing when a delimiter is missing."""

    def __init__(self, kind: FrontMatterErrorKind):
        super().__init__(kind.value)
        self.kind = kind


@dataclass(frozen=True)
class SourceFile:
    """A text file read once for a validation run."""

    path: Path
    lines: Tuple[str, ...]
    raw: str

    @classmethod
    def read(cls, path: Path) -> "SourceFile":
        """Read ``path`` as UTF-8.

        Raises:
            OSError: If the file cannot be read.
            UnicodeDecodeError: If the file is not valid UTF-8.
        """
        raw = path.read_text(encoding="utf-8")
        return cls(path=path, lines=split_lines(raw), raw=raw)

    @classmethod
    def from_text(cls, path: Path, text: str) -> "SourceFile":
        return cls(path=path, lines=split_lines(text), raw=text)

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class ParsedFrontMatter:
    """Parsed front-matter fields and where the body starts."""

    fields: Dict[str, str]
    body_start: int

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self.fields


def find_closing_delimiter(lines: Sequence[str]) -> int:
    """Return the index of the closing ``---`` line.

    Raises:
        FrontMatterError: If the opening or closing delimiter is missing.
    """
    if not lines or lines[0] != FRONT_MATTER_DELIMITER:
        raise FrontMatterError(FrontMatterErrorKind.MISSING_START)
    for index in range(1, len(lines)):
        if lines[index] == FRONT_MATTER_DELIMITER:
            return index
    raise FrontMatterError(FrontMatterErrorKind.MISSING_END)


def split_field(line: str) -> Optional[Tuple[str, str]]:
    """Split ``key: value`` on the first colon; None for lines without one."""
    if not line.strip() or ":" not in line:
        return None
    key, value = line.split(":", 1)
    return key.strip(), value.strip()


def _parse_strict(lines: Sequence[str]) -> ParsedFrontMatter:
    end = find_closing_delimiter(lines)
    fields: Dict[str, str] = {}
    for line in lines[1:end]:
        pair = split_field(line)
        if pair is None:
            continue
        key, value = pair
        fields[key] = value
    return ParsedFrontMatter(fields=fields, body_start=end + 1)


def _parse_lenient(lines: Sequence[str]) -> ParsedFrontMatter:
    fields: Dict[str, str] = {}
    for line in lines:
        match = _LENIENT_KEY_RE.match(line)
        if match:
            fields[match.group(1)] = match.group(2).strip()

    try:
        body_start = find_closing_delimiter(lines) + 1
    except FrontMatterError:
        body_start = 0
    return ParsedFrontMatter(fields=fields, body_start=body_start)


def parse_front_matter(
    lines: Sequence[str],
    mode: ParseMode = ParseMode.STRICT,
) -> ParsedFrontMatter:
    """Parse the front-matter block of ``lines``.

    Args:
        lines: File content split into lines (no line terminators).
        mode: STRICT raises on a missing delimiter; LENIENT never raises.

    Returns:
        ParsedFrontMatter with the field mapping (last duplicate wins) and
        the index of the first body line.

    Raises:
        FrontMatterError: In strict mode, if a delimiter is missing.
    """
    if mode is ParseMode.LENIENT:
        return _parse_lenient(lines)
    return _parse_strict(lines)
