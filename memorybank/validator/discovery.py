"""File discovery for the validators."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

logger = logging.getLogger(__name__)


def find_suffix_files(directory: Path, suffix: str) -> List[Path]:
    """Return files in ``directory`` (non-recursive) whose name ends with ``suffix``.

    A missing directory yields an empty list; callers decide whether that is
    a failure.
    """
    if not directory.is_dir():
        logger.debug("Directory %s does not exist", directory)
        return []
    files = sorted(
        p for p in directory.iterdir()
        if p.name.endswith(suffix) and p.is_file()
    )
    logger.debug("Found %d '*%s' files in %s", len(files), suffix, directory)
    return files


def count_suffix_files(directory: Path, suffix: str) -> int:
    return len(find_suffix_files(directory, suffix))


def _is_excluded(path: Path, exclude_dirs: Sequence[str]) -> bool:
    return any(part in exclude_dirs for part in path.parts)


def find_markdown_files(paths: Iterable[Path], exclude_dirs: Sequence[str]) -> List[Path]:
    """Expand ``paths`` into markdown files.

    Directories are searched recursively for ``*.md``; explicit file
    arguments are kept as given. Anything under an excluded directory name
    (``node_modules``, ``.git``) is skipped.
    """
    found: List[Path] = []
    seen = set()
    for path in paths:
        if path.is_dir():
            candidates = sorted(
                p for p in path.rglob("*.md")
                if p.is_file() and not _is_excluded(p.relative_to(path), exclude_dirs)
            )
        elif path.is_file():
            candidates = [path]
        else:
            logger.warning("Skipping %s: no such file or directory", path)
            continue

        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                found.append(candidate)
    return found
