"""Foundation artifact verification.

Checks that the files every repository built from the template ships with
are present. Read-only: running it any number of times gives the same answer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence


@dataclass
class FoundationStatus:
    found: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.missing


def verify_foundation(root: Path, artifacts: Sequence[str]) -> FoundationStatus:
    status = FoundationStatus()
    for artifact in artifacts:
        if (root / artifact).exists():
            status.found.append(artifact)
        else:
            status.missing.append(artifact)
    return status
