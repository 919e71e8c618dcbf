"""
triad.py - Combined health check for instructions, chatmodes and prompts.

Runs the three triad validators, counts the files of each kind and checks
that the editor settings file points the chat tooling at the memory-bank
directories. The run fails if any validator fails or any settings condition
is missing. Nothing is modified.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from memorybank.config.validator_config import ValidatorConfig
from memorybank.validator.chatmodes import validate_chatmodes
from memorybank.validator.discovery import count_suffix_files
from memorybank.validator.errors import ValidationReport
from memorybank.validator.instructions import validate_instructions
from memorybank.validator.prompts import validate_prompts

logger = logging.getLogger(__name__)


@dataclass
class TriadHealth:
    """Outcome of a triad health check."""

    reports: Dict[str, ValidationReport] = field(default_factory=dict)
    counts: Dict[str, int] = field(default_factory=dict)
    settings_missing: List[str] = field(default_factory=list)

    @property
    def validators_passed(self) -> bool:
        return all(r.passed for r in self.reports.values())

    @property
    def settings_passed(self) -> bool:
        return not self.settings_missing

    @property
    def passed(self) -> bool:
        return self.validators_passed and self.settings_passed


def _has_location(data: Dict[str, Any], key: str, location: str) -> bool:
    locations = data.get(key, {})
    if not isinstance(locations, (dict, list)):
        return False
    return location in locations


def check_settings(root: Path, config: ValidatorConfig) -> List[str]:
    """Return a message per unmet settings condition (empty when healthy)."""
    rules = config.settings
    settings_path = root / rules.path
    if not settings_path.is_file():
        return [f"{rules.path} is missing"]

    try:
        data: Any = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        return [f"{rules.path} is not valid JSON: {e}"]
    if not isinstance(data, dict):
        return [f"{rules.path} must contain a JSON object"]

    missing: List[str] = []
    if not _has_location(data, rules.instructions_locations_key, config.paths.instructions):
        missing.append(f"settings.json missing {rules.instructions_locations_key} entry")

    if not data.get(rules.prompt_files_toggle_key, False):
        missing.append(f"settings.json missing {rules.prompt_files_toggle_key} toggle")

    if not _has_location(data, rules.prompt_locations_key, config.paths.prompts):
        missing.append(f"settings.json missing {rules.prompt_locations_key} entry")

    if not _has_location(data, rules.mode_locations_key, config.paths.chatmodes):
        missing.append(f"settings.json missing {rules.mode_locations_key} entry")

    return missing


def check_triad_health(root: Path, config: ValidatorConfig) -> TriadHealth:
    """Run the triad validators and the settings check for ``root``.

    Raises:
        OSError: If a triad file cannot be read.
    """
    paths = config.paths
    instructions_dir = root / paths.instructions
    chatmodes_dir = root / paths.chatmodes
    prompts_dir = root / paths.prompts

    health = TriadHealth()
    health.reports["instructions"] = validate_instructions(instructions_dir, config.instructions)
    health.reports["chatmodes"] = validate_chatmodes(chatmodes_dir, config.chatmodes)
    health.reports["prompts"] = validate_prompts(prompts_dir, config.prompts)

    health.counts["instructions"] = count_suffix_files(instructions_dir, config.instructions.suffix)
    health.counts["chatmodes"] = count_suffix_files(chatmodes_dir, config.chatmodes.suffix)
    health.counts["prompts"] = count_suffix_files(prompts_dir, config.prompts.suffix)

    for name, report in health.reports.items():
        logger.debug("%s validator passed=%s", name, report.passed)

    health.settings_missing = check_settings(root, config)
    return health
