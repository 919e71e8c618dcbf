"""Validator configuration for the memory-bank convention checks.

Every validator takes its rules as an explicit, frozen configuration object
instead of reading module globals, so tests can pass fixtures directly.

Defaults live in ``default_config()``. A YAML file may override any section:

    chatmodes:
      allowed_models:
        - GPT-5 (Preview)
        - Claude Sonnet 4
    markdown:
      max_line_length: 100

Resolution order (first match wins):
    1. explicit path (``--config``)
    2. ``MEMORY_BANK_CONFIG`` environment variable
    3. ``<root>/memory-bank/validators.yaml`` if it exists
    4. built-in defaults

Usage:
    from memorybank.config.validator_config import load_config

    config = load_config(root=Path("."))
    report = validate_chatmodes(root / config.paths.chatmodes, config.chatmodes)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MEMORY_BANK_CONFIG"
DEFAULT_CONFIG_RELPATH = Path("memory-bank") / "validators.yaml"

EXTERNAL_LINK_SCHEMES: Tuple[str, ...] = ("https://", "http://", "ftp://")

DEFAULT_TYPOS: Dict[str, str] = {
    "alwas": "always",
    "alredy": "already",
    "ouutput": "output",
    "uare": "are",
    "puurposful": "purposeful",
    "anumerate": "enumerate",
    "beggining": "beginning",
    "occured": "occurred",
    "recieve": "receive",
    "seperate": "separate",
    "teh": "the",
    "adn": "and",
    "taht": "that",
    "thier": "their",
    "becuase": "because",
    "definately": "definitely",
    "occurance": "occurrence",
    "untill": "until",
}


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used."""


# =============================================================================
# Rule sets
# =============================================================================


@dataclass(frozen=True)
class TriadPaths:
    """Triad directories, relative to the repository root."""
    instructions: str = "memory-bank/instructions"
    chatmodes: str = "memory-bank/chatmodes"
    prompts: str = "memory-bank/prompts"


@dataclass(frozen=True)
class InstructionRules:
    """Rules for ``*.instructions.md`` files."""
    suffix: str = ".instructions.md"
    allow_external: Tuple[str, ...] = (
        "layer-*",
        "conventional-commits-must-be-used.instructions.md",
        "gitmoji-complete-list.instructions.md",
    )
    link_schemes: Tuple[str, ...] = EXTERNAL_LINK_SCHEMES


@dataclass(frozen=True)
class ChatmodeRules:
    """Rules for ``*.chatmode.md`` files."""
    suffix: str = ".chatmode.md"
    allowed_models: Tuple[str, ...] = ("GPT-5 (Preview)", "GPT-5 mini (Preview)")
    expected_tools: str = "['codebase', 'editFiles', 'fetch']"
    link_schemes: Tuple[str, ...] = EXTERNAL_LINK_SCHEMES


@dataclass(frozen=True)
class PromptRules:
    """Rules for ``*.prompt.md`` files."""
    suffix: str = ".prompt.md"
    allowed_keys: Tuple[str, ...] = ("description", "mode", "model", "tools")
    marker_prefix: str = "memory-bank/prompts"
    slash_command_prefix: str = "## Slash Command: "
    link_schemes: Tuple[str, ...] = ("http://", "https://")

    def expected_marker(self, filename: str) -> str:
        return f"<!-- {self.marker_prefix}/{filename} -->"


@dataclass(frozen=True)
class MarkdownRules:
    """Rules for the generic markdown linter."""
    max_line_length: int = 120
    typos: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType(dict(DEFAULT_TYPOS))
    )
    exclude_dirs: Tuple[str, ...] = ("node_modules", ".git")


@dataclass(frozen=True)
class SettingsRules:
    """Editor settings conditions checked by the triad health report."""
    path: str = ".vscode/settings.json"
    instructions_locations_key: str = "chat.instructionsFilesLocations"
    prompt_files_toggle_key: str = "chat.promptFiles"
    prompt_locations_key: str = "chat.promptFilesLocations"
    mode_locations_key: str = "chat.modeFilesLocations"


@dataclass(frozen=True)
class FoundationRules:
    """Artifacts every repository built from the template should carry."""
    artifacts: Tuple[str, ...] = (
        ".editorconfig",
        ".gitattributes",
        ".gitignore",
        "LICENSE",
        "README.md",
        "VERSION",
        "scripts/README.md",
        "scripts/init.sh",
    )


@dataclass(frozen=True)
class ValidatorConfig:
    """Complete, immutable configuration for one run."""
    paths: TriadPaths = field(default_factory=TriadPaths)
    instructions: InstructionRules = field(default_factory=InstructionRules)
    chatmodes: ChatmodeRules = field(default_factory=ChatmodeRules)
    prompts: PromptRules = field(default_factory=PromptRules)
    markdown: MarkdownRules = field(default_factory=MarkdownRules)
    settings: SettingsRules = field(default_factory=SettingsRules)
    foundation: FoundationRules = field(default_factory=FoundationRules)
    source: str = "default"  # "default" | path of the YAML file


def default_config() -> ValidatorConfig:
    """Return the built-in configuration."""
    return ValidatorConfig()


# =============================================================================
# YAML overrides
# =============================================================================


def _coerce(section: str, name: str, current: Any, value: Any) -> Any:
    """Coerce a YAML value to the type of the default it replaces."""
    where = f"{section}.{name}"
    if isinstance(current, tuple):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"'{where}' must be a list of strings")
        return tuple(value)
    if isinstance(current, Mapping):
        if not isinstance(value, dict):
            raise ConfigError(f"'{where}' must be a mapping")
        return MappingProxyType({str(k): str(v) for k, v in value.items()})
    if isinstance(current, bool):
        if not isinstance(value, bool):
            raise ConfigError(f"'{where}' must be true or false")
        return value
    if isinstance(current, int):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigError(f"'{where}' must be a positive integer")
        return value
    if not isinstance(value, str):
        raise ConfigError(f"'{where}' must be a string")
    return value


def _apply_section(section: str, current: Any, overrides: Any) -> Any:
    if not isinstance(overrides, dict):
        raise ConfigError(f"section '{section}' must be a mapping")

    known = {f.name for f in fields(current)}
    changes: Dict[str, Any] = {}
    for name, value in overrides.items():
        if name not in known:
            raise ConfigError(f"unknown key '{section}.{name}'")
        changes[name] = _coerce(section, name, getattr(current, name), value)
    return replace(current, **changes)


def config_from_mapping(data: Optional[Mapping[str, Any]], source: str = "mapping") -> ValidatorConfig:
    """Build a ValidatorConfig from parsed YAML data layered over defaults.

    Raises:
        ConfigError: On unknown sections/keys or wrongly typed values.
    """
    config = default_config()
    if not data:
        return replace(config, source=source)
    if not isinstance(data, Mapping):
        raise ConfigError("configuration root must be a mapping")

    sections = {f.name for f in fields(config)} - {"source"}
    changes: Dict[str, Any] = {}
    for section, overrides in data.items():
        if section not in sections:
            raise ConfigError(f"unknown configuration section '{section}'")
        changes[section] = _apply_section(section, getattr(config, section), overrides)
    return replace(config, source=source, **changes)


def _resolve_config_path(root: Path, explicit: Optional[Path]) -> Optional[Path]:
    if explicit is not None:
        return explicit
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    candidate = root / DEFAULT_CONFIG_RELPATH
    if candidate.is_file():
        return candidate
    return None


def load_config(root: Path = Path("."), path: Optional[Path] = None) -> ValidatorConfig:
    """Load configuration for a repository rooted at ``root``.

    Args:
        root: Repository root (used to find ``memory-bank/validators.yaml``).
        path: Explicit configuration file; takes precedence over everything.

    Returns:
        The resolved ValidatorConfig.

    Raises:
        ConfigError: If the selected file is missing, unparseable or invalid.
    """
    config_path = _resolve_config_path(root, path)
    if config_path is None:
        logger.debug("No validator config file found, using defaults")
        return default_config()

    if not config_path.is_file():
        raise ConfigError(f"config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {config_path}: {e}") from e

    logger.debug("Loaded validator config from %s", config_path)
    return config_from_mapping(data, source=str(config_path))
