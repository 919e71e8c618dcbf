"""
Test fixtures and utilities for the memory-bank validator tests.

This module provides temporary repositories with a memory-bank tree, file
factories for the three triad kinds, a subprocess runner for the CLI tools
and assertion helpers.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pytest

_tests_dir = Path(__file__).parent
_repo_root = _tests_dir.parent
if str(_tests_dir) not in sys.path:
    sys.path.insert(0, str(_tests_dir))
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

from memorybank.config.validator_config import (  # noqa: E402
    ChatmodeRules,
    InstructionRules,
    MarkdownRules,
    PromptRules,
)

VALID_SETTINGS = {
    "chat.instructionsFilesLocations": {"memory-bank/instructions": True},
    "chat.promptFiles": True,
    "chat.promptFilesLocations": {"memory-bank/prompts": True},
    "chat.modeFilesLocations": {"memory-bank/chatmodes": True},
}

VALID_CHATMODE_FRONTMATTER = {
    "description": "Plan work before touching code",
    "model": "GPT-5 (Preview)",
    "tools": "['codebase', 'editFiles', 'fetch']",
}


# ============================================================================
# Rule Fixtures
# ============================================================================


@pytest.fixture
def instruction_rules() -> InstructionRules:
    return InstructionRules()


@pytest.fixture
def chatmode_rules() -> ChatmodeRules:
    return ChatmodeRules()


@pytest.fixture
def prompt_rules() -> PromptRules:
    return PromptRules()


@pytest.fixture
def markdown_rules() -> MarkdownRules:
    return MarkdownRules()


# ============================================================================
# Temporary Repository Fixtures
# ============================================================================


@pytest.fixture
def temp_repo(tmp_path):
    """
    Create a temporary repository with an empty memory-bank tree.

    Returns a Path to the temporary directory with:
    - memory-bank/instructions/ (empty)
    - memory-bank/chatmodes/ (empty)
    - memory-bank/prompts/ (empty)
    - .vscode/settings.json registering all three directories
    """
    repo = tmp_path / "test_repo"
    repo.mkdir()

    for name in ("instructions", "chatmodes", "prompts"):
        (repo / "memory-bank" / name).mkdir(parents=True)

    write_settings(repo, VALID_SETTINGS)
    return repo


@pytest.fixture
def valid_repo(temp_repo):
    """
    Create a temporary repository with one valid file of each triad kind.

    Returns a Path to the temporary directory with:
    - memory-bank/instructions/testing.instructions.md
    - memory-bank/chatmodes/planner.chatmode.md
    - memory-bank/prompts/review.prompt.md
    """
    create_instruction_file(temp_repo, "testing")
    create_chatmode_file(temp_repo, "planner")
    create_prompt_file(temp_repo, "review")
    return temp_repo


# ============================================================================
# File Factories
# ============================================================================


def write_settings(repo_path: Path, settings: Dict) -> Path:
    path = repo_path / ".vscode" / "settings.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings, indent=2), encoding="utf-8")
    return path


def _front_matter(fields: Dict[str, str]) -> str:
    lines = ["---"] + [f"{key}: {value}" for key, value in fields.items()] + ["---"]
    return "\n".join(lines)


def create_instruction_file(repo_path: Path, name: str, content: Optional[str] = None) -> Path:
    """
    Create ``memory-bank/instructions/<name>.instructions.md``.

    Args:
        repo_path: Path to repository root
        name: File stem (without the suffix)
        content: Full file content (if None, creates a valid minimal file)
    """
    if content is None:
        content = f"""---
description: Rules for {name}
applyTo: '**'
---

# {name.title()} rules

Keep tests close to the code they cover.
"""
    path = repo_path / "memory-bank" / "instructions" / f"{name}.instructions.md"
    path.write_text(content, encoding="utf-8")
    return path


def create_chatmode_file(
    repo_path: Path,
    name: str,
    frontmatter: Optional[Dict[str, str]] = None,
    body: Optional[str] = None,
) -> Path:
    """
    Create ``memory-bank/chatmodes/<name>.chatmode.md``.

    Args:
        repo_path: Path to repository root
        name: File stem (without the suffix)
        frontmatter: Front-matter fields (if None, uses valid defaults)
        body: Text after the front-matter (if None, a single H1 and a paragraph)
    """
    if frontmatter is None:
        frontmatter = dict(VALID_CHATMODE_FRONTMATTER)
    if body is None:
        body = f"# {name.title()} mode\n\nSee [the guide](../instructions/testing.instructions.md).\n"

    path = repo_path / "memory-bank" / "chatmodes" / f"{name}.chatmode.md"
    path.write_text(_front_matter(frontmatter) + "\n\n" + body, encoding="utf-8")
    return path


def prompt_text(
    name: str,
    frontmatter: Optional[Dict[str, str]] = None,
    marker: Optional[str] = None,
    title: str = "# Review changes",
    sections: str = "## Slash Command: /review\n\nReview the staged diff.\n",
) -> str:
    """Build the text of a prompt card laid out the canonical way."""
    if frontmatter is None:
        frontmatter = {"description": "Review the staged diff", "mode": "agent"}
    if marker is None:
        marker = f"<!-- memory-bank/prompts/{name}.prompt.md -->"
    return f"{_front_matter(frontmatter)}\n\n{marker}\n\n{title}\n\n{sections}"


def create_prompt_file(repo_path: Path, name: str, content: Optional[str] = None, **kwargs) -> Path:
    """
    Create ``memory-bank/prompts/<name>.prompt.md``.

    Args:
        repo_path: Path to repository root
        name: File stem (without the suffix)
        content: Full file content (if None, built by ``prompt_text``)
        **kwargs: Forwarded to ``prompt_text``
    """
    if content is None:
        content = prompt_text(name, **kwargs)
    path = repo_path / "memory-bank" / "prompts" / f"{name}.prompt.md"
    path.write_text(content, encoding="utf-8")
    return path


# ============================================================================
# CLI Runner
# ============================================================================


@pytest.fixture
def run_tool():
    """
    Fixture that returns a function to run a CLI tool against a repo path.

    Returns:
        Function(tool, repo_path, flags=[]) -> CompletedProcess
    """
    def _run(tool: str, repo_path: Path, flags: Optional[List[str]] = None):
        """
        Run ``python -m memorybank.tools.<tool>`` inside ``repo_path``.

        Args:
            tool: Module name under memorybank.tools (e.g. "validate_prompts")
            repo_path: Working directory for the run
            flags: Optional list of command-line flags

        Returns:
            subprocess.CompletedProcess with returncode, stdout, stderr
        """
        if flags is None:
            flags = []

        env = dict(os.environ)
        env["PYTHONPATH"] = os.pathsep.join(
            p for p in (str(_repo_root), env.get("PYTHONPATH", "")) if p
        )
        env.pop("MEMORY_BANK_CONFIG", None)

        cmd = [sys.executable, "-m", f"memorybank.tools.{tool}"] + flags
        return subprocess.run(
            cmd,
            cwd=repo_path,
            capture_output=True,
            text=True,
            env=env,
        )

    return _run


# ============================================================================
# Assertion Helpers
# ============================================================================


def assert_tool_passed(result: subprocess.CompletedProcess):
    """Assert that the tool passed (exit code 0)."""
    assert result.returncode == 0, (
        f"Tool failed with code {result.returncode}.\nStdout: {result.stdout}\nStderr: {result.stderr}"
    )


def assert_tool_failed(result: subprocess.CompletedProcess, code: int = 1):
    """Assert that the tool exited with ``code``."""
    assert result.returncode == code, (
        f"Expected exit code {code}, got {result.returncode}.\n"
        f"Stdout: {result.stdout}\nStderr: {result.stderr}"
    )


def assert_output_contains(output: str, expected_text: str):
    """Assert that tool output contains expected text."""
    assert expected_text in output, f"Expected '{expected_text}' in output. Got: {output}"


def messages(report) -> List[str]:
    """Messages of every issue in ``report``, in order."""
    return [issue.message for issue in report.issues]
