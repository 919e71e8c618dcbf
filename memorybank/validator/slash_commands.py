"""Discovery of the slash commands declared by prompt files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from memorybank.validator.discovery import find_suffix_files
from memorybank.validator.frontmatter import SourceFile

SLASH_COMMAND_MARKER = "## Slash Command:"


@dataclass(frozen=True)
class SlashCommand:
    """One ``## Slash Command:`` heading."""

    path: Path
    line: int
    text: str

    @property
    def command(self) -> str:
        """The command itself, e.g. ``/review``."""
        return self.text[len(SLASH_COMMAND_MARKER):].strip()

    def format(self) -> str:
        return f"{self.path}:{self.line}:{self.text}"


def list_slash_commands(directory: Path, suffix: str = ".prompt.md") -> List[SlashCommand]:
    """Collect slash commands from the prompt files in ``directory``, in file order."""
    commands: List[SlashCommand] = []
    for file_path in find_suffix_files(directory, suffix):
        source = SourceFile.read(file_path)
        for number, line in enumerate(source.lines, start=1):
            if line.startswith(SLASH_COMMAND_MARKER):
                commands.append(SlashCommand(path=file_path, line=number, text=line))
    return commands
