"""
Tests for the triad health aggregator and its settings checks.
"""

import pytest

from memorybank.config.validator_config import default_config
from memorybank.validator.triad import check_settings, check_triad_health

from conftest import VALID_SETTINGS, create_chatmode_file, create_prompt_file, write_settings

SETTINGS_KEYS = [
    ("chat.instructionsFilesLocations", "settings.json missing chat.instructionsFilesLocations entry"),
    ("chat.promptFiles", "settings.json missing chat.promptFiles toggle"),
    ("chat.promptFilesLocations", "settings.json missing chat.promptFilesLocations entry"),
    ("chat.modeFilesLocations", "settings.json missing chat.modeFilesLocations entry"),
]


class TestCheckSettings:
    def test_valid_settings(self, temp_repo):
        assert check_settings(temp_repo, default_config()) == []

    @pytest.mark.parametrize("key,message", SETTINGS_KEYS)
    def test_each_missing_key_reported(self, temp_repo, key, message):
        settings = dict(VALID_SETTINGS)
        del settings[key]
        write_settings(temp_repo, settings)
        assert check_settings(temp_repo, default_config()) == [message]

    def test_locations_may_be_lists(self, temp_repo):
        write_settings(temp_repo, {
            "chat.instructionsFilesLocations": ["memory-bank/instructions"],
            "chat.promptFiles": True,
            "chat.promptFilesLocations": ["memory-bank/prompts"],
            "chat.modeFilesLocations": ["memory-bank/chatmodes"],
        })
        assert check_settings(temp_repo, default_config()) == []

    def test_prompt_files_toggle_must_be_truthy(self, temp_repo):
        write_settings(temp_repo, dict(VALID_SETTINGS, **{"chat.promptFiles": False}))
        assert check_settings(temp_repo, default_config()) == [
            "settings.json missing chat.promptFiles toggle"
        ]

    def test_missing_file(self, temp_repo):
        (temp_repo / ".vscode" / "settings.json").unlink()
        assert check_settings(temp_repo, default_config()) == [".vscode/settings.json is missing"]

    def test_invalid_json(self, temp_repo):
        (temp_repo / ".vscode" / "settings.json").write_text("{not json")
        missing = check_settings(temp_repo, default_config())
        assert len(missing) == 1
        assert missing[0].startswith(".vscode/settings.json is not valid JSON")

    def test_non_object_json(self, temp_repo):
        (temp_repo / ".vscode" / "settings.json").write_text("[]")
        assert check_settings(temp_repo, default_config()) == [
            ".vscode/settings.json must contain a JSON object"
        ]


class TestCheckTriadHealth:
    def test_valid_repo_passes(self, valid_repo):
        health = check_triad_health(valid_repo, default_config())
        assert health.passed
        assert health.counts == {"instructions": 1, "chatmodes": 1, "prompts": 1}
        assert set(health.reports) == {"instructions", "chatmodes", "prompts"}

    @pytest.mark.parametrize("key,message", SETTINGS_KEYS)
    def test_missing_setting_fails_without_touching_validators(self, valid_repo, key, message):
        settings = dict(VALID_SETTINGS)
        del settings[key]
        write_settings(valid_repo, settings)

        health = check_triad_health(valid_repo, default_config())
        assert not health.passed
        assert health.validators_passed
        assert health.settings_missing == [message]

    def test_validator_failure_fails_health(self, valid_repo):
        create_chatmode_file(valid_repo, "bad", body="# One\n\n# Two\n")
        health = check_triad_health(valid_repo, default_config())
        assert not health.passed
        assert health.settings_passed
        assert not health.reports["chatmodes"].passed
        assert health.reports["prompts"].passed

    def test_counts_are_non_recursive(self, valid_repo):
        nested = valid_repo / "memory-bank" / "prompts" / "archive"
        nested.mkdir()
        (nested / "old.prompt.md").write_text("anything\n")
        create_prompt_file(valid_repo, "second")
        health = check_triad_health(valid_repo, default_config())
        assert health.counts["prompts"] == 2

    def test_empty_triad_passes(self, temp_repo):
        health = check_triad_health(temp_repo, default_config())
        assert health.passed
        assert health.counts == {"instructions": 0, "chatmodes": 0, "prompts": 0}

    def test_never_modifies_files(self, valid_repo):
        before = {p: p.read_bytes() for p in valid_repo.rglob("*") if p.is_file()}
        check_triad_health(valid_repo, default_config())
        after = {p: p.read_bytes() for p in valid_repo.rglob("*") if p.is_file()}
        assert before == after
