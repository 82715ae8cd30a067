"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from calmspace import chat
from calmspace.classifier import CRISIS_RESPONSE
from calmspace.cli import app
from calmspace.store import KeyValueStore

runner = CliRunner()


@pytest.fixture(autouse=True)
def _use_tmp_dirs(tmp_path: Path):
    """Redirect config and data files for all CLI tests."""
    cfg_dir = tmp_path / "config"
    with patch("calmspace.config._CONFIG_DIR", cfg_dir), patch(
        "calmspace.config._CONFIG_FILE", cfg_dir / "config.json"
    ), patch("calmspace.config._DATA_DIR", tmp_path / "data"):
        yield


def _store(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "data" / "store.json")


class TestExercises:
    def test_lists_builtins(self) -> None:
        result = runner.invoke(app, ["exercises"])
        assert result.exit_code == 0
        assert "Box Breathing" in result.output
        assert "Energizing Breath" in result.output


class TestBreathe:
    @patch("calmspace.timer.time.sleep")
    def test_box_one_cycle(self, mock_sleep) -> None:
        result = runner.invoke(app, ["breathe", "box-breathing", "--cycles", "1"])
        assert result.exit_code == 0
        assert mock_sleep.call_count == 12
        assert "Completed 1 cycles" in result.output

    @patch("calmspace.timer.time.sleep")
    def test_default_exercise(self, mock_sleep) -> None:
        result = runner.invoke(app, ["breathe", "--cycles", "1"])
        assert result.exit_code == 0
        assert mock_sleep.call_count == 19  # 4-7-8

    @patch("calmspace.timer.time.sleep")
    def test_tips(self, mock_sleep) -> None:
        result = runner.invoke(app, ["breathe", "box-breathing", "-c", "1", "--tips"])
        assert "Breathing Tips" in result.output

    def test_unknown_exercise(self) -> None:
        result = runner.invoke(app, ["breathe", "holotropic"])
        assert result.exit_code == 1
        assert "Unknown exercise" in result.output

    def test_zero_cycles(self) -> None:
        result = runner.invoke(app, ["breathe", "box-breathing", "--cycles", "0"])
        assert result.exit_code == 1

    @patch("calmspace.timer.time.sleep", side_effect=KeyboardInterrupt)
    def test_interrupted(self, mock_sleep) -> None:
        result = runner.invoke(app, ["breathe", "box-breathing"])
        assert result.exit_code == 0
        assert "Paused" in result.output
        assert "Completed" not in result.output


class TestSay:
    def test_crisis(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["say", "I want to kill myself"])
        assert result.exit_code == 0
        assert "AASRA" in result.output
        history = chat.load_history(_store(tmp_path))
        assert history[-1].text == CRISIS_RESPONSE

    def test_saves_both_turns(self, tmp_path: Path) -> None:
        runner.invoke(app, ["say", "exam tomorrow"])
        history = chat.load_history(_store(tmp_path))
        assert [t.is_from_user for t in history] == [True, False]

    def test_blank_message(self) -> None:
        result = runner.invoke(app, ["say", "   "])
        assert result.exit_code == 1


class TestChat:
    def test_conversation(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["chat"], input="I feel lonely\nquit\n")
        assert result.exit_code == 0
        assert "Namaste" in result.output
        assert "Take care" in result.output
        history = chat.load_history(_store(tmp_path))
        assert [t.text for t in history][:2] == [chat.WELCOME_MESSAGE, "I feel lonely"]
        assert len(history) == 3

    def test_empty_line_ends(self) -> None:
        result = runner.invoke(app, ["chat"], input="\n")
        assert result.exit_code == 0


class TestHistory:
    def test_empty(self) -> None:
        result = runner.invoke(app, ["history"])
        assert result.exit_code == 0
        assert "No conversation history" in result.output

    def test_shows_turns(self) -> None:
        runner.invoke(app, ["say", "my parents keep fighting"])
        result = runner.invoke(app, ["history"])
        assert "my parents keep fighting" in result.output
        assert "Companion" in result.output

    def test_limit(self) -> None:
        runner.invoke(app, ["say", "first message"])
        runner.invoke(app, ["say", "second message"])
        result = runner.invoke(app, ["history", "-n", "2"])
        assert "first message" not in result.output
        assert "second message" in result.output

    @pytest.mark.parametrize("limit", ["0", "-2"])
    def test_non_positive_limit_rejected(self, limit: str) -> None:
        runner.invoke(app, ["say", "hello"])
        result = runner.invoke(app, ["history", "-n", limit])
        assert result.exit_code == 2
        assert "hello" not in result.output

    def test_clear(self) -> None:
        runner.invoke(app, ["say", "hello"])
        result = runner.invoke(app, ["history", "--clear"])
        assert "cleared" in result.output
        result = runner.invoke(app, ["history", "--clear"])
        assert "No conversation history" in result.output


class TestConfig:
    def test_show_default(self) -> None:
        result = runner.invoke(app, ["config", "--show"])
        assert result.exit_code == 0
        assert "History limit: 50" in result.output

    def test_no_flags(self) -> None:
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "--show" in result.output

    def test_set_values(self) -> None:
        result = runner.invoke(app, ["config", "--history-limit", "10", "--seed", "4"])
        assert result.exit_code == 0
        result = runner.invoke(app, ["config", "--show"])
        assert "History limit: 10" in result.output
        assert "Reply seed: 4" in result.output

    def test_invalid_history_limit(self) -> None:
        result = runner.invoke(app, ["config", "--history-limit", "0"])
        assert result.exit_code == 1

    def test_exercise(self) -> None:
        result = runner.invoke(app, ["config", "--exercise", "box-breathing", "--show"])
        assert "Default exercise: Box Breathing" in result.output

    def test_unknown_exercise(self) -> None:
        result = runner.invoke(app, ["config", "--exercise", "nope"])
        assert result.exit_code == 1

    def test_set_data_path(self, tmp_path: Path) -> None:
        target = tmp_path / "elsewhere.json"
        result = runner.invoke(app, ["config", "--data-path", str(target)])
        assert result.exit_code == 0
        assert "Data path set" in result.output

    def test_reset(self) -> None:
        runner.invoke(app, ["config", "--seed", "4"])
        result = runner.invoke(app, ["config", "--reset"])
        assert "Reset" in result.output
        result = runner.invoke(app, ["config", "--show"])
        assert "Reply seed: random" in result.output


class TestVerbose:
    def test_verbose_flag(self) -> None:
        result = runner.invoke(app, ["-v", "exercises"])
        assert result.exit_code == 0
