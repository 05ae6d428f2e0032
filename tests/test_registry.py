"""Tests for MCP tool handlers."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from dotcmd.config import Settings
from dotcmd.mappings.store import MappingStore
from dotcmd.tools.registry import (
    create_cycler,
    handle_complete_command,
    handle_expand_command,
    handle_list_commands,
    handle_run_command,
)
from dotcmd.tools.types import ExecutionResult


class TestHandleExpandCommand:
    """Tests for handle_expand_command."""

    def test_expands(self, store: MappingStore) -> None:
        """The expanded command line is returned."""
        result = handle_expand_command({"command": "ls.all.human"}, store)
        assert result[0].text == "ls -a -l -h"

    def test_reports_errors(self, store: MappingStore) -> None:
        """Errors are returned as text with alternatives."""
        result = handle_expand_command({"command": "ls.bogus"}, store)
        assert "Unknown option 'bogus'" in result[0].text
        assert "Available options:" in result[0].text


class TestHandleRunCommand:
    """Tests for handle_run_command."""

    def test_returns_json_result(self, store: MappingStore) -> None:
        """Run results are returned as JSON with captured output."""
        fake = ExecutionResult(
            success=True, exit_code=0, stdout="file\n", stderr="", command="ls -a"
        )
        with patch("dotcmd.tools.registry.expand_and_run", return_value=fake) as run:
            result = handle_run_command({"command": " ls.all "}, store)

        chain, used_store, options = run.call_args.args
        assert chain == "ls.all"
        assert used_store is store
        assert options.capture_output is True
        assert options.show_command is False

        payload = json.loads(result[0].text)
        assert payload == {
            "success": True,
            "exitCode": 0,
            "stdout": "file\n",
            "stderr": "",
            "command": "ls -a",
        }


class TestHandleCompleteCommand:
    """Tests for handle_complete_command."""

    def test_lists_completions(self, store: MappingStore) -> None:
        """Completions are listed with descriptions."""
        result = handle_complete_command({"buffer": "ls.all.c"}, store)
        assert result[0].text == "ls.all.color  (Colorized output)"

    def test_no_completions(self, store: MappingStore) -> None:
        """A message is returned when nothing matches."""
        result = handle_complete_command({"buffer": "ls.zzz"}, store)
        assert result[0].text == "No completions for: ls.zzz"


class TestHandleListCommands:
    """Tests for handle_list_commands."""

    def test_lists_commands(self, store: MappingStore) -> None:
        """Every base command is listed with its options."""
        result = handle_list_commands(store)
        assert result[0].text == (
            "grep: context, ignore\nls: all, almost, color, human, long"
        )

    def test_empty_store(self) -> None:
        """An empty store says so."""
        result = handle_list_commands(MappingStore())
        assert result[0].text == "No dot-notation commands registered."


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TestCycledCompletion:
    """Tests for complete_dot_command with cycle set."""

    def test_threshold_from_environment(
        self, store: MappingStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """DOTCMD_CYCLE_THRESHOLD sets the cycler threshold."""
        monkeypatch.setenv("DOTCMD_CYCLE_THRESHOLD", "9")
        assert create_cycler(store).threshold == 9.0

    def test_threshold_from_settings(self, store: MappingStore) -> None:
        """Explicit settings take precedence over the cached ones."""
        cycler = create_cycler(store, Settings(cycle_threshold=0.25))
        assert cycler.threshold == 0.25

    def test_returns_one_completion_at_a_time(self, store: MappingStore) -> None:
        """Repeated requests rotate through the candidates."""
        cycler = create_cycler(store, Settings(cycle_threshold=2.0))
        clock = FakeClock()
        cycler.clock = clock

        result = handle_complete_command({"buffer": "ls.a", "cycle": True}, store, cycler)
        assert result[0].text == "ls.all  [1/2]"

        clock.now += 1.5
        result = handle_complete_command({"buffer": "ls.all", "cycle": True}, store, cycler)
        assert result[0].text == "ls.almost  [2/2]"

    def test_slow_repeat_is_new_request(self, store: MappingStore) -> None:
        """Past the configured threshold the chain is completed afresh."""
        cycler = create_cycler(store, Settings(cycle_threshold=0.1))
        clock = FakeClock()
        cycler.clock = clock

        handle_complete_command({"buffer": "ls.a", "cycle": True}, store, cycler)
        clock.now += 0.5
        result = handle_complete_command({"buffer": "ls.all", "cycle": True}, store, cycler)
        assert result[0].text == "ls.all  [1/1]"

    def test_no_completions(self, store: MappingStore) -> None:
        """A message is returned when nothing matches."""
        cycler = create_cycler(store, Settings())
        result = handle_complete_command({"buffer": "ls.zzz", "cycle": True}, store, cycler)
        assert result[0].text == "No completions for: ls.zzz"

    def test_without_cycler_lists_all(self, store: MappingStore) -> None:
        """cycle is ignored when no cycler is given."""
        result = handle_complete_command({"buffer": "ls.a", "cycle": True}, store)
        assert result[0].text.splitlines()[0].startswith("ls.all")
