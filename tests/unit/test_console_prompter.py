"""Unit tests for terminal prompts and step reporting."""

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from tsp.logic.scaffold.utils.progress import StepReporter
from tsp.logic.scaffold.utils.prompts import ConsolePrompter

CHOICES = [("global", "Globally"), ("local", "Locally"), ("skip", "Skip")]


@pytest.fixture
def prompter(console) -> ConsolePrompter:
    return ConsolePrompter(console=console)


class TestConsolePrompter:
    """Test the Rich-backed prompter."""

    def test_select_maps_number_to_value(self, prompter):
        with patch("tsp.logic.scaffold.utils.prompts.IntPrompt.ask", return_value=2) as mock_ask:
            assert prompter.select("Select installation method:", CHOICES, default="global") == "local"

        kwargs = mock_ask.call_args.kwargs
        assert kwargs["choices"] == ["1", "2", "3"]
        assert kwargs["default"] == 1

    def test_select_default_index(self, prompter):
        with patch("tsp.logic.scaffold.utils.prompts.IntPrompt.ask", return_value=3) as mock_ask:
            prompter.select("Select:", CHOICES, default="skip")
        assert mock_ask.call_args.kwargs["default"] == 3

    def test_select_shows_labels(self, prompter, console):
        with patch("tsp.logic.scaffold.utils.prompts.IntPrompt.ask", return_value=1):
            prompter.select("Select installation method:", CHOICES)
        output = console.file.getvalue()
        assert "Globally" in output and "Locally" in output

    def test_select_without_choices(self, prompter):
        with pytest.raises(ValueError):
            prompter.select("Select:", [])

    def test_text_default_on_eof(self, prompter):
        with patch("tsp.logic.scaffold.utils.prompts.Prompt.ask", side_effect=EOFError):
            assert prompter.text("Enter project name:", default="nextjs-project") == "nextjs-project"

    def test_text_strips(self, prompter):
        with patch("tsp.logic.scaffold.utils.prompts.Prompt.ask", return_value="  my-app "):
            assert prompter.text("Enter project name:") == "my-app"

    def test_confirm_eof_declines(self, prompter):
        with patch("tsp.logic.scaffold.utils.prompts.Confirm.ask", side_effect=EOFError):
            assert prompter.confirm("Overwrite?", default=True) is False


class TestStepReporter:
    """Test outcome lines."""

    def test_outcome_lines(self):
        console = Console(file=io.StringIO(), width=120)
        reporter = StepReporter(console=console)

        reporter.succeed("Versions fetched")
        reporter.warn("Testing framework setup skipped!")
        reporter.fail("Error fetching versions")

        output = console.file.getvalue()
        assert "✔ Versions fetched" in output
        assert "Testing framework setup skipped!" in output
        assert "✖ Error fetching versions" in output

    def test_disabled_status_still_runs_block(self):
        reporter = StepReporter(console=Console(file=io.StringIO()), enabled=False)
        ran = []
        with reporter.status("Fetching available versions..."):
            ran.append(True)
        assert ran == [True]
