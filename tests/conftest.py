"""Test configuration and fixtures for tsp tests."""

import io
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Sequence

import pytest
from click.testing import CliRunner
from rich.console import Console

from tsp.core.config import TspConfig
from tsp.logic.scaffold.core.executor import CommandExecutor
from tsp.logic.scaffold.utils.prompts import Choice, Prompter


class ScriptedPrompter(Prompter):
    """Prompter that replays queued answers and records every question."""

    def __init__(self, answers: Optional[Sequence[Any]] = None):
        self.answers: List[Any] = list(answers or [])
        self.asked: List[Dict[str, Any]] = []

    def _next(self, kind: str, message: str, default: Any) -> Any:
        self.asked.append({"kind": kind, "message": message, "default": default})
        if not self.answers:
            raise AssertionError(f"Unexpected {kind} prompt: {message}")
        answer = self.answers.pop(0)
        return default if answer is None else answer

    def select(self, message: str, choices: Sequence[Choice], default: Optional[str] = None) -> str:
        answer = self._next("select", message, default)
        assert answer in [value for value, _ in choices], f"{answer!r} not offered for {message}"
        return answer

    def text(self, message: str, default: Optional[str] = None) -> str:
        return self._next("text", message, default)

    def confirm(self, message: str, default: bool = False) -> bool:
        return self._next("confirm", message, default)

    def messages(self, kind: Optional[str] = None) -> List[str]:
        return [q["message"] for q in self.asked if kind is None or q["kind"] == kind]


class RecordingRunner:
    """Stand-in for subprocess.run that records statements instead of running them."""

    def __init__(self, failing: Sequence[str] = (), returncode: int = 1):
        self.failing = list(failing)
        self.returncode = returncode
        self.calls: List[Dict[str, Any]] = []

    def __call__(self, statement: str, **kwargs) -> subprocess.CompletedProcess:
        self.calls.append({"statement": statement, **kwargs})
        failed = any(fragment in statement for fragment in self.failing)
        return subprocess.CompletedProcess(statement, self.returncode if failed else 0)

    @property
    def statements(self) -> List[str]:
        return [call["statement"] for call in self.calls]

    def cwd_of(self, fragment: str) -> Optional[str]:
        for call in self.calls:
            if fragment in call["statement"]:
                return call["cwd"]
        return None


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir).resolve()


@pytest.fixture
def test_config() -> TspConfig:
    """Create test configuration independent of the environment."""
    return TspConfig(
        _env_file=None,
        registry_url="https://registry.test",
        registry_timeout=5.0,
        major_lines=2,
        versions_per_major=3
    )


@pytest.fixture
def console() -> Console:
    """Quiet console that records output."""
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def executor(runner: RecordingRunner, console: Console) -> CommandExecutor:
    return CommandExecutor(runner=runner, console=console)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create CLI runner for testing Click commands."""
    return CliRunner()
