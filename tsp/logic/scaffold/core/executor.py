"""Sequential execution of install command scripts."""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console

from tsp.core.lib_logger import get_logger
from tsp.lib.exceptions import SubprocessFailureError
from tsp.logic.scaffold.models.command import CommandScript, CommandStep

logger = get_logger(__name__)

Runner = Callable[..., subprocess.CompletedProcess]


@dataclass
class ExecutionResult:
    """Statements that ran, in order, and where the script ended up."""

    executed: List[str] = field(default_factory=list)
    working_dir: Optional[Path] = None


class CommandExecutor:
    """Runs a script's statements one by one, stopping at the first failure.

    Statements inherit standard streams so the user watches installers live.
    A ``cd`` statement moves the working directory for the statements after
    it instead of spawning a shell. Nothing is rolled back on failure.
    """

    def __init__(
        self,
        shell: str = "/bin/bash",
        runner: Optional[Runner] = None,
        console: Optional[Console] = None
    ):
        """Initialize the executor.

        Args:
            shell: Shell used to interpret each statement
            runner: Replacement for :func:`subprocess.run`, for testing
            console: Optional Rich console
        """
        self.shell = shell
        self._runner = runner or subprocess.run
        self.console = console or Console()

    def execute(self, script: CommandScript, working_dir: Path) -> ExecutionResult:
        """Run every non-blank statement of ``script``.

        Args:
            script: Statements to run
            working_dir: Directory statements without an explicit ``cwd`` start in

        Raises:
            SubprocessFailureError: On the first statement that fails
        """
        result = ExecutionResult(working_dir=Path(working_dir))

        for step in script:
            if step.is_blank:
                continue

            target = step.directory_change
            if target is not None:
                result.working_dir = self._change_directory(step, result.working_dir, target)
                result.executed.append(str(step))
                continue

            cwd = step.cwd or result.working_dir
            result.executed.append(str(step))
            self._run_step(step, cwd)

        if script.success_message:
            self.console.print(f"🚀 {script.success_message}")

        return result

    def run_statement(self, command: str, working_dir: Path) -> ExecutionResult:
        """Run a single statement."""
        return self.execute(CommandScript.of(command), working_dir)

    def _run_step(self, step: CommandStep, cwd: Path) -> None:
        statement = str(step)
        logger.info(f"Running: {statement}", extra={"cwd": str(cwd)})
        self.console.print(f"[dim]$ {statement}[/dim]")

        try:
            completed = self._runner(
                statement,
                shell=True,
                executable=self.shell,
                cwd=str(cwd),
                check=False
            )
        except OSError as e:
            logger.error(f"Error executing command: {statement}")
            raise SubprocessFailureError(
                f"Could not run '{statement}': {e}",
                statement=statement,
                cwd=str(cwd)
            ) from e

        if completed.returncode != 0:
            logger.error(f"Error executing command: {statement}")
            raise SubprocessFailureError(
                f"Command '{statement}' exited with status {completed.returncode}",
                statement=statement,
                returncode=completed.returncode,
                cwd=str(cwd)
            )

    def _change_directory(self, step: CommandStep, current: Path, target: str) -> Path:
        base = step.cwd or current
        new_dir = Path(target).expanduser()
        if not new_dir.is_absolute():
            new_dir = base / new_dir
        new_dir = new_dir.resolve()

        if not new_dir.is_dir():
            raise SubprocessFailureError(
                f"No such directory: {new_dir}",
                statement=str(step),
                cwd=str(base)
            )
        logger.debug(f"Working directory is now {new_dir}")
        return new_dir
