"""Install command models: ordered statements grouped by installation strategy."""

import shlex
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

# Delimiters tried in order when decomposing a free-form script
SCRIPT_DELIMITERS = ("&&", ";", "\n")


class InstallationStrategy(str, Enum):
    """How a framework gets installed into the target directory."""

    GLOBAL = "global"
    LOCAL = "local"
    MANUAL = "manual"
    SKIP = "skip"

    @property
    def label(self) -> str:
        return {
            InstallationStrategy.GLOBAL: "globally",
            InstallationStrategy.LOCAL: "locally",
            InstallationStrategy.MANUAL: "manually",
            InstallationStrategy.SKIP: "skipped",
        }[self]


@dataclass(frozen=True)
class CommandStep:
    """A single shell statement, optionally pinned to a working directory."""

    command: str
    cwd: Optional[Path] = None

    @property
    def is_blank(self) -> bool:
        return not self.command.strip()

    @property
    def directory_change(self) -> Optional[str]:
        """Target of a ``cd`` statement, or None for any other statement."""
        try:
            parts = shlex.split(self.command)
        except ValueError:
            return None
        if len(parts) == 2 and parts[0] == "cd":
            return parts[1]
        return None

    def __str__(self) -> str:
        return self.command.strip()


@dataclass(frozen=True)
class CommandScript:
    """An ordered list of statements run one after another."""

    steps: Tuple[CommandStep, ...] = ()
    success_message: Optional[str] = None

    @classmethod
    def of(cls, *steps, success_message: Optional[str] = None) -> "CommandScript":
        """Build a script from strings or ready-made steps."""
        return cls(
            steps=tuple(s if isinstance(s, CommandStep) else CommandStep(s) for s in steps),
            success_message=success_message,
        )

    @classmethod
    def from_text(cls, text: str, success_message: Optional[str] = None) -> "CommandScript":
        """Decompose a multi-statement shell script into steps.

        The first delimiter found in the text wins, in order ``&&``, ``;``,
        newline; a script containing none of them is a single statement.
        Blank statements are dropped.
        """
        parts: List[str] = [text]
        for delimiter in SCRIPT_DELIMITERS:
            if delimiter in text:
                parts = text.split(delimiter)
                break

        steps = tuple(CommandStep(part.strip()) for part in parts if part.strip())
        return cls(steps=steps, success_message=success_message)

    def is_empty(self) -> bool:
        return all(step.is_blank for step in self.steps)

    def __iter__(self):
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)


@dataclass(frozen=True)
class InstallCommandSet:
    """Install scripts a framework offers, keyed by strategy.

    A missing or empty script means the strategy is unsupported.
    """

    scripts: Dict[InstallationStrategy, CommandScript] = field(default_factory=dict)

    def get(self, strategy: InstallationStrategy) -> Optional[CommandScript]:
        script = self.scripts.get(strategy)
        if script is None or script.is_empty():
            return None
        return script

    def supports(self, strategy: InstallationStrategy) -> bool:
        return self.get(strategy) is not None

    def available(self) -> List[InstallationStrategy]:
        """Supported strategies in priority order global, local, manual."""
        order: Iterable[InstallationStrategy] = (
            InstallationStrategy.GLOBAL,
            InstallationStrategy.LOCAL,
            InstallationStrategy.MANUAL,
        )
        return [strategy for strategy in order if self.supports(strategy)]

    def is_empty(self) -> bool:
        return not self.available()
