"""Installation strategy selection based on target directory state."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from tsp.core.lib_logger import get_logger
from tsp.lib.exceptions import ConfigurationGapError, TspError, UserAbortError
from tsp.logic.scaffold.models.command import InstallCommandSet, InstallationStrategy
from tsp.logic.scaffold.models.target import ProjectTarget
from tsp.logic.scaffold.utils.prompts import Prompter

logger = get_logger(__name__)

STRATEGY_CHOICES = [
    (InstallationStrategy.GLOBAL.value, "Globally"),
    (InstallationStrategy.LOCAL.value, "Locally"),
    (InstallationStrategy.SKIP.value, "Skip"),
]


class DecisionKind(str, Enum):
    """Terminal states of strategy selection."""

    EXECUTE = "execute"
    SKIPPED = "skipped"
    ABORTED = "aborted"


@dataclass(frozen=True)
class StrategyDecision:
    """What to do with a framework install."""

    kind: DecisionKind
    strategy: Optional[InstallationStrategy] = None
    error: Optional[TspError] = None

    @classmethod
    def execute(cls, strategy: InstallationStrategy) -> "StrategyDecision":
        return cls(DecisionKind.EXECUTE, strategy=strategy)

    @classmethod
    def skipped(cls) -> "StrategyDecision":
        return cls(DecisionKind.SKIPPED, strategy=InstallationStrategy.SKIP)

    @classmethod
    def aborted(cls, error: TspError) -> "StrategyDecision":
        return cls(DecisionKind.ABORTED, error=error)


class StrategySelector:
    """Decides between global, local and manual installation.

    An existing target can only be set up manually, and only after the user
    agrees to overwrite a non-empty directory. A fresh target asks the user to
    choose when both global and local installs are offered, otherwise the
    first available of global, local, manual is used.
    """

    def __init__(self, prompter: Prompter):
        """Initialize the selector.

        Args:
            prompter: Interactive capability used for choices and confirmation
        """
        self.prompter = prompter

    def decide(self, commands: InstallCommandSet, target: ProjectTarget) -> StrategyDecision:
        if target.exists():
            return self._decide_existing(commands, target)
        return self._decide_fresh(commands)

    def _decide_existing(self, commands: InstallCommandSet, target: ProjectTarget) -> StrategyDecision:
        if not commands.supports(InstallationStrategy.MANUAL):
            logger.warning("Setup manually has not been implemented!")
            return StrategyDecision.aborted(ConfigurationGapError(
                f"Project path {target.path} already exists and manual setup has not been implemented",
                strategy=InstallationStrategy.MANUAL.value,
                project_path=str(target.directory)
            ))

        if not target.is_empty():
            logger.warning(f"Project path {target.path} is not empty!")
            confirmed = self.prompter.confirm(
                f"Directory {target.path} not empty! Perform manual installation and overwrite?",
                default=False
            )
            if not confirmed:
                logger.warning("Setup aborted!")
                return StrategyDecision.aborted(UserAbortError(
                    f"Overwrite of {target.path} declined",
                    project_path=str(target.directory)
                ))

        return StrategyDecision.execute(InstallationStrategy.MANUAL)

    def _decide_fresh(self, commands: InstallCommandSet) -> StrategyDecision:
        if commands.supports(InstallationStrategy.GLOBAL) and commands.supports(InstallationStrategy.LOCAL):
            answer = self.prompter.select(
                "Select installation method:",
                STRATEGY_CHOICES,
                default=InstallationStrategy.GLOBAL.value
            )
            strategy = InstallationStrategy(answer)
            if strategy == InstallationStrategy.SKIP:
                return StrategyDecision.skipped()
            return StrategyDecision.execute(strategy)

        available = commands.available()
        if not available:
            return StrategyDecision.skipped()
        return StrategyDecision.execute(available[0])
