"""Framework descriptor model."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from tsp.logic.scaffold.models.command import InstallCommandSet, InstallationStrategy
from tsp.logic.scaffold.models.target import ProjectTarget

if TYPE_CHECKING:
    from tsp.logic.scaffold.services.config_writer import ConfigWriter


class FrameworkKind(str, Enum):
    """Supported frameworks."""

    NESTJS = "nestjs"
    NEXTJS = "nextjs"
    ASTROJS = "astrojs"
    NUXTJS = "nuxtjs"
    QUASAR = "quasar"


InstallCommandBuilder = Callable[[ProjectTarget, str], InstallCommandSet]
ConfigSetup = Callable[["ConfigWriter", InstallationStrategy], None]


@dataclass(frozen=True)
class FrameworkDescriptor:
    """Static description of how to install and configure a framework."""

    kind: FrameworkKind
    name: str
    package: str
    repository: str
    install_commands: InstallCommandBuilder
    configure: ConfigSetup
    prerequisite_script: Optional[str] = None

    @property
    def repository_url(self) -> str:
        return f"https://github.com/{self.repository}"

    def default_project_name(self) -> str:
        return f"{self.kind.value}-project"
