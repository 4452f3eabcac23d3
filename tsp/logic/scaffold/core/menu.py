"""Interactive menus for choosing what to scaffold."""

from typing import Optional, Union

from rich.console import Console

from tsp.logic.scaffold.models.framework import FrameworkKind
from tsp.logic.scaffold.services.frameworks import list_frameworks
from tsp.logic.scaffold.utils.prompts import Prompter

PLAIN = "plain"
FRAMEWORK = "framework"
BACK = "back"
EXIT = "exit"

PROJECT_TYPE_CHOICES = [
    (PLAIN, "Plain TypeScript"),
    (FRAMEWORK, "Framework"),
    (EXIT, "Exit"),
]

VARIANT_CHOICES = [
    ("node", "Node.js"),
    ("bun-deno", "Bun/Deno"),
    (BACK, "Back"),
    (EXIT, "Exit"),
]


class MainMenu:
    """Top-level menu: plain TypeScript, a framework, or exit."""

    def __init__(self, prompter: Prompter, console: Optional[Console] = None):
        """Initialize the menu.

        Args:
            prompter: Interactive capability
            console: Optional Rich console
        """
        self.prompter = prompter
        self.console = console or Console()

    def choose_project_type(self) -> str:
        return self.prompter.select("Select project type:", PROJECT_TYPE_CHOICES, default=PLAIN)

    def choose_variant(self) -> str:
        return self.prompter.select("Select TypeScript variant:", VARIANT_CHOICES, default="node")

    def choose_framework(self) -> Union[FrameworkKind, str]:
        """Pick a registered framework, or return ``back``/``exit``."""
        choices = [(framework.kind.value, framework.name) for framework in list_frameworks()]
        choices += [(BACK, "Back"), (EXIT, "Exit")]

        answer = self.prompter.select("Select framework:", choices)
        if answer in (BACK, EXIT):
            return answer
        return FrameworkKind(answer)

    def say_goodbye(self) -> None:
        self.console.print("[green]Goodbye![/green]")
