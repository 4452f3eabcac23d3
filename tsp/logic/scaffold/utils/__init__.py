"""Utility functions for scaffold operations."""

from tsp.logic.scaffold.utils.progress import StepReporter
from tsp.logic.scaffold.utils.prompts import ConsolePrompter, Prompter

__all__ = [
    "StepReporter",
    "ConsolePrompter",
    "Prompter",
]
