"""Scaffold logic: version resolution, installation and project configuration."""

from tsp.logic.scaffold.core.orchestrator import ScaffoldOrchestrator

__all__ = [
    "ScaffoldOrchestrator",
]
