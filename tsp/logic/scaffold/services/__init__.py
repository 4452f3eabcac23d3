"""Scaffold services: registry, version selection, config writing, frameworks."""

from tsp.logic.scaffold.services.config_writer import ConfigWriter, fill_if_absent
from tsp.logic.scaffold.services.frameworks import FRAMEWORKS, get_framework, list_frameworks
from tsp.logic.scaffold.services.post_setup import PostSetupPipeline, TestingFramework
from tsp.logic.scaffold.services.registry import RegistryClient
from tsp.logic.scaffold.services.version_selector import select_versions

__all__ = [
    "ConfigWriter",
    "fill_if_absent",
    "FRAMEWORKS",
    "get_framework",
    "list_frameworks",
    "PostSetupPipeline",
    "TestingFramework",
    "RegistryClient",
    "select_versions",
]
