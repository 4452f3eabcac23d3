"""Data models for scaffold operations."""

from tsp.logic.scaffold.models.command import (
    CommandScript,
    CommandStep,
    InstallCommandSet,
    InstallationStrategy,
)
from tsp.logic.scaffold.models.framework import FrameworkDescriptor, FrameworkKind
from tsp.logic.scaffold.models.operation import OperationStatus, OperationType, ScaffoldOperation
from tsp.logic.scaffold.models.target import ProjectTarget
from tsp.logic.scaffold.models.version import SemanticVersion, VersionRecord

__all__ = [
    "CommandScript",
    "CommandStep",
    "InstallCommandSet",
    "InstallationStrategy",
    "FrameworkDescriptor",
    "FrameworkKind",
    "OperationStatus",
    "OperationType",
    "ScaffoldOperation",
    "ProjectTarget",
    "SemanticVersion",
    "VersionRecord",
]
