# TSP - TypeScript Project Initializer

# Import subpackages to ensure they are discovered by the build system
from . import cli, core, lib, logic

__all__ = ["cli", "core", "lib", "logic"]
