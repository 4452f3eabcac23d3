"""Create and patch project configuration files without clobbering existing content."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from tsp.core.lib_logger import get_logger

logger = get_logger(__name__)


def fill_if_absent(target: Dict[str, Any], values: Dict[str, Any]) -> List[str]:
    """Set each key of ``values`` on ``target`` only where it is missing or falsy.

    Returns:
        Names of the keys that were set
    """
    changed = []
    for key, value in values.items():
        if not target.get(key):
            target[key] = value
            changed.append(key)
    return changed


class ConfigWriter:
    """File operations scoped to one project directory."""

    def __init__(self, project_dir: Path):
        """Initialize the writer.

        Args:
            project_dir: Root of the generated project
        """
        self.project_dir = Path(project_dir)

    def path(self, relative: str) -> Path:
        return self.project_dir / relative

    def ensure_directory(self, relative: str = "") -> Path:
        """Create a directory and its parents; no-op when present."""
        directory = self.path(relative) if relative else self.project_dir
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def read_json(self, relative: str) -> Dict[str, Any]:
        """Load a JSON object from the project.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file does not hold a JSON object
        """
        data = json.loads(self.path(relative).read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{relative} does not contain a JSON object")
        return data

    def write_json(self, relative: str, data: Dict[str, Any]) -> Path:
        target = self.path(relative)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
        return target

    def ensure_json(self, relative: str, template: Dict[str, Any], protect: bool = False) -> bool:
        """Write ``template`` if the file does not exist yet.

        Args:
            relative: Path inside the project
            template: Content for a new file
            protect: Warn when the file exists instead of silently keeping it

        Returns:
            True if the file was created
        """
        if self.path(relative).exists():
            if protect:
                logger.warning(f"Abort modification of \"{relative}\", already exists!")
            return False
        self.write_json(relative, template)
        logger.debug(f"Created {relative}")
        return True

    def fill_json(
        self,
        relative: str,
        values: Dict[str, Any],
        section: Optional[str] = None
    ) -> List[str]:
        """Fill missing keys of a JSON file, or of one of its top-level sections.

        Existing truthy values are never replaced. The file is only rewritten
        when something changed.

        Returns:
            Names of the keys that were set
        """
        data = self.read_json(relative)
        target = data
        if section is not None:
            if not data.get(section):
                data[section] = {}
            elif not isinstance(data[section], dict):
                raise ValueError(f"\"{section}\" in {relative} is not an object")
            target = data[section]

        changed = fill_if_absent(target, values)
        if changed:
            self.write_json(relative, data)
            logger.debug(f"Updated {relative}: {', '.join(changed)}")
        return changed

    def write_text_if_absent(self, relative: str, content: str, protect: bool = False) -> bool:
        """Write a text file unless it already exists.

        Args:
            relative: Path inside the project
            content: File contents
            protect: Warn when the file exists, for hand-authored config files

        Returns:
            True if the file was written
        """
        target = self.path(relative)
        if target.exists():
            if protect:
                logger.warning(f"Abort modification of \"{relative}\", already exists!")
            return False

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        logger.debug(f"Created {relative}")
        return True

    def exists(self, *candidates: str) -> Optional[str]:
        """Return the first of ``candidates`` present in the project, if any."""
        for relative in candidates:
            if self.path(relative).exists():
                return relative
        return None
