"""Project target model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ProjectTarget(BaseModel):
    """Where a new project is materialized."""

    name: str = Field(description="Project name, used by scaffolding CLIs")
    path: str = Field(description="Project path as entered, absolute or relative")
    base_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory relative paths are resolved against"
    )

    @field_validator("name", "path")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject empty names and paths."""
        v = v.strip()
        if not v:
            raise ValueError("Value must not be empty")
        return v

    @property
    def directory(self) -> Path:
        """Absolute project directory."""
        path = Path(self.path).expanduser()
        if not path.is_absolute():
            path = self.base_dir / path
        return Path(path.resolve())

    def exists(self) -> bool:
        return self.directory.exists()

    def is_empty(self) -> bool:
        """True for an existing directory without entries."""
        directory = self.directory
        return directory.is_dir() and not any(directory.iterdir())
