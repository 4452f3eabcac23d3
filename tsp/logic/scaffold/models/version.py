"""Version record model and semantic-version ordering."""

from datetime import datetime
from functools import total_ordering
from typing import Optional, Tuple, Union

from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field, field_validator

PRERELEASE_MARKERS = ("rc", "canary")

PrereleaseKey = Tuple[Tuple[int, Union[int, str]], ...]


@total_ordering
class SemanticVersion:
    """Semantic version with npm-style precedence.

    The ``major.minor.patch`` core is parsed with :mod:`packaging`; the
    pre-release part (everything after the first ``-``) is compared per the
    semver rules: a release outranks any of its pre-releases, numeric
    identifiers compare numerically and sort before alphanumeric ones.
    Build metadata (after ``+``) is ignored.
    """

    def __init__(self, identifier: str):
        self.identifier = identifier
        core, _, prerelease = identifier.split("+", 1)[0].partition("-")
        try:
            parsed = Version(core)
        except InvalidVersion as e:
            raise ValueError(f"Not a semantic version: {identifier!r}") from e

        # PEP 440 also accepts "v1.2.3", "1.0.0a1", "1!2.0" and four-part releases
        if (
            not core[:1].isdigit()
            or len(parsed.release) > 3
            or parsed.epoch
            or parsed.pre is not None
            or parsed.post is not None
            or parsed.dev is not None
            or parsed.local is not None
        ):
            raise ValueError(f"Not a semantic version: {identifier!r}")

        # Pad "1" and "1.2" out to three components
        self.release: Tuple[int, int, int] = tuple((parsed.release + (0, 0, 0))[:3])
        self.prerelease: PrereleaseKey = tuple(
            (0, int(part)) if part.isdigit() else (1, part)
            for part in prerelease.split(".")
        ) if prerelease else ()

    @property
    def major(self) -> int:
        return self.release[0]

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _key(self) -> tuple:
        # No pre-release sorts above every pre-release of the same core
        return (self.release, not self.prerelease, self.prerelease)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "SemanticVersion") -> bool:
        if not isinstance(other, SemanticVersion):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __repr__(self) -> str:
        return f"SemanticVersion({self.identifier!r})"

    def __str__(self) -> str:
        return self.identifier


def has_prerelease_marker(identifier: str) -> bool:
    """Check whether a version identifier carries a release-candidate or canary tag."""
    return any(marker in identifier for marker in PRERELEASE_MARKERS)


class VersionRecord(BaseModel):
    """A published version of a registry package."""

    version: str = Field(description="Semantic version identifier")
    published: Optional[datetime] = Field(
        default=None,
        description="Publish timestamp reported by the registry"
    )

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Ensure the identifier parses as a semantic version."""
        SemanticVersion(v)
        return v

    @property
    def semver(self) -> SemanticVersion:
        return SemanticVersion(self.version)

    @property
    def major(self) -> int:
        return self.semver.major
