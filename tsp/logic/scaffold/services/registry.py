"""Package registry client for resolving published framework versions."""

import asyncio
from typing import Any, Dict, Iterable, List, Optional

import httpx
from pydantic import ValidationError

from tsp.core.lib_logger import get_logger
from tsp.logic.scaffold.models.version import SemanticVersion, VersionRecord, has_prerelease_marker

logger = get_logger(__name__)

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


def filter_prereleases(records: Iterable[VersionRecord]) -> List[VersionRecord]:
    """Drop release-candidate and canary versions, keeping everything else."""
    return [r for r in records if not has_prerelease_marker(r.version)]


def sort_versions(records: Iterable[VersionRecord]) -> List[VersionRecord]:
    """Sort by descending semantic-version precedence."""
    return sorted(records, key=lambda r: r.semver, reverse=True)


def parse_registry_document(document: Dict[str, Any]) -> List[VersionRecord]:
    """Build version records from a registry package document.

    Raises:
        ValueError: If the document lacks a ``versions`` mapping
    """
    versions = document.get("versions")
    if not isinstance(versions, dict):
        raise ValueError("Registry document has no 'versions' mapping")

    times = document.get("time")
    if not isinstance(times, dict):
        times = {}

    records = []
    for identifier in versions:
        try:
            SemanticVersion(identifier)
        except ValueError as e:
            # Registries occasionally hold identifiers that are not semver
            logger.debug(f"Skipping unparseable version {identifier!r}: {e}")
            continue

        try:
            record = VersionRecord(version=identifier, published=times.get(identifier))
        except ValidationError:
            logger.debug(f"Ignoring malformed publish time for {identifier!r}: {times.get(identifier)!r}")
            record = VersionRecord(version=identifier)
        records.append(record)
    return records


class RegistryClient:
    """Read-only client for a public package metadata registry."""

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: Optional[float] = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """Initialize registry client.

        Args:
            base_url: Registry root URL
            timeout: Request timeout in seconds, None to wait indefinitely
            transport: Optional httpx transport for testing
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def package_url(self, package: str) -> str:
        return f"{self.base_url}/{package}"

    async def get_versions(self, package: str) -> List[VersionRecord]:
        """Fetch every published version of a package.

        Release candidates and canaries are filtered out and the rest is
        sorted newest first. Any failure (network error, non-2xx status,
        malformed body) is logged and yields an empty list.
        """
        url = self.package_url(package)
        log = logger.with_context(package=package, url=url)
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
                headers={"Accept": "application/json"},
                follow_redirects=True
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                document = response.json()

            if not isinstance(document, dict):
                raise ValueError("Registry response is not a JSON object")
            records = parse_registry_document(document)
        except (httpx.HTTPError, ValueError) as e:
            log.error(f"Error fetching versions for {package}: {e}")
            return []

        versions = sort_versions(filter_prereleases(records))
        log.debug(f"Resolved {len(versions)} versions for {package}")
        return versions

    def fetch_versions(self, package: str) -> List[VersionRecord]:
        """Run :meth:`get_versions` to completion from synchronous code."""
        return asyncio.run(self.get_versions(package))
