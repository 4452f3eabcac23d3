"""Reduce a version list to the choices shown to the user."""

from collections import OrderedDict
from typing import Dict, Iterable, List

from tsp.logic.scaffold.models.version import VersionRecord


def group_by_major(records: Iterable[VersionRecord]) -> Dict[int, List[VersionRecord]]:
    """Group records by major version, preserving input order within each group."""
    groups: Dict[int, List[VersionRecord]] = OrderedDict()
    for record in records:
        groups.setdefault(record.major, []).append(record)
    return groups


def select_versions(
    records: Iterable[VersionRecord],
    majors: int = 2,
    per_major: int = 3
) -> List[str]:
    """Pick the newest releases of the most recent major lines.

    ``records`` must already be sorted newest first. Majors are ranked by
    number, not publish date, and each contributes its first ``per_major``
    entries.
    """
    groups = group_by_major(records)
    latest_majors = sorted(groups, reverse=True)[:majors]

    result: List[str] = []
    for major in latest_majors:
        result.extend(r.version for r in groups[major][:per_major])
    return result
