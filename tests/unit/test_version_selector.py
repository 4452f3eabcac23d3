"""Unit tests for version selection."""

from tsp.logic.scaffold.models.version import VersionRecord
from tsp.logic.scaffold.services.version_selector import group_by_major, select_versions


def records(*identifiers):
    return [VersionRecord(version=identifier) for identifier in identifiers]


class TestSelectVersions:
    """Test reduction to the newest releases of the latest major lines."""

    def test_two_majors_three_each(self):
        versions = records("15.1.0", "15.0.3", "15.0.2", "15.0.1", "14.2.3", "14.2.2", "14.2.1", "14.2.0", "13.5.6")
        assert select_versions(versions) == [
            "15.1.0", "15.0.3", "15.0.2",
            "14.2.3", "14.2.2", "14.2.1",
        ]

    def test_fewer_majors_than_requested(self):
        assert select_versions(records("3.1.0", "3.0.0")) == ["3.1.0", "3.0.0"]

    def test_empty_input(self):
        assert select_versions([]) == []

    def test_majors_ranked_numerically(self):
        """A newer patch on an older line does not promote that line."""
        versions = records("10.0.0", "9.5.0", "2.0.1")
        assert select_versions(versions, majors=2, per_major=1) == ["10.0.0", "9.5.0"]

    def test_custom_limits(self):
        versions = records("5.2.0", "5.1.0", "4.0.0", "3.0.0")
        assert select_versions(versions, majors=3, per_major=1) == ["5.2.0", "4.0.0", "3.0.0"]


class TestGroupByMajor:
    """Test grouping by major version."""

    def test_preserves_order_within_group(self):
        groups = group_by_major(records("2.1.0", "1.3.0", "2.0.0", "1.2.0"))
        assert [r.version for r in groups[2]] == ["2.1.0", "2.0.0"]
        assert [r.version for r in groups[1]] == ["1.3.0", "1.2.0"]
