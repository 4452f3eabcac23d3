"""Unit tests for semantic version ordering and version records."""

import pytest
from pydantic import ValidationError

from tsp.logic.scaffold.models.version import (
    SemanticVersion,
    VersionRecord,
    has_prerelease_marker,
)


class TestSemanticVersion:
    """Test semantic version parsing and precedence."""

    def test_parses_release_core(self):
        version = SemanticVersion("14.2.3")
        assert version.release == (14, 2, 3)
        assert version.major == 14
        assert not version.is_prerelease

    def test_pads_short_cores(self):
        assert SemanticVersion("4").release == (4, 0, 0)
        assert SemanticVersion("4.1").release == (4, 1, 0)

    def test_numeric_components_compare_numerically(self):
        assert SemanticVersion("1.10.0") > SemanticVersion("1.9.0")
        assert SemanticVersion("10.0.0") > SemanticVersion("9.99.99")

    def test_release_outranks_its_prereleases(self):
        assert SemanticVersion("15.0.0") > SemanticVersion("15.0.0-beta.1")
        assert SemanticVersion("15.0.0-beta.1") > SemanticVersion("14.2.3")

    def test_prerelease_identifiers(self):
        """Numeric identifiers sort before alphanumeric ones and compare numerically."""
        assert SemanticVersion("1.0.0-alpha.2") < SemanticVersion("1.0.0-alpha.10")
        assert SemanticVersion("1.0.0-alpha.1") < SemanticVersion("1.0.0-alpha.beta")
        assert SemanticVersion("1.0.0-alpha") < SemanticVersion("1.0.0-beta")

    def test_build_metadata_ignored(self):
        assert SemanticVersion("1.2.3+build.5") == SemanticVersion("1.2.3")

    def test_sorting(self):
        identifiers = ["1.0.0", "2.0.0-beta.1", "1.10.0", "2.0.0", "1.2.0"]
        ordered = sorted(identifiers, key=SemanticVersion, reverse=True)
        assert ordered == ["2.0.0", "2.0.0-beta.1", "1.10.0", "1.2.0", "1.0.0"]

    def test_invalid_identifier(self):
        with pytest.raises(ValueError, match="Not a semantic version"):
            SemanticVersion("latest")

    @pytest.mark.parametrize("identifier", ["v1.2.3", "1.0.0a1", "1.2.3.4", "1!2.0.0", "1.0.0.post1", "1.0.0.dev2"])
    def test_python_only_forms_rejected(self, identifier):
        """Forms that PEP 440 accepts but semantic versioning does not."""
        with pytest.raises(ValueError, match="Not a semantic version"):
            SemanticVersion(identifier)


class TestPrereleaseMarker:
    """Test release-candidate and canary detection."""

    @pytest.mark.parametrize("identifier", ["14.0.0-rc.1", "15.0.0-canary.3", "1.0.0rc1"])
    def test_marked(self, identifier):
        assert has_prerelease_marker(identifier)

    @pytest.mark.parametrize("identifier", ["14.2.3", "15.0.0-beta.1", "3.0.0-alpha.2"])
    def test_unmarked(self, identifier):
        assert not has_prerelease_marker(identifier)


class TestVersionRecord:
    """Test the VersionRecord model."""

    def test_valid_record(self):
        record = VersionRecord(version="4.5.1", published="2024-03-01T10:00:00.000Z")
        assert record.major == 4
        assert record.published.year == 2024

    def test_invalid_version_rejected(self):
        with pytest.raises(ValidationError):
            VersionRecord(version="not-a-version")
