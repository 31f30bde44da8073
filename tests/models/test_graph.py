"""Tests for package graph models."""
import pytest
from pydantic import ValidationError

from license_bom.models.match import LicenseInfo, MatchResult, PackageLicense
from license_bom.models.package import GraphResult, GraphStatus, Package
from license_bom.models.template import LicenseTemplate


class TestPackage:
    """Tests for Package model."""

    def test_is_frozen(self) -> None:
        """Test that packages cannot be mutated."""
        package = Package(import_path="a", root_dir="/src")
        with pytest.raises(ValidationError):
            package.error = "boom"  # type: ignore[misc]


class TestGraphResult:
    """Tests for GraphResult model."""

    def test_default_is_ok(self) -> None:
        """Test that a plain result is ok and empty."""
        result = GraphResult()
        assert result.ok
        assert result.status == GraphStatus.OK
        assert result.packages == []
        assert result.message is None

    def test_missing(self) -> None:
        """Test the missing constructor."""
        result = GraphResult.missing("not here")
        assert not result.ok
        assert result.status == GraphStatus.MISSING
        assert result.message == "not here"

    def test_failed(self) -> None:
        """Test the failed constructor."""
        result = GraphResult.failed("boom")
        assert result.status.value == "failed"


class TestMatchModels:
    """Tests for match result models."""

    def test_match_without_template(self) -> None:
        """Test that a result without template is not matched."""
        assert not MatchResult().matched

    def test_license_info_from_match(self) -> None:
        """Test that a match result is copied onto a license file."""
        match = MatchResult(
            template=LicenseTemplate(title="MIT License"),
            score=0.9,
            extra_words=["acme"],
        )

        info = LicenseInfo.from_match("a/LICENSE", match)

        assert info.path == "a/LICENSE"
        assert info.score == 0.9
        assert info.extra_words == ["acme"]
        assert info.extra_words is not match.extra_words

    def test_package_license_has_template(self) -> None:
        """Test has_template over several license files."""
        entry = PackageLicense(
            package="a",
            license_infos=[
                LicenseInfo(path="a/COPYING"),
                LicenseInfo(path="a/LICENSE", template=LicenseTemplate(title="X")),
            ],
        )
        assert entry.has_template
        assert not PackageLicense(package="b").has_template

    def test_template_display_name(self) -> None:
        """Test the display name falls back to the SPDX id."""
        assert LicenseTemplate(title="MIT License").display_name == "MIT License"
        assert LicenseTemplate(spdx_id="MIT").display_name == "MIT"
