#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Unit tests for dependency checks and debug timing."""

import logging

import pytest

from mdpreview.exceptions import DependencyError
from mdpreview.utils.decorators import debug_timer, requires_dependencies
from mdpreview.utils.packages import check_version_requirement, get_package_version


@pytest.mark.unit
class TestRequiresDependencies:
    """Test the dependency-checking decorator."""

    def test_available_package_runs(self) -> None:
        """Test the wrapped function runs when its imports are available."""

        @requires_dependencies("test component", [("pytest", "pytest", "")])
        def work(value: int) -> int:
            return value * 2

        assert work(3) == 6
        assert work.__name__ == "work"

    def test_missing_package(self) -> None:
        """Test a missing import raises DependencyError with install advice."""

        @requires_dependencies("test component", [("not-a-real-pkg", "not_a_real_pkg_xyz", ">=1.0")])
        def work() -> None:
            raise AssertionError("should not run")

        with pytest.raises(DependencyError) as exc_info:
            work()

        error = exc_info.value
        assert error.component_name == "test component"
        assert error.missing_packages == [("not-a-real-pkg", ">=1.0")]
        assert isinstance(error.original_import_error, ImportError)
        assert "pip install --upgrade" in str(error)

    def test_version_mismatch(self) -> None:
        """Test an installed package below the required version is reported."""

        @requires_dependencies("test component", [("pytest", "pytest", ">=999.0")])
        def work() -> None:
            raise AssertionError("should not run")

        with pytest.raises(DependencyError) as exc_info:
            work()
        assert exc_info.value.version_mismatches[0][:2] == ("pytest", ">=999.0")
        assert "version mismatches" in str(exc_info.value)


@pytest.mark.unit
class TestPackages:
    """Test installed version lookup."""

    def test_installed_version(self) -> None:
        """Test an installed distribution reports its version."""
        assert get_package_version("pytest")
        assert check_version_requirement("pytest", ">=1.0")[0]

    def test_missing_distribution(self) -> None:
        """Test a missing distribution has no version."""
        assert get_package_version("not-a-real-pkg-xyz") is None
        assert check_version_requirement("not-a-real-pkg-xyz", ">=1.0") == (False, None)


@pytest.mark.unit
class TestDebugTimer:
    """Test DEBUG-level operation timing."""

    def test_logs_at_debug(self, caplog) -> None:
        """Test the elapsed time is logged when DEBUG is enabled."""
        logger = logging.getLogger("mdpreview.tests.timer")
        with caplog.at_level(logging.DEBUG, logger=logger.name):
            with debug_timer(logger, "Sample step"):
                pass
        assert any("Sample step completed in" in record.getMessage() for record in caplog.records)

    def test_silent_above_debug(self, caplog) -> None:
        """Test nothing is logged when DEBUG is disabled."""
        logger = logging.getLogger("mdpreview.tests.timer_quiet")
        with caplog.at_level(logging.INFO, logger=logger.name):
            with debug_timer(logger, "Quiet step"):
                pass
        assert not caplog.records
