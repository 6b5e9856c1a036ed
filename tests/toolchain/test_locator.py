"""
Unit tests for the NDK locator.

All tests run against an in-memory filesystem and an explicit environment,
never the real machine.
"""

import pytest
from pathlib import Path

from ndkbuild.core.exceptions import ToolchainInvalidError, ToolchainNotFoundError
from ndkbuild.toolchain.locator import NdkLocator


@pytest.fixture
def locator_factory(mock_fs):
    def make(environ=None, host_os="linux"):
        return NdkLocator(environ=environ or {}, fs=mock_fs, host_os=host_os)

    return make


class TestNdkLocatorNotFound:
    def test_nothing_configured(self, locator_factory):
        """Test no overrides, no environment and no conventional paths."""
        locator = locator_factory()

        with pytest.raises(ToolchainNotFoundError) as exc_info:
            locator.locate()

        assert "ANDROID_NDK" in exc_info.value.hint
        assert "--ndk" in exc_info.value.hint

    @pytest.mark.parametrize("host_os", ["linux", "macos", "windows"])
    def test_nothing_configured_any_host(self, locator_factory, host_os):
        with pytest.raises(ToolchainNotFoundError):
            locator_factory(host_os=host_os).locate()

    def test_empty_environment_values(self, locator_factory):
        locator = locator_factory(
            {"ANDROID_NDK": "", "NDK_PATH": "", "ANDROID_SDK_ROOT": ""}
        )

        with pytest.raises(ToolchainNotFoundError):
            locator.locate()


class TestNdkLocatorPriority:
    def test_explicit_override_wins(self, mock_fs, locator_factory):
        mock_fs.add_ndk(Path("/explicit"))
        mock_fs.add_ndk(Path("/env-ndk"))
        locator = locator_factory({"ANDROID_NDK": "/env-ndk"})

        assert locator.locate(Path("/explicit")) == Path("/explicit")

    def test_android_ndk_before_ndk_path(self, mock_fs, locator_factory):
        mock_fs.add_ndk(Path("/a"))
        mock_fs.add_ndk(Path("/b"))
        locator = locator_factory({"ANDROID_NDK": "/a", "NDK_PATH": "/b"})

        assert locator.locate() == Path("/a")

    def test_ndk_path(self, mock_fs, locator_factory):
        mock_fs.add_ndk(Path("/b"))
        locator = locator_factory({"NDK_PATH": "/b"})

        assert locator.locate() == Path("/b")

    def test_sdk_root_before_android_home(self, mock_fs, locator_factory):
        mock_fs.add_ndk(Path("/sdk1/ndk-bundle"))
        mock_fs.add_ndk(Path("/sdk2/ndk-bundle"))
        locator = locator_factory({"ANDROID_SDK_ROOT": "/sdk1", "ANDROID_HOME": "/sdk2"})

        assert locator.locate() == Path("/sdk1/ndk-bundle")

    def test_android_home(self, mock_fs, locator_factory):
        mock_fs.add_ndk(Path("/sdk2/ndk/25.1.8937393"))
        locator = locator_factory({"ANDROID_HOME": "/sdk2"})

        assert locator.locate() == Path("/sdk2/ndk/25.1.8937393")

    def test_sdk_versioned_container_picks_highest(self, mock_fs, locator_factory):
        for version in ["21.0", "23.1", "22.0"]:
            mock_fs.add_ndk(Path("/sdk/ndk") / version)
        locator = locator_factory({"ANDROID_SDK_ROOT": "/sdk"})

        assert locator.locate() == Path("/sdk/ndk/23.1")

    def test_sdk_without_ndk_falls_through(self, mock_fs, locator_factory):
        mock_fs.mkdir(Path("/sdk/platforms"))
        mock_fs.add_ndk(Path("/opt/android-ndk"))
        locator = locator_factory({"ANDROID_SDK_ROOT": "/sdk"})

        assert locator.locate() == Path("/opt/android-ndk")

    def test_conventional_linux_location(self, mock_fs, locator_factory):
        mock_fs.add_ndk(Path("/home/user/Android/Sdk/ndk/26.1.10909125"))
        mock_fs.add_ndk(Path("/home/user/Android/Sdk/ndk/26.0.10792818"))

        locator = locator_factory(host_os="linux")

        assert locator.locate() == Path("/home/user/Android/Sdk/ndk/26.1.10909125")

    def test_conventional_macos_location(self, mock_fs, locator_factory):
        mock_fs.add_ndk(Path("/home/user/Library/Android/sdk/ndk-bundle"))

        locator = locator_factory(host_os="macos")

        assert locator.locate() == Path("/home/user/Library/Android/sdk/ndk-bundle")

    def test_invalid_candidate_stops_resolution(self, mock_fs, locator_factory):
        """Test a found-but-invalid candidate does not fall back to later sources."""
        mock_fs.mkdir(Path("/broken-ndk"))
        mock_fs.add_ndk(Path("/opt/android-ndk"))
        locator = locator_factory({"ANDROID_NDK": "/broken-ndk"})

        with pytest.raises(ToolchainInvalidError) as exc_info:
            locator.locate()

        assert exc_info.value.ndk_path == Path("/broken-ndk")


class TestNdkLocatorValidation:
    def test_override_without_marker(self, mock_fs, locator_factory):
        """Test an explicit override lacking the toolchain file is invalid."""
        mock_fs.mkdir(Path("/not-an-ndk/build"))
        locator = locator_factory()

        with pytest.raises(ToolchainInvalidError) as exc_info:
            locator.locate(Path("/not-an-ndk"))

        error = exc_info.value
        assert "/not-an-ndk" in str(error)
        assert error.marker == Path("/not-an-ndk/build/cmake/android.toolchain.cmake")
        assert "android.toolchain.cmake" in error.hint

    def test_override_missing_directory(self, locator_factory):
        with pytest.raises(ToolchainInvalidError):
            locator_factory().locate(Path("/nowhere"))

    def test_validate_on_disk(self, mock_ndk):
        """Test validation against a real directory tree."""
        locator = NdkLocator(environ={}, host_os="linux")

        assert locator.validate(mock_ndk) == mock_ndk

    def test_custom_providers(self, mock_fs, locator_factory):
        class FixedProvider:
            description = "fixed"

            def find_candidate(self, environ, fs):
                return Path("/fixed")

        mock_fs.add_ndk(Path("/fixed"))

        assert locator_factory().locate(providers=[FixedProvider()]) == Path("/fixed")
