"""
Pytest configuration and shared fixtures for ndkbuild tests.
"""

import pytest
from pathlib import Path

from ndkbuild.config.settings import BuildConfiguration
from ndkbuild.core.platform import clear_platform_cache
from tests.mocks import MockFilesystem, RecordingProcess


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_platform_cache():
    """Host OS detection is cached per process; isolate tests from each other."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def mock_fs() -> MockFilesystem:
    """In-memory filesystem with /home/user as home directory."""
    return MockFilesystem()


@pytest.fixture
def recording_process() -> RecordingProcess:
    """External process double that records commands and succeeds."""
    return RecordingProcess()


@pytest.fixture
def project_root(tmp_path) -> Path:
    """Create a minimal CMake project on disk."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "CMakeLists.txt").write_text(
        "cmake_minimum_required(VERSION 3.20)\nproject(TestProject CXX)\n"
    )
    return root


@pytest.fixture
def mock_ndk(tmp_path) -> Path:
    """
    Create mock Android NDK directory structure on disk.

    Only the CMake toolchain file is created; it is what marks a directory
    as a usable NDK.
    """
    ndk_root = tmp_path / "android-ndk-r26"
    toolchain_file = ndk_root / "build" / "cmake" / "android.toolchain.cmake"
    toolchain_file.parent.mkdir(parents=True)
    toolchain_file.write_text("# mock android toolchain\n")
    return ndk_root


@pytest.fixture
def build_config(project_root, mock_ndk) -> BuildConfiguration:
    """Default configuration with a resolved NDK."""
    return BuildConfiguration(project_root=project_root, ndk_path=mock_ndk)
