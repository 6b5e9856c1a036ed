"""
Core functionality for ndkbuild.

This package contains the foundational modules that other components depend on.
"""

from .exceptions import (
    NdkBuildError,
    ConfigurationError,
    MissingPrerequisiteError,
    ToolchainError,
    ToolchainNotFoundError,
    ToolchainInvalidError,
    UnsupportedPlatformError,
    BuildBackendError,
    ExternalToolError,
    BuildDirectoryError,
    BuildFailedError,
    BuildLockTimeout,
)

from .interfaces import (
    FileSystem,
    ProcessResult,
    ExternalProcess,
    ToolchainCandidateProvider,
)

from .filesystem import LocalFileSystem
from .process import SubprocessRunner
from .locking import BuildLockManager, lock_path_for
from .platform import detect_host_os, clear_platform_cache

__all__ = [
    # Exceptions
    "NdkBuildError",
    "ConfigurationError",
    "MissingPrerequisiteError",
    "ToolchainError",
    "ToolchainNotFoundError",
    "ToolchainInvalidError",
    "UnsupportedPlatformError",
    "BuildBackendError",
    "ExternalToolError",
    "BuildDirectoryError",
    "BuildFailedError",
    "BuildLockTimeout",
    # Interfaces
    "FileSystem",
    "ProcessResult",
    "ExternalProcess",
    "ToolchainCandidateProvider",
    # Implementations
    "LocalFileSystem",
    "SubprocessRunner",
    "BuildLockManager",
    "lock_path_for",
    "detect_host_os",
    "clear_platform_cache",
]
