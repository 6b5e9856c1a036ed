"""
Centralized exception hierarchy for ndkbuild.

Components raise these exceptions and never handle them; the CLI front-end is
the only place that turns them into messages and exit codes.
"""

from pathlib import Path
from typing import Optional, Sequence


# ============================================================================
# Base Exceptions
# ============================================================================


class NdkBuildError(Exception):
    """Base exception for all ndkbuild errors."""

    #: Extra remediation text shown to the user below the message.
    hint: Optional[str] = None


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigurationError(NdkBuildError):
    """Raised when build options, environment values or the config file are invalid."""

    pass


class MissingPrerequisiteError(NdkBuildError):
    """Raised when a required external tool is not on PATH."""

    def __init__(self, tool: str, hint: Optional[str] = None):
        self.tool = tool
        self.hint = hint
        super().__init__(f"{tool} not found in PATH")


# ============================================================================
# Toolchain-related Exceptions
# ============================================================================


class ToolchainError(NdkBuildError):
    """Base exception for toolchain-related errors."""

    pass


class ToolchainNotFoundError(ToolchainError):
    """Raised when no NDK candidate could be found by any provider."""

    hint = "Please set ANDROID_NDK environment variable or use --ndk option"

    def __init__(self, message: str = "Android NDK not found"):
        super().__init__(message)


class ToolchainInvalidError(ToolchainError):
    """Raised when a candidate NDK does not contain the marker file."""

    def __init__(self, ndk_path: Path, marker: Path):
        self.ndk_path = ndk_path
        self.marker = marker
        self.hint = f"Cannot find: {marker}"
        super().__init__(f"Invalid NDK path: {ndk_path}")


class UnsupportedPlatformError(NdkBuildError):
    """Raised for an ABI outside the supported set."""

    def __init__(self, abi: str, supported: Sequence[str] = ()):
        self.abi = abi
        if supported:
            self.hint = f"Supported ABIs: {', '.join(supported)}"
        super().__init__(f"Unsupported Android ABI: {abi}")


# ============================================================================
# Build Exceptions
# ============================================================================


class BuildBackendError(NdkBuildError):
    """Base exception for build backend errors."""

    pass


class ExternalToolError(BuildBackendError):
    """Raised when cmake or the build tool exits with a non-zero status."""

    def __init__(self, step: str, abi: str, returncode: int, output: str = ""):
        self.step = step
        self.abi = abi
        self.returncode = returncode
        self.output = output
        super().__init__(
            f"CMake {step} failed for {abi} with exit code {returncode}"
        )


class BuildDirectoryError(BuildBackendError):
    """Raised when a build directory cannot be removed or created."""

    def __init__(self, build_dir: Path, reason: str):
        self.build_dir = build_dir
        super().__init__(f"Cannot prepare build directory {build_dir}: {reason}")


class BuildFailedError(BuildBackendError):
    """Raised after a keep-going batch in which one or more ABIs failed."""

    def __init__(self, failed_abis: Sequence[str]):
        self.failed_abis = list(failed_abis)
        super().__init__(f"Build failed for: {', '.join(self.failed_abis)}")


class BuildLockTimeout(BuildBackendError):
    """Raised when a build directory is locked by another ndkbuild process."""

    pass
