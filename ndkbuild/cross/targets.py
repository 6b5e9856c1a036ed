"""
Android cross-compilation target configuration.

This module maps Android ABIs to the project's architecture tags and
produces the CMake cache variables that select an NDK target.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from ndkbuild.core.exceptions import UnsupportedPlatformError

# Relative location of the NDK's CMake toolchain file. Its presence is what
# makes a directory a usable NDK root.
NDK_TOOLCHAIN_FILE = Path("build") / "cmake" / "android.toolchain.cmake"

# Order matters: it is the order in which --all builds the ABIs.
SUPPORTED_ABIS = ("arm64-v8a", "armeabi-v7a", "x86_64", "x86")

DEFAULT_ABI = "arm64-v8a"

_ABI_TO_ARCH = {
    "arm64-v8a": "arm64",
    "armeabi-v7a": "arm",
    "x86_64": "x64",
    "x86": "x86",
}

ABI_DESCRIPTIONS = {
    "arm64-v8a": "ARM64 (64-bit)",
    "armeabi-v7a": "ARM (32-bit)",
    "x86_64": "x86-64 (64-bit)",
    "x86": "x86 (32-bit)",
}

# Features the project cannot provide on Android.
ANDROID_FEATURE_FLAGS = {
    "WITNESS_SCRIPT": "OFF",
    "BUILD_TESTS": "OFF",
    "QBDI_TOOLS_QBDIPRELOAD": "OFF",
}


def abi_to_arch(abi: str) -> str:
    """
    Map an Android ABI to the project architecture tag.

    Args:
        abi: Android ABI (arm64-v8a, armeabi-v7a, x86_64, x86)

    Returns:
        Architecture tag (arm64, arm, x64, x86)

    Raises:
        UnsupportedPlatformError: If abi is not one of SUPPORTED_ABIS

    Example:
        >>> abi_to_arch("armeabi-v7a")
        'arm'
    """
    try:
        return _ABI_TO_ARCH[abi]
    except KeyError:
        raise UnsupportedPlatformError(abi, SUPPORTED_ABIS) from None


def is_supported_abi(abi: str) -> bool:
    """Check if abi is one of SUPPORTED_ABIS."""
    return abi in _ABI_TO_ARCH


@dataclass(frozen=True)
class AndroidTarget:
    """
    Android cross-compilation target description.

    Attributes:
        abi: Android ABI (e.g., 'arm64-v8a')
        arch: Project architecture tag derived from the ABI (e.g., 'arm64')
        api_level: Minimum Android API level
        stl: Android C++ runtime selection (e.g., 'c++_static')
    """

    abi: str
    arch: str
    api_level: int
    stl: str = "c++_static"

    @classmethod
    def for_abi(
        cls, abi: str, api_level: int = 24, stl: str = "c++_static"
    ) -> "AndroidTarget":
        """
        Build a target for abi.

        Raises:
            UnsupportedPlatformError: If abi is not supported

        Example:
            >>> AndroidTarget.for_abi("x86_64", 29).arch
            'x64'
        """
        return cls(abi=abi, arch=abi_to_arch(abi), api_level=api_level, stl=stl)

    def cmake_variables(self, ndk_path: Path) -> Dict[str, str]:
        """
        Generate CMake cache variables selecting this target.

        Args:
            ndk_path: Validated NDK root

        Returns:
            Ordered mapping of CMake variable names to values

        Example:
            >>> target = AndroidTarget.for_abi("arm64-v8a", 24)
            >>> target.cmake_variables(Path("/opt/ndk"))["ANDROID_ABI"]
            'arm64-v8a'
        """
        return {
            "CMAKE_TOOLCHAIN_FILE": str(Path(ndk_path) / NDK_TOOLCHAIN_FILE),
            "ANDROID_ABI": self.abi,
            "ANDROID_PLATFORM": str(self.api_level),
            "ANDROID_STL": self.stl,
            "WITNESS_ARCH": self.arch,
        }
