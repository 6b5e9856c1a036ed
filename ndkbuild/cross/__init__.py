"""
Android cross-compilation targets for ndkbuild.

This module provides the ABI to architecture mapping and the CMake variables
that select an Android NDK target.
"""

from ndkbuild.cross.targets import (
    ABI_DESCRIPTIONS,
    ANDROID_FEATURE_FLAGS,
    DEFAULT_ABI,
    NDK_TOOLCHAIN_FILE,
    SUPPORTED_ABIS,
    AndroidTarget,
    abi_to_arch,
    is_supported_abi,
)

__all__ = [
    "ABI_DESCRIPTIONS",
    "ANDROID_FEATURE_FLAGS",
    "DEFAULT_ABI",
    "NDK_TOOLCHAIN_FILE",
    "SUPPORTED_ABIS",
    "AndroidTarget",
    "abi_to_arch",
    "is_supported_abi",
]
