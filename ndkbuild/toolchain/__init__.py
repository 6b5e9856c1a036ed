"""
Android NDK discovery for ndkbuild.
"""

from .locator import NdkLocator
from .providers import (
    ConventionalPathProvider,
    EnvironmentPathProvider,
    ExplicitPathProvider,
    SdkRootProvider,
    conventional_ndk_paths,
    default_providers,
    highest_version_dir,
    version_sort_key,
)

__all__ = [
    "NdkLocator",
    "ConventionalPathProvider",
    "EnvironmentPathProvider",
    "ExplicitPathProvider",
    "SdkRootProvider",
    "conventional_ndk_paths",
    "default_providers",
    "highest_version_dir",
    "version_sort_key",
]
