"""
NDK candidate provider implementations.

This module implements the ToolchainCandidateProvider interface for each
place an Android NDK may be found: an explicit override, environment
variables naming the NDK, Android SDK roots and conventional install paths.
"""

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from packaging.version import InvalidVersion, Version

from ndkbuild.core.interfaces import FileSystem, ToolchainCandidateProvider
from ndkbuild.core.platform import detect_host_os

logger = logging.getLogger(__name__)

# Directory names probed below an SDK root, in order.
NDK_BUNDLE_DIR = "ndk-bundle"
NDK_VERSIONS_DIR = "ndk"


def version_sort_key(path: Path):
    """
    Sort key ordering directories by the version in their name.

    Names that parse as versions compare numerically segment by segment, so
    '9.0' < '21.0' < '23.1'. Names that are not versions sort below every
    versioned name and among themselves by name.

    Example:
        >>> names = ["23.1", "21.0", "22.0"]
        >>> [p.name for p in sorted(map(Path, names), key=version_sort_key)]
        ['21.0', '22.0', '23.1']
    """
    try:
        return (1, Version(path.name), path.name)
    except InvalidVersion:
        return (0, Version("0"), path.name)


def highest_version_dir(fs: FileSystem, container: Path) -> Optional[Path]:
    """
    Select the highest-versioned immediate subdirectory of container.

    Args:
        fs: Filesystem accessor
        container: Directory holding side-by-side NDK versions

    Returns:
        Highest version directory, or None if container has no subdirectories
    """
    subdirs = fs.list_dirs(container)
    if not subdirs:
        logger.debug(f"No versioned NDK directories in {container}")
        return None

    highest = max(subdirs, key=version_sort_key)
    logger.debug(f"Selected NDK version {highest.name} from {container}")
    return highest


def _non_empty(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    return value if value else None


class ExplicitPathProvider(ToolchainCandidateProvider):
    """Provides the path given with --ndk."""

    description = "--ndk option"

    def __init__(self, path: Optional[Path]):
        self._path = path

    def find_candidate(
        self, environ: Mapping[str, str], fs: FileSystem
    ) -> Optional[Path]:
        if self._path is None or str(self._path) == "":
            return None
        return Path(self._path).expanduser()


class EnvironmentPathProvider(ToolchainCandidateProvider):
    """Provides the path named directly by an environment variable."""

    def __init__(self, variable: str):
        self.variable = variable
        self.description = f"${variable}"

    def find_candidate(
        self, environ: Mapping[str, str], fs: FileSystem
    ) -> Optional[Path]:
        value = _non_empty(environ, self.variable)
        if value is None:
            return None
        return Path(value).expanduser()


class SdkRootProvider(ToolchainCandidateProvider):
    """
    Probes an Android SDK root named by an environment variable.

    The legacy side-by-side bundle (<sdk>/ndk-bundle) is preferred; otherwise
    the highest version under <sdk>/ndk is used.
    """

    def __init__(self, variable: str):
        self.variable = variable
        self.description = f"${variable} SDK root"

    def find_candidate(
        self, environ: Mapping[str, str], fs: FileSystem
    ) -> Optional[Path]:
        value = _non_empty(environ, self.variable)
        if value is None:
            return None

        sdk_root = Path(value).expanduser()
        bundle = sdk_root / NDK_BUNDLE_DIR
        if fs.is_dir(bundle):
            return bundle

        versions = sdk_root / NDK_VERSIONS_DIR
        if fs.is_dir(versions):
            return highest_version_dir(fs, versions)

        logger.debug(f"No NDK below SDK root {sdk_root}")
        return None


def conventional_ndk_paths(host_os: str, home: Path) -> List[Path]:
    """
    Get the conventional NDK install locations for a host OS.

    Args:
        host_os: Normalized host OS ('macos', 'linux', ...)
        home: User home directory

    Returns:
        Paths to probe in order (empty for hosts without known locations)
    """
    locations: Dict[str, List[Path]] = {
        "macos": [
            home / "Library" / "Android" / "sdk" / NDK_BUNDLE_DIR,
            home / "Library" / "Android" / "sdk" / NDK_VERSIONS_DIR,
            Path("/usr/local/share/android-ndk"),
        ],
        "linux": [
            home / "Android" / "Sdk" / NDK_BUNDLE_DIR,
            home / "Android" / "Sdk" / NDK_VERSIONS_DIR,
            Path("/opt/android-ndk"),
        ],
    }
    return locations.get(host_os, [])


class ConventionalPathProvider(ToolchainCandidateProvider):
    """
    Probes well-known install locations for the host OS.

    The first existing directory decides. A directory named 'ndk' holds
    side-by-side versions and resolves to its highest version.
    """

    description = "conventional install locations"

    def __init__(self, host_os: Optional[str] = None):
        self.host_os = host_os or detect_host_os()

    def find_candidate(
        self, environ: Mapping[str, str], fs: FileSystem
    ) -> Optional[Path]:
        for path in conventional_ndk_paths(self.host_os, fs.home()):
            if not fs.is_dir(path):
                continue
            if path.name == NDK_VERSIONS_DIR:
                return highest_version_dir(fs, path)
            return path
        return None


def default_providers(
    explicit: Optional[Path] = None, host_os: Optional[str] = None
) -> List[ToolchainCandidateProvider]:
    """
    Build the provider chain in priority order.

    Args:
        explicit: Path given with --ndk, if any
        host_os: Host OS override (detected when None)

    Returns:
        Providers, highest priority first
    """
    return [
        ExplicitPathProvider(explicit),
        EnvironmentPathProvider("ANDROID_NDK"),
        EnvironmentPathProvider("NDK_PATH"),
        SdkRootProvider("ANDROID_SDK_ROOT"),
        SdkRootProvider("ANDROID_HOME"),
        ConventionalPathProvider(host_os),
    ]


__all__ = [
    "ExplicitPathProvider",
    "EnvironmentPathProvider",
    "SdkRootProvider",
    "ConventionalPathProvider",
    "conventional_ndk_paths",
    "default_providers",
    "highest_version_dir",
    "version_sort_key",
]
