"""
Android NDK locator.

Evaluates candidate providers strictly in priority order and validates the
first candidate found. Lower priority providers are never consulted once a
candidate exists, even if that candidate turns out to be invalid.
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from ndkbuild.core.exceptions import ToolchainInvalidError, ToolchainNotFoundError
from ndkbuild.core.filesystem import LocalFileSystem
from ndkbuild.core.interfaces import FileSystem, ToolchainCandidateProvider
from ndkbuild.cross.targets import NDK_TOOLCHAIN_FILE
from ndkbuild.toolchain.providers import default_providers

logger = logging.getLogger(__name__)


class NdkLocator:
    """
    Find and validate an Android NDK root.

    Example:
        >>> locator = NdkLocator()
        >>> ndk = locator.locate(Path("/opt/android-ndk"))
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        fs: Optional[FileSystem] = None,
        host_os: Optional[str] = None,
    ):
        """
        Initialize locator.

        Args:
            environ: Environment to consult (default: os.environ)
            fs: Filesystem accessor (default: LocalFileSystem)
            host_os: Host OS override for conventional paths (default: detected)
        """
        self.environ = os.environ if environ is None else environ
        self.fs = fs or LocalFileSystem()
        self.host_os = host_os

    def find_candidate(
        self, providers: List[ToolchainCandidateProvider]
    ) -> Optional[Path]:
        """Return the first candidate any provider yields, or None."""
        for provider in providers:
            candidate = provider.find_candidate(self.environ, self.fs)
            if candidate is not None:
                logger.debug(f"NDK candidate from {provider.description}: {candidate}")
                return candidate
            logger.debug(f"No NDK candidate from {provider.description}")
        return None

    def validate(self, ndk_path: Path) -> Path:
        """
        Check that ndk_path contains the NDK CMake toolchain file.

        Raises:
            ToolchainInvalidError: If the marker file is missing
        """
        marker = Path(ndk_path) / NDK_TOOLCHAIN_FILE
        if not self.fs.is_file(marker):
            raise ToolchainInvalidError(Path(ndk_path), marker)
        return Path(ndk_path)

    def locate(
        self,
        explicit: Optional[Path] = None,
        providers: Optional[List[ToolchainCandidateProvider]] = None,
    ) -> Path:
        """
        Locate a valid NDK root.

        Args:
            explicit: Path given with --ndk, highest priority
            providers: Custom provider chain (default: default_providers())

        Returns:
            Validated NDK root

        Raises:
            ToolchainNotFoundError: If no provider yields a candidate
            ToolchainInvalidError: If the chosen candidate lacks the marker file
        """
        if providers is None:
            providers = default_providers(explicit, self.host_os)

        candidate = self.find_candidate(providers)
        if candidate is None:
            raise ToolchainNotFoundError()

        return self.validate(candidate)


__all__ = ["NdkLocator"]
