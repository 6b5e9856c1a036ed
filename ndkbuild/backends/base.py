"""
Build backend interface for ndkbuild.

This module defines the abstract base class for build backends.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from ndkbuild.config.settings import BuildConfiguration
from ndkbuild.cross.targets import AndroidTarget


class BuildBackend(ABC):
    """
    Abstract base class for build backends.

    A build backend configures and builds the project for one Android target
    inside a prepared build directory.
    """

    @abstractmethod
    def required_tools(self, config: BuildConfiguration) -> List[str]:
        """
        Executables that must be on PATH before any build starts.

        Args:
            config: Build configuration

        Returns:
            Executable names
        """
        pass

    @abstractmethod
    def configure(
        self, target: AndroidTarget, build_dir: Path, config: BuildConfiguration
    ) -> None:
        """
        Configure the build.

        Args:
            target: Android target to configure for
            build_dir: Existing build directory
            config: Build configuration with a resolved NDK root
        """
        pass

    @abstractmethod
    def build(
        self, target: AndroidTarget, build_dir: Path, config: BuildConfiguration
    ) -> None:
        """
        Build a configured directory.

        Args:
            target: Android target being built
            build_dir: Configured build directory
            config: Build configuration
        """
        pass
