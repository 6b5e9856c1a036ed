"""
CMake build backend.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ndkbuild.backends.base import BuildBackend
from ndkbuild.config.settings import BuildConfiguration
from ndkbuild.core.exceptions import ConfigurationError, ExternalToolError
from ndkbuild.core.interfaces import ExternalProcess
from ndkbuild.core.process import SubprocessRunner
from ndkbuild.cross.targets import ANDROID_FEATURE_FLAGS, AndroidTarget

logger = logging.getLogger(__name__)

CMAKE = "cmake"

# Build tool each CMake generator needs on PATH.
GENERATOR_TOOLS = {
    "Ninja": "ninja",
    "Ninja Multi-Config": "ninja",
    "Unix Makefiles": "make",
}


class CMakeBackend(BuildBackend):
    """
    CMake build backend implementation.

    Runs ``cmake <project_root> -G <generator> -D...`` followed by
    ``cmake --build . --parallel [N]``, both inside the build directory.
    """

    def __init__(self, process: Optional[ExternalProcess] = None):
        self.process = process or SubprocessRunner()

    def required_tools(self, config: BuildConfiguration) -> List[str]:
        tools = [CMAKE]
        tool = GENERATOR_TOOLS.get(config.generator)
        if tool:
            tools.append(tool)
        return tools

    def configure_args(
        self, target: AndroidTarget, config: BuildConfiguration
    ) -> List[str]:
        """
        Build the configure command line (without the cmake executable).

        Raises:
            ConfigurationError: If the NDK root has not been resolved
        """
        if config.ndk_path is None:
            raise ConfigurationError("NDK path must be resolved before configuring")

        args = [
            str(config.project_root),
            "-G",
            config.generator,
            f"-DCMAKE_BUILD_TYPE={config.build_type}",
        ]
        for name, value in target.cmake_variables(config.ndk_path).items():
            args.append(f"-D{name}={value}")
        for name, value in ANDROID_FEATURE_FLAGS.items():
            args.append(f"-D{name}={value}")
        args.extend(config.cmake_args)
        return args

    def build_args(self, config: BuildConfiguration) -> List[str]:
        """Build the build-step command line (without the cmake executable)."""
        args = ["--build", ".", "--parallel"]
        if config.jobs:
            args.append(str(config.jobs))
        return args

    def configure(
        self, target: AndroidTarget, build_dir: Path, config: BuildConfiguration
    ) -> None:
        args = self.configure_args(target, config)
        logger.debug(f"CMake command: {CMAKE} {' '.join(args)}")

        result = self.process.run(CMAKE, args, cwd=build_dir)
        if not result.ok:
            logger.error(f"CMake configuration failed for {target.abi}")
            raise ExternalToolError(
                "configuration", target.abi, result.returncode, result.output
            )

    def build(
        self, target: AndroidTarget, build_dir: Path, config: BuildConfiguration
    ) -> None:
        args = self.build_args(config)
        logger.debug(f"CMake command: {CMAKE} {' '.join(args)}")

        result = self.process.run(CMAKE, args, cwd=build_dir)
        if not result.ok:
            logger.error(f"CMake build failed for {target.abi}")
            raise ExternalToolError(
                "build", target.abi, result.returncode, result.output
            )
