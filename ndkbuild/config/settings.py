"""
Build configuration for ndkbuild.

A BuildConfiguration is built exactly once per invocation and then passed
explicitly to the locator and the build driver. Values come from, in order
of precedence:

1. Command-line options
2. Environment variables (BUILD_TYPE, ANDROID_PLATFORM, BUILD_DIR_PREFIX)
3. The project's ndkbuild.yaml ``build:`` section
4. Built-in defaults
"""

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from ndkbuild.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

BUILD_TYPES = ("Release", "Debug", "RelWithDebInfo")

DEFAULT_BUILD_TYPE = "Release"
DEFAULT_API_LEVEL = 24
DEFAULT_BUILD_DIR_PREFIX = "build-android"
DEFAULT_GENERATOR = "Ninja"
DEFAULT_STL = "c++_static"

CONFIG_FILE_NAME = "ndkbuild.yaml"


@dataclass(frozen=True)
class BuildConfiguration:
    """
    Immutable build settings shared by every ABI in a run.

    Attributes:
        project_root: CMake source directory; build directories are created here
        build_type: CMake build type (Release, Debug, RelWithDebInfo)
        api_level: Minimum Android API level
        ndk_path: NDK root; holds the --ndk override until the locator resolves it
        clean: Remove existing build directories before configuring
        jobs: Parallel build jobs (None lets the build tool decide)
        build_dir_prefix: Build directories are named <prefix>-<abi>
        generator: CMake generator
        stl: Android C++ runtime
        cmake_args: Extra arguments appended to the configure command
        keep_going: Build remaining ABIs after a failure
    """

    project_root: Path
    build_type: str = DEFAULT_BUILD_TYPE
    api_level: int = DEFAULT_API_LEVEL
    ndk_path: Optional[Path] = None
    clean: bool = False
    jobs: Optional[int] = None
    build_dir_prefix: str = DEFAULT_BUILD_DIR_PREFIX
    generator: str = DEFAULT_GENERATOR
    stl: str = DEFAULT_STL
    cmake_args: Tuple[str, ...] = field(default_factory=tuple)
    keep_going: bool = False

    def __post_init__(self):
        if self.build_type not in BUILD_TYPES:
            raise ConfigurationError(
                f"Invalid build type: {self.build_type} "
                f"(expected one of {', '.join(BUILD_TYPES)})"
            )
        if isinstance(self.api_level, bool) or not isinstance(self.api_level, int):
            raise ConfigurationError(f"Invalid Android API level: {self.api_level!r}")
        if self.api_level <= 0:
            raise ConfigurationError(f"Invalid Android API level: {self.api_level}")
        if self.jobs is not None and self.jobs <= 0:
            raise ConfigurationError(f"Invalid number of jobs: {self.jobs}")
        for name in ("build_dir_prefix", "generator", "stl"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigurationError(
                    f"Invalid {name.replace('_', ' ')}: {value!r} "
                    "(expected a non-empty string)"
                )

    def build_dir(self, abi: str) -> Path:
        """
        Get the build directory for an ABI.

        Example:
            >>> BuildConfiguration(Path("/src")).build_dir("x86")
            PosixPath('/src/build-android-x86')
        """
        return self.project_root / f"{self.build_dir_prefix}-{abi}"

    def with_ndk(self, ndk_path: Path) -> "BuildConfiguration":
        """Return a copy with the resolved NDK root."""
        return replace(self, ndk_path=Path(ndk_path))


def _first(*values):
    for value in values:
        if value is not None:
            return value
    return None


def _parse_int(value: Any, what: str) -> Optional[int]:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ConfigurationError(f"Invalid {what}: {value!r}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    # The NDK accepts both "24" and "android-24".
    if what == "Android API level" and text.startswith("android-"):
        text = text[len("android-") :]
    try:
        return int(text)
    except ValueError:
        raise ConfigurationError(f"Invalid {what}: {value!r}") from None


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(name)
    return value if value else None


def _file_section(file_config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if not file_config:
        return {}
    build = file_config.get("build") or {}
    if not isinstance(build, dict):
        raise ConfigurationError("'build' section of the config file must be a mapping")
    return build


def resolve_configuration(
    project_root: Path,
    build_type: Optional[str] = None,
    api_level: Optional[int] = None,
    ndk_path: Optional[Path] = None,
    clean: bool = False,
    jobs: Optional[int] = None,
    build_dir_prefix: Optional[str] = None,
    generator: Optional[str] = None,
    cmake_args: Sequence[str] = (),
    keep_going: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    file_config: Optional[Dict[str, Any]] = None,
) -> BuildConfiguration:
    """
    Merge command-line values, environment and config file into one configuration.

    Args:
        project_root: Project root directory
        build_type: --type value (None when not given)
        api_level: --platform value (None when not given)
        ndk_path: --ndk value (None when not given)
        clean: --clean flag
        jobs: --jobs value
        build_dir_prefix: --build-dir-prefix value
        generator: --generator value
        cmake_args: --cmake-arg values, appended after config file arguments
        keep_going: --keep-going flag
        environ: Environment (default: os.environ)
        file_config: Parsed ndkbuild.yaml contents

    Returns:
        Validated BuildConfiguration

    Raises:
        ConfigurationError: If any resolved value is invalid
    """
    environ = os.environ if environ is None else environ
    build = _file_section(file_config)

    file_cmake_args = build.get("cmake_args") or []
    if not isinstance(file_cmake_args, list):
        raise ConfigurationError("'build.cmake_args' must be a list")

    config = BuildConfiguration(
        project_root=Path(project_root).resolve(),
        build_type=_first(
            build_type,
            _env(environ, "BUILD_TYPE"),
            build.get("type"),
            DEFAULT_BUILD_TYPE,
        ),
        api_level=_first(
            _parse_int(api_level, "Android API level"),
            _parse_int(_env(environ, "ANDROID_PLATFORM"), "Android API level"),
            _parse_int(build.get("platform"), "Android API level"),
            DEFAULT_API_LEVEL,
        ),
        ndk_path=Path(ndk_path) if ndk_path else None,
        clean=bool(clean),
        jobs=_first(
            _parse_int(jobs, "number of jobs"),
            _parse_int(build.get("jobs"), "number of jobs"),
        ),
        build_dir_prefix=_first(
            build_dir_prefix,
            _env(environ, "BUILD_DIR_PREFIX"),
            build.get("dir_prefix"),
            DEFAULT_BUILD_DIR_PREFIX,
        ),
        generator=_first(generator, build.get("generator"), DEFAULT_GENERATOR),
        stl=_first(build.get("stl"), DEFAULT_STL),
        cmake_args=tuple(str(arg) for arg in file_cmake_args) + tuple(cmake_args),
        keep_going=bool(keep_going),
    )

    logger.debug(f"Resolved configuration: {config}")
    return config


__all__ = [
    "BUILD_TYPES",
    "CONFIG_FILE_NAME",
    "DEFAULT_API_LEVEL",
    "DEFAULT_BUILD_DIR_PREFIX",
    "DEFAULT_BUILD_TYPE",
    "DEFAULT_GENERATOR",
    "DEFAULT_STL",
    "BuildConfiguration",
    "resolve_configuration",
]
