"""
Configuration for ndkbuild.
"""

from .settings import (
    BUILD_TYPES,
    CONFIG_FILE_NAME,
    DEFAULT_API_LEVEL,
    DEFAULT_BUILD_DIR_PREFIX,
    DEFAULT_BUILD_TYPE,
    DEFAULT_GENERATOR,
    DEFAULT_STL,
    BuildConfiguration,
    resolve_configuration,
)

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
