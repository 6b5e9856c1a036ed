"""
Shared utilities for the ndkbuild CLI.

Configuration file loading, prerequisite checks and output formatting.
"""

import logging
import shutil
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional

import yaml

from ndkbuild.core.exceptions import ConfigurationError, MissingPrerequisiteError

logger = logging.getLogger(__name__)

# Remediation shown when a required tool is missing.
INSTALL_HINTS = {
    "ninja": "Please install ninja-build.",
    "cmake": "Please install CMake: https://cmake.org/download/",
}


# ============================================================================
# Configuration Management
# ============================================================================


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, cannot be
            read or decoded, is not valid YAML, or does not contain a mapping

    Example:
        >>> config = load_yaml_config(Path("ndkbuild.yaml"))
        >>> config.get("build", {}).get("type", "Release")
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse YAML: {e}")
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"{config_file} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file {config_file}: {e.strerror or e}"
        ) from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration in {config_file} must be a mapping")
    return config


# ============================================================================
# Prerequisites
# ============================================================================


def check_prerequisites(
    tools: Iterable[str], which: Callable[[str], Optional[str]] = shutil.which
) -> None:
    """
    Ensure every tool is on PATH.

    Args:
        tools: Executable names
        which: PATH lookup (default: shutil.which)

    Raises:
        MissingPrerequisiteError: For the first tool that is missing
    """
    for tool in tools:
        location = which(tool)
        if not location:
            raise MissingPrerequisiteError(tool, INSTALL_HINTS.get(tool))
        logger.debug(f"Found {tool}: {location}")


# ============================================================================
# User Interface / Output Formatting
# ============================================================================


def format_success_message(
    title: str,
    details: Dict[str, Any],
    items: Optional[list] = None,
    items_title: str = "Output directories:",
    width: int = 70,
) -> str:
    """
    Format a standardized success message.

    Args:
        title: Success message title
        details: Key-value pairs to display
        items: Optional list of entries shown under items_title
        items_title: Heading for items
        width: Width of message box

    Returns:
        Formatted message string
    """
    lines = []
    lines.append("=" * width)
    lines.append(title)
    lines.append("=" * width)
    lines.append("")

    for key, value in details.items():
        lines.append(f"{key}: {value}")

    if items:
        lines.append("")
        lines.append(items_title)
        for item in items:
            lines.append(f"  {item}")

    lines.append("")
    return "\n".join(lines)


def print_error(message: str, details: Optional[str] = None):
    """
    Print error message to stderr in consistent format.

    Args:
        message: Main error message
        details: Optional additional details
    """
    print(f"ERROR: {message}", file=sys.stderr)
    if details:
        print(f"  {details}", file=sys.stderr)
