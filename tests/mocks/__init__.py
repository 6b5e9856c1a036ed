"""
Mock implementations for testing ndkbuild components.

This package provides in-memory doubles for the filesystem and for external
processes so locator and driver tests never touch the real disk or run cmake.
"""

from .filesystem import MockFilesystem
from .process import RecordingProcess

__all__ = [
    "MockFilesystem",
    "RecordingProcess",
]
