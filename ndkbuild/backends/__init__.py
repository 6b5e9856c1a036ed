"""
Build backends for ndkbuild.
"""

from .base import BuildBackend
from .cmake import CMakeBackend, GENERATOR_TOOLS

__all__ = ["BuildBackend", "CMakeBackend", "GENERATOR_TOOLS"]
