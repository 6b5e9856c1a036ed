"""
ndkbuild CLI module.

This module provides the command-line interface for ndkbuild.
"""

from .parser import CLI, main, select_abis
from . import utils

__all__ = ["CLI", "main", "select_abis", "utils"]
