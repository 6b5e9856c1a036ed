"""
ndkbuild - Android NDK multi-ABI build orchestration.

Locates an Android NDK, maps Android ABIs to project architecture tags and
drives one isolated CMake configure + build per requested ABI.
"""

__version__ = "0.1.0"
