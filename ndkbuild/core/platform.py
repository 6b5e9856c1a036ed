"""
Host platform detection for ndkbuild.

Only the host operating system matters here: it selects which list of
conventional NDK install locations is probed.

Usage:
    from ndkbuild.core.platform import detect_host_os

    if detect_host_os() == "macos":
        ...
"""

import functools
import platform


@functools.lru_cache(maxsize=1)
def detect_host_os() -> str:
    """
    Detect the host operating system.

    This function is cached - it only runs detection once per process.

    Returns:
        Normalized OS name: 'windows', 'linux', 'macos', or the lowercased
        platform.system() value for anything else
    """
    system = platform.system().lower()

    if system == "windows":
        return "windows"
    elif system == "linux":
        return "linux"
    elif system == "darwin":
        return "macos"
    return system


def clear_platform_cache():
    """
    Clear the host OS detection cache.

    Useful for testing or if the platform changes during runtime (rare).
    """
    detect_host_os.cache_clear()


__all__ = ["detect_host_os", "clear_platform_cache"]
