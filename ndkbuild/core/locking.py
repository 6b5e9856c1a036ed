"""
Build directory locking for ndkbuild.

Each ABI is built into its own directory. This module guards that directory
with a file lock so two ndkbuild processes started against the same project
never configure or build into the same directory at the same time.

Usage:
    from ndkbuild.core.locking import BuildLockManager

    lock_manager = BuildLockManager(timeout=10)
    with lock_manager.build_dir_lock(build_dir):
        # configure and build
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from filelock import FileLock, Timeout as LockTimeout

from ndkbuild.core.exceptions import BuildDirectoryError, BuildLockTimeout

logger = logging.getLogger(__name__)

LOCK_DIR_NAME = ".ndkbuild"


def lock_path_for(build_dir: Path, lock_root: Optional[Path] = None) -> Path:
    """
    Get the lock file path guarding a build directory.

    Locks for every ABI are kept together in a single .ndkbuild directory
    under lock_root rather than inside the build directory, so cleaning a
    build directory never deletes a held lock.

    Args:
        build_dir: Build directory (e.g., /src/project/build-android-x86)
        lock_root: Directory holding .ndkbuild (default: build_dir's parent)

    Returns:
        Lock file path (e.g., /src/project/.ndkbuild/build-android-x86.lock)

    Example:
        >>> lock_path_for(Path("/src/project/build-android-x86"))
        PosixPath('/src/project/.ndkbuild/build-android-x86.lock')
    """
    build_dir = Path(build_dir)
    root = Path(lock_root) if lock_root is not None else build_dir.parent
    return root / LOCK_DIR_NAME / f"{build_dir.name}.lock"


class BuildLockManager:
    """
    Hands out per-build-directory locks.

    Attributes:
        timeout: Seconds to wait for a lock held by another process
    """

    def __init__(self, timeout: float = 10):
        self.timeout = timeout

    @contextmanager
    def build_dir_lock(self, build_dir: Path, lock_root: Optional[Path] = None):
        """
        Acquire the lock for build_dir.

        Args:
            build_dir: Build directory about to be prepared and built
            lock_root: Directory holding .ndkbuild (default: build_dir's parent)

        Yields:
            Path of the lock file

        Raises:
            BuildLockTimeout: If another process holds the lock past timeout
            BuildDirectoryError: If the lock directory cannot be created
        """
        lock_path = lock_path_for(build_dir, lock_root)
        try:
            lock_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise BuildDirectoryError(lock_path.parent, e.strerror or str(e)) from e
        lock = FileLock(lock_path, timeout=self.timeout)

        try:
            with lock:
                logger.debug(f"Acquired build directory lock: {lock_path}")
                yield lock_path
                logger.debug(f"Released build directory lock: {lock_path}")
        except LockTimeout as e:
            logger.error(
                f"Could not acquire lock for {build_dir} after {self.timeout}s."
            )
            raise BuildLockTimeout(
                f"Build directory {build_dir} is in use by another ndkbuild process"
            ) from e


__all__ = ["BuildLockManager", "LOCK_DIR_NAME", "lock_path_for"]
