"""
Multi-ABI build driver.

Drives one isolated configure + build per Android ABI. Every ABI gets its own
build directory (<project_root>/<prefix>-<abi>) and ABIs are built strictly one
after another.

Job lifecycle:
    PENDING -> DIR_PREPARED -> CONFIGURED -> BUILT
    any state -> FAILED (terminal, never retried)
"""

import logging
from contextlib import nullcontext
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional, Sequence

from ndkbuild.backends.base import BuildBackend
from ndkbuild.backends.cmake import CMakeBackend
from ndkbuild.config.settings import BuildConfiguration
from ndkbuild.core.exceptions import (
    BuildDirectoryError,
    BuildFailedError,
    ConfigurationError,
    NdkBuildError,
)
from ndkbuild.core.filesystem import LocalFileSystem
from ndkbuild.core.interfaces import FileSystem
from ndkbuild.core.locking import BuildLockManager
from ndkbuild.cross.targets import AndroidTarget

logger = logging.getLogger(__name__)


class JobState(Enum):
    """State of a BuildJob."""

    PENDING = "pending"
    DIR_PREPARED = "dir_prepared"
    CONFIGURED = "configured"
    BUILT = "built"
    FAILED = "failed"


@dataclass
class BuildJob:
    """
    One ABI driven through configure and build.

    Attributes:
        target: Android target (ABI, architecture tag, API level, STL)
        build_dir: Build directory owned exclusively by this job
        state: Current lifecycle state
        error: Exception that moved the job to FAILED, if any
    """

    target: AndroidTarget
    build_dir: Path
    state: JobState = JobState.PENDING
    error: Optional[Exception] = None

    @property
    def abi(self) -> str:
        return self.target.abi

    @property
    def succeeded(self) -> bool:
        return self.state is JobState.BUILT


class BuildDriver:
    """
    Build the project for one or more ABIs.

    Example:
        >>> driver = BuildDriver(config)
        >>> jobs = driver.build_all(["arm64-v8a", "x86_64"])
    """

    def __init__(
        self,
        config: BuildConfiguration,
        backend: Optional[BuildBackend] = None,
        fs: Optional[FileSystem] = None,
        lock_manager: Optional[BuildLockManager] = None,
    ):
        """
        Initialize driver.

        Args:
            config: Build configuration with a resolved NDK root
            backend: Build backend (default: CMakeBackend)
            fs: Filesystem accessor (default: LocalFileSystem)
            lock_manager: Guards build directories against concurrent
                ndkbuild processes; no locking when None

        Raises:
            ConfigurationError: If the NDK root has not been resolved
        """
        if config.ndk_path is None:
            raise ConfigurationError("NDK path must be resolved before building")

        self.config = config
        self.backend = backend or CMakeBackend()
        self.fs = fs or LocalFileSystem()
        self.lock_manager = lock_manager

    def create_job(self, abi: str) -> BuildJob:
        """
        Create a pending job for abi.

        Raises:
            UnsupportedPlatformError: If abi is not supported
        """
        target = AndroidTarget.for_abi(abi, self.config.api_level, self.config.stl)
        return BuildJob(target=target, build_dir=self.config.build_dir(abi))

    def prepare_directory(self, job: BuildJob) -> None:
        """
        Create the job's build directory, removing it first if clean is set.

        Without clean an existing directory is reused untouched.

        Raises:
            BuildDirectoryError: If the directory cannot be removed or created
        """
        try:
            if self.config.clean and self.fs.is_dir(job.build_dir):
                logger.info("  Cleaning build directory...")
                self.fs.remove_tree(job.build_dir)

            self.fs.make_dirs(job.build_dir)
        except OSError as e:
            raise BuildDirectoryError(job.build_dir, e.strerror or str(e)) from e
        job.state = JobState.DIR_PREPARED

    def _lock(self, build_dir: Path):
        if self.lock_manager is None:
            return nullcontext()
        return self.lock_manager.build_dir_lock(build_dir, self.config.project_root)

    def run_job(self, job: BuildJob) -> BuildJob:
        """
        Drive a pending job to BUILT.

        Raises:
            BuildDirectoryError: If the build directory cannot be prepared
            ExternalToolError: If configuration or build fails
            BuildLockTimeout: If another process is building into the directory
        """
        target = job.target
        logger.info(f"Building for {target.abi} ({target.arch})...")
        logger.info(f"  Build directory: {job.build_dir}")
        logger.info(f"  Build type: {self.config.build_type}")
        logger.info(f"  Android platform: {self.config.api_level}")

        try:
            with self._lock(job.build_dir):
                self.prepare_directory(job)

                self.backend.configure(target, job.build_dir, self.config)
                job.state = JobState.CONFIGURED

                self.backend.build(target, job.build_dir, self.config)
                job.state = JobState.BUILT
        except Exception as e:
            job.state = JobState.FAILED
            job.error = e
            raise

        logger.info(f"Build completed for {target.abi}")
        logger.info(f"  Output: {job.build_dir}")
        return job

    def build_abi(self, abi: str) -> BuildJob:
        """Create and run a job for a single ABI."""
        return self.run_job(self.create_job(abi))

    def build_all(self, abis: Sequence[str]) -> List[BuildJob]:
        """
        Build every ABI in order.

        All ABIs are validated before anything is built. By default the first
        failure propagates and later ABIs are never attempted; with keep_going
        every ABI is attempted and a BuildFailedError is raised at the end.

        Args:
            abis: ABIs in build order

        Returns:
            Jobs in build order, all BUILT

        Raises:
            UnsupportedPlatformError: If any ABI is not supported
            ExternalToolError: On the first failure (fail-fast)
            BuildFailedError: After all ABIs ran, if any failed (keep_going)
        """
        jobs = [self.create_job(abi) for abi in abis]

        failed = []
        for job in jobs:
            try:
                self.run_job(job)
            except NdkBuildError as e:
                if not self.config.keep_going:
                    raise
                logger.error(f"Build failed for {job.abi}: {e}")
                failed.append(job.abi)

        if failed:
            raise BuildFailedError(failed)
        return jobs


__all__ = ["BuildDriver", "BuildJob", "JobState"]
