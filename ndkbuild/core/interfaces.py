"""
Core interfaces for ndkbuild.

This module defines the abstract collaborators the locator and the build
driver depend on. Production code uses the local filesystem and real
subprocesses; tests substitute in-memory doubles.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Sequence


class FileSystem(ABC):
    """
    Abstract filesystem accessor.

    Only the handful of operations needed for NDK discovery and build
    directory preparation are exposed.
    """

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Return True if path is an existing directory."""
        pass

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        """Return True if path is an existing regular file."""
        pass

    @abstractmethod
    def list_dirs(self, path: Path) -> List[Path]:
        """
        List immediate subdirectories of path.

        Args:
            path: Directory to list

        Returns:
            Subdirectory paths (empty if path is not a directory)
        """
        pass

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        """Create path and any missing parents; no-op if it exists."""
        pass

    @abstractmethod
    def remove_tree(self, path: Path) -> None:
        """Remove path and everything beneath it."""
        pass

    @abstractmethod
    def home(self) -> Path:
        """Return the current user's home directory."""
        pass


@dataclass(frozen=True)
class ProcessResult:
    """
    Outcome of an external command.

    Attributes:
        returncode: Process exit status
        output: Captured stdout/stderr, empty when output was streamed
    """

    returncode: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class ExternalProcess(ABC):
    """
    Abstract interface for running external commands.

    The build driver only ever talks to cmake through this interface.
    """

    @abstractmethod
    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Path,
        env: Optional[Mapping[str, str]] = None,
    ) -> ProcessResult:
        """
        Run command with args in cwd and wait for it to finish.

        Args:
            command: Executable name or path
            args: Arguments passed to the executable
            cwd: Working directory
            env: Optional environment for the child process

        Returns:
            ProcessResult with the exit status
        """
        pass


class ToolchainCandidateProvider(ABC):
    """
    Abstract source of an NDK candidate path.

    Providers never validate the candidate; the locator does that once a
    provider has answered.
    """

    #: Short human readable description used in log messages.
    description: str = "unknown"

    @abstractmethod
    def find_candidate(
        self, environ: Mapping[str, str], fs: FileSystem
    ) -> Optional[Path]:
        """
        Return a candidate NDK root, or None if this source has nothing.

        Args:
            environ: Environment variables to consult
            fs: Filesystem accessor

        Returns:
            Candidate path or None
        """
        pass


__all__ = [
    "FileSystem",
    "ProcessResult",
    "ExternalProcess",
    "ToolchainCandidateProvider",
]
