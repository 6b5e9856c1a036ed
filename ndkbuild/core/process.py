"""
Subprocess-backed ExternalProcess implementation.
"""

import logging
import subprocess
from pathlib import Path
from typing import Mapping, Optional, Sequence

from ndkbuild.core.exceptions import MissingPrerequisiteError
from ndkbuild.core.interfaces import ExternalProcess, ProcessResult

logger = logging.getLogger(__name__)


class SubprocessRunner(ExternalProcess):
    """
    Run external commands with subprocess.

    By default the child's output goes straight to the terminal so long
    builds show progress. With capture_output=True stdout and stderr are
    collected into the result instead.
    """

    def __init__(self, capture_output: bool = False):
        self.capture_output = capture_output

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: Path,
        env: Optional[Mapping[str, str]] = None,
    ) -> ProcessResult:
        cmd = [command, *args]
        logger.debug(f"Running: {' '.join(cmd)} (cwd={cwd})")

        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                env=dict(env) if env is not None else None,
                stdout=subprocess.PIPE if self.capture_output else None,
                stderr=subprocess.STDOUT if self.capture_output else None,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise MissingPrerequisiteError(command) from e

        output = (result.stdout or "") if self.capture_output else ""
        logger.debug(f"{command} exited with {result.returncode}")
        return ProcessResult(returncode=result.returncode, output=output)
