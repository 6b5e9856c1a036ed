"""
Local filesystem implementation of the FileSystem interface.
"""

import logging
import shutil
from pathlib import Path
from typing import List

from ndkbuild.core.interfaces import FileSystem

logger = logging.getLogger(__name__)


class LocalFileSystem(FileSystem):
    """FileSystem backed by pathlib and shutil."""

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def is_file(self, path: Path) -> bool:
        return Path(path).is_file()

    def list_dirs(self, path: Path) -> List[Path]:
        path = Path(path)
        if not path.is_dir():
            return []
        return [child for child in path.iterdir() if child.is_dir()]

    def make_dirs(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured directory exists: {path}")

    def remove_tree(self, path: Path) -> None:
        """
        Remove a directory tree.

        Raises:
            OSError: If the tree cannot be removed
        """
        shutil.rmtree(path)
        logger.debug(f"Removed directory tree: {path}")

    def home(self) -> Path:
        return Path.home()
