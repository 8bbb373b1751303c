"""Filesystem helpers for kaniko-ecr."""

import logging
import os
import sys

from kanikoecr.constants import FILE_MODE


class FileSystemService:
    """Encapsulates file side effects."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def set_permissions(self, path: str, mode: int):
        if sys.platform == "win32":
            return

        try:
            os.chmod(path, mode)
        except OSError as exc:
            self.logger.warning("Could not set permissions on %s: %s", path, exc)

    def write_text(self, path: str, content: str, mode: int = FILE_MODE):
        """Overwrites ``path`` with ``content``. Raises OSError on failure."""
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        with open(path, "w", encoding="utf-8", newline="\n") as file_obj:
            file_obj.write(content)
        self.set_permissions(path, mode)
        self.logger.debug("Wrote %s", path)

    def read_text(self, path: str) -> str:
        with open(path, "r", encoding="utf-8", newline="") as file_obj:
            return file_obj.read()
