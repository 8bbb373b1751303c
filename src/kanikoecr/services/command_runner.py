"""Subprocess execution service for kaniko-ecr."""

import subprocess
from typing import List

from kanikoecr.errors import PluginError


class CommandRunner:
    """Runs external commands with output streamed to the console."""

    def __init__(self, logger):
        self.logger = logger

    def run(self, cmd: List[str]) -> subprocess.CompletedProcess:
        cmd_str = " ".join(cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(cmd, text=True)
        except FileNotFoundError as exc:
            raise PluginError(
                f"Required command not found: {cmd[0]}. Run the plugin inside the kaniko image."
            ) from exc
        except OSError as exc:
            raise PluginError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if result.returncode != 0:
            raise PluginError(f"Command failed ({result.returncode}): {cmd_str}")

        return result
