"""Env-file loader for kaniko-ecr."""

import os
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from kanikoecr.errors import PluginError
from kanikoecr.errors_catalog import actionable_error


class ConfigLoader:
    """Loads a dotenv file into the process environment before flags are parsed."""

    def __init__(self, environ=None):
        self.environ = os.environ if environ is None else environ

    def read(self, env_file: Optional[str]) -> Dict[str, str]:
        if not env_file:
            return {}

        path = Path(env_file)
        if not path.is_file():
            raise PluginError(actionable_error("env_file_not_found", path=env_file))

        try:
            parsed = dotenv_values(path, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PluginError(f"Invalid env file '{env_file}': {exc}") from exc

        return {key: value for key, value in parsed.items() if value is not None}

    def load(self, env_file: Optional[str]) -> Dict[str, str]:
        """Exports the env-file values that are not already set. Returns what was applied."""
        applied = {}
        for key, value in self.read(env_file).items():
            if key in self.environ:
                continue
            self.environ[key] = value
            applied[key] = value
        return applied
