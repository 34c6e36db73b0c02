"""Module for reading JSON configuration and data files."""

import json
import os
from typing import Any, Optional

from src.utils.io.logger import Logger


class JsonManager:
    """Class for handling JSON file operations."""

    @staticmethod
    def exists(filepath: str) -> bool:
        """Check if a file exists at the given path."""
        return os.path.exists(filepath)

    @staticmethod
    def load(filepath: Optional[str]) -> Any:
        """Load JSON data from a file, returning ``None`` when it cannot be read."""
        if not filepath or not filepath.strip():
            Logger.error("filepath is empty")
            return None
        if not JsonManager.exists(filepath):
            Logger.warning(f"File not found: {filepath}")
            return None
        try:
            with open(filepath, "r", encoding="utf-8") as file:
                return json.load(file)
        except (OSError, TypeError, json.JSONDecodeError) as e:
            Logger.error(f"Error loading JSON file {filepath}: {e}")
            return None

    @staticmethod
    def loads(payload: str) -> Any:
        """Decode a JSON document held in memory, returning ``None`` if it is malformed."""
        try:
            return json.loads(payload)
        except (TypeError, json.JSONDecodeError) as e:
            Logger.debug(f"Error decoding JSON payload: {e}")
            return None
