"""Path utilities module.

Provides helper functions for constructing normalized file system paths
anchored at the project root, so configuration files resolve the same way
regardless of the current working directory.
"""

import os
import re
from pathlib import Path
from typing import List


class PathUtils:  # pylint: disable=too-few-public-methods
    """Utility class for building normalized file system paths."""

    _ROOT_DIR: str = os.getenv(
        "MARKET_SESSIONS_ROOT", str(Path(__file__).resolve().parents[3])
    )

    @staticmethod
    def build(*segments: str) -> str:
        """Build a normalized path under the project root, splitting input segments."""
        parts: List[str] = []
        for segment in segments:
            if segment:
                parts.extend(p for p in re.split(r"[\\/]", segment) if p.strip())
        return os.path.join(PathUtils._ROOT_DIR.strip() or os.sep, *parts)
