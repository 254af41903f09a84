"""Best-effort home directory lookup used for default history file paths."""

from __future__ import annotations

import os
import sys
from typing import Optional


def user_home_dir(platform: Optional[str] = None) -> str:
    """Return the user's home (or config) directory, or ``""`` if unknown.

    Windows prefers ``HOMEDRIVE`` + ``HOMEPATH`` and falls back to
    ``USERPROFILE``. Linux prefers ``XDG_CONFIG_HOME``. Every other platform,
    and Linux without ``XDG_CONFIG_HOME``, uses ``HOME``.
    """

    platform = sys.platform if platform is None else platform
    if platform == "win32":
        home = os.environ.get("HOMEDRIVE", "") + os.environ.get("HOMEPATH", "")
        if not home:
            home = os.environ.get("USERPROFILE", "")
        return home
    if platform.startswith("linux"):
        home = os.environ.get("XDG_CONFIG_HOME", "")
        if home:
            return home
    return os.environ.get("HOME", "")


def home_history_path(relative: str, *, platform: Optional[str] = None) -> str:
    # An unresolved home yields "/<relative>"; callers pass it through as-is.
    return f"{user_home_dir(platform)}/{relative}"


__all__ = ["home_history_path", "user_home_dir"]
