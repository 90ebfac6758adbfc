"""Theme cycling and video id validation."""

from __future__ import annotations

import re

THEMES = ("rose-pine", "nord", "gruvbox")

_VIDEO_ID = re.compile(r"[a-zA-Z0-9_-]{11}")


def next_theme(current: str) -> str:
    """Return the theme after ``current``; unknown themes go to the first one."""
    index = THEMES.index(current) if current in THEMES else -1
    return THEMES[(index + 1) % len(THEMES)]


def is_valid_video_id(video_id: str) -> bool:
    """Whether the string has the shape of a YouTube video id."""
    return _VIDEO_ID.fullmatch(video_id) is not None