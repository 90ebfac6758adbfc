import pytest

from ytrss.themes import THEMES, is_valid_video_id, next_theme


@pytest.mark.parametrize(
    ("current", "expected"),
    [
        ("rose-pine", "nord"),
        ("nord", "gruvbox"),
        ("gruvbox", "rose-pine"),
        ("unknown", "rose-pine"),
        ("", "rose-pine"),
    ],
)
def test_next_theme(current, expected):
    assert next_theme(current) == expected


def test_cycle_returns_to_start():
    theme = THEMES[0]
    seen = []
    for _ in THEMES:
        seen.append(theme)
        theme = next_theme(theme)
    assert theme == THEMES[0]
    assert sorted(seen) == sorted(THEMES)


@pytest.mark.parametrize("video_id", ["dQw4w9WgXcQ", "abc_def-123", "AAAAAAAAAAA"])
def test_valid_video_ids(video_id):
    assert is_valid_video_id(video_id) is True


@pytest.mark.parametrize(
    "video_id",
    ["", "short", "dQw4w9WgXcQx", "dQw4w9WgXc!", "dQw4w9WgXcQ\n", "../etc/pass"],
)
def test_invalid_video_ids(video_id):
    assert is_valid_video_id(video_id) is False