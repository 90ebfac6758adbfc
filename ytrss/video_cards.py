"""HTML cards for the video feed."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .components import _escape
from .feeds import FeedEntry
from .pages import load_more


@dataclass(frozen=True)
class VideoWithChannel:
    """A feed entry together with its channel name, video id and live flag."""

    entry: FeedEntry
    channel_name: str
    video_id: str
    is_live: bool = False

    @property
    def upload_date(self) -> str:
        """The publication date as MM/DD/YY, or an empty string when unknown."""
        published = self.entry.published
        return published.strftime("%m/%d/%y") if published is not None else ""


def video(item: VideoWithChannel) -> str:
    """Render one video card linking to the in-app player."""
    live = '<div class="live-icon">Live</div>' if item.is_live else ""
    title = _escape(item.entry.title)
    return (
        f'<div class="video"><a href="{_escape("/video/" + item.video_id)}" '
        'hx-boost="true"><div class="thumbnail-container">'
        f"{live}"
        f'<img src="{_escape(item.entry.thumbnail)}" alt="{title}"></div>'
        f'<div class="video-info"><p class="video-title">{title}</p>'
        '<div class="video-meta">'
        f'<p class="channel-name">{_escape(item.channel_name)}</p>'
        f'<p class="upload-date">{_escape(item.upload_date)}</p>'
        "</div></div></a></div>"
    )


def videos(items: Iterable[VideoWithChannel], next_page: int) -> str:
    """Render a page of video cards, followed by a loader when more pages exist."""
    cards = "".join(video(item) for item in items)
    return cards + (load_more(next_page) if next_page > 0 else "")