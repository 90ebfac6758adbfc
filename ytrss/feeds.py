"""Feed parsing, video id extraction, live detection, filtering and paging."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import TYPE_CHECKING, Any, TypeVar
from urllib.parse import parse_qs, unquote, urlsplit

from defusedxml import DefusedXmlException
from defusedxml import ElementTree

if TYPE_CHECKING:
    from .video_cards import VideoWithChannel

logger = logging.getLogger(__name__)

_ATOM = "{http://www.w3.org/2005/Atom}"
_MEDIA = "{http://search.yahoo.com/mrss/}"
_API_CHUNK = 50
_OLDEST = datetime.min.replace(tzinfo=timezone.utc)

T = TypeVar("T")


@dataclass(frozen=True)
class FeedEntry:
    """One item of a feed."""

    title: str
    link: str
    published: datetime | None
    thumbnail: str = ""


@dataclass(frozen=True)
class Feed:
    """A parsed feed: its title and its entries in document order."""

    title: str
    entries: list[FeedEntry] = field(default_factory=list)


def extract_video_id(video_url: str) -> str:
    """Return the video id from a watch, short or youtu.be URL."""
    parts = urlsplit(video_url)
    host = parts.netloc.rpartition("@")[2]
    path = unquote(parts.path)
    if host == "youtu.be":
        return path.removeprefix("/")
    if "/shorts/" in path:
        return path.split("/")[-1]
    values = parse_qs(parts.query).get("v")
    if not values or not values[0]:
        raise ValueError(f"could not find video ID in URL: {video_url}")
    return values[0]


def _text(element: Any, path: str) -> str:
    child = element.find(path)
    return (child.text or "").strip() if child is not None else ""


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _parse_iso(text: str) -> datetime | None:
    if not text:
        return None
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return _aware(datetime.fromisoformat(text))
    except ValueError:
        return None


def _parse_rfc822(text: str) -> datetime | None:
    if not text:
        return None
    try:
        return _aware(parsedate_to_datetime(text))
    except (TypeError, ValueError):
        return None


def _atom_link(entry: Any) -> str:
    for link in entry.findall(f"{_ATOM}link"):
        if link.get("rel") in (None, "alternate"):
            return link.get("href", "")
    return ""


def _thumbnail(element: Any, path: str) -> str:
    thumb = element.find(path)
    return thumb.get("url", "") if thumb is not None else ""


def _parse_atom(root: Any) -> Feed:
    entries = [
        FeedEntry(
            title=_text(entry, f"{_ATOM}title"),
            link=_atom_link(entry),
            published=_parse_iso(_text(entry, f"{_ATOM}published"))
            or _parse_iso(_text(entry, f"{_ATOM}updated")),
            thumbnail=_thumbnail(entry, f"{_MEDIA}group/{_MEDIA}thumbnail"),
        )
        for entry in root.findall(f"{_ATOM}entry")
    ]
    return Feed(title=_text(root, f"{_ATOM}title"), entries=entries)


def _parse_rss(root: Any) -> Feed:
    channel = root.find("channel")
    if channel is None:
        raise ValueError("RSS document has no channel")
    entries = [
        FeedEntry(
            title=_text(item, "title"),
            link=_text(item, "link"),
            published=_parse_rfc822(_text(item, "pubDate")),
            thumbnail=_thumbnail(item, f".//{_MEDIA}thumbnail"),
        )
        for item in channel.findall("item")
    ]
    return Feed(title=_text(channel, "title"), entries=entries)


def parse_feed(xml_text: str | bytes) -> Feed:
    """Parse an Atom or RSS 2.0 document; raise ValueError if it is neither."""
    try:
        root = ElementTree.fromstring(xml_text)
    except (ElementTree.ParseError, DefusedXmlException) as exc:
        raise ValueError(f"could not parse feed: {exc}") from exc
    if root.tag == f"{_ATOM}feed":
        return _parse_atom(root)
    if root.tag == "rss":
        return _parse_rss(root)
    raise ValueError(f"unsupported feed document: {root.tag}")


def live_status(
    video_ids: Sequence[str],
    api_key: str,
    fetch_json: Callable[[str], Mapping[str, Any]],
) -> set[str]:
    """Return the ids among ``video_ids`` that are broadcasting live.

    Ids are looked up through the YouTube Data API in batches of 50;
    ``fetch_json`` takes a URL and returns the decoded JSON response.
    """
    if not api_key:
        raise ValueError("YOUTUBE_API_KEY not set")
    live: set[str] = set()
    for start in range(0, len(video_ids), _API_CHUNK):
        chunk = video_ids[start : start + _API_CHUNK]
        api_url = (
            "https://www.googleapis.com/youtube/v3/videos?part=snippet"
            f"&id={','.join(chunk)}&key={api_key}"
        )
        logger.debug("Calling YouTube API for %d videos", len(chunk))
        response = fetch_json(api_url)
        for item in response.get("items") or []:
            snippet = item.get("snippet") or {}
            if snippet.get("liveBroadcastContent") == "live":
                live.add(item.get("id", ""))
    return live


def filter_and_sort(
    items: Iterable[VideoWithChannel], show_shorts: bool
) -> list[VideoWithChannel]:
    """Drop shorts unless wanted, then order newest first."""
    kept = (
        items
        if show_shorts
        else (item for item in items if "/shorts/" not in item.entry.link)
    )
    return sorted(kept, key=lambda item: item.entry.published or _OLDEST, reverse=True)


def paginate(items: Sequence[T], page: int, per_page: int = 6) -> tuple[list[T], int]:
    """Return the items of a 1-based page and the next page number, or 0 if none.

    Page 0 means the first page; a page past the end yields no items.
    """
    if page == 0:
        page = 1
    if page < 0:
        raise ValueError(f"invalid page number: {page}")
    start = (page - 1) * per_page
    end = start + per_page
    next_page = page + 1 if end < len(items) else 0
    return list(items[start:end]), next_page