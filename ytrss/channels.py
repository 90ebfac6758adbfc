"""Channel page scraping and JSON import/export of subscriptions."""

from __future__ import annotations

import html
import json
import re
from collections.abc import Iterable
from typing import Any

from .components import Channel

_RSS_LINK = re.compile(
    r'<link rel="alternate" type="application/rss\+xml" title="RSS" href="([^"]+)">'
)
_OG_TITLE = re.compile(r'<meta property="og:title" content="([^"]+)">')

_JSON_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class ChannelPageError(ValueError):
    """A channel page lacks the information needed to subscribe to it."""


def normalize_handle(handle: str) -> str:
    """Return the handle with a leading '@', adding one if it is missing."""
    return handle if handle.startswith("@") else "@" + handle


def extract_rss_link(html_text: str) -> str:
    """Return the RSS feed URL advertised by a channel page."""
    match = _RSS_LINK.search(html_text)
    if match is None:
        raise ChannelPageError("could not find RSS link in the page")
    return match.group(1)


def extract_channel_name(html_text: str) -> str:
    """Return the channel's display name from its page's og:title."""
    match = _OG_TITLE.search(html_text)
    if match is None:
        raise ChannelPageError("could not find channel name in the page")
    return html.unescape(match.group(1))


def export_channels(channels: Iterable[Channel]) -> str:
    """Serialise channels as indented JSON; no channels gives ``null``."""
    records = [{"Name": channel.name, "URL": channel.url} for channel in channels]
    if not records:
        return "null"
    text = json.dumps(records, indent=2, ensure_ascii=False)
    return re.sub(
        "[<>&\u2028\u2029]", lambda m: _JSON_HTML_ESCAPES[m.group(0)], text
    )


def _string_field(record: dict[str, Any], name: str) -> str:
    value = ""
    exact = False
    for key, raw in record.items():
        if key.lower() != name or (exact and key != name):
            continue
        if raw is None:
            continue
        if not isinstance(raw, str):
            raise ValueError(f"field {key!r} must be a string")
        value = raw
        exact = exact or key == name
    return value


def parse_import(json_data: str) -> list[Channel]:
    """Parse a JSON array of channels; keys are matched case-insensitively.

    Raises ValueError when the text is not such an array.
    """
    try:
        data = json.loads(json_data)
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc
    if data is None:
        return []
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of channels")
    channels = []
    for record in data:
        if record is None:
            channels.append(Channel(name="", url=""))
            continue
        if not isinstance(record, dict):
            raise ValueError("each channel must be a JSON object")
        channels.append(
            Channel(name=_string_field(record, "name"), url=_string_field(record, "url"))
        )
    return channels