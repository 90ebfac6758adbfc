"""HTML fragments for the channel sidebar and the import/export popups."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

_ESCAPES = (
    ("&", "&amp;"),
    ("'", "&#39;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&#34;"),
)


def _escape(text: str) -> str:
    """Escape text for use in HTML content and quoted attribute values."""
    for raw, entity in _ESCAPES:
        text = text.replace(raw, entity)
    return text


@dataclass(frozen=True)
class Channel:
    """A subscribed channel: its display name and its RSS feed URL."""

    name: str
    url: str


def _channel_item(channel: Channel) -> str:
    name = _escape(channel.name)
    return (
        f'<li><input type="checkbox" id="{name}" name="channel" '
        f'value="{_escape(channel.url)}"> '
        f'<label for="{name}">{name}</label> '
        '<button class="delete-btn" '
        f'hx-post="{_escape("/delete-channel?url=" + channel.url)}" '
        'hx-target="#channels" hx-swap="innerHTML" hx-include="#show-shorts">'
        "Delete</button></li>"
    )


def channel_list(
    channels: Iterable[Channel],
    selected_channels: Mapping[str, bool],
    show_shorts: bool,
) -> str:
    """Render the form listing channels as checkboxes, plus the shorts option.

    ``selected_channels`` is accepted for the caller's convenience; the list
    always renders every box unchecked.
    """
    checked = " checked" if show_shorts else ""
    items = "".join(_channel_item(channel) for channel in channels)
    return (
        '<form hx-post="/videos" hx-target="#videos" hx-swap="innerHTML" '
        'hx-trigger="load, change" id="channels-list"><fieldset>'
        "<legend>Options</legend><div>"
        '<input type="checkbox" id="show-shorts" name="show-shorts" value="true"'
        f"{checked}"
        '> <label for="show-shorts">Show Shorts</label></div></fieldset>'
        "<fieldset><legend>Select Channels</legend><ul>"
        f"{items}"
        "</ul></fieldset></form>"
    )


def channels_panel(
    channels: Iterable[Channel],
    selected_channels: Mapping[str, bool],
    show_shorts: bool,
    add_channel_error: str,
) -> str:
    """Render the whole channel panel: header buttons, add form and list."""
    error = (
        f'<p class="error">{_escape(add_channel_error)}</p>'
        if add_channel_error
        else ""
    )
    return (
        '<div class="channels-container"><div class="channels-header">'
        '<div class="header-buttons">'
        '<button hx-get="/export" hx-target="body" hx-swap="beforeend" '
        'class="button">Export</button> '
        '<button hx-get="/import" hx-target="body" hx-swap="beforeend" '
        'class="button">Import</button> '
        '<a href="/logout" class="button logout-btn">Logout</a></div></div>'
        '<form id="add-channel-form" hx-post="/add-channel" '
        'hx-target="#channels" hx-swap="innerHTML"><fieldset>'
        "<legend>Add Channel</legend> "
        f"{error}"
        '<input type="text" name="handle" placeholder="@channel-handle" required> '
        '<button type="submit" hx-include="#show-shorts" '
        'hx-indicator="#loading-spinner">Add</button></fieldset></form>'
        '<div id="channels-list-container">'
        f"{channel_list(channels, selected_channels, show_shorts)}"
        "</div></div>"
    )


def close_popup(element_id: str) -> str:
    """Render an empty out-of-band swap that removes the element with this id."""
    return f'<div id="{_escape(element_id)}" hx-swap-oob="true"></div>'


def export_popup(json_data: str) -> str:
    """Render the popup showing exported channel JSON."""
    return (
        '<div id="export-popup" class="popup-overlay" onclick="this.remove()">'
        '<div class="popup-content" onclick="event.stopPropagation()">'
        "<h3>Export Channels</h3><textarea readonly>"
        f"{_escape(json_data)}"
        '</textarea><div class="popup-buttons">'
        '<button class="button" onclick="copyToClipboard()">Copy to Clipboard</button> '
        '<button class="button close-btn" '
        "onclick=\"document.getElementById('export-popup').remove()\">Close</button>"
        "</div></div></div><script>\n"
        "\t\tfunction copyToClipboard() {\n"
        "\t\t\tconst textarea = document.querySelector('#export-popup textarea');\n"
        "\t\t\ttextarea.select();\n"
        "\t\t\tdocument.execCommand('copy');\n"
        "\t\t}\n"
        "\t</script>"
    )


def import_popup() -> str:
    """Render the popup with a form for pasting channel JSON."""
    return (
        '<div id="import-popup" class="popup-overlay" onclick="this.remove()">'
        '<div class="popup-content" onclick="event.stopPropagation()">'
        "<h3>Import Channels</h3>"
        '<form hx-post="/import" hx-target="#channels" hx-swap="innerHTML">'
        '<textarea name="json_data" placeholder="Paste your JSON here..." required>'
        '</textarea><div class="popup-buttons">'
        '<button type="submit" class="button">Import</button> '
        '<button type="button" class="button close-btn" '
        "onclick=\"document.getElementById('import-popup').remove()\">Close</button>"
        "</div></form></div></div>"
    )