import html
import re

import pytest

from ytrss.components import (
    Channel,
    channel_list,
    channels_panel,
    close_popup,
    export_popup,
    import_popup,
)

FEED_A = "https://www.youtube.com/feeds/videos.xml?channel_id=AAA"
FEED_B = "https://www.youtube.com/feeds/videos.xml?channel_id=BBB"


@pytest.fixture
def channels():
    return [Channel("Alpha", FEED_A), Channel("Beta", FEED_B)]


def test_close_popup_exact():
    assert close_popup("import-popup") == (
        '<div id="import-popup" hx-swap-oob="true"></div>'
    )


def test_import_popup_form():
    out = import_popup()
    assert out.startswith('<div id="import-popup" class="popup-overlay"')
    assert '<form hx-post="/import" hx-target="#channels" hx-swap="innerHTML">' in out
    assert 'name="json_data"' in out


def test_export_popup_round_trips_json():
    data = '[\n  {\n    "name": "A & <B>",\n    "url": "x"\n  }\n]'
    out = export_popup(data)
    match = re.search(r"<textarea readonly>(.*?)</textarea>", out, re.S)
    assert match is not None
    assert html.unescape(match.group(1)) == data
    assert "<B>" not in match.group(1)


def test_export_popup_quote_escape_style():
    out = export_popup('"')
    assert "<textarea readonly>&#34;</textarea>" in out


def test_channel_list_show_shorts_toggle():
    on = channel_list([], {}, True)
    off = channel_list([], {}, False)
    assert 'value="true" checked>' in on
    assert " checked" not in off
    assert "<ul></ul>" in off


def test_channel_list_items_in_order(channels):
    out = channel_list(channels, {}, False)
    assert out.count("<li>") == len(channels)
    assert out.index("Alpha") < out.index("Beta")
    assert html.escape("/delete-channel?url=" + FEED_A, quote=False) in out
    assert f'value="{html.escape(FEED_A, quote=False)}"' in out


def test_channel_list_ignores_selection(channels):
    assert channel_list(channels, {FEED_A: True}, False) == channel_list(
        channels, {}, False
    )


def test_channel_name_is_escaped():
    name = '<script>"x"</script>'
    out = channel_list([Channel(name, FEED_A)], {}, False)
    assert name not in out
    labels = re.findall(r'<label for="[^"]*">(.*?)</label>', out)
    assert html.unescape(labels[-1]) == name


def test_channels_panel_error_shown(channels):
    out = channels_panel(channels, {}, False, "Channel already exists.")
    assert '<p class="error">Channel already exists.</p>' in out
    assert channel_list(channels, {}, False) in out


def test_channels_panel_without_error(channels):
    out = channels_panel(channels, {}, True, "")
    assert 'class="error"' not in out
    assert out.startswith('<div class="channels-container">')
    assert out.endswith(channel_list(channels, {}, True) + "</div></div>")


def test_channel_is_frozen():
    ch = Channel("Alpha", FEED_A)
    with pytest.raises(AttributeError):
        ch.name = "other"
    assert ch == Channel("Alpha", FEED_A)