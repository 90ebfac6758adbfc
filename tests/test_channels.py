import pytest

from ytrss.channels import (
    ChannelPageError,
    export_channels,
    extract_channel_name,
    extract_rss_link,
    normalize_handle,
    parse_import,
)
from ytrss.components import Channel

FEED_URL = "https://www.youtube.com/feeds/videos.xml?channel_id=UCexample000000000000000"

PAGE = (
    "<html><head>"
    '<meta property="og:title" content="Tom &amp; Jerry">'
    '<link rel="alternate" type="application/rss+xml" title="RSS" '
    f'href="{FEED_URL}">'
    "</head></html>"
)


def test_normalize_handle_adds_at():
    assert normalize_handle("somechannel") == "@somechannel"


def test_normalize_handle_keeps_existing_at():
    assert normalize_handle("@somechannel") == "@somechannel"


def test_extract_rss_link():
    assert extract_rss_link(PAGE) == FEED_URL


def test_extract_rss_link_missing():
    with pytest.raises(ChannelPageError):
        extract_rss_link("<html></html>")


def test_extract_channel_name_unescapes():
    assert extract_channel_name(PAGE) == "Tom & Jerry"


def test_extract_channel_name_missing():
    with pytest.raises(ChannelPageError, match="channel name"):
        extract_channel_name('<meta property="og:title" content="">')


def test_channel_page_error_is_value_error():
    with pytest.raises(ValueError):
        extract_rss_link("")


def test_export_empty_is_null():
    assert export_channels([]) == "null"


def test_export_uses_field_names():
    text = export_channels([Channel(name="A", url="u")])
    assert text == '[\n  {\n    "Name": "A",\n    "URL": "u"\n  }\n]'


def test_export_escapes_html_characters():
    text = export_channels([Channel(name="<b>&", url="x")])
    assert "\\u003cb\\u003e\\u0026" in text
    assert "<" not in text


def test_export_import_round_trip():
    channels = [Channel(name="One", url="https://example.com/1"),
                Channel(name="Two <&>", url="https://example.com/2")]
    assert parse_import(export_channels(channels)) == channels


def test_import_lowercase_keys():
    data = '[{"name": "N", "url": "U", "extra": 1}]'
    assert parse_import(data) == [Channel(name="N", url="U")]


def test_import_missing_fields_are_empty():
    assert parse_import('[{"name": "N"}]') == [Channel(name="N", url="")]


def test_import_null_is_empty():
    assert parse_import("null") == []


def test_import_invalid_json():
    with pytest.raises(ValueError):
        parse_import("not json")


def test_import_object_rejected():
    with pytest.raises(ValueError):
        parse_import('{"name": "N", "url": "U"}')


def test_import_non_string_field_rejected():
    with pytest.raises(ValueError):
        parse_import('[{"name": 3, "url": "U"}]')


def test_import_non_object_element_rejected():
    with pytest.raises(ValueError):
        parse_import("[1, 2]")