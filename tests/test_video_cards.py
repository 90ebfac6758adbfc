from datetime import datetime, timezone

from ytrss.feeds import FeedEntry
from ytrss.pages import load_more
from ytrss.video_cards import VideoWithChannel, video, videos


def _item(video_id="abcdefghijk", title="Title", live=False, published=None):
    entry = FeedEntry(
        title=title,
        link=f"https://www.youtube.com/watch?v={video_id}",
        published=published or datetime(2024, 3, 5, 10, tzinfo=timezone.utc),
        thumbnail="https://i.example.com/thumb.jpg",
    )
    return VideoWithChannel(
        entry=entry, channel_name="Example Channel", video_id=video_id, is_live=live
    )


def test_video_links_to_player_page():
    html = video(_item("abcdefghijk"))
    assert '<a href="/video/abcdefghijk" hx-boost="true">' in html
    assert html.startswith('<div class="video">')
    assert html.endswith("</a></div>")


def test_video_shows_live_badge_only_when_live():
    assert '<div class="live-icon">Live</div>' in video(_item(live=True))
    assert "live-icon" not in video(_item(live=False))


def test_video_includes_thumbnail_channel_and_date():
    html = video(_item())
    assert 'src="https://i.example.com/thumb.jpg"' in html
    assert '<p class="channel-name">Example Channel</p>' in html
    assert '<p class="upload-date">03/05/24</p>' in html


def test_video_escapes_title():
    html = video(_item(title="A & B <x>"))
    assert "A &amp; B &lt;x&gt;" in html
    assert "<x>" not in html


def test_upload_date_empty_without_publication_date():
    entry = FeedEntry(title="t", link="l", published=None, thumbnail="")
    item = VideoWithChannel(entry=entry, channel_name="c", video_id="v")
    assert item.upload_date == ""


def test_videos_appends_loader_for_next_page():
    items = [_item("aaaaaaaaaaa"), _item("bbbbbbbbbbb")]
    html = videos(items, 2)
    assert html.endswith(load_more(2))
    assert html.count('<div class="video">') == len(items)


def test_videos_without_next_page_has_no_loader():
    html = videos([_item()], 0)
    assert "load-more" not in html
    assert html == video(_item())


def test_videos_empty():
    assert videos([], 0) == ""