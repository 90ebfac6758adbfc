"""The web application: routes, session handling and the server entry point."""

from __future__ import annotations

import argparse
import json
import logging
import os
import re
import sqlite3
import sys
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import timedelta
from typing import Any
from wsgiref.simple_server import make_server

import requests
from flask import Flask, Response, g, make_response, redirect, request, session

from .auth import check_password, hash_password
from .channels import (
    ChannelPageError,
    export_channels,
    extract_channel_name,
    extract_rss_link,
    normalize_handle,
    parse_import,
)
from .components import channels_panel, close_popup, export_popup, import_popup
from .config import load_environment, session_key
from .database import DEFAULT_THEME, Database, User
from .feeds import extract_video_id, filter_and_sort, live_status, paginate, parse_feed
from .pages import (
    index_page,
    login_page,
    register_page,
    theme_variables,
    video_page,
)
from .themes import is_valid_video_id, next_theme
from .video_cards import VideoWithChannel, videos

logger = logging.getLogger(__name__)

HttpGet = Callable[[str], str]

_PUBLIC_ENDPOINTS = frozenset({"login", "register", "logout"})
_GUEST = User(id=0, username="", theme=DEFAULT_THEME)
_CHANNEL_LIST_CHANGED = "channelListChanged"
_INTEGER = re.compile(r"[+-]?\d+")
_PER_PAGE = 6


def _default_get(url: str) -> str:
    """Fetch a URL and return its body as text."""
    response = requests.get(url, timeout=30)
    return response.text


def _layout(user: User, content: str) -> str:
    """Wrap page content in a full document styled with the user's theme."""
    return (
        '<!DOCTYPE html><html lang="en"><head><meta charset="utf-8">'
        "<title>YT RSS</title>"
        f"{theme_variables(user.theme)}"
        f"</head><body>{content}</body></html>"
    )


def _error(message: str, status: int) -> Response:
    return Response(message + "\n", status=status, mimetype="text/plain")


def _form_value(name: str) -> str:
    """Return a field from the request body, falling back to the query string."""
    value = request.form.get(name)
    return value if value is not None else request.args.get(name, "")


def _show_shorts() -> bool:
    return _form_value("show-shorts") == "true"


def _page_number(text: str) -> int:
    """Parse a page number; anything that is not an integer counts as 0."""
    return int(text) if _INTEGER.fullmatch(text) else 0


def _with_trigger(body: str) -> Response:
    response = make_response(body)
    response.headers["HX-Trigger"] = _CHANNEL_LIST_CHANGED
    return response


def create_app(
    database: Database,
    secret_key: str,
    http_get: HttpGet | None = None,
    api_key: str | None = None,
) -> Flask:
    """Build the application around a database and a session signing key.

    ``http_get`` fetches a URL and returns its text; it raises OSError on
    failure. ``api_key`` is the YouTube Data API key; when None it is read
    from YOUTUBE_API_KEY at each request.
    """
    fetch = http_get or _default_get
    app = Flask(__name__, static_folder=None)
    app.secret_key = secret_key
    app.config.update(
        SESSION_COOKIE_NAME="session-name",
        SESSION_COOKIE_HTTPONLY=True,
        SESSION_COOKIE_SAMESITE="Strict",
        PERMANENT_SESSION_LIFETIME=timedelta(days=7),
    )

    def current_api_key() -> str:
        if api_key is not None:
            return api_key
        return os.environ.get("YOUTUBE_API_KEY", "")

    def fetch_json(url: str) -> Any:
        return json.loads(fetch(url))

    def panel(user: User, show_shorts: bool, error: str = "") -> str:
        return channels_panel(database.channels_for_user(user.id), {}, show_shorts, error)

    def collect_videos(feed_urls: Iterable[str]) -> list[VideoWithChannel]:
        items = []
        for feed_url in feed_urls:
            try:
                feed = parse_feed(fetch(feed_url))
            except (OSError, ValueError) as exc:
                logger.info("Skipping feed %s: %s", feed_url, exc)
                continue
            for entry in feed.entries:
                try:
                    video_id = extract_video_id(entry.link)
                except ValueError:
                    continue
                items.append(
                    VideoWithChannel(entry=entry, channel_name=feed.title, video_id=video_id)
                )
        return items

    def mark_live(items: list[VideoWithChannel]) -> list[VideoWithChannel]:
        try:
            live = live_status([item.video_id for item in items], current_api_key(), fetch_json)
        except (OSError, ValueError) as exc:
            logger.error("Error getting live status: %s", exc)
            return items
        return [replace(item, is_live=True) if item.video_id in live else item for item in items]

    @app.before_request
    def require_login() -> Response | None:
        if request.endpoint is None or request.endpoint in _PUBLIC_ENDPOINTS:
            return None
        user_id = session.get("user_id")
        if not isinstance(user_id, int) or isinstance(user_id, bool) or user_id == 0:
            return redirect("/login", code=303)
        user = database.find_user_by_id(user_id)
        if user is None:
            return redirect("/login", code=303)
        g.user = user
        return None

    @app.route("/register", methods=["GET", "POST"])
    def register() -> Response | str:
        if request.method == "GET":
            return _layout(_GUEST, register_page(""))
        username = _form_value("username")
        try:
            password_hash = hash_password(_form_value("password"))
        except ValueError:
            return _error("Server error", 500)
        try:
            database.create_user(username, password_hash)
        except sqlite3.Error:
            return _layout(_GUEST, register_page("Username already taken"))
        return redirect("/login", code=303)

    @app.route("/login", methods=["GET", "POST"])
    def login() -> Response | str:
        if request.method == "GET":
            return _layout(_GUEST, login_page(""))
        try:
            user = database.find_user_by_name(_form_value("username"))
        except sqlite3.Error:
            return _error("Server error", 500)
        if user is None or not check_password(_form_value("password"), user.password_hash):
            return _layout(_GUEST, login_page("Invalid username or password"))
        session.clear()
        session["user_id"] = user.id
        session.permanent = True
        response = Response("", status=200)
        response.headers["HX-Redirect"] = "/"
        return response

    @app.route("/logout", methods=["GET", "POST"])
    def logout() -> Response:
        session.clear()
        return redirect("/login", code=303)

    @app.route("/", methods=["GET", "POST"])
    def index() -> str:
        return _layout(g.user, index_page())

    @app.route("/videos", methods=["GET", "POST"])
    def video_feed() -> Response | str:
        user: User = g.user
        selected = set(request.form.getlist("channel")) | set(request.args.getlist("channel"))
        show_shorts = _show_shorts()
        try:
            channels = database.channels_for_user(user.id)
        except sqlite3.Error:
            return _error("Failed to load channels", 500)
        feed_urls = [c.url for c in channels if not selected or c.url in selected]
        items = filter_and_sort(mark_live(collect_videos(feed_urls)), show_shorts)
        try:
            page_items, next_page = paginate(
                items, _page_number(request.args.get("page", "")), _PER_PAGE
            )
        except ValueError:
            return _error("Invalid page", 400)
        if not page_items:
            return Response("", status=200)
        return videos(page_items, next_page)

    @app.route("/video/<video_id>", methods=["GET", "POST"])
    def video_player(video_id: str) -> Response | str:
        if not is_valid_video_id(video_id):
            return _error("Invalid video ID", 400)
        return _layout(g.user, video_page(video_id))

    @app.route("/channels", methods=["GET", "POST"])
    def channel_panel() -> Response | str:
        try:
            return panel(g.user, False)
        except sqlite3.Error:
            return _error("Failed to load channels", 500)

    @app.route("/export", methods=["GET", "POST"])
    def export() -> Response | str:
        try:
            channels = database.channels_for_user(g.user.id)
        except sqlite3.Error:
            return _error("Failed to fetch channels for export", 500)
        return export_popup(export_channels(channels))

    @app.route("/import", methods=["GET", "POST"])
    def import_channels() -> Response | str:
        if request.method == "GET":
            return import_popup()
        user: User = g.user
        try:
            to_import = parse_import(_form_value("json_data"))
        except ValueError:
            return _error("Invalid JSON format", 400)
        try:
            existing = {c.url for c in database.channels_for_user(user.id)}
        except sqlite3.Error:
            return _error("Database error", 500)
        try:
            for channel in to_import:
                if channel.url not in existing:
                    database.add_channel(user.id, channel.name, channel.url)
        except sqlite3.Error:
            return _error("Failed to import one or more channels", 500)
        return _with_trigger(panel(user, False) + close_popup("import-popup"))

    @app.route("/cycle-theme", methods=["POST"])
    def cycle_theme() -> Response:
        user: User = g.user
        try:
            database.set_theme(user.id, next_theme(user.theme))
        except sqlite3.Error:
            return _error("Failed to update theme", 500)
        response = Response("", status=200)
        response.headers["HX-Refresh"] = "true"
        return response

    @app.route("/add-channel", methods=["POST"])
    def add_channel() -> Response | str:
        user: User = g.user
        handle = normalize_handle(_form_value("handle"))
        show_shorts = _show_shorts()
        try:
            page = fetch("https://www.youtube.com/" + handle)
        except OSError:
            return _error("Failed to fetch channel page", 500)
        try:
            rss_url = extract_rss_link(page)
        except ChannelPageError:
            return _error("Failed to find RSS link", 500)
        try:
            exists = database.channel_exists(user.id, rss_url)
        except sqlite3.Error:
            return _error("Database error", 500)
        if exists:
            return panel(user, show_shorts, "Channel already exists.")
        try:
            name = extract_channel_name(page)
        except ChannelPageError:
            return _error("Failed to find channel name", 500)
        try:
            database.add_channel(user.id, name, rss_url)
        except sqlite3.Error:
            return _error("Failed to save channel", 500)
        return _with_trigger(panel(user, show_shorts))

    @app.route("/delete-channel", methods=["POST"])
    def delete_channel() -> Response | str:
        user: User = g.user
        show_shorts = _show_shorts()
        try:
            database.delete_channel(user.id, request.args.get("url", ""))
        except sqlite3.Error:
            return _error("Failed to delete channel", 500)
        return _with_trigger(panel(user, show_shorts))

    return app


def main(argv: list[str] | None = None) -> int:
    """Start the server on the given port (0 picks a free one)."""
    parser = argparse.ArgumentParser(prog="ytrss")
    parser.add_argument("-port", "--port", type=int, default=0, help="port to run the server on")
    args = parser.parse_args(argv)

    load_environment()
    try:
        secret = session_key()
    except RuntimeError as exc:
        print(exc, file=sys.stderr)
        return 1

    database = Database()
    try:
        app = create_app(database, secret)
        with make_server("", args.port, app) as server:
            print(f"Listening on port: {server.server_port}", flush=True)
            try:
                server.serve_forever()
            except KeyboardInterrupt:
                pass
    finally:
        database.close()
    return 0