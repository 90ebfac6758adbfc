# ytrss

A small self-hosted web application for following YouTube channels without
an account on YouTube. Each user keeps a list of channels; the app reads the
channels' feeds and shows their videos on one page, newest first, with live
streams marked and Shorts hidden unless asked for.

## Features

- Accounts with bcrypt-hashed passwords and signed cookie sessions that last
  seven days.
- Add a channel by its `@handle` (the `@` is added if left out); the RSS link
  and the channel name are read from the channel page.
- Pick which channels to show, and whether to include Shorts.
- Videos are served in pages of six, with a "Loading..." placeholder that
  requests the next page.
- Live streams are flagged when a YouTube Data API key is set.
- Export and import the channel list as JSON. Importing skips feed URLs the
  user already follows.
- Three colour themes (`rose-pine`, `nord`, `gruvbox`); a POST to
  `/cycle-theme` (sent by clicking the page title) moves to the next one.
- Videos open in an embedded player page at `/video/<id>`.

## Installing

```
pip install .
```

## Configuration

Settings are read from the environment, and from a `.env` file in the
working directory if one exists (variables already set are not overridden):

- `SESSION_KEY` (required): the secret used to sign session cookies. Without
  it the `ytrss` command prints an error and exits with status 1.
- `YOUTUBE_API_KEY` (optional): enables live-stream detection. Without it
  videos are shown without the live flag.

Example `.env`:

```
SESSION_KEY=secret
YOUTUBE_API_KEY=placeholder
```

## Running

```
ytrss --port 8080
```

`-port` is accepted as well. Without a port, or with port 0, the server picks
a free port and prints it:

```
Listening on port: 54321
```

Data is kept in `yt_rss.db`, an SQLite file in the working directory.
The server is the single-threaded one from the standard library's `wsgiref`;
stop it with Ctrl-C.

## Using it as a library

- `ytrss.app.create_app(database, secret_key, http_get=None, api_key=None)`
  builds the Flask application around a `ytrss.database.Database`. `http_get`
  takes a URL and returns the response text (by default it uses `requests`);
  `api_key`, when not given, is read from `YOUTUBE_API_KEY` on each request.
- `ytrss.database.Database(path)` creates the `users` and `channels` tables if
  needed and offers methods such as `create_user`, `find_user_by_name`,
  `channels_for_user`, `add_channel` and `delete_channel`.
- `ytrss.feeds.parse_feed` parses Atom and RSS 2.0 documents into a `Feed` of
  `FeedEntry` items; `extract_video_id`, `live_status`, `filter_and_sort` and
  `paginate` do the rest of the feed work.
- `ytrss.channels` scrapes channel pages (`extract_rss_link`,
  `extract_channel_name`) and converts subscriptions to and from JSON
  (`export_channels`, `parse_import`).
- `ytrss.components`, `ytrss.pages` and `ytrss.video_cards` render the HTML
  fragments as plain strings.

## What it does not do

Pages are wrapped in a minimal HTML document that holds only the theme's CSS
variables. The package serves no stylesheet and no htmx script, so the
`hx-*` attributes in the pages do nothing until the htmx library and styles
are supplied by some other means, for example by a proxy or a customised
layout.

## Running the tests

```
pip install .[test]
pytest
```