"""Whole-page bodies: index, login, register, video player and theme styles."""

from __future__ import annotations

from .components import _escape

_AUTH_FIELDS = (
    '<input type="text" name="username" placeholder="Username" required> '
    '<input type="password" name="password" placeholder="Password" required> '
)

_PALETTE_TEMPLATE = (
    "<style>\n"
    "\t\t\t:root {{\n"
    "\t\t\t\t/* Palette - {label} */\n"
    "\t\t\t\t--bg-primary: {bg_primary};\n"
    "\t\t\t\t--bg-secondary: {bg_secondary};\n"
    "\t\t\t\t--text-primary: {text_primary};\n"
    "\t\t\t\t--text-secondary: {text_secondary};\n"
    "\t\t\t\t--accent-primary: {accent_primary};\n"
    "\t\t\t\t--accent-danger: {accent_danger};\n"
    "\t\t\t\t--border-color: {border_color};\n"
    "\t\t\t}}\n"
    "\t\t</style>"
)

_PALETTES = {
    "nord": dict(
        label="Nord",
        bg_primary="#2E3440",
        bg_secondary="#3B4252",
        text_primary="#ECEFF4",
        text_secondary="#D8DEE9",
        accent_primary="#88C0D0",
        accent_danger="#BF616A",
        border_color="#4C566A",
    ),
    "gruvbox": dict(
        label="Gruvbox",
        bg_primary="#282828",
        bg_secondary="#3c3836",
        text_primary="#ebdbb2",
        text_secondary="#d5c4a1",
        accent_primary="#fabd2f",
        accent_danger="#fb4934",
        border_color="#504945",
    ),
}

_DEFAULT_PALETTE = dict(
    label="Rosé Pine Moon (Default)",
    bg_primary="#232136",
    bg_secondary="#2a273f",
    text_primary="#e0def4",
    text_secondary="#908caa",
    accent_primary="#c4a7e7",
    accent_danger="#ea9a97",
    border_color="#393552",
)


def _error_paragraph(error: str) -> str:
    return f'<p class="error">{_escape(error)}</p>' if error else ""


def index_page() -> str:
    """Render the main page shell that loads channels and videos."""
    return (
        '<h1 hx-post="/cycle-theme" hx-swap="none">YT RSS</h1>'
        '<div id="channels" hx-trigger="load" hx-get="/channels"></div>'
        '<div id="videos"><!-- This container will be populated by the form '
        "in the channels component --></div>"
    )


def load_more(page: int) -> str:
    """Render the placeholder that fetches the given page when revealed."""
    target = _escape(f"/videos?page={page}")
    return (
        f'<div id="load-more" hx-get="{target}" hx-trigger="revealed" '
        'hx-swap="outerHTML" hx-include="#channels-list">Loading...</div>'
    )


def login_page(error: str) -> str:
    """Render the login form, with an error message when one is given."""
    return (
        '<div class="auth-container" id="auth-container"><h2>Login</h2>'
        '<form hx-post="/login" hx-target="body" hx-swap="innerHTML">'
        f"{_error_paragraph(error)}"
        f"{_AUTH_FIELDS}"
        '<button type="submit">Login</button></form>'
        "<p>Don't have an account? <a href=\"/register\">Register here</a>.</p></div>"
    )


def register_page(error: str) -> str:
    """Render the registration form, with an error message when one is given."""
    return (
        '<div class="auth-container" id="auth-container"><h2>Register</h2>'
        '<form action="/register" method="post">'
        f"{_error_paragraph(error)}"
        f"{_AUTH_FIELDS}"
        '<button type="submit">Register</button></form>'
        '<p>Already have an account? <a href="/login">Login here</a>.</p></div>'
    )


def theme_variables(theme: str) -> str:
    """Render the CSS custom properties for a theme; unknown themes get the default."""
    return _PALETTE_TEMPLATE.format(**_PALETTES.get(theme, _DEFAULT_PALETTE))


def video_page(video_id: str) -> str:
    """Render the full-screen embedded player for a video."""
    src = _escape("https://www.youtube.com/embed/" + video_id)
    return (
        '<div class="full-screen-video-page"><div class="video-wrapper">'
        f'<iframe src="{src}" frameborder="0" '
        'allow="accelerometer; autoplay; clipboard-write; encrypted-media; '
        'gyroscope; picture-in-picture" allowfullscreen></iframe></div>'
        '<div class="back-button-container">'
        '<a href="/" hx-boost="true" class="button back-btn">← Back to Feed</a>'
        "</div></div>"
    )