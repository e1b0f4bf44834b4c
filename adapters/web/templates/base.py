"""
Page shell and small formatting helpers shared by every page.
"""

import html
from datetime import date, datetime
from typing import Iterable, Optional, Tuple
from urllib.parse import urlencode

from core.domain.constants import PLACEHOLDER_IMAGE

STYLE = """
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
       margin: 0; background: #0f172a; color: #e2e8f0; }
header, footer { background: #020617; padding: 12px 24px; }
header a, footer a { color: #facc15; margin-right: 16px; text-decoration: none; }
main { max-width: 1100px; margin: 0 auto; padding: 24px; }
h1, h2, h3 { color: #f8fafc; }
a { color: #38bdf8; }
table { width: 100%; border-collapse: collapse; margin: 12px 0 24px; }
th, td { text-align: left; padding: 8px 10px; border-bottom: 1px solid #1e293b; }
th { color: #94a3b8; font-weight: 500; }
.card { background: #1e293b; border-radius: 10px; padding: 16px; margin: 8px 0; }
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(220px, 1fr)); gap: 12px; }
.toast { padding: 10px 14px; border-radius: 8px; margin-bottom: 8px; }
.toast.info, .toast.success { background: #14532d; }
.toast.error, .alert { background: #7f1d1d; }
.alert { padding: 10px 14px; border-radius: 8px; margin: 8px 0; }
.tabs a { margin-right: 12px; }
.tabs a.active { font-weight: bold; color: #facc15; }
.badge { font-size: 12px; padding: 2px 8px; border-radius: 10px; background: #334155; }
form.inline { display: inline; }
label { display: block; margin-top: 10px; color: #94a3b8; }
input, select, textarea { width: 100%; max-width: 480px; padding: 6px; }
input[type=checkbox] { width: auto; }
button { margin-top: 12px; padding: 6px 14px; }
img.thumb { width: 100%; max-height: 220px; object-fit: cover; border-radius: 8px; }
"""


def e(value) -> str:
    """HTML-escape anything, None renders empty"""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def fmt_date(value: Optional[datetime]) -> str:
    """March 1, 2025"""
    if not value:
        return ""
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def fmt_short(value: Optional[datetime]) -> str:
    """SAT 01 MAR 2025"""
    if not value:
        return ""
    return value.strftime("%a %d %b %Y").upper()


def fmt_time(value: Optional[datetime]) -> str:
    if not value:
        return ""
    return value.strftime("%H:%M")


def input_datetime(value: Optional[datetime]) -> str:
    """Value for <input type=datetime-local>"""
    return value.strftime("%Y-%m-%dT%H:%M") if value else ""


def input_date(value: Optional[date]) -> str:
    return value.isoformat() if value else ""


def image_or_placeholder(url: Optional[str]) -> str:
    return e(url or PLACEHOLDER_IMAGE)


def query(path: str, **params) -> str:
    """path?k=v with empty values dropped"""
    clean = {k: v for k, v in params.items() if v not in (None, "")}
    return f"{path}?{urlencode(clean)}" if clean else path


def options(choices: Iterable, selected=None, labels: Optional[dict] = None) -> str:
    labels = labels or {}
    out = []
    for choice in choices:
        sel = " selected" if str(choice) == str(selected) else ""
        out.append(f'<option value="{e(choice)}"{sel}>{e(labels.get(choice, choice))}</option>')
    return "".join(out)


def alert(message: Optional[str]) -> str:
    """Inline form error banner"""
    if not message:
        return ""
    return f'<div class="alert" role="alert">{e(message)}</div>'


def flashes_html(flashes: Iterable[Tuple[str, str]]) -> str:
    return "".join(f'<div class="toast {e(level)}">{e(text)}</div>' for level, text in flashes)


def layout(
    title: str,
    body: str,
    team_name: str = "The Board FC",
    flashes: Iterable[Tuple[str, str]] = (),
    admin: bool = False,
) -> str:
    """Full HTML document around a page body"""
    if admin:
        nav = (
            '<a href="/admin/dashboard">Dashboard</a>'
            '<a href="/">View site</a>'
            '<form class="inline" method="post" action="/sign-out"><button>Sign out</button></form>'
        )
    else:
        nav = (
            '<a href="/">Home</a>'
            '<a href="/fixtures">Fixtures</a>'
            '<a href="/team">Team</a>'
            '<a href="/news">News</a>'
            '<a href="/about">About</a>'
            '<a href="/contact">Contact</a>'
        )
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{e(title)} | {e(team_name)}</title>
<style>{STYLE}</style>
</head>
<body>
<header><strong>{e(team_name)}</strong> {nav}</header>
<main>
{flashes_html(flashes)}
{body}
</main>
<footer>&copy; {date.today().year} {e(team_name)}</footer>
</body>
</html>"""
