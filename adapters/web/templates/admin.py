"""
Admin dashboard page bodies and CRUD forms.
"""

from typing import Dict, List, Optional

from core.domain.models import (
    Player, PlayerStat, CareerTotals, TeamStat, Fixture, NewsArticle, ContactMessage,
    PlayerStatus, FixtureStatus,
)
from core.domain.constants import ADMIN_TABS, POSITIONS, NEWS_CATEGORIES, COMPETITIONS
from core.services.stats_service import minutes_for
from adapters.web.templates.base import (
    e, fmt_date, fmt_short, input_datetime, options, alert,
)

TAB_LABELS = {
    "players": "Players",
    "player_stats": "Player Stats",
    "matches": "Matches",
    "news": "News",
    "team_stats": "Team Stats",
    "contacts": "Messages",
    "settings": "Settings",
}

# canceled is what the form stores; cancelled only arrives from older rows
FORM_FIXTURE_STATUSES = ["upcoming", "in progress", "completed", "postponed", "canceled"]


def _delete_button(action: str, label: str = "Delete") -> str:
    return (
        f'<form class="inline" method="post" action="{e(action)}" '
        f'onsubmit="return confirm(\'Are you sure?\')"><button>{e(label)}</button></form>'
    )


def _image_field(name: str, current: Optional[str]) -> str:
    preview = f'<div><img class="thumb" src="{e(current)}" alt=""></div>' if current else ""
    return (
        f'<input type="hidden" name="{name}" value="{e(current)}">{preview}'
        '<label>Image<input type="file" name="image" accept="image/*"></label>'
    )


def dashboard_body(tab: str, content: str, unread: int = 0) -> str:
    links = []
    for t in ADMIN_TABS:
        label = TAB_LABELS[t]
        if t == "contacts" and unread:
            label = f"{label} ({unread})"
        links.append(f'<a class="{"active" if t == tab else ""}" href="/admin/dashboard?tab={t}">{e(label)}</a>')
    return f'<h1>Dashboard</h1><div class="tabs">{"".join(links)}</div>{content}'


# === TABS ===

def players_tab(players: List[Player]) -> str:
    rows = "".join(
        f"<tr><td>{e(p.player_number)}</td><td>{e(p.full_name)}</td><td>{e(p.position)}</td>"
        f"<td>{e(p.email)}</td><td>{e(p.status)}</td>"
        f'<td><a href="/admin/players/{p.id}/edit">Edit</a> '
        f'<a href="/admin/players/{p.id}/stats">Stats</a> '
        f'{_delete_button(f"/admin/players/{p.id}/delete")}</td></tr>'
        for p in players
    ) or '<tr><td colspan="6">No players yet.</td></tr>'
    return (
        '<p><a href="/admin/players/new">Add player</a></p>'
        "<table><tr><th>#</th><th>Name</th><th>Position</th><th>Email</th><th>Status</th><th></th></tr>"
        f"{rows}</table>"
    )


def player_stats_tab(stats: List[PlayerStat], names: Dict, seasons: List[str], season: str) -> str:
    rows = "".join(
        f"<tr><td>{e(names.get(s.player_id, 'Unknown player'))}</td><td>{e(s.season)}</td>"
        f"<td>{s.matches_played}</td><td>{s.goals}</td><td>{s.assists}</td>"
        f"<td>{s.yellow_cards}</td><td>{s.red_cards}</td><td>{s.minutes_played}</td>"
        f'<td><a href="/admin/player-stats/{s.id}/edit">Edit</a> '
        f'{_delete_button(f"/admin/player-stats/{s.id}/delete")}</td></tr>'
        for s in stats
    ) or '<tr><td colspan="9">No statistics yet.</td></tr>'
    return (
        '<form method="get" action="/admin/dashboard"><input type="hidden" name="tab" value="player_stats">'
        f'<select name="season" onchange="this.form.submit()">'
        f'{options(["all"] + seasons, season, labels={"all": "All seasons"})}</select></form>'
        "<table><tr><th>Player</th><th>Season</th><th>Apps</th><th>Goals</th><th>Assists</th>"
        f"<th>Yellow</th><th>Red</th><th>Minutes</th><th></th></tr>{rows}</table>"
    )


def matches_tab(fixtures: List[Fixture]) -> str:
    rows = "".join(
        f"<tr><td>{e(fmt_short(f.match_date))}</td><td>{e(f.opponent)}</td>"
        f"<td>{'Home' if f.is_home_game else 'Away'}</td><td>{e(f.competition)}</td><td>{e(f.status)}</td>"
        f"<td>{e('' if f.home_score is None else f.home_score)}-{e('' if f.away_score is None else f.away_score)}</td>"
        f'<td><a href="/admin/fixtures/{f.id}/edit">Edit</a> '
        f'{_delete_button(f"/admin/fixtures/{f.id}/delete")}</td></tr>'
        for f in fixtures
    ) or '<tr><td colspan="7">No matches yet.</td></tr>'
    return (
        '<p><a href="/admin/fixtures/new">Add match</a></p>'
        "<table><tr><th>Date</th><th>Opponent</th><th>Venue</th><th>Competition</th><th>Status</th>"
        f"<th>Score</th><th></th></tr>{rows}</table>"
    )


def news_tab(articles: List[NewsArticle]) -> str:
    rows = "".join(
        f'<tr><td><a href="/admin/news/{a.id}">{e(a.title)}</a></td><td>{e(a.category)}</td>'
        f"<td>{'Published' if a.is_published else 'Draft'}</td>"
        f"<td>{e(fmt_date(a.publish_date or a.created_at))}</td>"
        f'<td><a href="/admin/news/{a.id}/edit">Edit</a> '
        f'{_delete_button(f"/admin/news/{a.id}/delete")}</td></tr>'
        for a in articles
    ) or '<tr><td colspan="5">No articles yet.</td></tr>'
    return (
        '<p><a href="/admin/news/new">Write article</a></p>'
        f"<table><tr><th>Title</th><th>Category</th><th>Status</th><th>Date</th><th></th></tr>{rows}</table>"
    )


def team_stats_tab(stats: List[TeamStat]) -> str:
    rows = "".join(
        f"<tr><td>{e(s.season)}</td><td>{s.matches_played}</td><td>{s.wins}</td><td>{s.draws}</td>"
        f"<td>{s.losses}</td><td>{s.goals_for}</td><td>{s.goals_against}</td>"
        f"<td>{s.goal_difference:+d}</td><td>{s.clean_sheets}</td>"
        f'<td><a href="/admin/team-stats/{s.id}/edit">Edit</a> '
        f'{_delete_button(f"/admin/team-stats/{s.id}/delete")}</td></tr>'
        for s in stats
    ) or '<tr><td colspan="10">No team statistics yet.</td></tr>'
    return (
        '<p><a href="/admin/team-stats/new">Add season</a></p>'
        "<table><tr><th>Season</th><th>P</th><th>W</th><th>D</th><th>L</th><th>GF</th><th>GA</th>"
        f"<th>GD</th><th>Clean sheets</th><th></th></tr>{rows}</table>"
    )


def contacts_tab(messages: List[ContactMessage]) -> str:
    rows = "".join(
        f"<tr><td>{'<strong>New</strong>' if m.status.value == 'unread' else ''}</td>"
        f'<td><a href="/admin/contacts/{m.id}">{e(m.subject or "(no subject)")}</a></td><td>{e(m.name)}</td>'
        f"<td>{e(m.email)}</td><td>{e(fmt_date(m.created_at))}</td>"
        f'<td>{_delete_button(f"/admin/contacts/{m.id}/delete")}</td></tr>'
        for m in messages
    ) or '<tr><td colspan="6">No messages.</td></tr>'
    return f"<table><tr><th></th><th>Subject</th><th>From</th><th>Email</th><th>Received</th><th></th></tr>{rows}</table>"


def settings_tab(summary: Dict) -> str:
    rows = "".join(f"<tr><th>{e(k)}</th><td>{e(v)}</td></tr>" for k, v in summary.items())
    return f'<table>{rows}</table><p><a href="/admin/upload">Upload an image</a></p>'


# === FORMS ===

def player_form(player: Optional[Player], error: Optional[str] = None, values: Optional[Dict] = None) -> str:
    v = values or (player.model_dump(mode="json") if player else {})
    action = f"/admin/players/{player.id}" if player else "/admin/players"
    statuses = [s.value for s in PlayerStatus]
    return (
        f"<h1>{'Edit' if player else 'Add'} Player</h1>{alert(error)}"
        f'<form method="post" action="{action}" enctype="multipart/form-data">'
        f'<label>First name *<input name="first_name" value="{e(v.get("first_name"))}"></label>'
        f'<label>Last name *<input name="last_name" value="{e(v.get("last_name"))}"></label>'
        f'<label>Email<input name="email" type="email" value="{e(v.get("email"))}"></label>'
        f'<label>Number<input name="player_number" type="number" min="0" max="99" value="{e(v.get("player_number"))}"></label>'
        f'<label>Position<select name="position"><option value=""></option>{options(POSITIONS, v.get("position"))}</select></label>'
        f'<label>Birth date<input name="birth_date" type="date" value="{e(v.get("birth_date"))}"></label>'
        f'<label>Height (cm)<input name="height" type="number" value="{e(v.get("height"))}"></label>'
        f'<label>Weight (kg)<input name="weight" type="number" value="{e(v.get("weight"))}"></label>'
        f'<label>Joined<input name="joined_date" type="date" value="{e(v.get("joined_date"))}"></label>'
        f'<label>Status<select name="status">{options(statuses, v.get("status") or "active")}</select></label>'
        f'<label>Bio<textarea name="bio" rows="4">{e(v.get("bio"))}</textarea></label>'
        f'{_image_field("profile_image_url", v.get("profile_image_url"))}'
        '<button type="submit">Save</button></form>'
        '<p><a href="/admin/dashboard?tab=players">Cancel</a></p>'
    )


def player_stats_page(player: Player, stats: List[PlayerStat], totals: CareerTotals) -> str:
    rows = "".join(
        f"<tr><td>{e(s.season)}</td><td>{s.matches_played}</td><td>{s.goals}</td><td>{s.assists}</td>"
        f"<td>{s.yellow_cards}</td><td>{s.red_cards}</td><td>{s.minutes_played}</td>"
        f'<td><a href="/admin/player-stats/{s.id}/edit">Edit</a> '
        f'{_delete_button(f"/admin/player-stats/{s.id}/delete")}</td></tr>'
        for s in stats
    ) or '<tr><td colspan="8">No statistics yet.</td></tr>'
    return (
        f"<h1>{e(player.full_name)} - Statistics</h1>"
        f'<p><a href="/admin/players/{player.id}/stats/new">Add season</a></p>'
        "<table><tr><th>Season</th><th>Apps</th><th>Goals</th><th>Assists</th><th>Yellow</th>"
        f"<th>Red</th><th>Minutes</th><th></th></tr>{rows}"
        f"<tr><th>Career ({totals.seasons} seasons)</th><th>{totals.matches_played}</th><th>{totals.goals}</th>"
        f"<th>{totals.assists}</th><th>{totals.yellow_cards}</th><th>{totals.red_cards}</th>"
        f"<th>{totals.minutes_played}</th><th></th></tr></table>"
        '<p><a href="/admin/dashboard?tab=players">Back to players</a></p>'
    )


def player_stat_form(
    player: Player,
    season_choices: List[str],
    stat: Optional[PlayerStat] = None,
    error: Optional[str] = None,
    values: Optional[Dict] = None,
    default_season: Optional[str] = None,
) -> str:
    v = values or (stat.model_dump(mode="json") if stat else {"season": default_season})
    action = f"/admin/player-stats/{stat.id}" if stat else f"/admin/players/{player.id}/stats"
    try:
        matches = int(v.get("matches_played") or 0)
    except (TypeError, ValueError):
        matches = 0
    counters = "".join(
        f'<label>{label}<input name="{name}" type="number" min="0" value="{e(v.get(name, 0))}"></label>'
        for name, label in [
            ("matches_played", "Matches played"),
            ("goals", "Goals"),
            ("assists", "Assists"),
            ("yellow_cards", "Yellow cards"),
            ("red_cards", "Red cards"),
        ]
    )
    return (
        f"<h1>{'Edit' if stat else 'Add'} Statistics - {e(player.full_name)}</h1>{alert(error)}"
        f'<form method="post" action="{action}">'
        f'<label>Season<select name="season">{options(season_choices, v.get("season"))}</select></label>'
        f"{counters}<p>Minutes played: {minutes_for(matches)} (90 per match)</p>"
        '<button type="submit">Save</button></form>'
        f'<p><a href="/admin/players/{player.id}/stats">Cancel</a></p>'
    )


def team_stat_form(stat: Optional[TeamStat], error: Optional[str] = None, values: Optional[Dict] = None,
                   default_season: Optional[str] = None) -> str:
    v = values or (stat.model_dump(mode="json") if stat else {"season": default_season})
    action = f"/admin/team-stats/{stat.id}" if stat else "/admin/team-stats"
    counters = "".join(
        f'<label>{label}<input name="{name}" type="number" min="0" value="{e(v.get(name, 0))}"></label>'
        for name, label in [
            ("matches_played", "Matches played"),
            ("wins", "Wins"),
            ("draws", "Draws"),
            ("losses", "Losses"),
            ("goals_for", "Goals for"),
            ("goals_against", "Goals against"),
            ("clean_sheets", "Clean sheets"),
        ]
    )
    return (
        f"<h1>{'Edit' if stat else 'Add'} Team Statistics</h1>{alert(error)}"
        f'<form method="post" action="{action}">'
        f'<label>Season (YYYY-YYYY)<input name="season" value="{e(v.get("season"))}"></label>{counters}'
        '<button type="submit">Save</button></form>'
        '<p><a href="/admin/dashboard?tab=team_stats">Cancel</a></p>'
    )


def fixture_form(fixture: Optional[Fixture], error: Optional[str] = None, values: Optional[Dict] = None) -> str:
    if values is not None:
        v = values
    elif fixture:
        v = fixture.model_dump(mode="json")
        v["match_date"] = input_datetime(fixture.match_date)
    else:
        v = {}
    action = f"/admin/fixtures/{fixture.id}" if fixture else "/admin/fixtures"
    home_checked = " checked" if v.get("is_home_game", True) not in (False, "false", None) else ""
    return (
        f"<h1>{'Edit' if fixture else 'Add'} Match</h1>{alert(error)}"
        f'<form method="post" action="{action}" enctype="multipart/form-data">'
        f'<label>Date &amp; time *<input name="match_date" type="datetime-local" value="{e(v.get("match_date"))}"></label>'
        f'<label>Opponent *<input name="opponent" value="{e(v.get("opponent"))}"></label>'
        f'<label>Competition<select name="competition"><option value=""></option>'
        f'{options(COMPETITIONS, v.get("competition"))}</select></label>'
        f'<label>Location<input name="location" value="{e(v.get("location"))}"></label>'
        f'<label><input type="checkbox" name="is_home_game"{home_checked}> Home game</label>'
        f'<label>Status<select name="status">{options(FORM_FIXTURE_STATUSES, v.get("status") or FixtureStatus.UPCOMING.value)}</select></label>'
        f'<label>Home score<input name="home_score" type="number" min="0" value="{e(v.get("home_score"))}"></label>'
        f'<label>Away score<input name="away_score" type="number" min="0" value="{e(v.get("away_score"))}"></label>'
        f'<label>Ticket link<input name="ticket_link" value="{e(v.get("ticket_link"))}"></label>'
        f'<label>Notes<textarea name="notes" rows="3">{e(v.get("notes"))}</textarea></label>'
        f'{_image_field("opponent_logo_url", v.get("opponent_logo_url"))}'
        '<button type="submit">Save</button></form>'
        '<p><a href="/admin/dashboard?tab=matches">Cancel</a></p>'
    )


def news_form(article: Optional[NewsArticle], error: Optional[str] = None, values: Optional[Dict] = None) -> str:
    if values is not None:
        v = values
    elif article:
        v = article.model_dump(mode="json")
        v["category"] = article.category
        v["publish_date"] = input_datetime(article.publish_date)
    else:
        v = {}
    action = f"/admin/news/{article.id}" if article else "/admin/news"
    published = " checked" if v.get("is_published") not in (False, "false", None, "") else ""
    return (
        f"<h1>{'Edit' if article else 'Write'} Article</h1>{alert(error)}"
        f'<form method="post" action="{action}" enctype="multipart/form-data">'
        f'<label>Title *<input name="title" value="{e(v.get("title"))}"></label>'
        f'<label>Category<select name="category"><option value=""></option>'
        f'{options(NEWS_CATEGORIES, v.get("category"))}</select></label>'
        f'<label>Summary<textarea name="summary" rows="2">{e(v.get("summary"))}</textarea></label>'
        f'<label>Content *<textarea name="content" rows="12">{e(v.get("content"))}</textarea></label>'
        f'<label><input type="checkbox" name="is_published"{published}> Published</label>'
        f'<label>Publish date<input name="publish_date" type="datetime-local" value="{e(v.get("publish_date"))}"></label>'
        f'{_image_field("featured_image_url", v.get("featured_image_url"))}'
        '<button type="submit">Save</button></form>'
        '<p><a href="/admin/dashboard?tab=news">Cancel</a></p>'
    )


def news_preview(article: NewsArticle) -> str:
    image = f'<img class="thumb" src="{e(article.featured_image_url)}" alt="">' if article.featured_image_url else ""
    return (
        f"<h1>{e(article.title)}</h1>"
        f"<p><span class=\"badge\">{'Published' if article.is_published else 'Draft'}</span> "
        f"{e(article.category)} {e(fmt_date(article.publish_date or article.created_at))}</p>{image}"
        f"<p><em>{e(article.summary)}</em></p><div>{e(article.content)}</div>"
        f'<p><a href="/admin/news/{article.id}/edit">Edit</a> '
        '<a href="/admin/dashboard?tab=news">Back</a></p>'
    )


def contact_detail(message: ContactMessage) -> str:
    return (
        f"<h1>{e(message.subject)}</h1>"
        f'<p>From {e(message.name)} &lt;<a href="mailto:{e(message.email)}">{e(message.email)}</a>&gt;'
        f" on {e(fmt_date(message.created_at))}</p>"
        f'<div class="card">{e(message.message)}</div>'
        f'{_delete_button(f"/admin/contacts/{message.id}/delete")}'
        '<p><a href="/admin/dashboard?tab=contacts">Back to messages</a></p>'
    )


def upload_form(error: Optional[str] = None, url: Optional[str] = None) -> str:
    result = f'<div class="card">Uploaded: <a href="{e(url)}">{e(url)}</a></div>' if url else ""
    folders = ["general", "players", "news", "fixtures"]
    return (
        f"<h1>Upload image</h1>{alert(error)}{result}"
        '<form method="post" action="/admin/upload" enctype="multipart/form-data">'
        f'<label>Folder<select name="folder">{options(folders, "general")}</select></label>'
        '<label>File<input type="file" name="image" accept="image/*"></label>'
        '<button type="submit">Upload</button></form>'
    )
