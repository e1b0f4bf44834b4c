"""
Public page bodies: home, team, player, fixtures, news, contact, about.
"""

from datetime import date
from typing import Dict, List, Optional

from core.domain.models import Player, PlayerStat, CareerTotals, Fixture, NewsArticle
from core.domain.constants import POSITIONS, ALL_FILTER, NEWS_CATEGORIES, FIXTURE_TABS
from adapters.web.templates.base import (
    e, fmt_date, fmt_short, fmt_time, image_or_placeholder, query, options, alert,
)

TAB_LABELS = {
    "upcoming": "Upcoming",
    "completed": "Results",
    "postponed_or_cancelled": "Postponed / Cancelled",
}


def _score(fixture: Fixture) -> str:
    if fixture.home_score is None or fixture.away_score is None:
        return fmt_time(fixture.match_date)
    return f"{fixture.home_score} - {fixture.away_score}"


def fixture_row(fixture: Fixture, team_name: str) -> str:
    home, away = (team_name, fixture.opponent) if fixture.is_home_game else (fixture.opponent, team_name)
    competition = fixture.competition.strip() or "Other Match"
    tickets = ""
    if fixture.ticket_link and fixture.status.lower() == "upcoming":
        tickets = (
            f' <a href="{e(fixture.ticket_link)}">Tickets</a>'
            f' <a href="/fixtures/{fixture.id}/tickets.png">QR</a>'
        )
    return (
        f'<div class="card"><span class="badge">{e(competition)}</span> '
        f'<span class="badge">{e(fixture.status.capitalize())}</span>'
        f'<h3>{e(home)} <small>{e(_score(fixture))}</small> {e(away)}</h3>'
        f'<div>{e(fmt_short(fixture.match_date))} &middot; {e(fixture.location)}</div>'
        f'{tickets}</div>'
    )


def player_card(player: Player) -> str:
    number = f"#{player.player_number} " if player.player_number is not None else ""
    return (
        f'<a class="card" href="/player/{player.id}">'
        f'<img class="thumb" src="{image_or_placeholder(player.profile_image_url)}" alt="{e(player.full_name)}">'
        f'<h3>{e(number)}{e(player.full_name)}</h3>'
        f'<div>{e(player.position)}</div></a>'
    )


def article_card(article: NewsArticle) -> str:
    when = fmt_date(article.publish_date or article.created_at)
    image = ""
    if article.featured_image_url:
        image = f'<img class="thumb" src="{e(article.featured_image_url)}" alt="">'
    return (
        f'<div class="card">{image}<span class="badge">{e(article.category or "News")}</span>'
        f'<h3><a href="/news/{article.id}">{e(article.title)}</a></h3>'
        f'<div>{e(when)}</div><p>{e(article.summary)}</p></div>'
    )


def home_body(team_name: str, fixtures: List[Fixture], leaders: List[Dict], articles: List[NewsArticle]) -> str:
    cards = []
    for card in leaders:
        player = card["player"]
        who = player.full_name if player else "Team"
        href = f"/player/{player.id}" if player else "/team"
        cards.append(
            f'<a class="card" href="{href}"><div class="badge">{e(card["label"])}</div>'
            f'<h2>{e(card["value"])}</h2><div>{e(who)}</div></a>'
        )
    fixtures_html = "".join(fixture_row(f, team_name) for f in fixtures) or "<p>No matches scheduled.</p>"
    news_html = "".join(article_card(a) for a in articles) or "<p>No news yet.</p>"
    return (
        f"<h1>{e(team_name)}</h1>"
        f"<h2>Matches</h2>{fixtures_html}<p><a href=\"/fixtures\">All fixtures</a></p>"
        f"<h2>Player Stats</h2><div class=\"grid\">{''.join(cards) or '<p>No statistics yet.</p>'}</div>"
        f"<h2>Latest News</h2><div class=\"grid\">{news_html}</div>"
    )


def team_body(groups: List[Dict], position: str, search: str) -> str:
    tabs = "".join(
        f'<a class="{"active" if p == position else ""}" href="{e(query("/team", position=p, q=search))}">{e(p)}</a>'
        for p in [ALL_FILTER] + POSITIONS
    )
    sections = []
    for group in groups:
        if not group["players"]:
            continue
        cards = "".join(player_card(p) for p in group["players"])
        sections.append(f'<h2>{e(group["position"])}s</h2><div class="grid">{cards}</div>')
    return (
        "<h1>The Squad</h1>"
        f'<form method="get" action="/team"><input type="hidden" name="position" value="{e(position)}">'
        f'<input name="q" value="{e(search)}" placeholder="Search by name or number"></form>'
        f'<div class="tabs">{tabs}</div>'
        f'{"".join(sections) or "<p>No players found.</p>"}'
    )


def player_body(
    player: Player,
    age: Optional[int],
    stats: List[PlayerStat],
    totals: CareerTotals,
    seasons: List[str],
    season: str,
) -> str:
    facts = [
        ("Position", player.position),
        ("Number", player.player_number),
        ("Age", age),
        ("Height", f"{player.height} cm" if player.height else None),
        ("Weight", f"{player.weight} kg" if player.weight else None),
        ("Joined", fmt_date(player.joined_date) if player.joined_date else None),
        ("Status", player.status.capitalize()),
    ]
    facts_html = "".join(f"<tr><th>{e(k)}</th><td>{e(v)}</td></tr>" for k, v in facts if v not in (None, ""))
    rows = "".join(
        f"<tr><td>{e(s.season)}</td><td>{s.matches_played}</td><td>{s.goals}</td><td>{s.assists}</td>"
        f"<td>{s.yellow_cards}</td><td>{s.red_cards}</td><td>{s.minutes_played}</td></tr>"
        for s in stats
    ) or '<tr><td colspan="7">No statistics recorded.</td></tr>'
    season_select = options(["all"] + seasons, season, labels={"all": "All seasons"})
    return (
        f'<div class="card"><img class="thumb" src="{image_or_placeholder(player.profile_image_url)}" alt="">'
        f"<h1>{e(player.full_name)}</h1><table>{facts_html}</table><p>{e(player.bio)}</p></div>"
        "<h2>Career</h2>"
        f"<div class=\"grid\"><div class=\"card\">Appearances<h2>{totals.matches_played}</h2></div>"
        f"<div class=\"card\">Goals<h2>{totals.goals}</h2></div>"
        f"<div class=\"card\">Assists<h2>{totals.assists}</h2></div>"
        f"<div class=\"card\">Minutes<h2>{totals.minutes_played}</h2></div></div>"
        f'<h2>By season</h2><form method="get"><select name="season" onchange="this.form.submit()">'
        f"{season_select}</select></form>"
        "<table><tr><th>Season</th><th>Apps</th><th>Goals</th><th>Assists</th>"
        f"<th>Yellow</th><th>Red</th><th>Minutes</th></tr>{rows}</table>"
        '<p><a href="/team">Back to squad</a></p>'
    )


def fixtures_body(
    team_name: str,
    groups: Dict[str, List[Fixture]],
    tab: str,
    competitions: List[str],
    competition: str,
    selected_day: Optional[date],
    day_fixtures: List[Fixture],
) -> str:
    tabs = "".join(
        f'<a class="{"active" if t == tab else ""}" '
        f'href="{e(query("/fixtures", tab=t, competition=competition))}">'
        f'{e(TAB_LABELS[t])} ({len(groups[t])})</a>'
        for t in FIXTURE_TABS
    )
    listing = "".join(fixture_row(f, team_name) for f in groups[tab]) or "<p>No matches in this category.</p>"
    day_html = ""
    if selected_day:
        found = "".join(fixture_row(f, team_name) for f in day_fixtures) or "<p>No matches on this date.</p>"
        day_html = f"<h2>Matches on {e(fmt_date(selected_day))}</h2>{found}"
    return (
        "<h1>Fixtures &amp; Results</h1>"
        '<form method="get" action="/fixtures">'
        f'<input type="hidden" name="tab" value="{e(tab)}">'
        f'<select name="competition" onchange="this.form.submit()">{options(competitions, competition)}</select>'
        f'<input type="date" name="date" value="{e(selected_day.isoformat() if selected_day else "")}" '
        'onchange="this.form.submit()"></form>'
        f'{day_html}<div class="tabs">{tabs}</div>{listing}'
    )


def news_list_body(articles: List[NewsArticle], category: str) -> str:
    tabs = "".join(
        f'<a class="{"active" if c == category else ""}" href="{e(query("/news", category=c))}">{e(c)}</a>'
        for c in [ALL_FILTER] + NEWS_CATEGORIES
    )
    cards = "".join(article_card(a) for a in articles) or "<p>No articles in this category.</p>"
    return f'<h1>News</h1><div class="tabs">{tabs}</div><div class="grid">{cards}</div>'


def article_body(article: NewsArticle) -> str:
    image = f'<img class="thumb" src="{e(article.featured_image_url)}" alt="">' if article.featured_image_url else ""
    paragraphs = "".join(f"<p>{e(p)}</p>" for p in (article.content or "").split("\n") if p.strip())
    return (
        f'<article>{image}<span class="badge">{e(article.category or "News")}</span>'
        f"<h1>{e(article.title)}</h1><div>{e(fmt_date(article.publish_date or article.created_at))}</div>"
        f"<p><em>{e(article.summary)}</em></p>{paragraphs}</article>"
        '<p><a href="/news">Back to news</a></p>'
    )


def contact_body(error: Optional[str] = None, values: Optional[Dict] = None) -> str:
    values = values or {}
    return (
        "<h1>Contact Us</h1>"
        f"{alert(error)}"
        '<form method="post" action="/contact">'
        f'<label>Name *<input name="name" value="{e(values.get("name"))}"></label>'
        f'<label>Email *<input name="email" type="email" value="{e(values.get("email"))}"></label>'
        f'<label>Subject<input name="subject" value="{e(values.get("subject"))}"></label>'
        f'<label>Message *<textarea name="message" rows="6">{e(values.get("message"))}</textarea></label>'
        "<button type=\"submit\">Send Message</button></form>"
    )


def about_body(team_name: str) -> str:
    return (
        f"<h1>About {e(team_name)}</h1>"
        f"<p>{e(team_name)} is a community football club built on teamwork, respect and a love of the game.</p>"
        "<p>Follow our fixtures, meet the squad and catch up on club news right here.</p>"
    )


def not_found_body() -> str:
    return '<h1>404</h1><p>The page you are looking for does not exist.</p><p><a href="/">Return home</a></p>'


def error_body(message: str) -> str:
    return f'<h1>Something went wrong</h1>{alert(message)}<p><a href="/">Return home</a></p>'
