"""
Public pages.
"""

import logging
from datetime import date

from aiohttp import web

from core.domain.constants import ALL_FILTER, FIXTURE_TABS, DEFAULT_TAB, NEWS_CATEGORIES, SEASON_ALL
from core.services import PlayerService, FixtureService
from core.utils.qr_generator import ticket_qr_png, ticket_label
from adapters.web.context import services, flash, parse_uuid, render
from adapters.web.templates import public as pages

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


@routes.get("/")
async def home(request: web.Request) -> web.Response:
    site = services(request)
    players = await site.players.list_players()
    fixtures = await site.fixtures.list_fixtures()
    leaders = await site.stats.leaders(players)
    articles = await site.news.featured()
    body = pages.home_body(site.team_name, FixtureService.home_preview(fixtures), leaders, articles)
    return render(request, "Home", body)


@routes.get("/team")
async def team(request: web.Request) -> web.Response:
    site = services(request)
    position = request.query.get("position", ALL_FILTER)
    search = request.query.get("q", "")
    players = PlayerService.filter_players(await site.players.list_players(), position, search)
    groups = PlayerService.group_by_position(players)
    return render(request, "Team", pages.team_body(groups, position, search))


@routes.get("/player/{id}")
async def player_profile(request: web.Request) -> web.Response:
    site = services(request)
    player_id = parse_uuid(request.match_info["id"])
    player = await site.players.get_player(player_id)
    if not player:
        raise web.HTTPNotFound()

    all_rows = await site.stats.get_player_stats(player_id)
    seasons = sorted({row.season for row in all_rows}, reverse=True)
    season = request.query.get("season", SEASON_ALL)
    if season not in seasons:
        season = SEASON_ALL
    rows = all_rows if season == SEASON_ALL else await site.stats.get_player_stats(player_id, season)
    body = pages.player_body(
        player,
        PlayerService.age(player),
        rows,
        site.stats.career_totals(all_rows),
        seasons,
        season,
    )
    return render(request, player.full_name, body)


@routes.get("/fixtures")
async def fixtures(request: web.Request) -> web.Response:
    site = services(request)
    all_fixtures = await site.fixtures.list_fixtures()
    competition = request.query.get("competition", ALL_FILTER)
    tab = request.query.get("tab", DEFAULT_TAB)
    if tab not in FIXTURE_TABS:
        tab = DEFAULT_TAB

    selected_day = None
    if request.query.get("date"):
        try:
            selected_day = date.fromisoformat(request.query["date"])
        except ValueError:
            selected_day = None

    body = pages.fixtures_body(
        site.team_name,
        FixtureService.group_by_tab(all_fixtures, competition),
        tab,
        FixtureService.competitions(all_fixtures),
        competition,
        selected_day,
        FixtureService.on_date(all_fixtures, selected_day) if selected_day else [],
    )
    return render(request, "Fixtures", body)


@routes.get("/fixtures/{id}/tickets.png")
async def ticket_qr(request: web.Request) -> web.Response:
    site = services(request)
    fixture = await site.fixtures.get_fixture(parse_uuid(request.match_info["id"]))
    if not fixture or not fixture.ticket_link or fixture.status.lower() != "upcoming":
        raise web.HTTPNotFound()
    png = ticket_qr_png(fixture.ticket_link, ticket_label(fixture.opponent))
    return web.Response(body=png, content_type="image/png")


@routes.get("/news")
async def news_list(request: web.Request) -> web.Response:
    site = services(request)
    category = request.query.get("category", ALL_FILTER)
    if category != ALL_FILTER and category not in NEWS_CATEGORIES:
        category = ALL_FILTER
    articles = await site.news.list_published(category)
    return render(request, "News", pages.news_list_body(articles, category))


@routes.get("/news/{id}")
async def news_article(request: web.Request) -> web.Response:
    site = services(request)
    article = await site.news.get_published(parse_uuid(request.match_info["id"]))
    if not article:
        raise web.HTTPNotFound()
    return render(request, article.title, pages.article_body(article))


@routes.get("/contact")
async def contact_form(request: web.Request) -> web.Response:
    return render(request, "Contact", pages.contact_body())


@routes.post("/contact")
async def contact_submit(request: web.Request) -> web.Response:
    site = services(request)
    form = await request.post()
    values = {k: form.get(k, "") for k in ("name", "email", "subject", "message")}
    ok, message = await site.contacts.submit(
        values["name"], values["email"], values["message"], subject=values["subject"]
    )
    if not ok:
        return render(request, "Contact", pages.contact_body(error=message, values=values), status=400)
    flash(request, message, "success")
    raise web.HTTPFound("/contact")


@routes.get("/about")
async def about(request: web.Request) -> web.Response:
    return render(request, "About", pages.about_body(services(request).team_name))
