"""
Admin dashboard and CRUD screens.
Every route here is wrapped in admin_required.
"""

import functools
import logging
from typing import Optional, Tuple

from aiohttp import web

from core.domain.constants import ADMIN_TABS, DEFAULT_ADMIN_TAB, SEASON_ALL
from core.services import ContactService
from core.services.stats_service import current_season
from adapters.web.context import services, get_session, flash, parse_uuid, render
from adapters.web.forms import (
    parse_player, player_update_from, parse_fixture, parse_player_stat, parse_team_stat, parse_news,
    uploaded_image,
)
from adapters.web.templates import admin as pages
from locales import t

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


def admin_required(handler):
    """
    Anonymous visitors go to sign-in, signed-in non-admins go home.
    Admin sessions are re-checked against the backend token and profile role.
    """

    @functools.wraps(handler)
    async def wrapper(request: web.Request):
        session = get_session(request)
        if not session or not session.signed_in:
            flash(request, t("sign_in_required"), "error")
            raise web.HTTPFound("/sign-in")
        if not session.is_admin:
            logger.warning(f"[ADMIN] Non-admin {session.user_id} tried {request.path}")
            flash(request, t("not_authorized"), "error")
            raise web.HTTPFound("/")
        if not await services(request).auth.verify_admin(session.user_id, session.access_token):
            logger.warning(f"[ADMIN] Access revoked for {session.user_id} on {request.path}")
            session.user_id = session.email = session.access_token = None
            session.is_admin = False
            flash(request, t("access_revoked"), "error")
            raise web.HTTPFound("/sign-in")
        return await handler(request)

    return wrapper


def _page(request: web.Request, title: str, body: str, status: int = 200) -> web.Response:
    return render(request, title, body, status=status, admin=True)


def _user_id(request: web.Request) -> Optional[str]:
    session = get_session(request)
    return session.user_id if session else None


async def _image_url(request: web.Request, form, folder: str, current_url: Optional[str]
                     ) -> Tuple[Optional[str], Optional[str]]:
    """(url to store, error) after handling the optional image input"""
    upload = uploaded_image(form)
    if not upload:
        return current_url, None
    filename, data = upload
    ok, message, url = await services(request).media.upload_image(folder, filename, data, current_url=current_url)
    return (url, None) if ok else (current_url, message)


# === DASHBOARD ===

@routes.get("/admin")
@admin_required
async def admin_root(request: web.Request) -> web.Response:
    raise web.HTTPFound("/admin/dashboard")


@routes.get("/admin/dashboard")
@admin_required
async def dashboard(request: web.Request) -> web.Response:
    site = services(request)
    tab = request.query.get("tab", DEFAULT_ADMIN_TAB)
    if tab not in ADMIN_TABS:
        tab = DEFAULT_ADMIN_TAB

    messages = await site.contacts.list_messages()
    unread = ContactService.unread_count(messages)

    if tab == "players":
        content = pages.players_tab(await site.players.list_players())
    elif tab == "player_stats":
        season = request.query.get("season", SEASON_ALL)
        stats = await site.stats.list_player_stats()
        if season != SEASON_ALL:
            stats = [s for s in stats if s.season == season]
        names = {p.id: p.full_name for p in await site.players.list_players()}
        content = pages.player_stats_tab(stats, names, await site.stats.get_seasons(), season)
    elif tab == "matches":
        content = pages.matches_tab(await site.fixtures.list_fixtures())
    elif tab == "news":
        content = pages.news_tab(await site.news.list_articles())
    elif tab == "team_stats":
        content = pages.team_stats_tab(await site.stats.list_team_stats())
    elif tab == "contacts":
        content = pages.contacts_tab(messages)
    else:
        content = pages.settings_tab(site.settings_summary)

    return _page(request, "Dashboard", pages.dashboard_body(tab, content, unread))


# === PLAYERS ===

@routes.get("/admin/players/new")
@admin_required
async def player_new(request: web.Request) -> web.Response:
    return _page(request, "Add Player", pages.player_form(None))


@routes.post("/admin/players")
@admin_required
async def player_create(request: web.Request) -> web.Response:
    site = services(request)
    form = await request.post()
    player_data, error, values = parse_player(form, created_by=_user_id(request))
    if error:
        return _page(request, "Add Player", pages.player_form(None, error, values), status=400)

    url, error = await _image_url(request, form, "players", player_data.profile_image_url)
    if error:
        return _page(request, "Add Player", pages.player_form(None, error, values), status=400)
    player = await site.players.create_player(player_data.model_copy(update={"profile_image_url": url}))
    flash(request, t("player_created", name=player.full_name), "success")
    raise web.HTTPFound("/admin/dashboard?tab=players")


@routes.get("/admin/players/{id}/edit")
@admin_required
async def player_edit(request: web.Request) -> web.Response:
    player = await services(request).players.get_player(parse_uuid(request.match_info["id"]))
    if not player:
        raise web.HTTPNotFound()
    return _page(request, "Edit Player", pages.player_form(player))


@routes.post("/admin/players/{id}")
@admin_required
async def player_update(request: web.Request) -> web.Response:
    site = services(request)
    player_id = parse_uuid(request.match_info["id"])
    player = await site.players.get_player(player_id)
    if not player:
        raise web.HTTPNotFound()

    form = await request.post()
    player_data, error, values = parse_player(form)
    if error:
        return _page(request, "Edit Player", pages.player_form(player, error, values), status=400)

    url, error = await _image_url(request, form, "players", player_data.profile_image_url)
    if error:
        return _page(request, "Edit Player", pages.player_form(player, error, values), status=400)
    update = player_update_from(player_data.model_copy(update={"profile_image_url": url}))
    updated = await site.players.update_player(player_id, update)
    flash(request, t("player_updated", name=(updated or player).full_name), "success")
    raise web.HTTPFound("/admin/dashboard?tab=players")


@routes.post("/admin/players/{id}/delete")
@admin_required
async def player_delete(request: web.Request) -> web.Response:
    await services(request).players.delete_player(parse_uuid(request.match_info["id"]))
    flash(request, t("player_deleted"), "success")
    raise web.HTTPFound("/admin/dashboard?tab=players")


# === PLAYER STATS ===

@routes.get("/admin/players/{id}/stats")
@admin_required
async def player_stats(request: web.Request) -> web.Response:
    site = services(request)
    player_id = parse_uuid(request.match_info["id"])
    player = await site.players.get_player(player_id)
    if not player:
        raise web.HTTPNotFound()
    rows = await site.stats.get_player_stats(player_id)
    body = pages.player_stats_page(player, rows, site.stats.career_totals(rows))
    return _page(request, f"{player.full_name} stats", body)


@routes.get("/admin/players/{id}/stats/new")
@admin_required
async def player_stat_new(request: web.Request) -> web.Response:
    site = services(request)
    player_id = parse_uuid(request.match_info["id"])
    player = await site.players.get_player(player_id)
    if not player:
        raise web.HTTPNotFound()
    choices = await site.stats.season_options(player_id)
    body = pages.player_stat_form(player, choices, default_season=current_season())
    return _page(request, "Add Statistics", body)


@routes.post("/admin/players/{id}/stats")
@admin_required
async def player_stat_create(request: web.Request) -> web.Response:
    site = services(request)
    player_id = parse_uuid(request.match_info["id"])
    player = await site.players.get_player(player_id)
    if not player:
        raise web.HTTPNotFound()

    form = await request.post()
    stat_data, error, values = parse_player_stat(form, player_id, created_by=_user_id(request))
    if not error:
        ok, message, _stat = await site.stats.create_player_stat(stat_data)
        if ok:
            flash(request, message, "success")
            raise web.HTTPFound(f"/admin/players/{player_id}/stats")
        error = message

    choices = await site.stats.season_options(player_id)
    body = pages.player_stat_form(player, choices, error=error, values=values)
    return _page(request, "Add Statistics", body, status=400)


@routes.get("/admin/player-stats/{id}/edit")
@admin_required
async def player_stat_edit(request: web.Request) -> web.Response:
    site = services(request)
    stat = await site.stats.get_player_stat(parse_uuid(request.match_info["id"]))
    if not stat:
        raise web.HTTPNotFound()
    player = await site.players.get_player(stat.player_id)
    if not player:
        raise web.HTTPNotFound()
    choices = await site.stats.season_options(stat.player_id, editing=stat)
    return _page(request, "Edit Statistics", pages.player_stat_form(player, choices, stat=stat))


@routes.post("/admin/player-stats/{id}")
@admin_required
async def player_stat_update(request: web.Request) -> web.Response:
    site = services(request)
    stat = await site.stats.get_player_stat(parse_uuid(request.match_info["id"]))
    if not stat:
        raise web.HTTPNotFound()

    form = await request.post()
    stat_data, error, values = parse_player_stat(form, stat.player_id)
    if error:
        player = await site.players.get_player(stat.player_id)
        choices = await site.stats.season_options(stat.player_id, editing=stat)
        body = pages.player_stat_form(player, choices, stat=stat, error=error, values=values)
        return _page(request, "Edit Statistics", body, status=400)

    await site.stats.update_player_stat(stat.id, stat_data)
    flash(request, t("stats_updated"), "success")
    raise web.HTTPFound(f"/admin/players/{stat.player_id}/stats")


@routes.post("/admin/player-stats/{id}/delete")
@admin_required
async def player_stat_delete(request: web.Request) -> web.Response:
    site = services(request)
    stat = await site.stats.get_player_stat(parse_uuid(request.match_info["id"]))
    if not stat:
        raise web.HTTPNotFound()
    await site.stats.delete_player_stat(stat.id)
    flash(request, t("stats_deleted"), "success")
    raise web.HTTPFound(f"/admin/players/{stat.player_id}/stats")


# === TEAM STATS ===

@routes.get("/admin/team-stats/new")
@admin_required
async def team_stat_new(request: web.Request) -> web.Response:
    return _page(request, "Add Team Statistics", pages.team_stat_form(None, default_season=current_season()))


@routes.post("/admin/team-stats")
@admin_required
async def team_stat_create(request: web.Request) -> web.Response:
    form = await request.post()
    stat_data, error, values = parse_team_stat(form, created_by=_user_id(request))
    if error:
        return _page(request, "Add Team Statistics", pages.team_stat_form(None, error, values), status=400)
    stat = await services(request).stats.create_team_stat(stat_data)
    flash(request, t("team_stats_saved", season=stat.season), "success")
    raise web.HTTPFound("/admin/dashboard?tab=team_stats")


@routes.get("/admin/team-stats/{id}/edit")
@admin_required
async def team_stat_edit(request: web.Request) -> web.Response:
    stat = await services(request).stats.get_team_stat(parse_uuid(request.match_info["id"]))
    if not stat:
        raise web.HTTPNotFound()
    return _page(request, "Edit Team Statistics", pages.team_stat_form(stat))


@routes.post("/admin/team-stats/{id}")
@admin_required
async def team_stat_update(request: web.Request) -> web.Response:
    site = services(request)
    stat_id = parse_uuid(request.match_info["id"])
    stat = await site.stats.get_team_stat(stat_id)
    if not stat:
        raise web.HTTPNotFound()
    form = await request.post()
    stat_data, error, values = parse_team_stat(form)
    if error:
        return _page(request, "Edit Team Statistics", pages.team_stat_form(stat, error, values), status=400)
    await site.stats.update_team_stat(stat_id, stat_data)
    flash(request, t("team_stats_saved", season=stat_data.season), "success")
    raise web.HTTPFound("/admin/dashboard?tab=team_stats")


@routes.post("/admin/team-stats/{id}/delete")
@admin_required
async def team_stat_delete(request: web.Request) -> web.Response:
    await services(request).stats.delete_team_stat(parse_uuid(request.match_info["id"]))
    flash(request, t("team_stats_deleted"), "success")
    raise web.HTTPFound("/admin/dashboard?tab=team_stats")


# === FIXTURES ===

def _flash_notifications(request: web.Request, result, error: Optional[str]) -> None:
    if error:
        flash(request, error, "error")
    elif result is not None:
        if result.total:
            flash(request, t("notifications_sent", sent=result.sent, total=result.total), "info")
        else:
            flash(request, t("notifications_none"), "info")


@routes.get("/admin/fixtures/new")
@admin_required
async def fixture_new(request: web.Request) -> web.Response:
    return _page(request, "Add Match", pages.fixture_form(None))


@routes.post("/admin/fixtures")
@admin_required
async def fixture_create(request: web.Request) -> web.Response:
    site = services(request)
    form = await request.post()
    fixture_data, error, values = parse_fixture(form, created_by=_user_id(request))
    if error:
        return _page(request, "Add Match", pages.fixture_form(None, error, values), status=400)

    url, error = await _image_url(request, form, "fixtures", fixture_data.opponent_logo_url)
    if error:
        return _page(request, "Add Match", pages.fixture_form(None, error, values), status=400)
    fixture, result, notify_error = await site.fixtures.create_fixture(
        fixture_data.model_copy(update={"opponent_logo_url": url})
    )
    flash(request, t("fixture_created", opponent=fixture.opponent), "success")
    _flash_notifications(request, result, notify_error)
    raise web.HTTPFound("/admin/dashboard?tab=matches")


@routes.get("/admin/fixtures/{id}/edit")
@admin_required
async def fixture_edit(request: web.Request) -> web.Response:
    fixture = await services(request).fixtures.get_fixture(parse_uuid(request.match_info["id"]))
    if not fixture:
        raise web.HTTPNotFound()
    return _page(request, "Edit Match", pages.fixture_form(fixture))


@routes.post("/admin/fixtures/{id}")
@admin_required
async def fixture_update(request: web.Request) -> web.Response:
    site = services(request)
    fixture_id = parse_uuid(request.match_info["id"])
    existing = await site.fixtures.get_fixture(fixture_id)
    if not existing:
        raise web.HTTPNotFound()

    form = await request.post()
    fixture_data, error, values = parse_fixture(form)
    if error:
        return _page(request, "Edit Match", pages.fixture_form(existing, error, values), status=400)

    url, error = await _image_url(request, form, "fixtures", fixture_data.opponent_logo_url)
    if error:
        return _page(request, "Edit Match", pages.fixture_form(existing, error, values), status=400)
    fixture, result, notify_error = await site.fixtures.update_fixture(
        fixture_id, fixture_data.model_copy(update={"opponent_logo_url": url})
    )
    if not fixture:
        raise web.HTTPNotFound()
    flash(request, t("fixture_updated", opponent=fixture.opponent), "success")
    _flash_notifications(request, result, notify_error)
    raise web.HTTPFound("/admin/dashboard?tab=matches")


@routes.post("/admin/fixtures/{id}/delete")
@admin_required
async def fixture_delete(request: web.Request) -> web.Response:
    await services(request).fixtures.delete_fixture(parse_uuid(request.match_info["id"]))
    flash(request, t("fixture_deleted"), "success")
    raise web.HTTPFound("/admin/dashboard?tab=matches")


# === NEWS ===

@routes.get("/admin/news/new")
@admin_required
async def news_new(request: web.Request) -> web.Response:
    return _page(request, "Write Article", pages.news_form(None))


@routes.post("/admin/news")
@admin_required
async def news_create(request: web.Request) -> web.Response:
    site = services(request)
    form = await request.post()
    article_data, error, values = parse_news(form, created_by=_user_id(request))
    if error:
        return _page(request, "Write Article", pages.news_form(None, error, values), status=400)

    url, error = await _image_url(request, form, "news", article_data.featured_image_url)
    if error:
        return _page(request, "Write Article", pages.news_form(None, error, values), status=400)
    await site.news.create_article(article_data.model_copy(update={"featured_image_url": url}))
    flash(request, t("article_created"), "success")
    raise web.HTTPFound("/admin/dashboard?tab=news")


@routes.get("/admin/news/{id}")
@admin_required
async def news_detail(request: web.Request) -> web.Response:
    article = await services(request).news.get_article(parse_uuid(request.match_info["id"]))
    if not article:
        raise web.HTTPNotFound()
    return _page(request, article.title, pages.news_preview(article))


@routes.get("/admin/news/{id}/edit")
@admin_required
async def news_edit(request: web.Request) -> web.Response:
    article = await services(request).news.get_article(parse_uuid(request.match_info["id"]))
    if not article:
        raise web.HTTPNotFound()
    return _page(request, "Edit Article", pages.news_form(article))


@routes.post("/admin/news/{id}")
@admin_required
async def news_update(request: web.Request) -> web.Response:
    site = services(request)
    article_id = parse_uuid(request.match_info["id"])
    article = await site.news.get_article(article_id)
    if not article:
        raise web.HTTPNotFound()

    form = await request.post()
    article_data, error, values = parse_news(form)
    if error:
        return _page(request, "Edit Article", pages.news_form(article, error, values), status=400)

    url, error = await _image_url(request, form, "news", article_data.featured_image_url)
    if error:
        return _page(request, "Edit Article", pages.news_form(article, error, values), status=400)
    await site.news.update_article(article_id, article_data.model_copy(update={"featured_image_url": url}))
    flash(request, t("article_updated"), "success")
    raise web.HTTPFound("/admin/dashboard?tab=news")


@routes.post("/admin/news/{id}/delete")
@admin_required
async def news_delete(request: web.Request) -> web.Response:
    await services(request).news.delete_article(parse_uuid(request.match_info["id"]))
    flash(request, t("article_deleted"), "success")
    raise web.HTTPFound("/admin/dashboard?tab=news")


# === CONTACTS ===

@routes.get("/admin/contacts/{id}")
@admin_required
async def contact_detail(request: web.Request) -> web.Response:
    message = await services(request).contacts.open_message(parse_uuid(request.match_info["id"]))
    if not message:
        raise web.HTTPNotFound()
    return _page(request, message.subject or "Message", pages.contact_detail(message))


@routes.post("/admin/contacts/{id}/delete")
@admin_required
async def contact_delete(request: web.Request) -> web.Response:
    await services(request).contacts.delete_message(parse_uuid(request.match_info["id"]))
    flash(request, t("contact_deleted"), "success")
    raise web.HTTPFound("/admin/dashboard?tab=contacts")


# === UPLOADS ===

@routes.get("/admin/upload")
@admin_required
async def upload_form(request: web.Request) -> web.Response:
    return _page(request, "Upload", pages.upload_form())


@routes.post("/admin/upload")
@admin_required
async def upload(request: web.Request) -> web.Response:
    """Multipart image upload; answers JSON when asked for it"""
    site = services(request)
    form = await request.post()
    wants_json = "application/json" in request.headers.get("Accept", "")
    upload_file = uploaded_image(form)
    if not upload_file:
        ok, message, url = False, "No file selected", None
    else:
        filename, data = upload_file
        folder = str(form.get("folder") or "general")
        current_url = form.get("current_url")
        ok, message, url = await site.media.upload_image(
            folder, filename, data, current_url=current_url if isinstance(current_url, str) else None
        )

    if wants_json:
        status = 200 if ok else 400
        return web.json_response({"ok": ok, "message": message, "url": url}, status=status)
    if not ok:
        return _page(request, "Upload", pages.upload_form(error=message), status=400)
    flash(request, message, "success")
    return _page(request, "Upload", pages.upload_form(url=url))
