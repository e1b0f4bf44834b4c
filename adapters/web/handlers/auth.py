"""
Sign in / sign up / sign out.
"""

import logging

from aiohttp import web

from core.domain.constants import POSITIONS
from adapters.web.context import services, get_session, ensure_session, flash, is_admin, render
from adapters.web.templates.base import e, alert, options, query
from locales import t

logger = logging.getLogger(__name__)

routes = web.RouteTableDef()


def _sign_in_body(error: str = None, email: str = "", message: str = None) -> str:
    notice = f'<div class="card">{e(message)}</div>' if message else ""
    return (
        f"<h1>Admin Sign In</h1>{notice}{alert(error)}"
        '<form method="post" action="/sign-in">'
        f'<label>Email<input name="email" type="email" value="{e(email)}"></label>'
        '<label>Password<input name="password" type="password"></label>'
        '<button type="submit">Sign In</button></form>'
    )


def _sign_up_body(error: str = None, values: dict = None) -> str:
    values = values or {}
    return (
        f"<h1>Create Account</h1>{alert(error)}"
        '<form method="post" action="/sign-up">'
        f'<label>Email<input name="email" type="email" value="{e(values.get("email"))}"></label>'
        '<label>Password<input name="password" type="password"></label>'
        '<label>Confirm password<input name="confirm_password" type="password"></label>'
        f'<label>Player number<input name="player_number" value="{e(values.get("player_number"))}"></label>'
        f'<label>Position<select name="position"><option value=""></option>'
        f'{options(POSITIONS, values.get("position"))}</select></label>'
        '<button type="submit">Sign Up</button></form>'
        '<p><a href="/sign-in">Already have an account? Sign in</a></p>'
    )


@routes.get("/sign-in")
async def sign_in_form(request: web.Request) -> web.Response:
    if is_admin(request):
        raise web.HTTPFound("/admin/dashboard")
    return render(request, "Sign In", _sign_in_body(message=request.query.get("message")))


@routes.post("/sign-in")
async def sign_in(request: web.Request) -> web.Response:
    site = services(request)
    form = await request.post()
    email = form.get("email", "")
    ok, message, user = await site.auth.sign_in(email, form.get("password", ""))
    if not ok:
        return render(request, "Sign In", _sign_in_body(error=message, email=email), status=401)

    # Fresh token on every sign-in
    old = get_session(request)
    if old:
        site.sessions.destroy(old.token)
        request["session"] = None
    session = ensure_session(request)
    session.user_id = user.id
    session.email = user.email
    session.access_token = user.access_token
    session.is_admin = True
    flash(request, t("signed_in"), "success")
    raise web.HTTPFound("/admin/dashboard")


@routes.get("/sign-up")
async def sign_up_form(request: web.Request) -> web.Response:
    return render(request, "Sign Up", _sign_up_body())


@routes.post("/sign-up")
async def sign_up(request: web.Request) -> web.Response:
    site = services(request)
    form = await request.post()
    values = {k: form.get(k, "") for k in ("email", "player_number", "position")}
    ok, message, _user = await site.auth.sign_up(
        values["email"],
        form.get("password", ""),
        form.get("confirm_password", ""),
        player_number=values["player_number"],
        position=values["position"],
    )
    if not ok:
        return render(request, "Sign Up", _sign_up_body(error=message, values=values), status=400)
    raise web.HTTPFound(query("/sign-in", message=message))


async def _sign_out(request: web.Request) -> web.Response:
    site = services(request)
    session = get_session(request)
    if session:
        await site.auth.sign_out(session.access_token)
        site.sessions.destroy(session.token)
        request["session"] = None
        logger.info(f"[AUTH] Signed out {session.user_id}")
    request["session_cleared"] = True
    raise web.HTTPFound(query("/sign-in", message=t("signed_out")))


routes.get("/sign-out")(_sign_out)
routes.post("/sign-out")(_sign_out)
