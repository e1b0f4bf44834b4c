"""
Middleware for the web app.

- error_middleware: 404 page, backend errors and crashes become logged error pages
- session_middleware: cookie session with inactivity timeout
- throttling_middleware: per-IP rate limit on form posts
"""

import hashlib
import hmac
import logging
import time
from collections import defaultdict
from typing import Dict, Optional

from aiohttp import web
from postgrest import APIError

from core.domain.constants import RATE_LIMIT_INTERVAL_SECONDS
from adapters.web.context import (
    SESSION_COOKIE, SERVICES, COOKIE_SECRET, flash, render,
)
from adapters.web.templates.public import not_found_body, error_body
from locales import t

logger = logging.getLogger(__name__)


# === ERRORS ===

@web.middleware
async def error_middleware(request: web.Request, handler):
    try:
        return await handler(request)
    except web.HTTPNotFound:
        return render(request, "Page not found", not_found_body(), status=404)
    except web.HTTPException:
        raise
    except APIError as e:
        logger.error(f"[WEB] Backend error on {request.method} {request.path}: {e.message}", exc_info=True)
        return render(request, "Error", error_body(t("backend_error", error=e.message)), status=500)
    except Exception as e:
        logger.error(f"[WEB] Unhandled error on {request.method} {request.path}: {e}", exc_info=True)
        return render(request, "Error", error_body(t("server_error")), status=500)


# === SESSION ===

def sign_token(token: str, secret: str) -> str:
    mac = hmac.new(secret.encode(), token.encode(), hashlib.sha256).hexdigest()[:32]
    return f"{token}.{mac}"


def unsign_token(value: Optional[str], secret: str) -> Optional[str]:
    """Token from a cookie value, None when missing or tampered with"""
    if not value:
        return None
    token, _, mac = value.rpartition(".")
    if not token:
        return None
    expected = sign_token(token, secret).rpartition(".")[2]
    return token if hmac.compare_digest(mac, expected) else None


def _attach_cookie(request: web.Request, response: web.StreamResponse) -> None:
    if request.get("session_cleared"):
        response.del_cookie(SESSION_COOKIE)
    elif request.get("session_new"):
        session = request["session"]
        response.set_cookie(
            SESSION_COOKIE,
            sign_token(session.token, request.app[COOKIE_SECRET]),
            httponly=True,
            samesite="Lax",
        )


@web.middleware
async def session_middleware(request: web.Request, handler):
    store = request.app[SERVICES].sessions
    token = unsign_token(request.cookies.get(SESSION_COOKIE), request.app[COOKIE_SECRET])
    session, timed_out = store.get(token)
    request["session"] = session

    try:
        if timed_out:
            logger.info(f"[SESSION] Idle session expired on {request.path}")
            flash(request, t("session_timeout"), "error")
            if request.path != "/sign-in":
                raise web.HTTPFound("/sign-in")
        response = await handler(request)
    except web.HTTPException as exc:
        _attach_cookie(request, exc)
        raise
    _attach_cookie(request, response)
    return response


# === THROTTLING ===

class RateLimiter:
    """
    Simple rate limiter: tracks request timestamps per key.
    A hit is refused once the key has reached its limit within the interval.
    """

    def __init__(self, interval: int = RATE_LIMIT_INTERVAL_SECONDS, clock=time.monotonic):
        self.interval = interval
        self._clock = clock
        # {key: [timestamp, timestamp, ...]}
        self._requests: Dict[tuple, list] = defaultdict(list)
        self._last_sweep = self._clock()

    def _cleanup(self, key: tuple, now: float):
        """Remove expired timestamps; keys left with none are dropped."""
        cutoff = now - self.interval
        recent = [ts for ts in self._requests.get(key, ()) if ts > cutoff]
        if recent:
            self._requests[key] = recent
        else:
            self._requests.pop(key, None)

    def _sweep(self, now: float):
        """Clean every key at most once per interval, so clients that never return are forgotten."""
        if now - self._last_sweep < self.interval:
            return
        self._last_sweep = now
        for key in list(self._requests):
            self._cleanup(key, now)

    def hit(self, key: tuple, limit: int) -> bool:
        now = self._clock()
        self._sweep(now)
        self._cleanup(key, now)
        if len(self._requests.get(key, ())) >= limit:
            return False
        self._requests[key].append(now)
        return True

    def __len__(self) -> int:
        return len(self._requests)


def throttling_middleware(limits: Dict[str, int], limiter: Optional[RateLimiter] = None):
    """Limit POSTs per client IP on the given paths ({path: max posts per interval})"""
    limiter = limiter or RateLimiter()

    @web.middleware
    async def middleware(request: web.Request, handler):
        limit = limits.get(request.path)
        if request.method == "POST" and limit:
            ip = request.remote or "unknown"
            if not limiter.hit((request.path, ip), limit):
                logger.warning(f"[THROTTLE] {ip} exceeded {limit}/{limiter.interval}s on {request.path}")
                return render(request, "Slow down", error_body(t("too_many_attempts")), status=429)
        return await handler(request)

    return middleware
