"""
HTTP tests for the public pages, contact form, throttling and error pages.
"""

from datetime import datetime, timedelta
from uuid import uuid4

from postgrest import APIError

from adapters.web.middleware import RateLimiter
from core.domain.models import FixtureCreate, PlayerCreate, PlayerStatCreate
from core.services import NewsService

from tests.conftest import ADMIN_EMAIL, ADMIN_PASSWORD, PLAYER_ACCOUNT_EMAIL


async def _html(resp) -> str:
    return await resp.text()


class TestPages:
    async def test_home_shows_team_and_fixtures(self, client, site) -> None:
        await site.fixtures.create_fixture(FixtureCreate(match_date=datetime(2030, 5, 1, 15), opponent="Rovers"))
        await site.fixtures.create_fixture(
            FixtureCreate(match_date=datetime(2030, 5, 8, 15), opponent="Hidden Town", status="postponed")
        )

        resp = await client.get("/")

        assert resp.status == 200
        body = await _html(resp)
        assert "The Board FC" in body
        assert "Rovers" in body
        assert "Hidden Town" not in body

    async def test_static_pages(self, client) -> None:
        for path in ("/about", "/contact", "/team", "/news", "/fixtures"):
            resp = await client.get(path)
            assert resp.status == 200, path

    async def test_team_search(self, client, site) -> None:
        await site.players.create_player(PlayerCreate(first_name="Ria", last_name="Boots", position="Forward"))
        await site.players.create_player(PlayerCreate(first_name="Sam", last_name="Gloves", position="Goalkeeper"))

        body = await _html(await client.get("/team", params={"q": "boots"}))

        assert "Ria Boots" in body
        assert "Sam Gloves" not in body

    async def test_player_profile_and_season_filter(self, client, site) -> None:
        player = await site.players.create_player(PlayerCreate(first_name="Ria", last_name="Boots"))
        await site.stats.create_player_stat(PlayerStatCreate(player_id=player.id, season="2023-2024", goals=4))
        await site.stats.create_player_stat(PlayerStatCreate(player_id=player.id, season="2024-2025", goals=7))

        resp = await client.get(f"/player/{player.id}", params={"season": "2023-2024"})

        assert resp.status == 200
        body = await _html(resp)
        assert "Ria Boots" in body
        assert "2023-2024" in body

    async def test_junk_seasons_and_ids_do_not_grow_the_cache(self, client, site, cache) -> None:
        player = await site.players.create_player(PlayerCreate(first_name="Ria", last_name="Boots"))
        await site.stats.create_player_stat(PlayerStatCreate(player_id=player.id, season="2024-2025", goals=7))

        for i in range(20):
            resp = await client.get(f"/player/{player.id}", params={"season": f"junk-{i}"})
            assert resp.status == 200
            assert (await client.get(f"/player/{uuid4()}")).status == 404

        # the player row and their all-seasons stats
        assert len(cache) == 2

    async def test_unknown_or_malformed_player_is_404(self, client) -> None:
        assert (await client.get("/player/not-a-uuid")).status == 404
        resp = await client.get("/player/00000000-0000-0000-0000-000000000000")
        assert resp.status == 404
        assert "does not exist" in await _html(resp)

    async def test_unknown_route_renders_404_page(self, client) -> None:
        resp = await client.get("/no/such/page")
        assert resp.status == 404
        assert "Return home" in await _html(resp)

    async def test_fixtures_tabs(self, client, site) -> None:
        await site.fixtures.create_fixture(FixtureCreate(
            match_date=datetime(2024, 9, 1, 15), opponent="Old Boys", status="completed", home_score=2, away_score=1,
        ))
        await site.fixtures.create_fixture(FixtureCreate(match_date=datetime(2030, 9, 1, 15), opponent="Future FC"))

        completed = await _html(await client.get("/fixtures", params={"tab": "completed"}))
        assert "Old Boys" in completed
        assert "Future FC" not in completed

        fallback = await client.get("/fixtures", params={"tab": "bogus", "date": "not-a-date"})
        assert fallback.status == 200

    async def test_ticket_qr(self, client, site) -> None:
        upcoming, _r, _e = await site.fixtures.create_fixture(FixtureCreate(
            match_date=datetime.now() + timedelta(days=7), opponent="Rovers",
            ticket_link="https://tickets.boardfc.co.uk/rovers",
        ))
        no_link, _r, _e = await site.fixtures.create_fixture(
            FixtureCreate(match_date=datetime.now() + timedelta(days=14), opponent="United")
        )

        resp = await client.get(f"/fixtures/{upcoming.id}/tickets.png")
        assert resp.status == 200
        assert resp.content_type == "image/png"
        assert (await resp.read()).startswith(b"\x89PNG")

        assert (await client.get(f"/fixtures/{no_link.id}/tickets.png")).status == 404

    async def test_news_only_shows_published(self, client, site) -> None:
        live = await site.news.create_article(NewsService.prepare("Cup run", "Body", category="Team News", is_published=True))
        draft = await site.news.create_article(NewsService.prepare("Secret signing", "Body"))

        listing = await _html(await client.get("/news"))
        assert "Cup run" in listing
        assert "Secret signing" not in listing

        assert (await client.get(f"/news/{live.id}")).status == 200
        assert (await client.get(f"/news/{draft.id}")).status == 404

    async def test_backend_error_page(self, client, player_repo) -> None:
        async def broken():
            raise APIError({"message": "relation players does not exist", "code": "42P01"})

        player_repo.get_all = broken

        resp = await client.get("/team")

        assert resp.status == 500
        assert "relation players does not exist" in await _html(resp)


class TestContactForm:
    async def test_success_redirects_with_toast(self, client, contact_repo) -> None:
        resp = await client.post(
            "/contact",
            data={"name": "Jamie", "email": "jamie@boardfc.co.uk", "subject": "Trials", "message": "Can I join?"},
            allow_redirects=False,
        )
        assert resp.status == 302
        assert resp.headers["Location"] == "/contact"
        assert len(contact_repo.rows) == 1

        page = await _html(await client.get("/contact"))
        assert "Thank you for your message!" in page

    async def test_failure_keeps_values(self, client, contact_repo) -> None:
        resp = await client.post("/contact", data={"name": "Jamie", "email": "bad", "message": "Hello there"})

        assert resp.status == 400
        body = await _html(resp)
        assert "Please enter a valid email address." in body
        assert "Hello there" in body
        assert contact_repo.rows == {}

    async def test_posts_are_throttled(self, client) -> None:
        data = {"name": "Jamie", "email": "jamie@boardfc.co.uk", "message": "Hi"}
        for _ in range(3):
            resp = await client.post("/contact", data=data, allow_redirects=False)
            assert resp.status == 302

        resp = await client.post("/contact", data=data, allow_redirects=False)
        assert resp.status == 429
        assert "Too many attempts" in await _html(resp)

        # Reading the page is never throttled
        assert (await client.get("/contact")).status == 200


class TestSignIn:
    async def test_bad_password(self, client) -> None:
        resp = await client.post("/sign-in", data={"email": ADMIN_EMAIL, "password": "wrong"})
        assert resp.status == 401
        assert "Invalid login credentials" in await _html(resp)

    async def test_player_account_is_refused(self, client) -> None:
        resp = await client.post("/sign-in", data={"email": PLAYER_ACCOUNT_EMAIL, "password": ADMIN_PASSWORD})
        assert resp.status == 401
        assert "Only administrators can access this system." in await _html(resp)

    async def test_sign_up_redirects_with_message(self, client, profile_repo) -> None:
        resp = await client.post(
            "/sign-up",
            data={"email": "new@boardfc.co.uk", "password": "longpass", "confirm_password": "longpass",
                  "player_number": "7", "position": "Forward"},
            allow_redirects=False,
        )
        assert resp.status == 302
        assert resp.headers["Location"].startswith("/sign-in?message=")

        page = await _html(await client.get(resp.headers["Location"]))
        assert "Please check your email for verification." in page

    async def test_sign_up_mismatch(self, client) -> None:
        resp = await client.post(
            "/sign-up", data={"email": "new@boardfc.co.uk", "password": "longpass", "confirm_password": "other"}
        )
        assert resp.status == 400
        assert "Passwords do not match" in await _html(resp)


class TestRateLimiter:
    def test_refuses_past_the_limit(self, clock) -> None:
        limiter = RateLimiter(interval=60, clock=clock)
        assert limiter.hit(("/contact", "1.2.3.4"), 2)
        assert limiter.hit(("/contact", "1.2.3.4"), 2)
        assert not limiter.hit(("/contact", "1.2.3.4"), 2)

        clock.advance(61)
        assert limiter.hit(("/contact", "1.2.3.4"), 2)

    def test_quiet_clients_are_forgotten(self, clock) -> None:
        limiter = RateLimiter(interval=60, clock=clock)
        for i in range(5):
            limiter.hit(("/contact", f"10.0.0.{i}"), 5)
        assert len(limiter) == 5

        clock.advance(61)
        limiter.hit(("/sign-in", "10.0.1.1"), 5)

        assert len(limiter) == 1
