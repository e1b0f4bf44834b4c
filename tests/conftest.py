"""Shared pytest fixtures: in-memory fakes for every repository and platform interface.

Nothing here touches infrastructure/, so the suite runs without Supabase
credentials or network access.
"""

import io
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID, uuid4

import pytest
from aiohttp.test_utils import TestClient, TestServer
from PIL import Image

from core.domain.models import (
    AuthUser, ContactCreate, ContactMessage, ContactStatus, Fixture, FixtureCreate,
    NewsArticle, NewsCreate, NotificationLog, Player, PlayerCreate, PlayerStat,
    PlayerStatCreate, Profile, TeamStat, TeamStatCreate, UserRole,
)
from core.domain.constants import SEASON_ALL
from core.interfaces import (
    AuthError, IAuthProvider, IContactRepository, IEmailSender, IFileStorage,
    IFixtureRepository, INewsRepository, INotificationLogRepository, IPlayerRepository,
    IPlayerStatsRepository, IProfileRepository, ITeamStatsRepository,
)
from core.services import (
    AuthService, ContactService, FixtureService, MediaService, NewsService,
    NotificationService, PlayerService, SessionStore, StatsService,
)
from core.utils.query_cache import QueryCache
from adapters.web.app import create_app
from adapters.web.context import SiteServices

ADMIN_ID = "9f1c6a52-2d0e-4d55-9a57-5f5b8a3c1e01"
ADMIN_EMAIL = "coach@boardfc.co.uk"
ADMIN_PASSWORD = "secret-pass"
PLAYER_ACCOUNT_ID = "0b7e2f4c-8d1a-4c3b-b6e5-2a9d7c4f1b02"
PLAYER_ACCOUNT_EMAIL = "winger@boardfc.co.uk"


# ── Clock ─────────────────────────────────────────────────────────────────────


class FakeClock:
    """Monotonic clock the tests move by hand"""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# ── Repositories ──────────────────────────────────────────────────────────────


class FakePlayerRepository(IPlayerRepository):
    def __init__(self):
        self.rows: Dict[UUID, Player] = {}
        self.get_all_calls = 0
        self.fail_recipients = False

    async def get_all(self) -> List[Player]:
        self.get_all_calls += 1
        return sorted(self.rows.values(), key=lambda p: p.last_name)

    async def get_by_id(self, player_id: UUID) -> Optional[Player]:
        return self.rows.get(player_id)

    async def create(self, player_data: PlayerCreate) -> Player:
        player = Player(id=uuid4(), **player_data.model_dump(mode="json", exclude={"created_by"}))
        self.rows[player.id] = player
        return player

    async def update(self, player_id: UUID, player_data: dict) -> Optional[Player]:
        player = self.rows.get(player_id)
        if not player:
            return None
        merged = {**player.model_dump(mode="json"), **player_data}
        self.rows[player_id] = Player(**merged)
        return self.rows[player_id]

    async def delete(self, player_id: UUID) -> None:
        self.rows.pop(player_id, None)

    async def get_active_with_email(self) -> List[Player]:
        if self.fail_recipients:
            raise RuntimeError("connection reset")
        return [p for p in self.rows.values() if p.status == "active" and p.email]


class FakePlayerStatsRepository(IPlayerStatsRepository):
    def __init__(self):
        self.rows: Dict[UUID, PlayerStat] = {}

    async def get_all(self) -> List[PlayerStat]:
        return sorted(self.rows.values(), key=lambda s: s.season, reverse=True)

    async def get_by_player(self, player_id: UUID, season: Optional[str] = None) -> List[PlayerStat]:
        rows = [s for s in self.rows.values() if s.player_id == player_id]
        if season and season != SEASON_ALL:
            rows = [s for s in rows if s.season == season]
        return sorted(rows, key=lambda s: s.season, reverse=True)

    async def get_by_id(self, stat_id: UUID) -> Optional[PlayerStat]:
        return self.rows.get(stat_id)

    async def find_by_player_season(self, player_id: UUID, season: str) -> Optional[PlayerStat]:
        for row in self.rows.values():
            if row.player_id == player_id and row.season == season:
                return row
        return None

    async def create(self, stat_data: PlayerStatCreate, minutes_played: int) -> PlayerStat:
        stat = PlayerStat(
            id=uuid4(),
            minutes_played=minutes_played,
            **stat_data.model_dump(exclude={"created_by"}),
        )
        self.rows[stat.id] = stat
        return stat

    async def update(self, stat_id: UUID, stat_data: dict) -> Optional[PlayerStat]:
        stat = self.rows.get(stat_id)
        if not stat:
            return None
        self.rows[stat_id] = stat.model_copy(update=stat_data)
        return self.rows[stat_id]

    async def delete(self, stat_id: UUID) -> None:
        self.rows.pop(stat_id, None)

    async def get_seasons(self) -> List[str]:
        return sorted({s.season for s in self.rows.values()}, reverse=True)


class FakeTeamStatsRepository(ITeamStatsRepository):
    def __init__(self):
        self.rows: Dict[UUID, TeamStat] = {}

    async def get_all(self) -> List[TeamStat]:
        return sorted(self.rows.values(), key=lambda s: s.season, reverse=True)

    async def get_by_id(self, stat_id: UUID) -> Optional[TeamStat]:
        return self.rows.get(stat_id)

    async def create(self, stat_data: TeamStatCreate) -> TeamStat:
        stat = TeamStat(id=uuid4(), **stat_data.model_dump())
        self.rows[stat.id] = stat
        return stat

    async def update(self, stat_id: UUID, stat_data: dict) -> Optional[TeamStat]:
        stat = self.rows.get(stat_id)
        if not stat:
            return None
        self.rows[stat_id] = stat.model_copy(update=stat_data)
        return self.rows[stat_id]

    async def delete(self, stat_id: UUID) -> None:
        self.rows.pop(stat_id, None)


class FakeFixtureRepository(IFixtureRepository):
    def __init__(self):
        self.rows: Dict[UUID, Fixture] = {}

    async def get_all(self) -> List[Fixture]:
        return sorted(self.rows.values(), key=lambda f: f.match_date, reverse=True)

    async def get_by_id(self, fixture_id: UUID) -> Optional[Fixture]:
        return self.rows.get(fixture_id)

    async def create(self, fixture_data: FixtureCreate) -> Fixture:
        fixture = Fixture(id=uuid4(), **fixture_data.model_dump(mode="json", exclude={"created_by"}))
        self.rows[fixture.id] = fixture
        return fixture

    async def update(self, fixture_id: UUID, fixture_data: dict) -> Optional[Fixture]:
        fixture = self.rows.get(fixture_id)
        if not fixture:
            return None
        self.rows[fixture_id] = Fixture(**{**fixture.model_dump(mode="json"), **fixture_data})
        return self.rows[fixture_id]

    async def delete(self, fixture_id: UUID) -> None:
        self.rows.pop(fixture_id, None)


class FakeNewsRepository(INewsRepository):
    def __init__(self):
        self.rows: Dict[UUID, NewsArticle] = {}

    async def get_all(self) -> List[NewsArticle]:
        return list(self.rows.values())

    async def get_by_id(self, article_id: UUID) -> Optional[NewsArticle]:
        return self.rows.get(article_id)

    async def create(self, article_data: NewsCreate) -> NewsArticle:
        article = NewsArticle(
            id=uuid4(),
            created_at=datetime.now(timezone.utc),
            **article_data.model_dump(exclude={"created_by"}),
        )
        self.rows[article.id] = article
        return article

    async def update(self, article_id: UUID, article_data: dict) -> Optional[NewsArticle]:
        article = self.rows.get(article_id)
        if not article:
            return None
        self.rows[article_id] = NewsArticle(**{**article.model_dump(mode="json"), **article_data})
        return self.rows[article_id]

    async def delete(self, article_id: UUID) -> None:
        self.rows.pop(article_id, None)


class FakeContactRepository(IContactRepository):
    def __init__(self):
        self.rows: Dict[UUID, ContactMessage] = {}

    async def create(self, contact_data: ContactCreate) -> None:
        message = ContactMessage(
            id=uuid4(),
            created_at=datetime.now(timezone.utc),
            **contact_data.model_dump(),
        )
        self.rows[message.id] = message

    async def get_all(self) -> List[ContactMessage]:
        return sorted(self.rows.values(), key=lambda m: m.created_at, reverse=True)

    async def get_by_id(self, contact_id: UUID) -> Optional[ContactMessage]:
        return self.rows.get(contact_id)

    async def mark_read(self, contact_id: UUID) -> None:
        message = self.rows[contact_id]
        self.rows[contact_id] = message.model_copy(update={"status": ContactStatus.READ})

    async def delete(self, contact_id: UUID) -> None:
        self.rows.pop(contact_id, None)


class FakeProfileRepository(IProfileRepository):
    def __init__(self):
        self.rows: Dict[str, Profile] = {}
        self.fail = False

    async def get_by_id(self, user_id: str) -> Optional[Profile]:
        if self.fail:
            raise RuntimeError("profiles table unavailable")
        return self.rows.get(user_id)

    async def create(self, user_id: str, role: UserRole,
                     player_number: Optional[str] = None, position: Optional[str] = None) -> Profile:
        profile = Profile(id=UUID(user_id), role=role, player_number=player_number, position=position)
        self.rows[user_id] = profile
        return profile

    async def set_role(self, user_id: str, role: UserRole) -> Optional[Profile]:
        profile = self.rows.get(user_id)
        if not profile:
            return None
        self.rows[user_id] = profile.model_copy(update={"role": role})
        return self.rows[user_id]


class FakeNotificationLogRepository(INotificationLogRepository):
    def __init__(self):
        self.entries: List[NotificationLog] = []

    async def log(self, entry: NotificationLog) -> None:
        self.entries.append(entry)


# ── Platform ──────────────────────────────────────────────────────────────────


class FakeEmailSender(IEmailSender):
    def __init__(self):
        self.sent: List[Dict] = []
        self.reject: set = set()
        self.explode: set = set()

    @property
    def provider(self) -> str:
        return "fake"

    async def send(self, to_email: str, to_name: str, subject: str, message: str) -> bool:
        if to_email in self.explode:
            raise RuntimeError("smtp timeout")
        if to_email in self.reject:
            return False
        self.sent.append({"to": to_email, "name": to_name, "subject": subject, "message": message})
        return True


class FakeAuthProvider(IAuthProvider):
    def __init__(self):
        # email -> (password, user id)
        self.accounts: Dict[str, tuple] = {}
        self.signed_out: List[Optional[str]] = []

    def add(self, email: str, password: str, user_id: str) -> None:
        self.accounts[email] = (password, user_id)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        account = self.accounts.get(email)
        if not account or account[0] != password:
            raise AuthError("Invalid login credentials")
        return AuthUser(id=account[1], email=email, access_token=f"token-{account[1]}")

    async def sign_up(self, email: str, password: str) -> AuthUser:
        if email in self.accounts:
            raise AuthError("User already registered with this email")
        user_id = str(uuid4())
        self.add(email, password, user_id)
        return AuthUser(id=user_id, email=email)

    async def sign_out(self, access_token: Optional[str]) -> None:
        self.signed_out.append(access_token)

    async def get_user(self, access_token: str) -> Optional[AuthUser]:
        for email, (_password, user_id) in self.accounts.items():
            if access_token == f"token-{user_id}":
                return AuthUser(id=user_id, email=email, access_token=access_token)
        return None


class FakeFileStorage(IFileStorage):
    BASE = "https://project.supabase.co/storage/v1/object/public/media/"

    def __init__(self):
        self.objects: Dict[str, bytes] = {}
        self.content_types: Dict[str, str] = {}
        self.removed: List[str] = []
        self.fail_remove = False

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        self.objects[path] = data
        self.content_types[path] = content_type

    def public_url(self, path: str) -> str:
        return self.BASE + path

    async def remove(self, paths: List[str]) -> None:
        if self.fail_remove:
            raise RuntimeError("storage unavailable")
        for path in paths:
            self.objects.pop(path, None)
            self.removed.append(path)


# ── Helpers ───────────────────────────────────────────────────────────────────


def png_bytes(size=(4, 4), fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, "red").save(buf, format=fmt)
    return buf.getvalue()


def make_fixture(**overrides) -> Fixture:
    data = {
        "id": uuid4(),
        "match_date": datetime(2025, 3, 1, 15, 0),
        "opponent": "Rovers",
        "competition": "League",
        "location": "Board Park",
        "is_home_game": True,
        "status": "upcoming",
    }
    data.update(overrides)
    return Fixture(**data)


def make_player(**overrides) -> Player:
    data = {
        "id": uuid4(),
        "first_name": "Sam",
        "last_name": "Keeper",
        "email": "sam@boardfc.co.uk",
        "position": "Goalkeeper",
        "player_number": 1,
        "status": "active",
    }
    data.update(overrides)
    return Player(**data)


# ── Fixtures ──────────────────────────────────────────────────────────────────


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> QueryCache:
    return QueryCache(ttl_seconds=300, retries=1, clock=clock)


@pytest.fixture
def player_repo() -> FakePlayerRepository:
    return FakePlayerRepository()


@pytest.fixture
def player_stats_repo() -> FakePlayerStatsRepository:
    return FakePlayerStatsRepository()


@pytest.fixture
def team_stats_repo() -> FakeTeamStatsRepository:
    return FakeTeamStatsRepository()


@pytest.fixture
def fixture_repo() -> FakeFixtureRepository:
    return FakeFixtureRepository()


@pytest.fixture
def news_repo() -> FakeNewsRepository:
    return FakeNewsRepository()


@pytest.fixture
def contact_repo() -> FakeContactRepository:
    return FakeContactRepository()


@pytest.fixture
def profile_repo() -> FakeProfileRepository:
    return FakeProfileRepository()


@pytest.fixture
def log_repo() -> FakeNotificationLogRepository:
    return FakeNotificationLogRepository()


@pytest.fixture
def sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def auth_provider() -> FakeAuthProvider:
    return FakeAuthProvider()


@pytest.fixture
def storage() -> FakeFileStorage:
    return FakeFileStorage()


@pytest.fixture
def notification_service(player_repo, log_repo, sender) -> NotificationService:
    return NotificationService(player_repo, log_repo, sender, team_name="The Board FC")


@pytest.fixture
def player_service(player_repo, cache) -> PlayerService:
    return PlayerService(player_repo, cache)


@pytest.fixture
def stats_service(player_stats_repo, team_stats_repo, cache) -> StatsService:
    return StatsService(player_stats_repo, team_stats_repo, cache)


@pytest.fixture
def fixture_service(fixture_repo, cache, notification_service) -> FixtureService:
    return FixtureService(fixture_repo, cache, notification_service)


@pytest.fixture
def news_service(news_repo, cache) -> NewsService:
    return NewsService(news_repo, cache)


@pytest.fixture
def contact_service(contact_repo) -> ContactService:
    return ContactService(contact_repo)


@pytest.fixture
def auth_service(auth_provider, profile_repo, clock) -> AuthService:
    return AuthService(auth_provider, profile_repo, QueryCache(ttl_seconds=60, retries=1, clock=clock))


@pytest.fixture
def media_service(storage) -> MediaService:
    return MediaService(storage, bucket="media")


@pytest.fixture
def session_store(clock) -> SessionStore:
    return SessionStore(timeout_minutes=30, clock=clock)


@pytest.fixture
def site(
    player_service, stats_service, fixture_service, news_service, contact_service,
    auth_service, media_service, session_store, auth_provider, profile_repo,
) -> SiteServices:
    auth_provider.add(ADMIN_EMAIL, ADMIN_PASSWORD, ADMIN_ID)
    profile_repo.rows[ADMIN_ID] = Profile(id=UUID(ADMIN_ID), role=UserRole.ADMIN)
    auth_provider.add(PLAYER_ACCOUNT_EMAIL, ADMIN_PASSWORD, PLAYER_ACCOUNT_ID)
    profile_repo.rows[PLAYER_ACCOUNT_ID] = Profile(id=UUID(PLAYER_ACCOUNT_ID), role=UserRole.PLAYER)
    return SiteServices(
        players=player_service,
        stats=stats_service,
        fixtures=fixture_service,
        news=news_service,
        contacts=contact_service,
        auth=auth_service,
        media=media_service,
        sessions=session_store,
        team_name="The Board FC",
        settings_summary={"Team name": "The Board FC", "Email provider": "fake"},
    )


@pytest.fixture
async def client(site):
    app = create_app(site, "test-cookie-secret", contact_rate_limit=3, sign_in_rate_limit=4)
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


@pytest.fixture
async def admin_client(client):
    """Client with a signed-in admin session"""
    resp = await client.post(
        "/sign-in",
        data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
        allow_redirects=False,
    )
    assert resp.status == 302
    return client
