"""
Unit tests for fixture CRUD, save-time notifications and the public views.
"""

from datetime import date, datetime
from uuid import uuid4

from core.domain.models import FixtureCreate, NotificationKind, PlayerCreate
from core.services import FixtureService

from tests.conftest import make_fixture


async def _squad(player_repo) -> None:
    await player_repo.create(PlayerCreate(first_name="Ana", last_name="Silva", email="ana@boardfc.co.uk"))


def _create(**overrides) -> FixtureCreate:
    data = {"match_date": datetime(2025, 3, 1, 15, 0), "opponent": "Rovers", "competition": "League"}
    data.update(overrides)
    return FixtureCreate(**data)


class TestSaveAndNotify:
    async def test_create_sends_new_match_email(self, fixture_service, player_repo, sender) -> None:
        await _squad(player_repo)
        fixture, result, error = await fixture_service.create_fixture(_create())

        assert error is None
        assert result.kind == NotificationKind.NEW
        assert result.sent == 1
        assert sender.sent[0]["subject"] == "New Match Scheduled: Home vs Rovers"
        assert await fixture_service.get_fixture(fixture.id) == fixture

    async def test_create_cancelled_fixture_is_silent(self, fixture_service, player_repo, sender) -> None:
        await _squad(player_repo)
        _fixture, result, error = await fixture_service.create_fixture(_create(status="postponed"))
        assert result is None and error is None
        assert sender.sent == []

    async def test_completing_a_match_sends_result(self, fixture_service, player_repo, sender) -> None:
        await _squad(player_repo)
        fixture, _r, _e = await fixture_service.create_fixture(_create())
        sender.sent.clear()

        updated, result, error = await fixture_service.update_fixture(
            fixture.id, _create(status="completed", home_score=2, away_score=0)
        )

        assert updated.status == "completed"
        assert result.kind == NotificationKind.COMPLETED
        assert "Final score: The Board FC 2 - 0 Rovers." in sender.sent[0]["message"]
        assert error is None

    async def test_edit_without_status_change_is_silent(self, fixture_service, player_repo, sender) -> None:
        await _squad(player_repo)
        fixture, _r, _e = await fixture_service.create_fixture(_create())
        sender.sent.clear()

        _updated, result, _error = await fixture_service.update_fixture(fixture.id, _create(location="Away Ground"))

        assert result is None
        assert sender.sent == []

    async def test_recipient_failure_becomes_error_text(self, fixture_service, player_repo) -> None:
        player_repo.fail_recipients = True
        fixture, result, error = await fixture_service.create_fixture(_create())

        assert fixture.opponent == "Rovers"
        assert result is None
        assert error.startswith("Email sending failed: Error fetching players")

    async def test_update_missing_fixture(self, fixture_service) -> None:
        assert await fixture_service.update_fixture(uuid4(), _create()) == (None, None, None)

    async def test_delete_drops_cached_entry(self, fixture_service, fixture_repo) -> None:
        fixture, _r, _e = await fixture_service.create_fixture(_create())
        assert len(await fixture_service.list_fixtures()) == 1

        await fixture_service.delete_fixture(fixture.id)

        assert await fixture_service.list_fixtures() == []
        assert await fixture_service.get_fixture(fixture.id) is None

    async def test_without_notification_service(self, fixture_repo, cache, sender) -> None:
        service = FixtureService(fixture_repo, cache)
        _fixture, result, error = await service.create_fixture(_create())
        assert (result, error) == (None, None)


class TestViews:
    def test_group_by_tab_orders_each_tab(self) -> None:
        early = make_fixture(match_date=datetime(2025, 3, 1, 15))
        late = make_fixture(match_date=datetime(2025, 4, 1, 15))
        done_old = make_fixture(match_date=datetime(2025, 1, 1, 15), status="completed")
        done_new = make_fixture(match_date=datetime(2025, 2, 1, 15), status="completed")
        off = make_fixture(status="cancelled")
        live = make_fixture(match_date=datetime(2025, 2, 15, 15), status="in progress")

        groups = FixtureService.group_by_tab([late, done_old, early, off, done_new, live])

        assert groups["upcoming"] == [live, early, late]
        assert groups["completed"] == [done_new, done_old]
        assert groups["postponed_or_cancelled"] == [off]

    def test_competition_filter_and_other(self) -> None:
        league = make_fixture(competition="League")
        cup = make_fixture(competition="Cup")
        blank = make_fixture(competition="")
        fixtures = [league, cup, blank]

        assert FixtureService.filter_by_competition(fixtures, "Cup") == [cup]
        assert FixtureService.filter_by_competition(fixtures, "Other") == [blank]
        assert FixtureService.filter_by_competition(fixtures, "All") == fixtures
        assert FixtureService.competitions(fixtures) == ["All", "League", "Cup", "Other"]

    def test_competitions_without_blank_has_no_other(self) -> None:
        assert FixtureService.competitions([make_fixture(competition="Cup")]) == ["All", "Cup"]

    def test_on_date(self) -> None:
        match = make_fixture(match_date=datetime(2025, 3, 1, 19, 45))
        other = make_fixture(match_date=datetime(2025, 3, 2, 15))
        assert FixtureService.on_date([match, other], date(2025, 3, 1)) == [match]

    def test_home_preview_hides_called_off_and_caps(self) -> None:
        fixtures = [make_fixture(status="postponed")] + [make_fixture() for _ in range(4)]
        preview = FixtureService.home_preview(fixtures)
        assert len(preview) == 3
        assert all(f.status == "upcoming" for f in preview)
