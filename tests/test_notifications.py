"""
Unit tests for fixture notification decisions, email text and the send loop.
"""

from datetime import datetime

import pytest

from core.domain.models import NotificationKind, PlayerCreate
from core.services import NotificationError, compose, decide_notification
from core.services.notification_service import format_match_date, format_match_time

from tests.conftest import make_fixture


class TestDecideNotification:
    def test_new_fixture_notifies(self) -> None:
        assert decide_notification(None, "upcoming", is_new=True) == NotificationKind.NEW

    def test_new_fixture_already_cancelled_is_silent(self) -> None:
        assert decide_notification(None, "canceled", is_new=True) is None
        assert decide_notification(None, "postponed", is_new=True) is None

    def test_status_to_cancelled(self) -> None:
        assert decide_notification("upcoming", "postponed") == NotificationKind.CANCEL
        assert decide_notification("upcoming", "canceled") == NotificationKind.CANCEL

    def test_british_spelling_counts_as_cancelled(self) -> None:
        assert decide_notification(None, "cancelled", is_new=True) is None
        assert decide_notification("upcoming", "cancelled") == NotificationKind.CANCEL

    def test_between_cancelled_statuses_is_an_update(self) -> None:
        assert decide_notification("postponed", "canceled") == NotificationKind.UPDATE

    def test_completed_with_both_scores(self) -> None:
        assert decide_notification("upcoming", "completed", 2, 1) == NotificationKind.COMPLETED

    def test_completed_without_scores_is_an_update(self) -> None:
        assert decide_notification("upcoming", "completed", 2, None) == NotificationKind.UPDATE

    def test_unchanged_status_is_silent(self) -> None:
        assert decide_notification("upcoming", "upcoming") is None
        assert decide_notification("completed", "completed", 3, 0) is None

    def test_other_status_change_is_an_update(self) -> None:
        assert decide_notification("upcoming", "in progress") == NotificationKind.UPDATE


class TestFormatting:
    @pytest.mark.parametrize(
        "day, expected",
        [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (12, "12th"), (13, "13th"), (22, "22nd")],
    )
    def test_ordinal_days(self, day, expected) -> None:
        assert format_match_date(datetime(2025, 3, day)).split(" ")[2] == f"{expected},"

    def test_long_date(self) -> None:
        assert format_match_date(datetime(2025, 3, 1)) == "Saturday, March 1st, 2025"

    def test_twelve_hour_time(self) -> None:
        assert format_match_time(datetime(2025, 3, 1, 15, 0)) == "3:00 PM"
        assert format_match_time(datetime(2025, 3, 1, 0, 5)) == "12:05 AM"
        assert format_match_time(datetime(2025, 3, 1, 12, 30)) == "12:30 PM"


class TestCompose:
    def test_new_match(self) -> None:
        subject, message = compose(make_fixture(), NotificationKind.NEW, "The Board FC")
        assert subject == "New Match Scheduled: Home vs Rovers"
        assert message == (
            "A new match has been scheduled for Saturday, March 1st, 2025 at 3:00 PM. "
            "We will be playing at home against Rovers in the League."
        )

    def test_update_away(self) -> None:
        subject, message = compose(make_fixture(is_home_game=False), NotificationKind.UPDATE, "The Board FC")
        assert subject == "Match Update: Away vs Rovers"
        assert "It is now scheduled for Saturday, March 1st, 2025 at 3:00 PM." in message
        assert "We will be playing away in the League." in message

    def test_result_uses_our_side_of_the_score(self) -> None:
        fixture = make_fixture(is_home_game=False, home_score=1, away_score=3, status="completed", notes="Great win")
        subject, message = compose(fixture, NotificationKind.COMPLETED, "The Board FC")
        assert subject == "Match Result: Away vs Rovers"
        assert "Final score: The Board FC 3 - 1 Rovers." in message
        assert "We won the match played on Saturday, March 1st, 2025." in message
        assert "\n\nAdditional notes: Great win" in message
        assert message.endswith("\n\nCheck the team website for upcoming fixtures!")

    def test_result_lost_and_drew(self) -> None:
        lost = make_fixture(home_score=0, away_score=2, status="completed")
        drew = make_fixture(home_score=1, away_score=1, status="completed")
        assert "We lost the match" in compose(lost, NotificationKind.COMPLETED, "The Board FC")[1]
        assert "We drew the match" in compose(drew, NotificationKind.COMPLETED, "The Board FC")[1]

    def test_cancellation_with_reason(self) -> None:
        fixture = make_fixture(status="postponed", notes="Waterlogged pitch")
        subject, message = compose(fixture, NotificationKind.CANCEL, "The Board FC")
        assert subject == "Match Cancelled: Home vs Rovers"
        assert "has been postponed. Further updates will be provided when available." in message
        assert message.endswith("\n\nReason: Waterlogged pitch")


class TestNotify:
    async def _add_players(self, player_repo):
        await player_repo.create(PlayerCreate(first_name="Ana", last_name="Silva", email="ana@boardfc.co.uk"))
        await player_repo.create(PlayerCreate(first_name="Ben", last_name="Okafor", email="ben@boardfc.co.uk"))
        await player_repo.create(PlayerCreate(first_name="Cat", last_name="Nowak"))
        await player_repo.create(
            PlayerCreate(first_name="Dan", last_name="Lee", email="dan@boardfc.co.uk", status="injured")
        )

    async def test_sends_to_active_players_with_email(self, notification_service, player_repo, sender, log_repo) -> None:
        await self._add_players(player_repo)
        fixture = make_fixture()

        result = await notification_service.notify(fixture, NotificationKind.NEW)

        assert (result.total, result.sent, result.failed) == (2, 2, 0)
        assert {m["to"] for m in sender.sent} == {"ana@boardfc.co.uk", "ben@boardfc.co.uk"}
        assert sender.sent[0]["subject"] == "New Match Scheduled: Home vs Rovers"
        assert len(log_repo.entries) == 2
        assert all(e.fixture_id == fixture.id and e.notification_type == "email" for e in log_repo.entries)

    async def test_one_failure_does_not_stop_the_run(self, notification_service, player_repo, sender, log_repo) -> None:
        await self._add_players(player_repo)
        sender.explode.add("ana@boardfc.co.uk")

        result = await notification_service.notify(make_fixture(), NotificationKind.UPDATE)

        assert (result.sent, result.failed) == (1, 1)
        assert [m["to"] for m in sender.sent] == ["ben@boardfc.co.uk"]
        assert len(log_repo.entries) == 1

    async def test_rejected_send_is_not_logged(self, notification_service, player_repo, sender, log_repo) -> None:
        await self._add_players(player_repo)
        sender.reject.add("ben@boardfc.co.uk")

        result = await notification_service.notify(make_fixture(), NotificationKind.UPDATE)

        assert (result.sent, result.failed) == (1, 1)
        assert len(log_repo.entries) == 1

    async def test_no_recipients(self, notification_service, sender) -> None:
        result = await notification_service.notify(make_fixture(), NotificationKind.NEW)
        assert result.total == 0
        assert sender.sent == []

    async def test_recipient_lookup_failure_raises(self, notification_service, player_repo) -> None:
        player_repo.fail_recipients = True
        with pytest.raises(NotificationError, match="Error fetching players"):
            await notification_service.notify(make_fixture(), NotificationKind.NEW)
