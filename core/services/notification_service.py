"""
Fixture notifications - decide which email a fixture change warrants,
compose it, and send it to every active player with an email address.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Tuple
from core.domain.models import Fixture, NotificationKind, NotificationLog, NotificationResult
from core.domain.constants import CANCELLED_STATUSES
from core.interfaces.repositories import IPlayerRepository, INotificationLogRepository
from core.interfaces.messaging import IEmailSender

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Recipients could not be loaded, nothing was sent"""


SUBJECT_PREFIXES = {
    NotificationKind.NEW: "New Match Scheduled",
    NotificationKind.UPDATE: "Match Update",
    NotificationKind.COMPLETED: "Match Result",
    NotificationKind.CANCEL: "Match Cancelled",
}


def decide_notification(
    previous_status: Optional[str],
    new_status: str,
    home_score: Optional[int] = None,
    away_score: Optional[int] = None,
    is_new: bool = False,
) -> Optional[NotificationKind]:
    """Which notification (if any) a fixture save triggers"""
    if is_new:
        if new_status in CANCELLED_STATUSES:
            return None
        return NotificationKind.NEW

    if new_status in CANCELLED_STATUSES and previous_status not in CANCELLED_STATUSES:
        return NotificationKind.CANCEL
    if (
        new_status == "completed"
        and previous_status != "completed"
        and home_score is not None
        and away_score is not None
    ):
        return NotificationKind.COMPLETED
    if new_status != previous_status:
        return NotificationKind.UPDATE
    return None


def _ordinal(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return f"{day}th"
    suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def format_match_date(value: datetime) -> str:
    """Saturday, March 1st, 2025"""
    return f"{value.strftime('%A, %B')} {_ordinal(value.day)}, {value.year}"


def format_match_time(value: datetime) -> str:
    """3:00 PM"""
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {'AM' if value.hour < 12 else 'PM'}"


def compose(fixture: Fixture, kind: NotificationKind, team_name: str) -> Tuple[str, str]:
    """Build (subject, message) for one notification kind"""
    side = "Home" if fixture.is_home_game else "Away"
    subject = f"{SUBJECT_PREFIXES[kind]}: {side} vs {fixture.opponent}"
    match_date = format_match_date(fixture.match_date)
    match_time = format_match_time(fixture.match_date)
    where = "at home" if fixture.is_home_game else "away"

    if kind == NotificationKind.NEW:
        message = (
            f"A new match has been scheduled for {match_date} at {match_time}. "
            f"We will be playing {where} against {fixture.opponent} in the {fixture.competition}."
        )
    elif kind == NotificationKind.UPDATE:
        message = (
            f"The match against {fixture.opponent} has been updated. "
            f"It is now scheduled for {match_date} at {match_time}. "
            f"We will be playing {where} in the {fixture.competition}."
        )
    elif kind == NotificationKind.COMPLETED:
        ours, theirs = fixture.our_score, fixture.their_score
        if ours is None or theirs is None:
            result = "drew"
        elif ours > theirs:
            result = "won"
        elif ours < theirs:
            result = "lost"
        else:
            result = "drew"
        message = (
            f"Our match against {fixture.opponent} has been completed. "
            f"Final score: {team_name} {ours} - {theirs} {fixture.opponent}. "
            f"We {result} the match played on {match_date}."
        )
        if fixture.notes:
            message += f"\n\nAdditional notes: {fixture.notes}"
        message += "\n\nCheck the team website for upcoming fixtures!"
    else:
        message = (
            f"The match against {fixture.opponent} that was scheduled for {match_date} "
            f"has been {fixture.status}. Further updates will be provided when available."
        )
        if fixture.notes:
            message += f"\n\nReason: {fixture.notes}"

    return subject, message


class NotificationService:
    """Emails active players about fixture changes"""

    def __init__(
        self,
        player_repo: IPlayerRepository,
        log_repo: INotificationLogRepository,
        sender: IEmailSender,
        team_name: str = "The Board FC",
    ):
        self.player_repo = player_repo
        self.log_repo = log_repo
        self.sender = sender
        self.team_name = team_name

    async def notify(self, fixture: Fixture, kind: NotificationKind) -> NotificationResult:
        """
        Send one notification to every active player with an email.
        Players are mailed one after another; a failure for one player is
        logged and the run moves on.
        """
        try:
            players = await self.player_repo.get_active_with_email()
        except Exception as e:
            logger.error(f"[NOTIFY] Could not load recipients for fixture {fixture.id}: {e}")
            raise NotificationError(f"Error fetching players: {e}") from e

        result = NotificationResult(kind=kind, total=len(players))
        if not players:
            logger.info(f"[NOTIFY] No active players with email, skipping {kind.value} for {fixture.id}")
            return result

        subject, message = compose(fixture, kind, self.team_name)
        logger.info(f"[NOTIFY] Sending '{subject}' to {len(players)} players via {self.sender.provider}")

        for player in players:
            try:
                ok = await self.sender.send(player.email, player.full_name, subject, message)
                if not ok:
                    result.failed += 1
                    logger.warning(f"[NOTIFY] Send to {player.email} was rejected")
                    continue
                await self.log_repo.log(NotificationLog(
                    player_id=player.id,
                    fixture_id=fixture.id,
                    notification_type="email",
                    subject=subject,
                    sent_at=datetime.now(timezone.utc),
                ))
                result.sent += 1
            except Exception as e:
                result.failed += 1
                logger.error(f"[NOTIFY] Failed to send email to {player.email}: {e}")

        logger.info(f"[NOTIFY] {result.message} ({result.failed} failed)")
        return result
