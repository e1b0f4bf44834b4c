from core.interfaces.repositories import (
    IPlayerRepository,
    IPlayerStatsRepository,
    ITeamStatsRepository,
    IFixtureRepository,
    INewsRepository,
    IContactRepository,
    IProfileRepository,
    INotificationLogRepository,
)
from core.interfaces.messaging import IEmailSender
from core.interfaces.auth import IAuthProvider, IFileStorage, AuthError

__all__ = [
    # Repositories
    "IPlayerRepository",
    "IPlayerStatsRepository",
    "ITeamStatsRepository",
    "IFixtureRepository",
    "INewsRepository",
    "IContactRepository",
    "IProfileRepository",
    "INotificationLogRepository",
    # Messaging
    "IEmailSender",
    # Platform services
    "IAuthProvider",
    "IFileStorage",
    "AuthError",
]
