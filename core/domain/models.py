"""
Domain models - the core of business logic.
These models mirror the hosted tables and are transport-agnostic.
"""

from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID
from enum import Enum


# === ENUMS ===

class PlayerStatus(str, Enum):
    ACTIVE = "active"
    INJURED = "injured"
    SUSPENDED = "suspended"
    INACTIVE = "inactive"


class FixtureStatus(str, Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"
    POSTPONED = "postponed"
    CANCELED = "canceled"
    CANCELLED = "cancelled"


class ContactStatus(str, Enum):
    UNREAD = "unread"
    READ = "read"


class UserRole(str, Enum):
    ADMIN = "admin"
    PLAYER = "player"


class NotificationKind(str, Enum):
    """Which email template a fixture change triggers"""
    NEW = "new"
    UPDATE = "update"
    COMPLETED = "completed"
    CANCEL = "cancel"


# === PLAYER ===

class PlayerBase(BaseModel):
    """Fields shared by the admin form and the stored row"""
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: Optional[str] = None
    player_number: Optional[int] = Field(default=None, ge=0, le=99)
    position: Optional[str] = None
    birth_date: Optional[date] = None
    height: Optional[int] = Field(default=None, ge=0)  # cm
    weight: Optional[int] = Field(default=None, ge=0)  # kg
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    joined_date: Optional[date] = None
    status: PlayerStatus = PlayerStatus.ACTIVE


class PlayerCreate(PlayerBase):
    """Data for creating a player"""
    created_by: Optional[str] = None


class PlayerUpdate(BaseModel):
    """Data for updating a player - every field optional"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    player_number: Optional[int] = None
    position: Optional[str] = None
    birth_date: Optional[date] = None
    height: Optional[int] = None
    weight: Optional[int] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    joined_date: Optional[date] = None
    status: Optional[PlayerStatus] = None


class Player(PlayerBase):
    """Full player model"""
    id: UUID
    first_name: str
    last_name: str
    status: str = PlayerStatus.ACTIVE.value
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


# === PLAYER STATS ===

class PlayerStatCreate(BaseModel):
    """One season of statistics for one player"""
    player_id: UUID
    season: str = Field(pattern=r"^\d{4}-\d{4}$")
    matches_played: int = Field(default=0, ge=0)
    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    yellow_cards: int = Field(default=0, ge=0)
    red_cards: int = Field(default=0, ge=0)
    created_by: Optional[str] = None


class PlayerStat(BaseModel):
    id: UUID
    player_id: UUID
    season: str
    matches_played: int = 0
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    minutes_played: int = 0
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CareerTotals(BaseModel):
    """Sum of a player's season rows"""
    seasons: int = 0
    matches_played: int = 0
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
    minutes_played: int = 0


# === TEAM STATS ===

class TeamStatCreate(BaseModel):
    season: str = Field(pattern=r"^\d{4}-\d{4}$")
    matches_played: int = Field(default=0, ge=0)
    wins: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)
    goals_for: int = Field(default=0, ge=0)
    goals_against: int = Field(default=0, ge=0)
    clean_sheets: int = Field(default=0, ge=0)
    created_by: Optional[str] = None


class TeamStat(BaseModel):
    id: UUID
    season: str
    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    clean_sheets: int = 0
    updated_at: Optional[datetime] = None
    created_by: Optional[str] = None

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


# === FIXTURE ===

class FixtureCreate(BaseModel):
    """Data for creating or replacing a fixture"""
    match_date: datetime
    opponent: str = Field(min_length=1)
    competition: str = ""
    location: str = ""
    is_home_game: bool = True
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    status: FixtureStatus = FixtureStatus.UPCOMING
    ticket_link: Optional[str] = None
    notes: Optional[str] = None
    opponent_logo_url: Optional[str] = None
    created_by: Optional[str] = None


class Fixture(BaseModel):
    """Full fixture model"""
    id: UUID
    match_date: datetime
    opponent: str
    competition: str = ""
    location: str = ""
    is_home_game: bool = True
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    status: str = FixtureStatus.UPCOMING.value
    ticket_link: Optional[str] = None
    notes: Optional[str] = None
    opponent_logo_url: Optional[str] = None

    class Config:
        from_attributes = True

    @field_validator('competition', 'location', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return v or ""

    @property
    def our_score(self) -> Optional[int]:
        return self.home_score if self.is_home_game else self.away_score

    @property
    def their_score(self) -> Optional[int]:
        return self.away_score if self.is_home_game else self.home_score


# === NEWS ===

class NewsCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    summary: str = ""
    content: str = ""
    featured_image_url: Optional[str] = None
    is_published: bool = False
    publish_date: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    created_by: Optional[str] = None


class NewsArticle(BaseModel):
    id: UUID
    title: str
    summary: Optional[str] = ""
    content: Optional[str] = ""
    featured_image_url: Optional[str] = None
    is_published: bool = False
    publish_date: Optional[datetime] = None
    tags: List[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('tags', mode='before')
    @classmethod
    def none_to_list(cls, v):
        return v or []

    @property
    def category(self) -> Optional[str]:
        return self.tags[0] if self.tags else None


# === CONTACT ===

class ContactCreate(BaseModel):
    """Public contact form submission"""
    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    subject: Optional[str] = Field(default=None, max_length=200)
    message: str = Field(min_length=1, max_length=5000)


class ContactMessage(BaseModel):
    id: UUID
    name: str
    email: str
    subject: Optional[str] = None
    message: str
    status: ContactStatus = ContactStatus.UNREAD
    created_at: Optional[datetime] = None


# === AUTH / PROFILES ===

class AuthUser(BaseModel):
    """Signed-in backend user, as far as the site needs it"""
    id: str
    email: Optional[str] = None
    access_token: Optional[str] = None


class Profile(BaseModel):
    id: UUID
    role: UserRole = UserRole.PLAYER
    player_number: Optional[str] = None
    position: Optional[str] = None
    created_at: Optional[datetime] = None


# === NOTIFICATIONS ===

class NotificationLog(BaseModel):
    player_id: UUID
    fixture_id: UUID
    notification_type: str = "email"
    subject: str
    sent_at: datetime


class NotificationResult(BaseModel):
    """Outcome of one fixture notification run"""
    kind: Optional[NotificationKind] = None
    total: int = 0
    sent: int = 0
    failed: int = 0

    @property
    def message(self) -> str:
        return f"Sent notifications to {self.sent} of {self.total} players"
