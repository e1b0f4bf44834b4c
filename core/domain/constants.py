"""
Domain constants - positions, categories, status groupings and limits.
Centralized here for easy modification.
"""

# Roster is always shown in this order
POSITIONS = ["Goalkeeper", "Defender", "Midfielder", "Forward"]

NEWS_CATEGORIES = ["Match Reports", "Team News", "Transfer News", "Community", "News"]
ALL_FILTER = "All"
OTHER_COMPETITION = "Other"
COMPETITIONS = ["League", "Cup", "Friendly", "Tournament"]

# Fixture status -> public fixtures tab
FIXTURE_TABS = ["upcoming", "completed", "postponed_or_cancelled"]
STATUS_TO_TAB = {
    "upcoming": "upcoming",
    "in progress": "upcoming",
    "completed": "completed",
    "postponed": "postponed_or_cancelled",
    "cancelled": "postponed_or_cancelled",
    "canceled": "postponed_or_cancelled",
}
DEFAULT_TAB = "upcoming"

# Statuses that trigger a cancellation email
CANCELLED_STATUSES = {"postponed", "canceled", "cancelled"}
# Statuses hidden from the home-page fixture strip
HIDDEN_ON_HOME = {"postponed", "canceled", "cancelled"}
HOME_FIXTURE_LIMIT = 3
FEATURED_NEWS_LIMIT = 6

# Stats
MINUTES_PER_MATCH = 90
SEASON_WINDOW_PAST = 5
SEASON_WINDOW_FUTURE = 1
SEASON_ALL = "all"

# Auth
MIN_PASSWORD_LENGTH = 6
ADMIN_ONLY_MESSAGE = "Only administrators can access this system."

# Contact
DEFAULT_CONTACT_SUBJECT = "Website Contact Form"

# Media
IMAGE_FOLDERS = {"players", "news", "fixtures", "general"}
MAX_IMAGE_BYTES = 5 * 1024 * 1024
PLACEHOLDER_IMAGE = "https://via.placeholder.com/500x600?text=Player+Image"

# Admin dashboard tabs
ADMIN_TABS = ["players", "player_stats", "matches", "news", "team_stats", "contacts", "settings"]
DEFAULT_ADMIN_TAB = "players"

# === Rate Limiting (requests per interval) ===
RATE_LIMIT_INTERVAL_SECONDS = 60

# Session sweeper runs this often
SESSION_SWEEP_SECONDS = 60
# Admin token and role re-checks are reused for this long
ROLE_CHECK_SECONDS = 60
# How long a swept signed-in token still gets the "session expired" notice
SESSION_TOMBSTONE_SECONDS = 24 * 60 * 60


def season_label(start_year: int) -> str:
    """2024 -> '2024-2025'"""
    return f"{start_year}-{start_year + 1}"


def fixture_tab(status: str) -> str:
    """Public tab a fixture status belongs to (unknown statuses count as upcoming)"""
    return STATUS_TO_TAB.get((status or "").strip().lower(), DEFAULT_TAB)
