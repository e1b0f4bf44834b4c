"""English strings for site toasts, banners and page copy."""

EN_STRINGS = {
    # === AUTH ===
    "signed_in": "Welcome back!",
    "signed_out": "You have been signed out.",
    "session_timeout": "Your session has expired due to inactivity. Please sign in again.",
    "sign_in_required": "Please sign in to continue.",
    "not_authorized": "You do not have permission to view that page.",
    "access_revoked": "Your administrator access is no longer valid. Please sign in again.",
    "too_many_attempts": "Too many attempts. Please wait a minute and try again.",

    # === PLAYERS ===
    "player_created": "Player {name} has been added.",
    "player_updated": "Player {name} has been updated.",
    "player_deleted": "Player has been deleted.",
    "player_not_found": "Player not found.",

    # === STATS ===
    "stats_updated": "Player statistics have been updated successfully.",
    "stats_deleted": "Statistics row has been deleted.",
    "team_stats_saved": "Team statistics for {season} have been saved.",
    "team_stats_deleted": "Team statistics have been deleted.",

    # === FIXTURES ===
    "fixture_created": "Match against {opponent} has been scheduled.",
    "fixture_updated": "Match against {opponent} has been updated.",
    "fixture_deleted": "Match has been deleted.",
    "fixture_not_found": "Match not found.",
    "notifications_sent": "Sent notifications to {sent} of {total} players.",
    "notifications_none": "No active players with an email address to notify.",

    # === NEWS ===
    "article_created": "The new news article has been created successfully.",
    "article_updated": "The news article has been updated successfully.",
    "article_deleted": "The news article has been deleted.",
    "article_not_found": "Article not found.",

    # === CONTACTS ===
    "contact_deleted": "Message has been deleted.",
    "contact_not_found": "Message not found.",

    # === GENERIC ===
    "form_invalid": "Please check the highlighted fields: {fields}",
    "backend_error": "Something went wrong talking to the server: {error}",
    "server_error": "An unexpected error occurred. Please try again.",
    "page_not_found": "The page you are looking for does not exist.",
}
