"""
Feature flags and tunables for the club site.
Everything reads from env with a safe default.
"""

import os


class Features:
    """Feature toggles - set via env vars or defaults"""

    # === NOTIFICATIONS ===
    # Email all active players when a fixture is created or its status changes
    NOTIFICATIONS_ENABLED: bool = os.getenv("NOTIFICATIONS_ENABLED", "true").lower() == "true"

    # === QUERY CACHE ===
    QUERY_RETRIES: int = int(os.getenv("QUERY_RETRIES", "1"))
    QUERY_CACHE_TTL: int = int(os.getenv("QUERY_CACHE_TTL", "300"))  # seconds

    # === RATE LIMITING (requests per minute per client) ===
    CONTACT_RATE_LIMIT: int = int(os.getenv("CONTACT_RATE_LIMIT", "5"))
    SIGN_IN_RATE_LIMIT: int = int(os.getenv("SIGN_IN_RATE_LIMIT", "10"))

    # === DEBUG ===
    DEBUG_MODE: bool = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def to_dict(cls) -> dict:
        """Get all features as dict (useful for logging)"""
        return {
            "notifications_enabled": cls.NOTIFICATIONS_ENABLED,
            "query_retries": cls.QUERY_RETRIES,
            "query_cache_ttl": cls.QUERY_CACHE_TTL,
            "contact_rate_limit": cls.CONTACT_RATE_LIMIT,
            "sign_in_rate_limit": cls.SIGN_IN_RATE_LIMIT,
            "debug_mode": cls.DEBUG_MODE,
        }


# Shortcut
features = Features()
