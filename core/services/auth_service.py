"""
Auth service - admin sign-in, player sign-up and role checks.
"""

import logging
from typing import Optional, Tuple
from core.domain.models import AuthUser, UserRole
from core.domain.constants import MIN_PASSWORD_LENGTH, ADMIN_ONLY_MESSAGE, ROLE_CHECK_SECONDS
from core.interfaces.auth import IAuthProvider, AuthError
from core.interfaces.repositories import IProfileRepository
from core.utils.query_cache import QueryCache

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication and authorization"""

    def __init__(self, auth_provider: IAuthProvider, profile_repo: IProfileRepository, cache: Optional[QueryCache] = None):
        self.auth_provider = auth_provider
        self.profile_repo = profile_repo
        # Short-lived: token and role checks on every admin request
        self.cache = cache or QueryCache(ttl_seconds=ROLE_CHECK_SECONDS)

    async def _has_admin_role(self, user_id: str) -> bool:
        profile = await self.profile_repo.get_by_id(user_id)
        return bool(profile and profile.role == UserRole.ADMIN)

    async def is_admin(self, user_id: Optional[str]) -> bool:
        """True only for a profile with role admin; lookup failures count as not admin"""
        if not user_id:
            return False
        try:
            return await self._has_admin_role(user_id)
        except Exception as e:
            logger.error(f"[AUTH] Role lookup failed for {user_id}: {e}")
            return False

    async def _token_owner(self, access_token: str) -> Optional[str]:
        user = await self.auth_provider.get_user(access_token)
        return user.id if user else None

    async def verify_admin(self, user_id: Optional[str], access_token: Optional[str]) -> bool:
        """
        Re-check a signed-in session against the backend: the access token must
        still resolve to the same user and that user must still be an admin.
        Backend errors propagate; only a definite answer is cached.
        """
        if not user_id or not access_token:
            return False
        owner = await self.cache.fetch(("authUser", access_token), lambda: self._token_owner(access_token))
        if owner != user_id:
            return False
        return await self.cache.fetch(("profiles", user_id), lambda: self._has_admin_role(user_id))

    async def sign_in(self, email: str, password: str) -> Tuple[bool, str, Optional[AuthUser]]:
        """
        Password sign-in for the admin dashboard.
        Returns: (success, message, user)
        """
        try:
            user = await self.auth_provider.sign_in((email or "").strip(), password or "")
        except AuthError as e:
            logger.info(f"[AUTH] Sign-in refused for {email}: {e}")
            return False, str(e), None

        if not await self.is_admin(user.id):
            logger.warning(f"[AUTH] Non-admin sign-in attempt: {user.id}")
            await self.auth_provider.sign_out(user.access_token)
            return False, ADMIN_ONLY_MESSAGE, None

        self.cache.remove("profiles", user.id)
        logger.info(f"[AUTH] Admin signed in: {user.id}")
        return True, "Signed in", user

    async def sign_up(
        self,
        email: str,
        password: str,
        confirm_password: str,
        player_number: Optional[str] = None,
        position: Optional[str] = None,
    ) -> Tuple[bool, str, Optional[AuthUser]]:
        """
        Register a player account and its profile row.
        Returns: (success, message, user)
        """
        if password != confirm_password:
            return False, "Passwords do not match", None
        if len(password or "") < MIN_PASSWORD_LENGTH:
            return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long", None

        try:
            user = await self.auth_provider.sign_up((email or "").strip(), password)
        except AuthError as e:
            text = str(e)
            if "email" in text.lower():
                return False, "Invalid email address or email already in use", None
            if "password" in text.lower():
                return False, f"Password must be at least {MIN_PASSWORD_LENGTH} characters long", None
            return False, text, None

        await self.profile_repo.create(
            user.id,
            UserRole.PLAYER,
            player_number=player_number or None,
            position=position or None,
        )
        logger.info(f"[AUTH] New player account {user.id}")
        return True, "Account created. Please check your email for verification.", user

    async def sign_out(self, access_token: Optional[str]) -> None:
        if access_token:
            self.cache.remove("authUser", access_token)
        await self.auth_provider.sign_out(access_token)

    async def promote(self, user_id: str) -> bool:
        profile = await self.profile_repo.set_role(user_id, UserRole.ADMIN)
        self.cache.remove("profiles", user_id)
        if profile:
            logger.info(f"[AUTH] Promoted {user_id} to admin")
        return profile is not None
