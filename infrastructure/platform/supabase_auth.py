"""
Supabase Auth and Storage adapters.
"""

import logging
from typing import Optional, List
from supabase import AuthError as SupabaseAuthError
from core.domain.models import AuthUser
from core.interfaces.auth import IAuthProvider, IFileStorage, AuthError
from infrastructure.database.supabase_client import supabase, run_sync, anon_client

logger = logging.getLogger(__name__)


class SupabaseAuthProvider(IAuthProvider):
    """Password auth against the hosted identity service.

    Each sign-in/sign-up uses a fresh anon client: the shared service client
    must never hold a visitor's session.
    """

    @run_sync
    def _sign_in_sync(self, email: str, password: str) -> AuthUser:
        try:
            response = anon_client().auth.sign_in_with_password({"email": email, "password": password})
        except SupabaseAuthError as e:
            raise AuthError(e.message) from e
        if not response.user:
            raise AuthError("Invalid login credentials")
        return AuthUser(
            id=str(response.user.id),
            email=response.user.email,
            access_token=response.session.access_token if response.session else None,
        )

    async def sign_in(self, email: str, password: str) -> AuthUser:
        return await self._sign_in_sync(email, password)

    @run_sync
    def _sign_up_sync(self, email: str, password: str) -> AuthUser:
        try:
            response = anon_client().auth.sign_up({"email": email, "password": password})
        except SupabaseAuthError as e:
            raise AuthError(e.message) from e
        if not response.user:
            raise AuthError("User creation failed")
        return AuthUser(id=str(response.user.id), email=response.user.email)

    async def sign_up(self, email: str, password: str) -> AuthUser:
        return await self._sign_up_sync(email, password)

    @run_sync
    def _sign_out_sync(self, access_token: str) -> None:
        supabase.auth.admin.sign_out(access_token)

    async def sign_out(self, access_token: Optional[str]) -> None:
        if not access_token:
            return
        try:
            await self._sign_out_sync(access_token)
        except SupabaseAuthError as e:
            # Token already expired on the backend - local session is dropped anyway
            logger.info(f"[AUTH] Backend sign-out skipped: {e.message}")

    @run_sync
    def _get_user_sync(self, access_token: str) -> Optional[AuthUser]:
        try:
            response = anon_client().auth.get_user(access_token)
        except SupabaseAuthError as e:
            logger.info(f"[AUTH] Token rejected: {e.message}")
            return None
        if not response or not response.user:
            return None
        return AuthUser(id=str(response.user.id), email=response.user.email, access_token=access_token)

    async def get_user(self, access_token: str) -> Optional[AuthUser]:
        return await self._get_user_sync(access_token)


class SupabaseFileStorage(IFileStorage):
    """Public image bucket"""

    def __init__(self, bucket: str = "media"):
        self.bucket = bucket

    @run_sync
    def _upload_sync(self, path: str, data: bytes, content_type: str) -> None:
        supabase.storage.from_(self.bucket).upload(path, data, {"content-type": content_type})

    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        await self._upload_sync(path, data, content_type)

    def public_url(self, path: str) -> str:
        return supabase.storage.from_(self.bucket).get_public_url(path)

    @run_sync
    def _remove_sync(self, paths: List[str]) -> None:
        supabase.storage.from_(self.bucket).remove(paths)

    async def remove(self, paths: List[str]) -> None:
        await self._remove_sync(paths)
