"""
Auth and storage interfaces - the hosted platform's identity and file services.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from core.domain.models import AuthUser


class AuthError(Exception):
    """Backend rejected an auth call; message is safe to show to the user"""


class IAuthProvider(ABC):
    """Interface for the hosted auth service"""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> AuthUser:
        """Password sign-in. Raises AuthError on bad credentials."""
        pass

    @abstractmethod
    async def sign_up(self, email: str, password: str) -> AuthUser:
        """Register a new user. Raises AuthError when the backend refuses."""
        pass

    @abstractmethod
    async def sign_out(self, access_token: Optional[str]) -> None:
        pass

    @abstractmethod
    async def get_user(self, access_token: str) -> Optional[AuthUser]:
        """Resolve an access token to its user, None when invalid or expired"""
        pass


class IFileStorage(ABC):
    """Interface for the hosted object storage bucket"""

    @abstractmethod
    async def upload(self, path: str, data: bytes, content_type: str) -> None:
        pass

    @abstractmethod
    def public_url(self, path: str) -> str:
        pass

    @abstractmethod
    async def remove(self, paths: List[str]) -> None:
        pass
