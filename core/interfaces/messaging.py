"""
Messaging interfaces - abstractions for outgoing email.
This allows swapping transactional email providers with the same business logic.
"""

from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Interface for transactional email providers (Resend, EmailJS, etc.)"""

    @property
    @abstractmethod
    def provider(self) -> str:
        """Short provider name for logs"""
        pass

    @abstractmethod
    async def send(
        self,
        to_email: str,
        to_name: str,
        subject: str,
        message: str,
    ) -> bool:
        """Send one email. Returns False when the provider rejected it."""
        pass
