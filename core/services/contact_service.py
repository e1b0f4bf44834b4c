"""
Contact service - public contact form and the admin inbox.
"""

import logging
from typing import Optional, List, Tuple
from uuid import UUID
from pydantic import ValidationError
from core.domain.models import ContactCreate, ContactMessage, ContactStatus
from core.interfaces.repositories import IContactRepository

logger = logging.getLogger(__name__)

# First failing field wins, in form order
CONTACT_FIELD_ERRORS = [
    ("name", "Please enter a shorter name (200 characters at most)."),
    ("email", "Please enter a valid email address."),
    ("subject", "Please enter a shorter subject (200 characters at most)."),
    ("message", "Your message is too long."),
]


class ContactService:
    """Service for contact form submissions"""

    def __init__(self, contact_repo: IContactRepository):
        self.contact_repo = contact_repo

    async def submit(self, name: str, email: str, message: str, subject: Optional[str] = None) -> Tuple[bool, str]:
        """
        Store a contact form submission.
        Returns: (success, message)
        """
        name, email, message = (name or "").strip(), (email or "").strip(), (message or "").strip()
        if not name or not email or not message:
            return False, "Please fill in all required fields."
        try:
            contact = ContactCreate(name=name, email=email, message=message, subject=(subject or "").strip() or None)
        except ValidationError as e:
            fields = {err["loc"][0] for err in e.errors() if err.get("loc")}
            for field_name, text in CONTACT_FIELD_ERRORS:
                if field_name in fields:
                    return False, text
            return False, "Please check your message and try again."

        await self.contact_repo.create(contact)
        logger.info(f"[CONTACT] New message from {contact.email}")
        return True, "Thank you for your message! We will get back to you soon."

    async def list_messages(self) -> List[ContactMessage]:
        return await self.contact_repo.get_all()

    async def open_message(self, contact_id: UUID) -> Optional[ContactMessage]:
        """Fetch one message; unread messages become read"""
        contact = await self.contact_repo.get_by_id(contact_id)
        if contact and contact.status == ContactStatus.UNREAD:
            await self.contact_repo.mark_read(contact_id)
            contact = contact.model_copy(update={"status": ContactStatus.READ})
        return contact

    async def delete_message(self, contact_id: UUID) -> None:
        await self.contact_repo.delete(contact_id)

    @staticmethod
    def unread_count(messages: List[ContactMessage]) -> int:
        return sum(1 for m in messages if m.status == ContactStatus.UNREAD)
