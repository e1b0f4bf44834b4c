"""
Transactional email senders.

Resend is called with a server-side API key; EmailJS with the template
configured in its dashboard (to_name, to_email, subject, message, team_name).
"""

import logging
import httpx
from typing import Optional
from core.interfaces.messaging import IEmailSender

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
EMAILJS_API_URL = "https://api.emailjs.com/api/v1.0/email/send"


class ResendEmailSender(IEmailSender):
    """Plain-text email through the Resend HTTP API"""

    def __init__(self, api_key: str, email_from: str, team_name: str, timeout: float = 15.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key
        self.email_from = email_from
        self.team_name = team_name
        self.timeout = timeout
        self.transport = transport

    @property
    def provider(self) -> str:
        return "resend"

    def build_body(self, first_name: str, message: str) -> str:
        return f"Hello {first_name},\n\n{message}\n\nRegards,\n{self.team_name} Team"

    async def send(self, to_email: str, to_name: str, subject: str, message: str) -> bool:
        first_name = to_name.split(" ")[0] if to_name else ""
        payload = {
            "from": self.email_from,
            "to": to_email,
            "subject": subject,
            "text": self.build_body(first_name, message),
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                RESEND_API_URL,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json=payload,
            )
        if response.is_success:
            return True
        logger.error(f"[EMAIL] Resend rejected mail to {to_email}: {response.status_code} {response.text[:200]}")
        return False


class EmailJSEmailSender(IEmailSender):
    """Template email through the EmailJS REST endpoint"""

    def __init__(self, service_id: str, template_id: str, public_key: str,
                 team_name: str, private_key: Optional[str] = None, timeout: float = 15.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.service_id = service_id
        self.template_id = template_id
        self.public_key = public_key
        self.private_key = private_key
        self.team_name = team_name
        self.timeout = timeout
        self.transport = transport

    @property
    def provider(self) -> str:
        return "emailjs"

    async def send(self, to_email: str, to_name: str, subject: str, message: str) -> bool:
        payload = {
            "service_id": self.service_id,
            "template_id": self.template_id,
            "user_id": self.public_key,
            "template_params": {
                "to_name": to_name,
                "to_email": to_email,
                "subject": subject,
                "message": message,
                "team_name": self.team_name,
            },
        }
        if self.private_key:
            payload["accessToken"] = self.private_key

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(EMAILJS_API_URL, json=payload)
        if response.is_success:
            return True
        logger.error(f"[EMAIL] EmailJS rejected mail to {to_email}: {response.status_code} {response.text[:200]}")
        return False


def create_email_sender(settings) -> IEmailSender:
    """Pick the configured provider"""
    if settings.email_provider == "emailjs":
        return EmailJSEmailSender(
            service_id=settings.emailjs_service_id,
            template_id=settings.emailjs_template_id,
            public_key=settings.emailjs_public_key,
            private_key=settings.emailjs_private_key,
            team_name=settings.team_name,
        )
    return ResendEmailSender(
        api_key=settings.resend_api_key,
        email_from=settings.email_from,
        team_name=settings.team_name,
    )
