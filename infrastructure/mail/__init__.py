from infrastructure.mail.senders import (
    ResendEmailSender,
    EmailJSEmailSender,
    create_email_sender,
)

__all__ = [
    "ResendEmailSender",
    "EmailJSEmailSender",
    "create_email_sender",
]
