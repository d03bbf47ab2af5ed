"""Email sender that records and logs messages instead of delivering them."""

from datetime import datetime, timezone
from typing import Any, Dict, List

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger
from src.service.notification.app.interface import IEmailSender


class LoggingEmailSender(IEmailSender):
    def __init__(self, *, sender: str = settings.EMAIL_SENDER_ADDRESS) -> None:
        self.sender = sender
        self.sent_emails: List[Dict[str, Any]] = []  # inspected by tests

    @Logger.io(truncate_content=True)
    async def send_email(self, *, to: str, subject: str, body: str) -> bool:
        email_data = {
            'from': self.sender,
            'to': to,
            'subject': subject,
            'body': body,
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_emails.append(email_data)
        Logger.base.info(f'📧 [EMAIL] {self.sender} -> {to}: {subject}')
        return True
