"""
Mailgun transactional email provider.

Sends the contact message through the Mailgun messages API:
POST {base_url}/v3/{domain}/messages with basic auth `api:{api_key}`.
A successful send returns a JSON body carrying the queued message `id`.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from showcase_site.core.compose import OutboundMessage
from showcase_site.core.providers.base import MessageProvider
from showcase_site.models.contact import DeliveryResult, DeliveryStatus

logger = logging.getLogger(__name__)


class MailgunProvider(MessageProvider):
    name = "Mailgun"

    def __init__(
        self,
        api_key: Optional[str],
        domain: str,
        recipient: str,
        base_url: str = "https://api.mailgun.net",
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(timeout=timeout, client=client)
        self.api_key = api_key
        self.domain = domain
        self.recipient = recipient
        self.base_url = base_url.rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def url(self) -> str:
        return f"{self.base_url}/v3/{self.domain}/messages"

    @property
    def sender_address(self) -> str:
        return f"noreply@{self.domain}"

    def build_request(self, message: OutboundMessage) -> Dict[str, Any]:
        logger.info(
            f"📧 Preparing to send email via Mailgun: to={self.recipient}, from={self.sender_address}, "
            f"subject={message.subject!r}, sender={message.sender_name} <{message.reply_to}>"
        )
        return {
            "auth": ("api", self.api_key),
            "data": {
                "from": f"{message.sender_name} <{self.sender_address}>",
                "to": self.recipient,
                "subject": message.subject,
                "text": message.text,
                "h:Reply-To": message.reply_to,
            },
        }

    def interpret(self, response: httpx.Response, body: Dict[str, Any]) -> DeliveryResult:
        message_id = body.get("id")
        if message_id:
            logger.info(f"✅ Email sent successfully: {message_id}")
            return DeliveryResult.sent(provider_id=str(message_id), http_status=response.status_code)

        detail = body.get("message") or "Mailgun response did not include a message id"
        logger.error(f"❌ Mailgun error: {body}")
        return DeliveryResult.failed(DeliveryStatus.UPSTREAM_REJECTED, detail, http_status=response.status_code)
