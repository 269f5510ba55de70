"""
Web3Forms form-relay provider.

Web3Forms delivers submissions to the inbox tied to the access key, so no
recipient address is sent. The API answers with `{"success": true|false,
"message": "..."}`. Both JSON and form-encoded request bodies are accepted.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from showcase_site.core.compose import OutboundMessage
from showcase_site.core.providers.base import MessageProvider
from showcase_site.models.contact import DeliveryResult, DeliveryStatus

logger = logging.getLogger(__name__)


class Web3FormsProvider(MessageProvider):
    name = "Web3Forms"

    def __init__(
        self,
        access_key: Optional[str],
        endpoint: str = "https://api.web3forms.com/submit",
        form_encoded: bool = False,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(timeout=timeout, client=client)
        self.access_key = access_key
        self.endpoint = endpoint
        self.form_encoded = form_encoded

    @property
    def is_configured(self) -> bool:
        return bool(self.access_key)

    @property
    def url(self) -> str:
        return self.endpoint

    def build_payload(self, message: OutboundMessage) -> Dict[str, str]:
        submission = message.submission
        payload = {
            "access_key": self.access_key,
            "subject": message.subject,
            "from_name": message.sender_name,
            "name": submission.name,
            "email": submission.email,
            "replyto": message.reply_to,
            "message": message.text,
            "form_type": message.form_label,
        }
        # Optional fields are only sent when present
        if submission.company:
            payload["company"] = submission.company
        if submission.phone:
            payload["phone"] = submission.phone
        if submission.partnership_type:
            payload["partnership_type"] = submission.partnership_type
        return payload

    def build_request(self, message: OutboundMessage) -> Dict[str, Any]:
        logger.info(
            f"📧 Preparing to send submission via Web3Forms: subject={message.subject!r}, "
            f"sender={message.sender_name} <{message.reply_to}>"
        )
        payload = self.build_payload(message)
        headers = {"Accept": "application/json"}
        if self.form_encoded:
            return {"data": payload, "headers": headers}
        return {"json": payload, "headers": headers}

    def interpret(self, response: httpx.Response, body: Dict[str, Any]) -> DeliveryResult:
        if body.get("success") is True:
            logger.info(f"✅ Web3Forms accepted submission: {body.get('message', '')}")
            return DeliveryResult.sent(http_status=response.status_code)

        detail = body.get("message") or "Web3Forms did not report success"
        logger.error(f"❌ Web3Forms error: {body}")
        return DeliveryResult.failed(DeliveryStatus.UPSTREAM_REJECTED, detail, http_status=response.status_code)
