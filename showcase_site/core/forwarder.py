"""
Relays validated contact submissions to the configured messaging provider.

Each call is a single at-most-once delivery attempt: no retry, no queue.
The outcome is always returned as a DeliveryResult, never raised. A provider
without credentials reports `unconfigured` itself without calling out.
"""

import logging

from showcase_site.core.compose import compose_message
from showcase_site.core.providers.base import MessageProvider
from showcase_site.models.contact import ContactSubmission, DeliveryResult, DeliveryStatus

logger = logging.getLogger(__name__)


class ContactForwarder:
    def __init__(self, provider: MessageProvider, site_name: str):
        self.provider = provider
        self.site_name = site_name

    async def forward(self, submission: ContactSubmission) -> DeliveryResult:
        message = compose_message(submission, self.site_name)

        try:
            result = await self.provider.send(message)
        except Exception as e:
            logger.exception(f"❌ Unexpected error while sending via {self.provider.name}: {str(e)}")
            return DeliveryResult.failed(DeliveryStatus.UPSTREAM_UNAVAILABLE, f"{type(e).__name__}: {str(e)}")

        if result.success:
            logger.info(f"✅ Contact submission from {submission.email} delivered via {self.provider.name}")
        else:
            logger.error(
                f"❌ Contact submission from {submission.email} not delivered via {self.provider.name}: "
                f"{result.status.value} - {result.reason}"
            )
        return result
