"""
Common plumbing for messaging providers.

A provider takes a composed OutboundMessage and makes exactly one HTTP call to
its API. It never raises for upstream problems: transport errors, non-2xx
statuses and unexpected bodies all come back as a failed DeliveryResult.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from showcase_site.core.compose import OutboundMessage
from showcase_site.models.contact import DeliveryResult, DeliveryStatus

logger = logging.getLogger(__name__)


class MessageProvider(ABC):
    name = "provider"

    def __init__(self, timeout: float = 15.0, client: Optional[httpx.AsyncClient] = None):
        self.timeout = timeout
        self._client = client

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        ...

    @property
    @abstractmethod
    def url(self) -> str:
        ...

    @abstractmethod
    def build_request(self, message: OutboundMessage) -> Dict[str, Any]:
        """Keyword arguments for the outbound httpx POST"""

    @abstractmethod
    def interpret(self, response: httpx.Response, body: Dict[str, Any]) -> DeliveryResult:
        """Map a 2xx JSON response to a DeliveryResult"""

    async def _post(self, **kwargs) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(self.url, timeout=self.timeout, **kwargs)
        async with httpx.AsyncClient() as client:
            return await client.post(self.url, timeout=self.timeout, **kwargs)

    async def send(self, message: OutboundMessage) -> DeliveryResult:
        if not self.is_configured:
            logger.error(f"{self.name} credential not configured")
            return DeliveryResult.failed(DeliveryStatus.UNCONFIGURED, f"{self.name} credential is not set")

        try:
            response = await self._post(**self.build_request(message))
        except httpx.HTTPError as e:
            logger.error(f"❌ {self.name} request failed: {type(e).__name__}: {str(e)}")
            return DeliveryResult.failed(DeliveryStatus.UPSTREAM_UNAVAILABLE, f"{type(e).__name__}: {str(e)}")

        logger.info(f"{self.name} response status: {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            body = None

        if not response.is_success:
            detail = body.get("message") if isinstance(body, dict) else response.text[:500]
            logger.error(f"❌ {self.name} error - Status: {response.status_code} - {detail}")
            return DeliveryResult.failed(
                DeliveryStatus.UPSTREAM_REJECTED,
                f"HTTP {response.status_code}: {detail}",
                http_status=response.status_code,
            )

        if not isinstance(body, dict):
            logger.error(f"❌ {self.name} returned a non-JSON body: {response.text[:500]}")
            return DeliveryResult.failed(
                DeliveryStatus.UPSTREAM_REJECTED,
                "Unexpected response body",
                http_status=response.status_code,
            )

        logger.debug(f"{self.name} response: {body}")
        return self.interpret(response, body)
