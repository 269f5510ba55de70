from typing import Optional

import httpx

from showcase_site.core.config import Settings
from showcase_site.core.providers.base import MessageProvider
from showcase_site.core.providers.mailgun import MailgunProvider
from showcase_site.core.providers.web3forms import Web3FormsProvider


def build_provider(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> MessageProvider:
    """Provider selected by MAIL_PROVIDER"""
    if settings.mail_provider == "web3forms":
        return Web3FormsProvider(
            access_key=settings.web3forms_access_key,
            endpoint=settings.web3forms_endpoint,
            form_encoded=settings.web3forms_form_encoded,
            timeout=settings.provider_timeout_seconds,
            client=client,
        )
    return MailgunProvider(
        api_key=settings.mailgun_api_key,
        domain=settings.mailgun_domain,
        recipient=settings.recipient_email,
        base_url=settings.mailgun_base_url,
        timeout=settings.provider_timeout_seconds,
        client=client,
    )


__all__ = ["MessageProvider", "MailgunProvider", "Web3FormsProvider", "build_provider"]
