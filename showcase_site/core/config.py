from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from pathlib import Path
from typing import List, Literal, Optional

DEFAULT_STATIC_DIR = Path(__file__).resolve().parent.parent / "public"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: LogLevel = "INFO"

    # Which provider relays contact submissions
    mail_provider: Literal["mailgun", "web3forms"] = "mailgun"

    # Mailgun
    mailgun_api_key: Optional[str] = None
    mailgun_domain: str = "mg.castledr.com"
    mailgun_base_url: str = "https://api.mailgun.net"  # https://api.eu.mailgun.net for EU domains

    # Web3Forms
    web3forms_access_key: Optional[str] = None
    web3forms_endpoint: str = "https://api.web3forms.com/submit"
    web3forms_form_encoded: bool = False

    # Contact form
    recipient_email: str = "rgraham@castlecs.com"
    site_name: str = "Showcase News Group"
    require_valid_email: bool = True
    provider_timeout_seconds: float = 15.0
    max_body_bytes: int = 10 * 1024 * 1024

    # CORS settings
    allowed_origins: List[str] = ["*"]

    static_dir: Path = DEFAULT_STATIC_DIR

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", frozen=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v


@lru_cache
def get_settings():
    return Settings()
