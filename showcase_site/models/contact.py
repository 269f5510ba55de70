from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class ContactSubmission(BaseModel):
    """A normalized contact-form submission. Lives for a single request."""
    name: str
    email: str
    message: str
    company: Optional[str] = None
    phone: Optional[str] = None
    partnership_type: Optional[str] = Field(None, alias="partnershipType")
    form_type: Optional[str] = Field(None, alias="formType")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @property
    def is_partnership(self) -> bool:
        return self.form_type == "partnership"


class ContactResponse(BaseModel):
    success: bool
    message: str


class DeliveryStatus(str, Enum):
    SENT = "sent"
    UNCONFIGURED = "unconfigured"
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    UPSTREAM_REJECTED = "upstream_rejected"


class DeliveryResult(BaseModel):
    """Outcome of one attempt to hand a message to a provider"""
    status: DeliveryStatus
    reason: Optional[str] = None
    provider_id: Optional[str] = None
    http_status: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.status == DeliveryStatus.SENT

    @classmethod
    def sent(cls, provider_id: Optional[str] = None, http_status: Optional[int] = None) -> "DeliveryResult":
        return cls(status=DeliveryStatus.SENT, provider_id=provider_id, http_status=http_status)

    @classmethod
    def failed(cls, status: DeliveryStatus, reason: str, http_status: Optional[int] = None) -> "DeliveryResult":
        return cls(status=status, reason=reason, http_status=http_status)
