from pydantic import Field
from typing import Optional
import datetime
from .schemas import ApiModel


class DonationCreate(ApiModel):
    campaign_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    payment_method: str = Field(min_length=1)
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    is_anonymous: bool = False


class WalletDonationCreate(ApiModel):
    campaign_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None
    is_anonymous: bool = False


class Donation(ApiModel):
    id: str
    campaign_id: str
    user_id: Optional[str] = None
    amount: float
    donor_name: Optional[str] = None
    donor_email: Optional[str] = None
    message: Optional[str] = None
    is_anonymous: bool
    payment_method: Optional[str] = None
    payment_channel: Optional[str] = None
    status: str
    external_id: Optional[str] = None
    payment_url: Optional[str] = None
    paid_at: Optional[datetime.datetime] = None
    created_at: datetime.datetime


class Payment(ApiModel):
    """Invoice handed back by the gateway (or the mock gateway)."""
    gateway: str
    invoice_id: Optional[str] = None
    external_id: str
    invoice_url: Optional[str] = None
    payment_code: Optional[str] = None
    amount: float
    expired_at: Optional[str] = None
