from pydantic import Field
from typing import Optional
import datetime
from .schemas import ApiModel

MIN_TOPUP = 10000


class TopupCreate(ApiModel):
    user_id: str = Field(min_length=1)
    amount: float = Field(ge=MIN_TOPUP)
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class Topup(ApiModel):
    id: str
    user_id: str
    amount: float
    status: str
    external_id: Optional[str] = None
    payment_url: Optional[str] = None
    payment_method: Optional[str] = None
    payment_channel: Optional[str] = None
    created_at: datetime.datetime
