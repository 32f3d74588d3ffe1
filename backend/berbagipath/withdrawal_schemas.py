from pydantic import Field
from typing import Optional
import datetime
from .schemas import ApiModel


class WithdrawalCreate(ApiModel):
    campaign_id: str
    user_id: str
    amount: float = Field(gt=0)
    bank_name: str
    account_number: str
    account_holder: str


class Withdrawal(ApiModel):
    id: str
    campaign_id: str
    user_id: str
    amount: float
    bank_name: str
    account_number: str
    account_holder: str
    status: str
    admin_note: Optional[str] = None
    created_at: datetime.datetime
    campaign_title: Optional[str] = None
    organizer_name: Optional[str] = None
    organizer_email: Optional[str] = None
