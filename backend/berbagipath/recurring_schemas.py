from pydantic import Field
from typing import Optional, Literal
import datetime
from .schemas import ApiModel

Frequency = Literal['minute', 'daily', 'weekly', 'monthly']


class RecurringDonationCreate(ApiModel):
    user_id: str = Field(min_length=1)
    campaign_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    frequency: Frequency = 'monthly'
    is_active: bool = True


class RecurringDonationUpdate(ApiModel):
    campaign_id: Optional[str] = None
    amount: Optional[float] = Field(None, gt=0)
    frequency: Optional[Frequency] = None
    is_active: Optional[bool] = None


class RecurringDonation(ApiModel):
    id: str
    user_id: str
    campaign_id: str
    campaign_title: Optional[str] = None
    amount: float
    frequency: str
    is_active: bool
    last_executed_at: Optional[datetime.datetime] = None
    next_execution_at: Optional[datetime.datetime] = None
    created_at: datetime.datetime
