from pydantic import Field
from typing import Optional
import datetime
from .schemas import ApiModel


class ReportCreate(ApiModel):
    campaign_id: str = Field(min_length=1)
    reason: str = Field(min_length=1)
    user_id: Optional[str] = None
    description: Optional[str] = None


class Report(ApiModel):
    id: str
    campaign_id: str
    campaign_title: Optional[str] = None
    user_id: str
    reporter_name: Optional[str] = None
    reason: str
    description: Optional[str] = None
    status: str
    created_at: datetime.datetime
