from pydantic import Field
from typing import Optional
import datetime
from .schemas import ApiModel


class CampaignCreate(ApiModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    target_amount: float = Field(gt=0)
    story: Optional[str] = None
    # the campaign form posts `category` and `image`; admin tools use the column names
    category: Optional[str] = None
    category_id: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    days_to_run: int = Field(30, gt=0)
    organizer_id: Optional[str] = None
    is_urgent: bool = False
    is_verified: bool = False
    status: Optional[str] = None


class CampaignUpdate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    story: Optional[str] = None
    category: Optional[str] = None
    category_id: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    target_amount: Optional[float] = Field(None, gt=0)
    end_date: Optional[datetime.datetime] = None
    days_to_run: Optional[int] = Field(None, gt=0)
    is_verified: Optional[bool] = None
    is_urgent: Optional[bool] = None
    status: Optional[str] = None


class Campaign(ApiModel):
    id: str
    slug: str
    title: str
    description: str
    story: Optional[str] = None
    category_id: Optional[str] = None
    organizer_id: Optional[str] = None
    image_url: Optional[str] = None
    target_amount: float
    current_amount: float
    donor_count: int
    days_left: int
    progress: float
    start_date: Optional[datetime.datetime] = None
    end_date: Optional[datetime.datetime] = None
    is_verified: bool
    is_urgent: bool
    status: str
    created_at: datetime.datetime
