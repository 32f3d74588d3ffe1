from typing import Optional
import datetime
from .schemas import ApiModel


class Notification(ApiModel):
    id: str
    user_id: str
    title: str
    message: str
    type: Optional[str] = None
    is_read: bool
    created_at: datetime.datetime


class AdminTask(ApiModel):
    """Pending back-office work shown in the admin bell menu."""
    type: str  # alert, warning, info
    title: str
    message: str
    href: str
    count: int
