from sqlalchemy import Column, String, Text, DateTime
from .database import Base, new_id
import datetime


class Report(Base):
    """Abuse/fraud report filed against a campaign."""
    __tablename__ = 'reports'
    id = Column(String(36), primary_key=True, default=new_id)
    campaign_id = Column(String(36), nullable=False, index=True)
    user_id = Column(String(36), nullable=False, default='anonymous')
    reason = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), default='pending', index=True)  # pending, resolved, dismissed
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
