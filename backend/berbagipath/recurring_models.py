from sqlalchemy import Column, String, Float, Boolean, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class RecurringDonation(Base):
    """Auto-donate schedule paid from the user's wallet balance."""
    __tablename__ = 'recurring_donations'
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    campaign_id = Column(String(36), ForeignKey('campaigns.id', ondelete='CASCADE'), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    frequency = Column(String(20), nullable=False, default='monthly')  # minute, daily, weekly, monthly
    is_active = Column(Boolean, default=True, index=True)
    last_executed_at = Column(DateTime, nullable=True)
    next_execution_at = Column(DateTime, nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
