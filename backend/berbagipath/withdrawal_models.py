from sqlalchemy import Column, String, Text, Float, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class Withdrawal(Base):
    __tablename__ = 'withdrawals'
    id = Column(String(36), primary_key=True, default=new_id)
    campaign_id = Column(String(36), ForeignKey('campaigns.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    bank_name = Column(String(100), nullable=False)
    account_number = Column(String(50), nullable=False)
    account_holder = Column(String(100), nullable=False)
    status = Column(String(20), default='pending', index=True)  # pending, approved, rejected, completed
    admin_note = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
