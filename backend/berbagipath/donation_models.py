from sqlalchemy import Column, String, Text, Float, Boolean, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class Donation(Base):
    __tablename__ = 'donations'
    id = Column(String(36), primary_key=True, default=new_id)
    campaign_id = Column(String(36), ForeignKey('campaigns.id', ondelete='CASCADE'), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)
    amount = Column(Float, nullable=False)
    donor_name = Column(String(200), nullable=True)
    donor_email = Column(String(200), nullable=True)
    donor_phone = Column(String(50), nullable=True)
    message = Column(Text, nullable=True)
    is_anonymous = Column(Boolean, default=False)
    payment_method = Column(String(50), nullable=True)  # e.g. BCA, QRIS, OVO, wallet
    payment_channel = Column(String(50), nullable=True)
    status = Column(String(20), default='pending', index=True)  # pending, paid, settled, failed, expired
    external_id = Column(String(100), nullable=True, unique=True, index=True)  # DON-XXXXXXXX
    invoice_id = Column(String(200), nullable=True)
    payment_url = Column(String(500), nullable=True)
    paid_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
