from sqlalchemy import Column, String, Float, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class WalletTopup(Base):
    """Balance deposit; same gateway lifecycle as a donation."""
    __tablename__ = 'wallet_topups'
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    amount = Column(Float, nullable=False)
    status = Column(String(20), default='pending', index=True)  # pending, paid, failed, expired
    external_id = Column(String(100), nullable=True, unique=True, index=True)  # TOPUP-XXXXXXXX
    invoice_id = Column(String(200), nullable=True)
    payment_url = Column(String(500), nullable=True)
    payment_method = Column(String(50), nullable=True)
    payment_channel = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
