from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class VerificationRequest(Base):
    """Organizer KYC: ID card (KTP) photo, selfie and payout bank account."""
    __tablename__ = 'verification_requests'
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    ktp_image_url = Column(Text, nullable=True)
    selfie_image_url = Column(Text, nullable=True)
    bank_name = Column(String(100), nullable=True)
    bank_account_number = Column(String(100), nullable=True)
    bank_account_holder = Column(String(100), nullable=True)
    status = Column(String(20), default='pending', index=True)  # pending, approved, rejected
    rejection_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
