from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class Notification(Base):
    __tablename__ = 'notifications'
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), default='system')  # system, donation, ...
    is_read = Column(Boolean, default=False, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)
