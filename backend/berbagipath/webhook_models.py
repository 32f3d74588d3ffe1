from sqlalchemy import Column, String, Text, DateTime
from .database import Base, new_id
import datetime


class WebhookLog(Base):
    __tablename__ = 'webhook_logs'
    id = Column(String(36), primary_key=True, default=new_id)
    event_type = Column(String(50), nullable=True)  # XENDIT_INVOICE, DOKU_NOTIFY
    external_id = Column(String(100), nullable=True, index=True)
    payload = Column(Text, nullable=True)
    status = Column(String(50), default='received')  # received, processed_<STATUS>, rejected
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)
