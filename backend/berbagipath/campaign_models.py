from sqlalchemy import Column, String, Text, Float, Integer, Boolean, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class Campaign(Base):
    __tablename__ = 'campaigns'
    id = Column(String(36), primary_key=True, default=new_id)
    slug = Column(String(120), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    story = Column(Text, nullable=True)  # rich text (HTML)
    category_id = Column(String(50), ForeignKey('categories.id', ondelete='SET NULL'), nullable=True, index=True)
    organizer_id = Column(String(36), ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)
    image_url = Column(String(500), nullable=True)
    target_amount = Column(Float, nullable=False)
    current_amount = Column(Float, default=0)
    donor_count = Column(Integer, default=0)
    start_date = Column(DateTime, default=datetime.datetime.utcnow)
    end_date = Column(DateTime, nullable=True)
    is_verified = Column(Boolean, default=False)
    is_urgent = Column(Boolean, default=False)
    status = Column(String(20), default='pending', index=True)  # pending, active, completed, rejected
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    @property
    def days_left(self) -> int:
        if not self.end_date:
            return 0
        remaining = self.end_date - datetime.datetime.utcnow()
        return max(0, remaining.days + (1 if remaining.seconds else 0))

    @property
    def progress(self) -> float:
        if not self.target_amount:
            return 0.0
        return round(min(100.0, (self.current_amount or 0) * 100.0 / self.target_amount), 2)
