from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from .database import Base, new_id
import datetime


class Article(Base):
    __tablename__ = 'articles'
    id = Column(String(36), primary_key=True, default=new_id)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    title = Column(String(255), nullable=False)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=True)
    author_id = Column(String(36), ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    status = Column(String(20), default='published', index=True)  # published, draft
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
