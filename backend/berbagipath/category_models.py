from sqlalchemy import Column, String, DateTime
from .database import Base
import datetime


class Category(Base):
    __tablename__ = 'categories'
    id = Column(String(50), primary_key=True)  # human slug: medical, education, ...
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=True)
    icon = Column(String(200), nullable=True)  # lucide icon name or uploaded icon url
    color = Column(String(100), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
