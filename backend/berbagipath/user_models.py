from sqlalchemy import Column, String, Float, Boolean, DateTime
from .database import Base, new_id
import datetime


class User(Base):
    __tablename__ = 'users'
    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    email = Column(String(200), nullable=False, unique=True, index=True)
    phone = Column(String(50), nullable=True)
    password_hash = Column(String(128), nullable=True)
    role = Column(String(20), default='user')  # user, organizer, staff, admin
    is_verified = Column(Boolean, default=False)
    balance = Column(Float, default=0)  # wallet ("Kantong Donasi") balance
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
