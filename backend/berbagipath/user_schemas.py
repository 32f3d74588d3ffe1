from pydantic import EmailStr, Field
from typing import Optional
import datetime
from .schemas import ApiModel


class UserCreate(ApiModel):
    name: str = Field(min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    password: Optional[str] = None
    role: str = 'user'
    is_verified: bool = False
    avatar_url: Optional[str] = None


class UserUpdate(ApiModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    is_verified: Optional[bool] = None
    avatar_url: Optional[str] = None


class User(ApiModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    is_verified: bool
    balance: float
    avatar_url: Optional[str] = None
    created_at: datetime.datetime


class RegisterRequest(ApiModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)
    phone: Optional[str] = None


class LoginRequest(ApiModel):
    email: str
    password: str
