from typing import Optional
from .schemas import ApiModel


class CategoryCreate(ApiModel):
    id: Optional[str] = None
    name: str
    slug: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class CategoryUpdate(ApiModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None


class Category(ApiModel):
    id: str
    name: str
    slug: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
