from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional


class ApiModel(BaseModel):
    """Wire format is camelCase; bodies may use either camelCase or snake_case keys."""

    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class ActionRequest(ApiModel):
    action: str
    note: Optional[str] = None
    reason: Optional[str] = None
