from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


def reject_null(v: Any) -> Any:
    """Field validator for optional update fields backed by NOT NULL columns."""
    if v is None:
        raise ValueError("may be omitted but not null")
    return v


class CamelModel(BaseModel):
    """
    Base schema whose JSON names are camelCase (numEmployees, logoUrl).

    Python code uses the snake_case field names; both spellings are accepted
    on input.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DeletedResponse(BaseModel):
    """Schema for delete responses"""
    deleted: str
