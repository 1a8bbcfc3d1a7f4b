"""
Shared schema pieces: camelCase wire format and pagination metadata.
"""
import math
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class Pagination(CamelModel):
    """Pagination metadata returned with every paged listing."""
    current: int = Field(..., description="Current page number")
    pages: int = Field(..., description="Total number of pages")
    total: int = Field(..., description="Total number of matching items")
    limit: int = Field(..., description="Items per page")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, pages=math.ceil(total / limit) if limit else 0, total=total, limit=limit)


class MessageResponse(CamelModel):
    success: bool = True
    message: str
