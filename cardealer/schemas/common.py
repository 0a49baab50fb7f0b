"""Shared schema base: camelCase aliases and ORM attribute loading."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for every request/response schema."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Uniform error body for domain and unexpected errors."""
    status: int
    message: str


# OpenAPI documentation for the error statuses every entity router can return
ERROR_RESPONSES = {
    code: {"model": ErrorResponse} for code in (400, 404, 409, 500)
}
