"""User Schemas."""

from pydantic import Field

from cardealer.schemas.common import ApiModel

USERNAME_FIELD = dict(min_length=3, max_length=20, pattern=r"^\w+$")


class UserCreate(ApiModel):
    username: str = Field(**USERNAME_FIELD)


class UserUpdate(ApiModel):
    username: str | None = Field(None, **USERNAME_FIELD)


class UserResponse(ApiModel):
    id: int
    username: str
    favorite_car_ids: list[int] = []
    order_ids: list[int] = []
