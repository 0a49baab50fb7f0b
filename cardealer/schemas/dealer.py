"""Dealer Schemas."""

from pydantic import Field

from cardealer.schemas.common import ApiModel
from cardealer.schemas.car import CarResponse

NAME_FIELD = dict(min_length=2, max_length=100, pattern=r"^[a-zA-Z0-9\s.,&-]+$")
ADDRESS_FIELD = dict(min_length=5, max_length=200)
PHONE_FIELD = dict(pattern=r"^\+?[0-9\s()-]{7,20}$")


class DealerCreate(ApiModel):
    name: str = Field(**NAME_FIELD)
    address: str = Field(**ADDRESS_FIELD)
    phone_number: str = Field(**PHONE_FIELD)


class DealerUpdate(ApiModel):
    name: str | None = Field(None, **NAME_FIELD)
    address: str | None = Field(None, **ADDRESS_FIELD)
    phone_number: str | None = Field(None, **PHONE_FIELD)


class DealerResponse(ApiModel):
    """Dealer with its inventory embedded."""
    id: int
    name: str
    address: str
    phone_number: str
    cars: list[CarResponse] = []
