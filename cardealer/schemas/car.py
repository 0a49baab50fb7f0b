"""Car Schemas: field limits mirror core/validate_fields.py.

Invariants:
    - CarCreate requires dealerId; orderId and favorites are read-only (response only)
    - Year upper bound depends on the clock, so it is enforced by the service, not here
"""

from pydantic import Field

from cardealer.core.domain_types import FIRST_CAR_YEAR
from cardealer.schemas.common import ApiModel

VIN_FIELD = dict(min_length=17, max_length=17, pattern=r"^[A-HJ-NPR-Z0-9]{17}$")
MODEL_FIELD = dict(min_length=1, max_length=50, pattern=r"^[a-zA-Z0-9\s-]+$")
BRAND_FIELD = dict(min_length=2, max_length=50, pattern=r"^[a-zA-Z\s-]+$")
COLOR_FIELD = dict(min_length=2, max_length=30, pattern=r"^[a-zA-Z\s-]+$")


class CarCreate(ApiModel):
    """Car creation payload (also the element type of bulk creation)."""
    vin: str = Field(**VIN_FIELD)
    model: str = Field(**MODEL_FIELD)
    brand: str = Field(**BRAND_FIELD)
    year: int = Field(ge=FIRST_CAR_YEAR)
    price: float = Field(ge=0, lt=10_000_000)
    color: str = Field(**COLOR_FIELD)
    mileage: float = Field(0.0, ge=0, lt=1_000_000)
    dealer_id: int = Field(gt=0)


class CarUpdate(ApiModel):
    """Partial car update; vin may be echoed back but never changed."""
    vin: str | None = Field(None, **VIN_FIELD)
    model: str | None = Field(None, **MODEL_FIELD)
    brand: str | None = Field(None, **BRAND_FIELD)
    year: int | None = Field(None, ge=FIRST_CAR_YEAR)
    price: float | None = Field(None, ge=0, lt=10_000_000)
    color: str | None = Field(None, **COLOR_FIELD)
    mileage: float | None = Field(None, ge=0, lt=1_000_000)
    dealer_id: int | None = Field(None, gt=0)


class CarResponse(ApiModel):
    id: int
    vin: str
    model: str
    brand: str
    year: int
    price: float
    color: str
    mileage: float
    dealer_id: int
    user_ids_who_favorited: list[int] = []
    order_id: int | None = None
