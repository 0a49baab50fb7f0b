"""Field Validation: pure checks run by services before anything is persisted.

Invariants:
    - First failing rule raises InvalidInputError; no aggregation at this level
    - Functions never touch the DB; "now"/"current year" are injected by the caller
    - Rules operate on plain mappings so they work for create payloads and
      for merged records during partial update alike

Design Decisions:
    - Overlaps the Pydantic schema constraints: schemas run at request binding,
      these run at every service entry point (bulk, merged updates, scripts)
"""

import re
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from cardealer.core.domain_types import (
    BRAND_MAX_LENGTH,
    BRAND_MIN_LENGTH,
    COLOR_MAX_LENGTH,
    DEALER_ADDRESS_MAX_LENGTH,
    DEALER_NAME_MAX_LENGTH,
    FIRST_CAR_YEAR,
    MAX_CARS_PER_ORDER,
    MODEL_MAX_LENGTH,
    USERNAME_MAX_LENGTH,
    VIN_LENGTH,
    Entity,
)
from cardealer.core.errors import InvalidInputError

VIN_PATTERN = re.compile(r"^[A-HJ-NPR-Z0-9]{17}$")
COLOR_PATTERN = re.compile(r"^[a-zA-Z\s-]+$")
# Unicode letters, ASCII digits, space . ' -
DEALER_NAME_PATTERN = re.compile(r"^(?:[^\W\d_]|[0-9 .'-])+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s()-]{10,20}$")


def _is_blank(value: Any) -> bool:
    return value is None or not str(value).strip()


# ─── Ids ─────────────────────────────────────────────────────────

def validate_id(entity: Entity, entity_id: int | None) -> int:
    """Reject null or non-positive ids with the entity's own message."""
    if entity_id is None or entity_id < 1:
        if entity is Entity.CAR:
            raise InvalidInputError(f"Invalid car ID: {entity_id}", field="id")
        raise InvalidInputError(f"{entity.value} ID must be positive", field="id")
    return entity_id


# ─── Car ─────────────────────────────────────────────────────────

def max_car_year(now: datetime) -> int:
    return now.year + 1


def validate_car(data: Mapping[str, Any], now: datetime) -> None:
    """Validate a full car record (create payload or merged update)."""
    vin = data.get("vin")
    if _is_blank(vin):
        raise InvalidInputError("VIN cannot be empty", field="vin")
    if len(vin) != VIN_LENGTH:
        raise InvalidInputError(
            f"VIN must be exactly {VIN_LENGTH} characters", field="vin",
        )
    if not VIN_PATTERN.match(vin):
        raise InvalidInputError("VIN contains invalid characters", field="vin")

    model = data.get("model")
    if _is_blank(model):
        raise InvalidInputError("Model cannot be empty", field="model")
    if len(model) > MODEL_MAX_LENGTH:
        raise InvalidInputError(
            f"Model cannot exceed {MODEL_MAX_LENGTH} characters", field="model",
        )

    brand = data.get("brand")
    if _is_blank(brand):
        raise InvalidInputError("Brand cannot be empty", field="brand")
    if len(brand) > BRAND_MAX_LENGTH:
        raise InvalidInputError(
            f"Brand cannot exceed {BRAND_MAX_LENGTH} characters", field="brand",
        )

    year = data.get("year")
    upper = max_car_year(now)
    if year is None or year < FIRST_CAR_YEAR or year > upper:
        raise InvalidInputError(
            f"Year must be between {FIRST_CAR_YEAR} and {upper}", field="year",
        )

    price = data.get("price")
    if price is None or price <= 0:
        raise InvalidInputError("Price must be positive", field="price")

    mileage = data.get("mileage")
    if mileage is None or mileage < 0:
        raise InvalidInputError("Mileage cannot be negative", field="mileage")

    color = data.get("color")
    if _is_blank(color):
        raise InvalidInputError("Color cannot be empty", field="color")
    if len(color) > COLOR_MAX_LENGTH:
        raise InvalidInputError(
            f"Color cannot exceed {COLOR_MAX_LENGTH} characters", field="color",
        )
    if not COLOR_PATTERN.match(color):
        raise InvalidInputError("Color contains invalid characters", field="color")

    dealer_id = data.get("dealer_id")
    if dealer_id is None:
        raise InvalidInputError("Car must have a dealer", field="dealer_id")
    if dealer_id < 1:
        raise InvalidInputError("Dealer ID must be positive", field="dealer_id")


def validate_vin_unchanged(stored_vin: str, requested_vin: str | None) -> None:
    """VIN is immutable after creation; an absent VIN means "keep"."""
    if requested_vin is not None and requested_vin != stored_vin:
        raise InvalidInputError(
            f"Changing is not allowed VIN: {requested_vin}", field="vin",
        )


# ─── Dealer ──────────────────────────────────────────────────────

def validate_dealer(data: Mapping[str, Any]) -> None:
    name = data.get("name")
    if _is_blank(name):
        raise InvalidInputError("Dealer name cannot be empty", field="name")
    if len(name) > DEALER_NAME_MAX_LENGTH:
        raise InvalidInputError(
            f"Dealer name cannot exceed {DEALER_NAME_MAX_LENGTH} characters",
            field="name",
        )
    if not DEALER_NAME_PATTERN.match(name):
        raise InvalidInputError(
            "Dealer name contains invalid characters", field="name",
        )

    address = data.get("address")
    if _is_blank(address):
        raise InvalidInputError("Dealer address cannot be empty", field="address")
    if len(address) > DEALER_ADDRESS_MAX_LENGTH:
        raise InvalidInputError(
            f"Dealer address cannot exceed {DEALER_ADDRESS_MAX_LENGTH} characters",
            field="address",
        )

    phone = data.get("phone_number")
    if _is_blank(phone):
        raise InvalidInputError("Phone number cannot be empty", field="phone_number")
    if not PHONE_PATTERN.match(phone):
        raise InvalidInputError("Invalid phone number format", field="phone_number")


def validate_brand_query(brand: str | None) -> str:
    if brand is None or not BRAND_MIN_LENGTH <= len(brand) <= BRAND_MAX_LENGTH:
        raise InvalidInputError(
            f"Brand must be between {BRAND_MIN_LENGTH} and {BRAND_MAX_LENGTH} characters",
            field="brand",
        )
    return brand


# ─── Order ───────────────────────────────────────────────────────

def validate_order(
    user_id: int | None,
    car_ids: Sequence[int] | None,
    now: datetime,
    order_date: datetime | None = None,
) -> None:
    """Validate order references and the optional client-supplied date."""
    if not car_ids:
        raise InvalidInputError("Order must contain at least one car", field="car_ids")
    if len(car_ids) > MAX_CARS_PER_ORDER:
        raise InvalidInputError(
            f"Order must contain between 1 and {MAX_CARS_PER_ORDER} cars",
            field="car_ids",
        )
    seen: set[int] = set()
    for car_id in car_ids:
        if car_id is None or car_id < 1:
            raise InvalidInputError("Car ID must be positive", field="car_ids")
        if car_id in seen:
            raise InvalidInputError(
                f"Order contains duplicate car ID: {car_id}", field="car_ids",
            )
        seen.add(car_id)
    if user_id is None:
        raise InvalidInputError("Order must have a user", field="user_id")
    if user_id < 1:
        raise InvalidInputError("User ID must be positive", field="user_id")
    if order_date is not None and _as_utc(order_date) > _as_utc(now):
        raise InvalidInputError(
            "Order date cannot be in the future", field="order_date",
        )


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; treat them as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ─── User ────────────────────────────────────────────────────────

def validate_user(data: Mapping[str, Any]) -> None:
    username = data.get("username")
    if _is_blank(username):
        raise InvalidInputError("Username cannot be empty", field="username")
    if len(username) > USERNAME_MAX_LENGTH:
        raise InvalidInputError(
            f"Username cannot exceed {USERNAME_MAX_LENGTH} characters",
            field="username",
        )
