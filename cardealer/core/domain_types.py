"""Domain Types: identity types, entity names and domain limits shared across layers.

Invariants:
    - CarId, DealerId, OrderId, UserId wrap positive ints; never mix them in signatures
    - Limits live here once; schemas and validators import them
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CarId = NewType("CarId", int)
DealerId = NewType("DealerId", int)
OrderId = NewType("OrderId", int)
UserId = NewType("UserId", int)


# ─── Limits ──────────────────────────────────────────────────────

VIN_LENGTH = 17
FIRST_CAR_YEAR = 1886          # Benz Patent-Motorwagen
MAX_CARS_PER_ORDER = 10
MODEL_MAX_LENGTH = 50
BRAND_MIN_LENGTH = 2
BRAND_MAX_LENGTH = 50
COLOR_MAX_LENGTH = 30
DEALER_NAME_MAX_LENGTH = 100
DEALER_ADDRESS_MAX_LENGTH = 200
USERNAME_MAX_LENGTH = 20


# ─── Enums ───────────────────────────────────────────────────────

class Entity(str, Enum):
    """Entity names as they appear in user-facing messages."""
    CAR = "Car"
    DEALER = "Dealer"
    ORDER = "Order"
    USER = "User"
