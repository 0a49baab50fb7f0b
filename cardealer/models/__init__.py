"""ORM Models: SQLAlchemy declarative models for all car dealer entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Relationships are plain id foreign keys; no relationship() dual-writes,
      services/association_maintainer.py keeps both sides consistent

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from cardealer.models.dealer import Dealer  # noqa: F401
from cardealer.models.user import User  # noqa: F401
from cardealer.models.order import Order  # noqa: F401
from cardealer.models.car import Car  # noqa: F401
from cardealer.models.favorite_car import FavoriteCar  # noqa: F401
