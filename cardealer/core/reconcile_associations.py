"""Association Reconciliation: pure planning for car/order/favorite consistency.

Invariants:
    - Inputs are id snapshots read from the store; outputs are id deltas/plans
    - A car belongs to at most one order; an order is never shrunk by a car
      deletion, it is destroyed and its other cars are unlinked
    - Iteration order of the caller's car list is preserved when reporting conflicts

Design Decisions:
    - Plans over mutation: the service shell applies a TeardownPlan inside one
      unit of work, so the planning rules are testable without a database
"""

from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from cardealer.core.domain_types import CarId, OrderId


@dataclass(frozen=True)
class AssociationDelta:
    """Members added to and removed from a relationship set."""
    added: frozenset[int]
    removed: frozenset[int]

    @property
    def is_empty(self) -> bool:
        return not self.added and not self.removed


def diff_members(old: Iterable[int], new: Iterable[int]) -> AssociationDelta:
    """Symmetric difference between the old and new member sets."""
    old_set, new_set = frozenset(old), frozenset(new)
    return AssociationDelta(added=new_set - old_set, removed=old_set - new_set)


def find_claimed_car(
    order_refs: Sequence[tuple[CarId, OrderId | None]],
    own_order_id: OrderId | None = None,
) -> CarId | None:
    """First car already referencing an order other than own_order_id.

    own_order_id is None when creating: any existing reference is a claim.
    """
    for car_id, order_id in order_refs:
        if order_id is not None and order_id != own_order_id:
            return car_id
    return None


def total_price(prices: Iterable[float]) -> float:
    return float(sum(prices))


@dataclass
class TeardownPlan:
    """Everything one cascading delete must touch, by id."""
    cars_to_delete: set[int] = field(default_factory=set)
    orders_to_delete: set[int] = field(default_factory=set)
    cars_to_unlink: set[int] = field(default_factory=set)


def plan_car_teardown(
    car_ids: Iterable[CarId],
    order_of: Mapping[CarId, OrderId | None],
    members_of: Mapping[OrderId, Iterable[CarId]],
) -> TeardownPlan:
    """Plan deleting cars: containing orders go, their surviving cars get unlinked."""
    plan = TeardownPlan(cars_to_delete=set(car_ids))
    for car_id in plan.cars_to_delete:
        order_id = order_of.get(car_id)
        if order_id is not None:
            plan.orders_to_delete.add(order_id)
    for order_id in plan.orders_to_delete:
        for member in members_of.get(order_id, ()):
            if member not in plan.cars_to_delete:
                plan.cars_to_unlink.add(member)
    return plan


def plan_order_teardown(
    order_ids: Iterable[OrderId],
    members_of: Mapping[OrderId, Iterable[CarId]],
) -> TeardownPlan:
    """Plan deleting orders (order delete, user delete): every member car is unlinked."""
    plan = TeardownPlan(orders_to_delete=set(order_ids))
    for order_id in plan.orders_to_delete:
        plan.cars_to_unlink.update(members_of.get(order_id, ()))
    return plan
