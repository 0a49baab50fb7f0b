"""User Service: account CRUD and favorite-car links.

Invariants:
    - username is unique; on update the user's own username never clashes
    - Favoriting an already-favorited car -> Conflict; un-favoriting a car that
      is not favorited -> NotFound
    - Deleting a user drops its favorites and deletes all its orders (their cars
      are unlinked), then removes the user
"""

import logging

from sqlalchemy import select

from cardealer.core.domain_types import CarId, Entity, UserId
from cardealer.core.errors import ConflictError, ResourceNotFoundError
from cardealer.core.validate_fields import validate_id, validate_user
from cardealer.models.car import Car
from cardealer.models.user import User
from cardealer.schemas.user import UserCreate, UserResponse, UserUpdate
from cardealer.services import transfer
from cardealer.services.base import EntityService

logger = logging.getLogger(__name__)


class UserService(EntityService):
    """User operations bound to one unit of work."""

    async def list_users(self) -> list[UserResponse]:
        result = await self.db.execute(select(User).order_by(User.id))
        return await transfer.user_records(self.db, result.scalars().all())

    async def get_user(self, user_id: UserId) -> UserResponse:
        return await transfer.user_record(self.db, await self.get_user_or_404(user_id))

    async def get_user_or_404(self, user_id: UserId) -> User:
        validate_id(Entity.USER, user_id)
        user = await self.db.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError(Entity.USER.value, user_id)
        return user

    async def create_user(self, payload: UserCreate) -> UserResponse:
        data = payload.model_dump()
        validate_user(data)
        await self._ensure_username_free(data["username"])

        user = User(username=data["username"])
        self.db.add(user)
        await self.db.flush()
        await self.commit()
        logger.info(
            f"User created: {user.username}",
            extra={"entity": Entity.USER.value, "entity_id": user.id},
        )
        return await transfer.user_record(self.db, user)

    async def update_user(self, user_id: UserId, payload: UserUpdate) -> UserResponse:
        user = await self.get_user_or_404(user_id)
        merged = {"username": user.username}
        merged.update(payload.model_dump(exclude_unset=True))
        validate_user(merged)
        if merged["username"] != user.username:
            await self._ensure_username_free(merged["username"])
            user.username = merged["username"]
        await self.db.flush()
        await self.commit()
        return await transfer.user_record(self.db, user)

    async def delete_user(self, user_id: UserId) -> None:
        user = await self.get_user_or_404(user_id)
        plan = await self.associations.teardown_user(user.id)
        await self.db.delete(user)
        await self.db.flush()
        await self.commit()
        logger.info(
            f"User deleted with {len(plan.orders_to_delete)} order(s)",
            extra={"entity": Entity.USER.value, "entity_id": user_id},
        )

    async def add_favorite_car(self, user_id: UserId, car_id: CarId) -> None:
        await self._resolve_pair(user_id, car_id)
        await self.associations.add_favorite(user_id, car_id)
        await self.commit()

    async def remove_favorite_car(self, user_id: UserId, car_id: CarId) -> None:
        await self._resolve_pair(user_id, car_id)
        await self.associations.remove_favorite(user_id, car_id)
        await self.commit()

    async def _resolve_pair(self, user_id: UserId, car_id: CarId) -> None:
        validate_id(Entity.USER, user_id)
        validate_id(Entity.CAR, car_id)
        await self.get_user_or_404(user_id)
        if await self.db.get(Car, car_id) is None:
            raise ResourceNotFoundError(Entity.CAR.value, car_id)

    async def _ensure_username_free(self, username: str) -> None:
        result = await self.db.execute(select(User.id).where(User.username == username))
        if result.first() is not None:
            raise ConflictError("Username already exists")
