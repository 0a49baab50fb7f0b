"""User routes, including favorite-car links."""

from fastapi import APIRouter, Depends, Response, status

from cardealer.api.dependencies import get_user_service
from cardealer.schemas.common import ERROR_RESPONSES
from cardealer.schemas.user import UserCreate, UserResponse, UserUpdate
from cardealer.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], responses=ERROR_RESPONSES)


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(body: UserCreate, service: UserService = Depends(get_user_service)):
    return await service.create_user(body)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int, body: UserUpdate, service: UserService = Depends(get_user_service),
):
    return await service.update_user(user_id, body)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    """Delete a user, its favorites and all orders it placed."""
    await service.delete_user(user_id)


@router.post(
    "/{user_id}/favorite-cars/{car_id}", status_code=status.HTTP_201_CREATED,
)
async def add_favorite_car(
    user_id: int, car_id: int, service: UserService = Depends(get_user_service),
):
    await service.add_favorite_car(user_id, car_id)
    return Response(status_code=status.HTTP_201_CREATED)


@router.delete(
    "/{user_id}/favorite-cars/{car_id}", status_code=status.HTTP_204_NO_CONTENT,
)
async def remove_favorite_car(
    user_id: int, car_id: int, service: UserService = Depends(get_user_service),
):
    await service.remove_favorite_car(user_id, car_id)
