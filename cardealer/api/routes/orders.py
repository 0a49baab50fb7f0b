"""Order routes."""

from fastapi import APIRouter, Depends, status

from cardealer.api.dependencies import get_order_service
from cardealer.schemas.common import ERROR_RESPONSES
from cardealer.schemas.order import OrderCreate, OrderResponse, OrderUpdate
from cardealer.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"], responses=ERROR_RESPONSES)


@router.get("", response_model=list[OrderResponse])
async def list_orders(service: OrderService = Depends(get_order_service)):
    return await service.list_orders()


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return await service.get_order(order_id)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    body: OrderCreate, service: OrderService = Depends(get_order_service),
):
    """Place an order; total and date are computed server-side."""
    return await service.create_order(body)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: int,
    body: OrderUpdate,
    service: OrderService = Depends(get_order_service),
):
    return await service.update_order(order_id, body)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    await service.delete_order(order_id)
