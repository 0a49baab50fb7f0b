"""Dealer routes."""

from fastapi import APIRouter, Depends, Query, status

from cardealer.api.dependencies import get_dealer_service
from cardealer.schemas.car import CarResponse
from cardealer.schemas.common import ERROR_RESPONSES
from cardealer.schemas.dealer import DealerCreate, DealerResponse, DealerUpdate
from cardealer.services.dealer_service import DealerService

router = APIRouter(prefix="/dealers", tags=["dealers"], responses=ERROR_RESPONSES)


@router.get("", response_model=list[DealerResponse])
async def list_dealers(service: DealerService = Depends(get_dealer_service)):
    return await service.list_dealers()


@router.get("/by-brand", response_model=list[DealerResponse])
async def dealers_by_brand(
    brand: str = Query(...),
    service: DealerService = Depends(get_dealer_service),
):
    """Dealers selling the brand (case-insensitive)."""
    return await service.find_dealers_by_brand(brand)


@router.get("/by-brand-native", response_model=list[DealerResponse])
async def dealers_by_brand_native(
    brand: str = Query(...),
    service: DealerService = Depends(get_dealer_service),
):
    """Kept for existing clients; same query as /by-brand."""
    return await service.find_dealers_by_brand(brand)


@router.get("/{dealer_id}/cars", response_model=list[CarResponse])
async def list_dealer_cars(
    dealer_id: int, service: DealerService = Depends(get_dealer_service),
):
    return await service.list_dealer_cars(dealer_id)


@router.get("/{dealer_id}", response_model=DealerResponse)
async def get_dealer(
    dealer_id: int, service: DealerService = Depends(get_dealer_service),
):
    return await service.get_dealer(dealer_id)


@router.post("", response_model=DealerResponse, status_code=status.HTTP_201_CREATED)
async def create_dealer(
    body: DealerCreate, service: DealerService = Depends(get_dealer_service),
):
    return await service.create_dealer(body)


@router.put("/{dealer_id}", response_model=DealerResponse)
async def update_dealer(
    dealer_id: int,
    body: DealerUpdate,
    service: DealerService = Depends(get_dealer_service),
):
    return await service.update_dealer(dealer_id, body)


@router.delete("/{dealer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_dealer(
    dealer_id: int, service: DealerService = Depends(get_dealer_service),
):
    """Delete a dealer together with all of its cars."""
    await service.delete_dealer(dealer_id)
