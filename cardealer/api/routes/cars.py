"""Car routes."""

from fastapi import APIRouter, Depends, Query, status

from cardealer.api.dependencies import get_car_service
from cardealer.core.domain_types import FIRST_CAR_YEAR
from cardealer.schemas.car import CarCreate, CarResponse, CarUpdate
from cardealer.schemas.common import ERROR_RESPONSES
from cardealer.services.car_service import CarService

router = APIRouter(prefix="/cars", tags=["cars"], responses=ERROR_RESPONSES)


@router.get("", response_model=list[CarResponse])
async def list_cars(service: CarService = Depends(get_car_service)):
    return await service.list_cars()


@router.get("/filter", response_model=list[CarResponse])
async def filter_cars(
    min_year: int | None = Query(None, alias="minYear", ge=FIRST_CAR_YEAR),
    max_year: int | None = Query(None, alias="maxYear", ge=FIRST_CAR_YEAR),
    max_mileage: float | None = Query(None, alias="maxMileage", ge=0),
    service: CarService = Depends(get_car_service),
):
    """Filter cars by inclusive year range and maximum mileage."""
    return await service.filter_cars(min_year, max_year, max_mileage)


@router.post(
    "/bulk", response_model=list[CarResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_cars_bulk(
    body: list[CarCreate], service: CarService = Depends(get_car_service),
):
    """Create many cars at once; nothing is stored if any record is rejected."""
    return await service.create_cars_bulk(body)


@router.get("/{car_id}", response_model=CarResponse)
async def get_car(car_id: int, service: CarService = Depends(get_car_service)):
    return await service.get_car(car_id)


@router.post("", response_model=CarResponse, status_code=status.HTTP_201_CREATED)
async def create_car(body: CarCreate, service: CarService = Depends(get_car_service)):
    return await service.create_car(body)


@router.put("/{car_id}", response_model=CarResponse)
async def update_car(
    car_id: int, body: CarUpdate, service: CarService = Depends(get_car_service),
):
    """Partial update; the VIN cannot change."""
    return await service.update_car(car_id, body)


@router.delete("/{car_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_car(car_id: int, service: CarService = Depends(get_car_service)):
    """Delete a car, its favorites and any order containing it."""
    await service.delete_car(car_id)
