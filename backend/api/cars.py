from fastapi import APIRouter, Depends, Query, Response
from typing import List, Optional

from constants import CarSortKey, HTTPStatus
from dependencies import RowId, get_car_service, get_intervention_service
from schemas import CarRead, CarWrite, InterventionRead, InterventionWrite
from services.car_service import CarService
from services.intervention_service import InterventionService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/cars/all", response_model=List[CarRead])
@handle_api_errors("Car listing")
def list_cars(
    sorted_by: Optional[str] = Query(None, alias="sortedBy", description="registration, owner, brand, model or releaseDate"),
    service: CarService = Depends(get_car_service),
):
    """All cars with their interventions"""
    return service.get_all_cars(CarSortKey.parse(sorted_by))


@router.get("/cars/{car_id}", response_model=CarRead)
@handle_api_errors("Car retrieval")
def get_car(car_id: RowId, service: CarService = Depends(get_car_service)):
    return service.get_car(car_id)


@router.post("/cars/save", response_model=CarRead, status_code=HTTPStatus.CREATED)
@handle_api_errors("Car creation")
def save_car(payload: CarWrite, service: CarService = Depends(get_car_service)):
    return service.create_car(payload)


@router.put("/cars/{car_id}/update", response_model=CarRead)
@handle_api_errors("Car update")
def update_car(car_id: RowId, payload: CarWrite, service: CarService = Depends(get_car_service)):
    """Update a car; an `interventions` list replaces the stored one"""
    return service.update_car(car_id, payload)


@router.delete("/cars/{car_id}/delete", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Car deletion")
def delete_car(car_id: RowId, service: CarService = Depends(get_car_service)):
    """Delete a car and everything it owns"""
    service.delete_car(car_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/cars/{car_id}/interventions", response_model=List[InterventionRead])
@handle_api_errors("Intervention listing")
def list_car_interventions(car_id: RowId, service: InterventionService = Depends(get_intervention_service)):
    return service.get_car_interventions(car_id)


@router.post("/cars/{car_id}/interventions/save", response_model=InterventionRead, status_code=HTTPStatus.CREATED)
@handle_api_errors("Intervention creation")
def save_intervention(
    car_id: RowId,
    payload: InterventionWrite,
    service: InterventionService = Depends(get_intervention_service),
):
    return service.create_intervention(car_id, payload)
