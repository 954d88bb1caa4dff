from fastapi import APIRouter, Depends, Response
from typing import List

from constants import HTTPStatus
from dependencies import RowId, get_intervention_service, get_operation_service
from schemas import InterventionRead, InterventionWrite, OperationRead, OperationWrite
from services.intervention_service import InterventionService
from services.operation_service import OperationService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/interventions/{intervention_id}", response_model=InterventionRead)
@handle_api_errors("Intervention retrieval")
def get_intervention(intervention_id: RowId, service: InterventionService = Depends(get_intervention_service)):
    return service.get_intervention(intervention_id)


@router.put("/interventions/{intervention_id}/update", response_model=InterventionRead)
@handle_api_errors("Intervention update")
def update_intervention(
    intervention_id: RowId,
    payload: InterventionWrite,
    service: InterventionService = Depends(get_intervention_service),
):
    """Update an intervention; year and number in the payload are ignored"""
    return service.update_intervention(intervention_id, payload)


@router.delete("/interventions/{intervention_id}/delete", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Intervention deletion")
def delete_intervention(intervention_id: RowId, service: InterventionService = Depends(get_intervention_service)):
    service.delete_intervention(intervention_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/interventions/{intervention_id}/operations", response_model=List[OperationRead])
@handle_api_errors("Operation listing")
def list_intervention_operations(intervention_id: RowId, service: OperationService = Depends(get_operation_service)):
    return service.get_intervention_operations(intervention_id)


@router.post(
    "/interventions/{intervention_id}/operations/save",
    response_model=OperationRead,
    status_code=HTTPStatus.CREATED,
)
@handle_api_errors("Operation creation")
def save_operation(
    intervention_id: RowId,
    payload: OperationWrite,
    service: OperationService = Depends(get_operation_service),
):
    return service.create_operation(intervention_id, payload)
