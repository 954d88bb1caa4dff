from fastapi import APIRouter, Depends, Response
from typing import List

from constants import HTTPStatus
from dependencies import RowId, get_operation_service, get_operation_line_service
from schemas import OperationRead, OperationWrite, OperationLineRead, OperationLineWrite
from services.operation_service import OperationService, OperationLineService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/operations/{operation_id}", response_model=OperationRead)
@handle_api_errors("Operation retrieval")
def get_operation(operation_id: RowId, service: OperationService = Depends(get_operation_service)):
    return service.get_operation(operation_id)


@router.put("/operations/{operation_id}/update", response_model=OperationRead)
@handle_api_errors("Operation update")
def update_operation(
    operation_id: RowId,
    payload: OperationWrite,
    service: OperationService = Depends(get_operation_service),
):
    return service.update_operation(operation_id, payload)


@router.delete("/operations/{operation_id}/delete", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Operation deletion")
def delete_operation(operation_id: RowId, service: OperationService = Depends(get_operation_service)):
    service.delete_operation(operation_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/operations/{operation_id}/lines", response_model=List[OperationLineRead])
@handle_api_errors("Operation line listing")
def list_operation_lines(operation_id: RowId, service: OperationLineService = Depends(get_operation_line_service)):
    return service.get_operation_lines(operation_id)


@router.post("/operations/{operation_id}/lines/save", response_model=OperationLineRead, status_code=HTTPStatus.CREATED)
@handle_api_errors("Operation line creation")
def save_operation_line(
    operation_id: RowId,
    payload: OperationLineWrite,
    service: OperationLineService = Depends(get_operation_line_service),
):
    return service.create_operation_line(operation_id, payload)


@router.get("/operation-lines/{line_id}", response_model=OperationLineRead)
@handle_api_errors("Operation line retrieval")
def get_operation_line(line_id: RowId, service: OperationLineService = Depends(get_operation_line_service)):
    return service.get_operation_line(line_id)


@router.put("/operation-lines/{line_id}/update", response_model=OperationLineRead)
@handle_api_errors("Operation line update")
def update_operation_line(
    line_id: RowId,
    payload: OperationLineWrite,
    service: OperationLineService = Depends(get_operation_line_service),
):
    return service.update_operation_line(line_id, payload)


@router.delete("/operation-lines/{line_id}/delete", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Operation line deletion")
def delete_operation_line(line_id: RowId, service: OperationLineService = Depends(get_operation_line_service)):
    service.delete_operation_line(line_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
