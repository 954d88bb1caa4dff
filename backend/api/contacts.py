from fastapi import APIRouter, Depends, Response
from typing import List

from constants import HTTPStatus
from dependencies import RowId, get_contact_service
from schemas import ContactCreate, ContactRead, ContactUpdate
from services.contact_service import ContactService
from utils.error_handlers import handle_api_errors

router = APIRouter()


@router.get("/contacts/all", response_model=List[ContactRead])
@handle_api_errors("Contact listing")
def list_contacts(service: ContactService = Depends(get_contact_service)):
    """Contacts, favorites first"""
    return service.get_all_contacts()


@router.get("/contacts/{contact_id}", response_model=ContactRead)
@handle_api_errors("Contact retrieval")
def get_contact(contact_id: RowId, service: ContactService = Depends(get_contact_service)):
    return service.get_contact(contact_id)


@router.post("/contacts/save", response_model=ContactRead, status_code=HTTPStatus.CREATED)
@handle_api_errors("Contact creation")
def save_contact(payload: ContactCreate, service: ContactService = Depends(get_contact_service)):
    return service.create_contact(payload)


@router.put("/contacts/{contact_id}/update", response_model=ContactRead)
@handle_api_errors("Contact update")
def update_contact(contact_id: RowId, payload: ContactUpdate, service: ContactService = Depends(get_contact_service)):
    return service.update_contact(contact_id, payload)


@router.delete("/contacts/{contact_id}/delete", status_code=HTTPStatus.NO_CONTENT)
@handle_api_errors("Contact deletion")
def delete_contact(contact_id: RowId, service: ContactService = Depends(get_contact_service)):
    service.delete_contact(contact_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)
