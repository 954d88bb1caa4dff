"""
Contact Service

CRUD for the address book. Contacts are independent rows: no cascade.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from exceptions import ConflictError, NotFoundError
from models import Contact
from repositories.contact_repository import ContactRepository
from schemas import ContactCreate, ContactRead, ContactUpdate
from services.base_service import BaseService
from utils.loggable import loggable

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ('name', 'nickname', 'number', 'favorite', 'picture')


class ContactService(BaseService):
    """Service for contact business logic."""

    resource_name = "Contact"

    def __init__(self, db: Session):
        super().__init__(db)
        self.contact_repo = ContactRepository(db)

    def _get_or_raise(self, contact_id: int) -> Contact:
        contact = self.contact_repo.get_by_id(contact_id)
        if contact is None:
            raise NotFoundError(self.resource_name, contact_id)
        return contact

    @loggable(debug=True)
    def get_all_contacts(self) -> List[ContactRead]:
        return [ContactRead.model_validate(c) for c in self.contact_repo.get_all_by_favorite()]

    @loggable(debug=True)
    def get_contact(self, contact_id: int) -> ContactRead:
        return ContactRead.model_validate(self._get_or_raise(contact_id))

    @loggable()
    def create_contact(self, payload: ContactCreate) -> ContactRead:
        """
        Insert a contact under the id chosen by the caller.

        Raises:
            ConflictError: If a contact already uses this id
        """
        if self.contact_repo.exists(payload.id):
            raise ConflictError(f"Contact '{payload.id}' already exists", self.resource_name)

        with self.transaction("create contact"):
            contact = Contact(id=payload.id)
            for field in CONTACT_FIELDS:
                setattr(contact, field, getattr(payload, field))
            self.contact_repo.create(contact)
        return self.get_contact(payload.id)

    @loggable()
    def update_contact(self, contact_id: int, payload: ContactUpdate) -> ContactRead:
        with self.transaction("update contact"):
            contact = self._get_or_raise(contact_id)
            for field in CONTACT_FIELDS:
                setattr(contact, field, getattr(payload, field))
            self.contact_repo.update(contact)
        return self.get_contact(contact_id)

    @loggable()
    def delete_contact(self, contact_id: int) -> None:
        with self.transaction("delete contact"):
            contact = self._get_or_raise(contact_id)
            self.contact_repo.delete(contact)
