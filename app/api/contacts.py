import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.exceptions import ContactNotFound
from app.models.contact import Contact
from app.models.user import User
from app.schemas.contact import ContactCollection, ContactResource
from app.services.contact_store import ContactStore
from app.services.formatter import format_collection, format_contact
from app.services.ownership import owns
from app.services.validation import Err, validate_contact
from app.api.deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["Contacts"])


def get_store(db: AsyncSession = Depends(get_db)) -> ContactStore:
    return ContactStore(db)


def validation_failed(errors) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"errors": errors})


async def get_owned_contact(store: ContactStore, contact_id: int, user: User) -> Contact:
    """Load a contact for ``user``: 404 if it does not exist, then 403 if it is someone else's."""
    try:
        contact = await store.get(contact_id)
    except ContactNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Contact not found") from None

    if not owns(user, contact):
        logger.warning("User %s denied access to contact %s", user.id, contact_id)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="This action is unauthorized.")
    return contact


@router.get("", response_model=ContactCollection)
async def list_contacts(
    store: ContactStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    contacts = await store.list_by_user(current_user.id)
    return format_collection(contacts)


@router.post("", response_model=ContactResource, status_code=status.HTTP_201_CREATED)
async def create_contact(
    payload: Any = Body(None),
    store: ContactStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    result = validate_contact(payload)
    if isinstance(result, Err):
        logger.warning("Rejected new contact for user %s: %s", current_user.id, sorted(result.errors))
        return validation_failed(result.errors)

    contact = await store.create(current_user.id, result.value)
    return format_contact(contact)


@router.get("/{contact_id}", response_model=ContactResource)
async def get_contact(
    contact_id: int,
    store: ContactStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    contact = await get_owned_contact(store, contact_id, current_user)
    return format_contact(contact)


@router.patch("/{contact_id}", response_model=ContactResource)
async def update_contact(
    contact_id: int,
    payload: Any = Body(None),
    store: ContactStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    await get_owned_contact(store, contact_id, current_user)

    result = validate_contact(payload)
    if isinstance(result, Err):
        logger.warning("Rejected update of contact %s: %s", contact_id, sorted(result.errors))
        return validation_failed(result.errors)

    contact = await store.update(contact_id, result.value)
    return format_contact(contact)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: int,
    store: ContactStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    await get_owned_contact(store, contact_id, current_user)
    await store.delete(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
