from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.core.config import settings
from app.core.database import utcnow
from app.models.user import User
from app.schemas.contact import ContactCollection
from app.services.contact_store import ContactStore
from app.services.formatter import format_collection
from app.api.contacts import get_store
from app.api.deps import get_current_user

router = APIRouter(prefix="/birthdays", tags=["Birthdays"])


@router.get("", response_model=ContactCollection)
async def list_upcoming_birthdays(
    days: Optional[int] = Query(None, ge=0, le=366, description="Window length in days (default from settings)"),
    store: ContactStore = Depends(get_store),
    current_user: User = Depends(get_current_user)
):
    """Contacts with a birthday between today and ``days`` days from now, soonest first."""
    window = settings.BIRTHDAYS_WINDOW_DAYS if days is None else days
    contacts = await store.list_upcoming_birthdays(current_user.id, utcnow().date(), window)
    return format_collection(contacts)
