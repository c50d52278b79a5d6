import logging
from datetime import date
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import utcnow
from app.core.exceptions import ContactNotFound
from app.models.contact import Contact
from app.schemas.contact import ContactInput
from app.services.dates import days_until_birthday, in_birthday_window

logger = logging.getLogger(__name__)

# contacts.id is a 32-bit Integer column
MAX_CONTACT_ID = 2**31 - 1


class ContactStore:
    """CRUD access to the contacts table.

    Every method reads from the database; nothing is cached between
    calls.  Storage errors are left to propagate.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_user(self, user_id: int) -> List[Contact]:
        result = await self.db.execute(
            select(Contact).where(Contact.user_id == user_id).order_by(Contact.id)
        )
        return list(result.scalars().all())

    async def list_upcoming_birthdays(self, user_id: int, today: date, window_days: int) -> List[Contact]:
        """Contacts whose next birthday is within ``window_days`` of ``today``, soonest first."""
        contacts = await self.list_by_user(user_id)
        upcoming = [c for c in contacts if in_birthday_window(c.birthday, today, window_days)]
        upcoming.sort(key=lambda c: (days_until_birthday(c.birthday, today), c.name))
        return upcoming

    async def get(self, contact_id: int) -> Contact:
        if not 1 <= contact_id <= MAX_CONTACT_ID:
            raise ContactNotFound(contact_id)
        contact = await self.db.get(Contact, contact_id)
        if contact is None:
            raise ContactNotFound(contact_id)
        return contact

    async def create(self, user_id: int, fields: ContactInput) -> Contact:
        contact = Contact(
            user_id=user_id,
            name=fields.name,
            email=fields.email,
            birthday=fields.birthday,
            company=fields.company,
        )
        self.db.add(contact)
        await self.db.commit()
        await self.db.refresh(contact)

        logger.info("Created contact %s for user %s", contact.id, user_id)
        return contact

    async def update(self, contact_id: int, fields: ContactInput) -> Contact:
        contact = await self.get(contact_id)
        contact.name = fields.name
        contact.email = fields.email
        contact.birthday = fields.birthday
        contact.company = fields.company
        # Set explicitly: an update with unchanged values emits no UPDATE otherwise
        contact.updated_at = utcnow()

        await self.db.commit()
        await self.db.refresh(contact)

        logger.info("Updated contact %s", contact_id)
        return contact

    async def delete(self, contact_id: int) -> None:
        contact = await self.get(contact_id)
        await self.db.delete(contact)
        await self.db.commit()

        logger.info("Deleted contact %s", contact_id)
