from datetime import datetime
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from app.core.database import utcnow
from app.models.contact import Contact
from app.schemas.contact import ContactCollection, ContactData, ContactLinks, ContactResource

BIRTHDAY_OUTPUT_FORMAT = "%m/%d/%Y"


def contact_path(contact_id: int) -> str:
    return f"/contacts/{contact_id}"


def diff_for_humans(then: datetime, now: Optional[datetime] = None) -> str:
    """Describe ``then`` relative to ``now``: "3 minutes ago", "2 days from now"."""
    now = now or utcnow()
    future = then > now
    delta = relativedelta(then, now) if future else relativedelta(now, then)

    units = [
        ("year", delta.years),
        ("month", delta.months),
        ("week", delta.days // 7),
        ("day", delta.days),
        ("hour", delta.hours),
        ("minute", delta.minutes),
        ("second", delta.seconds),
    ]
    unit, count = next(((u, c) for u, c in units if c > 0), ("second", 1))
    label = unit if count == 1 else f"{unit}s"
    return f"{count} {label} {'from now' if future else 'ago'}"


def format_contact(contact: Contact, now: Optional[datetime] = None) -> ContactResource:
    return ContactResource(
        data=ContactData(
            contact_id=contact.id,
            name=contact.name,
            email=contact.email,
            birthday=contact.birthday.strftime(BIRTHDAY_OUTPUT_FORMAT),
            company=contact.company,
            last_updated=diff_for_humans(contact.updated_at, now),
        ),
        links=ContactLinks(self=contact_path(contact.id)),
    )


def format_collection(contacts: Iterable[Contact], now: Optional[datetime] = None) -> ContactCollection:
    now = now or utcnow()
    return ContactCollection(data=[format_contact(contact, now) for contact in contacts])
