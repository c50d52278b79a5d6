from app.models.contact import Contact
from app.models.user import User


def owns(user: User, contact: Contact) -> bool:
    """Whether ``user`` may read or change ``contact``."""
    return contact.user_id == user.id
