class ContactNotFound(Exception):
    """Raised by the contact store when no row has the requested id."""

    def __init__(self, contact_id: int):
        self.contact_id = contact_id
        super().__init__(f"Contact {contact_id} not found")
