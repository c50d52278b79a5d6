from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from pydantic import ValidationError

from app.schemas.contact import ContactInput

CONTACT_FIELDS = ("name", "email", "birthday", "company")


@dataclass(frozen=True)
class Ok:
    value: ContactInput


@dataclass(frozen=True)
class Err:
    errors: Dict[str, List[str]] = field(default_factory=dict)


ValidationResult = Union[Ok, Err]


def _message(field_name: str, error: Dict[str, Any]) -> str:
    if error["type"] == "missing":
        return f"The {field_name} field is required."
    if field_name == "email" and error["type"] not in ("required", "max_length"):
        return "The email must be a valid email address."
    return error["msg"]


def validate_contact(payload: Any) -> ValidationResult:
    """Check a create/update body against the contact rules.

    Returns ``Ok`` with the cleaned fields, or ``Err`` with every broken
    rule as ``{field: [message, ...]}``.  Keys other than the four
    contact fields (e.g. ``api_token``) are ignored.
    """
    if not isinstance(payload, Mapping):
        return Err({"body": ["The request body must be a JSON object."]})

    data = {key: payload[key] for key in CONTACT_FIELDS if key in payload}
    try:
        return Ok(ContactInput(**data))
    except ValidationError as exc:
        errors: Dict[str, List[str]] = {}
        for error in exc.errors():
            field_name = str(error["loc"][0]) if error["loc"] else "body"
            errors.setdefault(field_name, []).append(_message(field_name, error))
        return Err(errors)
