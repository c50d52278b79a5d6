from pydantic import BaseModel, EmailStr, field_validator
from pydantic_core import PydanticCustomError
from typing import List
from datetime import date, datetime

from app.services.dates import parse_birthday

MAX_TEXT_LENGTH = 255  # String(255) columns


def _required(field: str) -> PydanticCustomError:
    return PydanticCustomError("required", "The {field} field is required.", {"field": field})


def _check_length(field: str, v):
    if isinstance(v, str) and len(v) > MAX_TEXT_LENGTH:
        raise PydanticCustomError(
            "max_length",
            "The {field} may not be greater than {limit} characters.",
            {"field": field, "limit": MAX_TEXT_LENGTH},
        )
    return v


class ContactInput(BaseModel):
    """Body of a create or update request. All four fields are always required."""

    name: str
    email: EmailStr
    birthday: date
    company: str

    @field_validator("name", "email", mode="before")
    @classmethod
    def not_blank(cls, v, info):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise _required(info.field_name)
        if isinstance(v, str):
            v = v.strip()
            # EmailStr would quietly reduce "Bob <bob@email.com>" to the bare address
            if info.field_name == "email" and ("<" in v or ">" in v):
                raise PydanticCustomError("email", "The email must be a valid email address.")
        return _check_length(info.field_name, v)

    @field_validator("company", mode="before")
    @classmethod
    def company_present(cls, v):
        # Presence only: the value is kept verbatim, whitespace included
        if v is None or v == "":
            raise _required("company")
        return _check_length("company", v)

    @field_validator("birthday", mode="before")
    @classmethod
    def parse_birthday_input(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise _required("birthday")
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if not isinstance(v, str):
            raise PydanticCustomError("birthday", "The birthday is not a valid date.")
        parsed = parse_birthday(v)
        if parsed is None:
            raise PydanticCustomError("birthday", "The birthday is not a valid date.")
        return parsed


class ContactData(BaseModel):
    contact_id: int
    name: str
    email: str
    birthday: str  # MM/DD/YYYY
    company: str
    last_updated: str


class ContactLinks(BaseModel):
    self: str


class ContactResource(BaseModel):
    data: ContactData
    links: ContactLinks


class ContactCollection(BaseModel):
    data: List[ContactResource]
