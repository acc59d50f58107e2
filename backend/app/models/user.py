from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.core.config import settings
from app.utils.csv_utils import format_locale_timestamp

# Header row of the backing file; record fields are written in this order
CSV_HEADERS = [
    "User ID",
    "Full Name",
    "Email",
    "Role",
    "Department",
    "Year",
    "Date Created",
    "Is Active",
    "Last Login",
]


class UserCreate(BaseModel):
    """
    Registration payload for POST /api/users.

    Every field is optional at the schema level so that missing required
    fields can be reported with the API's own message instead of a schema error.
    JSON numbers are accepted for text fields (e.g. `"id": 42`).
    """

    id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    year: Optional[str] = None
    date_created: Optional[datetime] = Field(None, alias="dateCreated")
    is_active: Optional[bool] = Field(None, alias="isActive")
    last_login: Optional[datetime] = Field(None, alias="lastLogin")

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    @field_validator(
        "id", "name", "email", "role", "department", "year", "date_created", "last_login",
        mode="before",
    )
    @classmethod
    def falsy_value_is_absent(cls, value):
        # "", 0 and false all count as missing
        if not value:
            return None
        return value


class UserRecord(BaseModel):
    """One stored line of the backing file, already rendered as text."""

    id: str
    name: str
    email: str
    role: str
    department: str
    year: str
    date_created: str
    is_active: str
    last_login: str

    @classmethod
    def from_payload(cls, payload: UserCreate, now: Optional[datetime] = None) -> "UserRecord":
        """Apply defaults: sentinel for absent optional fields, current time for date created"""
        na = settings.NOT_APPLICABLE
        created = payload.date_created or now or datetime.now()
        return cls(
            id=payload.id,
            name=payload.name,
            email=payload.email,
            role=payload.role,
            department=payload.department or na,
            year=payload.year or na,
            date_created=format_locale_timestamp(created),
            is_active="Yes" if payload.is_active else "No",
            last_login=format_locale_timestamp(payload.last_login) if payload.last_login else na,
        )

    def to_row(self) -> list[str]:
        return [
            self.id,
            self.name,
            self.email,
            self.role,
            self.department,
            self.year,
            self.date_created,
            self.is_active,
            self.last_login,
        ]
