from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator


class ClientInput(BaseModel):
    client_name: str = Field(min_length=1)
    contact_person: str = ""
    email: EmailStr | None = None
    phone: str = ""
    billing_address: str = ""
    notes: str = ""

    @field_validator("client_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Client name is required")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _blank_email(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class Client(ClientInput):
    id: int | None = None
    uuid: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
