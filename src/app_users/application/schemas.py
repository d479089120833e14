"""Pydantic request/response schemas for app_users.

All responses are wrapped in ApiResponse at the router layer.
"""

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from src.app_users.domain.models import DbUser


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def email_well_formed(cls, v: str) -> str:
        """Syntax check only; the address is stored exactly as given."""
        try:
            validate_email(v, check_deliverability=False, globally_deliverable=False)
        except EmailNotValidError as exc:
            raise ValueError(f"invalid email address: {exc}") from exc
        return v


class UserResponse(BaseModel):
    id: int
    name: str
    email: str
    active: bool

    @classmethod
    def from_domain(cls, user: DbUser) -> "UserResponse":
        return cls(id=user.id, name=user.name, email=user.email, active=user.active)
