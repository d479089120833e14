"""Domain models for app_users: plain dataclasses."""

import json
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

# users.id is a SERIAL (int4) column
USER_ID_MIN = -(2**31)
USER_ID_MAX = 2**31 - 1


@dataclass
class User:
    """Conceptual user; id is assigned by the caller."""

    id: int
    name: str
    email: str
    active: bool = True

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError(f"User id must be non-negative, got {self.id}")
        if not self.name:
            raise ValueError("User name must not be empty")

    def activate(self) -> None:
        self.active = True

    def deactivate(self) -> None:
        self.active = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            name=data["name"],
            email=data["email"],
            active=bool(data.get("active", True)),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, raw: str) -> "User":
        return cls.from_dict(json.loads(raw))

    def __str__(self) -> str:
        active = "true" if self.active else "false"
        return f"User(id: {self.id}, name: {self.name}, email: {self.email}, active: {active})"


@dataclass
class DbUser:
    """A row of the users table; id and created_at are set by the store."""

    id: int
    name: str
    email: str
    active: bool
    created_at: datetime | None = None

    def to_user(self) -> User:
        return User(id=self.id, name=self.name, email=self.email, active=self.active)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "active": self.active,
        }
        if self.created_at is not None:
            data["created_at"] = self.created_at.isoformat()
        return data
