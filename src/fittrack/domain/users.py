"""Domain models for portal logins."""

from dataclasses import dataclass, field
from enum import Enum


class Role(str, Enum):
    """Which portal a login belongs to."""

    ADMIN = "admin"
    CLIENT = "client"


@dataclass(frozen=True)
class CurrentUser:
    """The identity of the active portal session."""

    email: str
    name: str
    role: Role
    id: int | None = None

    def to_dict(self) -> dict[str, object]:
        """Return the persisted JSON shape."""
        payload: dict[str, object] = {
            "email": self.email,
            "name": self.name,
            "role": self.role.value,
        }
        if self.id is not None:
            payload["id"] = self.id
        return payload

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "CurrentUser":
        """Build the identity from its persisted JSON shape."""
        raw_id = row.get("id")
        return cls(
            email=str(row["email"]),
            name=str(row.get("name", "")),
            role=Role(row["role"]),
            id=int(raw_id) if raw_id is not None else None,
        )


@dataclass(frozen=True)
class UserAccount:
    """A stored login with its plaintext credential."""

    email: str
    password: str
    role: Role
    name: str
    id: int | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "email": self.email,
            "password": self.password,
            "role": self.role.value,
            "name": self.name,
        }
        if self.id is not None:
            payload = {"id": self.id, **payload}
        return payload

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "UserAccount":
        raw_id = row.get("id")
        return cls(
            email=str(row["email"]),
            password=str(row["password"]),
            role=Role(row.get("role", Role.CLIENT.value)),
            name=str(row.get("name", "")),
            id=int(raw_id) if raw_id is not None else None,
        )


@dataclass(frozen=True)
class UserDirectory:
    """Credential store with one admin and any number of client logins."""

    admin: UserAccount
    clients: list[UserAccount] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "admin": self.admin.to_dict(),
            "clients": [account.to_dict() for account in self.clients],
        }

    @classmethod
    def from_dict(cls, payload: dict[str, object]) -> "UserDirectory":
        raw_clients = payload.get("clients") or []
        if not isinstance(raw_clients, list):
            raise TypeError("clients must be a list")
        return cls(
            admin=UserAccount.from_dict(payload["admin"]),
            clients=[UserAccount.from_dict(row) for row in raw_clients],
        )
