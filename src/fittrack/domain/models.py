"""Domain models for the client/session ledger."""

from dataclasses import dataclass
from enum import Enum


class ClientStatus(str, Enum):
    """Roster status of a client."""

    ACTIVE = "Active"
    INACTIVE = "Inactive"


class SessionStatus(str, Enum):
    """Lifecycle status of a training session."""

    PENDING = "pending"
    UPCOMING = "upcoming"
    COMPLETED = "completed"


# Statuses that still occupy a calendar slot and are refunded on cancellation.
LIVE_STATUSES = frozenset({SessionStatus.PENDING, SessionStatus.UPCOMING})


@dataclass(frozen=True)
class ClientRecord:
    """Represents a client on the trainer's roster."""

    id: int
    name: str
    email: str
    phone: str
    sessions_remaining: int
    status: ClientStatus

    def to_dict(self) -> dict[str, object]:
        """Return the persisted JSON shape."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "sessionsRemaining": self.sessions_remaining,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "ClientRecord":
        """Build a record from its persisted JSON shape."""
        return cls(
            id=int(row["id"]),
            name=str(row.get("name", "")),
            email=str(row.get("email", "")),
            phone=str(row.get("phone", "")),
            sessions_remaining=int(row.get("sessionsRemaining", 0)),
            status=ClientStatus(row.get("status", ClientStatus.ACTIVE.value)),
        )


@dataclass(frozen=True)
class SessionRecord:
    """Represents a booked or requested training session.

    ``client_name`` is a snapshot taken at booking time and is not kept in
    sync with later client renames. ``client_id`` is a weak reference and may
    point at a client that no longer exists.
    """

    id: int
    client_id: int
    client_name: str
    date: str
    time: str
    duration: int
    workout_type: str
    status: SessionStatus
    notes: str = ""

    @property
    def sort_key(self) -> tuple[str, str]:
        """Chronological key; valid because date and time are zero-padded."""
        return (self.date, self.time)

    def to_dict(self) -> dict[str, object]:
        """Return the persisted JSON shape."""
        return {
            "id": self.id,
            "clientId": self.client_id,
            "clientName": self.client_name,
            "date": self.date,
            "time": self.time,
            "duration": self.duration,
            "workoutType": self.workout_type,
            "status": self.status.value,
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, row: dict[str, object]) -> "SessionRecord":
        """Build a record from its persisted JSON shape."""
        return cls(
            id=int(row["id"]),
            client_id=int(row["clientId"]),
            client_name=str(row.get("clientName", "")),
            date=str(row["date"]),
            time=str(row["time"]),
            duration=int(row.get("duration", 60)),
            workout_type=str(row.get("workoutType", "")),
            status=SessionStatus(row.get("status") or SessionStatus.UPCOMING),
            notes=str(row.get("notes") or ""),
        )
