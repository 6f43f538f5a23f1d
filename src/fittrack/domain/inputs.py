"""Typed inputs for creating and patching ledger records.

Every model accepts both the camelCase names used in persisted JSON and
the snake_case attribute names. Patches enumerate every editable field as
optional; only the fields a caller actually sets are merged.
"""

import re
from datetime import date as calendar_date

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from fittrack.domain.models import ClientStatus, SessionStatus

_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _check_date(value: str | None) -> str | None:
    if value is None:
        return None
    if not _DATE_PATTERN.match(value):
        raise ValueError("date must be formatted as YYYY-MM-DD")
    calendar_date.fromisoformat(value)
    return value


def _check_time(value: str | None) -> str | None:
    if value is None:
        return None
    if not _TIME_PATTERN.match(value):
        raise ValueError("time must be a zero-padded 24h HH:MM value")
    return value


class _LedgerInput(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class _Patch(_LedgerInput):
    def changes(self) -> dict[str, object]:
        """Return the fields the caller set, skipping explicit nulls."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class ClientDraft(_LedgerInput):
    """Fields for a new client."""

    name: str = Field(min_length=1)
    email: str
    phone: str = ""
    sessions_remaining: int = Field(default=0, ge=0)
    status: ClientStatus = ClientStatus.ACTIVE


class ClientPatch(_Patch):
    """Partial update for a client."""

    name: str | None = Field(default=None, min_length=1)
    email: str | None = None
    phone: str | None = None
    sessions_remaining: int | None = Field(default=None, ge=0)
    status: ClientStatus | None = None


class SessionDraft(_LedgerInput):
    """Fields for a new session."""

    client_id: int
    client_name: str = ""
    date: str
    time: str
    duration: int = Field(default=60, gt=0)
    workout_type: str = ""
    notes: str = ""
    status: SessionStatus = SessionStatus.UPCOMING

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return _check_date(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)


class SessionPatch(_Patch):
    """Partial update for a session."""

    client_id: int | None = None
    client_name: str | None = None
    date: str | None = None
    time: str | None = None
    duration: int | None = Field(default=None, gt=0)
    workout_type: str | None = None
    notes: str | None = None
    status: SessionStatus | None = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str | None) -> str | None:
        return _check_date(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str | None) -> str | None:
        return _check_time(value)


class BookingRequest(_LedgerInput):
    """Fields a client supplies when requesting a session."""

    date: str
    time: str
    duration: int = Field(default=60, gt=0)
    workout_type: str = ""
    notes: str = ""

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        return _check_date(value)

    @field_validator("time")
    @classmethod
    def validate_time(cls, value: str) -> str:
        return _check_time(value)
