"""Tests for typed ledger inputs."""

import pytest
from pydantic import ValidationError

from fittrack.domain.inputs import ClientDraft, ClientPatch, SessionDraft, SessionPatch
from fittrack.domain.models import ClientStatus, SessionStatus


def test_session_draft_accepts_stored_field_names() -> None:
    draft = SessionDraft.model_validate(
        {
            "clientId": 1,
            "clientName": "John Smith",
            "date": "2025-03-10",
            "time": "09:00",
            "duration": 45,
            "workoutType": "Cardio",
            "status": "pending",
        }
    )

    assert draft.client_id == 1
    assert draft.workout_type == "Cardio"
    assert draft.status is SessionStatus.PENDING
    assert draft.notes == ""


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("date", "2025-3-10"),
        ("date", "2025-02-30"),
        ("time", "9:00"),
        ("time", "24:00"),
        ("duration", 0),
        ("status", "cancelled"),
    ],
)
def test_session_draft_rejects_invalid_fields(field: str, value: object) -> None:
    payload = {"clientId": 1, "date": "2025-03-10", "time": "09:00", field: value}

    with pytest.raises(ValidationError):
        SessionDraft.model_validate(payload)


def test_patch_changes_only_include_set_fields() -> None:
    patch = SessionPatch(notes="late", status=SessionStatus.COMPLETED)

    assert patch.changes() == {"notes": "late", "status": SessionStatus.COMPLETED}
    assert SessionPatch().changes() == {}
    assert SessionPatch(notes=None).changes() == {}


def test_client_inputs_validate_balance() -> None:
    with pytest.raises(ValidationError):
        ClientDraft(name="John", email="j@email.com", sessionsRemaining=-1)
    with pytest.raises(ValidationError):
        ClientPatch(sessions_remaining=-2)

    patch = ClientPatch.model_validate({"status": "Inactive"})
    assert patch.changes() == {"status": ClientStatus.INACTIVE}
