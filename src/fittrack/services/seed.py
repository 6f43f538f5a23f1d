"""Sample data installed when storage starts empty."""

import logging
from datetime import date, timedelta

from fittrack.domain.models import (
    ClientRecord,
    ClientStatus,
    SessionRecord,
    SessionStatus,
)
from fittrack.domain.users import Role, UserAccount, UserDirectory
from fittrack.services.ledger import LedgerStore
from fittrack.services.storage import USERS_KEY, StorageAdapter

_logger = logging.getLogger(__name__)

DEFAULT_ADMIN_EMAIL = "admin@fittrack.com"
DEFAULT_ADMIN_PASSWORD = "admin123"  # noqa: S105
DEFAULT_CLIENT_PASSWORD = "client123"  # noqa: S105

_SAMPLE_CLIENTS = [
    ("John Smith", "john.smith@email.com", "(555) 123-4567", 8),
    ("Sarah Johnson", "sarah.j@email.com", "(555) 234-5678", 12),
    ("Mike Williams", "mike.w@email.com", "(555) 345-6789", 5),
]

# (day offset from today, time, duration, workout type)
_SAMPLE_SESSIONS = [
    (0, "09:00", 60, "Strength Training"),
    (0, "14:00", 60, "HIIT"),
    (1, "10:00", 45, "Cardio"),
]


def seed_ledger(ledger: LedgerStore, today: date) -> None:
    """Fill empty client and session collections with sample records."""
    if not ledger.list_clients():
        clients = [
            ClientRecord(
                id=ledger.next_id(),
                name=name,
                email=email,
                phone=phone,
                sessions_remaining=remaining,
                status=ClientStatus.ACTIVE,
            )
            for name, email, phone, remaining in _SAMPLE_CLIENTS
        ]
        ledger.seed(clients=clients)
        _logger.info("Seeded sample clients: count=%s", len(clients))

    if not ledger.list_sessions():
        clients = ledger.list_clients()
        sessions = [
            SessionRecord(
                id=ledger.next_id(),
                client_id=client.id,
                client_name=client.name,
                date=(today + timedelta(days=offset)).isoformat(),
                time=start,
                duration=duration,
                workout_type=workout_type,
                status=SessionStatus.UPCOMING,
            )
            for client, (offset, start, duration, workout_type) in zip(
                clients, _SAMPLE_SESSIONS, strict=False
            )
        ]
        ledger.seed(sessions=sessions)
        _logger.info("Seeded sample sessions: count=%s", len(sessions))


def seed_users(storage: StorageAdapter, ledger: LedgerStore) -> None:
    """Store the default logins if no user directory exists yet."""
    if storage.get(USERS_KEY) is not None:
        return
    directory = UserDirectory(
        admin=UserAccount(
            email=DEFAULT_ADMIN_EMAIL,
            password=DEFAULT_ADMIN_PASSWORD,
            role=Role.ADMIN,
            name="Admin User",
        ),
        clients=[
            UserAccount(
                id=ledger.next_id(),
                email=email,
                password=DEFAULT_CLIENT_PASSWORD,
                role=Role.CLIENT,
                name=name,
            )
            for name, email, _phone, _remaining in _SAMPLE_CLIENTS
        ],
    )
    storage.set(USERS_KEY, directory.to_dict())
    _logger.info("Seeded default user directory")
