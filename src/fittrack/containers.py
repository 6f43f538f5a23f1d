"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from supabase import create_client

from fittrack.adapters.json_file_backend import JsonFileBackend
from fittrack.adapters.supabase_kv_backend import SupabaseKeyValueBackend
from fittrack.config import Settings, parse_storage_backend
from fittrack.domain.users import CurrentUser
from fittrack.services.auth import AuthService
from fittrack.services.ledger import LedgerStore
from fittrack.services.portals import AdminPortal, ClientPortal
from fittrack.services.queries import SessionQueries, today_utc
from fittrack.services.seed import seed_ledger, seed_users
from fittrack.services.storage import KeyValueBackend, StorageAdapter


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    storage: StorageAdapter
    ledger: LedgerStore
    queries: SessionQueries
    admin_portal: AdminPortal
    auth_service: AuthService
    today: Callable[[], date]

    def client_portal(self, user: CurrentUser) -> ClientPortal:
        """Return the client portal scoped to a signed-in client."""
        return ClientPortal(ledger=self.ledger, queries=self.queries, user=user)


def build_backend(settings: Settings) -> KeyValueBackend:
    """Create the configured storage backend."""
    backend = parse_storage_backend(settings.storage_backend)
    if backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage needs SUPABASE_URL and key")
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueBackend(client, table=settings.supabase_table)
    return JsonFileBackend.create(settings.storage_dir)


def build_container(
    settings: Settings | None = None,
    backend: KeyValueBackend | None = None,
    today: Callable[[], date] = today_utc,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storage = StorageAdapter(backend or build_backend(resolved_settings))
    ledger = LedgerStore.load(storage)
    if resolved_settings.seed_sample_data:
        seed_ledger(ledger, today())
        seed_users(storage, ledger)
    queries = SessionQueries(ledger)
    admin_portal = AdminPortal(
        ledger=ledger,
        queries=queries,
        upcoming_limit=resolved_settings.upcoming_limit,
    )
    return AppContainer(
        settings=resolved_settings,
        storage=storage,
        ledger=ledger,
        queries=queries,
        admin_portal=admin_portal,
        auth_service=AuthService(storage),
        today=today,
    )
