"""Tests for portal login."""

from fittrack.domain.users import CurrentUser, Role
from fittrack.services.auth import AuthService
from fittrack.services.seed import (
    DEFAULT_ADMIN_EMAIL,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_CLIENT_PASSWORD,
    seed_users,
)
from fittrack.services.storage import CURRENT_USER_KEY


def test_admin_login_sets_current_user(storage, ledger) -> None:
    seed_users(storage, ledger)
    auth = AuthService(storage)

    result = auth.login(DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD, Role.ADMIN)

    assert result.success
    assert result.user == CurrentUser(
        email=DEFAULT_ADMIN_EMAIL, name="Admin User", role=Role.ADMIN
    )
    assert auth.current_user() == result.user
    assert storage.get(CURRENT_USER_KEY) == {
        "email": DEFAULT_ADMIN_EMAIL,
        "name": "Admin User",
        "role": "admin",
    }


def test_client_login_carries_directory_id(storage, ledger) -> None:
    seed_users(storage, ledger)
    auth = AuthService(storage)

    result = auth.login("sarah.j@email.com", DEFAULT_CLIENT_PASSWORD, Role.CLIENT)

    assert result.success
    assert result.user is not None
    assert result.user.role is Role.CLIENT
    assert result.user.name == "Sarah Johnson"
    assert result.user.id is not None


def test_wrong_credentials_are_rejected(storage, ledger) -> None:
    seed_users(storage, ledger)
    auth = AuthService(storage)

    admin = auth.login(DEFAULT_ADMIN_EMAIL, "nope", Role.ADMIN)
    client = auth.login(DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD, Role.CLIENT)

    assert not admin.success
    assert admin.message == "Invalid admin credentials"
    assert not client.success
    assert client.message == "Invalid client credentials"
    assert auth.current_user() is None


def test_login_without_directory(storage) -> None:
    result = AuthService(storage).login("a@b.c", "x", Role.ADMIN)

    assert not result.success


def test_logout_and_unreadable_current_user(storage, ledger) -> None:
    seed_users(storage, ledger)
    auth = AuthService(storage)
    auth.login(DEFAULT_ADMIN_EMAIL, DEFAULT_ADMIN_PASSWORD, Role.ADMIN)

    auth.logout()
    assert auth.current_user() is None

    storage.set(CURRENT_USER_KEY, {"name": "no email"})
    assert auth.current_user() is None


def test_seed_users_keeps_existing_directory(storage, ledger) -> None:
    storage.set("users", {"admin": {"email": "a", "password": "b"}, "clients": []})

    seed_users(storage, ledger)

    directory = AuthService(storage).directory()
    assert directory is not None
    assert directory.admin.email == "a"
    assert directory.clients == []
