"""Portal login against the stored user directory.

Credentials are compared in plaintext, which is all the local single-user
deployment needs. The ledger never reads this directory.
"""

import logging
from dataclasses import dataclass

from fittrack.domain.users import CurrentUser, Role, UserDirectory
from fittrack.services.storage import CURRENT_USER_KEY, USERS_KEY, StorageAdapter

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a login attempt."""

    success: bool
    user: CurrentUser | None = None
    message: str = ""


@dataclass
class AuthService:
    """Validates logins and tracks the active portal user."""

    storage: StorageAdapter

    def directory(self) -> UserDirectory | None:
        """Return the stored user directory, if readable."""
        payload = self.storage.get(USERS_KEY)
        if not isinstance(payload, dict):
            return None
        try:
            return UserDirectory.from_dict(payload)
        except (AttributeError, KeyError, TypeError, ValueError):
            _logger.warning("Ignoring unreadable user directory")
            return None

    def login(self, email: str, password: str, role: Role) -> LoginResult:
        """Check credentials for a role and remember the user on success."""
        directory = self.directory()
        if directory is None:
            return LoginResult(success=False, message="No user accounts configured")
        if role is Role.ADMIN:
            admin = directory.admin
            if admin.email == email and admin.password == password:
                user = CurrentUser(email=admin.email, name=admin.name, role=Role.ADMIN)
                self.storage.set(CURRENT_USER_KEY, user.to_dict())
                return LoginResult(success=True, user=user)
            return LoginResult(success=False, message="Invalid admin credentials")
        for account in directory.clients:
            if account.email == email and account.password == password:
                user = CurrentUser(
                    email=account.email,
                    name=account.name,
                    role=Role.CLIENT,
                    id=account.id,
                )
                self.storage.set(CURRENT_USER_KEY, user.to_dict())
                return LoginResult(success=True, user=user)
        return LoginResult(success=False, message="Invalid client credentials")

    def current_user(self) -> CurrentUser | None:
        """Return the signed-in user, treating unreadable state as signed out."""
        payload = self.storage.get(CURRENT_USER_KEY)
        if not isinstance(payload, dict):
            return None
        try:
            return CurrentUser.from_dict(payload)
        except (KeyError, TypeError, ValueError):
            return None

    def logout(self) -> None:
        self.storage.remove(CURRENT_USER_KEY)
