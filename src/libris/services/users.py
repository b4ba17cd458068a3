# ABOUTME: Storage of login accounts for the authentication layer.
# ABOUTME: Password hashes are stored and returned verbatim; hashing happens elsewhere.

from __future__ import annotations

from libris.db.mapping import User, row_to_user
from libris.services.base import EntityService


class UserService(EntityService[User]):
    table = "users"
    label = "user"
    key = "username"
    mapper = staticmethod(row_to_user)

    def add(self, username: str, email: str, password_hash: str) -> User:
        """Add a user account.

        Raises:
            AlreadyExists: If the username is taken.
        """
        return self._insert_and_fetch(
            {"username": username, "email": email, "password": password_hash}
        )

    def get_by_username(self, username: str) -> User | None:
        return self._get_by_key(username)
