"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Optional

from modules.core.repositories.interfaces import IRepository


class IUserRepository(IRepository[Any]):
    """Repository contract for the auth user model."""

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[Any]:
        """Retrieve a user by username."""

    @abstractmethod
    def create(self, username: str, password: str) -> Any:
        """Create a user with a hashed password."""
