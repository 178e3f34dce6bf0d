"""Account service layer (Use Cases)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from django.db import IntegrityError, transaction

from modules.accounts.exceptions import UsernameAlreadyTaken, UserNotFound

if TYPE_CHECKING:
    from modules.accounts.dtos import RegisterUserDTO
    from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class AccountService:
    def __init__(self, repository: IUserRepository) -> None:
        self._repo = repository

    def register(self, dto: RegisterUserDTO) -> Any:
        """Create a new user account.

        Raises:
            UsernameAlreadyTaken: the username is already registered.
        """
        log = logger.bind(username=dto.username)

        if self._repo.get_by_username(dto.username):
            log.warning("user.duplicate_username")
            raise UsernameAlreadyTaken(f"Username '{dto.username}' already taken.")

        try:
            with transaction.atomic():
                user = self._repo.create(dto.username, dto.password)
        except IntegrityError as exc:
            # Lost a race against a concurrent registration
            log.warning("user.duplicate_username")
            raise UsernameAlreadyTaken(
                f"Username '{dto.username}' already taken."
            ) from exc

        log.info("user.registered", user_id=user.pk)
        return user

    def get_user(self, id: str) -> Any:
        user = self._repo.get_by_id(id)
        if not user:
            raise UserNotFound(f"User {id} not found.")
        return user

    def get_user_by_username(self, username: str) -> Any:
        user = self._repo.get_by_username(username)
        if not user:
            raise UserNotFound(f"User '{username}' not found.")
        return user
