"""Django ORM implementation of the User repository."""

from __future__ import annotations

from typing import Any, Dict, Optional

import structlog
from django.contrib.auth import get_user_model
from django.db import transaction

from modules.accounts.repositories.interfaces import IUserRepository

logger = structlog.get_logger(__name__)


class UserDjangoRepository(IUserRepository):
    """Concrete User repository over ``get_user_model()``."""

    def __init__(self) -> None:
        self._model = get_user_model()

    def get_by_id(self, id: str) -> Optional[Any]:
        try:
            return self._model.objects.filter(pk=id).first()
        except (TypeError, ValueError):
            return None

    def get_by_username(self, username: str) -> Optional[Any]:
        return self._model.objects.filter(username=username).first()

    def list(self, filters: Optional[Dict[str, Any]] = None):
        queryset = self._model.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @transaction.atomic
    def create(self, username: str, password: str) -> Any:
        user = self._model.objects.create_user(username=username, password=password)
        logger.info("user.created", user_id=user.pk, username=username)
        return user

    @transaction.atomic
    def save(self, entity: Any) -> Any:
        entity.save()
        return entity

    @transaction.atomic
    def delete(self, id: str) -> bool:
        user = self.get_by_id(id)
        if not user:
            return False
        user.delete()
        logger.info("user.deleted", user_id=id)
        return True
