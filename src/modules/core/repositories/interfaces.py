"""Base repository contract shared by the storefront modules.

Services talk to ``IRepository[T]`` subclasses only.  ``list`` hands back
something lazily queryable so DRF filter backends and pagination can
narrow it before it hits the database.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Iterator, Optional, Protocol, TypeVar

from django.db import models

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class Queryable(Protocol[T_co]):
    """The slice of the QuerySet API that views rely on."""

    def filter(self, **kwargs: Any) -> models.QuerySet: ...

    def order_by(self, *fields: str) -> models.QuerySet: ...

    def __iter__(self) -> Iterator[T_co]: ...


class IRepository(ABC, Generic[T]):
    """CRUD contract for one entity type.

    Look-ups never raise for unknown or malformed IDs; they return
    ``None`` (or ``False`` for ``delete``) and leave the decision to the
    service.
    """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[T]:
        """Return the entity with this primary key, or ``None``."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Queryable[T]:
        """Return a lazy collection, optionally narrowed by ORM look-ups."""

    @abstractmethod
    def save(self, entity: T) -> T: ...

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Delete by primary key; ``False`` when nothing matched."""
