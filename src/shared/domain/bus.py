"""Event bus contracts.

Handlers are plain objects with a ``handle(event)`` method; the bus maps
event classes to the handlers subscribed to them.
"""

from __future__ import annotations

from typing import Generic, List, Protocol, Type, TypeVar

from shared.domain.events import DomainEvent

E = TypeVar("E", bound=DomainEvent, contravariant=True)


class IEventHandler(Protocol, Generic[E]):
    def handle(self, event: E) -> None: ...


class IEventBus(Protocol):
    """Dispatches each published event to the handlers of its exact class."""

    def subscribe(self, event_class: Type[E], handler: IEventHandler[E]) -> None: ...

    def handlers_for(self, event_class: Type[DomainEvent]) -> List[IEventHandler]: ...

    def publish(self, event: DomainEvent) -> None: ...
