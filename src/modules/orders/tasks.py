"""Async tasks for the orders module: outbox relay."""

from __future__ import annotations

import structlog
from celery import shared_task
from django.db import transaction
from django.db.models import Q

from modules.core.models import EventStatus, OutboxEvent
from modules.orders.constants import OUTBOX_MAX_RETRIES, OUTBOX_TOPIC
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


def _pending_events(batch_size: int) -> list[OutboxEvent]:
    queryset = (
        OutboxEvent.objects.select_for_update(skip_locked=True)
        .filter(topic=OUTBOX_TOPIC)
        .filter(
            Q(status=EventStatus.PENDING)
            | Q(status=EventStatus.FAILED, retry_count__lt=OUTBOX_MAX_RETRIES)
        )
        .order_by("created_at")
    )
    return list(queryset[:batch_size])


@shared_task(name="orders.publish_outbox_events")
def publish_outbox_events(batch_size: int = 100) -> dict[str, int]:
    """Publish pending order events from the outbox onto the event bus.

    Rows are locked for the duration of the batch so concurrent workers
    skip each other's events.
    """
    published = failed = 0
    with transaction.atomic():
        for outbox_event in _pending_events(batch_size):
            log = logger.bind(
                outbox_event_id=str(outbox_event.id),
                event_type=outbox_event.event_type,
                aggregate_id=outbox_event.aggregate_id,
            )
            try:
                event = DomainEvent.from_payload(
                    outbox_event.event_type, outbox_event.payload
                )
                with transaction.atomic():
                    event_bus.publish(event)
            except Exception as exc:
                outbox_event.mark_as_failed(f"{type(exc).__name__}: {exc}")
                log.warning(
                    "outbox.publish_failed",
                    error=str(exc),
                    retry_count=outbox_event.retry_count,
                )
                failed += 1
                continue
            outbox_event.mark_as_published()
            log.info("outbox.published")
            published += 1

    logger.info("outbox.batch_completed", published=published, failed=failed)
    return {"published": published, "failed": failed}
