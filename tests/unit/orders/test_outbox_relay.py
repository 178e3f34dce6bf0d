"""Unit tests for the outbox relay task and the order event handlers."""

from __future__ import annotations

import logging
from unittest.mock import patch
from uuid import uuid4

import pytest

from modules.core.models import EventStatus, OutboxEvent
from modules.orders.constants import OUTBOX_MAX_RETRIES
from modules.orders.events import OrderCreated, OrderStatusChanged
from modules.orders.handlers import (
    OrderCreatedHandler,
    order_created_handler,
    order_status_changed_handler,
)
from modules.orders.repositories.django_repository import _serialize_event_payload
from modules.orders.tasks import publish_outbox_events
from shared.infrastructure.bus import event_bus

pytestmark = pytest.mark.unit


def _queue(event, **overrides) -> OutboxEvent:
    fields = {
        "event_type": event.event_name,
        "aggregate_id": str(event.aggregate_id),
        "payload": _serialize_event_payload(event),
        "topic": "orders",
    }
    fields.update(overrides)
    return OutboxEvent.objects.create(**fields)


class TestHandlerWiring:
    def test_handlers_subscribed_on_startup(self):
        assert order_created_handler in event_bus.handlers_for(OrderCreated)
        assert order_status_changed_handler in event_bus.handlers_for(OrderStatusChanged)


class TestPublishOutboxEvents:
    def test_publishes_pending_events(self):
        event = OrderCreated(aggregate_id=uuid4(), user_id=1, total_amount="12.00")
        row = _queue(event)

        with patch.object(OrderCreatedHandler, "handle") as handle:
            result = publish_outbox_events()

        assert result == {"published": 1, "failed": 0}
        published = handle.call_args.args[0]
        assert published.aggregate_id == event.aggregate_id
        assert published.total_amount == "12.00"
        row.refresh_from_db()
        assert row.status == EventStatus.PUBLISHED
        assert row.processed_at is not None

    def test_handler_failure_marks_event_failed(self):
        row = _queue(OrderCreated(aggregate_id=uuid4()))

        with patch.object(
            OrderCreatedHandler, "handle", side_effect=RuntimeError("downstream")
        ):
            result = publish_outbox_events()

        assert result == {"published": 0, "failed": 1}
        row.refresh_from_db()
        assert row.status == EventStatus.FAILED
        assert row.retry_count == 1
        assert "downstream" in row.error_message

    def test_failed_events_are_retried(self):
        row = _queue(OrderCreated(aggregate_id=uuid4()))
        row.mark_as_failed("earlier failure")

        result = publish_outbox_events()

        assert result == {"published": 1, "failed": 0}
        row.refresh_from_db()
        assert row.status == EventStatus.PUBLISHED

    def test_exhausted_events_are_skipped(self):
        row = _queue(
            OrderCreated(aggregate_id=uuid4()),
            status=EventStatus.FAILED,
            retry_count=OUTBOX_MAX_RETRIES,
        )

        result = publish_outbox_events()

        assert result == {"published": 0, "failed": 0}
        row.refresh_from_db()
        assert row.status == EventStatus.FAILED

    def test_unknown_event_type_fails(self):
        row = _queue(OrderCreated(aggregate_id=uuid4()), event_type="Vanished")

        result = publish_outbox_events()

        assert result == {"published": 0, "failed": 1}
        row.refresh_from_db()
        assert row.status == EventStatus.FAILED

    def test_other_topics_are_ignored(self):
        row = _queue(OrderCreated(aggregate_id=uuid4()), topic="billing")

        assert publish_outbox_events() == {"published": 0, "failed": 0}
        row.refresh_from_db()
        assert row.status == EventStatus.PENDING

    def test_batch_size_limits_work(self):
        for _ in range(3):
            _queue(OrderCreated(aggregate_id=uuid4()))

        assert publish_outbox_events(batch_size=2) == {"published": 2, "failed": 0}
        assert OutboxEvent.objects.filter(status=EventStatus.PENDING).count() == 1

    def test_runs_as_celery_task(self):
        _queue(OrderStatusChanged(aggregate_id=uuid4(), new_status="shipped"))

        result = publish_outbox_events.delay()

        assert result.get() == {"published": 1, "failed": 0}


class TestHandlers:
    def test_order_created_handler_logs(self, caplog):
        event = OrderCreated(aggregate_id=uuid4(), user_id=7, total_amount="3.00")
        with caplog.at_level(logging.INFO):
            order_created_handler.handle(event)
        assert any("order.event.created" in r.getMessage() for r in caplog.records)
