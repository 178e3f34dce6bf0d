"""Unit tests for BaseModel and the OutboxEvent model.

``Category`` is the simplest concrete BaseModel, so it stands in for the
abstract class here.
"""

from __future__ import annotations

import uuid

import pytest

from modules.catalog.models import Category
from modules.core.models import EventStatus, OutboxEvent

pytestmark = pytest.mark.unit


def _make_event(**overrides) -> OutboxEvent:
    defaults = {
        "event_type": "OrderCreated",
        "payload": {"aggregate_id": "abc-123", "total_amount": "99.90"},
        "aggregate_id": "abc-123",
        "topic": "orders",
    }
    defaults.update(overrides)
    return OutboxEvent.objects.create(**defaults)


# ---------------------------------------------------------------------------
# BaseModel
# ---------------------------------------------------------------------------


class TestBaseModel:
    def test_id_is_uuid_version_7(self):
        obj = Category.objects.create(name="Games")
        assert isinstance(obj.id, uuid.UUID)
        assert obj.id.version == 7

    def test_ids_are_time_ordered(self):
        a = Category.objects.create(name="First")
        b = Category.objects.create(name="Second")
        assert str(a.id) < str(b.id)

    def test_timestamps_set_on_create(self):
        obj = Category.objects.create(name="Games")
        assert obj.created_at is not None
        assert obj.updated_at is not None

    def test_created_at_does_not_change_on_save(self):
        obj = Category.objects.create(name="Games")
        original_created = obj.created_at
        obj.description = "Board and video games."
        obj.save()
        obj.refresh_from_db()
        assert obj.created_at == original_created

    def test_save_with_update_fields_includes_updated_at(self):
        obj = Category.objects.create(name="Games")
        original_updated = obj.updated_at
        obj.description = "changed"
        obj.save(update_fields=["description"])
        obj.refresh_from_db()
        assert obj.updated_at > original_updated

    def test_id_is_not_editable(self):
        assert Category._meta.get_field("id").editable is False


# ---------------------------------------------------------------------------
# OutboxEvent
# ---------------------------------------------------------------------------


class TestOutboxEvent:
    def test_create_event_with_defaults(self):
        event = _make_event()
        event.refresh_from_db()
        assert event.status == EventStatus.PENDING
        assert event.processed_at is None
        assert event.error_message is None
        assert event.retry_count == 0

    def test_payload_round_trips_through_json_field(self):
        event = _make_event(payload={"nested": {"items": [1, 2]}, "flag": True})
        event.refresh_from_db()
        assert event.payload == {"nested": {"items": [1, 2]}, "flag": True}

    def test_mark_as_published(self):
        event = _make_event()
        event.mark_as_published()
        event.refresh_from_db()
        assert event.status == EventStatus.PUBLISHED
        assert event.processed_at is not None

    def test_mark_as_failed_increments_retry_count(self):
        event = _make_event()
        event.mark_as_failed("boom")
        event.mark_as_failed("boom again")
        event.refresh_from_db()
        assert event.status == EventStatus.FAILED
        assert event.error_message == "boom again"
        assert event.retry_count == 2

    def test_publish_after_failure_clears_error(self):
        event = _make_event()
        event.mark_as_failed("transient")
        event.mark_as_published()
        event.refresh_from_db()
        assert event.status == EventStatus.PUBLISHED
        assert event.error_message is None
        assert event.retry_count == 1

    def test_str(self):
        event = _make_event()
        assert str(event) == "OrderCreated [PENDING] (abc-123)"
