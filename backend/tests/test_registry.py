"""
Tests for idempotent model registration.
"""

import importlib

import pytest
from pymongo import ASCENDING, DESCENDING

import eventbook.models.booking as booking_module
from eventbook.core.exceptions import DuplicateModelError
from eventbook.db.registry import IndexSpec, ModelDefinition, ModelRegistry, ensure_indexes, registry


def test_booking_registered_with_event_id_index():
    definition = registry.get("Booking")
    assert definition is booking_module.BOOKING_MODEL
    assert definition.collection == "bookings"
    assert [i.index_name for i in definition.indexes] == ["eventId_1"]


def test_reloading_model_module_reuses_registration():
    """Simulates a dev-server reload re-executing the model module."""
    before = booking_module.BOOKING_MODEL
    reloaded = importlib.reload(booking_module)
    assert reloaded.BOOKING_MODEL is before
    assert registry.get("Booking") is before


def test_get_or_register_calls_factory_once():
    models = ModelRegistry()
    calls = []

    def factory():
        calls.append(1)
        return ModelDefinition(name="Thing", collection="things", document=dict)

    first = models.get_or_register("Thing", factory)
    second = models.get_or_register("Thing", factory)

    assert first is second
    assert len(calls) == 1


def test_strict_register_rejects_duplicates():
    models = ModelRegistry()
    definition = ModelDefinition(name="Thing", collection="things", document=dict)
    models.register(definition)
    with pytest.raises(DuplicateModelError):
        models.register(definition)


@pytest.mark.asyncio
async def test_ensure_indexes_creates_declared_indexes(db):
    models = ModelRegistry()
    models.register(
        ModelDefinition(
            name="Thing",
            collection="things",
            document=dict,
            indexes=(IndexSpec(keys=(("ownerId", ASCENDING), ("createdAt", DESCENDING))),),
        )
    )
    await ensure_indexes(db, models)
    assert db["things"].indexes == {"ownerId_1_createdAt_-1": [("ownerId", 1), ("createdAt", -1)]}


@pytest.mark.asyncio
async def test_ensure_indexes_covers_booking_event_id(db):
    await ensure_indexes(db)
    assert db["bookings"].indexes["eventId_1"] == [("eventId", 1)]
