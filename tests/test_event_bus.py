import logging

from event_bus import EventBus, topics
from event_bus.messages import CategoryChanged, ItemAdded, NotificationShow


def test_handlers_run_in_registration_order(bus: EventBus) -> None:
    calls = []
    bus.on("ping", lambda payload: calls.append(("a", payload)))
    bus.on("ping", lambda payload: calls.append(("b", payload)))
    bus.emit("ping", {"n": 1})
    assert calls == [("a", {"n": 1}), ("b", {"n": 1})]


def test_subscription_remove_drops_only_that_registration(bus: EventBus) -> None:
    calls = []

    def handler(payload):
        calls.append(payload)

    first = bus.on("ping", handler)
    bus.on("ping", handler)
    first.remove()
    assert not first.active
    bus.emit("ping", 1)
    assert calls == [1]
    assert bus.listener_count("ping") == 1


def test_off_removes_handler_and_ignores_unknown(bus: EventBus) -> None:
    calls = []

    def handler(payload):
        calls.append(payload)

    bus.on("ping", handler)
    bus.off("ping", handler)
    bus.off("ping", handler)
    bus.off("missing", handler)
    bus.emit("ping", 1)
    assert calls == []
    assert "ping" not in bus.event_types()


def test_once_delivers_a_single_time(bus: EventBus) -> None:
    calls = []
    subscription = bus.once("ping", calls.append)
    bus.emit("ping", 1)
    bus.emit("ping", 2)
    assert calls == [1]
    assert not subscription.active


def test_once_not_repeated_by_recursive_emit(bus: EventBus) -> None:
    calls = []

    def handler(payload):
        calls.append(payload)
        bus.emit("ping", payload + 1)

    bus.once("ping", handler)
    bus.emit("ping", 1)
    assert calls == [1]


def test_once_can_be_removed_by_original_handler(bus: EventBus) -> None:
    calls = []
    bus.once("ping", calls.append)
    bus.off("ping", calls.append)
    bus.emit("ping", 1)
    assert calls == []


def test_emit_uses_snapshot_of_handlers(bus: EventBus) -> None:
    calls = []

    def late(payload):
        calls.append(("late", payload))

    def second(payload):
        calls.append(("second", payload))

    def first(payload):
        calls.append(("first", payload))
        bus.on("ping", late)
        bus.off("ping", second)

    bus.on("ping", first)
    bus.on("ping", second)
    bus.emit("ping", 1)
    assert calls == [("first", 1), ("second", 1)]
    calls.clear()
    bus.emit("ping", 2)
    assert calls == [("first", 2), ("late", 2)]


def test_handler_exception_is_isolated(bus: EventBus, caplog) -> None:
    calls = []

    def broken(payload):
        raise RuntimeError("boom")

    bus.on("ping", broken)
    bus.on("ping", calls.append)
    with caplog.at_level(logging.ERROR, logger="event_bus.bus"):
        event = bus.emit("ping", 7)
    assert calls == [7]
    assert event is not None
    assert any("boom" in record.getMessage() for record in caplog.records)


def test_emit_without_subscribers_is_noop(bus: EventBus) -> None:
    event = bus.emit("nobody-listens", {"source": "x"})
    assert event is not None
    assert event.type == "nobody-listens"
    assert event.source == "x"


def test_event_envelope_carries_source_and_timestamp(bus: EventBus) -> None:
    event = bus.emit(topics.CATEGORY_CHANGED, CategoryChanged(category="Black", source="grid"))
    assert event is not None
    assert event.source == "grid"
    assert event.timestamp > 0
    assert bus.last_event is event
    assert event.to_dict()["payload_type"] == "CategoryChanged"


def test_reentrant_same_type_emit_is_rejected(bus: EventBus, caplog) -> None:
    deliveries = []

    def echo(payload):
        deliveries.append(payload.category)
        result = bus.emit(topics.CATEGORY_CHANGED, CategoryChanged(category="Oolong", source="echo"))
        assert result is None

    bus.on(topics.CATEGORY_CHANGED, echo)
    with caplog.at_level(logging.WARNING, logger="event_bus.bus"):
        bus.emit(topics.CATEGORY_CHANGED, CategoryChanged(category="Green", source="selector"))
    assert deliveries == ["Green"]
    assert any("reentrant" in record.getMessage() for record in caplog.records)
    assert not bus.is_dispatching(topics.CATEGORY_CHANGED)


def test_other_types_may_be_emitted_from_a_handler(bus: EventBus) -> None:
    notes = []
    bus.on(topics.NOTIFICATION_SHOW, lambda payload: notes.append(payload.message))
    bus.on(
        topics.ITEM_ADDED,
        lambda payload: bus.emit(topics.NOTIFICATION_SHOW, NotificationShow(message=f"added {payload.name}")),
    )
    bus.emit(topics.ITEM_ADDED, ItemAdded(tea_id="1", name="Sencha", category="Green"))
    assert notes == ["added Sencha"]


def test_mismatched_payload_warns_but_delivers(bus: EventBus, caplog) -> None:
    calls = []
    bus.on(topics.CATEGORY_CHANGED, calls.append)
    with caplog.at_level(logging.WARNING, logger="event_bus.bus"):
        bus.emit(topics.CATEGORY_CHANGED, {"category": "Green"})
    assert calls == [{"category": "Green"}]
    assert any("does not match" in record.getMessage() for record in caplog.records)


def test_clear_one_type_or_all(bus: EventBus) -> None:
    bus.on("a", lambda payload: None)
    bus.on("b", lambda payload: None)
    bus.clear("a")
    assert bus.event_types() == ["b"]
    bus.clear()
    assert bus.event_types() == []
