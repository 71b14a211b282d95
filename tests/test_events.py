import logging

from roda.core.events import Event, EventBus, EventType, spin_complete_event, wheel_tick_event


def test_subscribe_and_emit(bus):
    seen = []
    bus.subscribe(EventType.WHEEL_TICK, seen.append)
    bus.emit(wheel_tick_event(2, 45.0))
    bus.emit(Event(EventType.SPIN_STARTED))

    assert len(seen) == 1
    assert seen[0].data == {"segment": 2, "rotation": 45.0}
    assert seen[0].source == "spin_engine"


def test_unsubscribe_stops_delivery(bus):
    seen = []
    unsubscribe = bus.subscribe(EventType.WHEEL_TICK, seen.append)
    unsubscribe()
    bus.emit(wheel_tick_event(0, 0.0))
    assert seen == []


def test_handlers_run_in_subscription_order(bus):
    seen = []
    bus.subscribe(EventType.SPIN_COMPLETE, lambda e: seen.append("first"))
    bus.subscribe(EventType.SPIN_COMPLETE, lambda e: seen.append("second"))
    bus.emit(spin_complete_event("Ana", 0, 270.0))
    assert seen == ["first", "second"]


def test_handler_may_unsubscribe_while_handling(bus):
    seen = []

    def once(event):
        seen.append(event.data["winner"])
        unsubscribe()

    unsubscribe = bus.subscribe(EventType.SPIN_COMPLETE, once)
    bus.emit(spin_complete_event("Ana", 0, 270.0))
    bus.emit(spin_complete_event("Bruno", 1, 90.0))
    assert seen == ["Ana"]


def test_handler_errors_are_logged_not_raised(bus, caplog):
    seen = []

    def broken(event):
        raise RuntimeError("handler exploded")

    bus.subscribe(EventType.WHEEL_TICK, broken)
    bus.subscribe(EventType.WHEEL_TICK, seen.append)
    with caplog.at_level(logging.ERROR):
        bus.emit(wheel_tick_event(1, 10.0))

    assert len(seen) == 1
    assert "handler exploded" in caplog.text


def test_history_is_bounded():
    bus = EventBus(history_limit=3)
    for i in range(5):
        bus.emit(wheel_tick_event(i, float(i)))
    history = bus.get_history(limit=10)
    assert [e.data["segment"] for e in history] == [2, 3, 4]

    bus.clear_history()
    assert bus.get_history() == []


def test_custom_string_event_types(bus):
    seen = []
    bus.subscribe("confetti", seen.append)
    bus.emit(Event("confetti", data={"pieces": 3}))
    assert seen[0].data["pieces"] == 3

