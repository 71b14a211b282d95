from roda.audio.feedback import FeedbackSink, attach_feedback
from roda.core.events import EventType, spin_complete_event, wheel_tick_event
from roda.wheel.engine import SpinEngine


def test_sink_plays_tick_and_win(bus, player):
    FeedbackSink(bus, player).attach()
    bus.emit(wheel_tick_event(0, 10.0))
    bus.emit(wheel_tick_event(1, 20.0))
    bus.emit(spin_complete_event("Ana", 0, 30.0))
    assert player.ticks == 2
    assert player.wins == 1


def test_sink_follows_a_whole_spin(bus, player, scheduler, clock, scripted_random):
    sink = attach_feedback(bus, player)
    engine = SpinEngine(scheduler, event_bus=bus, rng=scripted_random(2.0, 0.0), clock=clock)
    engine.spin(["Ana", "Bruno", "Carla"])
    while engine.is_spinning():
        scheduler.tick(clock.advance(16))

    assert player.ticks == len(bus.get_history(EventType.WHEEL_TICK, limit=100)) == 6
    assert player.wins == 1
    assert sink.ticks_played == 6


def test_detach_stops_feedback(bus, player):
    sink = FeedbackSink(bus, player).attach()
    sink.attach()
    sink.detach()
    bus.emit(wheel_tick_event(0, 0.0))
    assert player.ticks == 0
    assert not sink.attached


def test_double_attach_plays_once(bus, player):
    sink = FeedbackSink(bus, player)
    sink.attach()
    sink.attach()
    bus.emit(wheel_tick_event(0, 0.0))
    assert player.ticks == 1


def test_failing_player_never_reaches_engine(bus, scheduler, clock, scripted_random):
    class BrokenPlayer:
        def play_wheel_tick(self):
            raise OSError("device gone")

        def play_win(self):
            raise OSError("device gone")

    attach_feedback(bus, BrokenPlayer())
    engine = SpinEngine(scheduler, event_bus=bus, rng=scripted_random(2.0, 0.0), clock=clock)
    future = engine.spin(["Ana", "Bruno", "Carla"])
    scheduler.tick(clock.advance(5000))
    assert future.result() == "Carla"


def test_no_player_runs_silent(bus):
    assert attach_feedback(bus, None) is None
