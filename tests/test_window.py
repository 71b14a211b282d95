import pygame

from roda.audio.engine import AudioEngine
from roda.config.settings import AudioSettings, Settings
from roda.core.events import Event, EventType
from roda.entrants import EntrantList
from roda.graphics.renderer import WheelRenderer
from roda.main import load_entrants
from roda.simulator.window import SpinWindow
from roda.storage import EntrantStore
from roda.wheel.engine import SpinEngine


def make_window(bus, scheduler, clock, rng, tmp_path, names=("Ana", "Bruno", "Carla")):
    entrants = EntrantList()
    entrants.extend_names(names)
    engine = SpinEngine(scheduler, event_bus=bus, rng=rng, clock=clock)
    return SpinWindow(
        entrants=entrants,
        engine=engine,
        scheduler=scheduler,
        renderer=WheelRenderer(),
        store=EntrantStore(tmp_path / "state.json"),
        audio=AudioEngine(AudioSettings()),
        event_bus=bus,
    )


def test_button_press_spins_and_shows_winner(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(2.0, 0.0), tmp_path)
    bus.emit(Event(EventType.BUTTON_PRESS, source="keyboard"))
    assert window.engine.is_spinning()

    scheduler.tick(clock.advance(5000))
    assert window.winner.name == "Carla"

    window.spin()
    assert window.winner is None


def press(window, key):
    window._handle_event(pygame.event.Event(pygame.KEYDOWN, key=key))


def type_text(window, text):
    window._handle_event(pygame.event.Event(pygame.TEXTINPUT, text=text))


def test_selected_entrant_removal_is_blocked_while_spinning(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(2.0, 0.0), tmp_path)
    press(window, pygame.K_DOWN)
    press(window, pygame.K_DOWN)
    assert window.selected.name == "Bruno"

    window.spin()
    press(window, pygame.K_DELETE)
    assert window.entrants.names() == ["Ana", "Bruno", "Carla"]

    scheduler.tick(clock.advance(5000))
    press(window, pygame.K_BACKSPACE)
    assert window.entrants.names() == ["Ana", "Carla"]
    assert window.winner is None
    assert window.selected.name == "Carla"
    assert [e.name for e in window.store.load()] == ["Ana", "Carla"]
    assert bus.get_history(EventType.ENTRANTS_CHANGED)[-1].data == {"count": 2}


def test_selection_clamps_after_removing_last_row(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path)
    press(window, pygame.K_UP)
    assert window.selected.name == "Carla"
    press(window, pygame.K_DOWN)
    assert window.selected.name == "Carla"

    assert window.remove_selected() is True
    assert window.selected.name == "Bruno"


def test_remove_entrant_by_id(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path)
    ana = window.entrants.snapshot()[0]

    assert window.remove_entrant(ana.id) is True
    assert window.remove_entrant(ana.id) is False
    assert window.entrants.names() == ["Bruno", "Carla"]


def test_typed_names_are_added_and_saved(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path)
    press(window, pygame.K_a)
    assert window.entering

    type_text(window, "Dora")
    type_text(window, "x")
    press(window, pygame.K_BACKSPACE)
    assert window.entry_text == "Dora"

    press(window, pygame.K_RETURN)
    assert window.entrants.names() == ["Ana", "Bruno", "Carla", "Dora"]
    assert window.entering
    assert window.entry_text == ""
    assert [e.name for e in window.store.load()] == ["Ana", "Bruno", "Carla", "Dora"]

    press(window, pygame.K_ESCAPE)
    assert not window.entering


def test_blank_entry_adds_nothing(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path)
    press(window, pygame.K_a)
    type_text(window, "   ")
    press(window, pygame.K_RETURN)

    assert len(window.entrants) == 3
    assert bus.get_history(EventType.ENTRANTS_CHANGED) == []


def test_typed_names_are_refused_while_spinning(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(2.0, 0.0), tmp_path)
    window.spin()
    press(window, pygame.K_a)
    type_text(window, "Dora")
    press(window, pygame.K_RETURN)

    assert window.entrants.names() == ["Ana", "Bruno", "Carla"]
    assert window.entry_text == "Dora"
    assert not (tmp_path / "state.json").exists()

    scheduler.tick(clock.advance(5000))
    press(window, pygame.K_RETURN)
    assert window.entrants.names()[-1] == "Dora"


def test_keys_while_typing_do_not_spin(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(2.0, 0.0), tmp_path)
    press(window, pygame.K_a)
    press(window, pygame.K_SPACE)
    press(window, pygame.K_q)

    assert not window.engine.is_spinning()
    assert bus.get_history(EventType.BUTTON_PRESS) == []


def test_add_names_accepts_one_name_per_line(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path, names=())
    added = window.add_names("Eva\n\n  Fabio  \n")
    assert [e.name for e in added] == ["Eva", "Fabio"]
    assert window.entrants.names() == ["Eva", "Fabio"]


def test_spin_with_empty_list_is_ignored(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path, names=())
    assert window.spin() is False
    assert window.move_selection(1) is None
    assert window.remove_selected() is False


def test_toggle_audio_flips_sound(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path)
    assert window.toggle_audio() is False
    assert window.audio.is_enabled() is False


def test_share_url_lists_current_names(bus, scheduler, clock, scripted_random, tmp_path):
    window = make_window(bus, scheduler, clock, scripted_random(), tmp_path)
    assert window.log_share_url() == "http://localhost:5173/?lista=Ana%2CBruno%2CCarla"


def test_initial_entrants_prefer_settings_then_url(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    store = EntrantStore(tmp_path / "state.json")
    store.save(["Stored"])

    from_settings = load_entrants(Settings(entrants="Ana, Bruno"), store, "http://x/?lista=Carla")
    assert from_settings.names() == ["Ana", "Bruno"]

    from_url = load_entrants(Settings(entrants=""), store, "http://x/?lista=Carla")
    assert from_url.names() == ["Carla"]

    from_file = load_entrants(Settings(entrants=""), store)
    assert from_file.names() == ["Stored"]
