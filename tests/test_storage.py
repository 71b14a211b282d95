import json
import logging

from roda.storage import STORAGE_KEY, EntrantStore, names_from_url, parse_names


def names(entrants):
    return [e.name for e in entrants]


def test_save_then_load_round_trip(tmp_path):
    store = EntrantStore(tmp_path / "nested" / "state.json")
    assert store.save(["Ana", "Bruno", "João"])

    saved = json.loads((tmp_path / "nested" / "state.json").read_text(encoding="utf-8"))
    assert saved[STORAGE_KEY] == "Ana,Bruno,João"
    assert names(store.load()) == ["Ana", "Bruno", "João"]


def test_save_keeps_other_keys(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")
    EntrantStore(path).save(["Ana"])
    state = json.loads(path.read_text(encoding="utf-8"))
    assert state == {"theme": "dark", STORAGE_KEY: "Ana"}


def test_url_takes_precedence_over_file(tmp_path):
    store = EntrantStore(tmp_path / "state.json")
    store.save(["Stored"])
    loaded = store.load("http://localhost:5173/?lista=Ana%2C%20Bruno%2C%2CCarla")
    assert names(loaded) == ["Ana", "Bruno", "Carla"]


def test_url_without_list_falls_back_to_file(tmp_path):
    store = EntrantStore(tmp_path / "state.json")
    store.save(["Stored"])
    assert names(store.load("http://localhost:5173/?other=1")) == ["Stored"]
    assert names(store.load("http://localhost:5173/?lista=")) == ["Stored"]


def test_missing_file_loads_empty(tmp_path):
    assert EntrantStore(tmp_path / "absent.json").load() == []


def test_corrupt_file_loads_empty_with_warning(tmp_path, caplog):
    path = tmp_path / "state.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        assert EntrantStore(path).load() == []
    assert "unreadable" in caplog.text


def test_failed_write_is_logged_and_reported(tmp_path, caplog):
    # The path is a directory, so writing to it fails
    store = EntrantStore(tmp_path)
    with caplog.at_level(logging.ERROR):
        assert store.save(["Ana"]) is False
    assert "Failed to save" in caplog.text


def test_share_url_encodes_names(tmp_path):
    store = EntrantStore(tmp_path / "state.json", base_url="https://roda.example/app?x=1#top")
    url = store.share_url(["Ana", "João Silva"])
    assert url == "https://roda.example/app?lista=Ana%2CJo%C3%A3o%20Silva"
    assert names_from_url(url) == "Ana,João Silva"


def test_share_url_round_trips_through_load(tmp_path):
    store = EntrantStore(tmp_path / "state.json")
    url = store.share_url(["Ana", "Bruno & Co"])
    assert names(store.load(url)) == ["Ana", "Bruno & Co"]


def test_parse_names_gives_fresh_ids():
    first = parse_names("Ana,Ana")
    assert names(first) == ["Ana", "Ana"]
    assert first[0].id != first[1].id
