import pytest

from roda.entrants import ID_LENGTH, Entrant, EntrantList, split_names


def test_add_from_text_trims_and_drops_blanks():
    entrants = EntrantList()
    added = entrants.add_from_text("  Ana \n\nBruno\n   \nCarla\n")
    assert [e.name for e in added] == ["Ana", "Bruno", "Carla"]
    assert entrants.names() == ["Ana", "Bruno", "Carla"]


def test_ids_are_short_and_unique():
    entrants = EntrantList()
    entrants.add_from_text("\n".join(["Same"] * 50))
    ids = [e.id for e in entrants]
    assert len(set(ids)) == 50
    assert all(len(i) == ID_LENGTH for i in ids)


def test_duplicate_names_are_distinct_entrants():
    entrants = EntrantList()
    first = entrants.add("Ana")
    second = entrants.add("Ana")
    assert first != second
    assert entrants.remove(first.id)
    assert entrants.names() == ["Ana"]
    assert entrants.get(second.id) == second


def test_remove_unknown_id_returns_false():
    entrants = EntrantList()
    entrants.add("Ana")
    assert entrants.remove("missing") is False
    assert len(entrants) == 1


def test_snapshot_is_immutable_copy():
    entrants = EntrantList()
    entrants.add("Ana")
    snapshot = entrants.snapshot()
    entrants.add("Bruno")
    assert isinstance(snapshot, tuple)
    assert [e.name for e in snapshot] == ["Ana"]


def test_blank_add_is_ignored():
    entrants = EntrantList()
    assert entrants.add("   ") is None
    assert not entrants


def test_clear():
    entrants = EntrantList()
    entrants.extend_names(["Ana", "Bruno"])
    entrants.clear()
    assert len(entrants) == 0


def test_entrant_create_rejects_blank():
    with pytest.raises(ValueError):
        Entrant.create("  ")
    assert Entrant.create(" Dani ").name == "Dani"


def test_split_names_with_custom_separator():
    assert split_names(" a, b ,,c ", ",") == ["a", "b", "c"]
    assert split_names("") == []
