from __future__ import annotations

import json

import pytest

from potsim.domain.catalog import CharacterCatalog
from potsim.domain.errors import CharacterNotFoundError, InvalidSlotError, UnknownPotentialError
from potsim.domain.models import (
    KIND_CORE,
    KIND_SUB,
    LEVEL_1,
    LEVEL_2_5,
    LEVEL_6,
    LEVEL_NONE,
    MAX_CORE_POTENTIALS,
    SLOTS,
    CoreState,
    LoadoutState,
    SubState,
)
from potsim.domain.slot_store import SlotStateStore
from potsim.services.storage import CURRENT_STATE_KEY, MemoryStorage


def _pots(*ids: str) -> list[dict]:
    return [{"id": pid, "name": pid.upper()} for pid in ids]


def _catalog() -> CharacterCatalog:
    return CharacterCatalog.from_json({
        "characters": [
            {
                "id": "A",
                "name": "Alpha",
                "potentials": {
                    "main": {"core": _pots("c1", "c2", "c3"), "sub": _pots("s1", "s2")},
                    "support": {"core": _pots("sc1", "sc2"), "sub": _pots("ss1")},
                },
            },
            {
                "id": "B",
                "name": "Beta",
                "potentials": {
                    "main": {"core": _pots("c1", "c2", "c9"), "sub": _pots("s1")},
                    "support": {"core": _pots("sc1"), "sub": _pots("ss1", "ss2")},
                },
            },
        ]
    })


def _store(storage: MemoryStorage | None = None) -> SlotStateStore:
    return SlotStateStore(_catalog(), storage or MemoryStorage())


def _assert_invariants(store: SlotStateStore) -> None:
    for slot in SLOTS:
        st = store.slot_state(slot)
        assert st.obtained_core_count() <= MAX_CORE_POTENTIALS
        for core in st.core_potentials.values():
            assert not core.acquired or core.obtained
        for sub in st.sub_potentials.values():
            assert sub.status != LEVEL_NONE or sub.count == 0
            assert 0 <= sub.count <= 6
        if st.character_id is None:
            assert st.core_potentials == {}
            assert st.sub_potentials == {}


def test_select_character_initializes_role_specific_defaults() -> None:
    store = _store()
    store.select_character("main", "A")
    store.select_character("support1", "A")

    main = store.slot_state("main")
    assert main.character_id == "A"
    assert main.core_potentials == {pid: CoreState() for pid in ("c1", "c2", "c3")}
    assert main.sub_potentials == {pid: SubState() for pid in ("s1", "s2")}

    sup = store.slot_state("support1")
    assert set(sup.core_potentials) == {"sc1", "sc2"}
    assert set(sup.sub_potentials) == {"ss1"}
    _assert_invariants(store)


def test_select_none_clears_slot() -> None:
    store = _store()
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c1")
    store.select_character("main", None)

    main = store.slot_state("main")
    assert main.character_id is None
    assert main.core_potentials == {}
    assert main.sub_potentials == {}


def test_select_unknown_character_fails_and_leaves_state() -> None:
    store = _store()
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c1")

    with pytest.raises(CharacterNotFoundError):
        store.select_character("main", "Z")

    main = store.slot_state("main")
    assert main.character_id == "A"
    assert main.core_potentials["c1"].obtained is True


def test_invalid_slot_fails_fast() -> None:
    store = _store()
    with pytest.raises(InvalidSlotError):
        store.select_character("support3", "A")
    with pytest.raises(InvalidSlotError):
        store.toggle_core_potential("", "c1")


def test_character_swap_resets_potentials_even_with_overlapping_ids() -> None:
    store = _store()
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c1")
    store.click_potential_image("main", "c1", KIND_CORE)
    store.set_sub_potential_level("main", "s1", LEVEL_6)
    store.click_potential_image("main", "s1", KIND_SUB)

    store.select_character("main", "B")
    main = store.slot_state("main")
    assert main.core_potentials == {pid: CoreState() for pid in ("c1", "c2", "c9")}
    assert main.sub_potentials == {"s1": SubState()}


def test_reselecting_same_character_resets_potentials() -> None:
    store = _store()
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c2")
    store.select_character("main", "A")
    assert store.slot_state("main").obtained_core_count() == 0


def test_core_toggle_scenario_with_capacity_limit() -> None:
    store = _store()
    store.select_character("main", "A")

    assert store.toggle_core_potential("main", "c1").accepted
    assert store.toggle_core_potential("main", "c2").accepted
    before = store.slot_state("main").clone()

    result = store.toggle_core_potential("main", "c3")
    assert result.accepted is False
    assert result.reason
    assert store.slot_state("main") == before

    assert store.toggle_core_potential("main", "c1").accepted
    assert store.slot_state("main").core_potentials["c1"] == CoreState(obtained=False, acquired=False)

    assert store.toggle_core_potential("main", "c3").accepted
    assert store.slot_state("main").core_potentials["c3"].obtained is True
    _assert_invariants(store)


def test_rejected_toggle_does_not_persist() -> None:
    storage = MemoryStorage()
    store = _store(storage)
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c1")
    store.toggle_core_potential("main", "c2")
    saved = storage.get(CURRENT_STATE_KEY)
    storage.values[CURRENT_STATE_KEY] = "sentinel"

    store.toggle_core_potential("main", "c3")
    assert storage.get(CURRENT_STATE_KEY) == "sentinel"
    assert saved is not None


def test_untoggle_clears_acquired() -> None:
    store = _store()
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c1")
    assert store.click_potential_image("main", "c1", KIND_CORE) is True
    assert store.slot_state("main").core_potentials["c1"].acquired is True

    store.toggle_core_potential("main", "c1")
    assert store.slot_state("main").core_potentials["c1"] == CoreState(False, False)


def test_unknown_potential_ids_raise() -> None:
    store = _store()
    store.select_character("main", "A")
    with pytest.raises(UnknownPotentialError):
        store.toggle_core_potential("main", "s1")
    with pytest.raises(UnknownPotentialError):
        store.set_sub_potential_level("main", "c1", LEVEL_6)
    with pytest.raises(UnknownPotentialError):
        store.click_potential_image("main", "nope", KIND_SUB)
    with pytest.raises(UnknownPotentialError):
        store.toggle_core_potential("support1", "c1")


def test_set_sub_level_resets_count() -> None:
    store = _store()
    store.select_character("main", "A")
    store.set_sub_potential_level("main", "s1", LEVEL_2_5)
    for _ in range(4):
        store.click_potential_image("main", "s1", KIND_SUB)
    assert store.slot_state("main").sub_potentials["s1"].count == 4

    store.set_sub_potential_level("main", "s1", LEVEL_1)
    assert store.slot_state("main").sub_potentials["s1"] == SubState(status=LEVEL_1, count=0)

    store.set_sub_potential_level("main", "s1", LEVEL_1)
    assert store.slot_state("main").sub_potentials["s1"].count == 0


def test_set_sub_level_rejects_unknown_level() -> None:
    store = _store()
    store.select_character("main", "A")
    with pytest.raises(ValueError):
        store.set_sub_potential_level("main", "s1", "level7")
    assert store.slot_state("main").sub_potentials["s1"].status == LEVEL_NONE


def test_sub_click_sequence_wraps_after_six() -> None:
    store = _store()
    store.select_character("main", "A")
    store.set_sub_potential_level("main", "s1", LEVEL_2_5)

    seen = []
    for _ in range(7):
        store.click_potential_image("main", "s1", KIND_SUB)
        seen.append(store.slot_state("main").sub_potentials["s1"].count)
    assert seen == [1, 2, 3, 4, 5, 6, 0]


@pytest.mark.parametrize("clicks", [0, 1, 6, 7, 13, 20])
def test_sub_click_count_is_clicks_mod_seven(clicks: int) -> None:
    store = _store()
    store.select_character("main", "A")
    store.set_sub_potential_level("main", "s2", LEVEL_6)
    for _ in range(clicks):
        store.click_potential_image("main", "s2", KIND_SUB)
    assert store.slot_state("main").sub_potentials["s2"].count == clicks % 7


def test_image_click_is_noop_when_not_planned() -> None:
    storage = MemoryStorage()
    store = _store(storage)
    store.select_character("main", "A")
    storage.values.clear()

    assert store.click_potential_image("main", "c1", KIND_CORE) is False
    assert store.click_potential_image("main", "s1", KIND_SUB) is False
    assert store.slot_state("main").core_potentials["c1"] == CoreState()
    assert store.slot_state("main").sub_potentials["s1"] == SubState()
    assert storage.values == {}


def test_core_image_click_flips_acquired() -> None:
    store = _store()
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c2")
    store.click_potential_image("main", "c2", KIND_CORE)
    store.click_potential_image("main", "c2", KIND_CORE)
    assert store.slot_state("main").core_potentials["c2"] == CoreState(obtained=True, acquired=False)


def test_unknown_kind_raises() -> None:
    store = _store()
    store.select_character("main", "A")
    with pytest.raises(ValueError):
        store.click_potential_image("main", "c1", "ultimate")


def test_reset_counts_keeps_plan() -> None:
    store = _store()
    store.select_character("support1", "A")
    store.toggle_core_potential("support1", "sc1")
    store.click_potential_image("support1", "sc1", KIND_CORE)
    store.set_sub_potential_level("support1", "ss1", LEVEL_6)
    for _ in range(4):
        store.click_potential_image("support1", "ss1", KIND_SUB)

    store.reset_counts()

    sup = store.slot_state("support1")
    assert sup.core_potentials["sc1"] == CoreState(obtained=True, acquired=False)
    assert sup.sub_potentials["ss1"] == SubState(status=LEVEL_6, count=0)


def test_reset_all_clears_every_slot() -> None:
    store = _store()
    store.select_character("main", "A")
    store.select_character("support2", "B")
    store.reset_all()
    assert store.state.is_empty()
    assert store.state == LoadoutState()
    _assert_invariants(store)


def test_every_mutation_persists_full_state() -> None:
    storage = MemoryStorage()
    store = _store(storage)
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c3")

    raw = json.loads(storage.get(CURRENT_STATE_KEY))
    assert set(raw) == set(SLOTS)
    assert raw["main"]["characterId"] == "A"
    assert raw["main"]["corePotentials"]["c3"] == {"obtained": True, "acquired": False}
    assert raw["support1"] == {"characterId": None, "corePotentials": {}, "subPotentials": {}}


def test_hydrate_restores_persisted_state() -> None:
    storage = MemoryStorage()
    first = _store(storage)
    first.select_character("main", "A")
    first.toggle_core_potential("main", "c1")
    first.click_potential_image("main", "c1", KIND_CORE)
    first.set_sub_potential_level("main", "s2", LEVEL_2_5)
    first.click_potential_image("main", "s2", KIND_SUB)

    second = _store(storage)
    second.hydrate()
    assert second.state == first.state


def test_hydrate_ignores_corrupt_data() -> None:
    storage = MemoryStorage({CURRENT_STATE_KEY: "{not json"})
    store = _store(storage)
    store.hydrate()
    assert store.state.is_empty()

    storage.values[CURRENT_STATE_KEY] = json.dumps(["main"])
    store.hydrate()
    assert store.state.is_empty()


def test_hydrate_repairs_invariants_and_catalog_drift() -> None:
    raw = {
        "main": {
            "characterId": "A",
            "corePotentials": {
                "c1": {"obtained": True, "acquired": True},
                "c2": {"obtained": True, "acquired": False},
                "c3": {"obtained": True, "acquired": True},
                "gone": {"obtained": True, "acquired": True},
            },
            "subPotentials": {
                "s1": {"status": "none", "count": 5},
                "s2": {"status": "level6", "count": 99},
            },
        },
        "support1": {"characterId": "Z", "corePotentials": {}, "subPotentials": {}},
        "support2": {"characterId": None},
    }
    store = _store(MemoryStorage({CURRENT_STATE_KEY: json.dumps(raw)}))
    store.hydrate()

    main = store.slot_state("main")
    assert set(main.core_potentials) == {"c1", "c2", "c3"}
    assert main.obtained_core_count() == 2
    assert main.core_potentials["c3"] == CoreState()
    assert main.sub_potentials["s1"] == SubState()
    assert main.sub_potentials["s2"] == SubState(status=LEVEL_6, count=6)
    assert store.slot_state("support1").character_id is None
    _assert_invariants(store)


def test_hidden_potentials_lists_unplanned_entries() -> None:
    store = _store()
    store.select_character("main", "A")
    store.toggle_core_potential("main", "c2")
    store.set_sub_potential_level("main", "s1", LEVEL_1)
    assert sorted(store.hidden_potentials("main")) == ["c1", "c3", "s2"]
    assert store.hidden_potentials("support2") == []


def test_hydrate_survives_non_finite_count() -> None:
    raw = (
        '{"main": {"characterId": "A", "corePotentials": {},'
        ' "subPotentials": {"s1": {"status": "level6", "count": Infinity}}}}'
    )
    store = _store(MemoryStorage({CURRENT_STATE_KEY: raw}))
    store.hydrate()

    assert store.slot_state("main").character_id == "A"
    assert store.slot_state("main").sub_potentials["s1"] == SubState(status=LEVEL_6, count=0)
    _assert_invariants(store)


def test_hydrate_ignores_deeply_nested_state() -> None:
    store = _store(MemoryStorage({CURRENT_STATE_KEY: "[" * 100000 + "]" * 100000}))
    store.hydrate()
    assert store.state == LoadoutState()
