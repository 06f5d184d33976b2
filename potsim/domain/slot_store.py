from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import List, Optional

from potsim.domain.catalog import CharacterCatalog
from potsim.domain.errors import UnknownPotentialError
from potsim.domain.models import (
    KIND_CORE,
    KIND_SUB,
    LEVEL_NONE,
    MAX_CORE_POTENTIALS,
    MAX_SUB_LEVEL,
    SLOTS,
    LoadoutState,
    SlotState,
    require_level,
    require_slot,
    role_for_slot,
)
from potsim.i18n import tr
from potsim.services.storage import CURRENT_STATE_KEY, KeyValueStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToggleResult:
    accepted: bool
    reason: str = ""


class SlotStateStore:
    """
    Live state of the three slots plus the transition rules.

    Every successful mutation writes the full state to storage under
    "current_state". Data errors (unknown slot/character/potential) raise
    before anything is changed.
    """

    def __init__(self, catalog: CharacterCatalog, storage: KeyValueStorage):
        self.catalog = catalog
        self.storage = storage
        self._state = LoadoutState()

    # -----------------------------
    # Read access
    # -----------------------------
    @property
    def state(self) -> LoadoutState:
        return self._state

    def slot_state(self, slot: str) -> SlotState:
        return self._state.slot(slot)

    def hidden_potentials(self, slot: str) -> List[str]:
        """Potential ids that are not planned (for the "hide unplanned" filter)."""
        st = self.slot_state(slot)
        out = [pid for pid, c in st.core_potentials.items() if not c.obtained]
        out.extend(pid for pid, s in st.sub_potentials.items() if s.status == LEVEL_NONE)
        return out

    # -----------------------------
    # Persistence
    # -----------------------------
    def hydrate(self) -> None:
        raw = self.storage.get(CURRENT_STATE_KEY)
        if not raw:
            return
        try:
            loaded = LoadoutState.from_dict(json.loads(raw))
        except (ValueError, RecursionError) as exc:
            # json.JSONDecodeError is a ValueError; RecursionError on absurd nesting
            logger.warning("Ignoring unreadable saved state: %s", exc)
            return
        self._state = self.reconcile(loaded)

    def persist(self) -> None:
        self.storage.set(CURRENT_STATE_KEY, json.dumps(self._state.to_dict(), ensure_ascii=False))

    def reconcile(self, state: LoadoutState) -> LoadoutState:
        """Fit a stored state onto the current catalog and re-establish the slot invariants."""
        out = LoadoutState()
        for slot in SLOTS:
            out.slots[slot] = self._reconcile_slot(slot, state.slots[slot])
        return out

    def _reconcile_slot(self, slot: str, stored: SlotState) -> SlotState:
        cid = stored.character_id
        if cid is None:
            return SlotState()
        if cid not in self.catalog:
            logger.warning("Dropping unknown character %r from slot %s", cid, slot)
            return SlotState()

        pset = self.catalog.potentials_for(cid, role_for_slot(slot))
        fresh = SlotState.for_character(cid, pset.core_ids, pset.sub_ids)

        obtained = 0
        for pid, core in fresh.core_potentials.items():
            old = stored.core_potentials.get(pid)
            if old is None or not old.obtained or obtained >= MAX_CORE_POTENTIALS:
                continue
            obtained += 1
            core.obtained = True
            core.acquired = bool(old.acquired)

        for pid, sub in fresh.sub_potentials.items():
            old = stored.sub_potentials.get(pid)
            if old is None or old.status == LEVEL_NONE:
                continue
            sub.status = old.status
            sub.count = min(max(0, int(old.count)), MAX_SUB_LEVEL)
        return fresh

    # -----------------------------
    # Operations
    # -----------------------------
    def select_character(self, slot: str, character_id: Optional[str]) -> SlotState:
        require_slot(slot)
        if character_id is None or character_id == "":
            self._state.slots[slot] = SlotState()
        else:
            pset = self.catalog.potentials_for(character_id, role_for_slot(slot))
            self._state.slots[slot] = SlotState.for_character(character_id, pset.core_ids, pset.sub_ids)
        self.persist()
        return self._state.slots[slot]

    def toggle_core_potential(self, slot: str, potential_id: str) -> ToggleResult:
        st = self.slot_state(slot)
        core = st.core_potentials.get(potential_id)
        if core is None:
            raise UnknownPotentialError(slot, potential_id, KIND_CORE)

        if not core.obtained:
            if st.obtained_core_count() >= MAX_CORE_POTENTIALS:
                logger.debug("Core potential limit reached in %s, rejecting %s", slot, potential_id)
                return ToggleResult(False, tr("error.core_limit", n=MAX_CORE_POTENTIALS))
            core.obtained = True
        else:
            core.obtained = False
            core.acquired = False

        self.persist()
        return ToggleResult(True)

    def set_sub_potential_level(self, slot: str, potential_id: str, level: str) -> SlotState:
        st = self.slot_state(slot)
        sub = st.sub_potentials.get(potential_id)
        if sub is None:
            raise UnknownPotentialError(slot, potential_id, KIND_SUB)
        sub.status = require_level(level)
        sub.count = 0
        self.persist()
        return st

    def click_potential_image(self, slot: str, potential_id: str, kind: str) -> bool:
        """Mark progress on a planned potential. Returns False when nothing changed."""
        st = self.slot_state(slot)
        if kind == KIND_CORE:
            core = st.core_potentials.get(potential_id)
            if core is None:
                raise UnknownPotentialError(slot, potential_id, kind)
            if not core.obtained:
                return False
            core.acquired = not core.acquired
        elif kind == KIND_SUB:
            sub = st.sub_potentials.get(potential_id)
            if sub is None:
                raise UnknownPotentialError(slot, potential_id, kind)
            if sub.status == LEVEL_NONE:
                return False
            sub.count += 1
            if sub.count > MAX_SUB_LEVEL:
                sub.count = 0
        else:
            raise ValueError(f"Unknown potential kind: {kind!r}")
        self.persist()
        return True

    def reset_counts(self) -> None:
        for st in self._state.slots.values():
            st.reset_counts()
        self.persist()

    def reset_all(self) -> None:
        """Clear every slot. The caller is responsible for asking the user first."""
        self._state = LoadoutState()
        self.persist()

    def replace_state(self, state: LoadoutState) -> LoadoutState:
        # reconcile() builds fresh objects, nothing of *state* is shared
        self._state = self.reconcile(state)
        self.persist()
        return self._state
