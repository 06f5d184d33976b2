from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from potsim.domain.errors import InvalidSlotError


# ============================================================
# Slots
# ============================================================
SLOT_MAIN = "main"
SLOT_SUPPORT1 = "support1"
SLOT_SUPPORT2 = "support2"
SLOTS: tuple[str, ...] = (SLOT_MAIN, SLOT_SUPPORT1, SLOT_SUPPORT2)

ROLE_MAIN = "main"
ROLE_SUPPORT = "support"
ROLES: tuple[str, ...] = (ROLE_MAIN, ROLE_SUPPORT)

KIND_CORE = "core"
KIND_SUB = "sub"

# ============================================================
# Limits
# ============================================================
MAX_CORE_POTENTIALS = 2
MAX_SUB_LEVEL = 6
PRESET_COUNT = 10

# ============================================================
# Sub potential levels (wire values)
# ============================================================
LEVEL_NONE = "none"
LEVEL_1 = "level1"
LEVEL_2_5 = "level2-5"
LEVEL_6 = "level6"
# UI order: highest first, "none" last
SUB_LEVELS: tuple[str, ...] = (LEVEL_6, LEVEL_2_5, LEVEL_1, LEVEL_NONE)


def require_slot(slot: str) -> str:
    if slot not in SLOTS:
        raise InvalidSlotError(slot)
    return slot


def role_for_slot(slot: str) -> str:
    return ROLE_MAIN if require_slot(slot) == SLOT_MAIN else ROLE_SUPPORT


def require_level(level: str) -> str:
    if level not in SUB_LEVELS:
        raise ValueError(f"Unknown sub potential level: {level!r}")
    return level


@dataclass
class CoreState:
    obtained: bool = False   # planned ("取得する")
    acquired: bool = False   # confirmed in-run (check mark)

    def clone(self) -> "CoreState":
        return CoreState(obtained=self.obtained, acquired=self.acquired)


@dataclass
class SubState:
    status: str = LEVEL_NONE
    count: int = 0           # click counter, 0..MAX_SUB_LEVEL

    def clone(self) -> "SubState":
        return SubState(status=self.status, count=self.count)


@dataclass
class SlotState:
    character_id: Optional[str] = None
    core_potentials: Dict[str, CoreState] = field(default_factory=dict)
    sub_potentials: Dict[str, SubState] = field(default_factory=dict)

    @staticmethod
    def for_character(character_id: str, core_ids: List[str], sub_ids: List[str]) -> "SlotState":
        return SlotState(
            character_id=character_id,
            core_potentials={pid: CoreState() for pid in core_ids},
            sub_potentials={pid: SubState() for pid in sub_ids},
        )

    def is_empty(self) -> bool:
        return self.character_id is None

    def obtained_core_count(self) -> int:
        return sum(1 for s in self.core_potentials.values() if s.obtained)

    def clone(self) -> "SlotState":
        return SlotState(
            character_id=self.character_id,
            core_potentials={pid: s.clone() for pid, s in self.core_potentials.items()},
            sub_potentials={pid: s.clone() for pid, s in self.sub_potentials.items()},
        )

    def reset_counts(self) -> None:
        for s in self.core_potentials.values():
            s.acquired = False
        for s in self.sub_potentials.values():
            s.count = 0


@dataclass
class LoadoutState:
    """
    The three slots together. This is what gets persisted as "current state"
    and, sanitized, as a preset.

    Wire format (kept compatible with the browser version's localStorage):
    {
      "main":     {"characterId": "c1", "corePotentials": {"p1": {"obtained": true, "acquired": false}},
                   "subPotentials": {"s1": {"status": "level6", "count": 2}}},
      "support1": {"characterId": null, "corePotentials": {}, "subPotentials": {}},
      "support2": {...}
    }
    """
    slots: Dict[str, SlotState] = field(default_factory=lambda: {s: SlotState() for s in SLOTS})

    def slot(self, slot: str) -> SlotState:
        return self.slots[require_slot(slot)]

    def is_empty(self) -> bool:
        return all(self.slots[s].is_empty() for s in SLOTS)

    def clone(self) -> "LoadoutState":
        return LoadoutState(slots={s: self.slots[s].clone() for s in SLOTS})

    def sanitized(self) -> "LoadoutState":
        """Clone with every acquired flag and every count zeroed (intent, not progress)."""
        out = self.clone()
        for st in out.slots.values():
            st.reset_counts()
        return out

    # -----------------------------
    # JSON
    # -----------------------------
    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for s in SLOTS:
            st = self.slots[s]
            out[s] = {
                "characterId": st.character_id,
                "corePotentials": {
                    pid: {"obtained": bool(c.obtained), "acquired": bool(c.acquired)}
                    for pid, c in st.core_potentials.items()
                },
                "subPotentials": {
                    pid: {"status": sp.status, "count": int(sp.count)}
                    for pid, sp in st.sub_potentials.items()
                },
            }
        return out

    @staticmethod
    def from_dict(raw: Any) -> "LoadoutState":
        if not isinstance(raw, dict):
            raise ValueError("Loadout state must be a JSON object.")
        state = LoadoutState()
        for s in SLOTS:
            state.slots[s] = _parse_slot_state(raw.get(s))
        return state


# ============================================================
# Parsing helpers
# ============================================================
def _parse_slot_state(raw: Any) -> SlotState:
    if not isinstance(raw, dict):
        return SlotState()
    cid = raw.get("characterId")
    if cid is None or str(cid).strip() == "":
        return SlotState()

    core: Dict[str, CoreState] = {}
    core_raw = raw.get("corePotentials") or {}
    if isinstance(core_raw, dict):
        for pid, v in core_raw.items():
            if not isinstance(v, dict):
                continue
            core[str(pid)] = CoreState(
                obtained=v.get("obtained") is True,
                acquired=v.get("acquired") is True,
            )

    sub: Dict[str, SubState] = {}
    sub_raw = raw.get("subPotentials") or {}
    if isinstance(sub_raw, dict):
        for pid, v in sub_raw.items():
            if not isinstance(v, dict):
                continue
            status = str(v.get("status") or LEVEL_NONE)
            if status not in SUB_LEVELS:
                status = LEVEL_NONE
            try:
                count = int(v.get("count") or 0)
            except (TypeError, ValueError, OverflowError):
                count = 0
            sub[str(pid)] = SubState(status=status, count=count)

    return SlotState(character_id=str(cid), core_potentials=core, sub_potentials=sub)
