from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from potsim.domain.errors import InvalidPresetIndexError
from potsim.domain.models import PRESET_COUNT, SLOT_MAIN, LoadoutState
from potsim.domain.slot_store import SlotStateStore
from potsim.services.storage import KeyValueStorage, preset_key

logger = logging.getLogger(__name__)

CONFIRM_OVERWRITE = "overwrite"   # save over a different preset
CONFIRM_DISCARD = "discard"       # load over a non-empty, different live state

# (kind, preset index) -> True to proceed
ConfirmFn = Callable[[str, int], bool]


@dataclass(frozen=True)
class PresetSummary:
    index: int
    available: bool
    main_character_id: Optional[str] = None


def _require_index(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, int) or not (1 <= index <= PRESET_COUNT):
        raise InvalidPresetIndexError(index)
    return index


class PresetStore:
    """
    Ten sanitized snapshots of the slot state, stored as "preset_1".."preset_10".

    Saving zeroes every acquired flag and count first, so a preset records the
    plan, not the progress. Stored presets never share objects with the live
    state.
    """

    def __init__(self, storage: KeyValueStorage, slots: SlotStateStore, confirm: ConfirmFn):
        self.storage = storage
        self.slots = slots
        self.confirm = confirm

    def get(self, index: int) -> Optional[LoadoutState]:
        raw = self.storage.get(preset_key(_require_index(index)))
        if not raw:
            return None
        try:
            return LoadoutState.from_dict(json.loads(raw))
        except (ValueError, RecursionError) as exc:
            logger.warning("Preset %d is unreadable, treating as empty: %s", index, exc)
            return None

    def save(self, index: int) -> bool:
        _require_index(index)
        snapshot = self.slots.state.sanitized()
        existing = self.get(index)
        if existing is not None and existing != snapshot:
            if not self.confirm(CONFIRM_OVERWRITE, index):
                return False
        self.storage.set(preset_key(index), json.dumps(snapshot.to_dict(), ensure_ascii=False))
        return True

    def load(self, index: int) -> Optional[LoadoutState]:
        preset = self.get(index)
        if preset is None:
            return None
        live = self.slots.state
        if not live.is_empty() and live != preset:
            if not self.confirm(CONFIRM_DISCARD, index):
                return None
        return self.slots.replace_state(preset).clone()

    def list(self) -> List[PresetSummary]:
        out: List[PresetSummary] = []
        for index in range(1, PRESET_COUNT + 1):
            preset = self.get(index)
            if preset is None:
                out.append(PresetSummary(index=index, available=False))
                continue
            out.append(PresetSummary(
                index=index,
                available=True,
                main_character_id=preset.slot(SLOT_MAIN).character_id,
            ))
        return out
