from __future__ import annotations


class PotentialSimError(Exception):
    """Base class for all data/programming errors raised by the domain layer."""


class InvalidSlotError(PotentialSimError, ValueError):
    def __init__(self, slot: object):
        super().__init__(f"Unknown slot: {slot!r}")
        self.slot = slot


class CharacterNotFoundError(PotentialSimError, KeyError):
    def __init__(self, character_id: object):
        super().__init__(f"Character not found in catalog: {character_id!r}")
        self.character_id = character_id

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownPotentialError(PotentialSimError, KeyError):
    def __init__(self, slot: str, potential_id: object, kind: str):
        super().__init__(f"Unknown {kind} potential {potential_id!r} in slot {slot!r}")
        self.slot = slot
        self.potential_id = potential_id
        self.kind = kind

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidPresetIndexError(PotentialSimError, ValueError):
    def __init__(self, index: object):
        super().__init__(f"Preset index out of range (1-10): {index!r}")
        self.index = index


class CatalogLoadError(PotentialSimError):
    pass
