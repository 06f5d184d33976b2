from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from potsim.domain.errors import CharacterNotFoundError
from potsim.domain.models import ROLE_MAIN, ROLE_SUPPORT, ROLES


@dataclass(frozen=True)
class PotentialInfo:
    id: str
    name: str
    image: str = ""          # relative to the catalog source, e.g. "images/p_101.png"
    description: str = ""


@dataclass(frozen=True)
class PotentialSet:
    core: tuple[PotentialInfo, ...] = ()
    sub: tuple[PotentialInfo, ...] = ()

    @property
    def core_ids(self) -> List[str]:
        return [p.id for p in self.core]

    @property
    def sub_ids(self) -> List[str]:
        return [p.id for p in self.sub]

    def find(self, potential_id: str) -> Optional[PotentialInfo]:
        for p in self.core + self.sub:
            if p.id == potential_id:
                return p
        return None


@dataclass(frozen=True)
class CharacterInfo:
    id: str
    name: str
    icon: str = ""
    potentials: Dict[str, PotentialSet] = field(default_factory=dict)   # role -> set

    def potentials_for(self, role: str) -> PotentialSet:
        return self.potentials.get(role) or PotentialSet()


class CharacterCatalog:
    """
    Static character catalog (data/potential.json).

    Schema:
    {
      "version": "...",
      "characters": [
        {
          "id": "chitose", "name": "Chitose", "icon": "icons/chitose.png",
          "potentials": {
            "main":    {"core": [{"id": "m101", "name": "...", "image": "...", "description": "..."}], "sub": [...]},
            "support": {"core": [...], "sub": [...]}
          }
        },
        ...
      ],
      "role_potentials": {"main": {...}, "support": {...}}    # optional
    }

    A character may also carry a single {"core": [...], "sub": [...]} structure
    under "potentials" which is then used for both roles. Characters without
    embedded potentials fall back to the top-level "role_potentials".
    """

    def __init__(self, characters: List[CharacterInfo] | None = None, version: str = "", base: str = ""):
        self.version = version
        self.base = base
        self._order: List[str] = []
        self._by_id: Dict[str, CharacterInfo] = {}
        for c in characters or []:
            if c.id in self._by_id:
                continue
            self._order.append(c.id)
            self._by_id[c.id] = c

    @staticmethod
    def from_json(raw: Any, base: str = "") -> "CharacterCatalog":
        if not isinstance(raw, dict):
            raise ValueError("Catalog must be a JSON object.")
        characters_raw = raw.get("characters")
        if not isinstance(characters_raw, list):
            raise ValueError("Catalog has no 'characters' list.")

        shared: Dict[str, PotentialSet] = {}
        role_raw = raw.get("role_potentials")
        if isinstance(role_raw, dict):
            shared = _parse_role_sets(role_raw)

        characters: List[CharacterInfo] = []
        for c in characters_raw:
            info = _parse_character(c, shared)
            if info is not None:
                characters.append(info)
        return CharacterCatalog(characters, version=str(raw.get("version") or ""), base=base)

    # -----------------------------
    # Access
    # -----------------------------
    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, character_id: object) -> bool:
        return character_id in self._by_id

    def characters(self) -> List[CharacterInfo]:
        return [self._by_id[cid] for cid in self._order]

    def get(self, character_id: str) -> Optional[CharacterInfo]:
        return self._by_id.get(character_id)

    def require(self, character_id: str) -> CharacterInfo:
        info = self._by_id.get(character_id)
        if info is None:
            raise CharacterNotFoundError(character_id)
        return info

    def potentials_for(self, character_id: str, role: str) -> PotentialSet:
        return self.require(character_id).potentials_for(role)

    def name_for(self, character_id: str) -> str:
        info = self.get(character_id)
        return info.name if info else f"#{character_id}"

    def icon_for(self, character_id: str | None) -> str:
        if not character_id:
            return ""
        info = self.get(character_id)
        return info.icon if info else ""

    def resolve_asset(self, rel: str) -> str:
        """Join *rel* onto the catalog base (directory or URL prefix)."""
        rel = (rel or "").strip()
        if not rel or not self.base:
            return rel
        if "://" in rel or rel.startswith("/"):
            return rel
        return self.base.rstrip("/\\") + "/" + rel.lstrip("/")


# ============================================================
# Parsing helpers
# ============================================================
def _parse_potential(raw: Any) -> Optional[PotentialInfo]:
    if not isinstance(raw, dict):
        return None
    pid = str(raw.get("id") or "").strip()
    if not pid:
        return None
    return PotentialInfo(
        id=pid,
        name=str(raw.get("name") or "").strip() or pid,
        image=str(raw.get("image") or "").strip(),
        description=str(raw.get("description") or "").strip(),
    )


def _parse_potential_list(raw: Any) -> tuple[PotentialInfo, ...]:
    out: List[PotentialInfo] = []
    seen = set()
    if not isinstance(raw, list):
        return ()
    for p in raw:
        info = _parse_potential(p)
        if info is None or info.id in seen:
            continue
        seen.add(info.id)
        out.append(info)
    return tuple(out)


def _parse_set(raw: Any) -> PotentialSet:
    if not isinstance(raw, dict):
        return PotentialSet()
    return PotentialSet(core=_parse_potential_list(raw.get("core")), sub=_parse_potential_list(raw.get("sub")))


def _parse_role_sets(raw: Dict[str, Any]) -> Dict[str, PotentialSet]:
    if any(role in raw for role in ROLES):
        return {role: _parse_set(raw.get(role)) for role in ROLES}
    if "core" in raw or "sub" in raw:
        # one structure reused for main and support
        s = _parse_set(raw)
        return {ROLE_MAIN: s, ROLE_SUPPORT: s}
    return {}


def _parse_character(raw: Any, shared: Dict[str, PotentialSet]) -> Optional[CharacterInfo]:
    if not isinstance(raw, dict):
        return None
    cid = str(raw.get("id") or "").strip()
    if not cid:
        return None
    potentials: Dict[str, PotentialSet] = {}
    pot_raw = raw.get("potentials")
    if isinstance(pot_raw, dict):
        potentials = _parse_role_sets(pot_raw)
    if not potentials:
        potentials = dict(shared)
    return CharacterInfo(
        id=cid,
        name=str(raw.get("name") or "").strip() or cid,
        icon=str(raw.get("icon") or "").strip(),
        potentials=potentials,
    )
