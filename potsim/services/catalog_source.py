from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

import requests

from potsim.domain.catalog import CharacterCatalog
from potsim.domain.errors import CatalogLoadError

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_S = 10
DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / "assets" / "potential.json"


def is_url(source: str) -> bool:
    s = str(source or "").strip().lower()
    return s.startswith("http://") or s.startswith("https://")


def default_catalog_source() -> str:
    override = (os.environ.get("POTSIM_CATALOG") or "").strip()
    return override or str(DEFAULT_CATALOG_PATH)


def load_catalog(source: str | Path | None = None) -> CharacterCatalog:
    """Fetch the catalog once from a local file or an http(s) URL."""
    src = str(source or default_catalog_source()).strip()
    if is_url(src):
        try:
            response = requests.get(src, timeout=HTTP_TIMEOUT_S)
            response.raise_for_status()
            raw = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise CatalogLoadError(f"Could not fetch catalog from {src}: {exc}") from exc
        base = src.rsplit("/", 1)[0]
    else:
        p = Path(src)
        if not p.exists():
            raise CatalogLoadError(f"Catalog file not found: {p}")
        try:
            raw = json.loads(p.read_text(encoding="utf-8", errors="replace"))
        except (OSError, json.JSONDecodeError) as exc:
            raise CatalogLoadError(f"Could not read catalog {p}: {exc}") from exc
        base = str(p.resolve().parent)

    try:
        catalog = CharacterCatalog.from_json(raw, base=base)
    except ValueError as exc:
        raise CatalogLoadError(str(exc)) from exc
    logger.info("Catalog loaded: %d characters from %s", len(catalog), src)
    return catalog


def fetch_asset_bytes(location: str) -> Optional[bytes]:
    """Read an image referenced by the catalog. Returns None when unavailable."""
    if not location:
        return None
    if is_url(location):
        try:
            response = requests.get(location, timeout=HTTP_TIMEOUT_S)
            if response.status_code >= 400:
                logger.warning("Asset %s: HTTP %s", location, response.status_code)
                return None
            return response.content
        except requests.RequestException as exc:
            logger.warning("Asset %s: %s", location, exc)
            return None
    p = Path(location)
    if not p.exists():
        return None
    try:
        return p.read_bytes()
    except OSError as exc:
        logger.warning("Asset %s: %s", p, exc)
        return None
