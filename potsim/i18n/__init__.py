"""Lightweight i18n module – dictionary-based translations with .format() interpolation."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from potsim.i18n import en, ja

logger = logging.getLogger(__name__)

DEFAULT_LANG = "ja"

_current_lang: str = DEFAULT_LANG
_translations: Dict[str, Dict[str, str]] = {"ja": ja.STRINGS, "en": en.STRINGS}
_settings_path: Optional[Path] = None


def init(config_dir: Path) -> None:
    """Restore the persisted language preference from <config_dir>/app_settings.json."""
    global _settings_path, _current_lang
    _settings_path = config_dir / "app_settings.json"

    if _settings_path.exists():
        try:
            data = json.loads(_settings_path.read_text(encoding="utf-8"))
            saved = data.get("language", DEFAULT_LANG)
            if saved in _translations:
                _current_lang = saved
        except (OSError, ValueError, AttributeError) as exc:
            logger.warning("Ignoring unreadable %s: %s", _settings_path, exc)


def set_language(lang: str) -> None:
    global _current_lang
    if lang not in _translations:
        return
    _current_lang = lang
    _save_preference()


def get_language() -> str:
    return _current_lang


def available_languages() -> Dict[str, str]:
    return {"ja": "日本語", "en": "English"}


def tr(key: str, **kwargs: Any) -> str:
    """Return translated string for *key*.  Falls back to Japanese, then to the key itself."""
    text = _translations.get(_current_lang, {}).get(key)
    if text is None:
        text = _translations.get(DEFAULT_LANG, {}).get(key)
    if text is None:
        return key
    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError):
            return text
    return text


def _save_preference() -> None:
    if _settings_path is None:
        return
    data: dict = {}
    if _settings_path.exists():
        try:
            data = json.loads(_settings_path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            data = {}
    if not isinstance(data, dict):
        data = {}
    data["language"] = _current_lang
    try:
        _settings_path.parent.mkdir(parents=True, exist_ok=True)
        _settings_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as exc:
        logger.warning("Could not save language preference: %s", exc)
