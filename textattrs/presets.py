"""Persistent named attribute presets.

Presets are lists of text attributes stored under a name, for example a
"warning" preset holding a color and an underline. They are kept as
serialized attributes in a JSON file in the user's config directory and
survive application restarts.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import platformdirs

from .attributes import TextAttribute
from .codec import decode_attributes, encode_attributes
from .constants import TextAttributeConstants
from .errors import FormatError

logger = logging.getLogger(__name__)


class PresetStore:
    """Manages persistent storage of attribute presets.

    The file holds a JSON object mapping preset names to attribute lists in
    the ``{"style", "value"}`` encoding. Decoded presets are cached.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize the store.

        Args:
            config_dir: Directory holding the presets file. Defaults to the
                platform config directory for textattrs.
        """
        if config_dir is None:
            config_dir = Path(platformdirs.user_config_dir(TextAttributeConstants.PRESETS_APP_NAME))
        self._config_dir = Path(config_dir)
        self._presets_file = self._config_dir / TextAttributeConstants.PRESETS_FILE_NAME
        self._cache: Optional[Dict[str, List[TextAttribute]]] = None

    @property
    def presets_file(self) -> Path:
        return self._presets_file

    def _read(self) -> Dict[str, List[TextAttribute]]:
        """Decode the presets file.

        Entries that do not decode are skipped with a warning, and are dropped
        from the file the next time it is written. A missing or unreadable
        file yields no presets.
        """
        if not self._presets_file.exists():
            return {}
        try:
            data = json.loads(self._presets_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Could not load presets from {self._presets_file}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Presets file {self._presets_file} does not hold an object, ignoring it")
            return {}

        loaded: Dict[str, List[TextAttribute]] = {}
        for name, serialized in data.items():
            try:
                loaded[name] = decode_attributes(serialized)
            except FormatError as e:
                logger.warning(f"Skipping preset {name!r}: {e}")
        return loaded

    def _presets(self) -> Dict[str, List[TextAttribute]]:
        if self._cache is None:
            self._cache = self._read()
        return self._cache

    def _write(self, presets: Dict[str, List[TextAttribute]]) -> bool:
        """Encode ``presets`` and replace the presets file with them.

        The file is written next to its final location and renamed over it,
        so readers see either the old presets or the new ones.

        Returns:
            True if the presets were written.
        """
        encoded = {name: encode_attributes(attrs) for name, attrs in sorted(presets.items())}
        temp_file = self._presets_file.with_name(self._presets_file.name + ".tmp")
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            temp_file.write_text(json.dumps(encoded, indent=2), encoding="utf-8")
            temp_file.replace(self._presets_file)
        except OSError as e:
            logger.warning(f"Could not save presets to {self._presets_file}: {e}")
            temp_file.unlink(missing_ok=True)
            return False
        self._cache = presets
        return True

    def preset_names(self) -> List[str]:
        return sorted(self._presets())

    def load_preset(self, name: str) -> Optional[List[TextAttribute]]:
        """Load a preset by name.

        Returns:
            A copy of the preset's attributes, or None if there is no usable
            preset with that name.
        """
        attrs = self._presets().get(name)
        return list(attrs) if attrs is not None else None

    def save_preset(self, name: str, attrs: List[TextAttribute]) -> bool:
        if not name:
            raise ValueError("Preset name must not be empty")
        presets = dict(self._presets())
        presets[name] = list(attrs)
        return self._write(presets)

    def delete_preset(self, name: str) -> bool:
        presets = dict(self._presets())
        if presets.pop(name, None) is None:
            return False
        return self._write(presets)

    def clear_cache(self) -> None:
        """Forget the in-memory copy so the next read goes to disk."""
        self._cache = None


# Global instance
_store: Optional[PresetStore] = None


def get_presets() -> PresetStore:
    """Get the shared preset store for the user's config directory."""
    global _store
    if _store is None:
        _store = PresetStore()
    return _store
