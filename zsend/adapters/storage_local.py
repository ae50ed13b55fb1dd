from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Dict

from zsend.domain.ports import StoragePort

SETTINGS_FILENAME = "user_settings.json"


class StorageLocal(StoragePort):
    """Local filesystem storage for user settings (JSON)."""

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir
        self._log = logging.getLogger(__name__)

    @property
    def settings_path(self) -> str:
        return os.path.join(self.root, SETTINGS_FILENAME)

    def load_user_settings(self) -> Dict[str, Any]:
        """Return persisted settings, or an empty mapping when nothing is saved yet."""
        path = self.settings_path
        if not os.path.exists(path):
            return {}
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: settings file must contain a JSON object")
        return data

    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        # write to a temp file in the same directory, then swap it in
        os.makedirs(self.root, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix="user_settings_", suffix=".tmp", dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.settings_path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise
        self._log.debug("Saved settings to %s", self.settings_path)
