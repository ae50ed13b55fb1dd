from __future__ import annotations

from pathlib import Path

import pytest

from zsend.adapters.storage_local import StorageLocal


def test_load_without_file_returns_empty(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path))

    assert storage.load_user_settings() == {}


def test_save_then_load_roundtrip(tmp_path: Path) -> None:
    storage = StorageLocal(root_dir=str(tmp_path / "nested"))
    payload = {"wallet_url": "http://wallet", "fee": "0.001", "retries": 3}

    storage.save_user_settings(payload)

    assert storage.load_user_settings() == payload
    leftovers = [p.name for p in (tmp_path / "nested").iterdir() if p.suffix == ".tmp"]
    assert leftovers == []


def test_load_rejects_non_object(tmp_path: Path) -> None:
    (tmp_path / "user_settings.json").write_text("[1, 2]", encoding="utf-8")
    storage = StorageLocal(root_dir=str(tmp_path))

    with pytest.raises(ValueError, match="JSON object"):
        storage.load_user_settings()
