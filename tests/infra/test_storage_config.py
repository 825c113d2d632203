from __future__ import annotations

from pathlib import Path

import pytest

from motor_market.infra.storage.config import image_public_base_url, image_storage_dir


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("IMAGE_STORAGE_DIR", raising=False)
    monkeypatch.delenv("IMAGE_PUBLIC_BASE_URL", raising=False)

    assert image_storage_dir() == Path("./uploads")
    assert image_public_base_url() == "/uploads"


def test_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("IMAGE_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("IMAGE_PUBLIC_BASE_URL", "https://cdn.example.com/listings/")

    assert image_storage_dir() == tmp_path
    assert image_public_base_url() == "https://cdn.example.com/listings"
