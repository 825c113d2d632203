from __future__ import annotations

import os
from pathlib import Path


def image_storage_dir() -> Path:
    return Path(os.getenv("IMAGE_STORAGE_DIR", "./uploads"))


def image_public_base_url() -> str:
    return os.getenv("IMAGE_PUBLIC_BASE_URL", "/uploads").rstrip("/")
