"""Filesystem-backed ImageStorage for single-host deployments and development."""

from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path

from motor_market.domain.errors import ImageStorageError
from motor_market.ports.image_storage import ImageStorage

logger = logging.getLogger(__name__)

_SAFE_SEGMENT = re.compile(r"[^A-Za-z0-9_-]")
_SAFE_SUFFIX = re.compile(r"^\.[a-z0-9]{1,8}$")


class LocalImageStorage(ImageStorage):
    """
    Writes images to ``root/<owner>/<random>.<ext>`` and serves them from
    ``public_base_url`` with the same relative path.
    """

    def __init__(self, root: Path, public_base_url: str) -> None:
        self._root = root
        self._public_base_url = public_base_url.rstrip("/")

    def store(self, owner_id: str, filename: str, content_type: str, data: bytes) -> str:
        owner_segment = _SAFE_SEGMENT.sub("_", owner_id) or "anonymous"
        suffix = Path(filename).suffix.lower()
        if not _SAFE_SUFFIX.match(suffix):
            suffix = ""

        relative = f"{owner_segment}/{uuid.uuid4().hex}{suffix}"
        target = self._root / relative

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise ImageStorageError(
                "Unable to store image. Please try again.", owner_id=owner_id
            ) from exc

        logger.info(
            "Image stored",
            extra={"owner_id": owner_id, "path": relative, "content_type": content_type},
        )
        return f"{self._public_base_url}/{relative}"
