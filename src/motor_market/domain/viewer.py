from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Viewer:
    """Signed-in user as reported by the external identity provider."""

    id: str
    email: str | None = None
