from __future__ import annotations

from typing import Iterable
from uuid import uuid4


def generate_id() -> str:
    return str(uuid4())


def conflict_id(kind: str, parts: Iterable[str]) -> str:
    """Stable id for a derived conflict, e.g. ``date-mismatch-<dep id>``."""
    return f"{kind}-{'>'.join(parts)}"


__all__ = ["generate_id", "conflict_id"]
