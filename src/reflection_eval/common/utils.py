"""Shared utility helpers."""

from __future__ import annotations

import hashlib
import time
from datetime import datetime, timezone


def hash_prompt_text(prompt: str) -> str:
    """Create a stable hash for a prompt string."""
    digest = hashlib.sha256(prompt.encode("utf-8")).hexdigest()
    return f"sha256:{digest}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def file_timestamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S")
