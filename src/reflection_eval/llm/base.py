"""Content-generation interface consumed by the experiment runner."""

from __future__ import annotations

from typing import Any, Protocol


class ContentGenerator(Protocol):
    def generate(self, *, model: str, prompt: str) -> dict[str, Any]:
        """Return a mapping whose ``text`` key holds the raw model output."""
