"""Model registry and role resolution from provider config."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

EXTRACTOR_ROLE = "extractor"
DEFAULT_MODEL_ID = "google/gemini-2.5-flash-lite"


@dataclass(frozen=True)
class ModelSpec:
    key: str
    model_id: str
    model_class: str = "unspecified"
    defaults: Mapping[str, Any] = field(default_factory=dict)


class ModelRegistry:
    """Resolve model specs by key or role."""

    def __init__(self, provider_config: Mapping[str, Any]) -> None:
        self._models: Dict[str, ModelSpec] = {}
        self._roles: Dict[str, str] = {
            str(role): str(key) for role, key in (provider_config.get("roles") or {}).items()
        }
        for key, raw in (provider_config.get("models") or {}).items():
            raw = raw or {}
            self._models[key] = ModelSpec(
                key=key,
                model_id=str(raw.get("id", "")),
                model_class=str(raw.get("class", "unspecified")),
                defaults=dict(raw.get("defaults", {}) or {}),
            )

    def __contains__(self, key: object) -> bool:
        return key in self._models

    def get(self, key: str) -> ModelSpec:
        if key not in self._models:
            raise KeyError(f"Unknown model key: {key}")
        return self._models[key]

    def for_role(self, role: str) -> ModelSpec:
        key = self._roles.get(role)
        if not key:
            raise KeyError(f"No model mapped for role: {role}")
        return self.get(key)

    def resolve(self, override: str | None = None, role: str = EXTRACTOR_ROLE) -> ModelSpec:
        """Pick the model for a run.

        An override naming a registry key wins; any other override is taken
        as a raw provider model id. Without an override the role mapping is
        used, falling back to ``DEFAULT_MODEL_ID``.
        """
        if override:
            if override in self._models:
                return self._models[override]
            return ModelSpec(key=override, model_id=override)
        if role in self._roles:
            return self.for_role(role)
        return ModelSpec(key=DEFAULT_MODEL_ID, model_id=DEFAULT_MODEL_ID)
