"""Versioned prompt builders for summary and task extraction.

Templates are stored in ``templates/prompts.xml`` with ids of the form
``<family>.<version>``. Each version becomes a pure function of the
transcript; registries keep document order so callers can iterate over
every version of a family without naming them.
"""

from __future__ import annotations

from functools import lru_cache, partial
from pathlib import Path
from typing import Callable, Mapping
import xml.etree.ElementTree as ET

PromptBuilder = Callable[[str], str]

SUMMARY = "summary"
TASKS = "tasks"
FAMILIES: tuple[str, ...] = (SUMMARY, TASKS)

_PROMPTS_PATH = Path(__file__).parent / "templates" / "prompts.xml"


@lru_cache(maxsize=None)
def _load_templates(path_str: str) -> dict[str, dict[str, str]]:
    root = ET.parse(path_str).getroot()
    templates: dict[str, dict[str, str]] = {}
    for node in root.findall("prompt"):
        prompt_id = node.get("id") or ""
        family, _, version = prompt_id.partition(".")
        if not family or not version:
            continue
        templates.setdefault(family, {})[version] = (node.text or "").strip()
    return templates


def render_prompt(template: str, transcript: str) -> str:
    return template.format(transcript=transcript)


def _build_registry(family: str, path: Path = _PROMPTS_PATH) -> dict[str, PromptBuilder]:
    templates = _load_templates(str(path)).get(family, {})
    return {version: partial(render_prompt, template) for version, template in templates.items()}


SUMMARY_PROMPTS: Mapping[str, PromptBuilder] = _build_registry(SUMMARY)
TASK_PROMPTS: Mapping[str, PromptBuilder] = _build_registry(TASKS)

_REGISTRIES: dict[str, Mapping[str, PromptBuilder]] = {
    SUMMARY: SUMMARY_PROMPTS,
    TASKS: TASK_PROMPTS,
}


def prompts_for(family: str) -> Mapping[str, PromptBuilder]:
    try:
        return _REGISTRIES[family]
    except KeyError as exc:
        raise KeyError(f"Unknown prompt family: {family}") from exc


def list_versions(family: str) -> list[str]:
    return list(prompts_for(family))


def get_prompt_builder(family: str, version: str) -> PromptBuilder:
    registry = prompts_for(family)
    if version not in registry:
        raise KeyError(f"Unknown {family} prompt version: {version}")
    return registry[version]


def build_prompt(family: str, version: str, transcript: str) -> str:
    """Render the prompt text for one family/version pair."""
    return get_prompt_builder(family, version)(transcript)
