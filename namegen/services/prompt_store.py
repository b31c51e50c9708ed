"""Prompt templates for the generation rounds, kept in ``prompts/prompts.json``.

Templates use ``string.Template`` placeholders. The catalog is re-read
whenever the file changes on disk, so prompts can be tuned without a restart.
"""
from __future__ import annotations

import json
from pathlib import Path
from string import Template
from typing import Any

from namegen.models.candidate import GenerationParams

PROMPTS_PATH = Path(__file__).resolve().parents[1] / "prompts" / "prompts.json"


class PromptCatalog:
    def __init__(self, path: Path = PROMPTS_PATH):
        self.path = path
        self._entries: dict[str, Any] | None = None
        self._loaded_mtime: int | None = None

    def entries(self) -> dict[str, Any]:
        mtime = self.path.stat().st_mtime_ns
        if self._entries is None or self._loaded_mtime != mtime:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"{self.path.name} must hold a JSON object")
            self._entries, self._loaded_mtime = data, mtime
        return self._entries

    def template(self, key: str) -> Template:
        node: Any = self.entries()
        for part in key.split("."):
            try:
                node = node[part]
            except (KeyError, TypeError):
                raise KeyError(f"Unknown prompt: {key}") from None
        if not isinstance(node, str):
            raise TypeError(f"Prompt {key} is not a string template")
        return Template(node)

    def reset(self) -> None:
        self._entries = None
        self._loaded_mtime = None


catalog = PromptCatalog()


def render_prompt(key: str, **values: Any) -> str:
    try:
        return catalog.template(key).substitute(**values)
    except KeyError as exc:
        if str(exc.args[0]).startswith("Unknown prompt"):
            raise
        raise KeyError(f"Prompt {key} needs a value for {exc.args[0]!r}") from exc


def build_primary_prompt(params: GenerationParams) -> str:
    """Build the full generation instruction for ``params``."""
    keyword = params.keyword.strip()
    return render_prompt(
        "generation.primary",
        category=params.category_label.lower(),
        style=params.style,
        length=params.length,
        tone=params.tone,
        audience=params.audience,
        keyword_clause=render_prompt("generation.keyword_clause", keyword=keyword) if keyword else "",
    )


def build_fallback_prompt(params: GenerationParams) -> str:
    return render_prompt("generation.fallback", category=params.category_label.lower())


def clear_prompt_cache() -> None:
    catalog.reset()
