"""Narrative mode presets.

A mode is a named system prompt the player picks when a story starts.
Unknown ids quietly fall back to ``settings.DEFAULT_MODE``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from config import settings
from src.nlg.prompt_templates import (
    ADVENTURE_PROMPT,
    FANTASY_PROMPT,
    HORROR_PROMPT,
    ROMANCE_PROMPT,
    SCIFI_PROMPT,
)

logger = logging.getLogger(__name__)

DESCRIPTION_LENGTH = 100


@dataclass(frozen=True)
class Mode:
    """A system-prompt preset."""
    id: str
    name: str
    system_prompt: str

    @property
    def description(self) -> str:
        return self.system_prompt[:DESCRIPTION_LENGTH] + "..."

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "description": self.description}


# Registry order is the order shown to the player
MODES: Dict[str, Mode] = {
    m.id: m
    for m in (
        Mode("adventure", "🎮 Adventure Mode", ADVENTURE_PROMPT),
        Mode("romance", "💖 Romance Mode", ROMANCE_PROMPT),
        Mode("horror", "👻 Horror Mode", HORROR_PROMPT),
        Mode("fantasy", "🐉 Epic Fantasy Mode", FANTASY_PROMPT),
        Mode("scifi", "🚀 Science Fiction Mode", SCIFI_PROMPT),
    )
}


def list_modes() -> List[Dict[str, str]]:
    return [m.to_dict() for m in MODES.values()]


def resolve_mode(mode_id: Optional[str]) -> Mode:
    """Return the preset for *mode_id*, or the default mode when unknown."""
    mode = MODES.get((mode_id or "").strip().lower())
    if mode is None:
        if mode_id:
            logger.info("Unknown mode %r – falling back to %s.", mode_id, settings.DEFAULT_MODE)
        mode = MODES.get(settings.DEFAULT_MODE, MODES["adventure"])
    return mode
