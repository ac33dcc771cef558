"""Story service: the operations behind every HTTP route.

Flow per turn:
1. Look up (or open) the session
2. Build the prompt window
3. Ask the completion API for a reply
4. Commit the exchange to the session
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from src.engine.session_store import SessionStore
from src.engine.state import Session
from src.nlg.modes import list_modes, resolve_mode
from src.nlg.story_generator import StoryGenerator

logger = logging.getLogger(__name__)


class InvalidRequest(ValueError):
    """A required field was missing or empty."""


class SessionNotFound(LookupError):
    """No story is stored for the given user id."""

    def __init__(self, user_id: str) -> None:
        super().__init__(user_id)
        self.user_id = user_id


def _require(**fields: Optional[str]) -> None:
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise InvalidRequest(f"{' and '.join(missing)} {'is' if len(missing) == 1 else 'are'} required")


class StoryService:
    """Coordinates the session store and the narrator."""

    def __init__(
        self,
        store: Optional[SessionStore] = None,
        story_gen: Optional[StoryGenerator] = None,
    ) -> None:
        self.store = store if store is not None else SessionStore()
        self.story_gen = story_gen or StoryGenerator()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_modes(self) -> List[Dict[str, str]]:
        return list_modes()

    def start_story(self, user_id: str, context: str, mode: Optional[str] = None) -> Dict[str, Any]:
        """Open a fresh session and return the opening reply."""
        _require(userId=user_id, context=context)
        selected = resolve_mode(mode)
        session = Session.open(user_id, selected, context)

        reply = self.story_gen.narrate(session)
        session.record_exchange(None, reply)
        self.store.put(session)

        logger.info("Story started for user %s in mode %s", user_id, selected.id)
        return {
            "message": reply,
            "history": session.public_history(),
            "mode": selected.name,
        }

    def continue_story(self, user_id: str, user_message: str) -> Dict[str, Any]:
        """Send the player's turn and return the next reply."""
        _require(userId=user_id, userMessage=user_message)
        session = self._get(user_id)

        reply = self.story_gen.narrate(session, user_text=user_message)
        session.record_exchange(user_message, reply)

        logger.info("Story continued for user %s (%d turns)", user_id, len(session.messages) - 1)
        return {"message": reply, "history": session.public_history()}

    def get_session(self, user_id: str) -> Dict[str, Any]:
        session = self._get(user_id)
        return {
            "history": session.public_history(),
            "mode": session.mode.name,
            "context": session.context,
        }

    def generate(self, prompt: str) -> Dict[str, Any]:
        """One-shot story from a single prompt; no session involved."""
        _require(prompt=prompt)
        return {"story": self.story_gen.generate_from_prompt(prompt)}

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _get(self, user_id: str) -> Session:
        session = self.store.get(user_id)
        if session is None:
            raise SessionNotFound(user_id)
        return session
