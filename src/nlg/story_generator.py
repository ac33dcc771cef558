"""Story generation via chat completions.

Provides ``narrate()`` for session turns and ``generate_from_prompt()`` for the
one-shot route. Both are thin wrappers around the shared ``llm_client`` singleton.
"""
from __future__ import annotations

import logging
from typing import Optional

from config import settings
from src.engine.state import USER, Session
from src.utils.api_client import llm_client

logger = logging.getLogger(__name__)


class StoryGenerator:
    """LLM-powered narrator for a story session."""

    def __init__(self, history_window: Optional[int] = None) -> None:
        self.history_window = history_window or settings.HISTORY_WINDOW

    def narrate(self, session: Session, user_text: Optional[str] = None) -> str:
        """Ask for the next assistant reply.

        The session is not modified; the caller commits the exchange.
        """
        messages = session.prompt_window(self.history_window, pending_user=user_text)
        logger.debug("Sending %d turns for %s", len(messages), session.user_id)
        return llm_client.chat(messages)

    def generate_from_prompt(self, prompt: str) -> str:
        messages = [{"role": USER, "content": prompt}]
        return llm_client.chat(messages, max_tokens=settings.GENERATE_MAX_TOKENS)
