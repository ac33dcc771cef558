"""Session state for Chronicles: turns, prompt window, public history."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from src.nlg.modes import Mode
from src.nlg.prompt_templates import OPENING_PROMPT

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Turn:
    """One message in the conversation."""
    role: str
    content: str
    timestamp: Optional[datetime] = None

    def to_prompt(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

    def to_public(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"role": self.role, "content": self.content}
        if self.timestamp is not None:
            out["timestamp"] = self.timestamp.isoformat()
        return out


@dataclass
class Session:
    """Server-held story for one user.

    ``messages[0]`` is always the system turn built from the mode and premise.
    """

    user_id: str
    mode: Mode
    context: str
    messages: List[Turn] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @classmethod
    def open(cls, user_id: str, mode: Mode, context: str) -> "Session":
        system = OPENING_PROMPT.format(system_prompt=mode.system_prompt, context=context)
        return cls(user_id=user_id, mode=mode, context=context, messages=[Turn(SYSTEM, system)])

    # ── prompt construction ───────────────────────────────
    def prompt_window(self, n: int, pending_user: Optional[str] = None) -> List[Dict[str, str]]:
        """Return the turns to send to the completion API.

        At most *n* turns in total: system turns are pinned at the head and the
        most recent dialogue turns (including *pending_user*, if given) fill
        the rest. The newest dialogue turn is always kept.
        """
        system = [t for t in self.messages if t.role == SYSTEM]
        dialogue = [t for t in self.messages if t.role != SYSTEM]
        if pending_user is not None:
            dialogue.append(Turn(USER, pending_user))
        keep = max(n - len(system), 1)
        return [t.to_prompt() for t in system + dialogue[-keep:]]

    def public_history(self) -> List[Dict[str, Any]]:
        """Every non-system turn, in order, as JSON-ready dicts."""
        return [t.to_public() for t in self.messages if t.role != SYSTEM]

    # ── mutation ──────────────────────────────────────────
    def record_exchange(self, user_text: Optional[str], reply: str) -> None:
        """Commit a completed exchange: optional user turn, then the reply."""
        now = _now()
        if user_text is not None:
            self.messages.append(Turn(USER, user_text, now))
        self.messages.append(Turn(ASSISTANT, reply, now))
        self.updated_at = now
