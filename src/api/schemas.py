"""Request bodies for the HTTP API.

Wire keys are camelCase to match the browser client. Every field is optional
at parse time so missing values come back as a 400, not a 422.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class _Body(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class StartStoryRequest(_Body):
    user_id: Optional[str] = Field(default=None, alias="userId", description="Opaque user identifier")
    context: Optional[str] = Field(default=None, description="Story premise written by the player")
    mode: Optional[str] = Field(default=None, description="Mode id; unknown ids fall back to the default")


class ContinueStoryRequest(_Body):
    user_id: Optional[str] = Field(default=None, alias="userId")
    user_message: Optional[str] = Field(default=None, alias="userMessage", description="The player's next turn")


class GenerateRequest(_Body):
    prompt: Optional[str] = None
