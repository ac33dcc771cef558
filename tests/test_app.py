"""Tests for the Gradio callbacks with a mocked backend client."""
import pytest
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import gradio as gr

sys.path.insert(0, str(Path(__file__).parent.parent))

import app
from src.utils.backend_client import BackendError


@pytest.fixture
def backend():
    m = MagicMock()
    with patch("app._get_client", return_value=m):
        yield m


HISTORY = [
    {"role": "assistant", "content": "Welcome.", "timestamp": "2026-01-01T00:00:00+00:00"},
    {"role": "user", "content": "look", "timestamp": "2026-01-01T00:00:01+00:00"},
    {"role": "assistant", "content": "You see a door.", "timestamp": "2026-01-01T00:00:01+00:00"},
]


class TestCallbacks:
    def test_init_ui_fills_modes(self, backend):
        backend.list_modes.return_value = [{"id": "horror", "name": "👻 Horror Mode", "description": "..."}]
        dropdown, user_id, status = app.init_ui()
        assert dropdown["choices"] == [("👻 Horror Mode", "horror")]
        assert dropdown["value"] == "horror"
        assert len(user_id) == 32
        assert status == ""

    def test_init_ui_backend_down(self, backend):
        backend.list_modes.side_effect = BackendError("Connection error: refused")
        _, user_id, status = app.init_ui()
        assert user_id
        assert "Backend unavailable" in status

    def test_start_story(self, backend):
        backend.start_story.return_value = {"history": HISTORY[:1], "mode": "👻 Horror Mode"}
        chat, status = app.start_story("  a crypt ", "horror", "u1", [])
        backend.start_story.assert_called_once_with("u1", "a crypt", "horror")
        assert chat == [{"role": "assistant", "content": "Welcome."}]
        assert status == "👻 Horror Mode"

    def test_start_story_needs_premise(self, backend):
        chat, status = app.start_story("   ", "horror", "u1", [])
        assert chat == []
        assert "premise" in status
        backend.start_story.assert_not_called()

    def test_submit_action(self, backend):
        backend.continue_story.return_value = {"history": HISTORY}
        chat, cleared = app.submit_action("look", "u1", HISTORY[:1])
        assert len(chat) == 3
        assert "timestamp" not in chat[0]
        assert cleared == ""

    def test_submit_empty_is_noop(self, backend):
        chat, _ = app.submit_action("  ", "u1", HISTORY[:1])
        assert chat == HISTORY[:1]
        backend.continue_story.assert_not_called()

    def test_submit_without_story(self, backend):
        backend.continue_story.side_effect = BackendError("Session not found", status_code=404)
        chat, _ = app.submit_action("hi", "u1", [])
        assert "No story in progress" in chat[-1]["content"]

    def test_submit_failure_keeps_player_turn(self, backend):
        backend.continue_story.side_effect = BackendError("Failed to continue story", status_code=500)
        chat, _ = app.submit_action("hi", "u1", [])
        assert chat[0] == {"role": "user", "content": "hi"}
        assert "Failed to continue story" in chat[-1]["content"]

    def test_resume(self, backend):
        backend.get_session.return_value = {"history": HISTORY, "mode": "🎮 Adventure Mode", "context": "x"}
        chat, status = app.resume_story("u1", [])
        assert len(chat) == 3
        assert status == "🎮 Adventure Mode"


class TestLayout:
    def test_build_ui(self):
        assert app.build_ui() is not None

    def test_player_id_is_editable_textbox(self):
        demo = app.build_ui()
        boxes = [
            b for b in demo.blocks.values()
            if isinstance(b, gr.Textbox) and b.label == "Player ID"
        ]
        assert len(boxes) == 1
        assert boxes[0].interactive is not False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
