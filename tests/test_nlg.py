"""Tests for NLG modules: prompt_templates, modes, story_generator."""
import pytest
import sys
from dataclasses import FrozenInstanceError
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.engine.state import Session
from src.nlg.modes import MODES, Mode, list_modes, resolve_mode
from src.nlg.prompt_templates import ADVENTURE_PROMPT, OPENING_PROMPT
from src.nlg.story_generator import StoryGenerator


# ── Prompt templates ────────────────────────────────────────────────

class TestPromptTemplates:
    def test_mode_prompts_nonempty(self):
        for mode in MODES.values():
            assert len(mode.system_prompt) > 100

    def test_opening_prompt_slots(self):
        rendered = OPENING_PROMPT.format(system_prompt="BE A NARRATOR", context="a lonely lighthouse")
        assert rendered.startswith("BE A NARRATOR")
        assert "a lonely lighthouse" in rendered
        assert "first situation" in rendered


# ── Modes ───────────────────────────────────────────────────────────

class TestModes:
    def test_registry_order(self):
        assert list(MODES) == ["adventure", "romance", "horror", "fantasy", "scifi"]

    def test_list_modes_shape(self):
        modes = list_modes()
        assert len(modes) == 5
        assert set(modes[0]) == {"id", "name", "description"}
        assert modes[0]["id"] == "adventure"

    def test_description_truncated(self):
        desc = MODES["adventure"].description
        assert desc == ADVENTURE_PROMPT[:100] + "..."
        assert len(desc) == 103

    def test_resolve_known_mode(self):
        assert resolve_mode("horror").id == "horror"

    def test_resolve_is_case_insensitive(self):
        assert resolve_mode(" SciFi ").id == "scifi"

    @pytest.mark.parametrize("mode_id", [None, "", "western"])
    def test_resolve_falls_back_to_adventure(self, mode_id):
        assert resolve_mode(mode_id).id == "adventure"

    def test_mode_is_frozen(self):
        mode = Mode("x", "X", "prompt")
        with pytest.raises(FrozenInstanceError):
            mode.name = "Y"


# ── StoryGenerator (mocked LLM) ────────────────────────────────────

class TestStoryGenerator:
    @pytest.fixture
    def session(self):
        return Session.open("u1", MODES["fantasy"], "a dragon egg hatches")

    @patch("src.nlg.story_generator.llm_client")
    def test_narrate_opening(self, mock_client, session):
        mock_client.chat.return_value = "Once upon a time…"
        text = StoryGenerator(history_window=10).narrate(session)
        assert text == "Once upon a time…"

        sent = mock_client.chat.call_args.args[0]
        assert len(sent) == 1
        assert sent[0]["role"] == "system"
        assert "a dragon egg hatches" in sent[0]["content"]

    @patch("src.nlg.story_generator.llm_client")
    def test_narrate_includes_pending_turn_without_mutating(self, mock_client, session):
        mock_client.chat.return_value = "The egg cracks."
        session.record_exchange(None, "Opening.")
        StoryGenerator(history_window=10).narrate(session, user_text="I pick up the egg")

        sent = mock_client.chat.call_args.args[0]
        assert sent[-1] == {"role": "user", "content": "I pick up the egg"}
        assert len(session.messages) == 2  # system + opening, nothing committed

    @patch("src.nlg.story_generator.llm_client")
    def test_narrate_respects_window(self, mock_client, session):
        mock_client.chat.return_value = "..."
        for i in range(8):
            session.record_exchange(f"action {i}", f"reply {i}")
        StoryGenerator(history_window=4).narrate(session, user_text="latest")

        sent = mock_client.chat.call_args.args[0]
        assert [m["role"] for m in sent] == ["system", "user", "assistant", "user"]
        assert sent[-1]["content"] == "latest"
        assert sent[1]["content"] == "action 7"

    @patch("src.nlg.story_generator.llm_client")
    def test_generate_from_prompt(self, mock_client):
        mock_client.chat.return_value = "A knight rides out."
        text = StoryGenerator().generate_from_prompt("a knight")
        assert text == "A knight rides out."
        args, kwargs = mock_client.chat.call_args
        assert args[0] == [{"role": "user", "content": "a knight"}]
        assert kwargs["max_tokens"] == 500


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
