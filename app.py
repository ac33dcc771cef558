"""Chronicles of Choice – Gradio client for the narrative chat backend.

Layout (gr.Blocks):
  Top row:       player id  +  mode dropdown  +  resume button
  Premise row:   premise textbox  +  begin button
  Story column:  chat history  +  quick actions  +  free-text input
"""
from __future__ import annotations

import functools
import os
import sys
import logging
import uuid

import gradio as gr

# Ensure project root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import settings
from src.utils.backend_client import BackendClient, BackendError

logger = logging.getLogger(__name__)

QUICK_ACTIONS = [
    ("👀 Look around", "I look around carefully, taking in my surroundings."),
    ("💬 Talk", "I try to talk to whoever is nearby."),
    ("⚔️ Attack", "I draw my weapon and attack."),
    ("🏃 Flee", "I turn and run as fast as I can."),
]

# ── Global backend client (lazy, one per process) ────────────────────────
_client: BackendClient | None = None


def _get_client() -> BackendClient:
    global _client
    if _client is None:
        _client = BackendClient(settings.BACKEND_URL)
    return _client


# ── Helpers ──────────────────────────────────────────────────────────────

def _to_chat(history: list[dict]) -> list[dict]:
    return [{"role": t["role"], "content": t["content"]} for t in history]


def _with_error(history: list, message: str) -> list:
    history = list(history or [])
    history.append({"role": "assistant", "content": f"*⚠ {message}*"})
    return history


# ── Callbacks ────────────────────────────────────────────────────────────

def init_ui():
    """Fill the mode dropdown and hand out a fresh player id."""
    user_id = uuid.uuid4().hex
    try:
        modes = _get_client().list_modes()
    except BackendError as exc:
        logger.warning("Could not load modes: %s", exc)
        return gr.update(choices=[], value=None), user_id, f"⚠ Backend unavailable: {exc}"
    choices = [(m["name"], m["id"]) for m in modes]
    value = choices[0][1] if choices else None
    return gr.update(choices=choices, value=value), user_id, ""


def start_story(premise: str, mode_id: str | None, user_id: str, history: list):
    premise = (premise or "").strip()
    if not premise:
        return history, "Write a premise first."
    try:
        data = _get_client().start_story(user_id, premise, mode_id or settings.DEFAULT_MODE)
    except BackendError as exc:
        return _with_error(history, f"Could not start the story: {exc}"), ""
    return _to_chat(data["history"]), data.get("mode", "")


def submit_action(user_text: str, user_id: str, history: list):
    action = (user_text or "").strip()
    if not action:
        return history, ""
    try:
        data = _get_client().continue_story(user_id, action)
    except BackendError as exc:
        if exc.status_code == 404:
            return _with_error(history, "No story in progress. Begin a new one."), ""
        history = list(history or []) + [{"role": "user", "content": action}]
        return _with_error(history, f"Could not continue the story: {exc}"), ""
    return _to_chat(data["history"]), ""


def resume_story(user_id: str, history: list):
    try:
        data = _get_client().get_session(user_id)
    except BackendError as exc:
        return _with_error(history, f"Nothing to resume: {exc}"), ""
    return _to_chat(data["history"]), data.get("mode", "")


# ── UI Layout ────────────────────────────────────────────────────────────

def build_ui() -> gr.Blocks:
    with gr.Blocks(
        title="Chronicles of Choice",
        theme=gr.themes.Soft(primary_hue="indigo", secondary_hue="blue"),
    ) as demo:
        gr.Markdown("# 📖 Chronicles of Choice\n*Write a premise, pick a mode, and play the story out turn by turn.*")

        with gr.Row():
            user_box = gr.Textbox(label="Player ID", scale=3)
            mode_dd = gr.Dropdown(choices=[], label="Mode", scale=2)
            resume_btn = gr.Button("Resume", scale=1)

        with gr.Row():
            premise_box = gr.Textbox(
                placeholder="e.g. 'I am a knight on a quest to save the kingdom'",
                label="Premise", lines=3, scale=4,
            )
            begin_btn = gr.Button("🚀 Begin", variant="primary", scale=1)

        status_md = gr.Markdown("")
        chatbot = gr.Chatbot(label="Story", type="messages", height=480)

        with gr.Row():
            quick_btns = [gr.Button(label, size="sm") for label, _ in QUICK_ACTIONS]

        with gr.Row():
            user_input = gr.Textbox(
                placeholder="What do you do next?",
                label="Your action", scale=4, lines=1,
            )
            send_btn = gr.Button("Send", variant="primary", scale=1)

        # ── Wiring ──
        demo.load(fn=init_ui, outputs=[mode_dd, user_box, status_md])

        begin_btn.click(
            fn=start_story,
            inputs=[premise_box, mode_dd, user_box, chatbot],
            outputs=[chatbot, status_md],
        )

        resume_btn.click(
            fn=resume_story,
            inputs=[user_box, chatbot],
            outputs=[chatbot, status_md],
        )

        for trigger in (send_btn.click, user_input.submit):
            trigger(
                fn=submit_action,
                inputs=[user_input, user_box, chatbot],
                outputs=[chatbot, user_input],
            )

        for btn, (_, text) in zip(quick_btns, QUICK_ACTIONS):
            btn.click(
                fn=functools.partial(submit_action, text),
                inputs=[user_box, chatbot],
                outputs=[chatbot, user_input],
            )

    return demo


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    demo = build_ui()
    demo.launch(server_name="0.0.0.0", server_port=settings.GRADIO_PORT, share=False)
