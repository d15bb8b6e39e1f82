"""Page view state and its transitions.

The whole page is one immutable ViewState. Each user action or server
response is a pure function from the old state to the new one; nothing
else mutates it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal

from facefortune.history.models import SavedReading


@dataclass(frozen=True, slots=True)
class ChatMessage:
    role: Literal["user", "assistant"]
    content: str


@dataclass(frozen=True, slots=True)
class ViewState:
    image: str | None = None
    result: str | None = None
    loading: bool = False
    error: str | None = None
    notice: str | None = None
    saved_reading_id: str | None = None
    chat: tuple[ChatMessage, ...] = ()
    chat_loading: bool = False
    history: tuple[SavedReading, ...] = field(default_factory=tuple)
    show_history: bool = False

    @property
    def can_analyze(self) -> bool:
        return self.image is not None and not self.loading

    @property
    def can_chat(self) -> bool:
        return self.result is not None and not self.chat_loading


def image_selected(state: ViewState, image: str) -> ViewState:
    """A new photo replaces the previous reading and conversation."""
    return replace(
        state,
        image=image,
        result=None,
        error=None,
        notice=None,
        saved_reading_id=None,
        chat=(),
        chat_loading=False,
    )


def image_rejected(state: ViewState, message: str) -> ViewState:
    return replace(state, error=message)


def analysis_started(state: ViewState) -> ViewState:
    return replace(
        state, loading=True, error=None, notice=None, chat=(), chat_loading=False
    )


def analysis_succeeded(
    state: ViewState, result: str, saved_reading_id: str | None
) -> ViewState:
    return replace(
        state,
        loading=False,
        result=result,
        saved_reading_id=saved_reading_id,
    )


def analysis_failed(state: ViewState, message: str) -> ViewState:
    return replace(state, loading=False, error=message)


def reset(state: ViewState) -> ViewState:
    """Clear the current photo and reading; history stays."""
    return ViewState(history=state.history, show_history=state.show_history)


def chat_started(state: ViewState, question: str) -> ViewState:
    return replace(
        state,
        chat=(*state.chat, ChatMessage(role="user", content=question)),
        chat_loading=True,
        error=None,
    )


def chat_replied(state: ViewState, reply: str) -> ViewState:
    return replace(
        state,
        chat=(*state.chat, ChatMessage(role="assistant", content=reply)),
        chat_loading=False,
    )


def chat_failed(state: ViewState, message: str) -> ViewState:
    return replace(state, chat_loading=False, error=message)


def reading_loaded(state: ViewState, reading: SavedReading) -> ViewState:
    """Show a saved reading as the current one."""
    return replace(
        state,
        image=reading.thumbnail,
        result=reading.result,
        saved_reading_id=reading.id,
        loading=False,
        error=None,
        notice=None,
        chat=(),
        chat_loading=False,
        show_history=False,
    )


def history_changed(state: ViewState, readings: list[SavedReading]) -> ViewState:
    saved_id = state.saved_reading_id
    if saved_id is not None and all(r.id != saved_id for r in readings):
        saved_id = None
    return replace(state, history=tuple(readings), saved_reading_id=saved_id)


def history_toggled(state: ViewState) -> ViewState:
    return replace(state, show_history=not state.show_history)


def notice_shown(state: ViewState, message: str | None) -> ViewState:
    return replace(state, notice=message)
