"""Tests for page view state transitions."""

from facefortune.client import state as view
from facefortune.client.state import ChatMessage, ViewState
from facefortune.history import SavedReading

READING = SavedReading(
    id="1760000000000",
    date="2026. 10. 19. 오후 3:04:05",
    thumbnail="data:image/jpeg;base64,dGh1bWI=",
    result="## 저장된 결과",
)


def _analyzed() -> ViewState:
    state = view.image_selected(ViewState(), "data:image/jpeg;base64,aW1n")
    state = view.analysis_started(state)
    return view.analysis_succeeded(state, "## 결과", "1760000000000")


class TestTransitions:
    def test_initial(self):
        state = ViewState()
        assert not state.can_analyze
        assert not state.can_chat

    def test_new_image_clears_previous_reading(self):
        state = view.chat_replied(view.chat_started(_analyzed(), "질문"), "답변")
        state = view.image_selected(state, "data:image/jpeg;base64,bmV3")

        assert state.image == "data:image/jpeg;base64,bmV3"
        assert state.result is None
        assert state.saved_reading_id is None
        assert state.chat == ()
        assert state.can_analyze

    def test_loading_blocks_analyze(self):
        state = view.analysis_started(
            view.image_selected(ViewState(), "data:image/jpeg;base64,aW1n")
        )
        assert state.loading
        assert not state.can_analyze

    def test_failure_keeps_image(self):
        state = view.analysis_started(
            view.image_selected(ViewState(), "data:image/jpeg;base64,aW1n")
        )
        state = view.analysis_failed(state, "실패")
        assert not state.loading
        assert state.error == "실패"
        assert state.can_analyze

    def test_chat_round_trip(self):
        state = view.chat_started(_analyzed(), "연애운은?")
        assert state.chat_loading
        assert not state.can_chat

        state = view.chat_replied(state, "좋습니다.")
        assert state.chat == (
            ChatMessage(role="user", content="연애운은?"),
            ChatMessage(role="assistant", content="좋습니다."),
        )
        assert state.can_chat

    def test_chat_failure_keeps_question(self):
        state = view.chat_failed(view.chat_started(_analyzed(), "질문"), "오류")
        assert state.error == "오류"
        assert [m.role for m in state.chat] == ["user"]
        assert not state.chat_loading

    def test_reset_keeps_history(self):
        state = view.history_changed(_analyzed(), [READING])
        state = view.reset(view.history_toggled(state))
        assert state.image is None
        assert state.result is None
        assert state.history == (READING,)
        assert state.show_history

    def test_reading_loaded(self):
        state = view.history_toggled(_analyzed())
        state = view.reading_loaded(state, READING)
        assert state.image == READING.thumbnail
        assert state.result == READING.result
        assert state.saved_reading_id == READING.id
        assert not state.show_history

    def test_history_change_drops_deleted_saved_id(self):
        state = view.history_changed(_analyzed(), [READING])
        assert state.saved_reading_id == READING.id

        state = view.history_changed(state, [])
        assert state.saved_reading_id is None
        assert state.result == "## 결과"

    def test_notice(self):
        assert view.notice_shown(ViewState(), "저장됨").notice == "저장됨"
