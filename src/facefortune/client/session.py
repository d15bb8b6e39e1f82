"""Page-level controller tying view state, API calls and history together."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import httpx

from facefortune.client import state as view
from facefortune.client.api import (
    FortuneAPIError,
    FortuneClient,
    MalformedResponseError,
)
from facefortune.client.render import share_text
from facefortune.client.state import ViewState
from facefortune.config.models import ImageConfig
from facefortune.history.models import SavedReading
from facefortune.history.store import HistoryStorageError, HistoryStore
from facefortune.images.datauri import InvalidDataURIError, parse_data_uri
from facefortune.images.preprocess import (
    ImageError,
    ImageProcessingError,
    compress_file,
    compress_image,
    make_thumbnail,
)

logger = logging.getLogger(__name__)

ANALYSIS_ERROR = "분석 중 오류가 발생했습니다."
CHAT_ERROR = "답변 생성 중 오류가 발생했습니다."
SAVE_ERROR = "기록 저장에 실패했습니다."
SAVED_NOTICE = "기록에 저장되었습니다."
ALREADY_SAVED_NOTICE = "이미 저장된 결과입니다."


class ReadingSession:
    """One page's worth of interaction.

    All results of an analysis go through ``analyze``, which is the only
    place a reading is appended to the history; ``save_current`` only saves
    results that are not saved yet.
    """

    def __init__(
        self,
        client: FortuneClient,
        history: HistoryStore,
        *,
        image_config: ImageConfig | None = None,
    ) -> None:
        self._client = client
        self._history = history
        self._image_config = image_config or ImageConfig()
        self._state = ViewState(history=tuple(history.list()))

    @property
    def state(self) -> ViewState:
        return self._state

    def select_image(self, data: bytes) -> ViewState:
        """Compress picked image bytes and make them the current photo."""
        cfg = self._image_config
        return self._select(
            lambda: compress_image(
                data,
                max_width=cfg.max_width,
                quality=cfg.jpeg_quality,
                max_bytes=cfg.max_upload_bytes,
            )
        )

    def select_file(self, path: Path) -> ViewState:
        cfg = self._image_config
        return self._select(
            lambda: compress_file(
                path,
                max_width=cfg.max_width,
                quality=cfg.jpeg_quality,
                max_bytes=cfg.max_upload_bytes,
            )
        )

    def _select(self, compress: Callable[[], str]) -> ViewState:
        try:
            image = compress()
        except ImageError as e:
            self._state = view.image_rejected(self._state, str(e))
        else:
            self._state = view.image_selected(self._state, image)
        return self._state

    def receive_image_from_app(self, image: str) -> ViewState:
        """Callback for images delivered by the native shell."""
        try:
            parse_data_uri(image)
        except InvalidDataURIError:
            logger.warning("invalid_app_image")
            self._state = view.image_rejected(
                self._state, str(ImageProcessingError())
            )
        else:
            self._state = view.image_selected(self._state, image)
        return self._state

    async def analyze(self) -> ViewState:
        """Send the current photo for a reading and save the result."""
        if not self._state.can_analyze:
            return self._state
        image = self._state.image
        assert image is not None

        self._state = view.analysis_started(self._state)
        try:
            result = await self._client.analyze(image)
        except MalformedResponseError:
            self._state = view.analysis_failed(self._state, ANALYSIS_ERROR)
            return self._state
        except FortuneAPIError as e:
            self._state = view.analysis_failed(self._state, e.message)
            return self._state
        except httpx.HTTPError as e:
            logger.warning("analysis_request_failed", extra={"error.message": str(e)})
            self._state = view.analysis_failed(self._state, ANALYSIS_ERROR)
            return self._state
        except Exception:
            logger.exception("analysis_unexpected_error")
            self._state = view.analysis_failed(self._state, ANALYSIS_ERROR)
            return self._state

        reading = self._save(image, result)
        self._state = view.analysis_succeeded(
            self._state, result, reading.id if reading else None
        )
        return self._state

    def save_current(self) -> ViewState:
        """Manually save the current result unless it is already saved."""
        state = self._state
        if state.result is None or state.image is None:
            return state
        if state.saved_reading_id is not None:
            self._state = view.notice_shown(state, ALREADY_SAVED_NOTICE)
            return self._state

        reading = self._save(state.image, state.result)
        if reading is not None:
            self._state = view.notice_shown(
                view.analysis_succeeded(self._state, state.result, reading.id),
                SAVED_NOTICE,
            )
        return self._state

    async def ask(self, question: str) -> ViewState:
        """Ask a follow-up question about the current reading."""
        question = question.strip()
        if not question or not self._state.can_chat:
            return self._state
        result = self._state.result
        assert result is not None

        self._state = view.chat_started(self._state, question)
        try:
            reply = await self._client.chat(question, result)
        except MalformedResponseError:
            self._state = view.chat_failed(self._state, CHAT_ERROR)
        except FortuneAPIError as e:
            self._state = view.chat_failed(self._state, e.message)
        except httpx.HTTPError as e:
            logger.warning("chat_request_failed", extra={"error.message": str(e)})
            self._state = view.chat_failed(self._state, CHAT_ERROR)
        except Exception:
            logger.exception("chat_unexpected_error")
            self._state = view.chat_failed(self._state, CHAT_ERROR)
        else:
            self._state = view.chat_replied(self._state, reply)
        return self._state

    def load_reading(self, reading_id: str) -> ViewState:
        reading = self._history.load(reading_id)
        if reading is not None:
            self._state = view.reading_loaded(self._state, reading)
        return self._state

    def delete_reading(self, reading_id: str) -> ViewState:
        try:
            readings = self._history.remove(reading_id)
        except HistoryStorageError:
            self._state = view.notice_shown(self._state, SAVE_ERROR)
        else:
            self._state = view.history_changed(self._state, readings)
        return self._state

    def toggle_history(self) -> ViewState:
        self._state = view.history_toggled(self._state)
        return self._state

    def reset(self) -> ViewState:
        self._state = view.reset(self._state)
        return self._state

    def share_text(self) -> str | None:
        """Text for the clipboard, or None when there is no reading."""
        if self._state.result is None:
            return None
        reading = (
            self._history.load(self._state.saved_reading_id)
            if self._state.saved_reading_id
            else None
        )
        return share_text(self._state.result, date=reading.date if reading else None)

    def _save(self, image: str, result: str) -> SavedReading | None:
        try:
            thumbnail = make_thumbnail(
                image,
                max_width=self._image_config.thumbnail_width,
                quality=self._image_config.jpeg_quality,
            )
        except ImageError:
            thumbnail = image

        try:
            reading = self._history.create_reading(thumbnail=thumbnail, result=result)
            readings = self._history.append(reading)
        except HistoryStorageError:
            self._state = view.notice_shown(self._state, SAVE_ERROR)
            return None

        self._state = view.history_changed(self._state, readings)
        return reading
