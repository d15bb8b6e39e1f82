"""Tests for prompt building and the fortune service."""

import pytest

from facefortune.config.models import ModelConfig
from facefortune.fortune.prompts import ANALYSIS_PROMPT, build_chat_prompt
from facefortune.fortune.service import FortuneService
from facefortune.images.datauri import DataURI
from tests.conftest import MockProvider


class TestPrompts:
    def test_analysis_prompt_sections(self):
        assert ANALYSIS_PROMPT.startswith("당신은 전문 관상가입니다.")
        assert "## 🔮 전체 운세 요약" in ANALYSIS_PROMPT

    def test_chat_prompt_embeds_analysis_then_question(self):
        prompt = build_chat_prompt("연애운은 어떤가요?", "## 요약\n좋은 관상")
        assert "## 요약\n좋은 관상" in prompt
        assert "연애운은 어떤가요?" in prompt
        assert prompt.index("좋은 관상") < prompt.index("연애운은 어떤가요?")
        assert "{message}" not in prompt
        assert "{analysis_result}" not in prompt

    def test_braces_in_inputs_stay_literal(self):
        prompt = build_chat_prompt("{analysis_result} 이게 뭔가요?", "점수 {만점}")
        assert "{analysis_result} 이게 뭔가요?" in prompt
        assert "점수 {만점}" in prompt


class TestFortuneService:
    @pytest.mark.asyncio
    async def test_analyze_sends_prompt_and_image(self):
        provider = MockProvider(text="## 결과")
        service = FortuneService(provider=provider, model=ModelConfig())

        result = await service.analyze(DataURI(mime_type="image/png", data=b"png"))

        assert result == "## 결과"
        request = provider.requests[0]
        assert request.prompt == ANALYSIS_PROMPT
        assert request.model == "gemini-2.5-flash"
        assert request.max_output_tokens == 4096
        assert request.temperature is None
        assert len(request.images) == 1
        assert request.images[0].data == b"png"
        assert request.images[0].mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_chat_is_text_only(self):
        provider = MockProvider(text="좋은 연애운입니다.")
        model = ModelConfig(chat_model="gemini-2.5-flash-lite", temperature=0.5)
        service = FortuneService(provider=provider, model=model)

        reply = await service.chat("연애운은?", "## 분석")

        assert reply == "좋은 연애운입니다."
        request = provider.requests[0]
        assert request.images == []
        assert request.model == "gemini-2.5-flash-lite"
        assert request.max_output_tokens == 1024
        assert request.temperature == 0.5
        assert request.prompt == build_chat_prompt("연애운은?", "## 분석")

    @pytest.mark.asyncio
    async def test_errors_propagate(self):
        provider = MockProvider(error=RuntimeError("429"))
        service = FortuneService(provider=provider, model=ModelConfig())
        with pytest.raises(RuntimeError):
            await service.chat("질문", "결과")
