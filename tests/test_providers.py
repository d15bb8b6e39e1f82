"""Tests for the Gemini and OpenAI providers."""

from types import SimpleNamespace
from typing import Any

import pytest
from google.genai import types
from pydantic import SecretStr

from facefortune.generation.errors import GenerationBlockedError, GenerationError
from facefortune.generation.gemini import GeminiProvider
from facefortune.generation.openai import OpenAIProvider
from facefortune.generation.registry import create_provider
from facefortune.generation.types import GenerationRequest, InlineImage


def _request(**kwargs: Any) -> GenerationRequest:
    defaults: dict[str, Any] = {
        "prompt": "관상을 분석해주세요",
        "model": "test-model",
        "images": [InlineImage(data=b"\xff\xd8\xffjpeg", mime_type="image/jpeg")],
    }
    defaults.update(kwargs)
    return GenerationRequest(**defaults)


def _gemini_with_response(response: types.GenerateContentResponse):
    provider = GeminiProvider(api_key="test-key")
    calls: list[dict[str, Any]] = []

    async def generate_content(**kwargs: Any) -> types.GenerateContentResponse:
        calls.append(kwargs)
        return response

    provider._client = SimpleNamespace(  # type: ignore[assignment]
        aio=SimpleNamespace(models=SimpleNamespace(generate_content=generate_content))
    )
    return provider, calls


def _gemini_text_response(text: str) -> types.GenerateContentResponse:
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)]),
                finish_reason=types.FinishReason.STOP,
            )
        ],
        model_version="gemini-2.5-flash-001",
    )


class TestGeminiProvider:
    def test_name(self):
        assert GeminiProvider(api_key="test-key").name == "gemini"

    def test_contents_put_prompt_before_images(self):
        provider = GeminiProvider(api_key="test-key")
        contents = provider._build_contents(_request())
        assert contents[0] == "관상을 분석해주세요"
        assert len(contents) == 2
        part = contents[1]
        assert part.inline_data.data == b"\xff\xd8\xffjpeg"
        assert part.inline_data.mime_type == "image/jpeg"

    def test_config_omitted_without_options(self):
        provider = GeminiProvider(api_key="test-key")
        assert provider._build_config(_request()) is None

    def test_config_carries_options(self):
        provider = GeminiProvider(api_key="test-key")
        config = provider._build_config(_request(temperature=0.3, max_output_tokens=512))
        assert config is not None
        assert config.temperature == 0.3
        assert config.max_output_tokens == 512

    @pytest.mark.asyncio
    async def test_generate_returns_text(self):
        provider, calls = _gemini_with_response(_gemini_text_response("## 결과"))
        result = await provider.generate(_request())

        assert result.text == "## 결과"
        assert result.provider == "gemini"
        assert result.model == "gemini-2.5-flash-001"
        assert calls[0]["model"] == "test-model"
        assert calls[0]["config"] is None

    @pytest.mark.asyncio
    async def test_blocked_prompt(self):
        response = types.GenerateContentResponse(
            prompt_feedback=types.GenerateContentResponsePromptFeedback(
                block_reason=types.BlockedReason.SAFETY
            )
        )
        provider, _ = _gemini_with_response(response)
        with pytest.raises(GenerationBlockedError, match="SAFETY"):
            await provider.generate(_request())

    @pytest.mark.asyncio
    async def test_safety_finish_without_text(self):
        response = types.GenerateContentResponse(
            candidates=[types.Candidate(finish_reason=types.FinishReason.SAFETY)]
        )
        provider, _ = _gemini_with_response(response)
        with pytest.raises(GenerationBlockedError):
            await provider.generate(_request())

    @pytest.mark.asyncio
    async def test_empty_response(self):
        provider, _ = _gemini_with_response(types.GenerateContentResponse(candidates=[]))
        with pytest.raises(GenerationError, match="empty"):
            await provider.generate(_request())


class TestOpenAIProvider:
    def test_name(self):
        assert OpenAIProvider(api_key="test-key").name == "openai"

    def test_request_kwargs(self):
        provider = OpenAIProvider(api_key="test-key")
        kwargs = provider._build_request_kwargs(_request(max_output_tokens=256))

        assert kwargs["model"] == "test-model"
        assert kwargs["max_output_tokens"] == 256
        assert "temperature" not in kwargs
        content = kwargs["input"][0]["content"]
        assert content[0] == {"type": "input_text", "text": "관상을 분석해주세요"}
        assert content[1]["type"] == "input_image"
        assert content[1]["image_url"].startswith("data:image/jpeg;base64,")

    def test_text_only_request(self):
        provider = OpenAIProvider(api_key="test-key")
        kwargs = provider._build_request_kwargs(_request(images=[], temperature=0.2))
        assert kwargs["temperature"] == 0.2
        assert len(kwargs["input"][0]["content"]) == 1

    @pytest.mark.asyncio
    async def test_generate_joins_output_text(self):
        provider = OpenAIProvider(api_key="test-key")
        response = SimpleNamespace(
            model="gpt-4o-mini",
            output=[
                SimpleNamespace(type="reasoning"),
                SimpleNamespace(
                    type="message",
                    content=[
                        SimpleNamespace(type="output_text", text="## 요약"),
                        SimpleNamespace(type="output_text", text="좋은 관상입니다."),
                    ],
                ),
            ],
        )

        async def create(**kwargs: Any) -> Any:
            return response

        provider._client = SimpleNamespace(  # type: ignore[assignment]
            responses=SimpleNamespace(create=create)
        )
        result = await provider.generate(_request())
        assert result.text == "## 요약\n좋은 관상입니다."
        assert result.model == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_refusal_is_blocked(self):
        provider = OpenAIProvider(api_key="test-key")
        response = SimpleNamespace(
            output=[
                SimpleNamespace(
                    type="message",
                    content=[SimpleNamespace(type="refusal", refusal="I can't help")],
                )
            ]
        )

        async def create(**kwargs: Any) -> Any:
            return response

        provider._client = SimpleNamespace(  # type: ignore[assignment]
            responses=SimpleNamespace(create=create)
        )
        with pytest.raises(GenerationBlockedError):
            await provider.generate(_request())


class TestCreateProvider:
    def test_gemini(self):
        assert isinstance(create_provider("gemini", SecretStr("key")), GeminiProvider)

    def test_openai(self):
        assert isinstance(create_provider("openai", "key"), OpenAIProvider)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            create_provider("anthropic", "key")  # type: ignore[arg-type]
