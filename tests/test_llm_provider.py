"""
LLM Provider 테스트 (실제 HTTP 호출 없음)
"""
import asyncio
import aiohttp
import pytest
from unittest.mock import AsyncMock, patch

from config.settings import Settings
from providers.llm_provider import (
    CONNECTION_ERROR_MESSAGE, GeminiProvider, GenerationError, GenerationRequest,
    LLMProviderFactory, MockProvider, OpenAIProvider
)
from services.story_parser import parse_story


@pytest.mark.unit
class TestGeminiProvider:
    """Gemini 요청 / 응답 처리"""

    def test_payload_carries_sampling_and_system_instruction(self):
        provider = GeminiProvider(api_key="key", temperature=0.8, top_p=0.9)
        payload = provider.build_payload("prompt", "system")

        assert payload["contents"][0]["parts"][0]["text"] == "prompt"
        assert payload["generationConfig"] == {"temperature": 0.8, "topP": 0.9}
        assert payload["systemInstruction"]["parts"][0]["text"] == "system"

    def test_extract_text_joins_parts(self):
        provider = GeminiProvider(api_key="key")
        result = {"candidates": [{"content": {"parts": [{"text": "[TITLE]\n"}, {"text": "題"}]}}]}

        assert provider._extract_text(result) == "[TITLE]\n題"

    def test_extract_text_without_candidates(self):
        assert GeminiProvider(api_key="key")._extract_text({}) == ""

    def test_generate_text_uses_response(self):
        provider = GeminiProvider(api_key="key", model="gemini-test")
        result = {"candidates": [{"content": {"parts": [{"text": "本文"}]}}]}

        with patch.object(provider, "_post_json", AsyncMock(return_value=result)) as post:
            text = asyncio.run(provider.generate_text("prompt", "system"))

        assert text == "本文"
        url, headers, payload = post.call_args.args
        assert url.endswith("/models/gemini-test:generateContent")
        assert headers["x-goog-api-key"] == "key"

    def test_missing_key_raises_generation_error(self):
        with pytest.raises(GenerationError):
            asyncio.run(GeminiProvider(api_key="").generate_text("prompt"))

    def test_connection_error_is_wrapped(self):
        provider = GeminiProvider(api_key="key")

        with patch("providers.llm_provider.aiohttp.ClientSession",
                   side_effect=aiohttp.ClientConnectionError("down")):
            with pytest.raises(GenerationError) as exc_info:
                asyncio.run(provider.generate_text("prompt"))

        assert exc_info.value.message == CONNECTION_ERROR_MESSAGE


@pytest.mark.unit
class TestOpenAIProvider:
    """OpenAI 요청 / 응답 처리"""

    def test_payload_messages(self):
        provider = OpenAIProvider(api_key="key", model="gpt-test", temperature=0.7, top_p=0.5)
        payload = provider.build_payload("prompt", "system")

        assert payload["model"] == "gpt-test"
        assert payload["messages"] == [
            {"role": "system", "content": "system"},
            {"role": "user", "content": "prompt"},
        ]
        assert payload["temperature"] == 0.7
        assert payload["top_p"] == 0.5

    def test_generate_text_reads_first_choice(self):
        provider = OpenAIProvider(api_key="key")
        result = {"choices": [{"message": {"content": "[STORY]\n本文"}}]}

        with patch.object(provider, "_post_json", AsyncMock(return_value=result)):
            assert asyncio.run(provider.generate_text("prompt")) == "[STORY]\n本文"

    def test_generate_text_without_choices(self):
        provider = OpenAIProvider(api_key="key")

        with patch.object(provider, "_post_json", AsyncMock(return_value={})):
            assert asyncio.run(provider.generate_text("prompt")) == ""


@pytest.mark.unit
class TestMockProvider:
    """Mock 원문 생성"""

    def test_mock_output_is_parseable(self):
        request = GenerationRequest(
            genre_label="ほっこり", keywords=("猫", "喫茶店"), season="all",
            tone_label="優しい", length="short"
        )
        raw = asyncio.run(MockProvider(delay=0).generate_text("prompt", request=request))
        story = parse_story(raw, request.keywords, "Fin.")

        assert story.title == "猫と、ほっこりのひととき"
        assert story.body_lines
        assert "Fin." in story.footer_text
        assert story.image_prompt.startswith("A soft pastel illustration of")
        assert "#猫" in story.ai_tags


@pytest.mark.unit
class TestProviderFactory:
    """설정별 Provider 선택"""

    def test_gemini_selected(self):
        provider = LLMProviderFactory.get_provider(Settings(AI_PROVIDER="gemini", GEMINI_API_KEY="key"))

        assert isinstance(provider, GeminiProvider)
        assert provider.temperature == 0.8
        assert provider.top_p == 0.9

    def test_openai_selected(self):
        provider = LLMProviderFactory.get_provider(Settings(AI_PROVIDER="openai", OPENAI_API_KEY="key"))

        assert isinstance(provider, OpenAIProvider)

    def test_missing_key_falls_back_to_mock(self):
        provider = LLMProviderFactory.get_provider(Settings(AI_PROVIDER="openai", OPENAI_API_KEY=""))

        assert isinstance(provider, MockProvider)

    def test_available_providers(self):
        available = LLMProviderFactory.get_available_providers(
            Settings(GEMINI_API_KEY="key", OPENAI_API_KEY="")
        )

        assert available == {"gemini": True, "openai": False, "mock": True}


@pytest.mark.unit
class TestSettingsValidation:
    """설정 경고"""

    def test_unknown_provider_warning(self):
        warnings = Settings(AI_PROVIDER="claude").validate_settings()

        assert any("claude" in warning for warning in warnings)

    def test_missing_key_warning(self):
        warnings = Settings(AI_PROVIDER="gemini", GEMINI_API_KEY="").validate_settings()

        assert warnings == ["Gemini 선택되었으나 API 키가 없습니다."]
