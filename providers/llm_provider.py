"""
텍스트 생성 LLM Provider (Gemini / OpenAI / Mock)
생성 호출은 요청 1회: 타임아웃, 재시도, 취소 없음
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, Tuple
import asyncio
import aiohttp
import logging
from dataclasses import dataclass
import time

logger = logging.getLogger(__name__)

CONNECTION_ERROR_MESSAGE = "AIとの接続に失敗しました。"

# 생성 호출은 시간 제한 없이 응답을 기다린다
NO_TIMEOUT = aiohttp.ClientTimeout(total=None)

@dataclass(frozen=True)
class GenerationRequest:
    """사용자 선택으로 만든 생성 요청 (제출 후 불변)"""
    genre_label: str
    keywords: Tuple[str, ...]
    season: str
    tone_label: str
    length: str

class GenerationError(Exception):
    """생성 API 호출 실패"""

    def __init__(self, message: str = CONNECTION_ERROR_MESSAGE):
        super().__init__(message)
        self.message = message

class LLMProvider(ABC):
    def __init__(self, temperature: float = 0.8, top_p: float = 0.9):
        self.temperature = temperature
        self.top_p = top_p

    @abstractmethod
    async def generate_text(self, prompt: str, system_instruction: str = "", **kwargs) -> str:
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """프로바이더 사용 가능 여부"""
        pass

    async def _post_json(self, url: str, headers: Dict[str, str], payload: Dict[str, Any]) -> Dict[str, Any]:
        """단일 POST 요청, 실패는 모두 GenerationError 로 변환"""
        try:
            start_time = time.time()
            async with aiohttp.ClientSession(timeout=NO_TIMEOUT) as session:
                async with session.post(url, headers=headers, json=payload) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        logger.error(f"{self.get_provider_name()} API 오류:")
                        logger.error(f"  상태코드: {response.status}")
                        logger.error(f"  오류 내용: {error_text[:500]}")
                        raise GenerationError()

                    result = await response.json()
                    logger.info(f"{self.get_provider_name()} 응답 수신 ({time.time() - start_time:.1f}초)")
                    return result

        except GenerationError:
            raise
        except aiohttp.ClientError as e:
            logger.error(f"HTTP 클라이언트 오류:")
            logger.error(f"  오류 타입: {type(e).__name__}")
            logger.error(f"  오류 메시지: {str(e)}")
            raise GenerationError() from e
        except Exception as e:
            logger.error(f"{self.get_provider_name()} API 호출 실패: {str(e)}", exc_info=True)
            raise GenerationError() from e

class GeminiProvider(LLMProvider):
    """Google Gemini Provider (REST generateContent)"""

    def __init__(self, api_key: str, model: str = "gemini-3-pro-preview", **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.model = model
        self.base_url = f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def is_available(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, prompt: str, system_instruction: str = "") -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": {
                "temperature": self.temperature,
                "topP": self.top_p,
            },
        }
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}
        return payload

    async def generate_text(self, prompt: str, system_instruction: str = "", **kwargs) -> str:
        if not self.is_available():
            logger.error("GeminiProvider 사용 불가: API 키 없음")
            raise GenerationError()

        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json"
        }
        result = await self._post_json(self.base_url, headers, self.build_payload(prompt, system_instruction))
        return self._extract_text(result)

    def _extract_text(self, result: Dict[str, Any]) -> str:
        """candidates[0].content.parts[*].text 연결"""
        candidates = result.get("candidates") or []
        if not candidates:
            logger.error(f"Gemini 응답에 candidates가 없음: {result}")
            return ""
        parts = candidates[0].get("content", {}).get("parts", [])
        return "".join(part.get("text", "") for part in parts)

    def get_provider_name(self) -> str:
        return f"Gemini {self.model}"

class OpenAIProvider(LLMProvider):
    """OpenAI GPT Provider"""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", max_tokens: int = 4000, **kwargs):
        super().__init__(**kwargs)
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.base_url = "https://api.openai.com/v1/chat/completions"

    def is_available(self) -> bool:
        return bool(self.api_key)

    def build_payload(self, prompt: str, system_instruction: str = "") -> Dict[str, Any]:
        messages = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": prompt})
        return {
            "model": self.model,
            "messages": messages,
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
            "top_p": self.top_p,
        }

    async def generate_text(self, prompt: str, system_instruction: str = "", **kwargs) -> str:
        if not self.is_available():
            logger.error("OpenAIProvider 사용 불가: API 키 없음")
            raise GenerationError()

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json"
        }
        result = await self._post_json(self.base_url, headers, self.build_payload(prompt, system_instruction))

        if 'choices' in result and len(result['choices']) > 0:
            return result["choices"][0]["message"].get("content") or ""

        logger.error("OpenAI 응답에 choices가 없음")
        logger.error(f"  전체 응답: {result}")
        return ""

    def get_provider_name(self) -> str:
        return f"OpenAI {self.model}"

class MockProvider(LLMProvider):
    """Mock 데이터 제공자"""

    def __init__(self, delay: float = 0.3, **kwargs):
        super().__init__(**kwargs)
        from templates.mock_templates import MockStoryGenerator
        self.generator = MockStoryGenerator()
        self.delay = delay

    def is_available(self) -> bool:
        return True

    async def generate_text(self, prompt: str, system_instruction: str = "", **kwargs) -> str:
        # 인위적 지연 (실제 API 호출 시뮬레이션)
        if self.delay:
            await asyncio.sleep(self.delay)

        request: Optional[GenerationRequest] = kwargs.get("request")
        if request is None:
            return self.generator.generate_raw("ほっこり", ["猫"])
        return self.generator.generate_raw(request.genre_label, list(request.keywords))

    def get_provider_name(self) -> str:
        return "Mock Provider"

class LLMProviderFactory:
    """LLM Provider 팩토리"""

    @staticmethod
    def get_provider(settings=None) -> LLMProvider:
        if settings is None:
            from config.settings import get_settings
            settings = get_settings()

        provider_name = settings.AI_PROVIDER.lower()
        sampling = {
            "temperature": settings.GENERATION_TEMPERATURE,
            "top_p": settings.GENERATION_TOP_P,
        }

        # 실제 API Provider 우선 시도
        if provider_name == "gemini" and settings.GEMINI_API_KEY:
            provider = GeminiProvider(
                api_key=settings.GEMINI_API_KEY,
                model=settings.GEMINI_MODEL,
                **sampling
            )
            if provider.is_available():
                return provider
            logger.error("Gemini Provider 생성했으나 사용 불가")

        elif provider_name == "openai" and settings.OPENAI_API_KEY:
            provider = OpenAIProvider(
                api_key=settings.OPENAI_API_KEY,
                model=settings.OPENAI_MODEL,
                max_tokens=settings.OPENAI_MAX_TOKENS,
                **sampling
            )
            if provider.is_available():
                return provider
            logger.error("OpenAI Provider 생성했으나 사용 불가")

        elif provider_name != "mock":
            logger.warning(f"{provider_name} Provider 설정 누락, Mock 사용")

        # 모든 실제 Provider가 실패하면 Mock 사용
        return MockProvider(**sampling)

    @staticmethod
    def get_available_providers(settings=None) -> Dict[str, bool]:
        """사용 가능한 Provider 목록"""
        if settings is None:
            from config.settings import get_settings
            settings = get_settings()
        return settings.get_available_providers()
