"""
환경 설정 관리 (Gemini / OpenAI / Mock)
"""

import os
from typing import List
from pydantic_settings import BaseSettings

DEFAULT_MANDATORY_FOOTER = (
    "ーーーー\n"
    "Fin.\n"
    "最後まで読んでいただき、ありがとうございました。\n"
    "この物語が心に残ったら、コーヒー代のサポートをいただけると励みになります。"
)

DEFAULT_FIXED_TAGS = ["#小説", "#短編小説", "#ショートストーリー", "#物語"]

class Settings(BaseSettings):
    # AI Provider 설정
    AI_PROVIDER: str = os.getenv("AI_PROVIDER", "mock")

    # Gemini 설정
    GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-3-pro-preview")

    # OpenAI 설정
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_MAX_TOKENS: int = int(os.getenv("OPENAI_MAX_TOKENS", "4000"))

    # 생성 파라미터
    GENERATION_TEMPERATURE: float = 0.8
    GENERATION_TOP_P: float = 0.9

    # 본문 푸터 / 고정 태그
    MANDATORY_FOOTER: str = DEFAULT_MANDATORY_FOOTER
    FIXED_TAGS: List[str] = DEFAULT_FIXED_TAGS

    # 로깅 설정
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    class Config:
        env_file = ".env"
        extra = "ignore"  # 추가 환경 변수 무시

    def get_available_providers(self) -> dict:
        """사용 가능한 Provider 목록"""
        return {
            "gemini": bool(self.GEMINI_API_KEY),
            "openai": bool(self.OPENAI_API_KEY),
            "mock": True
        }

    def get_current_provider_info(self) -> dict:
        """현재 Provider 정보"""
        provider = self.AI_PROVIDER.lower()
        if provider == "gemini" and self.GEMINI_API_KEY:
            return {
                "provider": "gemini",
                "model": self.GEMINI_MODEL,
                "status": "configured"
            }
        elif provider == "openai" and self.OPENAI_API_KEY:
            return {
                "provider": "openai",
                "model": self.OPENAI_MODEL,
                "status": "configured"
            }
        else:
            return {
                "provider": "mock",
                "model": "mock_generator",
                "status": "fallback"
            }

    def validate_settings(self) -> list:
        """설정 검증 및 경고 반환"""
        warnings = []
        provider = self.AI_PROVIDER.lower()

        if provider not in ["mock", "gemini", "openai"]:
            warnings.append(f"알 수 없는 AI_PROVIDER: {self.AI_PROVIDER}")

        if provider == "gemini" and not self.GEMINI_API_KEY:
            warnings.append("Gemini 선택되었으나 API 키가 없습니다.")

        if provider == "openai" and not self.OPENAI_API_KEY:
            warnings.append("OpenAI 선택되었으나 API 키가 없습니다.")

        if not 0.0 <= self.GENERATION_TEMPERATURE <= 2.0:
            warnings.append(f"temperature 범위 오류: {self.GENERATION_TEMPERATURE}")

        if not 0.0 < self.GENERATION_TOP_P <= 1.0:
            warnings.append(f"top_p 범위 오류: {self.GENERATION_TOP_P}")

        if not self.MANDATORY_FOOTER.strip():
            warnings.append("MANDATORY_FOOTER가 비어 있습니다.")

        return warnings


_settings = None

def get_settings() -> Settings:
    """설정 싱글톤"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
