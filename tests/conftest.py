"""
Pytest 설정 및 공통 Fixtures
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock
import sys
import os

# 경로 추가 - 프로젝트 루트 모듈을 import할 수 있도록
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import main
from config.settings import Settings
from providers.llm_provider import MockProvider
from services.clipboard_service import InMemoryClipboard


@pytest.fixture
def client(monkeypatch):
    """FastAPI 테스트 클라이언트 (지연 없는 Mock Provider, 빈 클립보드)"""
    monkeypatch.setattr(main.story_service, "provider", MockProvider(delay=0))
    monkeypatch.setattr(main, "clipboard", InMemoryClipboard())
    return TestClient(main.app)


@pytest.fixture
def test_settings():
    """테스트용 설정"""
    return Settings(
        AI_PROVIDER="mock",
        MANDATORY_FOOTER="ーーーー\nFin.",
        FIXED_TAGS=["#小説", "#物語"],
    )


@pytest.fixture
def fake_provider():
    """원문을 그대로 돌려주는 Provider"""
    provider = MagicMock()
    provider.generate_text = AsyncMock()
    provider.get_provider_name.return_value = "Fake Provider"
    return provider


@pytest.fixture
def sample_raw_response():
    """마커 형식이 갖춰진 생성 원문"""
    return "\n".join([
        "[TITLE]",
        "# 夕焼けと猫",
        "",
        "[STORY]",
        "夕焼けと猫",
        "【 はじまり 】",
        "",
        "今日は#猫と#夕焼けを見た。",
        "",
        "  風が少しだけ冷たかった。",
        "【 おわり 】",
        "それは始まりだった。",
        "ーーーー",
        "Fin.",
        "この物語が気に入ったら、コーヒー代をいただけると嬉しいです。",
        "",
        "[IMAGE_PROMPT]",
        "A soft pastel illustration of a cat",
        "  watching the sunset  ",
        "",
        "[RECOMMENDED_TAGS]",
        "#猫 #不思議な話 #猫",
        "#夕焼け",
    ])


@pytest.fixture
def sample_story_request():
    """샘플 스토리 생성 요청"""
    return {
        "genre": "heartwarming",
        "keywords": ["猫", "夕焼け"],
        "season": "autumn",
        "tone": "gentle",
        "length": "short"
    }
