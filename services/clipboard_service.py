"""
클립보드 내보내기 (서식 포함 쓰기 -> 실패 시 플레인 텍스트 폴백)
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from models.response_models import ExportPayload, ParsedStory
from services.export_formatter import format_for_export

logger = logging.getLogger(__name__)

RICH_COPY_MESSAGE = "本文（見出し・Fin込）をコピーしました！\nnoteに貼り付けてください。"
PLAIN_COPY_MESSAGE = "プレーンテキストとしてコピーしました。"
COPY_FAILED_MESSAGE = "クリップボードへのコピーに失敗しました。"

TEXT_COPY_MESSAGES = {
    "title": "タイトルをコピーしました",
    "image_prompt": "画像プロンプトをコピーしました",
    "tags": "全てのハッシュタグをコピーしました",
}

class ClipboardError(Exception):
    """클립보드 쓰기 실패"""

class CopyMethod(str, Enum):
    RICH = "rich"
    PLAIN = "plain"
    FAILED = "failed"

@dataclass
class ClipboardResult:
    """복사 결과"""
    method: CopyMethod
    message: str
    payload: Optional[ExportPayload] = None

    @property
    def succeeded(self) -> bool:
        return self.method is not CopyMethod.FAILED

class ClipboardWriter(ABC):
    @abstractmethod
    async def write_rich(self, html: str, plain: str) -> None:
        """HTML + 플레인 텍스트 동시 쓰기"""
        pass

    @abstractmethod
    async def write_text(self, text: str) -> None:
        pass

class InMemoryClipboard(ClipboardWriter):
    """프로세스 내 클립보드 (마지막 쓰기만 보관)"""

    def __init__(self, supports_rich: bool = True):
        self.supports_rich = supports_rich
        self.html: Optional[str] = None
        self.text: Optional[str] = None

    async def write_rich(self, html: str, plain: str) -> None:
        if not self.supports_rich:
            raise ClipboardError("서식 포함 클립보드를 지원하지 않습니다.")
        self.html = html
        self.text = plain

    async def write_text(self, text: str) -> None:
        self.html = None
        self.text = text


async def copy_story(story: ParsedStory, writer: ClipboardWriter) -> ClipboardResult:
    """본문 복사: 서식 포함 쓰기를 시도하고 실패하면 플레인 텍스트로 폴백"""
    payload = format_for_export(story)

    try:
        await writer.write_rich(payload.rich_markup, payload.plain_text)
        return ClipboardResult(method=CopyMethod.RICH, message=RICH_COPY_MESSAGE, payload=payload)
    except Exception as e:
        logger.warning(f"서식 포함 복사 실패, 플레인 텍스트로 폴백: {e}")

    try:
        await writer.write_text(payload.plain_text)
        return ClipboardResult(method=CopyMethod.PLAIN, message=PLAIN_COPY_MESSAGE, payload=payload)
    except Exception as e:
        logger.error(f"플레인 텍스트 복사 실패: {e}", exc_info=True)
        return ClipboardResult(method=CopyMethod.FAILED, message=COPY_FAILED_MESSAGE, payload=payload)


async def copy_text(kind: str, text: str, writer: ClipboardWriter) -> ClipboardResult:
    """제목 / 이미지 프롬프트 / 태그 단일 필드 복사"""
    try:
        await writer.write_text(text)
        return ClipboardResult(method=CopyMethod.PLAIN, message=TEXT_COPY_MESSAGES.get(kind, PLAIN_COPY_MESSAGE))
    except Exception as e:
        logger.error(f"텍스트 복사 실패 ({kind}): {e}", exc_info=True)
        return ClipboardResult(method=CopyMethod.FAILED, message=COPY_FAILED_MESSAGE)
