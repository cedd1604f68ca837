"""
스토리 생성 서비스
요청 -> 프롬프트 -> Provider 1회 호출 -> 파싱 -> 태그 병합 -> 통계
"""

from typing import List, Optional, Sequence
from dataclasses import dataclass
import logging
import time

from config.settings import Settings, get_settings
from models.request_models import StoryGenerationRequest
from models.response_models import GeneratedStoryResponse
from providers.llm_provider import GenerationError, GenerationRequest, LLMProvider, LLMProviderFactory
from prompt.prompt_manager import PromptManager, get_prompt_manager
from services.story_parser import compute_stats, merge_tags, parse_story
from templates.story_options import get_genre, get_tone

logger = logging.getLogger(__name__)

EMPTY_STORY_NOTICE = "物語を紡ぐことができませんでした。"

@dataclass
class GenerationOutcome:
    """생성 결과 (성공이면 story, 실패면 error)"""
    story: Optional[GeneratedStoryResponse] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

class StoryService:
    """스토리 생성 서비스"""

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        prompt_manager: Optional[PromptManager] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.provider = provider or LLMProviderFactory.get_provider(self.settings)
        self.prompt_manager = prompt_manager or get_prompt_manager()

    def build_generation_request(self, request: StoryGenerationRequest) -> GenerationRequest:
        """장르 / 톤 ID를 라벨로 바꿔 불변 요청으로 고정"""
        genre = get_genre(request.genre)
        tone = get_tone(request.tone)
        return GenerationRequest(
            genre_label=genre["label"] if genre else request.genre,
            keywords=tuple(request.keywords),
            season=request.season.value,
            tone_label=tone["label"] if tone else "自然な",
            length=request.length.value,
        )

    async def generate_story(self, request: StoryGenerationRequest) -> GenerationOutcome:
        generation_request = self.build_generation_request(request)
        prompt = self.prompt_manager.create_story_prompt(generation_request, self.settings.MANDATORY_FOOTER)

        start_time = time.time()
        try:
            raw = await self.provider.generate_text(
                prompt,
                self.prompt_manager.get_system_instruction(),
                request=generation_request,
            )
        except GenerationError as e:
            logger.error(f"스토리 생성 실패 ({self.provider.get_provider_name()}): {e.message}")
            return GenerationOutcome(error=e.message)

        logger.info(
            f"스토리 생성 완료: {generation_request.genre_label} / "
            f"{len(generation_request.keywords)}개 키워드 / {time.time() - start_time:.1f}초"
        )
        return GenerationOutcome(story=self.build_response(raw or EMPTY_STORY_NOTICE, generation_request.keywords))

    def build_response(self, raw: str, keywords: Sequence[str]) -> GeneratedStoryResponse:
        """원문을 파싱해 화면 표시용 응답 구성"""
        story = parse_story(raw, keywords, self.settings.MANDATORY_FOOTER)
        return GeneratedStoryResponse(
            raw=raw,
            story=story,
            all_tags=self.merge_tags(story.ai_tags),
            stats=compute_stats(story),
        )

    def merge_tags(self, ai_tags: List[str]) -> List[str]:
        return merge_tags(self.settings.FIXED_TAGS, ai_tags)
