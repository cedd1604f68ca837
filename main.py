from fastapi import FastAPI, HTTPException, Request, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging
from datetime import datetime

from config.settings import get_settings
from models.request_models import StoryGenerationRequest, StoryParseRequest, CopyTextRequest
from models.response_models import (
    ClipboardContents, ClipboardCopyResponse, ExportPayload,
    GeneratedStoryResponse, ParsedStory
)
from providers.llm_provider import LLMProviderFactory
from services.clipboard_service import ClipboardResult, InMemoryClipboard, copy_story, copy_text
from services.export_formatter import format_for_export
from services.story_service import StoryService
from templates.story_options import (
    GENRE_DATA, LENGTH_OPTIONS, SEASON_OPTIONS, TONE_OPTIONS,
    get_genre, pick_random_keywords, search_keywords
)

settings = get_settings()

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

for warning in settings.validate_settings():
    logger.warning(f"설정 경고: {warning}")

app = FastAPI(
    title="Note Story Server",
    description="note 投稿向けショートストーリー生成 API",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

story_service = StoryService(settings=settings)
clipboard = InMemoryClipboard()


def _clipboard_response(result: ClipboardResult) -> ClipboardCopyResponse:
    return ClipboardCopyResponse(method=result.method.value, message=result.message, payload=result.payload)


@app.get("/")
async def root():
    """서버 정보"""
    return {
        "message": "Note Story Server",
        "status": "healthy",
        "provider": story_service.provider.get_provider_name(),
        "timestamp": datetime.now().isoformat(),
        "version": "1.0.0",
        "endpoints": [
            "options", "generate-story", "parse-story",
            "export-story", "copy-story", "copy-text", "clipboard", "health"
        ]
    }

@app.get("/health")
async def health_check():
    """헬스 체크"""
    return {
        "status": "healthy",
        "current_provider": story_service.provider.get_provider_name(),
        "available_providers": LLMProviderFactory.get_available_providers(settings),
        "provider_info": settings.get_current_provider_info(),
        "timestamp": datetime.now().isoformat()
    }

@app.get("/options")
async def get_options():
    """폼 선택지"""
    return {
        "genres": list(GENRE_DATA.values()),
        "tones": TONE_OPTIONS,
        "seasons": SEASON_OPTIONS,
        "lengths": LENGTH_OPTIONS,
        "fixed_tags": settings.FIXED_TAGS,
    }

@app.get("/genres/{genre_id}/keywords")
async def get_genre_keywords(genre_id: str, q: Optional[str] = Query(None, description="검색어")):
    """장르 키워드 (검색어가 있으면 부분 일치 필터)"""
    if get_genre(genre_id) is None:
        raise HTTPException(status_code=404, detail=f"알 수 없는 장르: {genre_id}")
    return {"genre": genre_id, "keywords": search_keywords(genre_id, q or "")}

@app.get("/genres/{genre_id}/random-keywords")
async def get_random_keywords(genre_id: str, count: int = Query(5, ge=1, le=20)):
    """おまかせ 키워드"""
    if get_genre(genre_id) is None:
        raise HTTPException(status_code=404, detail=f"알 수 없는 장르: {genre_id}")
    return {"genre": genre_id, "keywords": pick_random_keywords(genre_id, count)}

@app.post("/generate-story", response_model=GeneratedStoryResponse)
async def generate_story(request: StoryGenerationRequest):
    """스토리 생성 (실패 시 부분 결과 없이 502)"""
    outcome = await story_service.generate_story(request)
    if not outcome.ok:
        raise HTTPException(status_code=502, detail=outcome.error)
    return outcome.story

@app.post("/parse-story", response_model=GeneratedStoryResponse)
async def parse_story(request: StoryParseRequest):
    """원문 재파싱 (키워드 변경 시)"""
    return story_service.build_response(request.raw, request.keywords)

@app.post("/export-story", response_model=ExportPayload)
async def export_story(story: ParsedStory):
    """본문 내보내기 페이로드"""
    return format_for_export(story)

@app.post("/copy-story", response_model=ClipboardCopyResponse)
async def copy_story_to_clipboard(story: ParsedStory):
    """본문 복사 (서식 포함 -> 플레인 텍스트 폴백)"""
    result = await copy_story(story, clipboard)
    return _clipboard_response(result)

@app.post("/copy-text", response_model=ClipboardCopyResponse)
async def copy_text_to_clipboard(request: CopyTextRequest):
    """제목 / 이미지 프롬프트 / 태그 복사"""
    result = await copy_text(request.kind, request.text, clipboard)
    return _clipboard_response(result)

@app.get("/clipboard", response_model=ClipboardContents)
async def get_clipboard():
    """마지막 클립보드 내용"""
    return ClipboardContents(html=clipboard.html, text=clipboard.text)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "status_code": exc.status_code,
            "timestamp": datetime.now().isoformat()
        }
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"처리되지 않은 오류: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "サーバーでエラーが発生しました。",
            "status_code": 500,
            "timestamp": datetime.now().isoformat()
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
