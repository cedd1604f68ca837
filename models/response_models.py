"""
응답 모델 정의 (파싱 결과 / 내보내기 / 클립보드)
"""

from pydantic import BaseModel, Field
from typing import List, Optional

class ParsedStory(BaseModel):
    title: str = ""
    body_lines: List[str] = Field(default_factory=list)
    ai_tags: List[str] = Field(default_factory=list)
    image_prompt: str = ""
    footer_text: str = ""

class ExportPayload(BaseModel):
    rich_markup: str
    plain_text: str

class StoryStats(BaseModel):
    char_count: int
    reading_minutes: int

class GeneratedStoryResponse(BaseModel):
    raw: str
    story: ParsedStory
    all_tags: List[str]
    stats: StoryStats

class ClipboardCopyResponse(BaseModel):
    method: str = Field(..., description="rich / plain / failed")
    message: str
    payload: Optional[ExportPayload] = None

class ClipboardContents(BaseModel):
    html: Optional[str] = None
    text: Optional[str] = None
