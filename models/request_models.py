"""
요청 모델 정의 (브라우저 폼 DTO)
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Literal
from templates.story_options import Season, Length, GENRE_DATA, TONE_OPTIONS

class StoryGenerationRequest(BaseModel):
    genre: str = Field("heartwarming", description="장르 ID")
    keywords: List[str] = Field(..., min_length=1, description="선택 키워드 (순서 유지, 중복 불가)")
    season: Season = Field(Season.ALL, description="계절감")
    tone: str = Field("gentle", description="톤 ID")
    length: Length = Field(Length.STANDARD, description="길이")

    @field_validator("genre")
    @classmethod
    def check_genre(cls, value: str) -> str:
        if value not in GENRE_DATA:
            raise ValueError(f"알 수 없는 장르: {value}")
        return value

    @field_validator("tone")
    @classmethod
    def check_tone(cls, value: str) -> str:
        if value not in {tone["id"] for tone in TONE_OPTIONS}:
            raise ValueError(f"알 수 없는 톤: {value}")
        return value

    @field_validator("keywords")
    @classmethod
    def check_keywords(cls, value: List[str]) -> List[str]:
        if len(set(value)) != len(value):
            raise ValueError("키워드가 중복되었습니다.")
        if any(not keyword.strip() for keyword in value):
            raise ValueError("빈 키워드는 사용할 수 없습니다.")
        return value

class StoryParseRequest(BaseModel):
    raw: str = Field(..., description="생성 API 원문 텍스트")
    keywords: List[str] = Field(default_factory=list, description="요청 시 사용한 키워드")

class CopyTextRequest(BaseModel):
    kind: Literal["title", "image_prompt", "tags"] = Field(..., description="복사 대상")
    text: str = Field(..., description="복사할 텍스트")
