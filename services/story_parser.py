"""
생성 API 원문 파서

[TITLE] / [STORY] / [RECOMMENDED_TAGS] / [IMAGE_PROMPT] 마커 줄을 기준으로
원문을 한 번만 순회하며 섹션별 필드로 분배한다.
마커가 없거나 깨진 원문이어도 예외를 던지지 않고 빈 값으로 남긴다.
"""

import logging
import math
import re
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence

from models.response_models import ParsedStory, StoryStats

logger = logging.getLogger(__name__)

class Section(Enum):
    NONE = "none"
    TITLE = "title"
    STORY = "story"
    TAGS = "tags"
    IMAGE_PROMPT = "image_prompt"

SECTION_MARKERS: Dict[str, Section] = {
    "[TITLE]": Section.TITLE,
    "[STORY]": Section.STORY,
    "[RECOMMENDED_TAGS]": Section.TAGS,
    "[IMAGE_PROMPT]": Section.IMAGE_PROMPT,
}

FOOTER_MARKERS = ("コーヒー代", "Fin.", "ーーーー")

TAG_PATTERN = re.compile(r"#[^\s#]+")
TITLE_HASH_PATTERN = re.compile(r"^#\s*")

# 분당 읽는 글자 수
READING_CHARS_PER_MINUTE = 600


def _strip_keyword_hashes(line: str, keywords: Sequence[str]) -> str:
    for keyword in keywords:
        if keyword:
            line = line.replace(f"#{keyword}", keyword)
    return line


def _is_footer_line(line: str) -> bool:
    return any(marker in line for marker in FOOTER_MARKERS)


def parse_story(raw: str, selected_keywords: Sequence[str] = (), mandatory_footer: Optional[str] = None) -> ParsedStory:
    """원문을 ParsedStory로 분해

    mandatory_footer를 생략하면 설정값(MANDATORY_FOOTER)을 사용한다.
    푸터 대체는 마커가 하나 이상 인식된 경우에만 적용한다.
    """
    if not raw or not raw.strip():
        return ParsedStory()

    if mandatory_footer is None:
        from config.settings import get_settings
        mandatory_footer = get_settings().MANDATORY_FOOTER

    section = Section.NONE
    saw_marker = False
    title = ""
    body_lines: List[str] = []
    ai_tags: List[str] = []
    image_prompt_parts: List[str] = []
    footer_lines: List[str] = []

    for line in raw.split("\n"):
        trimmed = line.strip()

        if trimmed in SECTION_MARKERS:
            section = SECTION_MARKERS[trimmed]
            saw_marker = True
            continue

        if section is Section.TITLE:
            if trimmed and not title:
                title = TITLE_HASH_PATTERN.sub("", trimmed)

        elif section is Section.STORY:
            if not trimmed or trimmed == title:
                continue
            clean_line = _strip_keyword_hashes(line, selected_keywords)
            if _is_footer_line(clean_line):
                footer_lines.append(clean_line)
            else:
                body_lines.append(clean_line)

        elif section is Section.TAGS:
            for tag in TAG_PATTERN.findall(trimmed):
                if tag not in ai_tags:
                    ai_tags.append(tag)

        elif section is Section.IMAGE_PROMPT:
            if trimmed:
                image_prompt_parts.append(trimmed)

    if not saw_marker:
        logger.warning("원문에서 섹션 마커를 찾지 못했습니다 (%d자)", len(raw))
        return ParsedStory()

    footer_text = "\n".join(footer_lines).strip()

    return ParsedStory(
        title=title,
        body_lines=body_lines,
        ai_tags=ai_tags,
        image_prompt=" ".join(image_prompt_parts).strip(),
        footer_text=footer_text or mandatory_footer,
    )


def normalize_tag(tag: str) -> str:
    """선두 '#'를 정확히 하나로 맞춘다"""
    return "#" + tag.lstrip("#")


def merge_tags(fixed_tags: Iterable[str], ai_tags: Iterable[str]) -> List[str]:
    """고정 태그 뒤에 AI 추천 태그를 중복 없이 붙인다"""
    combined: List[str] = []
    for tag in fixed_tags:
        if tag not in combined:
            combined.append(tag)
    for tag in ai_tags:
        normalized = normalize_tag(tag)
        if normalized not in combined:
            combined.append(normalized)
    return combined


def compute_stats(story: ParsedStory) -> StoryStats:
    """본문 글자 수와 예상 읽기 시간"""
    char_count = len("".join(story.body_lines))
    return StoryStats(
        char_count=char_count,
        reading_minutes=math.ceil(char_count / READING_CHARS_PER_MINUTE),
    )
