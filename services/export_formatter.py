"""
note 붙여넣기용 내보내기 포맷터 (HTML + 플레인 텍스트)
"""

import html
import re
from typing import List

from models.response_models import ExportPayload, ParsedStory

HEADING_OPEN = "【"
HEADING_CLOSE = "】"

# note가 소제목으로 인식하는 <h2>
HEADING_STYLE = (
    "font-size: 1.5em; font-weight: bold; border-left: 4px solid #333; "
    "padding-left: 10px; margin-top: 2em; margin-bottom: 1em;"
)
FOOTER_STYLE = "text-align: center; color: #78716c;"
PARAGRAPH_BREAK = "<p><br></p>"

_HEADING_OPEN_PATTERN = re.compile(rf"^{HEADING_OPEN}\s*")
_HEADING_CLOSE_PATTERN = re.compile(rf"\s*{HEADING_CLOSE}$")


def is_heading(trimmed: str) -> bool:
    return trimmed.startswith(HEADING_OPEN) and trimmed.endswith(HEADING_CLOSE)


def heading_text(trimmed: str) -> str:
    return _HEADING_CLOSE_PATTERN.sub("", _HEADING_OPEN_PATTERN.sub("", trimmed))


def format_for_export(story: ParsedStory) -> ExportPayload:
    """ParsedStory를 서식 포함 HTML과 플레인 텍스트로 변환"""
    html_parts: List[str] = []
    plain_parts: List[str] = []

    for line in story.body_lines:
        trimmed = line.strip()
        if is_heading(trimmed):
            text = heading_text(trimmed)
            html_parts.append(f'<h2 style="{HEADING_STYLE}">{html.escape(text, quote=False)}</h2>')
            plain_parts.append(f"\n{text}\n")
        elif trimmed == "":
            html_parts.append(PARAGRAPH_BREAK)
            plain_parts.append("\n")
        else:
            html_parts.append(f"<p>{html.escape(line, quote=False)}</p>")
            plain_parts.append(f"{line}\n")

    html_parts.append(PARAGRAPH_BREAK)
    for footer_line in story.footer_text.split("\n"):
        html_parts.append(f'<p style="{FOOTER_STYLE}">{html.escape(footer_line, quote=False)}</p>')

    plain_parts.append(f"\n{story.footer_text}")

    return ExportPayload(rich_markup="".join(html_parts), plain_text="".join(plain_parts))
