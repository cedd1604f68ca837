"""
내보내기 포맷터 단위 테스트
"""
import pytest
from html.parser import HTMLParser

from models.response_models import ParsedStory
from services.export_formatter import (
    FOOTER_STYLE, HEADING_STYLE, format_for_export, heading_text, is_heading
)
from services.story_parser import parse_story


@pytest.mark.unit
class TestHeadingDetection:
    """【】 소제목 판정"""

    def test_bracketed_line_is_heading(self):
        assert is_heading("【 朝 】")
        assert is_heading("【朝】")

    def test_partial_brackets_are_not_headings(self):
        assert not is_heading("【 朝")
        assert not is_heading("朝 】")
        assert not is_heading("それは【朝】だった")

    def test_heading_text_strips_brackets_and_spaces(self):
        assert heading_text("【 朝 】") == "朝"
        assert heading_text("【　夜の駅　】") == "夜の駅"


@pytest.mark.unit
class TestFormatForExport:
    """HTML / 플레인 텍스트 변환"""

    def test_plain_text_layout(self):
        story = ParsedStory(body_lines=["【 朝 】", "", "それは始まりだった。"], footer_text="Fin.")
        payload = format_for_export(story)

        assert payload.plain_text == "\n朝\n\nそれは始まりだった。\n\nFin."

    def test_rich_markup_layout(self):
        story = ParsedStory(body_lines=["【 朝 】", "", "それは始まりだった。"], footer_text="Fin.")
        payload = format_for_export(story)

        assert payload.rich_markup == (
            f'<h2 style="{HEADING_STYLE}">朝</h2>'
            "<p><br></p>"
            "<p>それは始まりだった。</p>"
            "<p><br></p>"
            f'<p style="{FOOTER_STYLE}">Fin.</p>'
        )

    def test_heading_has_left_border(self):
        payload = format_for_export(ParsedStory(body_lines=["【 見出し 】"], footer_text="Fin."))

        assert "border-left" in payload.rich_markup
        assert "<h2" in payload.rich_markup

    def test_paragraph_keeps_original_line(self):
        story = ParsedStory(body_lines=["  字下げの段落"], footer_text="Fin.")
        payload = format_for_export(story)

        assert "<p>  字下げの段落</p>" in payload.rich_markup
        assert payload.plain_text.startswith("  字下げの段落\n")

    def test_multiline_footer_centered_per_line(self):
        story = ParsedStory(body_lines=["本文。"], footer_text="ーーーー\nFin.")
        payload = format_for_export(story)

        assert payload.rich_markup.count(f'<p style="{FOOTER_STYLE}">') == 2
        assert payload.rich_markup.endswith(
            f'<p style="{FOOTER_STYLE}">ーーーー</p><p style="{FOOTER_STYLE}">Fin.</p>'
        )
        assert payload.plain_text == "本文。\n\nーーーー\nFin."

    def test_parsed_story_keeps_every_visible_line(self, sample_raw_response):
        story = parse_story(sample_raw_response, ["猫", "夕焼け"], "Fin.")
        payload = format_for_export(story)

        for line in story.body_lines:
            trimmed = line.strip()
            visible = heading_text(trimmed) if is_heading(trimmed) else line
            assert visible in payload.rich_markup
            assert visible in payload.plain_text
        assert story.footer_text in payload.plain_text

    def test_special_characters_survive_rich_markup(self):
        story = parse_story(
            "[TITLE]\nt\n[STORY]\n【 A<B & C 】\n彼は「A<B」と書いた。\nR&amp;D部\n1 > 0\n",
            [], "Fin. <end>"
        )
        payload = format_for_export(story)

        visible = _visible_text(payload.rich_markup)
        assert "A<B & C" in visible
        assert "彼は「A<B」と書いた。" in visible
        assert "R&amp;D部" in visible
        assert "1 > 0" in visible
        assert "Fin. <end>" in visible
        assert "彼は「A<B」と書いた。\n" in payload.plain_text
        assert "R&amp;D部\n" in payload.plain_text


class _TextCollector(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.chunks = []

    def handle_data(self, data):
        self.chunks.append(data)


def _visible_text(markup: str) -> str:
    collector = _TextCollector()
    collector.feed(markup)
    collector.close()
    return "".join(collector.chunks)
