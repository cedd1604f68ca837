"""
프롬프트 관리 - 스토리 생성 프롬프트 / 시스템 지시문
prompt/ 디렉터리에 story_generation.txt, system_instruction.txt 가 있으면 기본값 대신 사용
"""

from typing import Dict, Optional
from pathlib import Path
import logging

from templates.story_options import SEASON_OPTIONS, Season, Length

logger = logging.getLogger(__name__)

SEASON_ANYTIME_TEXT = "特定の季節に縛られない、いつかの風景"

LENGTH_TEXT: Dict[str, str] = {
    Length.SHORT.value: "400文字程度。一瞬のきらめきを切り取ったショートストーリー",
    Length.STANDARD.value: "1000文字程度。起承転結があり、深く心に染み入る物語",
    Length.LONG.value: "2000文字程度。登場人物の背景や風景を緻密に描いた重厚な作品",
}

DEFAULT_SYSTEM_INSTRUCTION = (
    "あなたは物語で人の心を癒やす作家です。スマホでの読みやすさを最優先し、"
    "場面展開には必ず【】の見出しを使い、文章内での記号強調は一切行わないでください。"
)

DEFAULT_STORY_TEMPLATE = """
あなたは、noteで圧倒的な支持を得ている、優しくて叙情的な物語を紡ぐストーリーテラーです。
「〜です。〜ます。」は一切使わず、「〜だ。〜だった。〜だろう。」といった常体（だ・である調）を使い、エッセイや短編小説のような美しい文体で綴ってください。

【スマホ・note閲覧の最適化ルール】
1. **1段落は2行以内**: スマホの狭い画面で「文章の壁」を作らないため、1つの段落は最大でも2行までにしてください。
2. **改行の徹底**: 意味の区切り、または1〜2文ごとに必ず「空行」を1行入れてください。
3. **小見出しの挿入**: 物語の展開（起・承・転・結）に合わせて、必ず「【 見出しタイトル 】」という形式で小見出しを3〜4箇所挿入してください。

【禁止事項：重要】
1. **キーワードの強調禁止**: 指定されたキーワード（{keywords}）を使う際、**絶対に「#」を付けたり、「*」などの記号で強調したりしないでください。** 文章の中に自然な日本語として溶け込ませてください（小見出しの【】は例外とします）。
2. **箇条書き禁止**: 物語の途中で箇条書き（・や1.など）を使わないでください。

【設定】
・ジャンル：{genre}
・季節感：{season}
・全体の雰囲気：{tone}
・長さの目安：{length}

【出力フォーマット】
[TITLE]
（タイトル）

[STORY]
（物語。場面の切り替わりには必ず 【 見出し 】 を入れること。キーワードに#は付けない。スマホ向けに頻繁に空行を入れる）

（物語の最後に、以下のメッセージを必ず含めてください）
{footer}

[IMAGE_PROMPT]
（画像生成用英語プロンプト。冒頭に "A soft pastel illustration of..." を付与）

[RECOMMENDED_TAGS]
（物語に合うハッシュタグを5つ程度。例：#猫 #不思議な話）
"""

class PromptManager:
    """생성 프롬프트 관리"""

    def __init__(self, prompts_dir: Optional[Path] = None):
        self.prompts_dir = prompts_dir or Path(__file__).parent
        self.story_template = self._load_prompt("story_generation.txt", DEFAULT_STORY_TEMPLATE)
        self.system_instruction = self._load_prompt("system_instruction.txt", DEFAULT_SYSTEM_INSTRUCTION)

    def _load_prompt(self, file_name: str, default: str) -> str:
        file_path = self.prompts_dir / file_name
        try:
            return self._read_prompt_file(file_path)
        except FileNotFoundError:
            return default

    def _read_prompt_file(self, file_path: Path) -> str:
        """프롬프트 파일 읽기"""
        if file_path.exists():
            with open(file_path, 'r', encoding='utf-8') as f:
                logger.info(f"프롬프트 파일 로딩: {file_path.name}")
                return f.read().strip()
        else:
            raise FileNotFoundError(f"프롬프트 파일 없음: {file_path}")

    def reload_prompts(self):
        """프롬프트 파일 다시 로딩"""
        self.story_template = self._load_prompt("story_generation.txt", DEFAULT_STORY_TEMPLATE)
        self.system_instruction = self._load_prompt("system_instruction.txt", DEFAULT_SYSTEM_INSTRUCTION)

    def get_system_instruction(self) -> str:
        return self.system_instruction

    def season_text(self, season: str) -> str:
        if season == Season.ALL.value:
            return SEASON_ANYTIME_TEXT
        label = next((s["label"] for s in SEASON_OPTIONS if s["id"] == season), season)
        return f"{label}の特有の空気感や匂い"

    def length_text(self, length: str) -> str:
        return LENGTH_TEXT.get(length, LENGTH_TEXT[Length.STANDARD.value])

    def create_story_prompt(self, request, mandatory_footer: str) -> str:
        """GenerationRequest -> 생성 프롬프트 문자열"""
        values = {
            "keywords": "、".join(request.keywords),
            "genre": request.genre_label,
            "season": self.season_text(request.season),
            "tone": request.tone_label,
            "length": self.length_text(request.length),
            "footer": mandatory_footer,
        }
        # 이름 있는 자리표시자만 치환 (그 밖의 중괄호는 그대로)
        prompt = self.story_template
        for name, value in values.items():
            prompt = prompt.replace("{" + name + "}", value)
        return prompt

_prompt_manager = None

def get_prompt_manager() -> PromptManager:
    """프롬프트 매니저 싱글톤"""
    global _prompt_manager
    if _prompt_manager is None:
        _prompt_manager = PromptManager()
    return _prompt_manager
