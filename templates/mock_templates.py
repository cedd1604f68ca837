"""
Mock 생성 응답 템플릿
실제 API와 같은 마커 형식([TITLE] / [STORY] / [IMAGE_PROMPT] / [RECOMMENDED_TAGS])의 원문을 만든다
"""

import random
from typing import List, Optional

HEADINGS = [
    ["はじまりの朝", "すれ違う午後", "ほどける夕暮れ", "灯りのともる夜"],
    ["扉の向こう", "小さな違和感", "こぼれた本音", "それから"],
]

PARAGRAPHS = [
    "いつもと同じ道なのに、{keyword}がそこにあるだけで景色は少し違って見えた。",
    "胸の奥で、言葉にならない何かが静かに揺れていた。",
    "{keyword}のことを考えると、なぜか遠い日の匂いがよみがえる。",
    "風がやんだ。世界がほんの一瞬、息をひそめたようだった。",
    "答えはきっと、最初からすぐそばにあったのだろう。",
]

MOCK_FOOTER = "ーーーー\nFin.\n最後まで読んでいただき、ありがとうございました。"

class MockStoryGenerator:
    """마커 형식 원문 생성기"""

    def __init__(self, seed: Optional[int] = None):
        self.rng = random.Random(seed)

    def generate_raw(self, genre_label: str, keywords: List[str]) -> str:
        keywords = keywords or ["物語"]
        headings = self.rng.choice(HEADINGS)
        main_keyword = keywords[0]

        lines = ["[TITLE]", f"{main_keyword}と、{genre_label}のひととき", "", "[STORY]"]
        for index, heading in enumerate(headings):
            keyword = keywords[index % len(keywords)]
            lines.append(f"【 {heading} 】")
            lines.append("")
            for template in self.rng.sample(PARAGRAPHS, 2):
                lines.append(template.format(keyword=keyword))
                lines.append("")
        lines.extend(MOCK_FOOTER.split("\n"))
        lines.extend([
            "",
            "[IMAGE_PROMPT]",
            f"A soft pastel illustration of a quiet scene with {len(keywords)} gentle motifs,",
            "warm light, watercolor texture",
            "",
            "[RECOMMENDED_TAGS]",
            " ".join(f"#{keyword}" for keyword in keywords[:3]) + f" #{genre_label} #毎日note",
        ])
        return "\n".join(lines)
