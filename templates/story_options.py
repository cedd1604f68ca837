"""
폼 선택지 카탈로그: 장르 / 키워드 카테고리 / 톤 / 계절 / 길이
"""

import random
from typing import Dict, List, Any, Optional
from enum import Enum

class Season(str, Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"
    ALL = "all"

class Length(str, Enum):
    SHORT = "short"
    STANDARD = "standard"
    LONG = "long"

SEASON_OPTIONS = [
    {"id": Season.SPRING.value, "label": "春", "icon": "🌸"},
    {"id": Season.SUMMER.value, "label": "夏", "icon": "🌻"},
    {"id": Season.AUTUMN.value, "label": "秋", "icon": "🍂"},
    {"id": Season.WINTER.value, "label": "冬", "icon": "❄️"},
    {"id": Season.ALL.value, "label": "通年", "icon": "🌈"},
]

LENGTH_OPTIONS = [
    {"id": Length.SHORT.value, "label": "短め", "desc": "400字"},
    {"id": Length.STANDARD.value, "label": "標準", "desc": "1000字"},
    {"id": Length.LONG.value, "label": "長め", "desc": "2000字"},
]

TONE_OPTIONS = [
    {"id": "gentle", "label": "優しい", "icon": "🕊️"},
    {"id": "nostalgic", "label": "懐かしい", "icon": "📷"},
    {"id": "emotional", "label": "エモい", "icon": "🌙"},
    {"id": "fantastic", "label": "幻想的", "icon": "✨"},
    {"id": "realistic", "label": "リアル", "icon": "🏙️"},
    {"id": "dark", "label": "ダーク", "icon": "🌑"},
    {"id": "logical", "label": "論理的", "icon": "🧩"},
    {"id": "inspiring", "label": "前向き", "icon": "🌅"},
    {"id": "humorous", "label": "ユーモラス", "icon": "😄"},
    {"id": "poetic", "label": "詩的", "icon": "🪶"},
    {"id": "lonely", "label": "切ない", "icon": "🍃"},
    {"id": "sharp", "label": "鋭い", "icon": "🗡️"},
    {"id": "mysterious", "label": "謎めいた", "icon": "🔮"},
    {"id": "peaceful", "label": "穏やか", "icon": "☕"},
    {"id": "passionate", "label": "情熱的", "icon": "🔥"},
    {"id": "urban", "label": "都会的", "icon": "🌆"},
    {"id": "surreal", "label": "シュール", "icon": "🫧"},
    {"id": "philosophical", "label": "哲学的", "icon": "📚"},
]

def _category(category_id: str, label: str, icon: str, keywords: List[str]) -> Dict[str, Any]:
    return {"id": category_id, "label": label, "icon": icon, "keywords": keywords}

GENRE_DATA: Dict[str, Dict[str, Any]] = {
    "heartwarming": {
        "id": "heartwarming", "label": "ほっこり", "icon": "☕",
        "description": "日常の小さな幸せを描く物語",
        "categories": [
            _category("place", "場所", "🏠", ["喫茶店", "商店街", "縁側", "古本屋", "駅のホーム", "公園"]),
            _category("thing", "モノ", "🧸", ["手紙", "マフラー", "湯気", "古い写真", "傘", "おにぎり"]),
            _category("creature", "生き物", "🐈", ["猫", "柴犬", "金魚", "すずめ"]),
        ],
    },
    "romance": {
        "id": "romance", "label": "恋愛", "icon": "💌",
        "description": "すれ違いと再会の物語",
        "categories": [
            _category("scene", "場面", "🌆", ["終電", "夕焼け", "観覧車", "図書館", "雨宿り"]),
            _category("feeling", "気持ち", "💭", ["片想い", "告白", "約束", "初恋", "さよなら"]),
        ],
    },
    "mystery": {
        "id": "mystery", "label": "ミステリー", "icon": "🔍",
        "description": "小さな謎と静かな真相",
        "categories": [
            _category("clue", "手がかり", "🗝️", ["鍵", "暗号", "止まった時計", "足跡", "古い地図"]),
            _category("place", "舞台", "🏚️", ["洋館", "夜行列車", "灯台", "旧校舎"]),
        ],
    },
    "scifi": {
        "id": "scifi", "label": "SF", "icon": "🚀",
        "description": "少し先の未来の物語",
        "categories": [
            _category("tech", "技術", "🤖", ["アンドロイド", "タイムマシン", "人工知能", "宇宙船"]),
            _category("world", "世界", "🌌", ["月面都市", "火星", "仮想現実", "星の海"]),
        ],
    },
    "fantasy": {
        "id": "fantasy", "label": "ファンタジー", "icon": "🧚",
        "description": "不思議が当たり前にある世界",
        "categories": [
            _category("being", "存在", "🐉", ["魔法使い", "ドラゴン", "妖精", "精霊"]),
            _category("item", "道具", "🪄", ["魔法の杖", "古い本", "星のかけら", "銀の鈴"]),
        ],
    },
    "horror": {
        "id": "horror", "label": "ホラー", "icon": "👻",
        "description": "背筋が少し冷える物語",
        "categories": [
            _category("place", "場所", "🏚️", ["廃校", "トンネル", "神社", "空き家"]),
            _category("sign", "気配", "🕯️", ["足音", "鏡", "人形", "ノック"]),
        ],
    },
    "essay": {
        "id": "essay", "label": "エッセイ", "icon": "📝",
        "description": "日々の気づきを綴る",
        "categories": [
            _category("daily", "日常", "🌤️", ["朝の散歩", "コーヒー", "通勤電車", "日曜日"]),
            _category("thought", "思索", "💭", ["孤独", "習慣", "休息", "言葉"]),
        ],
    },
    "business": {
        "id": "business", "label": "ビジネス", "icon": "💼",
        "description": "働く人の背中を押す物語",
        "categories": [
            _category("work", "仕事", "📊", ["会議", "プレゼン", "転職", "締め切り"]),
            _category("people", "人", "🤝", ["上司", "同期", "後輩", "取引先"]),
        ],
    },
    "gourmet": {
        "id": "gourmet", "label": "グルメ", "icon": "🍜",
        "description": "美味しいものと人の物語",
        "categories": [
            _category("food", "料理", "🍳", ["ラーメン", "卵焼き", "カレー", "味噌汁", "パン"]),
            _category("shop", "お店", "🏮", ["屋台", "定食屋", "パン屋", "老舗"]),
        ],
    },
    "travel": {
        "id": "travel", "label": "旅", "icon": "🧳",
        "description": "知らない街を歩く物語",
        "categories": [
            _category("destination", "行き先", "🗺️", ["海辺の町", "温泉街", "ローカル線", "離島"]),
            _category("moment", "瞬間", "📸", ["車窓", "夜明け", "絵葉書", "道草"]),
        ],
    },
    "history": {
        "id": "history", "label": "歴史", "icon": "🏯",
        "description": "時代を生きた人々の物語",
        "categories": [
            _category("era", "時代", "📜", ["江戸", "大正", "昭和", "戦国"]),
            _category("person", "人物", "👘", ["武士", "職人", "商人", "絵師"]),
        ],
    },
    "comedy": {
        "id": "comedy", "label": "コメディ", "icon": "🤣",
        "description": "思わず笑ってしまう物語",
        "categories": [
            _category("trouble", "ハプニング", "💥", ["寝坊", "勘違い", "迷子", "落とし物"]),
            _category("character", "人物", "🤡", ["お調子者", "頑固な祖父", "しっかり者の妹"]),
        ],
    },
}


def get_genre(genre_id: str) -> Optional[Dict[str, Any]]:
    return GENRE_DATA.get(genre_id)


def get_tone(tone_id: str) -> Optional[Dict[str, Any]]:
    return next((tone for tone in TONE_OPTIONS if tone["id"] == tone_id), None)


def get_genre_keywords(genre_id: str) -> List[str]:
    """장르의 전체 키워드 (카테고리 순서 유지)"""
    genre = GENRE_DATA.get(genre_id)
    if genre is None:
        return []
    return [keyword for category in genre["categories"] for keyword in category["keywords"]]


def search_keywords(genre_id: str, term: str = "") -> List[str]:
    """부분 문자열 키워드 검색"""
    keywords = get_genre_keywords(genre_id)
    if not term:
        return keywords
    return [keyword for keyword in keywords if term in keyword]


def pick_random_keywords(genre_id: str, count: int = 5, rng: Optional[random.Random] = None) -> List[str]:
    """おまかせ: 장르 키워드 중 무작위 선택"""
    keywords = get_genre_keywords(genre_id)
    rng = rng or random
    return rng.sample(keywords, min(count, len(keywords)))
