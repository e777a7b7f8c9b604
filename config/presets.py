"""
Built-in Presets va Indicator Symbol Sets.

- BUILT_IN_PRESETS: Cac CountingConfig di kem ung dung (default, llm-context, ...)
- INDICATOR_SYMBOL_SETS: Cac bo 7 symbols tu nho den lon

Luu tru preset do user tao KHONG nam o day (ngoai pham vi indexer).
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from config.counting_config import CountingConfig, CountMode, Threshold


@dataclass(frozen=True)
class IndicatorSymbolSet:
    """Mot bo symbols cho thresholds, sap xep tu nho den lon."""

    name: str
    description: str
    detail: str
    symbols: Tuple[str, ...]


def _symbol_set(name: str, description: str, detail: str, symbols: str) -> IndicatorSymbolSet:
    return IndicatorSymbolSet(
        name=name,
        description=description,
        detail=detail,
        symbols=tuple(symbols.split()),
    )


_SYMBOL_SETS: List[IndicatorSymbolSet] = [
    _symbol_set(
        "Colored Circles",
        "Color-coded circles ⚪ 🔵 🟢 🟡 🟠 🔴 ⛔",
        "Visual progression from white to red circles, ending with stop sign",
        "⚪ 🔵 🟢 🟡 🟠 🔴 ⛔",
    ),
    _symbol_set(
        "Emoji Faces",
        "Emotion progression 😀 🙂 😐 🙁 😟 😰 🤯",
        "From happy to overwhelmed expressions",
        "😀 🙂 😐 🙁 😟 😰 🤯",
    ),
    _symbol_set(
        "Documentation Icons",
        "Document-themed icons 📝 📄 📑 📚 📔 📙 📘",
        "Visual progression of document sizes and formats",
        "📝 📄 📑 📚 📔 📙 📘",
    ),
    _symbol_set(
        "Numbers",
        "Simple numeric indicators 1 2 3 4 5 6 7",
        "Clean, minimalist numeric badges showing size category",
        "1 2 3 4 5 6 7",
    ),
    _symbol_set(
        "ASCII Blocks",
        "Block height indicators ▁ ▂ ▃ ▄ ▅ ▆ ▇",
        "Visual progression using block characters of increasing height",
        "▁ ▂ ▃ ▄ ▅ ▆ ▇",
    ),
    _symbol_set(
        "Weather",
        "Weather condition icons ☀️ 🌤️ ⛅ 🌥️ ☁️ 🌧️ ⛈️",
        "From clear skies to thunderstorms based on icon complexity",
        "☀️ 🌤️ ⛅ 🌥️ ☁️ 🌧️ ⛈️",
    ),
    _symbol_set(
        "Food",
        "Food portion sizes 🥜 🍪 🍔 🍕 🍱 🎂 🍽️",
        "From snacks to feasts based on file size",
        "🥜 🍪 🍔 🍕 🍱 🎂 🍽️",
    ),
    _symbol_set(
        "Animals",
        "Animal size progression 🐜 🐁 🐈 🐕 🦊 🐎 🐘",
        "From tiny creatures to massive beasts",
        "🐜 🐁 🐈 🐕 🦊 🐎 🐘",
    ),
    _symbol_set(
        "Space",
        "Cosmic size scale ⚛️ 🔬 🛰️ 🌎 🪐 ☀️ 🌌",
        "From atoms to galaxies based on magnitude",
        "⚛️ 🔬 🛰️ 🌎 🪐 ☀️ 🌌",
    ),
    _symbol_set(
        "Mood",
        "Developer emotions 🥰 😊 🤔 😐 😟 😰 🤯",
        "How a developer might feel when opening files of different sizes",
        "🥰 😊 🤔 😐 😟 😰 🤯",
    ),
    _symbol_set(
        "Circular Fill Progression",
        "Empty to full circle progression ○ ◔ ◐ ◑ ◒ ◓ ●",
        "Gradual fill of a circle symbol representing level progression",
        "○ ◔ ◐ ◑ ◒ ◓ ●",
    ),
    _symbol_set(
        "Vertical Bar Fill",
        "Vertical bar fill levels ▏ ▎ ▍ ▌ ▋ ▊ ▉",
        "Bars with increasing fill from minimal to nearly full",
        "▏ ▎ ▍ ▌ ▋ ▊ ▉",
    ),
    _symbol_set(
        "Moon Phases",
        "Moon phase progression 🌑 🌒 🌓 🌔 🌕 🌖 🌗",
        "From new moon towards full and waning",
        "🌑 🌒 🌓 🌔 🌕 🌖 🌗",
    ),
    _symbol_set(
        "Clock Faces",
        "Clock hours 🕐 🕑 🕒 🕓 🕔 🕕 🕖",
        "Time spent reading grows with the hour",
        "🕐 🕑 🕒 🕓 🕔 🕕 🕖",
    ),
    _symbol_set(
        "Planetary Symbols",
        "Planet symbols ☿ ♀ ♁ ♂ ♃ ♄ ♅",
        "Planets ordered outward from the sun",
        "☿ ♀ ♁ ♂ ♃ ♄ ♅",
    ),
    _symbol_set(
        "Roman Numerals",
        "Roman numerals I II III IV V VI VII",
        "Classic numbering for size levels",
        "I II III IV V VI VII",
    ),
    _symbol_set(
        "Alphabetical Progression",
        "Letters A B C D E F G",
        "Alphabetical size grades",
        "A B C D E F G",
    ),
    _symbol_set(
        "Circled Numbers",
        "Circled numbers ① ② ③ ④ ⑤ ⑥ ⑦",
        "Numeric levels inside circles",
        "① ② ③ ④ ⑤ ⑥ ⑦",
    ),
    _symbol_set(
        "Parenthesized Numbers",
        "Parenthesized numbers ⑴ ⑵ ⑶ ⑷ ⑸ ⑹ ⑺",
        "Numeric levels inside parentheses",
        "⑴ ⑵ ⑶ ⑷ ⑸ ⑹ ⑺",
    ),
    _symbol_set(
        "Superscript Numbers",
        "Superscript numbers ¹ ² ³ ⁴ ⁵ ⁶ ⁷",
        "Compact raised numeric levels",
        "¹ ² ³ ⁴ ⁵ ⁶ ⁷",
    ),
    _symbol_set(
        "Squared Latin Letters",
        "Squared letters 🅰 🅱 🅲 🅳 🅴 🅵 🅶",
        "Letter grades in boxes",
        "🅰 🅱 🅲 🅳 🅴 🅵 🅶",
    ),
    _symbol_set(
        "Star Brightness",
        "Star brightness ☆ ✩ ✫ ✬ ✭ ✮ ★",
        "From hollow to solid stars",
        "☆ ✩ ✫ ✬ ✭ ✮ ★",
    ),
    _symbol_set(
        "Flower Growth",
        "Plant growth 🌱 🌿 🍃 🌷 🌸 🌹 🌺",
        "From seedling to full bloom",
        "🌱 🌿 🍃 🌷 🌸 🌹 🌺",
    ),
    _symbol_set(
        "Musical Notes",
        "Musical notes ♩ ♪ ♫ ♬ 🎵 🎶 𝅘𝅥𝅮",
        "From a single note to a full score",
        "♩ ♪ ♫ ♬ 🎵 🎶 𝅘𝅥𝅮",
    ),
    _symbol_set(
        "Arrow Progression",
        "Arrows → ↠ ⟶ ➔ ➜ ➝ ➞",
        "Arrows getting heavier with size",
        "→ ↠ ⟶ ➔ ➜ ➝ ➞",
    ),
    _symbol_set(
        "Currency Symbols",
        "Currency symbols ¢ $ € £ ¥ ₩ ₹",
        "Different currencies as size markers",
        "¢ $ € £ ¥ ₩ ₹",
    ),
    _symbol_set(
        "Chess Pieces",
        "Chess pieces ♙ ♘ ♗ ♖ ♕ ♔ ♚",
        "From pawn to king",
        "♙ ♘ ♗ ♖ ♕ ♔ ♚",
    ),
    _symbol_set(
        "Circled Latin Letters",
        "Circled letters ⓐ ⓑ ⓒ ⓓ ⓔ ⓕ ⓖ",
        "Letter grades inside circles",
        "ⓐ ⓑ ⓒ ⓓ ⓔ ⓕ ⓖ",
    ),
    _symbol_set(
        "CJK Numerals",
        "CJK numerals 一 二 三 四 五 六 七",
        "East Asian numerals for size levels",
        "一 二 三 四 五 六 七",
    ),
    _symbol_set(
        "Zodiac Signs",
        "Zodiac signs ♈ ♉ ♊ ♋ ♌ ♍ ♎",
        "Zodiac order as size levels",
        "♈ ♉ ♊ ♋ ♌ ♍ ♎",
    ),
]

INDICATOR_SYMBOL_SETS: Dict[str, IndicatorSymbolSet] = {s.name: s for s in _SYMBOL_SETS}


def _thresholds(*entries: Tuple[int, str, str]) -> Tuple[Threshold, ...]:
    return tuple(Threshold(value=v, indicator=i, description=d) for v, i, d in entries)


BUILT_IN_PRESETS: Dict[str, CountingConfig] = {
    "default": CountingConfig(
        count_mode=CountMode.LINES,
        supported_extensions=(".js", ".ts", ".py", ".html", ".css"),
        thresholds=_thresholds(
            (0, "⚪", "Tiny size"),
            (100, "🔵", "Small size"),
            (500, "🟢", "Medium size"),
            (1000, "🟡", "Medium-large size"),
            (2000, "🟠", "Approaching large size"),
            (5000, "🔴", "Large, consider splitting"),
            (10000, "⛔", "Very large, should be split"),
        ),
        indicator_symbol_set="Colored Circles",
    ),
    "llm-context": CountingConfig(
        count_mode=CountMode.TOKENS,
        supported_extensions=(".txt", ".md", ".json", ".py", ".js"),
        thresholds=_thresholds(
            (0, "⚪", "Tiny size"),
            (2000, "🔵", "2K token context"),
            (4000, "🟢", "4K token context"),
            (8000, "🟡", "8K token context"),
            (16000, "🟠", "16K token context"),
            (32000, "🔴", "32K token context"),
            (64000, "⛔", "Exceeds most context windows"),
        ),
        indicator_symbol_set="Colored Circles",
    ),
    "code-review": CountingConfig(
        count_mode=CountMode.LINES,
        supported_extensions=(".js", ".ts", ".py", ".java", ".c", ".cpp", ".cs", ".go", ".rs"),
        thresholds=_thresholds(
            (0, "✅", "Easy to review"),
            (50, "🟩", "Quick review"),
            (200, "🟨", "Moderate review time"),
            (500, "🟧", "Detailed review needed"),
            (1000, "🟥", "Extensive review required"),
            (2000, "⚠️", "Consider splitting for review"),
            (5000, "🛑", "Too large for effective review"),
        ),
        indicator_symbol_set="Mood",
    ),
    "documentation": CountingConfig(
        count_mode=CountMode.LINES,
        supported_extensions=(".md", ".txt", ".rst", ".adoc", ".docx", ".tex"),
        thresholds=_thresholds(
            (0, "📝", "Note"),
            (100, "📄", "Brief document"),
            (500, "📑", "Multi-page document"),
            (1000, "📚", "Chapter-sized content"),
            (3000, "📔", "Large document"),
            (10000, "📙", "Book-sized content"),
            (30000, "📘", "Comprehensive documentation"),
        ),
        indicator_symbol_set="Documentation Icons",
    ),
}

DEFAULT_PRESET = "default"


def get_preset(name: str) -> Optional[CountingConfig]:
    """Lay built-in preset theo ten. None neu khong ton tai."""
    return BUILT_IN_PRESETS.get(name)


def get_preset_names() -> List[str]:
    return list(BUILT_IN_PRESETS.keys())


def is_built_in_preset(name: str) -> bool:
    return name in BUILT_IN_PRESETS


def get_symbol_set(name: str) -> Optional[IndicatorSymbolSet]:
    """Lay symbol set theo ten. None neu khong ton tai."""
    return INDICATOR_SYMBOL_SETS.get(name)


def get_symbol_set_names() -> List[str]:
    return list(INDICATOR_SYMBOL_SETS.keys())
