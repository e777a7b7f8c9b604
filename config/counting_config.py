"""
CountingConfig - Typed config snapshot cho mot indexing run.

Gom:
- CountMode: dem theo lines hay tokens
- Threshold: moc gia tri -> indicator symbol
- CountingConfig: frozen dataclass, controller coi la immutable trong suot run
- parse_threshold_values() / create_thresholds_with_symbols() / apply_symbol_set():
  helpers cho config layer de tao thresholds tu input cua user

Thay doi CountingConfig => phai clear toan bo cache, vi indicator cua moi
entry duoc tinh theo thresholds/count mode cu.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from core.logging_config import log_warning


class ConfigError(ValueError):
    """Loi cau hinh (symbol set khong ton tai, khong du symbols, ...)."""


class CountMode(str, Enum):
    """Che do dem dung de chon indicator."""

    LINES = "lines"
    TOKENS = "tokens"


# === Default values ===
DEFAULT_SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".js", ".ts", ".py", ".html", ".css")
DEFAULT_THRESHOLD_VALUES: Tuple[int, ...] = (0, 100, 500, 1000, 2000, 5000, 10000)
DEFAULT_SYMBOL_SET = "Colored Circles"

# So thresholds toi da (moi symbol set co 7 symbols)
MAX_THRESHOLDS = 7

# Mo ta mac dinh theo thu tu tang dan cua threshold values
SIZE_DESCRIPTIONS: Tuple[str, ...] = (
    "Tiny size",
    "Small size",
    "Medium size",
    "Medium-large size",
    "Large size",
    "Very large size",
    "Extremely large size",
)


@dataclass(frozen=True)
class Threshold:
    """Mot moc severity: count >= value thi dung indicator nay."""

    value: int
    indicator: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Threshold":
        """
        Tao Threshold tu dict (settings.json / preset).

        Raises:
            ConfigError: Neu thieu value/indicator hoac value khong hop le
        """
        value = data.get("value")
        indicator = data.get("indicator")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"Invalid threshold value: {value!r}")
        if value < 0:
            raise ConfigError(f"Threshold value must be non-negative: {value!r}")
        if not isinstance(indicator, str) or not indicator:
            raise ConfigError(f"Invalid threshold indicator: {indicator!r}")
        description = data.get("description", "")
        return cls(
            value=int(value),
            indicator=indicator,
            description=description if isinstance(description, str) else "",
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "value": self.value,
            "indicator": self.indicator,
            "description": self.description,
        }


@dataclass(frozen=True)
class CountingConfig:
    """
    Config snapshot cho indexing engine.

    Attributes:
        count_mode: Dem theo lines hay tokens khi chon indicator
        supported_extensions: Cac extension duoc index (vd: ".ts")
        thresholds: Cac moc severity, thu tu bat ky (classifier tu sort)
        indicator_symbol_set: Ten symbol set da dung de tao thresholds
    """

    count_mode: CountMode = CountMode.LINES
    supported_extensions: Tuple[str, ...] = DEFAULT_SUPPORTED_EXTENSIONS
    thresholds: Tuple[Threshold, ...] = field(default_factory=tuple)
    indicator_symbol_set: str = DEFAULT_SYMBOL_SET

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CountingConfig":
        """
        Tao CountingConfig tu dict, fallback ve default khi value sai type.

        Giong AppSettings.from_dict(): khong raise loi, chi bo qua value sai
        va log warning.
        """
        count_mode = CountMode.LINES
        raw_mode = data.get("countMode", data.get("count_mode"))
        if raw_mode is not None:
            try:
                count_mode = CountMode(raw_mode)
            except ValueError:
                log_warning(f"[CountingConfig] Unknown count mode {raw_mode!r}, using lines")

        extensions = DEFAULT_SUPPORTED_EXTENSIONS
        raw_ext = data.get("supportedExtensions", data.get("supported_extensions"))
        if isinstance(raw_ext, (list, tuple)) and all(isinstance(e, str) for e in raw_ext):
            extensions = normalize_extensions(raw_ext)

        thresholds: List[Threshold] = []
        raw_thresholds = data.get("thresholds", [])
        if isinstance(raw_thresholds, (list, tuple)):
            for raw in raw_thresholds:
                if not isinstance(raw, dict):
                    continue
                try:
                    thresholds.append(Threshold.from_dict(raw))
                except ConfigError as e:
                    log_warning(f"[CountingConfig] Skipping threshold {raw!r}: {e}")

        symbol_set = data.get("indicatorSymbolSet", data.get("indicator_symbol_set"))
        if not isinstance(symbol_set, str):
            symbol_set = DEFAULT_SYMBOL_SET

        return cls(
            count_mode=count_mode,
            supported_extensions=extensions,
            thresholds=tuple(thresholds),
            indicator_symbol_set=symbol_set,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "countMode": self.count_mode.value,
            "supportedExtensions": list(self.supported_extensions),
            "thresholds": [t.to_dict() for t in self.thresholds],
            "indicatorSymbolSet": self.indicator_symbol_set,
        }


def normalize_extensions(extensions: Iterable[str]) -> Tuple[str, ...]:
    """
    Chuan hoa extensions: strip, them "." neu thieu, bo trung lap (giu thu tu).

    Vd: ["py", ".TS ", ".py"] -> (".py", ".ts")
    """
    result: List[str] = []
    for ext in extensions:
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        if ext not in result:
            result.append(ext)
    return tuple(result)


def parse_threshold_values(text: str) -> List[int]:
    """
    Parse chuoi threshold values ngan cach boi dau phay.

    Input rong, khong co value nao, hoac co gia tri khong phai so huu han
    khong am nguyen -> tra ve DEFAULT_THRESHOLD_VALUES.

    Args:
        text: Vd "0, 100, 500"

    Returns:
        List int theo thu tu nhap
    """
    if not text.strip():
        return list(DEFAULT_THRESHOLD_VALUES)

    values: List[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            number = float(part)
        except ValueError:
            log_warning(f"[CountingConfig] Invalid threshold number: {part!r}, using defaults")
            return list(DEFAULT_THRESHOLD_VALUES)
        # nan/inf: int() se raise
        if not math.isfinite(number) or number < 0 or number != int(number):
            log_warning(f"[CountingConfig] Invalid threshold number: {part!r}, using defaults")
            return list(DEFAULT_THRESHOLD_VALUES)
        values.append(int(number))

    if not values:
        log_warning(f"[CountingConfig] No threshold values in {text!r}, using defaults")
        return list(DEFAULT_THRESHOLD_VALUES)
    return values


def create_thresholds_with_symbols(
    values: Sequence[int], symbol_set_name: str
) -> Tuple[Threshold, ...]:
    """
    Tao thresholds tu values + symbols cua mot symbol set.

    Values duoc sort tang dan, value thu i nhan symbol thu i va description
    tuong ung trong SIZE_DESCRIPTIONS (hoac "Level N" neu vuot qua).

    Raises:
        ConfigError: Symbol set khong ton tai hoac khong du symbols
    """
    from config.presets import get_symbol_set

    symbol_set = get_symbol_set(symbol_set_name)
    if symbol_set is None or len(symbol_set.symbols) < len(values):
        raise ConfigError(
            "Invalid symbol set or not enough symbols for the threshold values."
        )

    thresholds: List[Threshold] = []
    for index, value in enumerate(sorted(values)):
        description = (
            SIZE_DESCRIPTIONS[index]
            if index < len(SIZE_DESCRIPTIONS)
            else f"Level {index + 1}"
        )
        thresholds.append(
            Threshold(
                value=value,
                indicator=symbol_set.symbols[index],
                description=description,
            )
        )
    return tuple(thresholds)


def apply_symbol_set(
    thresholds: Sequence[Threshold], symbol_set_name: str
) -> Tuple[Threshold, ...]:
    """
    Doi indicator cua thresholds theo symbol set (theo index).

    Symbol set khong ton tai hoac it symbols hon so thresholds
    -> tra ve thresholds nguyen ven.
    """
    from config.presets import get_symbol_set

    symbol_set = get_symbol_set(symbol_set_name)
    if symbol_set is None or len(symbol_set.symbols) < len(thresholds):
        return tuple(thresholds)

    return tuple(
        Threshold(
            value=threshold.value,
            indicator=symbol_set.symbols[index],
            description=threshold.description,
        )
        for index, threshold in enumerate(thresholds)
    )


def limit_thresholds(values: Sequence[int]) -> Tuple[List[int], Optional[str]]:
    """
    Cat bot values neu vuot MAX_THRESHOLDS.

    Returns:
        (values da cat, warning message hoac None)
    """
    if len(values) <= MAX_THRESHOLDS:
        return list(values), None
    return (
        list(values[:MAX_THRESHOLDS]),
        f"Using only the first {MAX_THRESHOLDS} values. "
        f"Maximum of {MAX_THRESHOLDS} thresholds are supported.",
    )
