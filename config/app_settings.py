"""
AppSettings - Typed settings dataclass cho linecount-indexer.

Thay the Dict[str, Any] bang dataclass co type hints, validation va default values.
Tat ca settings duoc truy cap qua typed fields thay vi string keys.

Modules:
- AppSettings: Dataclass chua toan bo settings cua indexer
- from_dict(): Tao AppSettings tu dict (settings.json)
- to_dict(): Chuyen doi AppSettings thanh dict de luu xuong file
- to_counting_config(): Tao CountingConfig snapshot cho IndexingController

Su dung:
    settings = load_app_settings()
    controller.update_config(settings.to_counting_config())
"""

import typing
from dataclasses import dataclass, field
from typing import Any

from config.counting_config import CountingConfig
from config.presets import BUILT_IN_PRESETS, DEFAULT_PRESET

_DEFAULT_CONFIG = BUILT_IN_PRESETS[DEFAULT_PRESET]


def _default_extensions() -> list[str]:
    return list(_DEFAULT_CONFIG.supported_extensions)


def _default_thresholds() -> list[dict[str, Any]]:
    return [t.to_dict() for t in _DEFAULT_CONFIG.thresholds]


@dataclass
class AppSettings:
    """
    Typed settings cho linecount-indexer.

    Moi field tuong ung voi mot key trong settings.json.
    Default values duoc su dung khi settings.json chua co key tuong ung.
    """

    # --- Counting Settings ---
    # Preset dang chon (built-in preset name)
    selected_preset: str = DEFAULT_PRESET
    # "lines" hoac "tokens"
    count_mode: str = _DEFAULT_CONFIG.count_mode.value
    supported_extensions: list[str] = field(default_factory=_default_extensions)
    # Moi threshold: {"value": int, "indicator": str, "description": str}
    thresholds: list[dict[str, Any]] = field(default_factory=_default_thresholds)
    indicator_symbol_set: str = _DEFAULT_CONFIG.indicator_symbol_set

    # --- Discovery Settings ---
    # Patterns them tu user, gitignore format (separated by newline)
    excluded_folders: str = ""
    # Co respect .gitignore hay khong
    use_gitignore: bool = False

    # --- Indexer Settings ---
    batch_size: int = 20
    enabled: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AppSettings":
        """
        Tao AppSettings tu dict, chi lay cac keys trung voi field names.

        Bao gom type validation: neu value co type khong khop voi
        field declaration, se bo qua va dung default thay the.

        Args:
            data: Dict settings (thuong tu settings.json)

        Returns:
            AppSettings instance voi values tu dict, fallback ve defaults
        """
        # Map field name -> expected type tu dataclass definition
        field_types: dict[str, Any] = {
            f.name: f.type for f in cls.__dataclass_fields__.values()
        }

        filtered: dict[str, Any] = {}
        for key, value in data.items():
            if key not in field_types:
                continue

            expected_type = field_types[key]

            # Strict type check: reject bool when expecting int
            if expected_type is int and isinstance(value, bool):
                continue

            origin = typing.get_origin(expected_type)
            check_type = origin if origin is not None else expected_type

            # Khong raise loi, chi bo qua value sai type -> dung default
            if isinstance(value, check_type):
                filtered[key] = value

        # batch_size phai >= 1
        if filtered.get("batch_size", 1) < 1:
            del filtered["batch_size"]

        return cls(**filtered)

    def to_dict(self) -> dict[str, Any]:
        """
        Chuyen doi AppSettings thanh dict de luu xuong file.

        Returns:
            Dict voi toan bo settings
        """
        return {
            "selected_preset": self.selected_preset,
            "count_mode": self.count_mode,
            "supported_extensions": list(self.supported_extensions),
            "thresholds": [dict(t) for t in self.thresholds],
            "indicator_symbol_set": self.indicator_symbol_set,
            "excluded_folders": self.excluded_folders,
            "use_gitignore": self.use_gitignore,
            "batch_size": self.batch_size,
            "enabled": self.enabled,
        }

    def get_excluded_patterns_list(self) -> list[str]:
        """
        Parse excluded_folders string thanh list cac patterns.

        Loai bo dong trong va comments (bat dau bang #).

        Returns:
            List patterns da normalize
        """
        return [
            line.strip()
            for line in self.excluded_folders.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]

    def to_counting_config(self) -> CountingConfig:
        """Tao CountingConfig snapshot (lenient, value sai -> default + warning)."""
        return CountingConfig.from_dict(
            {
                "count_mode": self.count_mode,
                "supported_extensions": self.supported_extensions,
                "thresholds": self.thresholds,
                "indicator_symbol_set": self.indicator_symbol_set,
            }
        )

    @classmethod
    def from_counting_config(
        cls, config: CountingConfig, **overrides: Any
    ) -> "AppSettings":
        """Tao AppSettings tu mot CountingConfig (vd: khi apply preset)."""
        settings = cls(
            count_mode=config.count_mode.value,
            supported_extensions=list(config.supported_extensions),
            thresholds=[t.to_dict() for t in config.thresholds],
            indicator_symbol_set=config.indicator_symbol_set,
        )
        for key, value in overrides.items():
            setattr(settings, key, value)
        return settings
