"""
Config Package - Chua cac constants va cau hinh cua ung dung

Bao gom:
- paths: Duong dan app data, log dir, settings file
- counting_config: CountMode, Threshold, CountingConfig
- presets: Built-in presets va indicator symbol sets
- app_settings: AppSettings typed dataclass (settings.json)

Khong re-export o day: core.logging_config import config.paths,
import nguoc lai tu package nay se tao vong lap import.
"""
