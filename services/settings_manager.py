"""
Settings Manager - Quan ly load/save settings cua indexer.

File: ~/.linecount-indexer/settings.json

API (typed):
    settings = load_app_settings()  # -> AppSettings
    save_app_settings(settings)
    update_app_setting(count_mode="tokens")
    apply_preset("llm-context")

SettingsConfigProvider implement IConfigProvider cho IndexingController.
"""

import json
import logging
import threading
from typing import Any

from config.app_settings import AppSettings
from config.counting_config import ConfigError, CountingConfig
from config.paths import SETTINGS_FILE
from config.presets import get_preset, get_preset_names

logger = logging.getLogger(__name__)

# Thread-safe lock de tranh race condition khi save settings
_settings_lock = threading.Lock()


def _load_app_settings_unlocked() -> AppSettings:
    """
    Load settings tu file KHONG co lock.

    Chi duoc goi tu ben trong code da acquire _settings_lock,
    hoac tu load_app_settings() (read-only, khong can lock).

    Returns:
        AppSettings instance voi values tu file + defaults
    """
    try:
        if SETTINGS_FILE.exists():
            content = SETTINGS_FILE.read_text(encoding="utf-8")
            saved = json.loads(content)
            if isinstance(saved, dict):
                return AppSettings.from_dict(saved)
            logger.warning(f"Ignoring settings file {SETTINGS_FILE}: not a JSON object")
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Cannot read settings file {SETTINGS_FILE}: {e}")
    return AppSettings()


def _save_app_settings_unlocked(settings: AppSettings) -> bool:
    """
    Save AppSettings ra file KHONG co lock.

    Merge voi existing data de bao toan extra keys.

    Returns:
        True neu save thanh cong
    """
    try:
        existing_data: dict[str, Any] = {}
        try:
            if SETTINGS_FILE.exists():
                loaded = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    existing_data = loaded
        except (OSError, json.JSONDecodeError):
            existing_data = {}

        updated = {**existing_data, **settings.to_dict()}
        SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_FILE.write_text(
            json.dumps(updated, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        return True
    except OSError as e:
        logger.error(f"Cannot save settings file {SETTINGS_FILE}: {e}")
        return False


def load_app_settings() -> AppSettings:
    """
    Load settings tu file va tra ve AppSettings typed instance.

    Neu file khong ton tai hoac loi, tra ve defaults.
    """
    return _load_app_settings_unlocked()


def save_app_settings(settings: AppSettings) -> bool:
    """Save AppSettings ra file (thread-safe)."""
    with _settings_lock:
        return _save_app_settings_unlocked(settings)


def update_app_setting(**kwargs: Any) -> bool:
    """
    Update mot hoac nhieu settings fields cung luc (thread-safe, atomic).

    Args:
        **kwargs: Field names va values can update (vd: count_mode="tokens")

    Returns:
        True neu save thanh cong

    Raises:
        TypeError: Neu key khong phai la AppSettings field
    """
    # Validate fields truoc khi acquire lock de fail-fast
    valid_fields = {f for f in AppSettings.__dataclass_fields__}
    for key in kwargs:
        if key not in valid_fields:
            raise TypeError(
                f"'{key}' is not a valid AppSettings field. "
                f"Valid fields: {sorted(valid_fields)}"
            )

    with _settings_lock:
        settings = _load_app_settings_unlocked()
        for key, value in kwargs.items():
            setattr(settings, key, value)
        return _save_app_settings_unlocked(settings)


def apply_preset(name: str) -> AppSettings:
    """
    Ghi de counting settings bang mot built-in preset va luu lai.

    Discovery/indexer settings (excluded_folders, use_gitignore, ...) giu nguyen.

    Raises:
        ConfigError: Preset khong ton tai
    """
    preset = get_preset(name)
    if preset is None:
        raise ConfigError(
            f"Unknown preset {name!r}. Available: {', '.join(get_preset_names())}"
        )

    with _settings_lock:
        current = _load_app_settings_unlocked()
        settings = AppSettings.from_counting_config(
            preset,
            selected_preset=name,
            excluded_folders=current.excluded_folders,
            use_gitignore=current.use_gitignore,
            batch_size=current.batch_size,
            enabled=current.enabled,
        )
        _save_app_settings_unlocked(settings)
    logger.info(f"Applied preset {name!r}")
    return settings


class SettingsConfigProvider:
    """
    IConfigProvider doc CountingConfig tu settings file.

    Moi lan get_config() doc lai file, nen thay doi tu process khac
    duoc nhan ngay o run tiep theo.
    """

    def get_config(self) -> CountingConfig:
        return load_app_settings().to_counting_config()
