"""Constants dung chung cho core layer."""

from core.constants.file_patterns import (
    DIRECTORY_QUICK_SKIP,
    EXCLUDED_DIRECTORIES,
    VCS_DIRS,
)

__all__ = ["DIRECTORY_QUICK_SKIP", "EXCLUDED_DIRECTORIES", "VCS_DIRS"]
