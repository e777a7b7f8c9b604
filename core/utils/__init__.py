"""
Core Utilities Package

Chua cac utility modules:
- file_scanner: Discovery candidate files (os.walk + pathspec exclusion)
"""

from core.utils.file_scanner import FileScanner, ScanProgress, matches_extension

__all__ = [
    "FileScanner",
    "ScanProgress",
    "matches_extension",
]
