"""
Metrics Display - Format metrics cho hien thi (CLI, tooltip, tree).

Khong giu state: moi ham nhan metrics da tinh tu IndexingController/MetricsCache.

- format_count(): 950 -> "950", 1234 -> "1.2k", 12345 -> "12k"
- get_tooltip(): "Lines: n\\nTokens: m" cho file hoac directory
- lookup_entry(): Tim entry cho mot path (file, directory, hoac child cua parent)
- render_tree(): Text tree cua DirectoryMetrics, dispatch theo EntryKind
"""

import os
from typing import List, Optional, Protocol

from config.counting_config import CountMode
from core.metrics.classifier import DEFAULT_INDICATOR
from core.metrics.types import DirectoryMetrics, EntryKind, FileMetrics, MetricsEntry


class MetricsSource(Protocol):
    """Query surface toi thieu (IndexingController thoa man)."""

    def get_file_metrics(self, path: str) -> Optional[FileMetrics]: ...

    def get_directory_metrics(self, path: str) -> Optional[DirectoryMetrics]: ...


def format_count(count: int) -> str:
    """Format count cho display"""
    if count < 1000:
        return str(count)
    elif count < 10000:
        return f"{count / 1000:.1f}k"
    else:
        return f"{count // 1000}k"


def entry_counts(entry: MetricsEntry) -> tuple[int, int]:
    """Tra ve (lines, tokens) cua file hoac directory."""
    if entry.kind == EntryKind.FILE:
        return entry.line_count, entry.token_count
    return entry.total_line_count, entry.total_token_count


def entry_indicator(entry: MetricsEntry) -> str:
    """Directory khong co indicator rieng, dung DEFAULT_INDICATOR."""
    if entry.kind == EntryKind.FILE:
        return entry.indicator or DEFAULT_INDICATOR
    return DEFAULT_INDICATOR


def get_tooltip(entry: MetricsEntry) -> str:
    lines, tokens = entry_counts(entry)
    return f"Lines: {lines}\nTokens: {tokens}"


def lookup_entry(source: MetricsSource, path: str) -> Optional[MetricsEntry]:
    """
    Tim metrics entry cho mot path.

    Thu tu: file cache -> directory cache -> child cua parent directory.
    """
    path = os.path.abspath(path)
    file_metrics = source.get_file_metrics(path)
    if file_metrics is not None:
        return file_metrics

    directory = source.get_directory_metrics(path)
    if directory is not None:
        return directory

    parent = source.get_directory_metrics(os.path.dirname(path))
    if parent is not None:
        return parent.find_child(path)
    return None


def _sort_key(entry: MetricsEntry) -> tuple[int, str]:
    # Directories truoc, roi theo ten
    return (0 if entry.kind == EntryKind.DIRECTORY else 1, os.path.basename(entry.path).lower())


def render_tree(
    root: DirectoryMetrics,
    count_mode: CountMode = CountMode.LINES,
    max_depth: Optional[int] = None,
) -> List[str]:
    """
    Render cay DirectoryMetrics thanh cac dong text.

    Args:
        root: Directory goc (thuong la root da index)
        count_mode: Count hien thi ben canh moi entry
        max_depth: So cap children toi da (None = khong gioi han, 0 = chi root)

    Returns:
        List cac dong, dong dau la root voi tong cua no

    Vd:
        project/ (3 lines)
        ├── sub/ (1 lines)
        │   └── 🔵 b.txt (1)
        └── 🔵 a.txt (2)
    """
    unit = "tokens" if count_mode == CountMode.TOKENS else "lines"

    def selected(entry: MetricsEntry) -> int:
        lines, tokens = entry_counts(entry)
        return tokens if count_mode == CountMode.TOKENS else lines

    name = os.path.basename(root.path.rstrip(os.sep)) or root.path
    output = [f"{name}/ ({format_count(selected(root))} {unit})"]

    def walk(directory: DirectoryMetrics, prefix: str, depth: int) -> None:
        if max_depth is not None and depth >= max_depth:
            return
        children = sorted(directory.children, key=_sort_key)
        for index, child in enumerate(children):
            is_last = index == len(children) - 1
            branch = "└── " if is_last else "├── "
            child_name = os.path.basename(child.path)
            count = format_count(selected(child))
            if child.kind == EntryKind.DIRECTORY:
                output.append(f"{prefix}{branch}{child_name}/ ({count} {unit})")
                walk(child, prefix + ("    " if is_last else "│   "), depth + 1)
            else:
                output.append(f"{prefix}{branch}{entry_indicator(child)} {child_name} ({count})")

    walk(root, "", 0)
    return output
