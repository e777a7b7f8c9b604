"""
Ignore Engine - Single source of truth cho logic exclude khi discovery.

Cung cap:
- build_ignore_patterns(): Tap hop patterns tu VCS + excluded dirs + user + gitignore
- build_pathspec(): Tao pathspec.PathSpec tu patterns (co cache)
- read_gitignore(): Doc .gitignore va .git/info/exclude (co cache)
- clear_cache(): Xoa tat ca cache

SOLID: Single Responsibility - chi lo viec quyet dinh "file/folder nay co bi exclude khong"
"""

from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pathspec

from core.constants import EXCLUDED_DIRECTORIES, VCS_DIRS

# === Cache ===
# Cache cho gitignore patterns: root_path -> (mtime, patterns)
_gitignore_cache: Dict[str, Tuple[float, List[str]]] = {}

# Cache cho PathSpec objects: cache_key -> (mtime, PathSpec)
_pathspec_cache: Dict[str, Tuple[float, pathspec.PathSpec]] = {}


def build_ignore_patterns(
    root_path: Path,
    *,
    excluded_patterns: Optional[List[str]] = None,
    use_gitignore: bool = False,
) -> List[str]:
    """
    Tap hop tat ca exclude patterns tu nhieu nguon.

    Thu tu: VCS > Excluded directories > User > Gitignore.
    Directory patterns co trailing "/" nen chi match folder, khong match
    file trung ten (vd: file "build" van duoc index).

    Args:
        root_path: Thu muc goc cua root dang index
        excluded_patterns: Danh sach patterns tu user (gitignore format)
        use_gitignore: Co doc .gitignore khong (default: False)

    Returns:
        List cac patterns (gitignore format)
    """
    patterns: List[str] = []

    # 1. Luon exclude VCS directories
    patterns.extend(f"{name}/" for name in VCS_DIRS)

    # 2. Dependency/output directories
    patterns.extend(f"{name}/" for name in EXCLUDED_DIRECTORIES)

    # 3. User-defined patterns
    if excluded_patterns:
        patterns.extend(excluded_patterns)

    # 4. Gitignore patterns (.gitignore + .git/info/exclude)
    if use_gitignore:
        patterns.extend(read_gitignore(root_path))

    return patterns


def build_pathspec(
    root_path: Path,
    *,
    excluded_patterns: Optional[List[str]] = None,
    use_gitignore: bool = False,
) -> pathspec.PathSpec:
    """
    Tao pathspec.PathSpec tu tat ca exclude patterns (co cache).

    Args:
        root_path: Thu muc goc cua root dang index
        excluded_patterns: Danh sach patterns tu user
        use_gitignore: Co doc .gitignore khong

    Returns:
        pathspec.PathSpec de match files/folders (path relative voi root)
    """
    patterns = build_ignore_patterns(
        root_path,
        excluded_patterns=excluded_patterns,
        use_gitignore=use_gitignore,
    )
    return get_cached_pathspec(root_path, patterns)


def get_cached_pathspec(root_path: Path, patterns: List[str]) -> pathspec.PathSpec:
    """
    Cache PathSpec object, invalidate khi .gitignore thay doi hoac patterns thay doi.

    Cache key bao gom ca root_path va patterns hash de:
    - Khac patterns -> khac PathSpec (tranh cache collision)
    - Patterns giong nhau + gitignore unchanged -> reuse cache
    """
    cache_key = f"{root_path}:{hash(tuple(patterns))}"
    gitignore_mtime = _get_gitignore_mtime(root_path)

    if cache_key in _pathspec_cache:
        cached_mtime, cached_spec = _pathspec_cache[cache_key]
        if cached_mtime == gitignore_mtime:
            return cached_spec

    spec = pathspec.GitIgnoreSpec.from_lines(patterns)
    _pathspec_cache[cache_key] = (gitignore_mtime, spec)
    return spec


def read_gitignore(root_path: Path) -> List[str]:
    """
    Doc .gitignore va .git/info/exclude cua root.

    Su dung cache dua tren .gitignore mtime de tranh doc lai file.

    Args:
        root_path: Thu muc goc chua .gitignore

    Returns:
        List cac gitignore patterns (raw lines tu file)
    """
    gitignore_path = root_path / ".gitignore"
    cache_key = str(root_path)
    current_mtime = _get_gitignore_mtime(root_path)

    if cache_key in _gitignore_cache:
        cached_mtime, cached_patterns = _gitignore_cache[cache_key]
        if cached_mtime == current_mtime:
            return cached_patterns.copy()

    patterns: List[str] = []

    for source in (gitignore_path, root_path / ".git" / "info" / "exclude"):
        if not source.is_file():
            continue
        try:
            content = source.read_text(encoding="utf-8", errors="replace")
        except OSError:
            continue
        patterns.extend(content.splitlines())

    _gitignore_cache[cache_key] = (current_mtime, patterns.copy())
    return patterns


def clear_cache() -> None:
    """Xoa tat ca cache (gitignore patterns va PathSpec objects)."""
    _gitignore_cache.clear()
    _pathspec_cache.clear()


def _get_gitignore_mtime(root_path: Path) -> float:
    """Lay modification time cua .gitignore file (0.0 neu khong co)."""
    try:
        return (root_path / ".gitignore").stat().st_mtime
    except OSError:
        return 0.0
