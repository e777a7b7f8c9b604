"""
MetricsCache - Cache hai tang cho line/token metrics, thread-safe.

- File cache: file path -> FileMetrics
- Directory cache: directory path -> DirectoryMetrics

Khong co eviction va khong co mtime invalidation: entries song het
lifetime cua cache, chi bi xoa boi clear_all() (vd: khi config doi).
Force refresh KHONG clear, moi file dem lai chi ghi de entry cu.
"""

import os
import threading
from typing import Dict, List, Mapping, Optional, Tuple

from core.metrics.types import DirectoryMetrics, FileMetrics


def is_within(path: str, root: str) -> bool:
    """Check path nam trong root (theo path segment, "/a/bc" khong nam trong "/a/b")."""
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)


class MetricsCache:
    """
    Cache file + directory metrics.

    Mot threading.Lock bao ve ca hai maps. Readers (UI, CLI) co the
    query bat ky luc nao, ke ca giua mot indexing run.
    """

    def __init__(self) -> None:
        self._files: Dict[str, FileMetrics] = {}
        self._directories: Dict[str, DirectoryMetrics] = {}
        self._lock = threading.Lock()

    # === File entries ===

    def get_file(self, path: str) -> Optional[FileMetrics]:
        with self._lock:
            return self._files.get(path)

    def has_file(self, path: str) -> bool:
        with self._lock:
            return path in self._files

    def set_file(self, metrics: FileMetrics) -> None:
        with self._lock:
            self._files[metrics.path] = metrics

    def set_files(self, entries: Mapping[str, FileMetrics]) -> None:
        """
        Luu nhieu entries cung luc (cho batch processing).

        Giam lock contention so voi set_file() tung entry.
        """
        with self._lock:
            self._files.update(entries)

    def file_entries(self) -> List[Tuple[str, FileMetrics]]:
        """Snapshot cac file entries hien tai (cho Aggregator)."""
        with self._lock:
            return list(self._files.items())

    # === Directory entries ===

    def get_directory(self, path: str) -> Optional[DirectoryMetrics]:
        with self._lock:
            return self._directories.get(path)

    def replace_directories(
        self, root_path: str, directories: Mapping[str, DirectoryMetrics]
    ) -> None:
        """
        Thay toan bo directory entries cua mot root.

        Xoa entries cu nam trong root (directory khong con file nao se bien mat)
        roi publish cay moi, tat ca trong mot lan giu lock.
        """
        with self._lock:
            stale = [p for p in self._directories if is_within(p, root_path)]
            for path in stale:
                del self._directories[path]
            self._directories.update(directories)

    def directory_entries(self) -> List[Tuple[str, DirectoryMetrics]]:
        with self._lock:
            return list(self._directories.items())

    # === Maintenance ===

    def clear_all(self) -> None:
        """Xoa toan bo cache. Thread-safe."""
        with self._lock:
            self._files.clear()
            self._directories.clear()

    def file_count(self) -> int:
        with self._lock:
            return len(self._files)

    def directory_count(self) -> int:
        with self._lock:
            return len(self._directories)

    def __len__(self) -> int:
        """Tra ve tong so entries (file + directory)."""
        with self._lock:
            return len(self._files) + len(self._directories)
