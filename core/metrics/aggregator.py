"""
Directory Aggregator - Build lai cay directory va tong lines/tokens cho mot root.

Thuat toan 3 pass, khong phu thuoc thu tu files duoc dem:
1. Accumulate: voi moi file trong root, di len chuoi ancestor den root,
   tao node rong cho ancestor chua co va cong counts vao bang tong rieng
   (tach khoi cay de nhieu file cung ancestor duoc cong, khong ghi de).
2. Wire: gan moi directory (tru root) vao parent dung mot lan,
   roi gan moi file vao parent truc tiep dung mot lan.
3. Apply totals: copy tong tu bang tong vao tung directory node.

Ket qua chi phan anh cac file dang co trong file cache tai thoi diem goi.
"""

import os
from typing import Dict, Iterable, List, Set, Tuple

from core.metrics.cache import is_within
from core.metrics.types import DirectoryMetrics, FileMetrics


def _ancestors(file_path: str, root_path: str) -> List[str]:
    """Cac directory tu parent cua file len den root (bao gom root)."""
    chain: List[str] = []
    current = os.path.dirname(file_path)
    while is_within(current, root_path):
        chain.append(current)
        if current == root_path:
            break
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return chain


def aggregate(
    root_path: str,
    file_entries: Iterable[Tuple[str, FileMetrics]],
) -> Dict[str, DirectoryMetrics]:
    """
    Tinh DirectoryMetrics cho root va moi directory con co file trong cache.

    Args:
        root_path: Directory goc (absolute, normalized)
        file_entries: Snapshot (path, FileMetrics) tu MetricsCache

    Returns:
        Dict directory path -> DirectoryMetrics. Root luon co mat,
        ke ca khi khong co file nao (totals = 0).
    """
    directories: Dict[str, DirectoryMetrics] = {root_path: DirectoryMetrics(path=root_path)}
    # Bang tong rieng: directory path -> [lines, tokens]
    totals: Dict[str, List[int]] = {root_path: [0, 0]}
    files: List[FileMetrics] = []

    # Pass 1: accumulate
    for file_path, metrics in sorted(file_entries, key=lambda item: item[0]):
        if file_path == root_path or not is_within(file_path, root_path):
            continue

        files.append(metrics)
        for directory in _ancestors(file_path, root_path):
            if directory not in directories:
                directories[directory] = DirectoryMetrics(path=directory)
                totals[directory] = [0, 0]
            totals[directory][0] += metrics.line_count
            totals[directory][1] += metrics.token_count

    # Pass 2: wire tree, moi edge dung mot lan
    attached: Dict[str, Set[str]] = {path: set() for path in directories}

    for dir_path, node in directories.items():
        if dir_path == root_path:
            continue
        parent_path = os.path.dirname(dir_path)
        parent = directories.get(parent_path)
        if parent is not None and dir_path not in attached[parent_path]:
            parent.children.append(node)
            attached[parent_path].add(dir_path)

    for metrics in files:
        parent_path = os.path.dirname(metrics.path)
        parent = directories.get(parent_path)
        if parent is not None and metrics.path not in attached[parent_path]:
            parent.children.append(metrics)
            attached[parent_path].add(metrics.path)

    # Pass 3: apply totals
    for dir_path, node in directories.items():
        node.total_line_count, node.total_token_count = totals[dir_path]

    return directories
