"""
Core line/token counting logic.

Functions:
- count_lines(): Dem lines trong text (file khong co trailing newline van tinh dong cuoi)
- count_tokens(): Dem cac run non-whitespace lien tiep
- count_file(): Doc file va tao FileMetrics (KHONG bao gio raise loi I/O)
- is_within_size_limit(): Guardrail 5MB, caller check TRUOC khi goi count_file()
- _read_file_mmap(): Doc file bang mmap (nhanh hon read() 15-50%)
"""

import mmap
import os
from pathlib import Path
from typing import Iterable, Union

from config.counting_config import CountMode, Threshold
from core.logging_config import log_debug, log_warning
from core.metrics.classifier import DEFAULT_INDICATOR, classify
from core.metrics.types import FileMetrics

# Guardrail: skip files > 5MB
MAX_FILE_SIZE = 5 * 1024 * 1024

PathLike = Union[str, Path]


def count_lines(text: str) -> int:
    """
    Dem so lines.

    Logic:
    - Empty text: 0 lines
    - Dem so ky tu newline
    - Neu khong ket thuc bang newline: cong them 1 cho dong cuoi
    """
    if not text:
        return 0
    newline_count = text.count("\n")
    return newline_count if text.endswith("\n") else newline_count + 1


def count_tokens(text: str) -> int:
    """
    Dem tokens = so run non-whitespace lien tiep.

    str.split() khong tham so da bo qua cac fragment rong.
    """
    return len(text.split())


def _read_file_mmap(file_path: PathLike) -> bytes:
    """
    Doc toan bo file su dung mmap.

    mmap map file truc tiep vao virtual memory,
    giam so lan copy data giua kernel va user space.

    Raises:
        OSError: Khong mo/doc duoc file
    """
    with open(file_path, "rb") as f:
        # mmap khong ho tro file rong
        if f.seek(0, os.SEEK_END) == 0:
            return b""
        f.seek(0)
        try:
            with mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ) as mm:
                return mm.read()
        except (ValueError, OSError):
            # Fallback ve read() thong thuong neu mmap fail (file bi truncate, FS dac biet)
            f.seek(0)
            return f.read()


def zero_metrics(path: str) -> FileMetrics:
    return FileMetrics(path=path, line_count=0, token_count=0, indicator=DEFAULT_INDICATOR)


def count_file(
    path: PathLike,
    count_mode: CountMode,
    thresholds: Iterable[Threshold],
) -> FileMetrics:
    """
    Dem lines/tokens cho mot file va classify.

    Fail softly: file khong mo duoc hoac khong decode duoc UTF-8
    -> FileMetrics toan 0 voi DEFAULT_INDICATOR, log warning.

    Args:
        path: Duong dan file
        count_mode: Count dung de chon indicator
        thresholds: Thresholds cua config hien tai

    Returns:
        FileMetrics cho file
    """
    path_str = os.fspath(path)

    try:
        content = _read_file_mmap(path_str).decode("utf-8")
    except OSError as e:
        log_warning(f"[Counter] Skipping unreadable file {path_str}: {e}")
        return zero_metrics(path_str)
    except UnicodeDecodeError as e:
        log_warning(f"[Counter] Skipping undecodable file {path_str}: {e.reason}")
        return zero_metrics(path_str)

    line_count = count_lines(content)
    token_count = count_tokens(content)
    selected = token_count if count_mode == CountMode.TOKENS else line_count

    return FileMetrics(
        path=path_str,
        line_count=line_count,
        token_count=token_count,
        indicator=classify(selected, thresholds),
    )


def is_within_size_limit(path: PathLike, max_size: int = MAX_FILE_SIZE) -> bool:
    """
    Check file size truoc khi dem (cheap operation).

    File da bien mat hoac khong stat duoc cung tra ve False.
    """
    try:
        size = os.stat(path).st_size
    except OSError as e:
        log_debug(f"[Counter] Cannot stat {path}: {e}")
        return False
    if size > max_size:
        log_debug(f"[Counter] Skipping oversized file {path} ({size} bytes)")
        return False
    return True
