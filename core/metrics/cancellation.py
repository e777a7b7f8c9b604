"""
Cancellation token cho indexing run - thread-safe.

Moi run cap phat mot token moi thay vi dung global flag, nen nhieu
IndexingController (vd: trong tests) khong anh huong lan nhau.

Cancellation la cooperative: token chi duoc check tai batch boundary
va directory boundary khi discovery, khong interrupt file read dang chay.
"""

import threading


class CancellationToken:
    """Flag cancel dung threading.Event de doc/ghi an toan tu nhieu threads."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Yeu cau dung. Goi nhieu lan khong sao."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.is_cancelled})"
