"""
Indicator Classifier - count -> indicator symbol.

Thresholds duoc sort giam dan theo value (stable) truoc khi lookup,
thu tu luu trong config khong duoc tin tuong.
Ket qua la indicator cua threshold dau tien co value <= count.
"""

from typing import Iterable, Optional

from config.counting_config import Threshold

# Indicator cho severity thap nhat (khong co threshold nao match)
DEFAULT_INDICATOR = "⚪"


def find_threshold(count: int, thresholds: Iterable[Threshold]) -> Optional[Threshold]:
    """
    Tim threshold ap dung cho count.

    Args:
        count: Line count hoac token count
        thresholds: Thresholds theo thu tu bat ky

    Returns:
        Threshold co value lon nhat ma van <= count, None neu khong co
    """
    # sorted() stable ca khi reverse=True: value trung nhau giu thu tu goc
    for threshold in sorted(thresholds, key=lambda t: t.value, reverse=True):
        if count >= threshold.value:
            return threshold
    return None


def classify(count: int, thresholds: Iterable[Threshold]) -> str:
    """
    Map count sang indicator symbol.

    Khong co threshold nao <= count (hoac list rong) -> DEFAULT_INDICATOR.
    """
    threshold = find_threshold(count, thresholds)
    if threshold is None:
        return DEFAULT_INDICATOR
    return threshold.indicator
