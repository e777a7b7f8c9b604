"""
Metric types cho file tree.

FileMetrics va DirectoryMetrics deu mang tag `kind` (EntryKind) de cac
consumer duyet cay dispatch theo tag thay vi isinstance().
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class EntryKind(Enum):
    """Tag cho mot node trong cay metrics."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileMetrics:
    """
    Metrics cua mot file.

    Immutable: re-count tao object moi va ghi de entry cu trong cache.
    """

    path: str
    line_count: int = 0
    token_count: int = 0
    indicator: str = ""
    kind: EntryKind = field(default=EntryKind.FILE, init=False)


@dataclass
class DirectoryMetrics:
    """
    Tong metrics cua mot directory va cac children truc tiep.

    Aggregator tao moi toan bo cay cho moi pass, khong mutate node
    da publish vao cache.
    """

    path: str
    total_line_count: int = 0
    total_token_count: int = 0
    children: List["MetricsEntry"] = field(default_factory=list)
    kind: EntryKind = field(default=EntryKind.DIRECTORY, init=False)

    def find_child(self, path: str) -> Optional["MetricsEntry"]:
        """Tim child truc tiep theo path."""
        for child in self.children:
            if child.path == path:
                return child
        return None


MetricsEntry = Union[FileMetrics, DirectoryMetrics]
