"""
Service Interfaces cho IndexingController.

Dinh nghia cac Protocol interfaces ma controller phu thuoc vao, de
tests co the thay bang fake/mock va UI/CLI co the cung cap nguon khac.

Interfaces:
- IFileDiscovery: Tim candidate files trong mot root
- IConfigProvider: Cung cap CountingConfig hien tai
"""

from typing import (
    Iterable,
    List,
    Optional,
    Protocol,
    runtime_checkable,
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from config.counting_config import CountingConfig
    from core.metrics.cancellation import CancellationToken


@runtime_checkable
class IFileDiscovery(Protocol):
    """
    Interface cho file discovery.

    Implementation tu ap dung extension allowlist va exclusion rules.
    Size limit do controller ap dung, khong phai trach nhiem o day.
    """

    def discover(
        self,
        root_path: str,
        supported_extensions: Iterable[str],
        cancel_token: Optional["CancellationToken"] = None,
    ) -> List[str]:
        """
        Tim candidate files trong root.

        Args:
            root_path: Directory root (absolute)
            supported_extensions: Extension allowlist
            cancel_token: Neu bi cancel, tra ve ket qua partial

        Returns:
            List absolute file paths
        """
        ...


@runtime_checkable
class IConfigProvider(Protocol):
    """Interface cho nguon config (settings file, preset, test fixture)."""

    def get_config(self) -> "CountingConfig":
        """Tra ve CountingConfig hien tai."""
        ...
