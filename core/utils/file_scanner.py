"""
File Scanner - Discovery candidate files cho indexing voi cooperative cancellation

Features:
- Walk truc tiep bang os.walk, prune excluded directories TRUOC KHI enter
- Extension allowlist (match theo duoi ten file, ho tro ".d.ts")
- Gitignore-style exclusion qua core.ignore_engine (pathspec)
- CancellationToken duoc check moi directory, tra ve ket qua partial
- Directory khong doc duoc: skip subtree, log warning, tiep tuc
- Throttled progress updates (200ms interval)

Size filter (5MB) KHONG nam o day: IndexingController ap dung cho moi
discovery provider.
"""

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from core.constants import DIRECTORY_QUICK_SKIP
from core.ignore_engine import build_pathspec
from core.logging_config import log_debug, log_warning
from core.metrics.cancellation import CancellationToken


@dataclass
class ScanProgress:
    """
    Progress information during discovery.

    Attributes:
        directories: So directories da scan
        files: So candidate files da tim thay
        current_path: Path dang duoc scan
    """

    directories: int = 0
    files: int = 0
    current_path: str = ""


# Type alias cho progress callback
ProgressCallback = Callable[[ScanProgress], None]


def matches_extension(file_name: str, extensions: Tuple[str, ...]) -> bool:
    """Check ten file co ket thuc bang mot extension trong allowlist (case-insensitive)."""
    return file_name.lower().endswith(extensions)


class FileScanner:
    """
    Discovery provider walk filesystem truc tiep.

    Implement IFileDiscovery: discover(root_path, supported_extensions, cancel_token).
    """

    # Constants
    THROTTLE_INTERVAL_MS = 200  # 200ms giua cac progress updates

    def __init__(
        self,
        excluded_patterns: Optional[List[str]] = None,
        use_gitignore: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        """
        Args:
            excluded_patterns: Patterns them tu user (gitignore format)
            use_gitignore: Co doc .gitignore cua root khong
            progress_callback: Callback nhan ScanProgress (throttled)
        """
        self.excluded_patterns = list(excluded_patterns or [])
        self.use_gitignore = use_gitignore
        self.progress_callback = progress_callback
        self._last_progress_time: float = 0
        self._progress: ScanProgress = ScanProgress()

    def discover(
        self,
        root_path: str,
        supported_extensions: Iterable[str],
        cancel_token: Optional[CancellationToken] = None,
    ) -> List[str]:
        """
        Tim tat ca candidate files trong root.

        Args:
            root_path: Directory root (absolute)
            supported_extensions: Extension allowlist (vd: ".py")
            cancel_token: Token de dung giua chung

        Returns:
            List absolute file paths, sorted theo thu tu walk
            (partial neu bi cancel)
        """
        extensions = tuple(ext.lower() for ext in supported_extensions)
        candidates: List[str] = []
        if not extensions:
            return candidates

        root = Path(root_path)
        spec = build_pathspec(
            root,
            excluded_patterns=self.excluded_patterns,
            use_gitignore=self.use_gitignore,
        )

        # Reset progress
        self._progress = ScanProgress()
        self._last_progress_time = 0

        def on_walk_error(error: OSError) -> None:
            log_warning(f"[FileScanner] Skipping unreadable directory {error.filename}: {error.strerror}")

        for dirpath, dirnames, filenames in os.walk(root_path, onerror=on_walk_error):
            if cancel_token is not None and cancel_token.is_cancelled:
                log_debug(f"[FileScanner] Discovery cancelled in {dirpath}")
                break

            self._progress.directories += 1
            self._progress.current_path = dirpath
            self._emit_progress()

            rel_dir = os.path.relpath(dirpath, root_path)
            rel_prefix = "" if rel_dir == "." else rel_dir.replace(os.sep, "/") + "/"

            # Prune excluded dirs IN-PLACE - os.walk se KHONG enter vao
            dirnames[:] = sorted(
                d
                for d in dirnames
                if d not in DIRECTORY_QUICK_SKIP
                and not spec.match_file(f"{rel_prefix}{d}/")
            )

            for file_name in sorted(filenames):
                if not matches_extension(file_name, extensions):
                    continue
                if spec.match_file(rel_prefix + file_name):
                    continue
                candidates.append(os.path.join(dirpath, file_name))
                self._progress.files += 1

        self._emit_progress(force=True)
        return candidates

    def _emit_progress(self, force: bool = False) -> None:
        """
        Emit progress voi throttling.

        Args:
            force: Bo qua throttle va emit ngay
        """
        if not self.progress_callback:
            return

        current_time = time.time() * 1000  # Convert to ms
        if force or current_time - self._last_progress_time >= self.THROTTLE_INTERVAL_MS:
            self._last_progress_time = current_time
            # Copy progress de an toan
            self.progress_callback(
                ScanProgress(
                    directories=self._progress.directories,
                    files=self._progress.files,
                    current_path=self._progress.current_path,
                )
            )
