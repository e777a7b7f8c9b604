"""
IndexingController - Dieu phoi mot indexing run tren background thread.

State machine: IDLE -> RUNNING -> {FINISHED, CANCELED} -> IDLE
- Chi mot run tai mot thoi diem; start khi dang RUNNING la no-op (tra ve False)
- Moi run co CancellationToken va ThreadPoolExecutor rieng
- Batches chay tuan tu, files trong mot batch chay song song
- Cancellation duoc check giua cac batch (va moi directory khi discovery)
- Sau moi root: aggregate directory tree neu chua bi cancel

Controller khong phai singleton: moi instance so huu MetricsCache,
config snapshot va listeners cua rieng no.
"""

import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence

from config.counting_config import CountingConfig
from core.logging_config import log_debug, log_error, log_info
from core.metrics.aggregator import aggregate
from core.metrics.batch import count_batch, split_batches
from core.metrics.cache import MetricsCache, is_within
from core.metrics.cancellation import CancellationToken
from core.metrics.counter import is_within_size_limit
from core.metrics.types import DirectoryMetrics, FileMetrics
from core.utils.file_scanner import FileScanner
from services.service_interfaces import IFileDiscovery

# So files moi batch (= so workers cua executor)
BATCH_SIZE = 20


class IndexingState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    FINISHED = "finished"
    CANCELED = "canceled"


@dataclass(frozen=True)
class IndexingProgress:
    """
    Progress cua run hien tai.

    Attributes:
        root_path: Root dang duoc xu ly
        processed_files: So files da qua cac batch xong
        total_files: Tong so files cua root sau khi filter
        message: Mo ta phase ("Scanning x...", "Indexing files... n/total", ...)
    """

    root_path: str
    processed_files: int
    total_files: int
    message: str


StateListener = Callable[[bool], None]
ProgressCallback = Callable[[IndexingProgress], None]
VisiblePathsProvider = Callable[[], Iterable[str]]


class IndexingController:
    """
    Controller cho indexing engine.

    Usage:
        controller = IndexingController(config, roots=["/path/to/project"])
        controller.add_state_listener(lambda running: print(running))
        controller.start_indexing()
        controller.wait()
        controller.get_directory_metrics("/path/to/project")
    """

    def __init__(
        self,
        config: CountingConfig,
        roots: Sequence[str] = (),
        cache: Optional[MetricsCache] = None,
        discovery: Optional[IFileDiscovery] = None,
        visible_paths_provider: Optional[VisiblePathsProvider] = None,
        batch_size: int = BATCH_SIZE,
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Args:
            config: Config snapshot ban dau
            roots: Cac directory root can index
            cache: MetricsCache dung chung (default: tao moi)
            discovery: File discovery provider (default: FileScanner)
            visible_paths_provider: Tra ve paths dang hien thi, duoc dem truoc
            batch_size: So files moi batch, >= 1
            on_progress: Callback nhan IndexingProgress
        """
        if batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {batch_size}")

        self._config = config
        self._roots: List[str] = self._normalize_roots(roots)
        self._cache = cache if cache is not None else MetricsCache()
        self._discovery: IFileDiscovery = discovery if discovery is not None else FileScanner()
        self._visible_paths_provider = visible_paths_provider
        self._batch_size = batch_size
        self._on_progress = on_progress

        self._lock = threading.Lock()
        self._state = IndexingState.IDLE
        self._last_outcome: Optional[IndexingState] = None
        self._cancel_token: Optional[CancellationToken] = None
        # Tang moi lan start, worker cu khong ghi de state cua run moi
        self._generation = 0
        self._done = threading.Event()
        self._done.set()

        self._listeners: List[StateListener] = []
        self._listeners_lock = threading.Lock()

    # === Properties ===

    @property
    def cache(self) -> MetricsCache:
        return self._cache

    @property
    def config(self) -> CountingConfig:
        with self._lock:
            return self._config

    @property
    def roots(self) -> List[str]:
        with self._lock:
            return list(self._roots)

    @property
    def state(self) -> IndexingState:
        with self._lock:
            return self._state

    @property
    def last_outcome(self) -> Optional[IndexingState]:
        """FINISHED hoac CANCELED cua run gan nhat (None neu chua chay lan nao)."""
        with self._lock:
            return self._last_outcome

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def is_indexing(self) -> bool:
        return self.state == IndexingState.RUNNING

    # === Configuration ===

    def set_roots(self, roots: Sequence[str]) -> None:
        """Doi danh sach roots. Run dang chay giu danh sach cu."""
        normalized = self._normalize_roots(roots)
        with self._lock:
            self._roots = normalized

    def update_config(self, config: CountingConfig) -> None:
        """
        Doi config va clear toan bo cache.

        Run dang chay tiep tuc voi snapshot cu.
        """
        with self._lock:
            self._config = config
        self._cache.clear_all()
        log_debug("[IndexingController] Config updated, caches cleared")

    def clear_caches(self) -> None:
        """Clear file + directory cache. Goi duoc ca khi dang RUNNING."""
        self._cache.clear_all()

    # === Run control ===

    def start_indexing(self, force_refresh: bool = False) -> bool:
        """
        Bat dau mot run tren background thread.

        Args:
            force_refresh: Dem lai ca files da co trong cache

        Returns:
            False neu dang co run khac, True neu da start
        """
        with self._lock:
            if self._state == IndexingState.RUNNING:
                return False
            self._state = IndexingState.RUNNING
            self._generation += 1
            generation = self._generation
            token = CancellationToken()
            self._cancel_token = token
            config = self._config
            roots = list(self._roots)
            self._done.clear()

        self._notify_state(True)

        worker = threading.Thread(
            target=self._run,
            args=(generation, token, config, roots, force_refresh),
            name="indexing-worker",
            daemon=True,
        )
        worker.start()
        return True

    def cancel_indexing(self) -> None:
        """Yeu cau dung run hien tai tai batch boundary tiep theo."""
        with self._lock:
            if self._state != IndexingState.RUNNING or self._cancel_token is None:
                return
            token = self._cancel_token
        token.cancel()
        log_info("[IndexingController] Cancellation requested")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block den khi run hien tai ket thuc.

        Returns:
            True neu khong con run nao, False neu het timeout
        """
        return self._done.wait(timeout=timeout)

    # === Queries ===

    def get_file_metrics(self, path: str) -> Optional[FileMetrics]:
        return self._cache.get_file(os.path.abspath(path))

    def get_directory_metrics(self, path: str) -> Optional[DirectoryMetrics]:
        return self._cache.get_directory(os.path.abspath(path))

    # === Observers ===

    def add_state_listener(self, listener: StateListener) -> Callable[[], None]:
        """
        Dang ky listener nhan True khi run bat dau, False khi ket thuc.

        Returns:
            Ham remove() de huy dang ky
        """
        with self._listeners_lock:
            self._listeners.append(listener)

        def remove() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return remove

    # === Worker ===

    def _run(
        self,
        generation: int,
        token: CancellationToken,
        config: CountingConfig,
        roots: List[str],
        force_refresh: bool,
    ) -> None:
        started = time.perf_counter()
        try:
            self._index_roots(roots, config, token, force_refresh)
        except Exception as e:
            log_error("[IndexingController] Indexing run failed", e)

        outcome = IndexingState.CANCELED if token.is_cancelled else IndexingState.FINISHED
        with self._lock:
            is_current = generation == self._generation
            if is_current:
                self._state = outcome
                self._last_outcome = outcome

        log_info(
            f"[IndexingController] Run {outcome.value} in "
            f"{time.perf_counter() - started:.2f}s ({self._cache.file_count()} files cached)"
        )
        self._notify_state(False)

        with self._lock:
            if generation == self._generation:
                if self._state == outcome:
                    self._state = IndexingState.IDLE
                self._cancel_token = None
                self._done.set()

    def _index_roots(
        self,
        roots: List[str],
        config: CountingConfig,
        token: CancellationToken,
        force_refresh: bool,
    ) -> None:
        if not roots:
            return

        with ThreadPoolExecutor(
            max_workers=self._batch_size, thread_name_prefix="metrics-count"
        ) as executor:
            for root in roots:
                if token.is_cancelled:
                    return
                self._index_root(root, config, token, force_refresh, executor)

    def _index_root(
        self,
        root: str,
        config: CountingConfig,
        token: CancellationToken,
        force_refresh: bool,
        executor: ThreadPoolExecutor,
    ) -> None:
        self._report(root, 0, 0, f"Scanning {os.path.basename(root) or root}...")

        candidates = self._discovery.discover(root, config.supported_extensions, token)
        files = self._order_visible_first(
            [os.path.abspath(p) for p in candidates if is_within_size_limit(p)]
        )
        total = len(files)
        processed = 0
        log_debug(f"[IndexingController] {total} files to index in {root}")

        for batch in split_batches(files, self._batch_size):
            if token.is_cancelled:
                log_debug(f"[IndexingController] Stopped {root} at {processed}/{total}")
                return
            count_batch(
                batch,
                executor,
                self._cache,
                config.count_mode,
                config.thresholds,
                force_refresh=force_refresh,
            )
            processed += len(batch)
            self._report(root, processed, total, f"Indexing files... {processed}/{total}")
            # Yield cho cac threads khac (UI, readers)
            time.sleep(0)

        if token.is_cancelled:
            return

        self._report(root, processed, total, "Building directory structure...")
        directories = aggregate(root, self._cache.file_entries())
        self._cache.replace_directories(root, directories)

    def _order_visible_first(self, files: List[str]) -> List[str]:
        """Dua files dang hien thi len dau, giu thu tu tuong doi (stable)."""
        if self._visible_paths_provider is None:
            return files
        visible = {os.path.abspath(p) for p in self._visible_paths_provider()}
        if not visible:
            return files
        return sorted(files, key=lambda path: path not in visible)

    # === Notifications ===

    def _notify_state(self, running: bool) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(running)
            except Exception as e:
                log_error("[IndexingController] State listener failed", e)

    def _report(self, root: str, processed: int, total: int, message: str) -> None:
        if self._on_progress is None:
            return
        try:
            self._on_progress(
                IndexingProgress(
                    root_path=root,
                    processed_files=processed,
                    total_files=total,
                    message=message,
                )
            )
        except Exception as e:
            log_error("[IndexingController] Progress callback failed", e)

    @staticmethod
    def _normalize_roots(roots: Sequence[str]) -> List[str]:
        """
        Abspath va bo trung lap. Root nam trong mot root khac bi bo qua,
        directory metrics cua no da co trong cay cua root ngoai.
        """
        unique: List[str] = []
        for root in roots:
            path = os.path.abspath(root)
            if path not in unique:
                unique.append(path)

        result: List[str] = []
        for path in unique:
            if any(other != path and is_within(path, other) for other in unique):
                log_debug(f"[IndexingController] Dropping nested root {path}")
                continue
            result.append(path)
        return result
