"""
Batch/parallel metric counting.

Functions:
- split_batches(): Chia list files thanh cac batch co kich thuoc co dinh
- count_batch(): Dem mot batch voi ThreadPoolExecutor (tat ca files song song)

AN TOAN RACE CONDITION:
- Moi file doc doc lap boi 1 worker
- Khong ghi cache trong worker (tranh lock contention)
- Collect results vao local dict
- Ghi cache MOT LAN o cuoi batch voi lock

Batch da dispatch luon chay het va commit ket qua: cancellation
chi duoc check GIUA cac batch (o IndexingController).
"""

from concurrent.futures import Executor, as_completed
from typing import Dict, Iterable, List, Sequence

from config.counting_config import CountMode, Threshold
from core.logging_config import log_error
from core.metrics.cache import MetricsCache
from core.metrics.counter import zero_metrics, count_file
from core.metrics.types import FileMetrics


def split_batches(paths: Sequence[str], batch_size: int) -> List[List[str]]:
    """
    Chia paths thanh cac batch lien tiep, giu nguyen thu tu.

    Raises:
        ValueError: batch_size < 1
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")
    return [list(paths[i : i + batch_size]) for i in range(0, len(paths), batch_size)]


def count_batch(
    paths: Iterable[str],
    executor: Executor,
    cache: MetricsCache,
    count_mode: CountMode,
    thresholds: Sequence[Threshold],
    force_refresh: bool = False,
) -> Dict[str, FileMetrics]:
    """
    Dem mot batch files song song va ghi ket qua vao cache.

    File da co trong cache duoc bo qua tru khi force_refresh.
    Ham block den khi moi file trong batch xong.

    Args:
        paths: Files cua batch
        executor: Executor cua run hien tai (max_workers = batch size)
        cache: MetricsCache de check skip va commit ket qua
        count_mode: Count dung de classify
        thresholds: Thresholds cua config snapshot
        force_refresh: Dem lai ca files da cache

    Returns:
        Dict path -> FileMetrics cua cac file da dem trong batch nay
    """
    pending = [p for p in paths if force_refresh or not cache.has_file(p)]
    if not pending:
        return {}

    futures = {
        executor.submit(count_file, path, count_mode, thresholds): path
        for path in pending
    }

    results: Dict[str, FileMetrics] = {}
    for future in as_completed(futures):
        path = futures[future]
        try:
            results[path] = future.result()
        except Exception as e:
            # count_file da tu xu ly loi I/O, day la loi ngoai du kien
            log_error(f"[Batch] Counting failed for {path}", e)
            results[path] = zero_metrics(path)

    # Update cache MOT LAN (an toan, khong contention trong loop)
    cache.set_files(results)
    return results
