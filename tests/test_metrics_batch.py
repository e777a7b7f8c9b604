"""
Tests cho core.metrics.batch - split_batches() va count_batch().
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import patch

import pytest

from config.counting_config import CountMode, Threshold
from core.metrics.batch import count_batch, split_batches
from core.metrics.cache import MetricsCache
from core.metrics.types import FileMetrics

THRESHOLDS = (Threshold(0, "⚪"), Threshold(2, "🔵"))


class TestSplitBatches:
    def test_even_split(self):
        assert split_batches(["a", "b", "c", "d"], 2) == [["a", "b"], ["c", "d"]]

    def test_remainder(self):
        assert split_batches(["a", "b", "c"], 2) == [["a", "b"], ["c"]]

    def test_empty(self):
        assert split_batches([], 20) == []

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            split_batches(["a"], 0)


class TestCountBatch:
    def _write(self, tmp_path: Path, name: str, content: str) -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_counts_and_commits(self, tmp_path: Path):
        a = self._write(tmp_path, "a.py", "1\n2\n")
        b = self._write(tmp_path, "b.py", "1\n")
        cache = MetricsCache()

        with ThreadPoolExecutor(max_workers=2) as executor:
            results = count_batch([a, b], executor, cache, CountMode.LINES, THRESHOLDS)

        assert set(results) == {a, b}
        assert cache.get_file(a).line_count == 2
        assert cache.get_file(a).indicator == "🔵"
        assert cache.get_file(b).indicator == "⚪"

    def test_skips_cached_files(self, tmp_path: Path):
        a = self._write(tmp_path, "a.py", "1\n2\n")
        cached = FileMetrics(path=a, line_count=99, indicator="X")
        cache = MetricsCache()
        cache.set_file(cached)

        with ThreadPoolExecutor(max_workers=2) as executor:
            results = count_batch([a], executor, cache, CountMode.LINES, THRESHOLDS)

        assert results == {}
        assert cache.get_file(a) is cached

    def test_force_refresh_recounts(self, tmp_path: Path):
        a = self._write(tmp_path, "a.py", "1\n2\n")
        cache = MetricsCache()
        cache.set_file(FileMetrics(path=a, line_count=99, indicator="X"))

        with ThreadPoolExecutor(max_workers=2) as executor:
            count_batch(
                [a], executor, cache, CountMode.LINES, THRESHOLDS, force_refresh=True
            )

        assert cache.get_file(a).line_count == 2

    def test_unexpected_error_gives_zero_metrics(self, tmp_path: Path):
        a = self._write(tmp_path, "a.py", "1\n")
        cache = MetricsCache()

        with patch("core.metrics.batch.count_file", side_effect=RuntimeError("boom")), \
                patch("core.metrics.batch.log_error") as mock_error:
            with ThreadPoolExecutor(max_workers=1) as executor:
                count_batch([a], executor, cache, CountMode.LINES, THRESHOLDS)

        assert cache.get_file(a).line_count == 0
        mock_error.assert_called_once()
