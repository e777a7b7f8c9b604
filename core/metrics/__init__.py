"""
Package core.metrics - Line/token metrics pipeline.

Modules:
- types: FileMetrics, DirectoryMetrics, EntryKind tag
- classifier: count -> indicator theo thresholds
- counter: Doc file, dem lines/tokens (fail softly)
- cache: MetricsCache hai tang (file + directory), thread-safe
- aggregator: Build lai cay directory va tong tu file cache
- batch: Dem mot batch files song song (ThreadPoolExecutor)
- cancellation: CancellationToken cho indexing run
"""
