"""
Bulk fingerprinting and duplicate grouping for files.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from config import AppConfig
from hashing.hasher import Hasher
from utils import ResourceMonitor
from utils.logging_setup import BASE_LOGGER, PERFORMANCE_LOGGER

DuplicateKey = Tuple[int, str, str]


@dataclass(frozen=True)
class FingerprintResult:
    """Outcome of fingerprinting a single file."""

    path: Path
    size: Optional[int]
    hash_type: Optional[str]
    hash_value: Optional[str]
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error_type is None


@dataclass
class FingerprintStats:
    """Summary statistics for a fingerprint run."""

    total_files: int
    hashed_files: int
    error_files: int
    bytes_hashed: int
    duplicate_groups: int
    elapsed_seconds: float


@dataclass
class FingerprintReport:
    results: List[FingerprintResult]
    stats: FingerprintStats
    _groups: Optional[Dict[DuplicateKey, List[Path]]] = field(default=None, init=False, repr=False)

    def duplicate_groups(self) -> Dict[DuplicateKey, List[Path]]:
        """Map (size, hash type, digest) to paths sharing it, two or more per group."""
        if self._groups is None:
            self._groups = group_duplicates(self.results)
        return self._groups


def group_duplicates(results: Iterable[FingerprintResult]) -> Dict[DuplicateKey, List[Path]]:
    groups: Dict[DuplicateKey, List[Path]] = {}
    for result in results:
        if not result.ok or result.size is None or not result.hash_type or not result.hash_value:
            continue
        groups.setdefault((result.size, result.hash_type, result.hash_value), []).append(result.path)
    return {key: paths for key, paths in groups.items() if len(paths) > 1}


class FingerprintEngine:
    """Fingerprint many files, optionally across a worker pool."""

    def __init__(
        self,
        config: AppConfig,
        logger: Optional[logging.Logger] = None,
        monitor: Optional[ResourceMonitor] = None,
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger(BASE_LOGGER)
        self.performance_logger = logging.getLogger(PERFORMANCE_LOGGER)
        self.monitor = monitor if monitor is not None else ResourceMonitor.from_config(config)
        self.hash_threads = config.get_int("resource_limits", "threads", "hashing", default=4)
        self.hasher = Hasher.from_config(config)

    def run(self, paths: Iterable[Path]) -> FingerprintReport:
        """Fingerprint ``paths`` and return results in input order."""
        start_time = time.monotonic()
        path_list = [Path(path) for path in paths]

        if self.hash_threads <= 1:
            results = [self._process_path(path) for path in path_list]
        else:
            results = self._run_pooled(path_list)

        elapsed = time.monotonic() - start_time
        hashed = [result for result in results if result.ok]
        bytes_hashed = sum(result.size or 0 for result in hashed)
        report = FingerprintReport(
            results=results,
            stats=FingerprintStats(
                total_files=len(results),
                hashed_files=len(hashed),
                error_files=len(results) - len(hashed),
                bytes_hashed=bytes_hashed,
                duplicate_groups=0,
                elapsed_seconds=elapsed,
            ),
        )
        report.stats.duplicate_groups = len(report.duplicate_groups())
        self.performance_logger.info(
            "Fingerprinted %s files (%s bytes, %s errors) in %.3fs",
            report.stats.hashed_files,
            bytes_hashed,
            report.stats.error_files,
            elapsed,
        )
        return report

    def _run_pooled(self, path_list: List[Path]) -> List[FingerprintResult]:
        results: List[Optional[FingerprintResult]] = [None] * len(path_list)
        pending: List[Tuple[int, Future]] = []
        max_pending = max(self.hash_threads * 2, 1)
        with ThreadPoolExecutor(max_workers=self.hash_threads) as executor:
            for index, path in enumerate(path_list):
                if self.monitor is not None:
                    self.monitor.throttle()
                pending.append((index, executor.submit(self._process_path, path)))
                if len(pending) >= max_pending:
                    self._drain(pending[: self.hash_threads], results)
                    pending = pending[self.hash_threads :]
            self._drain(pending, results)
        return [result for result in results if result is not None]

    @staticmethod
    def _drain(pending: List[Tuple[int, Future]], results: List[Optional[FingerprintResult]]) -> None:
        for index, future in pending:
            results[index] = future.result()

    def _process_path(self, path: Path) -> FingerprintResult:
        try:
            size = path.stat().st_size
            hash_type = self.hasher.hash_type_for_size(size)
            hash_value = self.hasher.compute(path, size, hash_type)
        except FileNotFoundError as exc:
            return self._error(path, "missing_file", exc)
        except PermissionError as exc:
            return self._error(path, "permission_error", exc)
        except OSError as exc:
            return self._error(path, "read_error", exc)
        return FingerprintResult(path, size, hash_type, hash_value)

    def _error(self, path: Path, error_type: str, exc: OSError) -> FingerprintResult:
        self.logger.warning("Fingerprint error (%s) for %s: %s", error_type, path, exc)
        return FingerprintResult(path, None, None, None, error_type, str(exc))
