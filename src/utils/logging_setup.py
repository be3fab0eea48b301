"""
Logging configuration for content fingerprinting.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional, Union

if TYPE_CHECKING:
    from config import AppConfig

BASE_LOGGER = "content_fingerprint"
PERFORMANCE_LOGGER = "content_fingerprint.performance"


def setup_logging(log_dir: Optional[Path] = None, level: Union[int, str] = "INFO") -> Dict[str, logging.Logger]:
    """Initialize loggers and return a mapping of named loggers.

    Console output is always enabled; dated master and error logs are
    written only when ``log_dir`` is given. Calling this twice keeps the
    handlers from the first call.
    """
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    date_stamp = datetime.now(timezone.utc).strftime("%Y%m%d")
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)

    base_logger = logging.getLogger(BASE_LOGGER)
    base_logger.setLevel(level)
    if not base_logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        base_logger.addHandler(stream_handler)

        if log_dir is not None:
            file_handler = logging.FileHandler(log_dir / f"master_log_{date_stamp}.log", encoding="utf-8")
            file_handler.setFormatter(formatter)
            base_logger.addHandler(file_handler)

            error_handler = logging.FileHandler(log_dir / f"error_log_{date_stamp}.log", encoding="utf-8")
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            base_logger.addHandler(error_handler)

    performance_logger = logging.getLogger(PERFORMANCE_LOGGER)
    if not performance_logger.handlers:
        performance_logger.setLevel(logging.INFO)
        if log_dir is not None:
            perf_handler: logging.Handler = logging.FileHandler(
                log_dir / f"performance_log_{date_stamp}.log", encoding="utf-8"
            )
        else:
            perf_handler = logging.StreamHandler()
        perf_handler.setFormatter(formatter)
        performance_logger.addHandler(perf_handler)
        performance_logger.propagate = False

    return {"main": base_logger, "performance": performance_logger}


def setup_logging_from_config(config: "AppConfig") -> Dict[str, logging.Logger]:
    """Configure logging from the ``paths.logs`` and ``logging.level`` keys."""
    log_dir = config.resolve_path("paths", "logs") if config.get("paths", "logs") else None
    level = str(config.get("logging", "level", default="INFO")).upper()
    return setup_logging(log_dir, level=level)
