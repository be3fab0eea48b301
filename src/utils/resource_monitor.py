"""
CPU and memory throttling for bulk fingerprint runs.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

import psutil

if TYPE_CHECKING:
    from config import AppConfig

logger = logging.getLogger("content_fingerprint")


@dataclass
class ResourceMonitor:
    """Pause work submission while CPU or RAM usage is above its limit."""

    max_cpu_percent: float
    max_ram_percent: float
    sleep_seconds: float = 0.5
    max_throttle_seconds: float = 15.0
    min_check_interval_seconds: float = 0.5
    _last_check: float = field(default=0.0, init=False, repr=False)

    def __post_init__(self) -> None:
        # Prime psutil so the first real sample is not 0.0.
        psutil.cpu_percent(interval=None)

    @classmethod
    def from_config(cls, config: "AppConfig") -> Optional["ResourceMonitor"]:
        """Build a monitor from ``resource_limits``; None when both limits are off."""
        max_cpu = float(config.get("resource_limits", "max_cpu_percent", default=0) or 0)
        max_ram = float(config.get("resource_limits", "max_ram_percent", default=0) or 0)
        if max_cpu <= 0 and max_ram <= 0:
            return None
        return cls(max_cpu_percent=max_cpu, max_ram_percent=max_ram)

    @property
    def enabled(self) -> bool:
        return self.max_cpu_percent > 0 or self.max_ram_percent > 0

    def over_limit(self) -> bool:
        cpu = psutil.cpu_percent(interval=0.1)
        ram = psutil.virtual_memory().percent
        cpu_over = self.max_cpu_percent > 0 and cpu > self.max_cpu_percent
        ram_over = self.max_ram_percent > 0 and ram > self.max_ram_percent
        return cpu_over or ram_over

    def throttle(self) -> float:
        """Block until usage drops or the wait cap is hit; return seconds waited."""
        if not self.enabled:
            return 0.0
        now = time.monotonic()
        if (now - self._last_check) < self.min_check_interval_seconds:
            return 0.0
        self._last_check = now
        waited = 0.0
        while self.over_limit():
            if waited >= self.max_throttle_seconds:
                logger.warning("Resource limits still exceeded after %.1fs; continuing", waited)
                break
            time.sleep(self.sleep_seconds)
            waited += self.sleep_seconds
        if waited:
            logger.debug("Throttled fingerprint submission for %.1fs", waited)
        return waited
