"""
Process-wide intake counters for the health endpoint.

Counts are in-memory and reset on restart.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class IntakeMetrics:
    messages_received: int = 0
    messages_processed: int = 0
    errors: int = 0
    reconnections: int = 0
    connected: bool = False
    started_at: float = field(default_factory=time.time)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def record_received(self) -> None:
        with self._lock:
            self.messages_received += 1

    def record_processed(self) -> None:
        with self._lock:
            self.messages_processed += 1

    def record_error(self) -> None:
        with self._lock:
            self.errors += 1

    def record_reconnection(self) -> None:
        with self._lock:
            self.reconnections += 1

    def uptime_seconds(self) -> int:
        return int(time.time() - self.started_at)

    def snapshot(self) -> Dict[str, Any]:
        uptime = self.uptime_seconds()
        hours, rest = divmod(uptime, 3600)
        minutes, seconds = divmod(rest, 60)
        with self._lock:
            return {
                "status": "connected" if self.connected else "disconnected",
                "uptime": f"{hours}h {minutes}m {seconds}s",
                "uptime_seconds": uptime,
                "messages_received": self.messages_received,
                "messages_processed": self.messages_processed,
                "errors": self.errors,
                "reconnections": self.reconnections,
            }


metrics = IntakeMetrics()


def get_metrics() -> IntakeMetrics:
    """FastAPI dependency returning the process-wide counters."""
    return metrics
