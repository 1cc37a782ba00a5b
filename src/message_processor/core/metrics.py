"""
Metrics collection module for monitoring request and message throughput.
"""
from datetime import datetime, timezone
from typing import Any, Dict

import psutil
from structlog import get_logger

logger = get_logger(__name__)


class MetricsCollector:
    """
    Collects and manages application metrics in process memory.

    This class records:
    - System metrics (CPU, memory)
    - Request metrics per endpoint (counts, durations, status codes)
    - Message outcomes per message type (succeeded, failed, cancelled)
    - Rate limit rejections (total; the client is only logged)
    """

    def __init__(self):
        self._metrics: Dict[str, Any] = {
            "system": {},
            "requests": {},
            "messages": {},
            "rate_limit": {"rejections": 0},
        }
        self._start_time = datetime.now(timezone.utc)

    def collect_system_metrics(self) -> Dict[str, Any]:
        """Collect system-level metrics without blocking the event loop."""
        try:
            memory = psutil.virtual_memory()
            metrics = {
                "cpu_percent": psutil.cpu_percent(interval=None),
                "memory_percent": memory.percent,
                "memory_used": memory.used,
                "memory_total": memory.total,
                "uptime": (datetime.now(timezone.utc) - self._start_time).total_seconds(),
            }
            self._metrics["system"] = metrics
            return metrics
        except Exception as e:
            logger.error("metrics_collection_error", error=str(e))
            return {}

    def record_request_metric(
        self,
        endpoint: str,
        method: str,
        status_code: int,
        duration: float
    ) -> None:
        """Record HTTP request metrics."""
        key = f"{method}:{endpoint}"
        entry = self._metrics["requests"].setdefault(
            key, {"count": 0, "total_duration": 0.0, "status_codes": {}}
        )
        entry["count"] += 1
        entry["total_duration"] += duration
        entry["status_codes"][str(status_code)] = entry["status_codes"].get(str(status_code), 0) + 1

    def record_message_metric(self, message_type: str, outcome: str, duration: float) -> None:
        """Record the outcome of one processed message.

        Args:
            message_type: Value of ``messageType`` or ``"unknown"``.
            outcome: ``"succeeded"``, ``"failed"`` or ``"cancelled"``.
            duration: Processing time in seconds.
        """
        entry = self._metrics["messages"].setdefault(
            message_type,
            {"count": 0, "total_duration": 0.0, "succeeded": 0, "failed": 0, "cancelled": 0},
        )
        entry["count"] += 1
        entry["total_duration"] += duration
        entry[outcome] = entry.get(outcome, 0) + 1

    def record_rate_limit_rejection(self, client_id: str) -> None:
        self._metrics["rate_limit"]["rejections"] += 1
        logger.debug("rate_limit_rejection_recorded", client_id=client_id)

    def get_metrics(self) -> Dict[str, Any]:
        """Get all collected metrics."""
        self.collect_system_metrics()
        return self._metrics

    def reset_metrics(self) -> None:
        """Reset all metrics to initial state."""
        self.__init__()


# Global metrics collector instance
metrics_collector = MetricsCollector()
