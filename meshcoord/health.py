"""
Health checks for liveness and readiness probes.
"""
from datetime import datetime, timezone
from typing import Dict, Any
import psutil
from .logging import get_logger
from .server import MasterServer

logger = get_logger()


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class HealthChecker:
    """
    Health checker for the coordination service.

    Provides:
    - Liveness checks (is the service running?)
    - Readiness checks (can the service handle traffic?)

    All state is held in memory, so readiness is driven by available memory.
    """

    def __init__(
        self,
        server: MasterServer,
        service_name: str = "meshcoord",
        version: str = "0.1.0",
        memory_threshold_mb: float = 50.0,
    ):
        self.server = server
        self.service_name = service_name
        self.version = version
        self.memory_threshold_mb = memory_threshold_mb

    def liveness(self) -> Dict[str, Any]:
        """
        Liveness check - basic health check.

        Returns:
            dict: Health status with service info and timestamp
        """
        return {
            "status": "ok",
            "service": self.service_name,
            "version": self.version,
            "timestamp": _utc_now(),
        }

    def readiness(self) -> Dict[str, Any]:
        """
        Readiness check - comprehensive health check.

        Checks:
        - Memory availability
        - Store sizes (informational)

        Returns:
            dict: Readiness status with detailed check results
        """
        checks = {
            "memory": self._check_memory(),
            "stores": self._check_stores(),
        }
        overall_status = "ready"
        if checks["memory"]["status"] == "error":
            overall_status = "not_ready"

        return {
            "status": overall_status,
            "service": self.service_name,
            "version": self.version,
            "timestamp": _utc_now(),
            "checks": checks,
        }

    def _check_stores(self) -> Dict[str, Any]:
        return {
            "status": "ok",
            "events": self.server.event_log.count(),
            "nodes": self.server.node_registry.count(),
            "active_nodes": self.server.node_registry.count_active(),
        }

    def _check_memory(self) -> Dict[str, Any]:
        """
        Check available memory against the configured threshold.

        Returns:
            dict: Memory health check result
        """
        try:
            memory = psutil.virtual_memory()
        except (psutil.Error, OSError) as e:
            logger.warning("memory_health_check_failed", error=str(e))
            return {
                "status": "error",
                "error": str(e),
            }

        available_mb = memory.available / (1024**2)
        if available_mb < self.memory_threshold_mb:
            status = "error"
        elif available_mb < self.memory_threshold_mb * 2:
            status = "warning"
        else:
            status = "ok"

        return {
            "status": status,
            "available_mb": round(available_mb, 2),
            "total_mb": round(memory.total / (1024**2), 2),
            "used_percent": memory.percent,
        }
