"""Health check registry backing the /health endpoints."""

import logging
import threading
from collections.abc import Callable
from typing import Any

from app.config import Settings
from app.utils.lifecycle_coordinator import LifecycleCoordinatorProtocol

logger = logging.getLogger(__name__)

HealthCheck = Callable[[], dict[str, Any]]


class HealthService:
    """Collects named health checks and evaluates them for the health endpoints.

    A check returns a dict that is included in the readiness response under the
    check's name. Readiness fails when any check reports ``"ok": False`` or
    raises.
    """

    def __init__(
        self,
        lifecycle_coordinator: LifecycleCoordinatorProtocol,
        settings: Settings,
    ):
        self.lifecycle_coordinator = lifecycle_coordinator
        self.settings = settings
        self._lock = threading.Lock()
        self._readyz_checks: dict[str, HealthCheck] = {}

    def register_readyz(self, name: str, check: HealthCheck) -> None:
        with self._lock:
            self._readyz_checks[name] = check

    def check_readyz(self) -> tuple[dict[str, Any], int]:
        if self.lifecycle_coordinator.is_shutting_down():
            return {"status": "shutting down", "ready": False}, 503

        results, ok = self._run_checks(self._readyz_checks)
        status = "ready" if ok else "not ready"
        return {"status": status, "ready": ok, **results}, 200 if ok else 503

    def check_healthz(self) -> tuple[dict[str, Any], int]:
        return {"status": "alive", "ready": True}, 200

    def _run_checks(
        self, checks: dict[str, HealthCheck]
    ) -> tuple[dict[str, Any], bool]:
        with self._lock:
            items = list(checks.items())

        results: dict[str, Any] = {}
        all_ok = True

        for name, check in items:
            try:
                result = check()
            except Exception as e:
                logger.error(f"Health check {name} failed: {e}")
                result = {"ok": False, "error": str(e)}

            results[name] = result
            if not result.get("ok", False):
                all_ok = False

        return results, all_ok
