# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: CRMHealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict

from api.schemas.health import DeepHealthResponse, KeepAliveResponse, SmokeTestSummary
from health.TestRunner import TestRunner
from persistence.Database import Database
from utility.keepalive import KeepAliveState


@dataclass
class CRMHealthService:
    """
    Wraps TestRunner (smoke tests on the database and OpenAI) and the
    keep-alive ping. Returns API-layer response models.
    """

    test_runner: TestRunner
    db: Database
    keepalive: KeepAliveState

    def deep_health(self, run_heavy_openai: bool = False) -> DeepHealthResponse:
        results = self.test_runner.run_all(run_heavy_openai=run_heavy_openai)

        total = len(results)
        passed = sum(1 for ok in results.values() if ok)
        failed = total - passed

        return DeepHealthResponse(
            status="ok" if failed == 0 else "error",
            results=results,
            summary=SmokeTestSummary(total=total, passed=passed, failed=failed),
        )

    def keep_alive(self) -> KeepAliveResponse:
        ping: Dict[str, Any] = self.keepalive.ping_database(self.db)
        status = self.keepalive.status()

        return KeepAliveResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            database={
                "pinged": ping["pinged"],
                "success": ping["success"],
                "message": ping["message"],
                **status,
            },
        )
