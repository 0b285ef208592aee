# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-09-10
# Description: TestRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

from utility.logging_utils import get_class_logger


class TestRunner:
    """
    Orchestrates all smoke tests and reports a consolidated result.

    Tests included:
      - DatabaseHealth  (SELECT 1 + schema present)
      - EmbeddingHealth (OpenAI embeddings)
      - OpenAIHealth    (OpenAI chat, optional tool-call probe)
    """

    __test__ = False  # not a pytest class

    def __init__(
            self,
            *,
            database_health,
            embedding_health=None,
            openai_health=None,
            logger: Optional[logging.Logger] = None,
    ):
        self.database_health = database_health
        self.embedding_health = embedding_health
        self.openai_health = openai_health
        self.logger = logger or get_class_logger(self.__class__)

    # -------------------------------------------------------------------------
    def run_all(self, run_heavy_openai: bool = False) -> Dict[str, bool]:
        """
        Run all configured smoke tests.

        :param run_heavy_openai: If True, runs the tool-call probe as well.
        :return: Dict mapping test names to True/False.
        """
        self.logger.info("Starting smoke test suite (run_heavy_openai=%s)", run_heavy_openai)

        results: Dict[str, bool] = {}
        self._run(results, "database_health", "DatabaseHealth", self.database_health.run)

        if self.embedding_health is not None:
            self._run(results, "embedding_health", "EmbeddingHealth", self.embedding_health.run)

        if self.openai_health is not None:
            self._run(results, "openai_health", "OpenAIHealth", self.openai_health.run)
            if run_heavy_openai:
                self._run(
                    results, "openai_tool_call_health", "OpenAIHealth (tool call)",
                    self.openai_health.run_tool_call_test,
                )

        self._log_summary(results)
        return results

    def _run(self, results: Dict[str, bool], key: str, name: str, check: Callable[[], bool]) -> None:
        try:
            self.logger.info("Running %s", name)
            ok = bool(check())
        except Exception as e:
            self.logger.exception("%s raised an exception: %s", name, e)
            ok = False
        results[key] = ok
        self._log_result(name, ok)

    # -------------------------------------------------------------------------
    def _log_result(self, name: str, ok: bool) -> None:
        if ok:
            self.logger.info("%s: PASS", name)
        else:
            self.logger.error("%s: FAIL", name)

    def _log_summary(self, results: Dict[str, bool]) -> None:
        total = len(results)
        passed = sum(1 for v in results.values() if v)
        failed = total - passed

        self.logger.info("Smoke test summary: %d total, %d passed, %d failed", total, passed, failed)

        for name, ok in results.items():
            status = "PASS" if ok else "FAIL"
            self.logger.info("  %s: %s", name, status)
