# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import threading
from collections.abc import Callable

from portfolio.shared.logging import logger


class ExpiryMonitor:
    """Handle for the background expiry poll.

    ``check`` is called every ``interval`` seconds on a daemon thread until
    ``stop()`` is called. A failing check is logged and the poll goes on.
    """

    def __init__(self, check: Callable[[], bool], *, interval: float, name: str = "session-expiry") -> None:
        self._check = check
        self._interval = max(0.01, float(interval))
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def start(self) -> ExpiryMonitor:
        self._thread.start()
        logger.debug(f"expiry.monitor: start interval={self._interval:.2f}s")
        return self

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout)
        logger.debug("expiry.monitor: stopped")

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._check()
            except Exception:
                logger.exception("expiry.monitor: check failed")


__all__ = ["ExpiryMonitor"]
