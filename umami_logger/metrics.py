from __future__ import annotations

import logging

from prometheus_client import Counter

logger = logging.getLogger(__name__)

EVENTS_SENT = Counter("umami_events_sent", "Events accepted by the collector")
EVENTS_FAILED = Counter("umami_events_failed", "Events that failed to send")
EVENTS_SKIPPED = Counter("umami_events_skipped", "Events dropped before sending", ["reason"])


def track_sent() -> None:
    EVENTS_SENT.inc()


def track_failed() -> None:
    EVENTS_FAILED.inc()


def track_skipped(reason: str) -> None:
    logger.debug("umami event skipped reason=%s", reason)
    EVENTS_SKIPPED.labels(reason).inc()
