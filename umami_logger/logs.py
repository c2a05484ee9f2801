from __future__ import annotations

from logging.config import dictConfig

LOG_FORMAT = "%(asctime)s [umami] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = "INFO", stream: str = "ext://sys.stderr", propagate: bool = False) -> None:
    """Attach a console handler to the ``umami_logger`` logger tree.

    Host applications that already configure logging can skip this and
    keep records flowing to their root handlers. httpx's per-request INFO
    lines are raised to WARNING so every tracked event does not log twice.
    """
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"umami": {"format": LOG_FORMAT}},
            "handlers": {
                "umami_console": {
                    "class": "logging.StreamHandler",
                    "formatter": "umami",
                    "stream": stream,
                }
            },
            "loggers": {
                "umami_logger": {
                    "handlers": ["umami_console"],
                    "level": level,
                    "propagate": propagate,
                },
                "httpx": {"level": "WARNING"},
            },
        }
    )
