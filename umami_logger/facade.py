"""Module-level shortcuts bound to the process-wide :class:`UmamiLogger`.

Usage::

    import umami_logger

    umami_logger.initialize({"baseUrl": "https://cloud.umami.is", "websiteId": "..."})
    await umami_logger.track_event("signup", {"plan": "pro"})

Applications that need several reporters, or a custom environment, should
create :class:`~umami_logger.reporter.UmamiLogger` instances directly.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from .config import UmamiConfig
from .models import EventData, UmamiResponse
from .reporter import TrackArgument, UmamiLogger


def initialize(config: Union[UmamiConfig, Mapping[str, Any]]) -> None:
    UmamiLogger.get_instance().initialize(config)


async def track_event(event_name: str, event_data: Optional[EventData] = None) -> Optional[UmamiResponse]:
    return await UmamiLogger.get_instance().log_event(event_name, event_data)


async def track_page_view(override_url: Optional[str] = None) -> Optional[UmamiResponse]:
    return await UmamiLogger.get_instance().track_page_view(override_url)


async def track(event: TrackArgument = None, data: Optional[EventData] = None) -> Optional[UmamiResponse]:
    """Mirror of the browser tracker's ``umami.track()``.

    ``track()`` records a page view, ``track("name", data)`` a named event,
    ``track({...})`` merges fields into the payload and ``track(fn)`` lets
    ``fn`` rewrite the payload before it is merged.
    """
    return await UmamiLogger.get_instance().track(event, data)


async def track_revenue(
    event_name: str,
    revenue: float,
    currency: str,
    additional_data: Optional[EventData] = None,
) -> Optional[UmamiResponse]:
    return await UmamiLogger.get_instance().track_revenue(event_name, revenue, currency, additional_data)


async def identify(
    unique_id_or_data: Union[None, str, EventData] = None,
    data: Optional[EventData] = None,
) -> Optional[UmamiResponse]:
    return await UmamiLogger.get_instance().identify(unique_id_or_data, data)


def get_session_id() -> Optional[str]:
    return UmamiLogger.get_instance().get_session_id()


def get_session_data() -> Optional[EventData]:
    return UmamiLogger.get_instance().get_session_data()


def clear_identity() -> None:
    UmamiLogger.get_instance().clear_identity()


def set_tag(tag: str) -> None:
    UmamiLogger.get_instance().set_tag(tag)


def clear_tag() -> None:
    UmamiLogger.get_instance().clear_tag()


def get_config() -> Optional[UmamiConfig]:
    return UmamiLogger.get_instance().get_config()


def reset() -> None:
    UmamiLogger.reset_instance()
