from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Dict, Optional, Union

import httpx

from . import __version__
from .config import UmamiConfig, config_from_mapping
from .environment import BrowserContext, Environment, is_opted_out
from .metrics import track_failed, track_sent, track_skipped
from .models import Envelope, EventData, UmamiPayload, UmamiResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = httpx.Timeout(10.0, connect=5.0)
USER_AGENT = f"umami-logger/{__version__}"

PayloadCallback = Callable[[UmamiPayload], Optional[Mapping[str, Any]]]
TrackArgument = Union[None, str, Mapping[str, Any], PayloadCallback]
ErrorCallback = Callable[["SendError"], None]


class SendError(Exception):
    """Passed to ``on_error`` when an event could not be delivered."""

    def __init__(self, message: str, envelope: Optional[Envelope] = None) -> None:
        super().__init__(message)
        self.envelope = envelope


class UmamiLogger:
    """Builds Umami event payloads and posts them to ``<base_url>/api/send``.

    Every tracking coroutine resolves normally: missing configuration,
    gating and ``before_send`` vetoes return ``None`` without sending, and
    transport errors are logged, handed to ``on_error`` and swallowed.
    """

    _instance: Optional["UmamiLogger"] = None

    def __init__(
        self,
        environment: Optional[Environment] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        self.environment: Environment = environment or BrowserContext()
        self.transport = transport
        self.on_error = on_error
        self.config: Optional[UmamiConfig] = None
        self._session_id: Optional[str] = None
        self._session_data: Optional[EventData] = None

    @classmethod
    def get_instance(cls) -> "UmamiLogger":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        cls._instance = None

    def initialize(self, config: Union[UmamiConfig, Mapping[str, Any]]) -> None:
        if not isinstance(config, UmamiConfig):
            config = config_from_mapping(config)
        self.config = config

    def get_config(self) -> Optional[UmamiConfig]:
        return self.config

    def reset(self) -> None:
        self.config = None
        self.clear_identity()

    # -- payload --------------------------------------------------------

    def build_url(self, override_url: Optional[str] = None) -> str:
        env = self.environment
        url = override_url or env.pathname
        if not (self.config and self.config.exclude_search):
            url += env.search or ""
        if not (self.config and self.config.exclude_hash):
            url += env.hash or ""
        return url

    def build_base_payload(self, override_url: Optional[str] = None) -> UmamiPayload:
        env = self.environment
        config = self.config
        payload: UmamiPayload = {
            "hostname": (config and config.host_name) or env.hostname,
            "language": env.language,
            "referrer": env.referrer or "",
            "screen": f"{env.screen_width}x{env.screen_height}",
            "title": env.title,
            "url": self.build_url(override_url),
            "website": config.website_id if config else "",
        }
        if config and config.tag:
            payload["tag"] = config.tag
        if self._session_id:
            payload["id"] = self._session_id
        return payload

    # -- gating ---------------------------------------------------------

    def _block_reason(self) -> Optional[str]:
        config = self.config
        if config is None:
            return "unconfigured"
        if config.do_not_track and is_opted_out(self.environment.do_not_track_signals()):
            return "do_not_track"
        if config.domains and self.environment.hostname not in config.domains:
            return "domain"
        return None

    def is_tracking_blocked(self) -> bool:
        return self._block_reason() is not None

    def _skip(self) -> bool:
        reason = self._block_reason()
        if reason is None:
            return False
        track_skipped(reason)
        return True

    # -- tracking -------------------------------------------------------

    async def track_page_view(self, override_url: Optional[str] = None) -> Optional[UmamiResponse]:
        if self._skip():
            return None
        payload = self.build_base_payload(override_url)
        if self._session_data is not None:
            payload["data"] = self._session_data
        return await self._send_data(Envelope(dict(payload)))

    async def track(
        self,
        event: TrackArgument = None,
        data: Optional[EventData] = None,
    ) -> Optional[UmamiResponse]:
        if event is None:
            return await self.track_page_view()
        if self._skip():
            return None

        payload: Dict[str, Any] = dict(self.build_base_payload())
        if isinstance(event, str):
            payload["name"] = event
            if data is not None:
                payload["data"] = data
        elif callable(event):
            try:
                changes = event(dict(payload))
            except Exception as exc:
                self._report(SendError(f"track callback failed: {exc}"), exc)
                return None
            if changes is not None and not isinstance(changes, Mapping):
                self._report(SendError(f"track callback returned {type(changes).__name__}"), None)
                return None
            payload.update(changes or {})
        elif isinstance(event, Mapping):
            payload.update(event)
        else:
            logger.warning("Unsupported track argument %r", event)
            return None
        return await self._send_data(Envelope(payload))

    async def log_event(self, event_name: str, event_data: Optional[EventData] = None) -> Optional[UmamiResponse]:
        if not self.config or not event_name:
            track_skipped("unconfigured" if not self.config else "empty_name")
            return None
        return await self.track(event_name, {} if event_data is None else event_data)

    async def track_revenue(
        self,
        event_name: str,
        revenue: float,
        currency: str,
        additional_data: Optional[EventData] = None,
    ) -> Optional[UmamiResponse]:
        if not self.config or not event_name:
            track_skipped("unconfigured" if not self.config else "empty_name")
            return None
        data: EventData = {"revenue": revenue, "currency": currency}
        data.update(additional_data or {})
        return await self.track(event_name, data)

    async def identify(
        self,
        unique_id_or_data: Union[None, str, EventData] = None,
        data: Optional[EventData] = None,
    ) -> Optional[UmamiResponse]:
        if not self.config:
            track_skipped("unconfigured")
            return None

        if isinstance(unique_id_or_data, str):
            self._session_id = unique_id_or_data
            if data is not None:
                self._session_data = dict(data)
        elif isinstance(unique_id_or_data, Mapping):
            self._session_data = dict(unique_id_or_data)

        if self._skip():
            return None
        payload = self.build_base_payload()
        if self._session_data is not None:
            payload["data"] = self._session_data
        return await self._send_data(Envelope(dict(payload)))

    # -- identity & tag -------------------------------------------------

    def get_session_id(self) -> Optional[str]:
        return self._session_id

    def get_session_data(self) -> Optional[EventData]:
        return self._session_data

    def clear_identity(self) -> None:
        self._session_id = None
        self._session_data = None

    def set_tag(self, tag: str) -> None:
        if self.config is not None:
            self.config.tag = tag

    def clear_tag(self) -> None:
        if self.config is not None:
            self.config.tag = None

    # -- transport ------------------------------------------------------

    async def _send_data(self, envelope: Envelope) -> Optional[UmamiResponse]:
        config = self.config
        if config is None or not config.base_url:
            track_skipped("no_endpoint")
            return None
        api_url = config.send_url
        before_send = config.before_send

        if before_send is not None:
            try:
                result = before_send(envelope.payload)
            except Exception as exc:
                self._report(SendError(f"before_send failed: {exc}", envelope), exc)
                return None
            if result is None or result is False:
                track_skipped("before_send")
                return None
            if not isinstance(result, Mapping):
                self._report(SendError(f"before_send returned {type(result).__name__}", envelope), None)
                return None
            envelope = Envelope(dict(result), envelope.type)

        async with httpx.AsyncClient(timeout=DEFAULT_TIMEOUT, transport=self.transport) as client:
            try:
                response = await client.post(
                    api_url,
                    json=envelope.to_dict(),
                    headers={"User-Agent": USER_AGENT},
                )
                response.raise_for_status()
                body = response.json()
            except (httpx.HTTPError, httpx.InvalidURL, TypeError, ValueError) as exc:
                self._report(SendError(f"Error sending data: {exc}", envelope), exc)
                return None

        track_sent()
        logger.debug("umami %s sent to %s", envelope.type, api_url)
        return body

    def _report(self, error: SendError, cause: Optional[BaseException]) -> None:
        error.__cause__ = cause
        track_failed()
        logger.warning("%s", error)
        if self.on_error is None:
            return
        try:
            self.on_error(error)
        except Exception:
            logger.exception("Umami on_error callback failed")
