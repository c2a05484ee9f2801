from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

BeforeSend = Callable[[Dict[str, Any]], Any]

# JS tracker option names -> dataclass fields
ALIASES = {
    "baseUrl": "base_url",
    "websiteId": "website_id",
    "hostName": "host_name",
    "doNotTrack": "do_not_track",
    "excludeSearch": "exclude_search",
    "excludeHash": "exclude_hash",
    "beforeSend": "before_send",
}


def _as_bool(name: str, raw: Any, default: bool) -> bool:
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() in {"1", "true", "yes", "on"}
    logger.warning("Invalid bool for %s: %r. Using default %s.", name, raw, default)
    return default


def _split_list(raw: Any) -> List[str]:
    if not raw:
        return []
    if isinstance(raw, str):
        return [item.strip() for item in raw.split(",") if item.strip()]
    return [str(item).strip() for item in raw if str(item).strip()]


def _as_str(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    return str(raw)


@dataclass(slots=True)
class UmamiConfig:
    base_url: str
    website_id: str
    host_name: Optional[str] = None
    tag: Optional[str] = None
    do_not_track: bool = False
    domains: List[str] = field(default_factory=list)
    exclude_search: bool = False
    exclude_hash: bool = False
    before_send: Optional[BeforeSend] = None

    @property
    def send_url(self) -> str:
        return f"{self.base_url}/api/send"


def config_from_mapping(options: Mapping[str, Any]) -> UmamiConfig:
    """Build an :class:`UmamiConfig` from tracker-style options.

    Accepts the camelCase names used by the browser tracker (``baseUrl``,
    ``websiteId``, ``doNotTrack``...) as well as the dataclass field names.
    Unknown keys are ignored with a warning.
    """
    known = {f.name for f in fields(UmamiConfig)}
    values: Dict[str, Any] = {}
    for key, value in options.items():
        name = ALIASES.get(key, key)
        if name not in known:
            logger.warning("Ignoring unknown umami option %s", key)
            continue
        values[name] = value

    base_url = _as_str(values.get("base_url")) or ""
    website_id = _as_str(values.get("website_id")) or ""
    if not base_url or not website_id:
        logger.warning("Umami base_url/website_id not set. Events will not be sent.")

    before_send = values.get("before_send")
    if before_send is not None and not callable(before_send):
        logger.warning("before_send is not callable: %r. Ignoring it.", before_send)
        before_send = None

    return UmamiConfig(
        base_url=base_url,
        website_id=website_id,
        host_name=_as_str(values.get("host_name")),
        tag=_as_str(values.get("tag")),
        do_not_track=_as_bool("do_not_track", values.get("do_not_track"), False),
        domains=_split_list(values.get("domains")),
        exclude_search=_as_bool("exclude_search", values.get("exclude_search"), False),
        exclude_hash=_as_bool("exclude_hash", values.get("exclude_hash"), False),
        before_send=before_send,
    )
