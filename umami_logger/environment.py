from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple
from urllib.parse import urlparse

OPT_OUT_VALUES = ("1", "yes", True)
DNT_HEADERS = ("DNT", "X-Do-Not-Track", "Sec-GPC")


class Environment(Protocol):
    hostname: str
    pathname: str
    search: str
    hash: str
    language: str
    referrer: str
    screen_width: int
    screen_height: int
    title: str

    def do_not_track_signals(self) -> Sequence[Any]:
        ...


def is_opted_out(signals: Sequence[Any]) -> bool:
    """Return True when the first non-empty do-not-track signal is an opt-out."""
    for value in signals:
        if value is None or value == "":
            continue
        return value in OPT_OUT_VALUES
    return False


@dataclass(slots=True)
class BrowserContext:
    hostname: str = ""
    pathname: str = "/"
    search: str = ""
    hash: str = ""
    language: str = ""
    referrer: str = ""
    screen_width: int = 0
    screen_height: int = 0
    title: str = ""
    do_not_track: Tuple[Any, ...] = ()

    def do_not_track_signals(self) -> Sequence[Any]:
        return self.do_not_track

    @classmethod
    def from_url(cls, url: str, **values: Any) -> "BrowserContext":
        parsed = urlparse(url)
        values.setdefault("hostname", (parsed.hostname or "").lower())
        values.setdefault("pathname", parsed.path or "/")
        values.setdefault("search", f"?{parsed.query}" if parsed.query else "")
        values.setdefault("hash", f"#{parsed.fragment}" if parsed.fragment else "")
        return cls(**values)

    @classmethod
    def from_headers(cls, url: str, headers: Mapping[str, str], **values: Any) -> "BrowserContext":
        lowered = {key.lower(): value for key, value in headers.items()}

        if not urlparse(url).hostname:
            host = lowered.get("host", "")
            values.setdefault("hostname", host.split(":", 1)[0].lower())
        values.setdefault("language", _first_language(lowered.get("accept-language")))
        values.setdefault("referrer", lowered.get("referer", ""))
        values.setdefault("do_not_track", tuple(lowered.get(name.lower()) for name in DNT_HEADERS))
        return cls.from_url(url, **values)


def _first_language(header: Optional[str]) -> str:
    if not header:
        return ""
    first = header.split(",", 1)[0]
    return first.split(";", 1)[0].strip()
