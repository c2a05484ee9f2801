from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, TypedDict

EVENT_TYPE = "event"

EventData = Dict[str, Any]


class UmamiPayload(TypedDict, total=False):
    hostname: str
    language: str
    referrer: str
    screen: str
    title: str
    url: str
    website: str
    name: str
    data: EventData
    tag: str
    id: str


class UmamiResponse(TypedDict, total=False):
    cache: str
    sessionId: str
    visitId: str


@dataclass(slots=True)
class Envelope:
    payload: Dict[str, Any]
    type: str = EVENT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {"payload": self.payload, "type": self.type}
