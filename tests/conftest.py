from __future__ import annotations

import json
from typing import Any, Dict, List

import httpx
import pytest

from umami_logger import BrowserContext, UmamiLogger


class Collector:
    """Records every request posted to the mock Umami endpoint."""

    def __init__(self, status_code: int = 200, body: Any = None) -> None:
        self.status_code = status_code
        self.body = {} if body is None else body
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def bodies(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    @property
    def last_payload(self) -> Dict[str, Any]:
        return self.bodies[-1]["payload"]


@pytest.fixture(autouse=True)
def reset_default_reporter():
    UmamiLogger.reset_instance()
    yield
    UmamiLogger.reset_instance()


@pytest.fixture
def browser() -> BrowserContext:
    return BrowserContext(
        hostname="localhost",
        pathname="/test",
        search="?utm_source=google",
        hash="#section1",
        language="en-US",
        referrer="https://google.com",
        screen_width=1024,
        screen_height=768,
        title="Test Title",
    )


@pytest.fixture
def collector() -> Collector:
    return Collector()


@pytest.fixture
def reporter(browser, collector) -> UmamiLogger:
    return UmamiLogger(environment=browser, transport=httpx.MockTransport(collector))
