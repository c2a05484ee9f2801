from __future__ import annotations

import asyncio

import httpx

import umami_logger
from umami_logger import BrowserContext, UmamiLogger


def _wire_default(collector):
    reporter = UmamiLogger.get_instance()
    reporter.environment = BrowserContext.from_url("https://example.com/home", language="en")
    reporter.transport = httpx.MockTransport(collector)
    return reporter


def test_facade_forwards_to_default_reporter(collector):
    _wire_default(collector)
    umami_logger.initialize({"baseUrl": "https://umami.is", "websiteId": "w1"})

    asyncio.run(umami_logger.track_page_view())
    asyncio.run(umami_logger.track_event("click", {"button": "buy"}))
    asyncio.run(umami_logger.track("signup"))
    asyncio.run(umami_logger.track_revenue("purchase", 5, "EUR"))

    names = [body["payload"].get("name") for body in collector.bodies]
    assert names == [None, "click", "signup", "purchase"]
    assert umami_logger.get_config().website_id == "w1"


def test_facade_identity_and_tag(collector):
    _wire_default(collector)
    umami_logger.initialize({"baseUrl": "https://umami.is", "websiteId": "w1"})

    asyncio.run(umami_logger.identify("user-1", {"plan": "pro"}))
    umami_logger.set_tag("beta")
    asyncio.run(umami_logger.track_page_view())

    assert umami_logger.get_session_id() == "user-1"
    assert umami_logger.get_session_data() == {"plan": "pro"}
    assert collector.last_payload["tag"] == "beta"
    assert collector.last_payload["id"] == "user-1"

    umami_logger.clear_tag()
    umami_logger.clear_identity()
    assert umami_logger.get_config().tag is None
    assert umami_logger.get_session_id() is None


def test_facade_reset():
    umami_logger.initialize({"baseUrl": "https://umami.is", "websiteId": "w1"})

    umami_logger.reset()

    assert umami_logger.get_config() is None
    assert asyncio.run(umami_logger.track_page_view()) is None
