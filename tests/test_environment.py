from __future__ import annotations

import pytest

from umami_logger.environment import BrowserContext, is_opted_out


def test_from_url_splits_location():
    env = BrowserContext.from_url("https://Example.com/docs/page?x=1&y=2#intro", title="Docs")

    assert env.hostname == "example.com"
    assert env.pathname == "/docs/page"
    assert env.search == "?x=1&y=2"
    assert env.hash == "#intro"
    assert env.title == "Docs"


def test_from_url_without_path():
    env = BrowserContext.from_url("https://example.com")

    assert env.pathname == "/"
    assert env.search == ""
    assert env.hash == ""


def test_from_headers():
    env = BrowserContext.from_headers(
        "/pricing?plan=pro",
        {
            "Host": "shop.example.com:8443",
            "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
            "Referer": "https://google.com/",
            "DNT": "1",
        },
    )

    assert env.hostname == "shop.example.com"
    assert env.pathname == "/pricing"
    assert env.search == "?plan=pro"
    assert env.language == "de-DE"
    assert env.referrer == "https://google.com/"
    assert env.do_not_track_signals() == ("1", None, None)


def test_from_headers_prefers_url_hostname():
    env = BrowserContext.from_headers("https://a.com/", {"Host": "b.com"})

    assert env.hostname == "a.com"
    assert env.language == ""
    assert env.referrer == ""


@pytest.mark.parametrize(
    "signals, expected",
    [
        (("1",), True),
        (("yes",), True),
        ((True,), True),
        (("0",), False),
        ((False,), False),
        (("no", "1"), False),
        ((None, "", "yes"), True),
        ((), False),
    ],
)
def test_is_opted_out(signals, expected):
    assert is_opted_out(signals) is expected
