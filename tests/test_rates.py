"""Tests for the currency-rate collaborator: parser, TTL cache, service."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from calk_engine.rates import (
    FALLBACK_RATES,
    CurrencyRateService,
    NBKRRateFetcher,
    RateCache,
    RateFetchError,
    RateParseError,
    convert,
    parse_daily_rates,
)

FEED_URL = "https://rates.test/daily.xml"


def _service(handler, clock, ttl: float = 3600.0) -> CurrencyRateService:
    fetcher = NBKRRateFetcher(url=FEED_URL, transport=httpx.MockTransport(handler))
    return CurrencyRateService(fetcher=fetcher, cache=RateCache(ttl_seconds=ttl, clock=clock))


class CountingHandler:
    """MockTransport handler that serves a fixed response and counts calls."""

    def __init__(self, status_code: int = 200, text: str = ""):
        self.status_code = status_code
        self.text = text
        self.calls = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return httpx.Response(self.status_code, text=self.text)


class TestParseDailyRates:
    def test_parses_tracked_currencies(self, xml_feed):
        parsed = parse_daily_rates(xml_feed)

        assert parsed["date"] == "19.10.2026"
        assert set(parsed["rates"]) == {"USD", "EUR", "RUB", "KZT", "CNY"}
        assert parsed["rates"]["USD"]["rate"] == pytest.approx(87.45)
        assert parsed["rates"]["KZT"]["rate"] == pytest.approx(0.1695)
        assert parsed["rates"]["CNY"]["nominal"] == 10
        assert parsed["rates"]["USD"]["nominal"] == 1
        assert parsed["rates"]["USD"]["name"] == "USD"

    def test_missing_currency_skipped(self, xml_feed):
        feed = xml_feed.replace('ISOCode="RUB"', 'ISOCode="GBP"')
        assert "RUB" not in parse_daily_rates(feed)["rates"]

    def test_unparseable_value_skipped(self, xml_feed):
        feed = xml_feed.replace("<Value>101,2093</Value>", "<Value>n/a</Value>")
        rates = parse_daily_rates(feed)["rates"]
        assert "EUR" not in rates
        assert "USD" in rates

    @pytest.mark.parametrize("raw", ["0,0000", "-87,45", "NaN", "inf"])
    def test_non_positive_value_skipped(self, xml_feed, raw):
        feed = xml_feed.replace("<Value>87,4500</Value>", f"<Value>{raw}</Value>")
        rates = parse_daily_rates(feed)["rates"]
        assert "USD" not in rates
        assert "EUR" in rates

    def test_zero_nominal_becomes_one(self, xml_feed):
        feed = xml_feed.replace("<Nominal>10</Nominal>", "<Nominal>0</Nominal>")
        assert parse_daily_rates(feed)["rates"]["CNY"]["nominal"] == 1

    def test_no_currencies_raises(self):
        with pytest.raises(RateParseError):
            parse_daily_rates("<CurrencyRates Date=\"19.10.2026\"></CurrencyRates>")

    def test_parse_error_is_fetch_error(self):
        assert issubclass(RateParseError, RateFetchError)


class TestRateCache:
    def test_empty(self, clock):
        assert RateCache(clock=clock).get() is None

    def test_fresh_within_ttl(self, clock):
        cache = RateCache(ttl_seconds=3600, clock=clock)
        cache.put({"date": "19.10.2026"})
        clock.advance(3599)

        payload, age = cache.get()
        assert payload == {"date": "19.10.2026"}
        assert age == pytest.approx(3599)

    def test_expired_after_ttl(self, clock):
        cache = RateCache(ttl_seconds=3600, clock=clock)
        cache.put({"date": "19.10.2026"})
        clock.advance(3601)
        assert cache.get() is None

    def test_put_replaces_slot(self, clock):
        cache = RateCache(clock=clock)
        cache.put({"n": 1})
        clock.advance(10)
        cache.put({"n": 2})

        payload, age = cache.get()
        assert payload == {"n": 2}
        assert age == 0

    def test_clear(self, clock):
        cache = RateCache(clock=clock)
        cache.put({"n": 1})
        cache.clear()
        assert cache.get() is None


class TestCurrencyRateService:
    def test_fresh_fetch_then_cached(self, xml_feed, clock):
        handler = CountingHandler(text=xml_feed)
        service = _service(handler, clock)

        first = asyncio.run(service.get_rates())
        assert first["rates"]["USD"]["rate"] == pytest.approx(87.45)
        assert "timestamp" in first
        assert "cached" not in first
        assert "fallback" not in first

        clock.advance(120)
        second = asyncio.run(service.get_rates())
        assert second["cached"] is True
        assert second["cacheAge"] == "120s"
        assert second["rates"] == first["rates"]
        assert handler.calls == 1

    def test_refetch_after_ttl(self, xml_feed, clock):
        handler = CountingHandler(text=xml_feed)
        service = _service(handler, clock, ttl=60)

        asyncio.run(service.get_rates())
        clock.advance(61)
        again = asyncio.run(service.get_rates())

        assert handler.calls == 2
        assert "cached" not in again

    def test_upstream_error_status_gives_fallback(self, clock):
        handler = CountingHandler(status_code=500, text="oops")
        service = _service(handler, clock)

        payload = asyncio.run(service.get_rates())

        assert payload["fallback"] is True
        assert "500" in payload["error"]
        assert payload["rates"]["USD"]["rate"] == FALLBACK_RATES["USD"]["rate"]
        assert set(payload["rates"]) == set(FALLBACK_RATES)

    def test_fallback_not_cached(self, xml_feed, clock):
        handler = CountingHandler(status_code=503)
        service = _service(handler, clock)

        asyncio.run(service.get_rates())
        handler.status_code, handler.text = 200, xml_feed
        recovered = asyncio.run(service.get_rates())

        assert handler.calls == 2
        assert "fallback" not in recovered
        assert recovered["rates"]["USD"]["rate"] == pytest.approx(87.45)

    def test_network_error_gives_fallback(self, clock):
        def unreachable(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        payload = asyncio.run(_service(unreachable, clock).get_rates())
        assert payload["fallback"] is True
        assert "connection refused" in payload["error"]

    def test_unparseable_body_gives_fallback(self, clock):
        handler = CountingHandler(text="<html>maintenance</html>")
        payload = asyncio.run(_service(handler, clock).get_rates())
        assert payload["fallback"] is True

    def test_fallback_table_is_not_mutated(self, clock):
        payload = asyncio.run(_service(CountingHandler(status_code=500), clock).get_rates())
        payload["rates"]["USD"]["rate"] = 0
        assert FALLBACK_RATES["USD"]["rate"] == 87.25


class TestConvert:
    @pytest.fixture
    def rates(self, xml_feed):
        return parse_daily_rates(xml_feed)["rates"]

    def test_foreign_to_kgs(self, rates):
        assert convert(100, rates, "USD", "KGS") == pytest.approx(8745)

    def test_kgs_to_foreign(self, rates):
        assert convert(8745, rates, "KGS", "USD") == pytest.approx(100)

    def test_nominal_applied(self, rates):
        assert convert(10, rates, "CNY", "KGS") == pytest.approx(122.74)

    def test_cross_rate(self, rates):
        assert convert(1, rates, "EUR", "USD") == pytest.approx(101.2093 / 87.45)

    def test_unknown_currency(self, rates):
        with pytest.raises(KeyError):
            convert(1, rates, "GBP", "KGS")

    @pytest.mark.parametrize("rate", [0.0, -1.0, float("nan")])
    def test_unusable_rate_is_unknown(self, rate):
        rates = {"USD": {"code": "USD", "name": "USD", "rate": rate, "nominal": 1}}
        with pytest.raises(KeyError):
            convert(100, rates, "KGS", "USD")
        with pytest.raises(KeyError):
            convert(100, rates, "USD", "KGS")
