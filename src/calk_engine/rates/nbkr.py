"""
National Bank of the Kyrgyz Republic (NBKR) daily exchange-rate feed.

The feed is a small XML document::

    <CurrencyRates Name="..." Date="19.10.2026">
      <Currency ISOCode="USD">
        <Nominal>1</Nominal>
        <Value>87,4500</Value>
      </Currency>
      ...
    </CurrencyRates>

Only a fixed set of currencies is extracted, with regular expressions:
the page needs five numbers, not an XML object model.  Rates are KGS per
``nominal`` units of the foreign currency.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from typing import Any

import httpx

from calk_engine.config.settings import NBKR_DAILY_RATES_URL
from calk_engine.logging_config import get_logger

logger = get_logger(__name__)

TRACKED_CURRENCIES = ("USD", "EUR", "RUB", "KZT", "CNY")

_DATE_RE = re.compile(r'<(?:Date|CurrencyRates)\b[^>]*\bDate="([^"]+)"')
_VALUE_RE = re.compile(r"<Value>([^<]+)</Value>")
_NOMINAL_RE = re.compile(r"<Nominal>([^<]+)</Nominal>")
_TITLE_RE = re.compile(r"<Title>([^<]+)</Title>")


class RateFetchError(Exception):
    """Upstream returned a non-success status or could not be reached."""


class RateParseError(RateFetchError):
    """Upstream answered but the document did not contain usable rates."""


def _currency_block(xml_text: str, code: str) -> str | None:
    pattern = re.compile(
        rf'<Currency\s+ISOCode="{code}"[^>]*>([\s\S]*?)</Currency>',
        re.IGNORECASE,
    )
    match = pattern.search(xml_text)
    return match.group(1) if match else None


def parse_daily_rates(xml_text: str, currencies: tuple[str, ...] = TRACKED_CURRENCIES) -> dict[str, Any]:
    """Extract ``{date, rates}`` from the daily XML.

    Raises:
        RateParseError: If none of the requested currencies has a parseable value
    """
    date_match = _DATE_RE.search(xml_text)
    feed_date = date_match.group(1) if date_match else date.today().isoformat()

    rates: dict[str, dict[str, Any]] = {}
    for code in currencies:
        block = _currency_block(xml_text, code)
        if block is None:
            continue
        value_match = _VALUE_RE.search(block)
        if not value_match:
            continue
        try:
            rate = float(value_match.group(1).strip().replace(",", "."))
        except ValueError:
            logger.warning("Unparseable rate value", currency=code, raw=value_match.group(1))
            continue
        if not math.isfinite(rate) or rate <= 0:
            logger.warning("Non-positive rate value", currency=code, rate=rate)
            continue

        nominal_match = _NOMINAL_RE.search(block)
        title_match = _TITLE_RE.search(block)
        try:
            nominal = int(nominal_match.group(1).strip()) if nominal_match else 1
        except ValueError:
            nominal = 1
        nominal = max(nominal, 1)

        rates[code] = {
            "code": code,
            "name": title_match.group(1).strip() if title_match else code,
            "rate": rate,
            "nominal": nominal,
        }

    if not rates:
        raise RateParseError("No tracked currencies found in NBKR response")

    return {"date": feed_date, "rates": rates}


class NBKRRateFetcher:
    """One GET per call, no retries.

    ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        url: str = NBKR_DAILY_RATES_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> dict[str, Any]:
        """Fetch and parse today's rates.

        Returns:
            ``{date, rates, timestamp}``

        Raises:
            RateFetchError: On non-2xx status or network failure
            RateParseError: If the body holds no usable rates
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url)
        except httpx.HTTPError as e:
            raise RateFetchError(f"NBKR request failed: {e}") from e

        if not response.is_success:
            raise RateFetchError(f"NBKR API returned {response.status_code}")

        parsed = parse_daily_rates(response.text)
        parsed["timestamp"] = datetime.now(timezone.utc).isoformat()
        return parsed
