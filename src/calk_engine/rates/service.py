"""Currency-rate service — cache, single upstream fetch, local fallback.

Failures are surfaced as data: any upstream error produces a successful
payload built from the hardcoded fallback table, flagged with
``fallback: true`` and the error message.  Fallback payloads are never
cached, so the next request tries upstream again.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from calk_engine.logging_config import get_logger
from calk_engine.rates.cache import RateCache
from calk_engine.rates.nbkr import NBKRRateFetcher, RateFetchError

logger = get_logger(__name__)

# KGS per unit, last reviewed December 2024.
FALLBACK_RATES: dict[str, dict[str, Any]] = {
    "USD": {"code": "USD", "name": "US Dollar", "rate": 87.25, "nominal": 1},
    "EUR": {"code": "EUR", "name": "Euro", "rate": 95.80, "nominal": 1},
    "RUB": {"code": "RUB", "name": "Russian Ruble", "rate": 0.91, "nominal": 1},
    "KZT": {"code": "KZT", "name": "Kazakhstani Tenge", "rate": 0.18, "nominal": 1},
    "CNY": {"code": "CNY", "name": "Chinese Yuan", "rate": 12.05, "nominal": 1},
}


def fallback_payload(error: str) -> dict[str, Any]:
    now = datetime.now(timezone.utc)
    return {
        "date": now.date().isoformat(),
        "rates": {code: dict(entry) for code, entry in FALLBACK_RATES.items()},
        "timestamp": now.isoformat(),
        "fallback": True,
        "error": error,
    }


class CurrencyRateService:
    """Constructed once per process and shared by request handlers."""

    def __init__(self, fetcher: NBKRRateFetcher, cache: RateCache):
        self.fetcher = fetcher
        self.cache = cache

    async def get_rates(self) -> dict[str, Any]:
        """Return the latest rates; never raises for upstream problems."""
        hit = self.cache.get()
        if hit is not None:
            payload, age = hit
            logger.debug("Returning cached rates", cache_age_seconds=int(age))
            return {**payload, "cached": True, "cacheAge": f"{int(age)}s"}

        logger.info("Fetching fresh rates", url=self.fetcher.url)
        try:
            payload = await self.fetcher.fetch()
        except RateFetchError as e:
            logger.error("Currency rate fetch failed, serving fallback", error=str(e))
            return fallback_payload(str(e))

        self.cache.put(payload)
        return dict(payload)


def convert(amount: float, rates: dict[str, dict[str, Any]], source: str, target: str) -> float:
    """Convert between KGS and the tracked currencies using a rates table.

    Raises:
        KeyError: If either currency is neither KGS nor in ``rates``, or its
            rate is not a positive number
    """
    def kgs_per_unit(code: str) -> float:
        if code == "KGS":
            return 1.0
        entry = rates[code]
        rate = entry["rate"]
        if not math.isfinite(rate) or rate <= 0:
            raise KeyError(code)
        return rate / (entry.get("nominal") or 1)

    return amount * kgs_per_unit(source) / kgs_per_unit(target)
