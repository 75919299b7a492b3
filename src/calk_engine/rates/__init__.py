"""Currency rates — NBKR daily feed behind a single-slot TTL cache."""

from calk_engine.rates.cache import RateCache
from calk_engine.rates.nbkr import NBKRRateFetcher, RateFetchError, RateParseError, parse_daily_rates
from calk_engine.rates.service import CurrencyRateService, FALLBACK_RATES, convert

__all__ = [
    "RateCache",
    "NBKRRateFetcher",
    "RateFetchError",
    "RateParseError",
    "parse_daily_rates",
    "CurrencyRateService",
    "FALLBACK_RATES",
    "convert",
]
