"""Shared test fixtures — reference values matching the bundled YAML tables."""

from __future__ import annotations

from datetime import date

import pytest

from calk_engine.config import (
    BenefitConfig,
    CreditOffer,
    ElectricityTariff,
    LoanTerms,
    ReferenceCatalog,
    TariffProfile,
    load_reference_catalog,
)


@pytest.fixture
def consumer_loan() -> LoanTerms:
    return LoanTerms(principal=500_000, annual_rate_percent=20, term_months=24)


@pytest.fixture
def start_date() -> date:
    return date(2025, 1, 1)


@pytest.fixture
def bishkek() -> TariffProfile:
    return TariffProfile(
        region="bishkek",
        name="Bishkek",
        rate_per_gcal=1134.76,
        norm_gcal_per_sqm=0.036,
        rate_per_cubic_meter=75.14,
        rate_per_resident=340.50,
    )


@pytest.fixture
def osh() -> TariffProfile:
    return TariffProfile(
        region="osh",
        name="Osh",
        rate_per_gcal=950.20,
        norm_gcal_per_sqm=0.038,
        rate_per_cubic_meter=65.80,
        rate_per_resident=295.40,
    )


@pytest.fixture
def naryn() -> TariffProfile:
    return TariffProfile(
        region="naryn",
        name="Naryn",
        rate_per_gcal=1200.80,
        norm_gcal_per_sqm=0.042,
        rate_per_cubic_meter=68.90,
        rate_per_resident=365.70,
    )


@pytest.fixture
def general_electricity() -> ElectricityTariff:
    return ElectricityTariff(
        category="general",
        name="General population",
        limit_kwh=700,
        rate_within_limit=0.77,
        rate_beyond_limit=2.16,
    )


@pytest.fixture
def benefit_config() -> BenefitConfig:
    return BenefitConfig(per_child_amount=1200, income_threshold_per_person=1000, max_eligible_age_exclusive=16)


@pytest.fixture
def consumer_offers() -> list[CreditOffer]:
    return [
        CreditOffer(name="Ayil Bank", rate_percent=17.5),
        CreditOffer(name="Dos-Kredobank", rate_percent=22.0),
        CreditOffer(name="KICB", rate_percent=20.0),
    ]


@pytest.fixture
def catalog() -> ReferenceCatalog:
    return load_reference_catalog()


XML_FEED = """<?xml version="1.0" encoding="windows-1251"?>
<CurrencyRates Name="Daily Exchange Rates" Date="19.10.2026">
  <Currency ISOCode="USD">
    <Nominal>1</Nominal>
    <Value>87,4500</Value>
  </Currency>
  <Currency ISOCode="EUR">
    <Nominal>1</Nominal>
    <Value>101,2093</Value>
  </Currency>
  <Currency ISOCode="KZT">
    <Nominal>1</Nominal>
    <Value>0,1695</Value>
  </Currency>
  <Currency ISOCode="RUB">
    <Nominal>1</Nominal>
    <Value>1,0771</Value>
  </Currency>
  <Currency ISOCode="CNY">
    <Nominal>10</Nominal>
    <Value>122,7400</Value>
  </Currency>
</CurrencyRates>
"""


@pytest.fixture
def xml_feed() -> str:
    return XML_FEED


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
