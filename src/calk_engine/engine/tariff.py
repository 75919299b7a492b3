"""Utility billing — heating / hot water and two-step electricity.

Heating:
  consumption (Gcal) = area × norm_gcal_per_sqm
  cost               = consumption × rate_per_gcal

Hot water:
  meter → reading × rate_per_cubic_meter
  norm  → residents × rate_per_resident   (volume ≈ residents × 2.5 m³, display only)

Electricity (two-step):
  within = min(kWh, limit)      beyond = max(0, kWh − limit)
  cost   = within × rate1 + beyond × rate2

Negative quantities are clamped to zero; a non-positive area (or kWh)
yields an all-zero bill.
"""

from __future__ import annotations

from calk_engine.config.utilities import (
    HOT_WATER_M3_PER_RESIDENT,
    ConsumptionInput,
    ElectricityTariff,
    TariffProfile,
)
from calk_engine.engine.numeric import is_finite, non_negative
from calk_engine.models.results import BillingResult, ElectricityBillingResult


def compute_heating_bill(tariff: TariffProfile, consumption: ConsumptionInput) -> BillingResult:
    """Monthly heating + hot-water cost for one household under ``tariff``."""
    if not is_finite(consumption.area) or consumption.area <= 0:
        return BillingResult(method=consumption.method)

    # ── Heating (always on the area norm) ─────────────────────────────
    heating_consumption = consumption.area * tariff.norm_gcal_per_sqm
    heating_cost = heating_consumption * tariff.rate_per_gcal

    # ── Hot water ─────────────────────────────────────────────────────
    if consumption.method == "meter":
        hot_water_consumption = non_negative(consumption.meter_reading)
        hot_water_cost = hot_water_consumption * tariff.rate_per_cubic_meter
    else:
        residents = max(0, consumption.resident_count)
        hot_water_cost = residents * tariff.rate_per_resident
        hot_water_consumption = residents * HOT_WATER_M3_PER_RESIDENT

    return BillingResult(
        method=consumption.method,
        heating_consumption=heating_consumption,
        heating_cost=heating_cost,
        hot_water_consumption=hot_water_consumption,
        hot_water_cost=hot_water_cost,
        total_cost=heating_cost + hot_water_cost,
    )


def compute_electricity_bill(tariff: ElectricityTariff, consumption_kwh: float) -> ElectricityBillingResult:
    """Monthly electricity cost under a two-step tariff."""
    if not is_finite(consumption_kwh) or consumption_kwh <= 0:
        return ElectricityBillingResult()

    within = min(consumption_kwh, tariff.limit_kwh)
    beyond = max(0.0, consumption_kwh - tariff.limit_kwh)
    within_cost = within * tariff.rate_within_limit
    beyond_cost = beyond * tariff.rate_beyond_limit
    total = within_cost + beyond_cost

    return ElectricityBillingResult(
        consumption_kwh=consumption_kwh,
        within_limit_kwh=within,
        within_limit_cost=within_cost,
        beyond_limit_kwh=beyond,
        beyond_limit_cost=beyond_cost,
        total_cost=total,
        average_rate=total / consumption_kwh,
    )
