"""Utility tariffs and household consumption inputs."""

import math
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


# Documented input ranges enforced by calculator pages before calling the engine.
AREA_RANGE_SQM = (0.0, 500.0)
METER_READING_RANGE_M3 = (0.0, 100.0)
RESIDENT_RANGE = (1, 20)

# Rough per-person monthly hot-water volume, shown next to norm-billed costs.
HOT_WATER_M3_PER_RESIDENT = 2.5


class TariffProfile(BaseModel):
    """Heating + hot-water tariff for one region (city)."""

    model_config = ConfigDict(frozen=True)

    region: str = Field(description="Region key, e.g. 'bishkek'")
    name: str = Field(default="", description="Human label")
    rate_per_gcal: float = Field(ge=0, description="Heat tariff (KGS per Gcal)")
    norm_gcal_per_sqm: float = Field(ge=0, description="Monthly heat consumption norm (Gcal per m²)")
    rate_per_cubic_meter: float = Field(ge=0, description="Metered hot-water tariff (KGS per m³)")
    rate_per_resident: float = Field(ge=0, description="Norm hot-water charge (KGS per resident per month)")


class ConsumptionInput(BaseModel):
    """One household's heating / hot-water situation for a month."""

    model_config = ConfigDict(frozen=True)

    area: float = Field(description="Heated floor area (m²)")
    method: Literal["meter", "norm"] = Field(
        default="norm",
        description="Hot-water billing method: 'meter' = actual reading, "
                    "'norm' = fixed charge per resident.",
    )
    meter_reading: float = Field(default=0.0, description="Hot water used this month (m³), for method='meter'")
    resident_count: int = Field(default=1, description="Registered residents, for method='norm'")


class ElectricityTariff(BaseModel):
    """Two-step residential electricity tariff for one consumer category."""

    model_config = ConfigDict(frozen=True)

    category: str = Field(description="Category key, e.g. 'general'")
    name: str = Field(default="", description="Human label")
    limit_kwh: float = Field(ge=0, description="Monthly consumption billed at the lower rate (kWh)")
    rate_within_limit: float = Field(ge=0, description="KGS per kWh up to the limit")
    rate_beyond_limit: float = Field(ge=0, description="KGS per kWh above the limit")


def _clamp(value: float, low: float, high: float) -> float:
    if not math.isfinite(value):
        return low
    return max(low, min(high, value))


def clamp_consumption_input(consumption: ConsumptionInput) -> ConsumptionInput:
    """Clamp page inputs to the documented ranges (area, meter, residents)."""
    return consumption.model_copy(update={
        "area": _clamp(consumption.area, *AREA_RANGE_SQM),
        "meter_reading": _clamp(consumption.meter_reading, *METER_READING_RANGE_M3),
        "resident_count": int(_clamp(consumption.resident_count, *RESIDENT_RANGE)),
    })
