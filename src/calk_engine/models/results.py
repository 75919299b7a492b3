"""Result types — the contract between the engine and the pages / API.

Every result is a frozen model built wholesale by one engine call.  Values
are full precision; rounding for display is the caller's job (see
``calk_engine.engine.numeric.round_money``).
"""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict


Classification = Literal["better", "worse", "equal"]


# ═══════════════════════════════════════════════════════════════════════════
# Credit
# ═══════════════════════════════════════════════════════════════════════════

class AnnuityResult(BaseModel):
    """Equal-installment loan summary.  All zeros when inputs are out of domain."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    monthly_payment: float = 0.0
    total_amount: float = 0.0
    """monthly_payment × term_months."""
    overpayment: float = 0.0
    """total_amount − principal (total interest paid)."""
    effective_rate_percent: float = 0.0
    """overpayment / principal × 100, over the whole term (not annualised)."""


class FinancedAnnuityResult(BaseModel):
    """Annuity for a purchase financed after a down payment (mortgage, auto)."""

    model_config = ConfigDict(frozen=True)

    loan_amount: float = 0.0
    annuity: AnnuityResult = AnnuityResult()
    total_cost: float = 0.0
    """price + overpayment — what the purchase costs in the end."""


class PaymentScheduleEntry(BaseModel):
    """One month of an amortization schedule."""

    model_config = ConfigDict(frozen=True)

    month: int
    date: dt.date
    payment: float
    principal_portion: float
    interest_portion: float
    remaining_balance: float


class PaymentSchedule(BaseModel):
    """Full period-by-period schedule; empty when inputs are out of domain."""

    model_config = ConfigDict(frozen=True)

    entries: tuple[PaymentScheduleEntry, ...] = ()
    total_principal: float = 0.0
    total_interest: float = 0.0

    def __len__(self) -> int:
        return len(self.entries)

    def for_year(self, year: int) -> tuple[PaymentScheduleEntry, ...]:
        """Entries for loan year ``year`` (1-indexed, months 12·(y−1)+1 .. 12·y)."""
        first = (year - 1) * 12 + 1
        last = year * 12
        return tuple(e for e in self.entries if first <= e.month <= last)


# ═══════════════════════════════════════════════════════════════════════════
# Utilities
# ═══════════════════════════════════════════════════════════════════════════

class BillingResult(BaseModel):
    """Monthly heating + hot-water bill."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: Literal["meter", "norm"] = "norm"
    heating_consumption: float = 0.0
    """Gcal = area × norm."""
    heating_cost: float = 0.0
    hot_water_consumption: float = 0.0
    """m³.  Metered volume, or an estimate (display only) under the norm."""
    hot_water_cost: float = 0.0
    total_cost: float = 0.0


class ElectricityBillingResult(BaseModel):
    """Monthly bill under a two-step electricity tariff."""

    model_config = ConfigDict(frozen=True)

    consumption_kwh: float = 0.0
    within_limit_kwh: float = 0.0
    within_limit_cost: float = 0.0
    beyond_limit_kwh: float = 0.0
    beyond_limit_cost: float = 0.0
    total_cost: float = 0.0
    average_rate: float = 0.0
    """total_cost / consumption_kwh."""


# ═══════════════════════════════════════════════════════════════════════════
# Benefits
# ═══════════════════════════════════════════════════════════════════════════

class EligibilityResult(BaseModel):
    """Benefit verdict.  ``reasons`` is non-empty exactly when not eligible."""

    model_config = ConfigDict(frozen=True)

    is_eligible: bool
    awarded_amount: float
    reasons: tuple[str, ...] = ()
    income_per_person: float = 0.0
    eligible_children_count: int = 0


# ═══════════════════════════════════════════════════════════════════════════
# Comparison
# ═══════════════════════════════════════════════════════════════════════════

class OfferOutcome(BaseModel):
    """One alternative offer re-run against the user's inputs."""

    model_config = ConfigDict(frozen=True)

    offer_name: str
    metric: float
    """Value compared with the baseline (rate % for credit, total cost for tariffs)."""
    result: AnnuityResult | BillingResult
    classification: Classification
    effective_term_months: int | None = None
    """Term the offer was computed at (credit only), after the offer's cap."""


class OfferComparison(BaseModel):
    """Baseline plus every offer, in the order the offers were supplied."""

    model_config = ConfigDict(frozen=True)

    baseline_metric: float
    baseline: AnnuityResult | BillingResult
    outcomes: tuple[OfferOutcome, ...] = ()

    def by_classification(self, classification: Classification) -> tuple[OfferOutcome, ...]:
        return tuple(o for o in self.outcomes if o.classification == classification)
