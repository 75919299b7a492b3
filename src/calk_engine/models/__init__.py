"""Result models — engine output contracts."""

from calk_engine.models.results import (
    AnnuityResult,
    BillingResult,
    ElectricityBillingResult,
    EligibilityResult,
    FinancedAnnuityResult,
    OfferComparison,
    OfferOutcome,
    PaymentSchedule,
    PaymentScheduleEntry,
)

__all__ = [
    "AnnuityResult",
    "BillingResult",
    "ElectricityBillingResult",
    "EligibilityResult",
    "FinancedAnnuityResult",
    "OfferComparison",
    "OfferOutcome",
    "PaymentSchedule",
    "PaymentScheduleEntry",
]
