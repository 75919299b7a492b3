"""Engine — pure calculation functions shared by every calculator page."""

from calk_engine.engine.annuity import annuity_payment, compute_annuity, compute_financed_annuity
from calk_engine.engine.schedule import generate_schedule, schedule_for_terms
from calk_engine.engine.tariff import compute_heating_bill, compute_electricity_bill
from calk_engine.engine.eligibility import evaluate_eligibility
from calk_engine.engine.comparison import classify, compare_credit_offers, compare_tariffs

__all__ = [
    "annuity_payment",
    "compute_annuity",
    "compute_financed_annuity",
    "generate_schedule",
    "schedule_for_terms",
    "compute_heating_bill",
    "compute_electricity_bill",
    "evaluate_eligibility",
    "classify",
    "compare_credit_offers",
    "compare_tariffs",
]
