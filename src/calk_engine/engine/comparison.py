"""Offer comparison — re-run the user's inputs against reference offers.

Credit offers are recomputed at the offer's own rate and classified by
rate against the user's rate.  An offer with a ``max_term_months`` cap is
computed at ``min(requested_term, cap)``: a bank whose longest term is
shorter than the user's is still shown, at its own maximum.

Tariffs are recomputed against the same household consumption and
classified by total monthly cost.

Outcomes keep the order the offers were supplied in.
"""

from __future__ import annotations

from collections.abc import Sequence

from calk_engine.config.loan import CreditOffer, FinancedPurchase, LoanTerms
from calk_engine.config.utilities import ConsumptionInput, TariffProfile
from calk_engine.engine.annuity import compute_annuity
from calk_engine.engine.numeric import EQUALITY_TOLERANCE, nearly_equal
from calk_engine.engine.tariff import compute_heating_bill
from calk_engine.models.results import Classification, OfferComparison, OfferOutcome


def classify(baseline: float, value: float, tolerance: float = EQUALITY_TOLERANCE) -> Classification:
    """Lower is better for both rates and costs."""
    if nearly_equal(baseline, value, tolerance):
        return "equal"
    return "better" if value < baseline else "worse"


def effective_term(requested_term: int, offer: CreditOffer) -> int:
    if offer.max_term_months is None:
        return requested_term
    return min(requested_term, offer.max_term_months)


def compare_credit_offers(
    terms: LoanTerms | FinancedPurchase,
    offers: Sequence[CreditOffer],
) -> OfferComparison:
    """Compare the user's loan with each bank offer.

    Parameters
    ----------
    terms : LoanTerms | FinancedPurchase
        The user's loan.  For a financed purchase the principal is
        ``price − down_payment``.
    offers : Sequence[CreditOffer]
        Reference offers, typically ``ReferenceCatalog.offers_for(...)``.
    """
    loan = terms.to_loan_terms() if isinstance(terms, FinancedPurchase) else terms
    baseline = compute_annuity(loan)

    outcomes: list[OfferOutcome] = []
    for offer in offers:
        term = effective_term(loan.term_months, offer)
        offer_terms = loan.model_copy(update={
            "annual_rate_percent": offer.rate_percent,
            "term_months": term,
        })
        outcomes.append(OfferOutcome(
            offer_name=offer.name,
            metric=offer.rate_percent,
            result=compute_annuity(offer_terms),
            classification=classify(loan.annual_rate_percent, offer.rate_percent),
            effective_term_months=term,
        ))

    return OfferComparison(
        baseline_metric=loan.annual_rate_percent,
        baseline=baseline,
        outcomes=tuple(outcomes),
    )


def compare_tariffs(
    baseline_tariff: TariffProfile,
    alternatives: Sequence[TariffProfile],
    consumption: ConsumptionInput,
    include_baseline_region: bool = False,
) -> OfferComparison:
    """Cost the same household under each alternative regional tariff.

    Alternatives with the baseline's region are skipped unless
    ``include_baseline_region`` is set.
    """
    baseline = compute_heating_bill(baseline_tariff, consumption)

    outcomes: list[OfferOutcome] = []
    for tariff in alternatives:
        if tariff.region == baseline_tariff.region and not include_baseline_region:
            continue
        bill = compute_heating_bill(tariff, consumption)
        outcomes.append(OfferOutcome(
            offer_name=tariff.name or tariff.region,
            metric=bill.total_cost,
            result=bill,
            classification=classify(baseline.total_cost, bill.total_cost),
        ))

    return OfferComparison(
        baseline_metric=baseline.total_cost,
        baseline=baseline,
        outcomes=tuple(outcomes),
    )
