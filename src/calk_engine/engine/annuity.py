"""Annuity (equal-installment) loan payment.

Key formulas:
  i       = annual_rate% / 12 / 100
  payment = P × i(1+i)^n / ((1+i)^n − 1)      (P / n when i = 0)
  total   = payment × n
  overpayment = total − P
  effective_rate% = overpayment / P × 100

Total functions: out-of-domain inputs give an all-zero result instead of
raising.
"""

from __future__ import annotations

from calk_engine.config.loan import FinancedPurchase, LoanTerms
from calk_engine.engine.numeric import is_finite
from calk_engine.models.results import AnnuityResult, FinancedAnnuityResult


def annuity_payment(principal: float, monthly_rate: float, term_months: int) -> float:
    """Monthly payment that fully amortizes ``principal`` over ``term_months``.

    Callers are responsible for the domain (principal > 0, term > 0,
    rate ≥ 0); :func:`compute_annuity` checks it.
    """
    if monthly_rate == 0:
        return principal / term_months
    try:
        factor = (1 + monthly_rate) ** term_months
    except OverflowError:
        # Limit as n → ∞: interest-only.
        return principal * monthly_rate
    if factor == 1:
        # Rate below float resolution.
        return principal / term_months
    return principal * (monthly_rate * factor) / (factor - 1)


def loan_terms_in_domain(terms: LoanTerms) -> bool:
    return (
        is_finite(terms.principal, terms.annual_rate_percent)
        and terms.principal > 0
        and terms.term_months > 0
        and terms.annual_rate_percent >= 0
    )


def compute_annuity(terms: LoanTerms) -> AnnuityResult:
    """Compute payment, totals and overpayment for one loan.

    Parameters
    ----------
    terms : LoanTerms
        Principal, annual rate (%) and term (months).

    Returns
    -------
    AnnuityResult
        All-zero when ``principal ≤ 0``, ``term_months ≤ 0`` or the rate is
        negative.
    """
    if not loan_terms_in_domain(terms):
        return AnnuityResult()

    payment = annuity_payment(terms.principal, terms.monthly_rate, terms.term_months)
    total = payment * terms.term_months
    overpayment = total - terms.principal

    return AnnuityResult(
        monthly_payment=payment,
        total_amount=total,
        overpayment=overpayment,
        effective_rate_percent=overpayment / terms.principal * 100,
    )


def compute_financed_annuity(purchase: FinancedPurchase) -> FinancedAnnuityResult:
    """Annuity on ``price − down_payment``, plus the all-in cost of the purchase."""
    price_ok = is_finite(purchase.price, purchase.down_payment) and purchase.price > 0
    if not price_ok or purchase.down_payment < 0 or purchase.down_payment >= purchase.price:
        return FinancedAnnuityResult(total_cost=max(purchase.price, 0.0) if price_ok else 0.0)

    terms = purchase.to_loan_terms()
    if not loan_terms_in_domain(terms):
        return FinancedAnnuityResult(total_cost=purchase.price)

    annuity = compute_annuity(terms)
    return FinancedAnnuityResult(
        loan_amount=terms.principal,
        annuity=annuity,
        total_cost=purchase.price + annuity.overpayment,
    )
