"""Amortization schedule — month-by-month split of an annuity payment.

For k = 1..n, from balance₀ = principal:
  interestₖ  = balance_{k−1} × i
  principalₖ = payment − interestₖ
  balanceₖ   = max(0, balance_{k−1} − principalₖ)
  dateₖ      = start + k months

Float drift over a few hundred periods leaves a residual balance, so the
final period pays off whatever is left: its principal portion equals the
opening balance and its closing balance is exactly zero.
"""

from __future__ import annotations

from datetime import date

from calk_engine.config.loan import LoanTerms
from calk_engine.engine.annuity import compute_annuity
from calk_engine.engine.numeric import add_months, is_finite, within_calendar
from calk_engine.models.results import PaymentSchedule, PaymentScheduleEntry


def generate_schedule(
    principal: float,
    monthly_payment: float,
    term_months: int,
    monthly_rate: float,
    start_date: date,
) -> PaymentSchedule:
    """Expand an amortized loan into its full payment schedule.

    Parameters
    ----------
    principal : float
        Amount borrowed.
    monthly_payment : float
        Installment, normally ``compute_annuity(...).monthly_payment``.
    term_months : int
        Number of entries produced.
    monthly_rate : float
        Periodic rate as a fraction (annual% / 12 / 100).
    start_date : date
        Entry k is dated ``start_date`` + k months.

    Returns
    -------
    PaymentSchedule
        Empty when principal or payment is not positive, the term is not
        positive, the rate is negative, or the last payment date would fall
        past ``date.max``.
    """
    if not is_finite(principal, monthly_payment, monthly_rate):
        return PaymentSchedule()
    if principal <= 0 or monthly_payment <= 0 or term_months <= 0 or monthly_rate < 0:
        return PaymentSchedule()
    if not within_calendar(start_date, term_months):
        return PaymentSchedule()

    entries: list[PaymentScheduleEntry] = []
    balance = principal
    total_principal = 0.0
    total_interest = 0.0

    for k in range(1, term_months + 1):
        interest = balance * monthly_rate
        if k == term_months:
            # Final period settles the residual left by float drift.
            principal_part = balance
            payment = principal_part + interest
            closing = 0.0
        else:
            # Balance never grows: a payment below the interest repays nothing.
            principal_part = max(0.0, min(monthly_payment - interest, balance))
            payment = monthly_payment if principal_part < balance else principal_part + interest
            closing = max(0.0, balance - principal_part)

        entries.append(PaymentScheduleEntry(
            month=k,
            date=add_months(start_date, k),
            payment=payment,
            principal_portion=principal_part,
            interest_portion=interest,
            remaining_balance=closing,
        ))

        total_principal += principal_part
        total_interest += interest
        balance = closing

    return PaymentSchedule(
        entries=tuple(entries),
        total_principal=total_principal,
        total_interest=total_interest,
    )


def schedule_for_terms(terms: LoanTerms, start_date: date) -> PaymentSchedule:
    """Annuity + schedule in one call, as the mortgage page uses them."""
    result = compute_annuity(terms)
    return generate_schedule(
        principal=terms.principal,
        monthly_payment=result.monthly_payment,
        term_months=terms.term_months,
        monthly_rate=terms.monthly_rate,
        start_date=start_date,
    )
