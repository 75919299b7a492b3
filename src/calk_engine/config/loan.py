"""Credit inputs — loans, financed purchases, and reference bank offers."""

from pydantic import BaseModel, ConfigDict, Field


class LoanTerms(BaseModel):
    """One consumer loan as typed into a calculator page.

    No field-level bounds: the page recomputes on every keystroke, so
    half-typed or out-of-domain values must reach the engine and come back
    as an all-zero result instead of a validation error.
    """

    model_config = ConfigDict(frozen=True)

    principal: float = Field(description="Amount borrowed (KGS)")
    annual_rate_percent: float = Field(description="Nominal annual interest rate, in percent (18.5 = 18.5%)")
    term_months: int = Field(description="Number of monthly payments")

    @property
    def monthly_rate(self) -> float:
        """Periodic rate as a fraction: annual% / 12 / 100."""
        return self.annual_rate_percent / 12 / 100


class FinancedPurchase(BaseModel):
    """A purchase (property, car) partially paid up-front and financed by a loan.

    The financed principal is ``price − down_payment``.
    """

    model_config = ConfigDict(frozen=True)

    price: float = Field(description="Full purchase price (KGS)")
    down_payment: float = Field(default=0.0, description="Amount paid up-front (KGS)")
    annual_rate_percent: float = Field(description="Nominal annual interest rate, in percent")
    term_months: int = Field(description="Number of monthly payments")

    @property
    def loan_amount(self) -> float:
        return self.price - self.down_payment

    def to_loan_terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.loan_amount,
            annual_rate_percent=self.annual_rate_percent,
            term_months=self.term_months,
        )


class CreditOffer(BaseModel):
    """Indicative bank offer — static reference data, not a live quote."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Bank / product label")
    rate_percent: float = Field(
        ge=0, le=100,
        description="Annual rate used for comparison. For mortgage offers quoted "
                    "as a range this is the lower bound.",
    )
    max_rate_percent: float | None = Field(
        default=None, ge=0, le=100,
        description="Upper bound of a quoted rate range (display only).",
    )
    max_term_months: int | None = Field(
        default=None, gt=0,
        description="Longest term the bank offers. A longer requested term is "
                    "capped to this value when the offer is compared.",
    )
