"""Family (child) benefit — household inputs and programme parameters."""

from pydantic import BaseModel, ConfigDict, Field


class EligibilityInput(BaseModel):
    """Household data entered on the family-benefit page."""

    model_config = ConfigDict(frozen=True)

    income: float = Field(description="Total monthly household income (KGS)")
    family_size: int = Field(description="Number of people in the household")
    dependent_ages: tuple[float, ...] = Field(default=(), description="Age of each child, in years")


class BenefitConfig(BaseModel):
    """Programme parameters.  Defaults match the published 2024 rules."""

    model_config = ConfigDict(frozen=True)

    per_child_amount: float = Field(default=1200.0, ge=0, description="Monthly benefit per eligible child (KGS)")
    income_threshold_per_person: float = Field(
        default=1000.0, ge=0,
        description="Maximum per-capita monthly income to qualify (KGS)",
    )
    max_eligible_age_exclusive: float = Field(
        default=16, gt=0,
        description="Children qualify while 0 ≤ age < this bound.  Published "
                    "material says 'up to 16 inclusive'; the rule applied here "
                    "is strictly-less-than.",
    )
