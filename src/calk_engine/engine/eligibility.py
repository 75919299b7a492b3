"""Family-benefit eligibility — per-capita income test plus child-age test.

  income_per_person = income / family_size
  eligible          = income_per_person ≤ threshold  AND  children(0 ≤ age < max) > 0
  awarded           = children × per_child_amount   (0 when not eligible)

Rejection reasons are appended in a fixed order so displayed explanations
are deterministic.
"""

from __future__ import annotations

from calk_engine.config.benefit import BenefitConfig, EligibilityInput
from calk_engine.engine.numeric import is_finite, non_negative
from calk_engine.models.results import EligibilityResult

INCOME_EXCEEDS_THRESHOLD = "income-exceeds-threshold"
NO_ELIGIBLE_CHILDREN = "no-eligible-children"
INVALID_FAMILY_SIZE = "invalid-family-size"
INVALID_INCOME = "invalid-income"


def count_eligible_children(ages: tuple[float, ...], max_age_exclusive: float) -> int:
    return sum(1 for age in ages if is_finite(age) and 0 <= age < max_age_exclusive)


def evaluate_eligibility(
    household: EligibilityInput,
    config: BenefitConfig | None = None,
) -> EligibilityResult:
    """Decide whether a household qualifies and how much it receives.

    A non-positive ``family_size`` cannot be divided by; the household is
    rejected with the single reason ``invalid-family-size``.  A non-finite
    ``income`` is rejected the same way with ``invalid-income``.
    """
    cfg = config or BenefitConfig()

    if household.family_size <= 0:
        return EligibilityResult(
            is_eligible=False,
            awarded_amount=0.0,
            reasons=(INVALID_FAMILY_SIZE,),
        )
    if not is_finite(household.income):
        return EligibilityResult(
            is_eligible=False,
            awarded_amount=0.0,
            reasons=(INVALID_INCOME,),
        )

    income = non_negative(household.income)
    income_per_person = income / household.family_size
    is_income_eligible = income_per_person <= cfg.income_threshold_per_person

    eligible_children = count_eligible_children(household.dependent_ages, cfg.max_eligible_age_exclusive)

    reasons: list[str] = []
    if not is_income_eligible:
        reasons.append(INCOME_EXCEEDS_THRESHOLD)
    if eligible_children == 0:
        reasons.append(NO_ELIGIBLE_CHILDREN)

    is_eligible = is_income_eligible and eligible_children > 0

    return EligibilityResult(
        is_eligible=is_eligible,
        awarded_amount=eligible_children * cfg.per_child_amount if is_eligible else 0.0,
        reasons=tuple(reasons),
        income_per_person=income_per_person,
        eligible_children_count=eligible_children,
    )
