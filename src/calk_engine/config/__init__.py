"""Configuration models — engine inputs and reference data."""

from calk_engine.config.loan import LoanTerms, FinancedPurchase, CreditOffer
from calk_engine.config.utilities import (
    TariffProfile,
    ConsumptionInput,
    ElectricityTariff,
    clamp_consumption_input,
)
from calk_engine.config.benefit import EligibilityInput, BenefitConfig
from calk_engine.config.catalog import ReferenceCatalog, load_reference_catalog
from calk_engine.config.settings import ServiceSettings

__all__ = [
    "LoanTerms",
    "FinancedPurchase",
    "CreditOffer",
    "TariffProfile",
    "ConsumptionInput",
    "ElectricityTariff",
    "clamp_consumption_input",
    "EligibilityInput",
    "BenefitConfig",
    "ReferenceCatalog",
    "load_reference_catalog",
    "ServiceSettings",
]
