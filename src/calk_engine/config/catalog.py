"""Reference catalog — bank offers, tariffs and benefit rules loaded from YAML.

The tables live in ``calk_engine/reference/*.yaml`` so they can be updated
without touching calculation code.  A different directory (same file names)
can be supplied to :func:`load_reference_catalog`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from calk_engine.config.benefit import BenefitConfig
from calk_engine.config.loan import CreditOffer
from calk_engine.config.utilities import ElectricityTariff, TariffProfile

DEFAULT_REFERENCE_DIR = Path(__file__).resolve().parent.parent / "reference"

CreditProduct = Literal["consumer", "mortgage", "auto"]


class CreditOfferTables(BaseModel):
    """Indicative offers, one list per loan product."""

    consumer: list[CreditOffer] = Field(default_factory=list)
    mortgage: list[CreditOffer] = Field(default_factory=list)
    auto: list[CreditOffer] = Field(default_factory=list)


class ReferenceCatalog(BaseModel):
    """Everything the calculator pages compare against."""

    credit_offers: CreditOfferTables = Field(default_factory=CreditOfferTables)
    heating_tariffs: list[TariffProfile] = Field(default_factory=list)
    electricity_tariffs: list[ElectricityTariff] = Field(default_factory=list)
    family_benefit: BenefitConfig = Field(default_factory=BenefitConfig)

    def offers_for(self, product: CreditProduct) -> list[CreditOffer]:
        return list(getattr(self.credit_offers, product))

    def heating_tariff(self, region: str) -> TariffProfile:
        """Look up a heating tariff by region key.

        Raises
        ------
        KeyError
            If no tariff is configured for ``region``.
        """
        for tariff in self.heating_tariffs:
            if tariff.region == region:
                return tariff
        raise KeyError(f"Unknown heating region: {region!r}")

    def electricity_tariff(self, category: str) -> ElectricityTariff:
        for tariff in self.electricity_tariffs:
            if tariff.category == category:
                return tariff
        raise KeyError(f"Unknown electricity category: {category!r}")


def _read_yaml(path: Path):
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def load_reference_catalog(directory: Path | str | None = None) -> ReferenceCatalog:
    """Load and validate the reference tables.

    Missing files fall back to empty tables (or default benefit rules).
    Malformed entries raise ``pydantic.ValidationError``.
    """
    base = Path(directory) if directory is not None else DEFAULT_REFERENCE_DIR
    data: dict = {}

    offers_path = base / "credit_offers.yaml"
    if offers_path.exists():
        data["credit_offers"] = _read_yaml(offers_path) or {}

    heating_path = base / "heating_tariffs.yaml"
    if heating_path.exists():
        data["heating_tariffs"] = _read_yaml(heating_path) or []

    electricity_path = base / "electricity_tariffs.yaml"
    if electricity_path.exists():
        data["electricity_tariffs"] = _read_yaml(electricity_path) or []

    benefits_path = base / "benefits.yaml"
    if benefits_path.exists():
        benefits = _read_yaml(benefits_path) or {}
        if "family" in benefits:
            data["family_benefit"] = benefits["family"]

    return ReferenceCatalog(**data)
