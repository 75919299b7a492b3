"""FastAPI server — one HTTP surface over the calculation engine.

Run with:
    uvicorn calk_engine.api.server:app --reload --port 8000

Or:
    calk-api

Endpoints:
    GET  /health                    — liveness
    GET  /reference                 — loaded bank offers, tariffs, benefit rules
    POST /loan/annuity              — payment, total, overpayment
    POST /loan/financed             — annuity on price − down payment
    POST /loan/schedule             — full amortization schedule
    POST /loan/compare              — user's loan vs. reference bank offers
    POST /utilities/heating         — heating + hot-water bill for a region
    POST /utilities/heating/compare — same household under every region's tariff
    POST /utilities/electricity     — two-step electricity bill
    POST /benefits/family           — family-benefit eligibility
    GET  /currency-rates            — NBKR daily rates (cached, with fallback)
    GET  /currency-rates/convert    — convert an amount using those rates

Engine results are returned as computed: out-of-domain numbers give a
zero / empty result with HTTP 200, never an error.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import date
from functools import lru_cache
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from calk_engine.config.benefit import EligibilityInput
from calk_engine.config.catalog import CreditProduct, ReferenceCatalog, load_reference_catalog
from calk_engine.config.loan import FinancedPurchase, LoanTerms
from calk_engine.config.settings import ServiceSettings
from calk_engine.config.utilities import ConsumptionInput, clamp_consumption_input
from calk_engine.engine.annuity import compute_annuity, compute_financed_annuity
from calk_engine.engine.comparison import compare_credit_offers, compare_tariffs
from calk_engine.engine.eligibility import evaluate_eligibility
from calk_engine.engine.schedule import schedule_for_terms
from calk_engine.engine.tariff import compute_electricity_bill, compute_heating_bill
from calk_engine.logging_config import configure_logging, get_logger
from calk_engine.models.results import (
    AnnuityResult,
    BillingResult,
    ElectricityBillingResult,
    EligibilityResult,
    FinancedAnnuityResult,
    OfferComparison,
    PaymentSchedule,
)
from calk_engine.rates.cache import RateCache
from calk_engine.rates.nbkr import NBKRRateFetcher
from calk_engine.rates.service import CurrencyRateService, convert

logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(_app: FastAPI):
    settings = get_settings()
    configure_logging(settings.log_level, json_output=settings.log_json)
    logger.info("Calculation API started", reference_dir=settings.reference_dir or "bundled")
    yield


app = FastAPI(
    lifespan=lifespan,
    title="Calk.KG Calculation Engine API",
    version="1.0",
    description=(
        "Deterministic loan, mortgage, utility-tariff and family-benefit "
        "calculations shared by every calculator page, plus cached NBKR "
        "currency rates."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


# ═══════════════════════════════════════════════════════════════════════════
# Dependencies
# ═══════════════════════════════════════════════════════════════════════════

@lru_cache
def get_settings() -> ServiceSettings:
    return ServiceSettings()


@lru_cache
def _catalog_for(reference_dir: str | None) -> ReferenceCatalog:
    return load_reference_catalog(reference_dir)


def get_catalog(settings: ServiceSettings = Depends(get_settings)) -> ReferenceCatalog:
    return _catalog_for(settings.reference_dir)


@lru_cache
def get_rate_service() -> CurrencyRateService:
    """Process-wide rate service: one cache slot shared by all requests."""
    settings = get_settings()
    return CurrencyRateService(
        fetcher=NBKRRateFetcher(url=settings.rates_url, timeout=settings.rates_timeout_seconds),
        cache=RateCache(ttl_seconds=settings.rates_ttl_seconds),
    )


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class ScheduleRequest(BaseModel):
    """Request body for /loan/schedule."""
    terms: LoanTerms
    start_date: date | None = Field(
        default=None,
        description="Entry k is dated start_date + k months. Defaults to the first of the current month.",
    )


class LoanCompareRequest(BaseModel):
    """Request body for /loan/compare.  Exactly one of ``terms`` / ``purchase``."""
    product: CreditProduct = Field(default="consumer", description="Which offer table to compare against")
    terms: LoanTerms | None = None
    purchase: FinancedPurchase | None = None


class HeatingRequest(BaseModel):
    """Request body for /utilities/heating and /utilities/heating/compare."""
    region: str = Field(default="bishkek", description="Region key from GET /reference")
    consumption: ConsumptionInput
    clamp_inputs: bool = Field(
        default=True,
        description="Clamp area / meter / residents to the documented page ranges first",
    )


class ElectricityRequest(BaseModel):
    """Request body for /utilities/electricity."""
    category: str = Field(default="general", description="Consumer category key from GET /reference")
    consumption_kwh: float


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _lookup(fn, key: str):
    try:
        return fn(key)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e.args[0]) if e.args else str(e)) from e


def _prepare_consumption(req: HeatingRequest) -> ConsumptionInput:
    return clamp_consumption_input(req.consumption) if req.clamp_inputs else req.consumption


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/reference", response_model=ReferenceCatalog)
def get_reference(catalog: ReferenceCatalog = Depends(get_catalog)):
    """The reference tables every comparison runs against."""
    return catalog


@app.post("/loan/annuity", response_model=AnnuityResult)
def loan_annuity(terms: LoanTerms):
    return compute_annuity(terms)


@app.post("/loan/financed", response_model=FinancedAnnuityResult)
def loan_financed(purchase: FinancedPurchase):
    """Mortgage / auto-loan: annuity on price − down payment, plus total cost."""
    return compute_financed_annuity(purchase)


@app.post("/loan/schedule", response_model=PaymentSchedule)
def loan_schedule(req: ScheduleRequest):
    start = req.start_date or date.today().replace(day=1)
    return schedule_for_terms(req.terms, start)


@app.post("/loan/compare", response_model=OfferComparison)
def loan_compare(req: LoanCompareRequest, catalog: ReferenceCatalog = Depends(get_catalog)):
    """Compare the user's loan with the indicative offers for ``product``.

    Offers with a maximum term shorter than the requested one are computed
    at their own maximum.
    """
    if (req.terms is None) == (req.purchase is None):
        raise HTTPException(status_code=422, detail="Provide exactly one of 'terms' or 'purchase'")
    loan = req.terms if req.terms is not None else req.purchase
    return compare_credit_offers(loan, catalog.offers_for(req.product))


@app.post("/utilities/heating", response_model=BillingResult)
def utilities_heating(req: HeatingRequest, catalog: ReferenceCatalog = Depends(get_catalog)):
    tariff = _lookup(catalog.heating_tariff, req.region)
    return compute_heating_bill(tariff, _prepare_consumption(req))


@app.post("/utilities/heating/compare", response_model=OfferComparison)
def utilities_heating_compare(req: HeatingRequest, catalog: ReferenceCatalog = Depends(get_catalog)):
    """Cost the same household under every other region's tariff."""
    tariff = _lookup(catalog.heating_tariff, req.region)
    return compare_tariffs(tariff, catalog.heating_tariffs, _prepare_consumption(req))


@app.post("/utilities/electricity", response_model=ElectricityBillingResult)
def utilities_electricity(req: ElectricityRequest, catalog: ReferenceCatalog = Depends(get_catalog)):
    tariff = _lookup(catalog.electricity_tariff, req.category)
    return compute_electricity_bill(tariff, req.consumption_kwh)


@app.post("/benefits/family", response_model=EligibilityResult)
def benefits_family(household: EligibilityInput, catalog: ReferenceCatalog = Depends(get_catalog)):
    return evaluate_eligibility(household, catalog.family_benefit)


@app.get("/currency-rates")
async def currency_rates(service: CurrencyRateService = Depends(get_rate_service)) -> dict[str, Any]:
    """NBKR daily rates.  Always 200: upstream failures return fallback rates
    with ``fallback: true`` and the error message."""
    return await service.get_rates()


@app.get("/currency-rates/convert")
async def currency_convert(
    amount: float = Query(..., description="Amount in the source currency"),
    source: str = Query(default="USD", alias="from"),
    target: str = Query(default="KGS", alias="to"),
    service: CurrencyRateService = Depends(get_rate_service),
) -> dict[str, Any]:
    payload = await service.get_rates()
    try:
        converted = convert(amount, payload["rates"], source.upper(), target.upper())
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Unsupported currency: {e.args[0]}") from e
    return {
        "amount": amount,
        "from": source.upper(),
        "to": target.upper(),
        "result": converted,
        "date": payload["date"],
        "fallback": payload.get("fallback", False),
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "calk_engine.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
