"""Read-only quoting endpoints.

None of these touch live pools: path quotes are priced against the pool
snapshot sent with the request.
"""

import structlog
from fastapi import APIRouter, Depends, HTTPException

from amm_router.amm.constant_product import ConstantProduct, constant_product
from amm_router.config import ApiSettings
from amm_router.models.quotes import (
    AmountInRequest,
    AmountOutRequest,
    AmountResponse,
    AmountsResponse,
    ErrorResponse,
    PathQuoteRequest,
    QuoteRequest,
)
from amm_router.pools.book import ReserveBook
from amm_router.routing.amounts import PathQuoter

logger = structlog.get_logger()

router = APIRouter()

# Rejected quotes (RouterError) and internal failures (InvariantViolation)
ERROR_RESPONSES: dict[int | str, dict[str, object]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_amm() -> ConstantProduct:
    """Dependency provider for the pricing formula.

    Override in tests:
        app.dependency_overrides[get_amm] = lambda: stub
    """
    return constant_product


def get_settings() -> ApiSettings:
    return ApiSettings.from_env()


def _path_quoter(
    request: PathQuoteRequest, settings: ApiSettings, amm: ConstantProduct
) -> PathQuoter:
    hops = len(request.path) - 1
    if hops > settings.max_hops:
        logger.warning("path_too_long", hops=hops, max_hops=settings.max_hops)
        raise HTTPException(
            status_code=422, detail=f"Path has {hops} hops, max {settings.max_hops}"
        )
    book = ReserveBook(pool.to_pool_state() for pool in request.pools)
    return PathQuoter(book, amm)


@router.post("/quote", responses=ERROR_RESPONSES)
async def quote(request: QuoteRequest, amm: ConstantProduct = Depends(get_amm)) -> AmountResponse:
    amount = amm.quote(int(request.amount_a), int(request.reserve_a), int(request.reserve_b))
    return AmountResponse(amount=amount)


@router.post("/amount-out", responses=ERROR_RESPONSES)
async def amount_out(
    request: AmountOutRequest, amm: ConstantProduct = Depends(get_amm)
) -> AmountResponse:
    amount = amm.get_amount_out(
        int(request.amount_in), int(request.reserve_in), int(request.reserve_out)
    )
    return AmountResponse(amount=amount)


@router.post("/amount-in", responses=ERROR_RESPONSES)
async def amount_in(
    request: AmountInRequest, amm: ConstantProduct = Depends(get_amm)
) -> AmountResponse:
    amount = amm.get_amount_in(
        int(request.amount_out), int(request.reserve_in), int(request.reserve_out)
    )
    return AmountResponse(amount=amount)


@router.post("/amounts-out", responses=ERROR_RESPONSES)
async def amounts_out(
    request: PathQuoteRequest,
    settings: ApiSettings = Depends(get_settings),
    amm: ConstantProduct = Depends(get_amm),
) -> AmountsResponse:
    quoter = _path_quoter(request, settings, amm)
    amounts = quoter.get_amounts_out(int(request.amount), request.path)
    logger.info("quoted_amounts_out", hops=len(request.path) - 1, amount_out=amounts[-1])
    return AmountsResponse(amounts=amounts)


@router.post("/amounts-in", responses=ERROR_RESPONSES)
async def amounts_in(
    request: PathQuoteRequest,
    settings: ApiSettings = Depends(get_settings),
    amm: ConstantProduct = Depends(get_amm),
) -> AmountsResponse:
    quoter = _path_quoter(request, settings, amm)
    amounts = quoter.get_amounts_in(int(request.amount), request.path)
    logger.info("quoted_amounts_in", hops=len(request.path) - 1, amount_in=amounts[0])
    return AmountsResponse(amounts=amounts)
