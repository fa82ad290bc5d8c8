"""
Public shipping API used by the checkout page.
- No authentication required
- Read-only: zones and rates are always read from the database, never cached
"""
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from shipping_backend.app.api.deps import get_session
from shipping_backend.app.core.limiter import limiter
from shipping_backend.app.core.logging import get_logger
from shipping_backend.app.core.settings import get_settings
from shipping_backend.app.schemas import (
    CoverageResponse,
    RateDetailsResponse,
    RateQuoteResponse,
    ShippingEstimateResponse,
    ShippingOptionsResponse,
)
from shipping_backend.app.services.shipping import ShippingService
from shipping_backend.app.services.shipping_errors import ShippingServiceError

router = APIRouter()
logger = get_logger(__name__)

PUBLIC_RATE_LIMIT = get_settings().PUBLIC_RATE_LIMIT


def _handle_service_error(e: ShippingServiceError):
    """Convert service exceptions to HTTP exceptions."""
    raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/options", response_model=ShippingOptionsResponse)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_shipping_options(
    request: Request,
    district_code: str = Query(..., description="Código UBIGEO del distrito, ej. 150122"),
    subtotal: Decimal = Query(..., description="Subtotal del carrito en soles"),
    session: AsyncSession = Depends(get_session),
):
    """Opciones de envío agrupadas para el checkout."""
    service = ShippingService(session)
    try:
        return await service.list_shipping_options(district_code, subtotal)
    except ShippingServiceError as e:
        _handle_service_error(e)


@router.get("/estimate", response_model=ShippingEstimateResponse)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_shipping_estimate(
    request: Request,
    district_code: str = Query(...),
    subtotal: Decimal = Query(...),
    session: AsyncSession = Depends(get_session),
):
    """Costo de envío único (estimación rápida). Siempre devuelve un precio."""
    service = ShippingService(session)
    try:
        return await service.estimate_shipping_cost(district_code, subtotal)
    except ShippingServiceError as e:
        _handle_service_error(e)


@router.get("/coverage", response_model=CoverageResponse)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_shipping_coverage(
    request: Request,
    district_code: str = Query(...),
    session: AsyncSession = Depends(get_session),
):
    """¿Tenemos cobertura en este distrito?"""
    service = ShippingService(session)
    try:
        return await service.check_coverage(district_code)
    except ShippingServiceError as e:
        _handle_service_error(e)


@router.get("/rates/{rate_id}", response_model=RateDetailsResponse)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def get_rate_details(
    request: Request,
    rate_id: int,
    session: AsyncSession = Depends(get_session),
):
    service = ShippingService(session)
    try:
        return await service.get_rate_details(rate_id)
    except ShippingServiceError as e:
        _handle_service_error(e)


@router.get("/rates/{rate_id}/quote", response_model=RateQuoteResponse)
@limiter.limit(PUBLIC_RATE_LIMIT)
async def quote_rate(
    request: Request,
    rate_id: int,
    subtotal: Decimal = Query(...),
    session: AsyncSession = Depends(get_session),
):
    """Costo final de la tarifa elegida para el subtotal actual."""
    service = ShippingService(session)
    try:
        return await service.quote_rate(rate_id, subtotal)
    except ShippingServiceError as e:
        _handle_service_error(e)
