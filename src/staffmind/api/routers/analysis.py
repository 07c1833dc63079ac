from dataclasses import asdict
from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from staffmind.api import schemas
from staffmind.api.dependencies import get_allocation_service
from staffmind.engine import ResourceAllocationService
from staffmind.errors import StoreUnavailable

router = APIRouter()


@router.get("/forecast", response_model=List[schemas.CapacityForecastResponse])
async def get_forecast(
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
    horizon_weeks: Optional[int] = Query(None, ge=1, le=52),
):
    """
    Projected weekly capacity per worker.
    """
    try:
        forecasts = await service.forecast(horizon_weeks)
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return [asdict(f) for f in forecasts]


@router.get("/balance", response_model=schemas.BalanceResponse)
async def get_balance(
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    """
    Worker load balance and framework capacity pressure.
    """
    try:
        balances, capacities = await service.analyze_balance()
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return {
        "balances": [asdict(b) for b in balances],
        "capacities": [asdict(c) for c in capacities],
    }


@router.post("/rebalance", response_model=schemas.RebalanceResponse)
async def rebalance(
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    """
    Run one advisory rebalancing pass. Worker loads are never modified.
    """
    try:
        result = await service.rebalance()
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return asdict(result)


@router.get("/insights", response_model=List[schemas.InsightResponse])
async def get_insights(
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    try:
        insights = await service.insights()
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return [asdict(i) for i in insights]


@router.get("/analytics", response_model=schemas.AnalyticsResponse)
async def get_analytics(
    service: Annotated[ResourceAllocationService, Depends(get_allocation_service)],
):
    try:
        analytics = await service.analytics()
    except StoreUnavailable as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return asdict(analytics)
