"""Analytics API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_analytics_service, get_current_identity
from src.schemas.analytics import AnalyticsSummary, DayAnalytics, MarketAnalytics
from src.services.analytics_service import AnalyticsService
from src.services.auth import Identity

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("/summary", response_model=AnalyticsSummary)
def get_summary(
    identity: Annotated[Identity, Depends(get_current_identity)],
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    """Overall spend on every list the user owns or was shared."""
    return analytics.summary(identity)


@router.get("/by-day", response_model=list[DayAnalytics])
def get_by_day(
    identity: Annotated[Identity, Depends(get_current_identity)],
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    """Spend per day of week. Days without purchases are omitted."""
    return analytics.by_day(identity)


@router.get("/by-market", response_model=list[MarketAnalytics])
def get_by_market(
    identity: Annotated[Identity, Depends(get_current_identity)],
    analytics: Annotated[AnalyticsService, Depends(get_analytics_service)],
):
    """Spend per market, including the user's markets with no purchases."""
    return analytics.by_market(identity)
