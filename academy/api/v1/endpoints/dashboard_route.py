from fastapi import APIRouter, Depends, Query
from typing import List

from academy.api.deps import get_store
from academy.schemas.stats_schema import ActivityItem, DashboardStats, OutstandingBalance
from academy.services import activity_service, stats_service
from academy.storage import Storage

router = APIRouter()


@router.get("/stats", response_model=DashboardStats, summary="Dashboard totals")
def get_stats(store: Storage = Depends(get_store)):
    return stats_service.get_stats(store)


@router.get("/activity", response_model=List[ActivityItem], summary="Latest payments and enrollments")
def get_recent_activity(limit: int = Query(8, ge=1), store: Storage = Depends(get_store)):
    return activity_service.get_recent_activity(store, limit=limit)


@router.get(
    "/outstanding",
    response_model=List[OutstandingBalance],
    summary="Enrollments with a pending balance",
)
def get_outstanding_balances(limit: int = Query(5, ge=1), store: Storage = Depends(get_store)):
    return activity_service.get_outstanding_balances(store, limit=limit)
