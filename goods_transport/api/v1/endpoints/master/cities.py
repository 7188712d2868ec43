import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.schemas.master.master_schema import CityCreate, CityResponse
from goods_transport.services.master.city_service import CityService
from goods_transport.services.reports.report_service import ReportService

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("", response_model=CityResponse, status_code=status.HTTP_201_CREATED)
async def create_city(
    city_data: CityCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.MASTER_DATA_WRITE))
):
    """Create a new city"""
    return await CityService(session).create_city(city_data)

@router.get("", response_model=List[CityResponse])
async def get_cities(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get all cities"""
    return await CityService(session).get_cities()

@router.get("/report")
async def get_cities_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Departing and arriving shipments per city"""
    return await ReportService(session).get_cities_report(start_date, end_date)
