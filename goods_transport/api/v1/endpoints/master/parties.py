import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.schemas.master.master_schema import PartyCreate, PartyResponse
from goods_transport.services.master.party_service import PartyService
from goods_transport.services.reports.report_service import ReportService

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("", response_model=PartyResponse, status_code=status.HTTP_201_CREATED)
async def create_party(
    party_data: PartyCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.MASTER_DATA_WRITE))
):
    """Create a new party"""
    return await PartyService(session).create_party(party_data)

@router.get("", response_model=List[PartyResponse])
async def get_parties(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get all parties, newest first"""
    return await PartyService(session).get_parties()

@router.get("/report")
async def get_parties_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Shipments and ledger entries per party within the date range"""
    return await ReportService(session).get_parties_report(start_date, end_date)
