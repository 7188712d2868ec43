import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.schemas.master.master_schema import AgencyCreate, AgencyResponse
from goods_transport.services.master.agency_service import AgencyService

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("", response_model=AgencyResponse, status_code=status.HTTP_201_CREATED)
async def create_agency(
    agency_data: AgencyCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.MASTER_DATA_WRITE))
):
    """Create a new forwarding agency"""
    return await AgencyService(session).create_agency(agency_data)

@router.get("", response_model=List[AgencyResponse])
async def get_agencies(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get all agencies"""
    return await AgencyService(session).get_agencies()
