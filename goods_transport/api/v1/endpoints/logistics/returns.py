from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.models.shared.enums import ReturnStatus
from goods_transport.schemas.logistics.return_schema import (
    ReturnShipmentCreate, ReturnShipmentResponse, ReturnShipmentUpdate
)
from goods_transport.services.logistics.return_service import ReturnService
from goods_transport.utils.report_filters import non_empty_or_none

router = APIRouter()

@router.post("", response_model=ReturnShipmentResponse, status_code=status.HTTP_201_CREATED)
async def create_return(
    return_data: ReturnShipmentCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Open a return for a shipment"""
    return await ReturnService(session).create_return(return_data)

@router.get("", response_model=List[ReturnShipmentResponse])
async def get_returns(
    shipment_id: Optional[str] = Query(None, alias="shipmentId"),
    return_status: Optional[ReturnStatus] = Query(None, alias="status"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get returns filtered by shipment and status"""
    return await ReturnService(session).get_returns(non_empty_or_none(shipment_id), return_status)

@router.patch("", response_model=ReturnShipmentResponse)
async def update_return(
    return_data: ReturnShipmentUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Update a return's status"""
    return await ReturnService(session).update_return(return_data)
