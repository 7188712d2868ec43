import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.core.exceptions import ValidationError
from goods_transport.schemas.logistics.delivery_schema import (
    ApprovalRequest, ApprovalResponse, DeliveryCreate, DeliveryCreateResponse, DeliveryResponse
)
from goods_transport.services.logistics.delivery_service import DeliveryService
from goods_transport.services.reports.report_service import ReportService
from goods_transport.utils.report_filters import non_empty_or_none

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("", response_model=DeliveryCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_delivery(
    delivery_data: DeliveryCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Record a delivery; it enters the approval queue as PENDING"""
    delivery = await DeliveryService(session).create_delivery(delivery_data)
    return DeliveryCreateResponse(
        message="Delivery recorded successfully.",
        delivery=DeliveryResponse.model_validate(delivery),
    )

@router.get("", response_model=List[DeliveryResponse])
async def get_deliveries(
    shipment_id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get deliveries, optionally for one shipment"""
    return await DeliveryService(session).get_deliveries(non_empty_or_none(shipment_id))

@router.get("/pending-approvals", response_model=List[DeliveryResponse])
async def get_pending_approvals(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.DELIVERY_APPROVAL_ADMIN))
):
    """Deliveries waiting on admin or superadmin approval"""
    return await DeliveryService(session).get_pending_approvals()

@router.patch("/pending-approvals", response_model=ApprovalResponse)
async def update_approval_status(
    approval_data: ApprovalRequest,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.DELIVERY_APPROVAL_ADMIN))
):
    """Approve or reject a delivery"""
    return await DeliveryService(session).apply_approval_action(
        approval_data.delivery_id, approval_data.action, current_user
    )

@router.get("/pending-approval-superadmin", response_model=List[DeliveryResponse])
async def get_superadmin_queue(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.DELIVERY_APPROVAL_SUPERADMIN))
):
    """Admin-approved deliveries awaiting final approval"""
    return await DeliveryService(session).get_superadmin_queue()

@router.get("/approved")
async def get_approved_deliveries(
    date_param: Optional[str] = Query(None, alias="date"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Deliveries given final approval on one day (YYYY-MM-DD)"""
    if not non_empty_or_none(date_param):
        raise ValidationError("Invalid or missing date parameter (format YYYY-MM-DD).")
    return await DeliveryService(session).get_approved_on(date_param)

@router.get("/report")
async def get_deliveries_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    shipment_id: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Filtered delivery listing for reporting"""
    return await ReportService(session).get_deliveries_report(start_date, end_date, shipment_id)
