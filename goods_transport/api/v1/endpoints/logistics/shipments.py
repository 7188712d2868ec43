import logging
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.schemas.logistics.shipment_schema import (
    NextRegisterNumberResponse, ShipmentCreate, ShipmentCreateResponse, ShipmentResponse
)
from goods_transport.services.logistics.shipment_service import ShipmentService
from goods_transport.services.reports.report_service import ReportService
from goods_transport.utils.report_filters import non_empty_or_none, parse_calendar_date

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("", response_model=ShipmentCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_shipment(
    shipment_data: ShipmentCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Register a new shipment"""
    shipment = await ShipmentService(session).create_shipment(shipment_data)
    return ShipmentCreateResponse(
        message="Shipment registered successfully.",
        register_number=shipment.register_number,
        shipment=ShipmentResponse.model_validate(shipment),
    )

@router.get("", response_model=List[ShipmentResponse])
async def get_shipments(
    query: Optional[str] = Query(None),
    delivered: Optional[str] = Query(None),
    date_param: Optional[str] = Query(None, alias="date"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """List shipments; delivered=false keeps only undelivered ones"""
    bility_date = parse_calendar_date(date_param, "date") if non_empty_or_none(date_param) else None
    return await ShipmentService(session).get_shipments(
        query=non_empty_or_none(query),
        undelivered_only=(delivered == "false"),
        bility_date=bility_date,
    )

@router.get("/view-all", response_model=List[ShipmentResponse])
async def view_all_shipments(
    query: Optional[str] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Search by bility number, receiver or walk-in receiver name"""
    return await ShipmentService(session).search_shipments(non_empty_or_none(query))

@router.get("/report")
async def get_shipments_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    departure_city_id: Optional[str] = Query(None, alias="departureCityId"),
    to_city_id: Optional[str] = Query(None, alias="toCityId"),
    vehicle_id: Optional[str] = Query(None, alias="vehicleId"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Filtered shipment listing for reporting"""
    return await ReportService(session).get_shipments_report(
        start_date, end_date, departure_city_id, to_city_id, vehicle_id
    )

@router.get("/next-register-number", response_model=NextRegisterNumberResponse)
async def get_next_register_number(
    bility_date: Optional[date] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Preview the register number the next shipment of that month would get"""
    register_number = await ShipmentService(session).next_register_number(bility_date or date.today())
    return NextRegisterNumberResponse(register_number=register_number)

@router.get("/{register_number}", response_model=ShipmentResponse)
async def get_shipment(
    register_number: str,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get shipment by register number"""
    return await ShipmentService(session).get_shipment(register_number)
