from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.schemas.logistics.trip_schema import (
    NextSerialResponse, TripCreateResponse, TripLogCreate, TripLogResponse
)
from goods_transport.services.logistics.trip_service import TripService

router = APIRouter()

@router.post("", response_model=TripCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripLogCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Create a trip log with its shipment lines"""
    trip = await TripService(session).create_trip(trip_data)
    return TripCreateResponse(message="Trip log created successfully", tripLog=TripLogResponse.model_validate(trip))

@router.get("", response_model=List[TripLogResponse])
async def get_trips(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get all trip logs"""
    return await TripService(session).get_trips()

@router.get("/next-serial", response_model=NextSerialResponse)
async def get_next_serial(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    return NextSerialResponse(nextSerial=await TripService(session).next_serial())
