import logging
from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.schemas.master.master_schema import (
    VehicleCreate, VehicleResponse, VehicleDetailResponse, VehicleTransactionResponse
)
from goods_transport.schemas.logistics.vehicle_ledger_schema import (
    SettleFareRequest, SettleFareResponse, VehicleFinancialsResponse,
    VehicleLedgerTotals, VehicleTransactionCreate
)
from goods_transport.services.logistics.vehicle_service import VehicleService, parse_vehicle_id

router = APIRouter()
logger = logging.getLogger(__name__)

@router.post("", response_model=VehicleResponse, status_code=status.HTTP_201_CREATED)
async def create_vehicle(
    vehicle_data: VehicleCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.MASTER_DATA_WRITE))
):
    """Create a new vehicle"""
    return await VehicleService(session).create_vehicle(vehicle_data)

@router.get("", response_model=List[VehicleResponse])
async def get_vehicles(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get all vehicles"""
    return await VehicleService(session).get_vehicles()

@router.get("/ledgers", response_model=List[VehicleLedgerTotals])
async def get_vehicle_ledgers(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Credit, debit and balance totals for every vehicle"""
    return await VehicleService(session).get_ledger_totals()

@router.get("/{vehicle_id}", response_model=VehicleDetailResponse)
async def get_vehicle(
    vehicle_id: str,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Get vehicle with its transactions"""
    return await VehicleService(session).get_vehicle(parse_vehicle_id(vehicle_id), with_transactions=True)

@router.get("/{vehicle_id}/financials", response_model=VehicleFinancialsResponse)
async def get_vehicle_financials(
    vehicle_id: str,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Ledger with running balance and fare payment summary"""
    return await VehicleService(session).get_financials(parse_vehicle_id(vehicle_id))

@router.post(
    "/{vehicle_id}/transaction",
    response_model=VehicleTransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_vehicle_transaction(
    vehicle_id: str,
    transaction_data: VehicleTransactionCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.FINANCE_WRITE))
):
    """Record a manual credit or debit"""
    return await VehicleService(session).add_transaction(parse_vehicle_id(vehicle_id), transaction_data)

@router.patch("/{vehicle_id}/settle-fare", response_model=SettleFareResponse)
async def settle_vehicle_fare(
    vehicle_id: str,
    settle_data: SettleFareRequest,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.FINANCE_WRITE))
):
    """Pay out a trip's fare and mark it settled"""
    return await VehicleService(session).settle_fare(parse_vehicle_id(vehicle_id), settle_data)
