import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from goods_transport.api.dependencies import require_permission
from goods_transport.auth.permissions import Permission
from goods_transport.core.database import get_async_session
from goods_transport.models.shared.enums import LabourAssignmentStatus
from goods_transport.schemas.common.message import MessageResponse
from goods_transport.schemas.labour.labour_schema import (
    LabourAssignmentActionResponse, LabourAssignmentCreate, LabourAssignmentResponse,
    LabourAssignmentUpdate, LabourPaymentResponse, LabourPersonCreate, LabourPersonResponse,
    LabourReminderResponse, LabourSettlementCreate, LabourSettlementSummary
)
from goods_transport.services.labour.labour_service import LabourService
from goods_transport.services.reports.report_service import ReportService

persons_router = APIRouter()
assignments_router = APIRouter()
reminders_router = APIRouter()
settlements_router = APIRouter()
logger = logging.getLogger(__name__)

ACTION_VERBS = {"DELIVER": "delivered", "COLLECT": "collected", "SETTLE": "settled"}

# Labour persons
@persons_router.post("", response_model=LabourPersonResponse, status_code=status.HTTP_201_CREATED)
async def create_labour_person(
    person_data: LabourPersonCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.LABOUR_MANAGEMENT))
):
    """Register a labour person"""
    return await LabourService(session).create_person(person_data)

@persons_router.get("", response_model=List[LabourPersonResponse])
async def get_labour_persons(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    return await LabourService(session).get_persons()

@persons_router.get("/report")
async def get_labour_persons_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Collected amounts per labour person for assignments made in range"""
    return await ReportService(session).get_labour_persons_report(start_date, end_date)

# Assignments
@assignments_router.post("", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def create_labour_assignments(
    assignment_data: LabourAssignmentCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.LABOUR_MANAGEMENT))
):
    """Assign undelivered shipments to a labour person"""
    count = await LabourService(session).create_assignments(assignment_data)
    return MessageResponse(message=f"{count} assignments created successfully.")

@assignments_router.get("", response_model=List[LabourAssignmentResponse])
async def get_labour_assignments(
    labour_person_id: Optional[int] = Query(None),
    assignment_status: Optional[LabourAssignmentStatus] = Query(None, alias="status"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    return await LabourService(session).get_assignments(labour_person_id, assignment_status)

@assignments_router.get("/report")
async def get_labour_assignments_report(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    assignment_status: Optional[str] = Query(None, alias="status"),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Receivable, collected and discounted amounts per assignment"""
    return await ReportService(session).get_labour_assignments_report(start_date, end_date, assignment_status)

@assignments_router.patch("", response_model=LabourAssignmentActionResponse)
async def update_labour_assignment(
    update_data: LabourAssignmentUpdate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.LABOUR_MANAGEMENT))
):
    """Apply DELIVER, COLLECT or SETTLE to an assignment"""
    assignment = await LabourService(session).update_assignment(update_data)
    return LabourAssignmentActionResponse(
        message=f"Assignment {ACTION_VERBS[update_data.action.value]} successfully.",
        assignment=LabourAssignmentResponse.model_validate(assignment),
    )

# Reminders
@reminders_router.get("", response_model=List[LabourReminderResponse])
async def get_labour_reminders(
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.CORE_OPERATIONS))
):
    """Unsettled assignments, earliest due first"""
    reminders = await LabourService(session).get_reminders()
    return [
        LabourReminderResponse.model_validate(item["assignment"]).model_copy(
            update={"is_overdue": item["is_overdue"]}
        )
        for item in reminders
    ]

# Settlements
@settlements_router.post("", response_model=LabourPaymentResponse, status_code=status.HTTP_201_CREATED)
async def create_labour_settlement(
    settlement_data: LabourSettlementCreate,
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.LABOUR_MANAGEMENT))
):
    """Record a payment from a labour person"""
    return await LabourService(session).record_payment(settlement_data)

@settlements_router.get("", response_model=List[LabourSettlementSummary])
async def get_labour_settlements(
    labour_person_id: Optional[int] = Query(None),
    session: AsyncSession = Depends(get_async_session),
    current_user = Depends(require_permission(Permission.REPORTS_VIEW))
):
    """Amount due, paid and outstanding per labour person"""
    return await LabourService(session).get_settlements(labour_person_id)
