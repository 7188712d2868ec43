from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from goods_transport.models.shared.enums import LabourAssignmentAction, LabourAssignmentStatus

class LabourPersonCreate(BaseModel):
    name: str
    contact_info: str

    @field_validator('name', 'contact_info')
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Name and contact info are required')
        return v

class LabourPersonResponse(BaseModel):
    id: int
    name: str
    contact_info: str
    created_at: datetime

    class Config:
        from_attributes = True

class LabourAssignmentCreate(BaseModel):
    labour_person_id: int = Field(..., gt=0)
    shipment_ids: List[str] = Field(..., min_length=1)
    due_date: Optional[date] = None
    notes: Optional[str] = None

    @field_validator('shipment_ids')
    @classmethod
    def unique_ids(cls, v: List[str]) -> List[str]:
        cleaned = [s.strip() for s in v if s and s.strip()]
        if not cleaned:
            raise ValueError('At least one shipment ID is required')
        return list(dict.fromkeys(cleaned))

class LabourAssignmentUpdate(BaseModel):
    assignment_id: int = Field(..., gt=0)
    action: LabourAssignmentAction
    collected_amount: Optional[Decimal] = None
    notes: Optional[str] = None
    station_expense: Decimal = Field(Decimal("0"), ge=0)
    bility_expense: Decimal = Field(Decimal("0"), ge=0)
    station_labour: Decimal = Field(Decimal("0"), ge=0)
    cart_labour: Decimal = Field(Decimal("0"), ge=0)

class AssignmentShipmentInfo(BaseModel):
    register_number: str
    bility_number: str
    total_charges: float
    walk_in_receiver_name: Optional[str] = None

    class Config:
        from_attributes = True

class LabourAssignmentResponse(BaseModel):
    id: int
    labour_person_id: int
    shipment_id: str
    assigned_date: datetime
    due_date: Optional[date] = None
    status: LabourAssignmentStatus
    delivered_date: Optional[datetime] = None
    collected_amount: float = 0
    settled_date: Optional[datetime] = None
    notes: Optional[str] = None
    labour_person: Optional[LabourPersonResponse] = None
    shipment: Optional[AssignmentShipmentInfo] = None

    @field_validator('collected_amount', mode='before')
    @classmethod
    def default_zero(cls, v):
        return v if v is not None else 0

    class Config:
        from_attributes = True

class LabourReminderResponse(LabourAssignmentResponse):
    is_overdue: bool = False

class LabourAssignmentActionResponse(BaseModel):
    message: str
    assignment: LabourAssignmentResponse

class LabourSettlementCreate(BaseModel):
    labour_person_id: int = Field(..., gt=0)
    shipment_id: str = Field(..., min_length=1)
    amount_paid: Decimal = Field(..., gt=0)
    payment_method: str = "CASH"
    notes: Optional[str] = None

class LabourPaymentResponse(BaseModel):
    id: int
    labour_person_id: int
    shipment_id: str
    payment_date: datetime
    amount_paid: float
    payment_method: str
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class SettlementAssignment(BaseModel):
    id: int
    shipment_id: str
    bility_number: str
    shipment_charges: float
    delivery_expenses: Optional[float] = None
    total_due: float
    status: LabourAssignmentStatus
    collected_amount: float

class LabourSettlementSummary(BaseModel):
    id: int
    name: str
    contact_info: str
    totalDue: float
    totalPaid: float
    balance: float
    assignments: List[SettlementAssignment]
    paymentHistory: List[LabourPaymentResponse]
