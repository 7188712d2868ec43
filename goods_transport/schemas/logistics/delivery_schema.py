from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from goods_transport.models.shared.enums import ApprovalAction, ApprovalStatus
from goods_transport.schemas.logistics.shipment_schema import NamedRef

class DeliveryCreate(BaseModel):
    shipment_id: str = Field(..., min_length=1)
    delivery_date: date
    station_expense: Decimal = Field(Decimal("0"), ge=0)
    bility_expense: Decimal = Field(Decimal("0"), ge=0)
    station_labour: Decimal = Field(Decimal("0"), ge=0)
    cart_labour: Decimal = Field(Decimal("0"), ge=0)
    total_expenses: Optional[Decimal] = Field(None, ge=0)
    receiver_name: str = Field(..., min_length=1)
    receiver_phone: str = Field(..., min_length=1)
    receiver_cnic: str = Field(..., min_length=1)
    receiver_address: str = Field(..., min_length=1)
    delivery_notes: Optional[str] = None

    @field_validator('shipment_id', 'receiver_name')
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Field is required')
        return v

class ApprovalRequest(BaseModel):
    delivery_id: int = Field(..., gt=0)
    action: ApprovalAction

class ApprovalResponse(BaseModel):
    message: str
    delivery_id: int
    approval_status: ApprovalStatus
    description: str

class DeliveryShipmentInfo(BaseModel):
    register_number: str
    bility_number: str
    bility_date: date
    walk_in_receiver_name: Optional[str] = None
    sender: Optional[NamedRef] = None
    receiver: Optional[NamedRef] = None

    class Config:
        from_attributes = True

class DeliveryResponse(BaseModel):
    delivery_id: int
    shipment_id: str
    delivery_date: date
    delivery_time: Optional[datetime] = None
    station_expense: float
    bility_expense: float
    station_labour: float
    cart_labour: float
    total_expenses: float
    receiver_name: str
    receiver_phone: str
    receiver_cnic: str
    receiver_address: str
    delivery_notes: Optional[str] = None
    delivery_status: str
    approval_status: ApprovalStatus
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None
    shipment: Optional[DeliveryShipmentInfo] = None

    class Config:
        from_attributes = True

class DeliveryCreateResponse(BaseModel):
    message: str
    delivery: DeliveryResponse
