from pydantic import BaseModel, Field, computed_field, field_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from goods_transport.models.shared.enums import ShipmentPaymentStatus
from goods_transport.utils.report_filters import extract_payment_status

class GoodsDetailCreate(BaseModel):
    item_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    charges: Decimal = Decimal("0")
    delivery_charges: Decimal = Decimal("0")

class ShipmentCreate(BaseModel):
    bility_number: str = Field(..., min_length=1, max_length=50)
    bility_date: date
    departure_city_id: int = Field(..., gt=0)
    to_city_id: Optional[int] = None
    forwarding_agency_id: int = Field(..., gt=0)
    vehicle_number_id: int = Field(..., gt=0)
    sender_id: int = Field(..., gt=0)
    receiver_id: int = Field(..., gt=0)
    walk_in_sender_name: Optional[str] = None
    walk_in_receiver_name: Optional[str] = None
    total_delivery_charges: Decimal = Decimal("0")
    total_amount: Decimal = Field(..., ge=0)
    remarks: Optional[str] = None
    payment_status: ShipmentPaymentStatus = ShipmentPaymentStatus.PENDING
    goods_details: List[GoodsDetailCreate] = Field(..., min_length=1)

    @field_validator('bility_number')
    @classmethod
    def validate_bility_number(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Bility number is required')
        return v

class NamedRef(BaseModel):
    id: int
    name: str

    class Config:
        from_attributes = True

class ItemRef(BaseModel):
    id: int
    item_description: str

    class Config:
        from_attributes = True

class GoodsDetailResponse(BaseModel):
    id: int
    item_id: int
    quantity: int
    charges: float
    delivery_charges: float
    item: Optional[ItemRef] = None

    class Config:
        from_attributes = True

class ShipmentResponse(BaseModel):
    id: int
    register_number: str
    bility_number: str
    bility_date: date
    departure_city_id: int
    to_city_id: Optional[int] = None
    forwarding_agency_id: int
    vehicle_id: int
    sender_id: int
    receiver_id: int
    walk_in_sender_name: Optional[str] = None
    walk_in_receiver_name: Optional[str] = None
    total_charges: float
    total_delivery_charges: float
    delivery_date: Optional[date] = None
    remarks: Optional[str] = None
    created_at: datetime
    departure_city: Optional[NamedRef] = None
    to_city: Optional[NamedRef] = None
    sender: Optional[NamedRef] = None
    receiver: Optional[NamedRef] = None
    goods_details: List[GoodsDetailResponse] = []

    @computed_field
    @property
    def payment_status(self) -> str:
        return extract_payment_status(self.remarks)

    class Config:
        from_attributes = True

class ShipmentCreateResponse(BaseModel):
    message: str
    register_number: str
    shipment: ShipmentResponse

class NextRegisterNumberResponse(BaseModel):
    register_number: str
