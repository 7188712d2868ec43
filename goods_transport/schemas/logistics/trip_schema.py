from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

class TripShipmentLogCreate(BaseModel):
    serial_number: int = Field(..., ge=1)
    shipment_id: str = Field(..., min_length=1)
    receiver_name: str = Field(..., min_length=1)
    item_details: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)
    delivery_charges: Decimal = Field(..., ge=0)

class TripLogCreate(BaseModel):
    vehicle_id: int = Field(..., ge=1)
    driver_name: str = Field(..., min_length=1)
    driver_mobile: str = Field(..., min_length=1)
    station_name: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    date: date
    arrival_time: str = Field(..., min_length=1)
    departure_time: str = Field(..., min_length=1)
    total_fare_collected: Decimal = Field(Decimal("0"), ge=0)
    delivery_cut: Decimal = Field(Decimal("0"), ge=0)
    commission: Decimal = Field(Decimal("0"), ge=0)
    received_amount: Decimal = Field(Decimal("0"), ge=0)
    accountant_reward: Decimal = Field(Decimal("0"), ge=0)
    remaining_fare: Decimal = Field(Decimal("0"), ge=0)
    note: Optional[str] = None
    shipment_logs: List[TripShipmentLogCreate] = Field(..., min_length=1, alias="shipmentLogs")

    class Config:
        populate_by_name = True

class TripShipmentLogResponse(BaseModel):
    id: int
    serial_number: int
    shipment_id: str
    receiver_name: str
    item_details: str
    quantity: int
    delivery_charges: float

    class Config:
        from_attributes = True

class TripLogResponse(BaseModel):
    id: int
    vehicle_id: int
    driver_name: str
    driver_mobile: str
    station_name: str
    city: str
    date: date
    arrival_time: str
    departure_time: str
    total_fare_collected: float
    delivery_cut: float
    commission: float
    received_amount: float
    accountant_reward: float
    remaining_fare: float
    fare_is_paid: bool
    note: Optional[str] = None
    created_at: datetime
    shipment_logs: List[TripShipmentLogResponse] = Field([], serialization_alias="shipmentLogs")

    class Config:
        from_attributes = True

class TripCreateResponse(BaseModel):
    message: str
    tripLog: TripLogResponse

class NextSerialResponse(BaseModel):
    nextSerial: int
