from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

def _trimmed(value: str, min_length: int, label: str) -> str:
    value = value.strip()
    if len(value) < min_length:
        if min_length == 1:
            raise ValueError(f'{label} is required')
        raise ValueError(f'{label} must be at least {min_length} characters long')
    return value

# Agencies
class AgencyCreate(BaseModel):
    name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _trimmed(v, 2, 'Agency name')

class AgencyResponse(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True

# Cities
class CityCreate(BaseModel):
    name: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _trimmed(v, 1, 'City name')

class CityResponse(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True

# Parties
class PartyCreate(BaseModel):
    name: str
    contact_info: str = Field(..., alias="contactInfo")
    opening_balance: Decimal = Field(Decimal("0"), alias="openingBalance")

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _trimmed(v, 2, 'Party name')

    @field_validator('contact_info')
    @classmethod
    def validate_contact_info(cls, v: str) -> str:
        return _trimmed(v, 5, 'Contact info')

    class Config:
        populate_by_name = True

class PartyResponse(BaseModel):
    id: int
    name: str
    contact_info: str = Field(..., alias="contactInfo")
    opening_balance: float = Field(..., alias="openingBalance")
    created_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True

# Items
class ItemCreate(BaseModel):
    description: str

    @field_validator('description')
    @classmethod
    def validate_description(cls, v: str) -> str:
        return _trimmed(v, 2, 'Item description')

class ItemResponse(BaseModel):
    id: int
    item_description: str
    created_at: datetime

    class Config:
        from_attributes = True

# Vehicles
class VehicleCreate(BaseModel):
    vehicle_number: str = Field(..., alias="vehicleNumber")

    @field_validator('vehicle_number')
    @classmethod
    def validate_vehicle_number(cls, v: str) -> str:
        return _trimmed(v, 2, 'Vehicle number').upper()

    class Config:
        populate_by_name = True

class VehicleResponse(BaseModel):
    id: int
    vehicle_number: str = Field(..., alias="vehicleNumber")
    created_at: datetime

    class Config:
        from_attributes = True
        populate_by_name = True

class VehicleTransactionResponse(BaseModel):
    id: int
    vehicle_id: int
    shipment_id: Optional[str] = None
    trip_id: Optional[int] = None
    transaction_date: datetime
    credit_amount: float
    debit_amount: float
    description: Optional[str] = None

    class Config:
        from_attributes = True

class VehicleDetailResponse(VehicleResponse):
    transactions: List[VehicleTransactionResponse] = []
