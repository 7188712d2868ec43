from pydantic import BaseModel, Field
from typing import Optional, List
from decimal import Decimal
from goods_transport.models.shared.enums import VehicleTransactionType

class VehicleTransactionCreate(BaseModel):
    amount: Decimal = Field(..., gt=0)
    description: str = Field(..., min_length=1, max_length=255)
    type: VehicleTransactionType

class SettleFareRequest(BaseModel):
    payment_amount: Decimal = Field(..., gt=0, alias="paymentAmount")
    trip_id: int = Field(..., gt=0, alias="tripId")

    class Config:
        populate_by_name = True

class LedgerVehicle(BaseModel):
    id: int
    vehicleNumber: str

class LedgerRow(BaseModel):
    id: int
    vehicle_id: int
    shipment_id: Optional[str] = None
    trip_id: Optional[int] = None
    transaction_date: str
    credit_amount: float
    debit_amount: float
    description: Optional[str] = None
    balance: float

class LedgerSummary(BaseModel):
    currentBalance: float
    farePaymentStatus: str
    tripToSettleId: Optional[int] = None

class VehicleFinancialsResponse(BaseModel):
    vehicle: LedgerVehicle
    ledger: List[LedgerRow]
    summary: LedgerSummary

class VehicleLedgerTotals(BaseModel):
    id: int
    vehicleNumber: str
    totalCredits: float
    totalDebits: float
    balance: float
    transactionCount: int

class SettleFareResponse(BaseModel):
    message: str
    transaction_id: int
    trip_id: int
