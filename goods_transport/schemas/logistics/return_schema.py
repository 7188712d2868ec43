from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from goods_transport.models.shared.enums import ReturnStatus
from goods_transport.schemas.logistics.shipment_schema import NamedRef

class ReturnItemCreate(BaseModel):
    goods_detail_id: int = Field(..., gt=0)
    quantity_returned: int = Field(..., gt=0)
    condition: str = Field(..., min_length=1, max_length=50)

class ReturnShipmentCreate(BaseModel):
    original_shipment_id: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1, max_length=255)
    items: List[ReturnItemCreate] = []
    action_taken: Optional[str] = None
    comments: Optional[str] = None

class ReturnShipmentUpdate(BaseModel):
    id: int = Field(..., gt=0)
    status: ReturnStatus
    action_taken: Optional[str] = None
    comments: Optional[str] = None

class ReturnItemResponse(BaseModel):
    id: int
    goods_detail_id: int
    quantity_returned: int
    condition: str

    class Config:
        from_attributes = True

class ReturnShipmentInfo(BaseModel):
    register_number: str
    bility_number: str
    sender: Optional[NamedRef] = None
    receiver: Optional[NamedRef] = None

    class Config:
        from_attributes = True

class ReturnShipmentResponse(BaseModel):
    id: int
    original_shipment_id: str
    return_date: datetime
    reason: str
    status: ReturnStatus
    action_taken: Optional[str] = None
    resolution_date: Optional[datetime] = None
    comments: Optional[str] = None
    return_items: List[ReturnItemResponse] = []
    original_shipment: Optional[ReturnShipmentInfo] = None

    class Config:
        from_attributes = True
