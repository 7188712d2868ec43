from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel, utcnow
from goods_transport.models.shared.enums import ReturnStatus

class ReturnShipment(BaseModel):
    __tablename__ = 'return_shipments'

    original_shipment_id = Column(
        String(50), ForeignKey('shipments.register_number', ondelete='CASCADE'), nullable=False, index=True
    )
    return_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    reason = Column(String(255), nullable=False)
    status = Column(SQLEnum(ReturnStatus), nullable=False, default=ReturnStatus.PENDING)
    action_taken = Column(String(255))
    resolution_date = Column(DateTime(timezone=True))
    comments = Column(Text)

    # Relationships
    original_shipment = relationship("Shipment")
    return_items = relationship("ReturnItem", back_populates="return_shipment", cascade="all, delete-orphan")


class ReturnItem(BaseModel):
    __tablename__ = 'return_items'

    return_shipment_id = Column(Integer, ForeignKey('return_shipments.id', ondelete='CASCADE'), nullable=False)
    goods_detail_id = Column(Integer, ForeignKey('goods_details.id', ondelete='CASCADE'), nullable=False)
    quantity_returned = Column(Integer, nullable=False)
    condition = Column(String(50), nullable=False)

    # Relationships
    return_shipment = relationship("ReturnShipment", back_populates="return_items")
    goods_detail = relationship("GoodsDetail")
