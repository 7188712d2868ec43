from sqlalchemy import Column, String, Date, DateTime, Text, Numeric, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel
from goods_transport.models.shared.enums import ApprovalStatus, DeliveryStatus

class Delivery(BaseModel):
    __tablename__ = 'deliveries'

    shipment_id = Column(String(50), ForeignKey('shipments.register_number'), nullable=False, index=True)
    delivery_date = Column(Date, nullable=False)
    delivery_time = Column(DateTime(timezone=True))
    station_expense = Column(Numeric(10, 2), nullable=False, default=0)
    bility_expense = Column(Numeric(10, 2), nullable=False, default=0)
    station_labour = Column(Numeric(10, 2), nullable=False, default=0)
    cart_labour = Column(Numeric(10, 2), nullable=False, default=0)
    total_expenses = Column(Numeric(10, 2), nullable=False, default=0)
    receiver_name = Column(String(100), nullable=False)
    receiver_phone = Column(String(20), nullable=False)
    receiver_cnic = Column(String(20), nullable=False)
    receiver_address = Column(Text, nullable=False)
    delivery_notes = Column(Text)
    delivery_status = Column(String(20), nullable=False, default=DeliveryStatus.DELIVERED.value)
    approval_status = Column(SQLEnum(ApprovalStatus), nullable=False, default=ApprovalStatus.PENDING, index=True)
    approved_by = Column(String(100))
    approved_at = Column(DateTime(timezone=True))

    # Relationships
    shipment = relationship("Shipment", back_populates="deliveries")

    @property
    def delivery_id(self) -> int:
        return self.id
