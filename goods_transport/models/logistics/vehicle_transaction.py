from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel, utcnow

class VehicleTransaction(BaseModel):
    __tablename__ = 'vehicle_transactions'

    vehicle_id = Column(Integer, ForeignKey('vehicles.id'), nullable=False, index=True)
    shipment_id = Column(String(50), ForeignKey('shipments.register_number', ondelete='SET NULL'))
    trip_id = Column(Integer, ForeignKey('trip_logs.id', ondelete='SET NULL'))
    transaction_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    credit_amount = Column(Numeric(10, 2), nullable=False, default=0)
    debit_amount = Column(Numeric(10, 2), nullable=False, default=0)
    description = Column(String(255))

    # Relationships
    vehicle = relationship("Vehicle", back_populates="transactions")
    trip = relationship("TripLog")
