from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class Vehicle(BaseModel):
    __tablename__ = 'vehicles'

    vehicle_number = Column(String(50), unique=True, nullable=False)

    # Relationships
    shipments = relationship("Shipment", back_populates="vehicle")
    transactions = relationship(
        "VehicleTransaction",
        back_populates="vehicle",
        order_by="VehicleTransaction.transaction_date",
    )
    trip_logs = relationship("TripLog", back_populates="vehicle")
