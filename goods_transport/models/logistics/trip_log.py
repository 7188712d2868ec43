from sqlalchemy import Column, Integer, String, Date, Text, Boolean, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class TripLog(BaseModel):
    __tablename__ = 'trip_logs'

    vehicle_id = Column(Integer, ForeignKey('vehicles.id'), nullable=False, index=True)
    driver_name = Column(String(100), nullable=False)
    driver_mobile = Column(String(20), nullable=False)
    station_name = Column(String(100), nullable=False)
    city = Column(String(50), nullable=False)
    date = Column(Date, nullable=False)
    arrival_time = Column(String(10), nullable=False)
    departure_time = Column(String(10), nullable=False)
    total_fare_collected = Column(Numeric(10, 2), nullable=False)
    delivery_cut = Column(Numeric(10, 2), nullable=False)
    commission = Column(Numeric(10, 2), nullable=False)
    received_amount = Column(Numeric(10, 2), nullable=False)
    accountant_reward = Column(Numeric(10, 2), nullable=False, default=0)
    remaining_fare = Column(Numeric(10, 2), nullable=False, default=0)
    fare_is_paid = Column(Boolean, nullable=False, default=False)
    note = Column(Text)

    # Relationships
    vehicle = relationship("Vehicle", back_populates="trip_logs")
    shipment_logs = relationship(
        "TripShipmentLog", back_populates="trip_log", cascade="all, delete-orphan"
    )
