from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class TripShipmentLog(BaseModel):
    __tablename__ = 'trip_shipment_logs'
    __table_args__ = (UniqueConstraint('trip_log_id', 'shipment_id'),)

    trip_log_id = Column(Integer, ForeignKey('trip_logs.id'), nullable=False)
    shipment_id = Column(String(50), nullable=False)  # bility number as written on the trip sheet
    serial_number = Column(Integer, nullable=False)
    receiver_name = Column(String(100), nullable=False)
    item_details = Column(String(255), nullable=False)
    quantity = Column(Integer, nullable=False)
    delivery_charges = Column(Numeric(10, 2), nullable=False)

    # Relationships
    trip_log = relationship("TripLog", back_populates="shipment_logs")
