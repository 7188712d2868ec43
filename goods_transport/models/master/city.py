from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class City(BaseModel):
    __tablename__ = 'cities'

    name = Column(String(50), unique=True, nullable=False)

    # Relationships
    departing_shipments = relationship(
        "Shipment", foreign_keys="Shipment.departure_city_id", back_populates="departure_city"
    )
    arriving_shipments = relationship(
        "Shipment", foreign_keys="Shipment.to_city_id", back_populates="to_city"
    )
