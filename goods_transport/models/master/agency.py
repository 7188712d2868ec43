from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class Agency(BaseModel):
    __tablename__ = 'agencies'

    name = Column(String(100), unique=True, nullable=False)

    # Relationships
    shipments = relationship("Shipment", back_populates="forwarding_agency")
