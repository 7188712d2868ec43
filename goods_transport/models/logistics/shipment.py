from sqlalchemy import Column, Integer, String, Date, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class Shipment(BaseModel):
    __tablename__ = 'shipments'

    register_number = Column(String(50), unique=True, nullable=False, index=True)
    bility_number = Column(String(50), unique=True, nullable=False)
    bility_date = Column(Date, nullable=False)
    departure_city_id = Column(Integer, ForeignKey('cities.id'), nullable=False)
    to_city_id = Column(Integer, ForeignKey('cities.id', ondelete='SET NULL'))
    forwarding_agency_id = Column(Integer, ForeignKey('agencies.id'), nullable=False)
    vehicle_id = Column(Integer, ForeignKey('vehicles.id'), nullable=False)
    sender_id = Column(Integer, ForeignKey('parties.id'), nullable=False)
    receiver_id = Column(Integer, ForeignKey('parties.id'), nullable=False)
    walk_in_sender_name = Column(String(100))
    walk_in_receiver_name = Column(String(100))
    total_charges = Column(Numeric(10, 2), nullable=False)
    total_delivery_charges = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_date = Column(Date)
    remarks = Column(Text)

    # Relationships
    departure_city = relationship("City", foreign_keys=[departure_city_id], back_populates="departing_shipments")
    to_city = relationship("City", foreign_keys=[to_city_id], back_populates="arriving_shipments")
    forwarding_agency = relationship("Agency", back_populates="shipments")
    vehicle = relationship("Vehicle", back_populates="shipments")
    sender = relationship("Party", foreign_keys=[sender_id], back_populates="sent_shipments")
    receiver = relationship("Party", foreign_keys=[receiver_id], back_populates="received_shipments")
    goods_details = relationship("GoodsDetail", back_populates="shipment", cascade="all, delete-orphan")
    deliveries = relationship("Delivery", back_populates="shipment")
