from sqlalchemy import Column, String, Numeric
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class Party(BaseModel):
    __tablename__ = 'parties'

    name = Column(String(100), nullable=False)
    contact_info = Column(String(100), nullable=False)
    opening_balance = Column(Numeric(10, 2), nullable=False, default=0)

    # Relationships
    sent_shipments = relationship(
        "Shipment", foreign_keys="Shipment.sender_id", back_populates="sender"
    )
    received_shipments = relationship(
        "Shipment", foreign_keys="Shipment.receiver_id", back_populates="receiver"
    )
    transactions = relationship(
        "PartyTransaction",
        primaryjoin="Party.id == foreign(PartyTransaction.party_ref_id)",
        viewonly=True,
    )
