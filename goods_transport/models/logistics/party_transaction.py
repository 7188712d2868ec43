from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, Enum as SQLEnum
from goods_transport.db.base import BaseModel, utcnow
from goods_transport.models.shared.enums import PartyType

class PartyTransaction(BaseModel):
    """Money owed to or received from a sender/receiver party for a shipment."""
    __tablename__ = 'party_transactions'

    transaction_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    party_type = Column(SQLEnum(PartyType), nullable=False)
    party_ref_id = Column(Integer, nullable=False, index=True)
    shipment_id = Column(String(50), ForeignKey('shipments.register_number'), nullable=False)
    credit_amount = Column(Numeric(10, 2), nullable=False, default=0)
    debit_amount = Column(Numeric(10, 2), nullable=False, default=0)
    description = Column(String(255))
