from sqlalchemy import Column, Integer, String, DateTime, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel, utcnow

class LabourPaymentHistory(BaseModel):
    __tablename__ = 'labour_payment_history'

    labour_person_id = Column(Integer, ForeignKey('labour_persons.id'), nullable=False, index=True)
    shipment_id = Column(String(50), ForeignKey('shipments.register_number'), nullable=False)
    payment_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    amount_paid = Column(Numeric(10, 2), nullable=False)
    payment_method = Column(String(50), nullable=False, default="CASH")
    notes = Column(Text)

    # Relationships
    labour_person = relationship("LabourPerson", back_populates="payments")
