from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class LabourPerson(BaseModel):
    __tablename__ = 'labour_persons'

    name = Column(String(100), nullable=False)
    contact_info = Column(String(100), nullable=False)

    # Relationships
    assignments = relationship("LabourAssignment", back_populates="labour_person")
    payments = relationship("LabourPaymentHistory", back_populates="labour_person")
