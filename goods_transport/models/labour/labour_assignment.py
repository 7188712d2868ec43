from sqlalchemy import Column, Integer, String, Date, DateTime, Text, Numeric, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel, utcnow
from goods_transport.models.shared.enums import LabourAssignmentStatus

class LabourAssignment(BaseModel):
    __tablename__ = 'labour_assignments'

    labour_person_id = Column(Integer, ForeignKey('labour_persons.id'), nullable=False, index=True)
    shipment_id = Column(String(50), ForeignKey('shipments.register_number'), nullable=False, index=True)
    assigned_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    due_date = Column(Date)
    status = Column(SQLEnum(LabourAssignmentStatus), nullable=False, default=LabourAssignmentStatus.ASSIGNED)
    delivered_date = Column(DateTime(timezone=True))
    collected_amount = Column(Numeric(10, 2))
    settled_date = Column(DateTime(timezone=True))
    notes = Column(Text)

    # Relationships
    labour_person = relationship("LabourPerson", back_populates="assignments")
    shipment = relationship("Shipment")
