from sqlalchemy import Column, Integer, String, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from goods_transport.db.base import BaseModel

class GoodsDetail(BaseModel):
    __tablename__ = 'goods_details'

    shipment_id = Column(
        String(50), ForeignKey('shipments.register_number', ondelete='CASCADE'), nullable=False, index=True
    )
    item_id = Column(Integer, ForeignKey('item_catalog.id'), nullable=False)
    quantity = Column(Integer, nullable=False)
    charges = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_charges = Column(Numeric(10, 2), nullable=False, default=0)

    # Relationships
    shipment = relationship("Shipment", back_populates="goods_details")
    item = relationship("ItemCatalog")
