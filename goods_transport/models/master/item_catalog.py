from sqlalchemy import Column, String
from goods_transport.db.base import BaseModel

class ItemCatalog(BaseModel):
    __tablename__ = 'item_catalog'

    item_description = Column(String(100), unique=True, nullable=False)
