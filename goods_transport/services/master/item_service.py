import logging
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from goods_transport.core.exceptions import BaseAppException, ConflictError, InternalError
from goods_transport.models.master.item_catalog import ItemCatalog
from goods_transport.schemas.master.master_schema import ItemCreate

logger = logging.getLogger(__name__)

class ItemService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_item(self, item_data: ItemCreate) -> ItemCatalog:
        try:
            result = await self.session.execute(
                select(ItemCatalog).where(ItemCatalog.item_description == item_data.description)
            )
            if result.scalar_one_or_none():
                raise ConflictError(f"Item '{item_data.description}' already exists.")

            item = ItemCatalog(item_description=item_data.description)
            self.session.add(item)
            await self.session.commit()
            await self.session.refresh(item)

            logger.info(f"Catalog item created successfully with ID: {item.id}")
            return item

        except BaseAppException:
            raise
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(f"Item '{item_data.description}' already exists.")
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating catalog item: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create item.")

    async def get_items(self) -> List[ItemCatalog]:
        result = await self.session.execute(select(ItemCatalog).order_by(ItemCatalog.item_description))
        return list(result.scalars().all())
