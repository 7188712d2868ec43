import logging
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.orm import selectinload

from goods_transport.core.exceptions import BaseAppException, InternalError, NotFoundError, ValidationError
from goods_transport.db.base import utcnow
from goods_transport.models.logistics.goods_detail import GoodsDetail
from goods_transport.models.logistics.return_shipment import ReturnShipment, ReturnItem
from goods_transport.models.logistics.shipment import Shipment
from goods_transport.models.shared.enums import ReturnStatus
from goods_transport.schemas.logistics.return_schema import ReturnShipmentCreate, ReturnShipmentUpdate

logger = logging.getLogger(__name__)

RETURN_LOAD_OPTIONS = (
    selectinload(ReturnShipment.return_items),
    selectinload(ReturnShipment.original_shipment).selectinload(Shipment.sender),
    selectinload(ReturnShipment.original_shipment).selectinload(Shipment.receiver),
)


class ReturnService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_return(self, data: ReturnShipmentCreate) -> ReturnShipment:
        """Open a return against a shipment, listing the goods coming back"""
        result = await self.session.execute(
            select(Shipment.id).where(Shipment.register_number == data.original_shipment_id)
        )
        if result.first() is None:
            raise NotFoundError(f"Shipment {data.original_shipment_id} not found.")

        if data.items:
            result = await self.session.execute(
                select(GoodsDetail.id).where(
                    GoodsDetail.shipment_id == data.original_shipment_id,
                    GoodsDetail.id.in_([item.goods_detail_id for item in data.items]),
                )
            )
            known = set(result.scalars().all())
            missing = [item.goods_detail_id for item in data.items if item.goods_detail_id not in known]
            if missing:
                raise ValidationError(
                    f"Goods detail IDs {missing} do not belong to shipment {data.original_shipment_id}."
                )

        try:
            return_shipment = ReturnShipment(
                original_shipment_id=data.original_shipment_id,
                reason=data.reason,
                action_taken=data.action_taken,
                comments=data.comments,
                status=ReturnStatus.PENDING,
            )
            return_shipment.return_items = [
                ReturnItem(
                    goods_detail_id=item.goods_detail_id,
                    quantity_returned=item.quantity_returned,
                    condition=item.condition,
                )
                for item in data.items
            ]
            self.session.add(return_shipment)
            await self.session.commit()
            logger.info(f"Return {return_shipment.id} opened for shipment {data.original_shipment_id}")
            return await self.get_return(return_shipment.id)

        except BaseAppException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating return shipment: {str(e)}")
            raise InternalError("Failed to create return shipment")

    async def get_return(self, return_id: int) -> ReturnShipment:
        result = await self.session.execute(
            select(ReturnShipment)
            .options(*RETURN_LOAD_OPTIONS)
            .where(ReturnShipment.id == return_id)
            .execution_options(populate_existing=True)
        )
        return_shipment = result.scalar_one_or_none()
        if not return_shipment:
            raise NotFoundError(f"Return shipment {return_id} not found.")
        return return_shipment

    async def get_returns(
        self, shipment_id: Optional[str] = None, status: Optional[ReturnStatus] = None
    ) -> List[ReturnShipment]:
        query = select(ReturnShipment).options(*RETURN_LOAD_OPTIONS)
        if shipment_id:
            query = query.where(ReturnShipment.original_shipment_id == shipment_id)
        if status:
            query = query.where(ReturnShipment.status == status)
        result = await self.session.execute(query.order_by(desc(ReturnShipment.created_at), desc(ReturnShipment.id)))
        return list(result.scalars().all())

    async def update_return(self, data: ReturnShipmentUpdate) -> ReturnShipment:
        """Change status; completing a return stamps its resolution date"""
        return_shipment = await self.get_return(data.id)
        try:
            return_shipment.status = data.status
            if data.action_taken:
                return_shipment.action_taken = data.action_taken
            if data.comments:
                return_shipment.comments = data.comments
            if data.status == ReturnStatus.COMPLETED:
                return_shipment.resolution_date = utcnow()
            await self.session.commit()
            logger.info(f"Return {data.id} moved to {data.status.value}")
            return await self.get_return(data.id)
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error updating return shipment {data.id}: {str(e)}")
            raise InternalError("Failed to update return shipment")
