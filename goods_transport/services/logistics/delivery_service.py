# goods_transport/services/logistics/delivery_service.py
import logging
from typing import List, Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, desc
from sqlalchemy.orm import selectinload

from goods_transport.auth.permissions import Permission, policy_engine
from goods_transport.core.exceptions import (
    BaseAppException, ConflictError, InternalError, NotFoundError
)
from goods_transport.db.base import utcnow
from goods_transport.models.auth.user import User
from goods_transport.models.logistics.delivery import Delivery
from goods_transport.models.logistics.shipment import Shipment
from goods_transport.models.shared.enums import ApprovalAction, ApprovalStatus, DeliveryStatus
from goods_transport.schemas.logistics.delivery_schema import DeliveryCreate
from goods_transport.services.logistics.delivery_approval import (
    describe, is_final_approval, plan_transition
)
from goods_transport.utils.report_filters import (
    day_bounds, format_timestamp, parse_calendar_date, to_number
)

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

DELIVERY_LOAD_OPTIONS = (
    selectinload(Delivery.shipment).selectinload(Shipment.sender),
    selectinload(Delivery.shipment).selectinload(Shipment.receiver),
)


class DeliveryService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_delivery(self, data: DeliveryCreate) -> Delivery:
        """Record the physical delivery of a shipment; approval starts at PENDING"""
        result = await self.session.execute(
            select(Shipment).where(Shipment.register_number == data.shipment_id)
        )
        shipment = result.scalar_one_or_none()
        if not shipment:
            raise NotFoundError("Shipment not found.")

        existing = await self.session.execute(
            select(Delivery.id).where(Delivery.shipment_id == data.shipment_id)
        )
        if existing.first() is not None:
            raise ConflictError("Delivery already recorded for this shipment.")

        try:
            total_expenses = data.total_expenses
            if total_expenses is None:
                total_expenses = (
                    data.station_expense + data.bility_expense + data.station_labour + data.cart_labour
                )

            delivery = Delivery(
                shipment_id=data.shipment_id,
                delivery_date=data.delivery_date,
                delivery_time=utcnow(),
                station_expense=data.station_expense,
                bility_expense=data.bility_expense,
                station_labour=data.station_labour,
                cart_labour=data.cart_labour,
                total_expenses=total_expenses,
                receiver_name=data.receiver_name,
                receiver_phone=data.receiver_phone,
                receiver_cnic=data.receiver_cnic,
                receiver_address=data.receiver_address,
                delivery_notes=data.delivery_notes,
                delivery_status=DeliveryStatus.DELIVERED.value,
                approval_status=ApprovalStatus.PENDING,
            )
            self.session.add(delivery)
            shipment.delivery_date = data.delivery_date
            await self.session.commit()

            logger.info(f"Delivery recorded for shipment {data.shipment_id}")
            return await self.get_delivery(delivery.id)

        except BaseAppException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error recording delivery for {data.shipment_id}: {str(e)}")
            raise InternalError("Internal Server Error: Failed to record delivery.")

    async def get_delivery(self, delivery_id: int) -> Delivery:
        result = await self.session.execute(
            select(Delivery)
            .options(*DELIVERY_LOAD_OPTIONS)
            .where(Delivery.id == delivery_id)
            .execution_options(populate_existing=True)
        )
        delivery = result.scalar_one_or_none()
        if not delivery:
            raise NotFoundError("Delivery record not found.")
        return delivery

    async def get_deliveries(self, shipment_id: Optional[str] = None) -> List[Delivery]:
        query = select(Delivery).options(*DELIVERY_LOAD_OPTIONS)
        if shipment_id:
            query = query.where(Delivery.shipment_id == shipment_id)
        result = await self.session.execute(query.order_by(desc(Delivery.created_at), desc(Delivery.id)))
        return list(result.scalars().all())

    async def get_pending_approvals(self) -> List[Delivery]:
        """Deliveries waiting on either approval stage, oldest delivery first"""
        result = await self.session.execute(
            select(Delivery)
            .options(*DELIVERY_LOAD_OPTIONS)
            .where(Delivery.approval_status.in_([ApprovalStatus.PENDING, ApprovalStatus.APPROVED_BY_ADMIN]))
            .order_by(Delivery.delivery_date, Delivery.id)
        )
        return list(result.scalars().all())

    async def get_superadmin_queue(self) -> List[Delivery]:
        """Admin-approved, physically delivered records awaiting the final sign-off"""
        result = await self.session.execute(
            select(Delivery)
            .options(*DELIVERY_LOAD_OPTIONS)
            .where(
                Delivery.approval_status == ApprovalStatus.APPROVED_BY_ADMIN,
                Delivery.delivery_status == DeliveryStatus.DELIVERED.value,
            )
            .order_by(Delivery.approved_at, Delivery.id)
        )
        return list(result.scalars().all())

    async def apply_approval_action(self, delivery_id: int, action: ApprovalAction, user: User) -> Dict[str, Any]:
        """
        Move a delivery one step through the approval sequence.

        The write is conditional on the status read here; if another request
        changed it in between, no row matches and the caller gets a 409.
        """
        result = await self.session.execute(
            select(Delivery.approval_status).where(Delivery.id == delivery_id)
        )
        current = result.scalar_one_or_none()
        if current is None:
            raise NotFoundError("Delivery record not found.")

        next_status, changed = plan_transition(current, action)
        if is_final_approval(current, next_status):
            policy_engine.require(user.role, Permission.DELIVERY_APPROVAL_SUPERADMIN)

        description = describe(next_status)
        response = {
            "message": f"Delivery #{delivery_id} status updated to {description}.",
            "delivery_id": delivery_id,
            "approval_status": next_status,
            "description": description,
        }
        if not changed:
            return response

        values = {"approval_status": next_status, "updated_at": utcnow()}
        if action == ApprovalAction.APPROVE:
            values["approved_by"] = user.username
            values["approved_at"] = utcnow()

        try:
            outcome = await self.session.execute(
                update(Delivery)
                .where(Delivery.id == delivery_id, Delivery.approval_status == current)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            if outcome.rowcount != 1:
                await self.session.rollback()
                logger.warning(f"Approval race on delivery {delivery_id}: status moved from {current.value}")
                raise ConflictError(
                    f"Delivery #{delivery_id} was updated by another request. Reload and try again."
                )
            await self.session.commit()

        except BaseAppException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error updating approval for delivery {delivery_id}: {str(e)}")
            raise InternalError("Internal Server Error: Failed to update status.")

        audit_logger.info(f"Delivery {delivery_id}: {current.value} -> {next_status.value} by {user.username}")
        return response

    async def get_approved_on(self, day: str) -> List[Dict[str, Any]]:
        """Finally approved deliveries whose approval happened on the given UTC day"""
        start, end = day_bounds(parse_calendar_date(day, "date"))
        result = await self.session.execute(
            select(Delivery)
            .options(*DELIVERY_LOAD_OPTIONS)
            .where(
                Delivery.approval_status == ApprovalStatus.APPROVED,
                Delivery.approved_at >= start,
                Delivery.approved_at <= end,
            )
            .order_by(desc(Delivery.approved_at))
        )
        rows = []
        for delivery in result.scalars().all():
            shipment = delivery.shipment
            receiver_name = shipment.receiver.name if shipment and shipment.receiver else None
            rows.append({
                "delivery_id": delivery.id,
                "shipment_id": delivery.shipment_id,
                "delivery_date": format_timestamp(delivery.delivery_date),
                "receiver_name": receiver_name or delivery.receiver_name or "N/A",
                "delivery_status": delivery.delivery_status,
                "approval_status": delivery.approval_status.value,
                "approved_by": delivery.approved_by,
                "approved_at": format_timestamp(delivery.approved_at),
                "total_expenses": to_number(delivery.total_expenses) or 0,
                "total_delivery_charges": to_number(shipment.total_charges) if shipment else 0,
            })
        return rows
