# goods_transport/services/logistics/shipment_service.py
import calendar
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, or_, and_, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from goods_transport.core.config import settings
from goods_transport.core.exceptions import (
    BaseAppException, ConflictError, InternalError, NotFoundError, ValidationError
)
from goods_transport.models.logistics.shipment import Shipment
from goods_transport.models.logistics.goods_detail import GoodsDetail
from goods_transport.models.logistics.party_transaction import PartyTransaction
from goods_transport.models.logistics.vehicle import Vehicle
from goods_transport.models.master.agency import Agency
from goods_transport.models.master.city import City
from goods_transport.models.master.item_catalog import ItemCatalog
from goods_transport.models.master.party import Party
from goods_transport.models.shared.enums import PartyType, ShipmentPaymentStatus
from goods_transport.schemas.logistics.shipment_schema import ShipmentCreate
from goods_transport.utils.report_filters import with_payment_status

logger = logging.getLogger(__name__)

SHIPMENT_LOAD_OPTIONS = (
    selectinload(Shipment.departure_city),
    selectinload(Shipment.to_city),
    selectinload(Shipment.sender),
    selectinload(Shipment.receiver),
    selectinload(Shipment.vehicle),
    selectinload(Shipment.goods_details).selectinload(GoodsDetail.item),
)


def month_bounds(day: date):
    last_day = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def format_register_number(day: date, sequence: int) -> str:
    """YYYYMM-NNN, where NNN is the shipment's position in its bility month"""
    return f"{day.year}{day.month:02d}-{sequence:03d}"


class ShipmentService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_register_number(self, bility_date: date) -> str:
        start, end = month_bounds(bility_date)
        count = await self.session.scalar(
            select(func.count()).select_from(Shipment).where(
                Shipment.bility_date >= start, Shipment.bility_date <= end
            )
        )
        return format_register_number(bility_date, (count or 0) + 1)

    async def _bility_number_taken(self, bility_number: str) -> bool:
        result = await self.session.execute(
            select(Shipment.id).where(Shipment.bility_number == bility_number)
        )
        return result.first() is not None

    async def create_shipment(self, data: ShipmentCreate) -> Shipment:
        """
        Register a shipment and its goods.

        The register number is derived from the month count, so two concurrent
        registrations can race for the same number; on a unique violation the
        number is recomputed up to REGISTER_NUMBER_MAX_RETRIES times.
        """
        await self._check_references(data)
        if await self._bility_number_taken(data.bility_number):
            raise ConflictError("Bility number already exists. Please use a unique identifier.")

        max_retries = settings.REGISTER_NUMBER_MAX_RETRIES
        for attempt in range(max_retries):
            register_number = await self.next_register_number(data.bility_date)
            try:
                shipment = self._build_shipment(data, register_number)
                self.session.add(shipment)

                if data.payment_status not in (ShipmentPaymentStatus.ALREADY_PAID, ShipmentPaymentStatus.FREE):
                    sender_label = data.walk_in_sender_name or f"Party ID: {data.sender_id}"
                    self.session.add(PartyTransaction(
                        party_type=PartyType.SENDER,
                        party_ref_id=data.sender_id,
                        shipment_id=register_number,
                        credit_amount=data.total_amount,
                        debit_amount=Decimal("0"),
                        description=f"Shipment Bill for Bility #{data.bility_number}. Sender: {sender_label}.",
                    ))

                await self.session.commit()
                logger.info(f"Shipment {register_number} registered (bility {data.bility_number})")
                return await self.get_shipment(register_number)

            except IntegrityError as e:
                await self.session.rollback()
                if await self._bility_number_taken(data.bility_number):
                    raise ConflictError("Bility number already exists. Please use a unique identifier.")
                if attempt < max_retries - 1:
                    logger.warning(f"Register number {register_number} collided, retrying")
                    continue
                logger.error(f"Could not allocate a register number: {str(e)}")
                raise InternalError("Failed to generate a unique registration ID after multiple attempts.")
            except BaseAppException:
                raise
            except Exception as e:
                await self.session.rollback()
                logger.error(f"Error registering shipment: {str(e)}")
                raise InternalError("Internal Server Error: Failed to register shipment.")

        raise InternalError("Failed to generate a unique registration ID after multiple attempts.")

    async def _check_references(self, data: ShipmentCreate) -> None:
        """Referenced master records must exist before the shipment is written"""
        checks = [
            (City, data.departure_city_id, "Departure city"),
            (Agency, data.forwarding_agency_id, "Forwarding agency"),
            (Vehicle, data.vehicle_number_id, "Vehicle"),
            (Party, data.sender_id, "Sender"),
            (Party, data.receiver_id, "Receiver"),
        ]
        if data.to_city_id:
            checks.append((City, data.to_city_id, "Destination city"))
        checks.extend((ItemCatalog, detail.item_id, "Item") for detail in data.goods_details)

        for model, ref_id, label in checks:
            if await self.session.get(model, ref_id) is None:
                raise ValidationError(f"{label} with ID {ref_id} does not exist.")

    def _build_shipment(self, data: ShipmentCreate, register_number: str) -> Shipment:
        shipment = Shipment(
            register_number=register_number,
            bility_number=data.bility_number,
            bility_date=data.bility_date,
            departure_city_id=data.departure_city_id,
            to_city_id=data.to_city_id or None,
            forwarding_agency_id=data.forwarding_agency_id,
            vehicle_id=data.vehicle_number_id,
            sender_id=data.sender_id,
            receiver_id=data.receiver_id,
            walk_in_sender_name=data.walk_in_sender_name,
            walk_in_receiver_name=data.walk_in_receiver_name,
            total_charges=data.total_amount,
            total_delivery_charges=data.total_delivery_charges,
            remarks=with_payment_status(data.remarks, data.payment_status),
        )
        shipment.goods_details = [
            GoodsDetail(
                item_id=detail.item_id,
                quantity=detail.quantity,
                charges=detail.charges,
                delivery_charges=detail.delivery_charges,
            )
            for detail in data.goods_details
        ]
        return shipment

    async def get_shipment(self, register_number: str) -> Shipment:
        result = await self.session.execute(
            select(Shipment)
            .options(*SHIPMENT_LOAD_OPTIONS)
            .where(Shipment.register_number == register_number)
            .execution_options(populate_existing=True)
        )
        shipment = result.scalar_one_or_none()
        if not shipment:
            raise NotFoundError(f"Shipment {register_number} not found.")
        return shipment

    async def get_shipments(
        self,
        query: Optional[str] = None,
        undelivered_only: bool = False,
        bility_date: Optional[date] = None,
    ) -> List[Shipment]:
        """Shipment list with optional search, undelivered and bility-day filters"""
        conditions = []
        if undelivered_only:
            conditions.append(Shipment.delivery_date.is_(None))
        if bility_date:
            conditions.append(Shipment.bility_date == bility_date)

        stmt = select(Shipment).options(*SHIPMENT_LOAD_OPTIONS)
        if query:
            sender = Party.__table__.alias("sender_party")
            receiver = Party.__table__.alias("receiver_party")
            stmt = (
                stmt.join(sender, sender.c.id == Shipment.sender_id)
                .join(receiver, receiver.c.id == Shipment.receiver_id)
            )
            conditions.append(or_(
                Shipment.register_number.contains(query, autoescape=True),
                Shipment.bility_number.contains(query, autoescape=True),
                sender.c.name.icontains(query, autoescape=True),
                receiver.c.name.icontains(query, autoescape=True),
            ))

        if conditions:
            stmt = stmt.where(and_(*conditions))
        result = await self.session.execute(stmt.order_by(desc(Shipment.created_at), desc(Shipment.id)))
        return list(result.scalars().all())

    async def search_shipments(self, query: Optional[str] = None) -> List[Shipment]:
        """Case-insensitive OR search on bility number, receiver name and walk-in receiver"""
        stmt = select(Shipment).options(*SHIPMENT_LOAD_OPTIONS)
        if query:
            term = query.strip()
            stmt = stmt.join(Party, Party.id == Shipment.receiver_id).where(or_(
                Shipment.bility_number.icontains(term, autoescape=True),
                Party.name.icontains(term, autoescape=True),
                Shipment.walk_in_receiver_name.icontains(term, autoescape=True),
            ))
        result = await self.session.execute(stmt.order_by(desc(Shipment.bility_date), desc(Shipment.id)))
        return list(result.scalars().all())
