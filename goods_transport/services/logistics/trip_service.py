import logging
from decimal import Decimal
from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.orm import selectinload

from goods_transport.core.exceptions import BaseAppException, InternalError, ValidationError
from goods_transport.models.logistics.trip_log import TripLog
from goods_transport.models.logistics.trip_shipment_log import TripShipmentLog
from goods_transport.models.logistics.vehicle import Vehicle
from goods_transport.schemas.logistics.trip_schema import TripLogCreate

logger = logging.getLogger(__name__)

class TripService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_trip(self, data: TripLogCreate) -> TripLog:
        """
        Create a trip log with its shipment lines.

        A zero total fare falls back to the sum of line delivery charges, and a
        zero remaining fare to total minus delivery cut and commission.
        """
        if await self.session.get(Vehicle, data.vehicle_id) is None:
            raise ValidationError(f"Vehicle with ID {data.vehicle_id} does not exist.")

        total_fare = data.total_fare_collected or sum(
            (log.delivery_charges for log in data.shipment_logs), Decimal("0")
        )
        remaining_fare = data.remaining_fare or (total_fare - data.delivery_cut - data.commission)

        try:
            trip = TripLog(
                vehicle_id=data.vehicle_id,
                driver_name=data.driver_name,
                driver_mobile=data.driver_mobile,
                station_name=data.station_name,
                city=data.city,
                date=data.date,
                arrival_time=data.arrival_time,
                departure_time=data.departure_time,
                total_fare_collected=total_fare,
                delivery_cut=data.delivery_cut,
                commission=data.commission,
                received_amount=data.received_amount,
                accountant_reward=data.accountant_reward,
                remaining_fare=remaining_fare,
                fare_is_paid=False,
                note=data.note,
            )
            trip.shipment_logs = [
                TripShipmentLog(
                    shipment_id=log.shipment_id,
                    serial_number=log.serial_number,
                    receiver_name=log.receiver_name,
                    item_details=log.item_details,
                    quantity=log.quantity,
                    delivery_charges=log.delivery_charges,
                )
                for log in data.shipment_logs
            ]
            self.session.add(trip)
            await self.session.commit()

            logger.info(f"Trip log {trip.id} created for vehicle {data.vehicle_id}")
            return await self.get_trip(trip.id)

        except BaseAppException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating trip log: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create trip log.")

    async def get_trip(self, trip_id: int) -> TripLog:
        result = await self.session.execute(
            select(TripLog)
            .options(selectinload(TripLog.shipment_logs))
            .where(TripLog.id == trip_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def get_trips(self) -> List[TripLog]:
        result = await self.session.execute(
            select(TripLog)
            .options(selectinload(TripLog.shipment_logs))
            .order_by(desc(TripLog.created_at), desc(TripLog.id))
        )
        return list(result.scalars().all())

    async def next_serial(self) -> int:
        result = await self.session.execute(select(TripLog.id).order_by(desc(TripLog.id)).limit(1))
        last_id = result.scalar_one_or_none()
        return last_id + 1 if last_id else 1
