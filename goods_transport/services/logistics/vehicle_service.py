# goods_transport/services/logistics/vehicle_service.py
import logging
from typing import List, Optional, Dict, Any
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from goods_transport.core.exceptions import (
    BaseAppException, ConflictError, InternalError, NotFoundError, ValidationError
)
from goods_transport.models.logistics.vehicle import Vehicle
from goods_transport.models.logistics.vehicle_transaction import VehicleTransaction
from goods_transport.models.logistics.trip_log import TripLog
from goods_transport.models.shared.enums import VehicleTransactionType
from goods_transport.schemas.master.master_schema import VehicleCreate
from goods_transport.schemas.logistics.vehicle_ledger_schema import (
    VehicleTransactionCreate, SettleFareRequest
)
from goods_transport.services.logistics.vehicle_ledger import build_ledger
from goods_transport.utils.report_filters import format_timestamp, to_number

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")


def parse_vehicle_id(raw_id: str) -> int:
    """Path ids arrive as text; only positive integers are accepted"""
    try:
        vehicle_id = int(str(raw_id).strip())
    except ValueError:
        raise ValidationError("Vehicle ID must be a valid number.")
    if vehicle_id <= 0:
        raise ValidationError("Vehicle ID must be a valid number.")
    return vehicle_id


class VehicleService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_vehicle(self, vehicle_data: VehicleCreate) -> Vehicle:
        """Create a new vehicle"""
        try:
            result = await self.session.execute(
                select(Vehicle).where(Vehicle.vehicle_number == vehicle_data.vehicle_number)
            )
            if result.scalar_one_or_none():
                raise ConflictError(f"Vehicle number '{vehicle_data.vehicle_number}' already exists.")

            vehicle = Vehicle(vehicle_number=vehicle_data.vehicle_number)
            self.session.add(vehicle)
            await self.session.commit()
            await self.session.refresh(vehicle)

            logger.info(f"Vehicle created successfully with ID: {vehicle.id}")
            return vehicle

        except BaseAppException:
            raise
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(f"Vehicle number '{vehicle_data.vehicle_number}' already exists.")
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating vehicle: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create vehicle.")

    async def get_vehicles(self) -> List[Vehicle]:
        result = await self.session.execute(select(Vehicle).order_by(Vehicle.vehicle_number))
        return list(result.scalars().all())

    async def get_vehicle(self, vehicle_id: int, with_transactions: bool = False) -> Vehicle:
        """Get vehicle by ID or raise 404"""
        query = select(Vehicle).where(Vehicle.id == vehicle_id)
        if with_transactions:
            query = query.options(selectinload(Vehicle.transactions))
        result = await self.session.execute(query)
        vehicle = result.scalar_one_or_none()
        if not vehicle:
            raise NotFoundError(f"Vehicle with ID {vehicle_id} not found.")
        return vehicle

    async def get_latest_trip(self, vehicle_id: int) -> Optional[TripLog]:
        result = await self.session.execute(
            select(TripLog)
            .where(TripLog.vehicle_id == vehicle_id)
            .order_by(desc(TripLog.date), desc(TripLog.id))
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_financials(self, vehicle_id: int) -> Dict[str, Any]:
        """Ledger with running balance and fare payment summary for one vehicle"""
        vehicle = await self.get_vehicle(vehicle_id)
        result = await self.session.execute(
            select(VehicleTransaction)
            .where(VehicleTransaction.vehicle_id == vehicle_id)
            .order_by(VehicleTransaction.transaction_date, VehicleTransaction.id)
        )
        transactions = result.scalars().all()
        latest_trip = await self.get_latest_trip(vehicle_id)

        rows, summary = build_ledger(transactions, latest_trip)

        return {
            "vehicle": {"id": vehicle.id, "vehicleNumber": vehicle.vehicle_number},
            "ledger": [
                {
                    "id": transaction.id,
                    "vehicle_id": transaction.vehicle_id,
                    "shipment_id": transaction.shipment_id,
                    "trip_id": transaction.trip_id,
                    "transaction_date": format_timestamp(transaction.transaction_date),
                    "credit_amount": to_number(transaction.credit_amount),
                    "debit_amount": to_number(transaction.debit_amount),
                    "description": transaction.description,
                    "balance": to_number(balance),
                }
                for transaction, balance in rows
            ],
            "summary": {
                "currentBalance": to_number(summary.current_balance),
                "farePaymentStatus": summary.fare_payment_status.value,
                "tripToSettleId": summary.trip_to_settle_id,
            },
        }

    async def get_ledger_totals(self) -> List[Dict[str, Any]]:
        """Credit/debit totals per vehicle, vehicles without transactions included"""
        query = (
            select(
                Vehicle.id,
                Vehicle.vehicle_number,
                func.coalesce(func.sum(VehicleTransaction.credit_amount), 0).label("total_credits"),
                func.coalesce(func.sum(VehicleTransaction.debit_amount), 0).label("total_debits"),
                func.count(VehicleTransaction.id).label("transaction_count"),
            )
            .outerjoin(VehicleTransaction, VehicleTransaction.vehicle_id == Vehicle.id)
            .group_by(Vehicle.id, Vehicle.vehicle_number)
            .order_by(Vehicle.vehicle_number)
        )
        result = await self.session.execute(query)

        totals = []
        for row in result.all():
            credits = Decimal(str(row.total_credits))
            debits = Decimal(str(row.total_debits))
            totals.append({
                "id": row.id,
                "vehicleNumber": row.vehicle_number,
                "totalCredits": to_number(credits),
                "totalDebits": to_number(debits),
                "balance": to_number(credits - debits),
                "transactionCount": row.transaction_count,
            })
        return totals

    async def add_transaction(self, vehicle_id: int, data: VehicleTransactionCreate) -> VehicleTransaction:
        """Record a manual credit or debit against a vehicle"""
        await self.get_vehicle(vehicle_id)
        try:
            transaction = VehicleTransaction(
                vehicle_id=vehicle_id,
                description=data.description,
                credit_amount=data.amount if data.type == VehicleTransactionType.CREDIT else Decimal("0"),
                debit_amount=data.amount if data.type == VehicleTransactionType.DEBIT else Decimal("0"),
            )
            self.session.add(transaction)
            await self.session.commit()
            await self.session.refresh(transaction)

            audit_logger.info(f"{data.type.value} of {data.amount} recorded for vehicle {vehicle_id}")
            return transaction

        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error recording transaction for vehicle {vehicle_id}: {str(e)}")
            raise InternalError("Internal Server Error: Failed to record transaction.")

    async def settle_fare(self, vehicle_id: int, data: SettleFareRequest) -> Dict[str, Any]:
        """Credit the fare payment and mark the trip paid in one transaction"""
        await self.get_vehicle(vehicle_id)
        result = await self.session.execute(
            select(TripLog).where(TripLog.id == data.trip_id, TripLog.vehicle_id == vehicle_id)
        )
        trip = result.scalar_one_or_none()
        if not trip:
            raise NotFoundError(f"Trip with ID {data.trip_id} not found for vehicle {vehicle_id}.")

        try:
            transaction = VehicleTransaction(
                vehicle_id=vehicle_id,
                trip_id=trip.id,
                credit_amount=data.payment_amount,
                debit_amount=Decimal("0"),
                description=f"Fare settlement payment for Trip ID #{trip.id}",
            )
            self.session.add(transaction)
            trip.fare_is_paid = True
            await self.session.commit()
            await self.session.refresh(transaction)

            audit_logger.info(f"Fare of {data.payment_amount} settled for trip {trip.id} of vehicle {vehicle_id}")
            return {
                "message": "Fare settled successfully.",
                "transaction_id": transaction.id,
                "trip_id": trip.id,
            }

        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error settling fare for trip {data.trip_id}: {str(e)}")
            raise InternalError("Internal Server Error: Failed to settle fare.")
