# goods_transport/services/reports/report_service.py
import logging
from decimal import Decimal
from typing import Dict, Any, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_, desc
from sqlalchemy.orm import selectinload

from goods_transport.models.labour.labour_assignment import LabourAssignment
from goods_transport.models.labour.labour_person import LabourPerson
from goods_transport.models.logistics.delivery import Delivery
from goods_transport.models.logistics.party_transaction import PartyTransaction
from goods_transport.models.logistics.shipment import Shipment
from goods_transport.models.logistics.trip_log import TripLog
from goods_transport.models.master.city import City
from goods_transport.models.master.party import Party
from goods_transport.models.shared.enums import LabourAssignmentStatus
from goods_transport.utils.date_time_serializer import model_to_dict, serialize_report_row
from goods_transport.utils.report_filters import (
    apply_date_bounds, extract_payment_status, non_empty_or_none, parse_day_bounds,
    positive_int_or_none, to_number
)

logger = logging.getLogger(__name__)


def _named(instance) -> Optional[Dict[str, Any]]:
    if instance is None:
        return None
    return {"id": instance.id, "name": instance.name}


class ReportService:
    def __init__(self, session: AsyncSession):
        self.session = session

    # =================== SHIPMENTS ===================

    async def get_shipments_report(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        departure_city_id: Optional[str] = None,
        to_city_id: Optional[str] = None,
        vehicle_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Shipments by bility date range, departure/destination city and vehicle"""
        start, end = parse_day_bounds(start_date, end_date)
        conditions = apply_date_bounds([], Shipment.bility_date, start, end, is_date_column=True)

        departure_city = positive_int_or_none(departure_city_id)
        if departure_city:
            conditions.append(Shipment.departure_city_id == departure_city)
        to_city = positive_int_or_none(to_city_id)
        if to_city:
            conditions.append(Shipment.to_city_id == to_city)
        vehicle = positive_int_or_none(vehicle_id)
        if vehicle:
            conditions.append(Shipment.vehicle_id == vehicle)

        query = select(Shipment).options(
            selectinload(Shipment.departure_city),
            selectinload(Shipment.to_city),
            selectinload(Shipment.sender),
            selectinload(Shipment.receiver),
            selectinload(Shipment.vehicle),
            selectinload(Shipment.goods_details),
        )
        if conditions:
            query = query.where(and_(*conditions))
        result = await self.session.execute(query.order_by(desc(Shipment.bility_date), desc(Shipment.id)))

        rows = []
        for shipment in result.scalars().all():
            row = model_to_dict(shipment)
            row["payment_status"] = extract_payment_status(shipment.remarks)
            row["departure_city"] = _named(shipment.departure_city)
            row["to_city"] = _named(shipment.to_city)
            row["sender"] = _named(shipment.sender)
            row["receiver"] = _named(shipment.receiver)
            row["vehicle"] = {"id": shipment.vehicle.id, "vehicleNumber": shipment.vehicle.vehicle_number}
            row["goods_details"] = [model_to_dict(detail) for detail in shipment.goods_details]
            row["total_quantity"] = sum(detail.quantity for detail in shipment.goods_details)
            rows.append(serialize_report_row(row))
        return rows

    # =================== DELIVERIES ===================

    async def get_deliveries_report(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        shipment_id: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        start, end = parse_day_bounds(start_date, end_date)
        conditions = apply_date_bounds([], Delivery.delivery_date, start, end, is_date_column=True)
        shipment = non_empty_or_none(shipment_id)
        if shipment:
            conditions.append(Delivery.shipment_id == shipment)

        query = select(Delivery).options(
            selectinload(Delivery.shipment).selectinload(Shipment.sender),
            selectinload(Delivery.shipment).selectinload(Shipment.receiver),
        )
        if conditions:
            query = query.where(and_(*conditions))
        result = await self.session.execute(query.order_by(desc(Delivery.delivery_date), desc(Delivery.id)))

        rows = []
        for delivery in result.scalars().all():
            row = model_to_dict(delivery)
            row["delivery_id"] = row.pop("id")
            row["shipment"] = {
                "bility_number": delivery.shipment.bility_number,
                "sender": _named(delivery.shipment.sender),
                "receiver": _named(delivery.shipment.receiver),
            }
            rows.append(serialize_report_row(row))
        return rows

    # =================== PARTIES ===================

    async def get_parties_report(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Each party with the shipments it sent/received and its ledger entries in range"""
        start, end = parse_day_bounds(start_date, end_date)

        parties = (await self.session.execute(select(Party).order_by(Party.name, Party.id))).scalars().all()

        shipment_conditions = apply_date_bounds([], Shipment.bility_date, start, end, is_date_column=True)
        shipment_query = select(Shipment)
        if shipment_conditions:
            shipment_query = shipment_query.where(and_(*shipment_conditions))
        shipments = (await self.session.execute(shipment_query.order_by(Shipment.bility_date))).scalars().all()

        transaction_conditions = apply_date_bounds([], PartyTransaction.transaction_date, start, end)
        transaction_query = select(PartyTransaction)
        if transaction_conditions:
            transaction_query = transaction_query.where(and_(*transaction_conditions))
        transactions = (
            await self.session.execute(transaction_query.order_by(PartyTransaction.transaction_date))
        ).scalars().all()

        rows = []
        for party in parties:
            sent = [s for s in shipments if s.sender_id == party.id]
            received = [s for s in shipments if s.receiver_id == party.id]
            entries = [t for t in transactions if t.party_ref_id == party.id]

            total_charges = sum((s.total_charges for s in sent + received), Decimal("0"))
            total_credits = sum((t.credit_amount for t in entries), Decimal("0"))
            total_debits = sum((t.debit_amount for t in entries), Decimal("0"))

            rows.append(serialize_report_row({
                "id": party.id,
                "name": party.name,
                "contactInfo": party.contact_info,
                "openingBalance": party.opening_balance,
                "sentShipments": [self._shipment_brief(s) for s in sent],
                "receivedShipments": [self._shipment_brief(s) for s in received],
                "transactions": [model_to_dict(t) for t in entries],
                "totals": {
                    "charges": total_charges,
                    "credits": total_credits,
                    "debits": total_debits,
                },
            }))
        return rows

    @staticmethod
    def _shipment_brief(shipment: Shipment) -> Dict[str, Any]:
        return {
            "id": shipment.register_number,
            "bility_number": shipment.bility_number,
            "bility_date": shipment.bility_date,
            "total_charges": shipment.total_charges,
        }

    # =================== CITIES ===================

    async def get_cities_report(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        start, end = parse_day_bounds(start_date, end_date)
        cities = (await self.session.execute(select(City).order_by(City.name))).scalars().all()

        conditions = apply_date_bounds([], Shipment.bility_date, start, end, is_date_column=True)
        query = select(Shipment.register_number, Shipment.departure_city_id, Shipment.to_city_id)
        if conditions:
            query = query.where(and_(*conditions))
        shipments = (await self.session.execute(query)).all()

        rows = []
        for city in cities:
            departing = [{"id": s.register_number} for s in shipments if s.departure_city_id == city.id]
            arriving = [{"id": s.register_number} for s in shipments if s.to_city_id == city.id]
            rows.append({
                "id": city.id,
                "name": city.name,
                "departingShipments": departing,
                "arrivingShipments": arriving,
                "departingCount": len(departing),
                "arrivingCount": len(arriving),
            })
        return rows

    # =================== EXPENSES ===================

    async def get_combined_expenses_report(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Delivery expenses and trip expenses in one list, newest first, with totals.

        grandTotalExpenses adds delivery expenses to the trip delivery cuts only;
        commission and accountant reward show on the trip rows but are not summed.
        """
        start, end = parse_day_bounds(start_date, end_date)

        delivery_conditions = apply_date_bounds([], Delivery.delivery_date, start, end, is_date_column=True)
        delivery_query = select(Delivery).options(selectinload(Delivery.shipment))
        if delivery_conditions:
            delivery_query = delivery_query.where(and_(*delivery_conditions))
        deliveries = (await self.session.execute(delivery_query.order_by(Delivery.id))).scalars().all()

        trip_conditions = apply_date_bounds([], TripLog.date, start, end, is_date_column=True)
        trip_query = select(TripLog).options(selectinload(TripLog.vehicle))
        if trip_conditions:
            trip_query = trip_query.where(and_(*trip_conditions))
        trips = (await self.session.execute(trip_query.order_by(TripLog.id))).scalars().all()

        zero = Decimal("0")
        details = []
        for delivery in deliveries:
            shipment = delivery.shipment
            details.append({
                "id": delivery.id,
                "type": "DELIVERY_EXPENSE",
                "date": delivery.delivery_date.isoformat(),
                "bility_number": shipment.bility_number if shipment else "N/A",
                "total_delivery_charge": shipment.total_charges if shipment else zero,
                "station_expense": delivery.station_expense,
                "bility_expense": delivery.bility_expense,
                "station_labour": delivery.station_labour,
                "cart_labour": delivery.cart_labour,
                "total_expense": delivery.total_expenses,
            })
        for trip in trips:
            details.append({
                "id": trip.id,
                "type": "TRIP_EXPENSE",
                "date": trip.date.isoformat(),
                "vehicle_number": trip.vehicle.vehicle_number if trip.vehicle else "N/A",
                "driver_name": trip.driver_name,
                "bility_number": "N/A (Trip)",
                "delivery_cut": trip.delivery_cut,
                "commission": trip.commission,
                "accountant_reward": trip.accountant_reward,
                "station_expense": zero,
                "bility_expense": zero,
                "station_labour": zero,
                "cart_labour": zero,
                "total_expense": trip.delivery_cut + trip.commission + (trip.accountant_reward or zero),
            })
        # Newest first; on the same day deliveries stay ahead of trips
        details.sort(key=lambda row: row["date"], reverse=True)

        total_delivery = sum((d.total_expenses for d in deliveries), zero)
        total_delivery_cut = sum((t.delivery_cut for t in trips), zero)
        summary = {
            "totalDeliveryExpenses": total_delivery,
            "totalBilityExpenses": sum((d.bility_expense for d in deliveries), zero),
            "totalStationExpenses": sum((d.station_expense for d in deliveries), zero),
            "totalStationLabour": sum((d.station_labour for d in deliveries), zero),
            "totalCartLabour": sum((d.cart_labour for d in deliveries), zero),
            "totalDeliveryCut": total_delivery_cut,
            "grandTotalExpenses": total_delivery + total_delivery_cut,
        }
        return serialize_report_row({"details": details, "summary": summary})

    # =================== LABOUR PERSONS ===================

    async def get_labour_persons_report(
        self, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Every labour person by name, with collections on assignments made in range"""
        start, end = parse_day_bounds(start_date, end_date)
        persons = (
            await self.session.execute(select(LabourPerson).order_by(LabourPerson.name, LabourPerson.id))
        ).scalars().all()

        conditions = apply_date_bounds([], LabourAssignment.assigned_date, start, end)
        query = select(LabourAssignment.labour_person_id, LabourAssignment.collected_amount)
        if conditions:
            query = query.where(and_(*conditions))
        assignments = (await self.session.execute(query.order_by(LabourAssignment.id))).all()

        return [
            {
                "id": person.id,
                "name": person.name,
                "contact_info": person.contact_info,
                "assignments": [
                    {"collected_amount": to_number(a.collected_amount or Decimal("0"))}
                    for a in assignments if a.labour_person_id == person.id
                ],
            }
            for person in persons
        ]

    # =================== LABOUR ASSIGNMENTS ===================

    async def get_labour_assignments_report(
        self,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        assignment_status: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Assignments by assigned date with what was receivable and what was collected.

        discount_given is the shortfall between charges plus delivery expenses
        and the collected cash, counted only once money has been collected.
        """
        start, end = parse_day_bounds(start_date, end_date)
        conditions = apply_date_bounds([], LabourAssignment.assigned_date, start, end)
        status_value = non_empty_or_none(assignment_status)
        if status_value in LabourAssignmentStatus.__members__:
            conditions.append(LabourAssignment.status == LabourAssignmentStatus(status_value))

        query = select(LabourAssignment).options(
            selectinload(LabourAssignment.labour_person),
            selectinload(LabourAssignment.shipment).selectinload(Shipment.deliveries),
        )
        if conditions:
            query = query.where(and_(*conditions))
        result = await self.session.execute(
            query.order_by(desc(LabourAssignment.assigned_date), desc(LabourAssignment.id))
        )

        rows = []
        for assignment in result.scalars().all():
            shipment = assignment.shipment
            latest = max(shipment.deliveries, key=lambda d: (d.delivery_date, d.id), default=None)
            charges = shipment.total_charges or Decimal("0")
            expenses = (latest.total_expenses if latest else None) or Decimal("0")
            collected = assignment.collected_amount or Decimal("0")
            receivable = charges + expenses

            discount = Decimal("0")
            if assignment.status != LabourAssignmentStatus.ASSIGNED and collected > 0:
                discount = max(Decimal("0"), receivable - collected)

            rows.append(serialize_report_row({
                "id": assignment.id,
                "assigned_date": assignment.assigned_date,
                "status": assignment.status,
                "labourPerson": {"name": assignment.labour_person.name},
                "shipment": {
                    "register_number": shipment.register_number,
                    "bility_number": shipment.bility_number,
                    "total_charges": charges,
                },
                "shipment_charges": charges,
                "total_expenses": expenses,
                "discount_given": discount,
                "total_receivable_pre_discount": receivable,
                "net_collected": collected,
            }))
        return rows
