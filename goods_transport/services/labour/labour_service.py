# goods_transport/services/labour/labour_service.py
import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Dict, Any
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, asc, desc, nulls_last
from sqlalchemy.orm import selectinload

from goods_transport.core.exceptions import (
    BaseAppException, ConflictError, FailedPreconditionError, InternalError, NotFoundError, ValidationError
)
from goods_transport.db.base import utcnow
from goods_transport.models.labour.labour_person import LabourPerson
from goods_transport.models.labour.labour_assignment import LabourAssignment
from goods_transport.models.labour.labour_payment import LabourPaymentHistory
from goods_transport.models.logistics.delivery import Delivery
from goods_transport.models.logistics.party_transaction import PartyTransaction
from goods_transport.models.logistics.shipment import Shipment
from goods_transport.models.shared.enums import (
    ApprovalStatus, DeliveryStatus, LabourAssignmentAction, LabourAssignmentStatus, PartyType
)
from goods_transport.schemas.labour.labour_schema import (
    LabourPersonCreate, LabourAssignmentCreate, LabourAssignmentUpdate, LabourSettlementCreate
)
from goods_transport.services.labour.assignment_workflow import next_assignment_status
from goods_transport.utils.report_filters import to_number

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger("audit")

ASSIGNMENT_LOAD_OPTIONS = (
    selectinload(LabourAssignment.labour_person),
    selectinload(LabourAssignment.shipment).selectinload(Shipment.receiver),
    selectinload(LabourAssignment.shipment).selectinload(Shipment.deliveries),
)


class LabourService:
    def __init__(self, session: AsyncSession):
        self.session = session

    # =================== LABOUR PERSONS ===================

    async def create_person(self, data: LabourPersonCreate) -> LabourPerson:
        try:
            person = LabourPerson(name=data.name, contact_info=data.contact_info)
            self.session.add(person)
            await self.session.commit()
            await self.session.refresh(person)
            logger.info(f"Labour person created successfully with ID: {person.id}")
            return person
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating labour person: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create labour person.")

    async def get_persons(self) -> List[LabourPerson]:
        result = await self.session.execute(
            select(LabourPerson).order_by(desc(LabourPerson.created_at), desc(LabourPerson.id))
        )
        return list(result.scalars().all())

    async def _get_person(self, person_id: int) -> LabourPerson:
        person = await self.session.get(LabourPerson, person_id)
        if not person:
            raise NotFoundError("Labour person not found.")
        return person

    # =================== ASSIGNMENTS ===================

    async def create_assignments(self, data: LabourAssignmentCreate) -> int:
        """Assign undelivered shipments to a labour person; returns how many were created"""
        await self._get_person(data.labour_person_id)

        result = await self.session.execute(
            select(Shipment.register_number).where(
                Shipment.register_number.in_(data.shipment_ids),
                Shipment.delivery_date.is_(None),
            )
        )
        assignable = set(result.scalars().all())
        if len(assignable) != len(data.shipment_ids):
            raise ValidationError(
                "Some shipments not found or already delivered "
                "(Shipments must not have a recorded delivery date to be assigned)."
            )

        result = await self.session.execute(
            select(LabourAssignment.shipment_id).where(
                LabourAssignment.shipment_id.in_(data.shipment_ids),
                LabourAssignment.status != LabourAssignmentStatus.SETTLED,
            )
        )
        open_ids = sorted(set(result.scalars().all()))
        if open_ids:
            raise ConflictError(
                f"Some shipments are already assigned and not yet settled: {', '.join(open_ids)}. "
                "Please settle them first."
            )

        try:
            for shipment_id in data.shipment_ids:
                self.session.add(LabourAssignment(
                    labour_person_id=data.labour_person_id,
                    shipment_id=shipment_id,
                    due_date=data.due_date,
                    notes=data.notes,
                    status=LabourAssignmentStatus.ASSIGNED,
                ))
            await self.session.commit()
            logger.info(f"{len(data.shipment_ids)} assignments created for labour person {data.labour_person_id}")
            return len(data.shipment_ids)
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error creating labour assignments: {str(e)}")
            raise InternalError("Internal Server Error: Failed to create assignments.")

    async def get_assignments(
        self,
        labour_person_id: Optional[int] = None,
        status: Optional[LabourAssignmentStatus] = None,
    ) -> List[LabourAssignment]:
        query = select(LabourAssignment).options(*ASSIGNMENT_LOAD_OPTIONS)
        if labour_person_id:
            query = query.where(LabourAssignment.labour_person_id == labour_person_id)
        if status:
            query = query.where(LabourAssignment.status == status)
        result = await self.session.execute(query.order_by(desc(LabourAssignment.assigned_date)))
        return list(result.scalars().all())

    async def _get_assignment(self, assignment_id: int) -> LabourAssignment:
        result = await self.session.execute(
            select(LabourAssignment)
            .options(*ASSIGNMENT_LOAD_OPTIONS)
            .where(LabourAssignment.id == assignment_id)
            .execution_options(populate_existing=True)
        )
        assignment = result.scalar_one_or_none()
        if not assignment:
            raise NotFoundError("Assignment not found.")
        return assignment

    async def update_assignment(self, data: LabourAssignmentUpdate) -> LabourAssignment:
        """
        Advance an assignment: DELIVER, then COLLECT, then SETTLE.

        DELIVER records a PENDING delivery for the shipment, COLLECT stores the
        collected cash and the delivery expenses, SETTLE credits the receiver.
        """
        assignment = await self._get_assignment(data.assignment_id)
        new_status = next_assignment_status(assignment.status, data.action)
        shipment = assignment.shipment
        now = utcnow()

        if data.action == LabourAssignmentAction.DELIVER:
            if shipment.deliveries:
                raise FailedPreconditionError("A delivery record already exists for this shipment.")
        elif data.action == LabourAssignmentAction.COLLECT:
            if data.collected_amount is None or data.collected_amount <= 0:
                raise FailedPreconditionError("Collected amount must be greater than zero for collection.")
            if not shipment.deliveries:
                raise FailedPreconditionError(
                    "Cannot collect: Delivery record is missing. Please mark the shipment as DELIVERED first."
                )

        try:
            if data.action == LabourAssignmentAction.DELIVER:
                self._record_delivery(assignment, now, data.notes)
                assignment.delivered_date = now
            elif data.action == LabourAssignmentAction.COLLECT:
                delivery = shipment.deliveries[0]
                delivery.station_expense = data.station_expense
                delivery.bility_expense = data.bility_expense
                delivery.station_labour = data.station_labour
                delivery.cart_labour = data.cart_labour
                delivery.total_expenses = (
                    data.station_expense + data.bility_expense + data.station_labour + data.cart_labour
                )
                assignment.collected_amount = data.collected_amount
            else:
                assignment.settled_date = now
                self.session.add(PartyTransaction(
                    transaction_date=now,
                    party_type=PartyType.RECEIVER,
                    party_ref_id=shipment.receiver_id,
                    shipment_id=assignment.shipment_id,
                    credit_amount=assignment.collected_amount or Decimal("0"),
                    debit_amount=Decimal("0"),
                    description=f"Payment collected by labour person {assignment.labour_person.name} (Settled)",
                ))

            assignment.status = new_status
            if data.notes is not None:
                assignment.notes = data.notes
            await self.session.commit()

        except BaseAppException:
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error updating labour assignment {data.assignment_id}: {str(e)}")
            raise InternalError("Internal Server Error: Failed to update assignment.")

        audit_logger.info(f"Assignment {assignment.id} moved to {new_status.value}")
        return await self._get_assignment(assignment.id)

    def _record_delivery(self, assignment: LabourAssignment, when, notes: Optional[str]) -> None:
        shipment = assignment.shipment
        receiver_contact = shipment.receiver.contact_info if shipment.receiver else "N/A"
        receiver_name = shipment.walk_in_receiver_name or (shipment.receiver.name if shipment.receiver else "N/A")
        self.session.add(Delivery(
            shipment_id=assignment.shipment_id,
            delivery_date=when.date(),
            delivery_time=when,
            station_expense=Decimal("0"),
            bility_expense=Decimal("0"),
            station_labour=Decimal("0"),
            cart_labour=Decimal("0"),
            total_expenses=Decimal("0"),
            receiver_name=receiver_name,
            receiver_phone=receiver_contact,
            receiver_cnic="N/A from Labour",
            receiver_address=receiver_contact,
            delivery_notes=f"Delivered by Labour Person: {assignment.labour_person.name}. {notes or ''}".strip(),
            delivery_status=DeliveryStatus.DELIVERED.value,
            approval_status=ApprovalStatus.PENDING,
        ))
        shipment.delivery_date = when.date()

    async def get_reminders(self, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Unsettled assignments, earliest due date first, flagged when overdue"""
        today = today or utcnow().date()
        result = await self.session.execute(
            select(LabourAssignment)
            .options(*ASSIGNMENT_LOAD_OPTIONS)
            .where(LabourAssignment.status != LabourAssignmentStatus.SETTLED)
            .order_by(nulls_last(asc(LabourAssignment.due_date)), desc(LabourAssignment.assigned_date))
        )
        return [
            {"assignment": assignment, "is_overdue": bool(assignment.due_date and assignment.due_date < today)}
            for assignment in result.scalars().all()
        ]

    # =================== SETTLEMENTS ===================

    async def record_payment(self, data: LabourSettlementCreate) -> LabourPaymentHistory:
        await self._get_person(data.labour_person_id)
        result = await self.session.execute(
            select(Shipment.id).where(Shipment.register_number == data.shipment_id)
        )
        if result.first() is None:
            raise NotFoundError(f"Shipment {data.shipment_id} not found.")

        try:
            payment = LabourPaymentHistory(
                labour_person_id=data.labour_person_id,
                shipment_id=data.shipment_id,
                amount_paid=data.amount_paid,
                payment_method=data.payment_method or "CASH",
                notes=data.notes,
            )
            self.session.add(payment)
            await self.session.commit()
            await self.session.refresh(payment)
            audit_logger.info(f"Payment of {data.amount_paid} recorded for labour person {data.labour_person_id}")
            return payment
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Error recording labour payment: {str(e)}")
            raise InternalError("Internal Server Error: Failed to record payment.")

    async def get_settlements(self, labour_person_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """Per person: amount due on assigned shipments, amount paid and the balance"""
        query = select(LabourPerson).options(
            selectinload(LabourPerson.assignments)
            .selectinload(LabourAssignment.shipment)
            .selectinload(Shipment.deliveries),
            selectinload(LabourPerson.payments),
        )
        if labour_person_id:
            query = query.where(LabourPerson.id == labour_person_id)
        result = await self.session.execute(query.order_by(LabourPerson.id))

        summaries = []
        for person in result.scalars().all():
            assignments = []
            total_due = Decimal("0")
            for assignment in person.assignments:
                shipment = assignment.shipment
                delivery = shipment.deliveries[0] if shipment.deliveries else None
                expenses = delivery.total_expenses if delivery else Decimal("0")
                due = (shipment.total_charges or Decimal("0")) + (expenses or Decimal("0"))
                total_due += due
                assignments.append({
                    "id": assignment.id,
                    "shipment_id": assignment.shipment_id,
                    "bility_number": shipment.bility_number,
                    "shipment_charges": to_number(shipment.total_charges),
                    "delivery_expenses": to_number(expenses) if delivery else None,
                    "total_due": to_number(due),
                    "status": assignment.status.value,
                    "collected_amount": to_number(assignment.collected_amount or Decimal("0")),
                })

            payments = sorted(person.payments, key=lambda p: (p.payment_date, p.id))
            total_paid = sum((p.amount_paid for p in payments), Decimal("0"))
            summaries.append({
                "id": person.id,
                "name": person.name,
                "contact_info": person.contact_info,
                "totalDue": to_number(total_due),
                "totalPaid": to_number(total_paid),
                "balance": to_number(total_due - total_paid),
                "assignments": assignments,
                "paymentHistory": payments,
            })
        return summaries
