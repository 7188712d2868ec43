import asyncio
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from fastapi import status

from goods_transport.core.exceptions import ConflictError
from goods_transport.models.auth.user import User
from goods_transport.models.logistics.delivery import Delivery
from goods_transport.models.shared.enums import ApprovalAction, ApprovalStatus, UserRole
from goods_transport.services.logistics.delivery_service import DeliveryService


@pytest.fixture
async def delivery(superadmin_client: AsyncClient, make_shipment, delivery_data) -> dict:
    shipment = await make_shipment()
    response = await superadmin_client.post("/api/v1/deliveries", json=delivery_data(shipment["register_number"]))
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["delivery"]


async def act(client: AsyncClient, delivery_id: int, action: str):
    return await client.patch(
        "/api/v1/deliveries/pending-approvals", json={"delivery_id": delivery_id, "action": action}
    )


@pytest.mark.asyncio
class TestDeliveries:
    """Recording deliveries"""

    async def test_record_delivery(self, superadmin_client: AsyncClient, delivery):
        assert delivery["approval_status"] == "PENDING"
        assert delivery["delivery_status"] == "DELIVERED"
        assert delivery["total_expenses"] == 110.0
        assert delivery["shipment"]["receiver"]["name"] == "Bilal Stores"

        response = await superadmin_client.get("/api/v1/shipments/202403-001")
        assert response.json()["delivery_date"] == "2024-03-20"

    async def test_explicit_total_expenses_is_kept(self, superadmin_client, make_shipment, delivery_data):
        shipment = await make_shipment()
        response = await superadmin_client.post(
            "/api/v1/deliveries", json=delivery_data(shipment["register_number"], total_expenses="75")
        )
        assert response.json()["delivery"]["total_expenses"] == 75.0

    async def test_second_delivery_for_shipment(self, superadmin_client, delivery, delivery_data):
        response = await superadmin_client.post("/api/v1/deliveries", json=delivery_data("202403-001"))
        assert response.status_code == status.HTTP_409_CONFLICT

    async def test_unknown_shipment(self, superadmin_client, master_data, delivery_data):
        response = await superadmin_client.post("/api/v1/deliveries", json=delivery_data("209901-001"))
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Shipment not found."}

    async def test_list_by_shipment(self, operator_client: AsyncClient, delivery):
        response = await operator_client.get("/api/v1/deliveries", params={"shipment_id": "202403-001"})
        assert [d["delivery_id"] for d in response.json()] == [delivery["delivery_id"]]

        response = await operator_client.get("/api/v1/deliveries", params={"shipment_id": "202403-999"})
        assert response.json() == []


@pytest.mark.asyncio
class TestApprovalWorkflow:
    """Two-stage sign-off through PATCH /deliveries/pending-approvals"""

    async def test_full_approval_sequence(self, admin_client, superadmin_client, delivery):
        delivery_id = delivery["delivery_id"]

        response = await act(admin_client, delivery_id, "APPROVE")
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "message": f"Delivery #{delivery_id} status updated to Approved by Admin.",
            "delivery_id": delivery_id,
            "approval_status": "APPROVED_BY_ADMIN",
            "description": "Approved by Admin",
        }

        response = await superadmin_client.get("/api/v1/deliveries/pending-approval-superadmin")
        assert [d["delivery_id"] for d in response.json()] == [delivery_id]
        assert response.json()[0]["approved_by"] == "manager"

        response = await act(superadmin_client, delivery_id, "APPROVE")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["approval_status"] == "APPROVED"
        assert response.json()["description"] == "Approved (Final)"

        response = await superadmin_client.get("/api/v1/deliveries", params={"shipment_id": "202403-001"})
        record = response.json()[0]
        assert record["approval_status"] == "APPROVED"
        assert record["approved_by"] == "owner"
        assert record["approved_at"] is not None

    async def test_admin_cannot_give_final_approval(self, admin_client, delivery):
        delivery_id = delivery["delivery_id"]
        await act(admin_client, delivery_id, "APPROVE")

        response = await act(admin_client, delivery_id, "APPROVE")
        assert response.status_code == status.HTTP_403_FORBIDDEN

        response = await admin_client.get("/api/v1/deliveries/pending-approvals")
        assert response.json()[0]["approval_status"] == "APPROVED_BY_ADMIN"

    async def test_operator_cannot_approve(self, operator_client, delivery):
        response = await act(operator_client, delivery["delivery_id"], "APPROVE")
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_approved_delivery_cannot_move(self, superadmin_client, delivery):
        delivery_id = delivery["delivery_id"]
        await act(superadmin_client, delivery_id, "APPROVE")
        await act(superadmin_client, delivery_id, "APPROVE")

        response = await act(superadmin_client, delivery_id, "APPROVE")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "Cannot approve further" in response.json()["message"]

        response = await act(superadmin_client, delivery_id, "REJECT")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_reject_is_idempotent(self, admin_client, delivery):
        delivery_id = delivery["delivery_id"]

        response = await act(admin_client, delivery_id, "REJECT")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["approval_status"] == "REJECTED"

        response = await act(admin_client, delivery_id, "REJECT")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == f"Delivery #{delivery_id} status updated to Rejected."

        response = await act(admin_client, delivery_id, "APPROVE")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = await admin_client.get("/api/v1/deliveries/pending-approvals")
        assert response.json() == []

    async def test_reject_does_not_stamp_approver(self, admin_client, delivery):
        await act(admin_client, delivery["delivery_id"], "REJECT")
        response = await admin_client.get("/api/v1/deliveries", params={"shipment_id": "202403-001"})
        assert response.json()[0]["approved_by"] is None

    async def test_unknown_delivery(self, admin_client):
        response = await act(admin_client, 4040, "APPROVE")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_concurrent_approvals_conflict(self, session_maker, delivery):
        approver = User(username="manager", role=UserRole.ADMIN)

        async def approve():
            async with session_maker() as session:
                return await DeliveryService(session).apply_approval_action(
                    delivery["delivery_id"], ApprovalAction.APPROVE, approver
                )

        outcomes = await asyncio.gather(approve(), approve(), return_exceptions=True)
        succeeded = [o for o in outcomes if isinstance(o, dict)]
        conflicts = [o for o in outcomes if isinstance(o, ConflictError)]
        assert len(succeeded) == 1
        assert len(conflicts) == 1
        assert conflicts[0].status_code == status.HTTP_409_CONFLICT

        async with session_maker() as session:
            stored = await session.get(Delivery, delivery["delivery_id"])
            assert stored.approval_status == ApprovalStatus.APPROVED_BY_ADMIN
            assert stored.approved_by == "manager"

    async def test_invalid_action(self, admin_client, delivery):
        response = await act(admin_client, delivery["delivery_id"], "ESCALATE")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "action"

    async def test_approved_on_day(self, superadmin_client, delivery):
        delivery_id = delivery["delivery_id"]
        await act(superadmin_client, delivery_id, "APPROVE")
        await act(superadmin_client, delivery_id, "APPROVE")

        today = datetime.now(timezone.utc).date().isoformat()
        response = await superadmin_client.get("/api/v1/deliveries/approved", params={"date": today})
        assert response.status_code == status.HTTP_200_OK

        rows = response.json()
        assert len(rows) == 1
        assert rows[0]["delivery_id"] == delivery_id
        assert rows[0]["receiver_name"] == "Bilal Stores"
        assert rows[0]["delivery_date"] == "2024-03-20T00:00:00.000Z"
        assert rows[0]["approved_at"].startswith(today)

        response = await superadmin_client.get("/api/v1/deliveries/approved", params={"date": "2001-01-01"})
        assert response.json() == []

    async def test_approved_on_day_requires_valid_date(self, superadmin_client, master_data):
        response = await superadmin_client.get("/api/v1/deliveries/approved")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = await superadmin_client.get("/api/v1/deliveries/approved", params={"date": "20-01-2024"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
