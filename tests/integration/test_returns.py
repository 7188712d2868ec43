import pytest
from httpx import AsyncClient
from fastapi import status


@pytest.mark.asyncio
class TestReturns:

    async def test_open_return_with_items(self, operator_client: AsyncClient, make_shipment):
        shipment = await make_shipment()
        goods_detail_id = shipment["goods_details"][0]["id"]

        response = await operator_client.post("/api/v1/returns", json={
            "original_shipment_id": shipment["register_number"],
            "reason": "Damaged in transit",
            "items": [{"goods_detail_id": goods_detail_id, "quantity_returned": 2, "condition": "DAMAGED"}],
        })
        assert response.status_code == status.HTTP_201_CREATED

        data = response.json()
        assert data["status"] == "PENDING"
        assert data["resolution_date"] is None
        assert data["return_items"][0]["quantity_returned"] == 2
        assert data["original_shipment"]["bility_number"] == "B-1001"

    async def test_goods_must_belong_to_shipment(self, operator_client: AsyncClient, make_shipment):
        first = await make_shipment(bility_number="B-1")
        second = await make_shipment(bility_number="B-2")
        foreign_id = second["goods_details"][0]["id"]

        response = await operator_client.post("/api/v1/returns", json={
            "original_shipment_id": first["register_number"],
            "reason": "Wrong consignment",
            "items": [{"goods_detail_id": foreign_id, "quantity_returned": 1, "condition": "GOOD"}],
        })
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_unknown_shipment(self, operator_client: AsyncClient):
        response = await operator_client.post(
            "/api/v1/returns", json={"original_shipment_id": "209901-001", "reason": "Refused"}
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_complete_return(self, operator_client: AsyncClient, make_shipment):
        shipment = await make_shipment()
        response = await operator_client.post(
            "/api/v1/returns", json={"original_shipment_id": shipment["register_number"], "reason": "Refused"}
        )
        return_id = response.json()["id"]

        response = await operator_client.patch("/api/v1/returns", json={
            "id": return_id, "status": "COMPLETED", "action_taken": "Restocked at Lahore depot",
        })
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "COMPLETED"
        assert response.json()["action_taken"] == "Restocked at Lahore depot"
        assert response.json()["resolution_date"] is not None

        response = await operator_client.get("/api/v1/returns", params={"status": "COMPLETED"})
        assert [r["id"] for r in response.json()] == [return_id]

        response = await operator_client.get("/api/v1/returns", params={"status": "PENDING"})
        assert response.json() == []

    async def test_update_unknown_return(self, operator_client: AsyncClient):
        response = await operator_client.patch("/api/v1/returns", json={"id": 55, "status": "CANCELLED"})
        assert response.status_code == status.HTTP_404_NOT_FOUND
