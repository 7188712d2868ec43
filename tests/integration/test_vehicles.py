import pytest
from httpx import AsyncClient
from fastapi import status


def trip_payload(vehicle_id: int, **overrides) -> dict:
    payload = {
        "vehicle_id": vehicle_id,
        "driver_name": "Rashid",
        "driver_mobile": "0345-1234567",
        "station_name": "Badami Bagh",
        "city": "Lahore",
        "date": "2024-03-10",
        "arrival_time": "08:30",
        "departure_time": "18:00",
        "delivery_cut": "100",
        "commission": "50",
        "shipmentLogs": [
            {
                "serial_number": 1,
                "shipment_id": "B-1001",
                "receiver_name": "Bilal Stores",
                "item_details": "Cotton Bales x10",
                "quantity": 10,
                "delivery_charges": "600",
            },
            {
                "serial_number": 2,
                "shipment_id": "B-1002",
                "receiver_name": "Hamza Textiles",
                "item_details": "Rice Bags x4",
                "quantity": 4,
                "delivery_charges": "400",
            },
        ],
    }
    payload.update(overrides)
    return payload


@pytest.fixture
async def vehicle_id(superadmin_client: AsyncClient) -> int:
    response = await superadmin_client.post("/api/v1/vehicles", json={"vehicleNumber": "LES-4455"})
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["id"]


async def record(client: AsyncClient, vehicle_id: int, kind: str, amount: str, description: str):
    response = await client.post(
        f"/api/v1/vehicles/{vehicle_id}/transaction",
        json={"type": kind, "amount": amount, "description": description},
    )
    assert response.status_code == status.HTTP_201_CREATED, response.text
    return response.json()


@pytest.mark.asyncio
class TestTrips:

    async def test_create_trip_derives_fares(self, superadmin_client: AsyncClient, vehicle_id):
        response = await superadmin_client.post("/api/v1/trips", json=trip_payload(vehicle_id))
        assert response.status_code == status.HTTP_201_CREATED

        trip = response.json()["tripLog"]
        assert trip["total_fare_collected"] == 1000.0
        assert trip["remaining_fare"] == 850.0
        assert trip["fare_is_paid"] is False
        assert [log["serial_number"] for log in trip["shipmentLogs"]] == [1, 2]

    async def test_unknown_vehicle(self, superadmin_client: AsyncClient, master_data):
        response = await superadmin_client.post("/api/v1/trips", json=trip_payload(9999))
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_next_serial(self, superadmin_client: AsyncClient, vehicle_id):
        response = await superadmin_client.get("/api/v1/trips/next-serial")
        assert response.json() == {"nextSerial": 1}

        await superadmin_client.post("/api/v1/trips", json=trip_payload(vehicle_id))
        response = await superadmin_client.get("/api/v1/trips/next-serial")
        assert response.json() == {"nextSerial": 2}

        response = await superadmin_client.get("/api/v1/trips")
        assert len(response.json()) == 1


@pytest.mark.asyncio
class TestVehicleFinancials:
    """Running-balance ledger and fare settlement"""

    async def test_running_balance(self, superadmin_client: AsyncClient, vehicle_id):
        await record(superadmin_client, vehicle_id, "CREDIT", "100", "Advance")
        await record(superadmin_client, vehicle_id, "DEBIT", "30", "Diesel")
        await record(superadmin_client, vehicle_id, "CREDIT", "50", "Loading")

        response = await superadmin_client.get(f"/api/v1/vehicles/{vehicle_id}/financials")
        assert response.status_code == status.HTTP_200_OK

        data = response.json()
        assert data["vehicle"] == {"id": vehicle_id, "vehicleNumber": "LES-4455"}
        assert [row["balance"] for row in data["ledger"]] == [100.0, 70.0, 120.0]
        assert [row["description"] for row in data["ledger"]] == ["Advance", "Diesel", "Loading"]
        assert data["ledger"][0]["transaction_date"].endswith("Z")
        assert data["summary"] == {
            "currentBalance": 120.0,
            "farePaymentStatus": "N/A",
            "tripToSettleId": None,
        }

    async def test_empty_ledger(self, operator_client: AsyncClient, vehicle_id):
        response = await operator_client.get(f"/api/v1/vehicles/{vehicle_id}/financials")
        data = response.json()
        assert data["ledger"] == []
        assert data["summary"]["currentBalance"] == 0.0

    async def test_latest_trip_drives_fare_status(self, superadmin_client: AsyncClient, vehicle_id):
        await superadmin_client.post("/api/v1/trips", json=trip_payload(vehicle_id, date="2024-03-01"))
        response = await superadmin_client.post("/api/v1/trips", json=trip_payload(vehicle_id, date="2024-03-12"))
        latest_trip_id = response.json()["tripLog"]["id"]
        # An older trip logged later must not win
        await superadmin_client.post("/api/v1/trips", json=trip_payload(vehicle_id, date="2024-02-20"))

        response = await superadmin_client.get(f"/api/v1/vehicles/{vehicle_id}/financials")
        assert response.json()["summary"]["farePaymentStatus"] == "UNPAID"
        assert response.json()["summary"]["tripToSettleId"] == latest_trip_id

    async def test_settle_fare(self, superadmin_client: AsyncClient, vehicle_id):
        response = await superadmin_client.post("/api/v1/trips", json=trip_payload(vehicle_id))
        trip_id = response.json()["tripLog"]["id"]

        response = await superadmin_client.patch(
            f"/api/v1/vehicles/{vehicle_id}/settle-fare",
            json={"paymentAmount": "850", "tripId": trip_id},
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["trip_id"] == trip_id

        response = await superadmin_client.get(f"/api/v1/vehicles/{vehicle_id}/financials")
        data = response.json()
        assert data["summary"] == {"currentBalance": 850.0, "farePaymentStatus": "PAID", "tripToSettleId": None}
        assert data["ledger"][0]["trip_id"] == trip_id
        assert data["ledger"][0]["description"] == f"Fare settlement payment for Trip ID #{trip_id}"

    async def test_settle_fare_for_other_vehicles_trip(self, superadmin_client: AsyncClient, vehicle_id):
        response = await superadmin_client.post("/api/v1/vehicles", json={"vehicleNumber": "MNA-1"})
        other_id = response.json()["id"]
        response = await superadmin_client.post("/api/v1/trips", json=trip_payload(other_id))
        trip_id = response.json()["tripLog"]["id"]

        response = await superadmin_client.patch(
            f"/api/v1/vehicles/{vehicle_id}/settle-fare",
            json={"paymentAmount": "100", "tripId": trip_id},
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    async def test_settle_fare_requires_positive_amount(self, superadmin_client: AsyncClient, vehicle_id):
        response = await superadmin_client.patch(
            f"/api/v1/vehicles/{vehicle_id}/settle-fare", json={"paymentAmount": "0", "tripId": 1}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize("raw_id", ["abc", "0", "-3"])
    async def test_invalid_vehicle_id(self, superadmin_client: AsyncClient, raw_id):
        response = await superadmin_client.get(f"/api/v1/vehicles/{raw_id}/financials")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "Vehicle ID must be a valid number."}

    async def test_unknown_vehicle(self, superadmin_client: AsyncClient):
        response = await superadmin_client.get("/api/v1/vehicles/777/financials")
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Vehicle with ID 777 not found."}

    async def test_operator_cannot_post_transactions(self, operator_client: AsyncClient, vehicle_id):
        response = await operator_client.post(
            f"/api/v1/vehicles/{vehicle_id}/transaction",
            json={"type": "CREDIT", "amount": "10", "description": "Tip"},
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    async def test_vehicle_detail_and_ledger_totals(self, superadmin_client: AsyncClient, vehicle_id):
        await record(superadmin_client, vehicle_id, "CREDIT", "500", "Advance")
        await record(superadmin_client, vehicle_id, "DEBIT", "125.50", "Tyre")
        await superadmin_client.post("/api/v1/vehicles", json={"vehicleNumber": "AAA-1"})

        response = await superadmin_client.get(f"/api/v1/vehicles/{vehicle_id}")
        assert len(response.json()["transactions"]) == 2

        response = await superadmin_client.get("/api/v1/vehicles/ledgers")
        assert response.json() == [
            {"id": response.json()[0]["id"], "vehicleNumber": "AAA-1", "totalCredits": 0.0,
             "totalDebits": 0.0, "balance": 0.0, "transactionCount": 0},
            {"id": vehicle_id, "vehicleNumber": "LES-4455", "totalCredits": 500.0,
             "totalDebits": 125.5, "balance": 374.5, "transactionCount": 2},
        ]
