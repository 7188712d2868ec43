import pytest
from httpx import AsyncClient
from fastapi import status


@pytest.fixture
async def march_shipments(superadmin_client: AsyncClient, make_shipment, master_data):
    await make_shipment(bility_number="B-1", bility_date="2024-03-01")
    await make_shipment(bility_number="B-2", bility_date="2024-03-15")
    await make_shipment(
        bility_number="B-3",
        bility_date="2024-03-31",
        departure_city_id=master_data["karachi"],
        to_city_id=master_data["lahore"],
        payment_status="FREE",
    )


@pytest.mark.asyncio
class TestShipmentsReport:

    async def test_inclusive_day_range(self, operator_client: AsyncClient, march_shipments):
        response = await operator_client.get(
            "/api/v1/shipments/report", params={"startDate": "2024-03-01", "endDate": "2024-03-15"}
        )
        assert response.status_code == status.HTTP_200_OK
        assert [row["bility_number"] for row in response.json()] == ["B-2", "B-1"]

    async def test_end_date_covers_whole_day(self, operator_client: AsyncClient, march_shipments):
        response = await operator_client.get("/api/v1/shipments/report", params={"endDate": "2024-03-31"})
        assert len(response.json()) == 3

        response = await operator_client.get("/api/v1/shipments/report", params={"startDate": "2024-03-31"})
        assert [row["bility_number"] for row in response.json()] == ["B-3"]

    async def test_row_shape(self, operator_client: AsyncClient, march_shipments):
        response = await operator_client.get("/api/v1/shipments/report", params={"startDate": "2024-03-31"})
        row = response.json()[0]
        assert row["bility_date"] == "2024-03-31T00:00:00.000Z"
        assert row["payment_status"] == "FREE"
        assert row["total_charges"] == 1500.0
        assert row["departure_city"]["name"] == "Karachi"
        assert row["to_city"]["name"] == "Lahore"
        assert row["vehicle"]["vehicleNumber"] == "LHR-1234"
        assert row["total_quantity"] == 10

    async def test_id_filters(self, operator_client: AsyncClient, march_shipments, master_data):
        response = await operator_client.get(
            "/api/v1/shipments/report", params={"departureCityId": str(master_data["karachi"])}
        )
        assert [row["bility_number"] for row in response.json()] == ["B-3"]

        response = await operator_client.get(
            "/api/v1/shipments/report", params={"toCityId": str(master_data["karachi"])}
        )
        assert {row["bility_number"] for row in response.json()} == {"B-1", "B-2"}

    @pytest.mark.parametrize("value", ["0", "abc", ""])
    async def test_non_positive_ids_are_ignored(self, operator_client: AsyncClient, march_shipments, value):
        response = await operator_client.get(
            "/api/v1/shipments/report", params={"vehicleId": value, "departureCityId": value}
        )
        assert len(response.json()) == 3

    async def test_malformed_date(self, operator_client: AsyncClient, march_shipments):
        response = await operator_client.get("/api/v1/shipments/report", params={"startDate": "03/01/2024"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json() == {"message": "startDate must be a date in YYYY-MM-DD format."}


@pytest.mark.asyncio
class TestOtherReports:

    async def test_deliveries_report(self, superadmin_client: AsyncClient, make_shipment, delivery_data):
        await make_shipment(bility_number="B-1")
        await make_shipment(bility_number="B-2")
        await superadmin_client.post("/api/v1/deliveries", json=delivery_data("202403-001", delivery_date="2024-03-20"))
        await superadmin_client.post("/api/v1/deliveries", json=delivery_data("202403-002", delivery_date="2024-03-25"))

        response = await superadmin_client.get(
            "/api/v1/deliveries/report", params={"startDate": "2024-03-21", "endDate": "2024-03-31"}
        )
        assert response.status_code == status.HTTP_200_OK
        rows = response.json()
        assert [row["shipment_id"] for row in rows] == ["202403-002"]
        assert rows[0]["delivery_date"] == "2024-03-25T00:00:00.000Z"
        assert rows[0]["approval_status"] == "PENDING"
        assert rows[0]["shipment"]["bility_number"] == "B-2"

        response = await superadmin_client.get("/api/v1/deliveries/report", params={"shipment_id": "202403-001"})
        assert [row["shipment_id"] for row in response.json()] == ["202403-001"]

    async def test_parties_report(self, superadmin_client: AsyncClient, march_shipments, master_data):
        response = await superadmin_client.get(
            "/api/v1/parties/report", params={"startDate": "2024-03-01", "endDate": "2024-03-31"}
        )
        assert response.status_code == status.HTTP_200_OK

        by_name = {row["name"]: row for row in response.json()}
        sender = by_name["Ali Traders"]
        assert len(sender["sentShipments"]) == 3
        assert sender["receivedShipments"] == []
        assert sender["totals"]["charges"] == 4500.0
        assert sender["sentShipments"][0]["bility_date"] == "2024-03-01T00:00:00.000Z"
        assert len(by_name["Bilal Stores"]["receivedShipments"]) == 3

    async def test_parties_report_date_window(self, superadmin_client: AsyncClient, march_shipments):
        response = await superadmin_client.get(
            "/api/v1/parties/report", params={"startDate": "2024-04-01"}
        )
        sender = {row["name"]: row for row in response.json()}["Ali Traders"]
        assert sender["sentShipments"] == []
        assert sender["totals"]["charges"] == 0.0

    async def test_cities_report(self, superadmin_client: AsyncClient, march_shipments):
        response = await superadmin_client.get("/api/v1/cities/report", params={"endDate": "2024-03-15"})
        assert response.status_code == status.HTTP_200_OK

        by_name = {row["name"]: row for row in response.json()}
        assert by_name["Lahore"]["departingCount"] == 2
        assert by_name["Lahore"]["arrivingCount"] == 0
        assert by_name["Karachi"]["arrivingCount"] == 2
        assert {s["id"] for s in by_name["Karachi"]["arrivingShipments"]} == {"202403-001", "202403-002"}


@pytest.mark.asyncio
class TestCombinedExpensesReport:

    @pytest.fixture
    async def expenses(self, superadmin_client: AsyncClient, make_shipment, delivery_data, master_data):
        await make_shipment(bility_number="B-1")
        await make_shipment(bility_number="B-2")
        await superadmin_client.post("/api/v1/deliveries", json=delivery_data("202403-001", delivery_date="2024-03-20"))
        await superadmin_client.post("/api/v1/deliveries", json=delivery_data("202403-002", delivery_date="2024-03-25"))
        response = await superadmin_client.post("/api/v1/trips", json={
            "vehicle_id": master_data["vehicle"],
            "driver_name": "Rashid",
            "driver_mobile": "0345-1234567",
            "station_name": "Badami Bagh",
            "city": "Lahore",
            "date": "2024-03-22",
            "arrival_time": "08:30",
            "departure_time": "18:00",
            "delivery_cut": "100",
            "commission": "50",
            "shipmentLogs": [{
                "serial_number": 1,
                "shipment_id": "B-1",
                "receiver_name": "Bilal Stores",
                "item_details": "Cotton Bales x10",
                "quantity": 10,
                "delivery_charges": "600",
            }],
        })
        assert response.status_code == status.HTTP_201_CREATED

    async def test_details_newest_first(self, operator_client: AsyncClient, expenses):
        response = await operator_client.get("/api/v1/reports/combined-expenses")
        assert response.status_code == status.HTTP_200_OK
        details = response.json()["details"]
        assert [(row["type"], row["date"]) for row in details] == [
            ("DELIVERY_EXPENSE", "2024-03-25"),
            ("TRIP_EXPENSE", "2024-03-22"),
            ("DELIVERY_EXPENSE", "2024-03-20"),
        ]
        assert details[0]["bility_number"] == "B-2"
        assert details[0]["total_expense"] == 110.0
        assert details[1]["vehicle_number"] == "LHR-1234"
        assert details[1]["bility_number"] == "N/A (Trip)"
        assert details[1]["total_expense"] == 150.0

    async def test_summary(self, operator_client: AsyncClient, expenses):
        response = await operator_client.get("/api/v1/reports/combined-expenses")
        assert response.json()["summary"] == {
            "totalDeliveryExpenses": 220.0,
            "totalBilityExpenses": 40.0,
            "totalStationExpenses": 100.0,
            "totalStationLabour": 60.0,
            "totalCartLabour": 20.0,
            "totalDeliveryCut": 100.0,
            "grandTotalExpenses": 320.0,
        }

    async def test_date_range(self, operator_client: AsyncClient, expenses):
        response = await operator_client.get(
            "/api/v1/reports/combined-expenses", params={"startDate": "2024-03-21", "endDate": "2024-03-22"}
        )
        body = response.json()
        assert [row["type"] for row in body["details"]] == ["TRIP_EXPENSE"]
        assert body["summary"]["totalDeliveryExpenses"] == 0.0
        assert body["summary"]["grandTotalExpenses"] == 100.0

    async def test_empty_and_malformed(self, operator_client: AsyncClient):
        response = await operator_client.get("/api/v1/reports/combined-expenses")
        assert response.json()["details"] == []
        assert response.json()["summary"]["grandTotalExpenses"] == 0.0

        response = await operator_client.get("/api/v1/reports/combined-expenses", params={"endDate": "2024-3-1"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST
