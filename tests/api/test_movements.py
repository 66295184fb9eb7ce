"""API tests for the movement endpoints on the memory backend."""

from decimal import Decimal

import pytest

PURCHASE = {
    "base_id": 1,
    "asset_id": 7,
    "quantity": "10",
    "unit_price": "99.90",
    "supplier_name": "Acme Defense",
    "purchase_date": "2026-03-01",
}

TRANSFER = {
    "source_base_id": 1,
    "destination_base_id": 2,
    "asset_id": 7,
    "quantity": "4",
    "transfer_date": "2026-03-02",
}

ASSIGNMENT = {
    "base_id": 1,
    "asset_id": 7,
    "quantity": "3",
    "assigned_to_personnel": "Sgt. A. Rivera",
    "assignment_date": "2026-03-03",
}


def expenditure(assignment_id: int | None = None, quantity: str = "3") -> dict:
    return {
        "base_id": 1,
        "asset_id": 7,
        "assignment_id": assignment_id,
        "quantity": quantity,
        "expenditure_date": "2026-03-04",
        "reason": "Live fire exercise",
        "operation_name": "Iron Anvil",
    }


@pytest.fixture
async def stocked(async_client, logistics_headers):
    """Base 1 holds 10 of asset 7."""
    response = await async_client.post("/api/purchases", json=PURCHASE, headers=logistics_headers)
    assert response.status_code == 201
    return response.json()["created_id"]


class TestPurchases:
    async def test_create(self, async_client, logistics_headers):
        response = await async_client.post(
            "/api/purchases", json=PURCHASE, headers=logistics_headers
        )
        assert response.status_code == 201
        assert response.json() == {"message": "Purchase recorded successfully", "created_id": 1}

    async def test_get_by_id(self, async_client, admin_headers, stocked):
        response = await async_client.get(f"/api/purchases/{stocked}", headers=admin_headers)
        assert response.status_code == 200

        data = response.json()
        assert Decimal(data["quantity"]) == Decimal("10")
        assert Decimal(data["total_price"]) == Decimal("999.00")
        assert data["created_by"] == 3

    async def test_missing_fields_are_400(self, async_client, admin_headers):
        response = await async_client.post(
            "/api/purchases", json={"base_id": 1}, headers=admin_headers
        )
        assert response.status_code == 400

        data = response.json()
        assert data["error_code"] == "INVALID_INPUT"
        assert "purchase_date" in data["detail"]

    @pytest.mark.parametrize("quantity", ["0", "-1", "0.005", "1e17"])
    async def test_bad_quantity_is_400(self, async_client, admin_headers, quantity):
        response = await async_client.post(
            "/api/purchases", json={**PURCHASE, "quantity": quantity}, headers=admin_headers
        )
        assert response.status_code == 400

    async def test_malformed_body_is_422(self, async_client, admin_headers):
        response = await async_client.post(
            "/api/purchases", json={**PURCHASE, "quantity": "lots"}, headers=admin_headers
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_commander_cannot_purchase(self, async_client, commander_headers):
        response = await async_client.post(
            "/api/purchases", json=PURCHASE, headers=commander_headers
        )
        assert response.status_code == 403

    async def test_other_base_is_403(self, async_client, logistics_headers):
        response = await async_client.post(
            "/api/purchases", json={**PURCHASE, "base_id": 2}, headers=logistics_headers
        )
        assert response.status_code == 403

    async def test_unknown_id_is_404(self, async_client, admin_headers):
        response = await async_client.get("/api/purchases/77", headers=admin_headers)
        assert response.status_code == 404
        assert response.json()["error_code"] == "PURCHASE_NOT_FOUND"


class TestListScope:
    async def test_scoped_listing(self, async_client, admin_headers, identity, stocked):
        await async_client.post(
            "/api/purchases", json={**PURCHASE, "base_id": 3}, headers=admin_headers
        )

        admin_view = await async_client.get("/api/purchases", headers=admin_headers)
        assert admin_view.json()["count"] == 2

        commander_view = await async_client.get(
            "/api/purchases", headers=identity(2, "base_commander", 1)
        )
        assert [p["base_id"] for p in commander_view.json()["purchases"]] == [1]

    async def test_naming_other_base_is_403(self, async_client, commander_headers):
        response = await async_client.get(
            "/api/purchases", params={"base_id": 2}, headers=commander_headers
        )
        assert response.status_code == 403

    async def test_reading_other_base_record_is_403(
        self, async_client, identity, stocked
    ):
        response = await async_client.get(
            f"/api/purchases/{stocked}", headers=identity(8, "base_commander", 2)
        )
        assert response.status_code == 403


class TestTransfers:
    async def test_create_and_list_for_destination(
        self, async_client, logistics_headers, identity, stocked
    ):
        response = await async_client.post(
            "/api/transfers", json=TRANSFER, headers=logistics_headers
        )
        assert response.status_code == 201

        destination = await async_client.get(
            "/api/transfers", headers=identity(4, "logistics_officer", 2)
        )
        [transfer] = destination.json()["transfers"]
        assert transfer["status"] == "completed"

    async def test_same_base_is_400(self, async_client, admin_headers, stocked):
        response = await async_client.post(
            "/api/transfers",
            json={**TRANSFER, "destination_base_id": 1},
            headers=admin_headers,
        )
        assert response.status_code == 400

    async def test_insufficient_is_409(self, async_client, admin_headers, stocked):
        response = await async_client.post(
            "/api/transfers", json={**TRANSFER, "quantity": "11"}, headers=admin_headers
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "INSUFFICIENT_BALANCE"


class TestAssignmentsAndExpenditures:
    async def test_lifecycle(self, async_client, commander_headers, stocked):
        created = await async_client.post(
            "/api/assignments", json=ASSIGNMENT, headers=commander_headers
        )
        assert created.status_code == 201
        assignment_id = created.json()["created_id"]

        spent = await async_client.post(
            "/api/expenditures", json=expenditure(assignment_id), headers=commander_headers
        )
        assert spent.status_code == 201

        again = await async_client.post(
            "/api/expenditures", json=expenditure(assignment_id), headers=commander_headers
        )
        assert again.status_code == 409
        assert again.json()["error_code"] == "CONFLICT"

        fetched = await async_client.get(
            f"/api/assignments/{assignment_id}", headers=commander_headers
        )
        assert fetched.json()["status"] == "expended"

    async def test_filters(self, async_client, commander_headers, stocked):
        await async_client.post("/api/assignments", json=ASSIGNMENT, headers=commander_headers)
        await async_client.post(
            "/api/assignments",
            json={**ASSIGNMENT, "assigned_to_personnel": "Cpl. Okafor", "quantity": "1"},
            headers=commander_headers,
        )

        by_name = await async_client.get(
            "/api/assignments", params={"personnel": "okafor"}, headers=commander_headers
        )
        assert [a["assigned_to_personnel"] for a in by_name.json()["assignments"]] == [
            "Cpl. Okafor"
        ]

        active = await async_client.get(
            "/api/assignments", params={"status": "active"}, headers=commander_headers
        )
        assert active.json()["count"] == 2

    async def test_logistics_cannot_expend(self, async_client, logistics_headers, stocked):
        response = await async_client.post(
            "/api/expenditures", json=expenditure(), headers=logistics_headers
        )
        assert response.status_code == 403

    async def test_unknown_assignment_is_404(self, async_client, commander_headers, stocked):
        response = await async_client.post(
            "/api/expenditures", json=expenditure(assignment_id=42), headers=commander_headers
        )
        assert response.status_code == 404

    async def test_search_by_operation(self, async_client, commander_headers, stocked):
        await async_client.post(
            "/api/expenditures", json=expenditure(quantity="1"), headers=commander_headers
        )
        found = await async_client.get(
            "/api/expenditures", params={"operation": "anvil"}, headers=commander_headers
        )
        assert found.json()["count"] == 1
        missing = await async_client.get(
            "/api/expenditures", params={"operation": "hammer"}, headers=commander_headers
        )
        assert missing.json()["count"] == 0
