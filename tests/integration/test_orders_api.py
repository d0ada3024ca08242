# tests/integration/test_orders_api.py
"""HTTP-level tests for /orders, /products, /customers, /shop and /dashboard."""
import pytest
from httpx import AsyncClient


class TestListOrders:
    @pytest.mark.asyncio
    async def test_envelope_and_counts(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders")
        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert body["request_id"] == resp.headers["X-Request-ID"]
        data = body["data"]
        assert data["counts"] == {"total": 3, "pending": 2, "fulfilled": 1}
        assert [o["id"] for o in data["items"]] == [1, 2, 3]
        assert data["is_filtered"] is False

    @pytest.mark.asyncio
    async def test_filters(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders", params={
            "fulfillment": "pending", "days": 7, "search": "soto",
        })
        data = resp.json()["data"]
        assert data["filtered_ids"] == [2]
        assert data["is_filtered"] is True
        assert data["counts"]["total"] == 3

    @pytest.mark.asyncio
    async def test_sort_by_dispatch_ascending(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders", params={"sort_by": "dispatch", "direction": "asc"})
        ids = resp.json()["data"]["filtered_ids"]
        assert ids[0] == 3
        assert ids[-1] == 2

    @pytest.mark.asyncio
    async def test_special_order_flag(self, client: AsyncClient) -> None:
        items = (await client.get("/api/v1/orders")).json()["data"]["items"]
        flags = {o["id"]: o["dispatch"]["is_special_order"] for o in items}
        assert flags == {1: False, 2: True, 3: False}

    @pytest.mark.asyncio
    async def test_invalid_filter_value(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders", params={"fulfillment": "shipped"})
        assert resp.status_code == 422


class TestOrderDetail:
    @pytest.mark.asyncio
    async def test_detail(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders/1")
        data = resp.json()["data"]
        assert data["name"] == "#1001"
        assert data["resolved_address"]["address1"] == "Av. Italia 10"
        assert data["address_edited"] is False

    @pytest.mark.asyncio
    async def test_unknown_order(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders/999")
        assert resp.status_code == 404
        body = resp.json()
        assert body["code"] == 2001
        assert body["data"] is None

    @pytest.mark.asyncio
    async def test_fulfillment_orders(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders/2/fulfillment-orders")
        assert resp.json()["data"] == [{"id": 20, "status": "open"}]


class TestFulfill:
    @pytest.mark.asyncio
    async def test_single(self, client: AsyncClient, shopify) -> None:
        resp = await client.post("/api/v1/orders/1/fulfill", json={"tracking_number": "CX1"})
        assert resp.status_code == 200
        assert resp.json()["message"] == "Order fulfilled"
        assert shopify.fulfilled[1].number == "CX1"

    @pytest.mark.asyncio
    async def test_upstream_error_surfaced(self, client: AsyncClient, shopify) -> None:
        shopify.fail_ids = {2}
        resp = await client.post("/api/v1/orders/2/fulfill", json={})
        assert resp.status_code == 502
        body = resp.json()
        assert body["code"] == 1002
        assert body["message"] == "Shopify API Error: 422 - order 2 is closed"

    @pytest.mark.asyncio
    async def test_bulk_all_ok(self, client: AsyncClient, shopify) -> None:
        resp = await client.post("/api/v1/orders/bulk-fulfill", json={
            "items": [{"order_id": 1}, {"order_id": 2, "tracking_number": "B2"}],
        })
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data == {"ok": True, "attempted": 2, "failed": 0, "errors": []}
        assert set(shopify.fulfilled) == {1, 2}

    @pytest.mark.asyncio
    async def test_bulk_partial_failure_fails_batch(self, client: AsyncClient, shopify) -> None:
        shopify.fail_ids = {2}
        resp = await client.post("/api/v1/orders/bulk-fulfill", json={
            "items": [{"order_id": 1}, {"order_id": 2}, {"order_id": 3}],
        })
        assert resp.status_code == 502
        assert resp.json()["code"] == 2003
        # the others were still sent and are not rolled back
        assert set(shopify.fulfilled) == {1, 3}

    @pytest.mark.asyncio
    async def test_bulk_requires_items(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/orders/bulk-fulfill", json={"items": []})
        assert resp.status_code == 422


class TestCatalog:
    @pytest.mark.asyncio
    async def test_products(self, client: AsyncClient) -> None:
        data = (await client.get("/api/v1/products")).json()["data"]
        assert [p["total_stock"] for p in data] == [3, 0]

    @pytest.mark.asyncio
    async def test_customers(self, client: AsyncClient) -> None:
        data = (await client.get("/api/v1/customers")).json()["data"]
        assert data[0]["name"] == "Ana Pérez"

    @pytest.mark.asyncio
    async def test_shop(self, client: AsyncClient) -> None:
        data = (await client.get("/api/v1/shop")).json()["data"]
        assert data["currency"] == "CLP"

    @pytest.mark.asyncio
    async def test_dashboard(self, client: AsyncClient) -> None:
        data = (await client.get("/api/v1/dashboard")).json()["data"]
        assert data["pending_orders"] == 2
        assert data["total_products"] == 2
        assert data["active_products"] == 1
        assert data["recurring_customers"] == 1
        assert [p["id"] for p in data["low_stock"]] == [1]


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.json()["status"] == "ok"


class TestSelection:
    @pytest.mark.asyncio
    async def test_selection_outside_filter_is_dropped(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/orders", params={"search": "soto", "selected": [1, 2]})
        data = resp.json()["data"]
        assert data["filtered_ids"] == [2]
        assert data["selected"] == [2]

    @pytest.mark.asyncio
    async def test_select_all_toggles_over_filtered_rows(self, client: AsyncClient) -> None:
        params = {"fulfillment": "pending", "select_all": "true"}
        first = (await client.get("/api/v1/orders", params=params)).json()["data"]
        assert first["selected"] == [1, 2]

        again = (await client.get(
            "/api/v1/orders", params={**params, "selected": first["selected"]},
        )).json()["data"]
        assert again["selected"] == []

    @pytest.mark.asyncio
    async def test_toggle_one_row(self, client: AsyncClient) -> None:
        params = {"selected": [1], "toggle": 3}
        data = (await client.get("/api/v1/orders", params=params)).json()["data"]
        assert data["selected"] == [1, 3]
        params = {"selected": [1, 3], "toggle": 1}
        data = (await client.get("/api/v1/orders", params=params)).json()["data"]
        assert data["selected"] == [3]

    @pytest.mark.asyncio
    async def test_no_selection_by_default(self, client: AsyncClient) -> None:
        data = (await client.get("/api/v1/orders")).json()["data"]
        assert data["selected"] == []

    @pytest.mark.asyncio
    async def test_bulk_rejects_duplicate_order_ids(self, client: AsyncClient, shopify) -> None:
        resp = await client.post("/api/v1/orders/bulk-fulfill", json={
            "items": [{"order_id": 1}, {"order_id": 2}, {"order_id": 1}],
        })
        assert resp.status_code == 422
        assert shopify.fulfilled == {}
