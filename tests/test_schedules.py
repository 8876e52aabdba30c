"""Schedule lifecycle tests through the HTTP API."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient


def _iso(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def _menu(client: AsyncClient, headers: dict) -> tuple[str, str]:
    ids = []
    for name, price in (("Pizza", 12.99), ("Pasta", 9.99)):
        resp = await client.post("/menu-items", json={
            "name": name, "price": price, "category": "main",
        }, headers=headers)
        assert resp.status_code == 201
        ids.append(resp.json()["data"]["menuItemId"])
    return ids[0], ids[1]


def _body(items: list[dict], start: str = "2025-06-01T10:00:00.000Z", end: str = "2025-06-01T14:00:00.000Z") -> dict:
    return {
        "title": "Friday Lunch",
        "description": "Weekly lunch order",
        "pickupInstructions": "Pick up at front desk",
        "startTime": start,
        "endTime": end,
        "items": items,
    }


async def _create(client: AsyncClient, headers: dict, **window) -> dict:
    pizza, pasta = await _menu(client, headers)
    resp = await client.post("/schedules", json=_body([
        {"menuItemId": pizza, "totalQuantity": 10},
        {"menuItemId": pasta, "totalQuantity": 5},
    ], **window), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


@pytest.mark.asyncio
async def test_create_schedule_with_snapshots(client: AsyncClient, admin_headers):
    schedule = await _create(client, admin_headers)

    assert schedule["title"] == "Friday Lunch"
    assert schedule["status"] == "draft"
    assert schedule["statusStartTime"] == "draft#2025-06-01T10:00:00.000Z"
    assert schedule["startTime"] == "2025-06-01T10:00:00.000Z"
    assert schedule["pickupInstructions"] == "Pick up at front desk"
    assert len(schedule["scheduleId"]) == 26

    first, second = schedule["items"]
    assert (first["name"], first["price"]) == ("Pizza", 12.99)
    assert (first["totalQuantity"], first["remainingQuantity"]) == (10, 10)
    assert (second["name"], second["price"]) == ("Pasta", 9.99)
    assert (second["totalQuantity"], second["remainingQuantity"]) == (5, 5)


@pytest.mark.asyncio
async def test_offset_times_normalized_to_utc(client: AsyncClient, admin_headers):
    schedule = await _create(
        client, admin_headers,
        start="2025-06-01T12:00:00+02:00", end="2025-06-01T16:00:00+02:00",
    )
    assert schedule["startTime"] == "2025-06-01T10:00:00.000Z"
    assert schedule["statusStartTime"] == "draft#2025-06-01T10:00:00.000Z"


@pytest.mark.asyncio
async def test_create_missing_menu_item_persists_nothing(client: AsyncClient, admin_headers):
    pizza, _ = await _menu(client, admin_headers)
    resp = await client.post("/schedules", json=_body([
        {"menuItemId": pizza, "totalQuantity": 1},
        {"menuItemId": "ghost-item", "totalQuantity": 1},
    ]), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"] == {
        "code": "VALIDATION_ERROR",
        "message": "Menu item not found: ghost-item",
    }

    resp = await client.get("/schedules", headers=admin_headers)
    assert resp.json()["data"] == []


@pytest.mark.asyncio
async def test_create_names_unknown_id_of_any_length(client: AsyncClient, admin_headers):
    pizza, _ = await _menu(client, admin_headers)
    unknown = "missing-menu-item-with-a-rather-long-id"
    resp = await client.post("/schedules", json=_body([
        {"menuItemId": pizza, "totalQuantity": 1},
        {"menuItemId": unknown, "totalQuantity": 1},
    ]), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == f"Menu item not found: {unknown}"


@pytest.mark.asyncio
async def test_create_inactive_menu_item_rejected(client: AsyncClient, admin_headers):
    pizza, pasta = await _menu(client, admin_headers)
    await client.delete(f"/menu-items/{pasta}", headers=admin_headers)

    resp = await client.post("/schedules", json=_body([
        {"menuItemId": pizza, "totalQuantity": 1},
        {"menuItemId": pasta, "totalQuantity": 1},
    ]), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == f"Menu item is inactive: {pasta}"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("start", "end"),
    [
        ("2025-06-01T14:00:00.000Z", "2025-06-01T10:00:00.000Z"),
        ("2025-06-01T10:00:00.000Z", "2025-06-01T10:00:00.000Z"),
    ],
)
async def test_create_rejects_non_positive_window(client: AsyncClient, admin_headers, start, end):
    pizza, _ = await _menu(client, admin_headers)
    resp = await client.post("/schedules", json=_body(
        [{"menuItemId": pizza, "totalQuantity": 1}], start=start, end=end,
    ), headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "endTime must be after startTime"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"items": []},
        {"title": ""},
        {"startTime": "not-a-date"},
        {"startTime": "2025-06-01T10:00:00"},
        {"items": [{"menuItemId": "x", "totalQuantity": 0}]},
        {"items": [{"menuItemId": "x", "totalQuantity": 2.5}]},
        {"items": [{"menuItemId": "", "totalQuantity": 1}]},
    ],
)
async def test_create_schema_validation(client: AsyncClient, admin_headers, overrides):
    body = {**_body([{"menuItemId": "x", "totalQuantity": 1}]), **overrides}
    resp = await client.post("/schedules", json=body, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_customer_cannot_create_schedule(client: AsyncClient, customer_headers):
    resp = await client.post("/schedules", json=_body([
        {"menuItemId": "x", "totalQuantity": 1},
    ]), headers=customer_headers)
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_get_schedule(client: AsyncClient, admin_headers, customer_headers):
    schedule = await _create(client, admin_headers)
    resp = await client.get(f"/schedules/{schedule['scheduleId']}", headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["scheduleId"] == schedule["scheduleId"]

    resp = await client.get("/schedules/missing", headers=customer_headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Schedule not found"


@pytest.mark.asyncio
async def test_full_lifecycle(client: AsyncClient, admin_headers):
    schedule = await _create(client, admin_headers)
    url = f"/schedules/{schedule['scheduleId']}"

    resp = await client.put(url, json={"status": "active"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["statusStartTime"] == "active#2025-06-01T10:00:00.000Z"

    resp = await client.put(url, json={"status": "closed"}, headers=admin_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["status"] == "closed"
    assert data["statusStartTime"] == "closed#2025-06-01T10:00:00.000Z"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("path", "requested"),
    [
        ([], "draft"),
        ([], "closed"),
        (["active"], "draft"),
        (["active"], "active"),
        (["active", "closed"], "active"),
        (["active", "closed"], "draft"),
        (["active", "closed"], "closed"),
    ],
)
async def test_invalid_transitions(client: AsyncClient, admin_headers, path, requested):
    schedule = await _create(client, admin_headers)
    url = f"/schedules/{schedule['scheduleId']}"
    for step in path:
        resp = await client.put(url, json={"status": step}, headers=admin_headers)
        assert resp.status_code == 200

    current = path[-1] if path else "draft"
    resp = await client.put(url, json={"status": requested}, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == f"Cannot transition from '{current}' to '{requested}'"


@pytest.mark.asyncio
async def test_update_fields_and_start_time(client: AsyncClient, admin_headers):
    schedule = await _create(client, admin_headers)
    resp = await client.put(f"/schedules/{schedule['scheduleId']}", json={
        "title": "Late Lunch",
        "startTime": "2025-06-01T11:00:00.000Z",
        "items": [],
    }, headers=admin_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["title"] == "Late Lunch"
    assert data["description"] == "Weekly lunch order"
    assert data["statusStartTime"] == "draft#2025-06-01T11:00:00.000Z"
    # Items are frozen at creation
    assert len(data["items"]) == 2


@pytest.mark.asyncio
async def test_update_rejects_inverted_window(client: AsyncClient, admin_headers):
    schedule = await _create(client, admin_headers)
    resp = await client.put(f"/schedules/{schedule['scheduleId']}", json={
        "endTime": "2025-06-01T09:00:00.000Z",
    }, headers=admin_headers)
    assert resp.status_code == 400


@pytest.mark.asyncio
async def test_update_missing_schedule(client: AsyncClient, admin_headers):
    resp = await client.put("/schedules/missing", json={"title": "X"}, headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_customer_cannot_update(client: AsyncClient, admin_headers, customer_headers):
    schedule = await _create(client, admin_headers)
    resp = await client.put(
        f"/schedules/{schedule['scheduleId']}", json={"status": "active"}, headers=customer_headers,
    )
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_delete_draft(client: AsyncClient, admin_headers):
    schedule = await _create(client, admin_headers)
    url = f"/schedules/{schedule['scheduleId']}"

    resp = await client.delete(url, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json() == {"data": {"message": "Schedule deleted"}}

    resp = await client.get(url, headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("path", [["active"], ["active", "closed"]])
async def test_delete_non_draft_rejected(client: AsyncClient, admin_headers, path):
    schedule = await _create(client, admin_headers)
    url = f"/schedules/{schedule['scheduleId']}"
    for step in path:
        await client.put(url, json={"status": step}, headers=admin_headers)

    resp = await client.delete(url, headers=admin_headers)
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Only draft schedules can be deleted"

    resp = await client.get(url, headers=admin_headers)
    assert resp.status_code == 200


@pytest.mark.asyncio
async def test_delete_missing_schedule(client: AsyncClient, admin_headers):
    resp = await client.delete("/schedules/missing", headers=admin_headers)
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_customer_listing_hides_expired_and_inactive(
    client: AsyncClient, admin_headers, customer_headers,
):
    now = datetime.now(timezone.utc)

    expired = await _create(client, admin_headers)  # window in 2025, already over
    await client.put(f"/schedules/{expired['scheduleId']}", json={"status": "active"}, headers=admin_headers)

    open_now = await _create(
        client, admin_headers,
        start=_iso(now - timedelta(hours=1)), end=_iso(now + timedelta(hours=1)),
    )
    await client.put(f"/schedules/{open_now['scheduleId']}", json={"status": "active"}, headers=admin_headers)

    # In the window, but still a draft
    await _create(
        client, admin_headers,
        start=_iso(now - timedelta(hours=1)), end=_iso(now + timedelta(hours=1)),
    )

    resp = await client.get("/schedules", headers=customer_headers)
    assert resp.status_code == 200
    assert [s["scheduleId"] for s in resp.json()["data"]] == [open_now["scheduleId"]]

    resp = await client.get("/schedules", headers=admin_headers)
    ids = {s["scheduleId"] for s in resp.json()["data"]}
    assert expired["scheduleId"] in ids
    assert len(ids) == 3
