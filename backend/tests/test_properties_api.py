import pytest

from livingbook.db import crud_properties

LISTING = {
    "title": "Lake house",
    "description": "Two rooms by the lake",
    "price": 120.5,
    "location": "Sylhet",
    "images": ["https://img.example.org/1.jpg"],
    "hostEmail": "Host@Example.com",
    "amenities": ["wifi", "parking"],
    "rating": 4.7,
}


async def create(client, **overrides):
    response = await client.post("/properties", json={**LISTING, **overrides})
    assert response.status_code == 201
    return response.json()["insertedId"]


@pytest.mark.asyncio
async def test_created_property_round_trips(async_client):
    prop_id = await create(async_client)

    response = await async_client.get(f"/properties/{prop_id}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == prop_id
    for key, value in LISTING.items():
        assert body[key] == value
    assert "createdAt" in body


@pytest.mark.asyncio
async def test_create_returns_the_document(async_client):
    response = await async_client.post("/properties", json=LISTING)

    body = response.json()
    assert body["success"] is True
    assert body["data"]["id"] == body["insertedId"]
    assert body["data"]["amenities"] == ["wifi", "parking"]


@pytest.mark.asyncio
async def test_client_cannot_pick_the_id(async_client):
    prop_id = await create(async_client, id="chosen-by-client", _id="also-chosen")

    assert prop_id != "chosen-by-client"
    body = (await async_client.get(f"/properties/{prop_id}")).json()
    assert body["id"] == prop_id
    assert "_id" not in body


@pytest.mark.asyncio
async def test_create_requires_core_fields(async_client):
    response = await async_client.post("/properties", json={"title": "No price"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_host_filter_ignores_email_case(async_client):
    await create(async_client, title="Mine")
    await create(async_client, title="Theirs", hostEmail="other@example.com")

    response = await async_client.get("/properties", params={"hostEmail": "host@example.com"})

    assert [p["title"] for p in response.json()] == ["Mine"]
    assert response.json()[0]["hostEmail"] == "Host@Example.com"


@pytest.mark.asyncio
async def test_host_email_must_be_an_address(async_client):
    response = await async_client.post("/properties", json={**LISTING, "hostEmail": "not-an-email"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_missing_property(async_client):
    response = await async_client.get("/properties/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"message": "Property not found"}


@pytest.mark.asyncio
async def test_list_filters_and_sorts(async_client):
    await create(async_client, title="Cheap", price=40, location="Dhaka")
    await create(async_client, title="Mid", price=80, location="Dhaka")
    await create(async_client, title="Far", price=60, location="Sylhet")

    response = await async_client.get(
        "/properties", params={"location": "Dhaka", "sort": "price_desc"}
    )
    assert [p["title"] for p in response.json()] == ["Mid", "Cheap"]

    response = await async_client.get("/properties", params={"max_price": 70, "sort": "price_asc"})
    assert [p["title"] for p in response.json()] == ["Cheap", "Far"]


@pytest.mark.asyncio
async def test_list_paginates(async_client):
    for i in range(3):
        await create(async_client, title=f"P{i}", price=10 + i)

    response = await async_client.get("/properties", params={"sort": "price_asc", "page": 2, "per_page": 2})

    assert [p["title"] for p in response.json()] == ["P2"]


@pytest.mark.asyncio
async def test_put_replaces_the_whole_listing(async_client):
    prop_id = await create(async_client)

    response = await async_client.put(
        f"/properties/{prop_id}",
        json={"title": "Renamed", "price": 99, "location": "Dhaka", "pool": True},
    )

    assert response.status_code == 200
    body = (await async_client.get(f"/properties/{prop_id}")).json()
    assert body["title"] == "Renamed"
    assert body["price"] == 99
    assert body["pool"] is True
    assert body["description"] is None
    assert body["images"] == []
    assert "amenities" not in body


@pytest.mark.asyncio
async def test_patch_changes_only_what_was_sent(async_client):
    prop_id = await create(async_client)

    response = await async_client.patch(f"/properties/{prop_id}", json={"price": 150, "rating": 4.9})

    assert response.status_code == 200
    body = (await async_client.get(f"/properties/{prop_id}")).json()
    assert body["price"] == 150
    assert body["rating"] == 4.9
    assert body["title"] == LISTING["title"]
    assert body["amenities"] == LISTING["amenities"]


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["put", "patch"])
async def test_updating_missing_property(async_client, method):
    response = await getattr(async_client, method)(
        "/properties/does-not-exist",
        json={"title": "x", "price": 1, "location": "y"},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_removes_exactly_one(async_client):
    keep_id = await create(async_client, title="Keep")
    drop_id = await create(async_client, title="Drop")

    response = await async_client.delete(f"/properties/{drop_id}")

    assert response.status_code == 200
    assert response.json() == {"success": True, "deletedCount": 1}
    assert (await async_client.get(f"/properties/{drop_id}")).status_code == 404
    assert (await async_client.get(f"/properties/{keep_id}")).status_code == 200


@pytest.mark.asyncio
async def test_delete_missing_property(async_client):
    response = await async_client.delete("/properties/does-not-exist")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_featured_listings(async_client, async_session):
    prop = await crud_properties.create_property(
        async_session, {"title": "Villa", "price": 300, "location": "Cox's Bazar"}
    )
    await crud_properties.create_featured(
        async_session,
        title="Villa",
        property_id=prop.id,
        image="https://img.example.org/villa.jpg",
        attributes={"badge": "Top pick"},
    )

    response = await async_client.get("/featured")

    assert response.status_code == 200
    items = response.json()
    assert len(items) == 1
    assert items[0]["propertyId"] == prop.id
    assert items[0]["badge"] == "Top pick"
