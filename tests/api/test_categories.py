"""Category endpoints."""

from bson import ObjectId

from tests.factories import insert_category

CATEGORY = "/api/v1/category"


async def test_create_category_slugifies_name(client, db, admin_headers):
    response = await client.post(
        f"{CATEGORY}/create-category", json={"name": "  Home & Garden "}, headers=admin_headers
    )

    assert response.status_code == 201
    category = response.json()["category"]
    assert category["name"] == "Home & Garden"
    assert category["slug"] == "home-garden"
    assert await db.categories.count_documents({}) == 1


async def test_create_category_requires_name(client, admin_headers):
    response = await client.post(f"{CATEGORY}/create-category", json={"name": "  "}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Name is required"


async def test_create_category_duplicate(client, category, admin_headers):
    response = await client.post(
        f"{CATEGORY}/create-category", json={"name": "Electronics"}, headers=admin_headers
    )

    assert response.status_code == 409


async def test_create_category_duplicate_slug(client, category, admin_headers):
    response = await client.post(
        f"{CATEGORY}/create-category", json={"name": "ELECTRONICS"}, headers=admin_headers
    )

    assert response.status_code == 409


async def test_create_category_admin_only(client, user_headers):
    response = await client.post(f"{CATEGORY}/create-category", json={"name": "Toys"}, headers=user_headers)

    assert response.status_code == 403


async def test_create_category_requires_login(client):
    response = await client.post(f"{CATEGORY}/create-category", json={"name": "Toys"})

    assert response.status_code == 401


async def test_update_category_renames_and_reslugs(client, db, category, admin_headers):
    response = await client.put(
        f"{CATEGORY}/update-category/{category['_id']}", json={"name": "Consumer Electronics"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["category"]["slug"] == "consumer-electronics"
    stored = await db.categories.find_one({"_id": category["_id"]})
    assert stored["name"] == "Consumer Electronics"


async def test_update_category_keeping_own_name(client, category, admin_headers):
    response = await client.put(
        f"{CATEGORY}/update-category/{category['_id']}", json={"name": "Electronics"},
        headers=admin_headers,
    )

    assert response.status_code == 200


async def test_update_category_conflict(client, db, category, admin_headers):
    other = await insert_category(db, "Books")

    response = await client.put(
        f"{CATEGORY}/update-category/{other['_id']}", json={"name": "Electronics"},
        headers=admin_headers,
    )

    assert response.status_code == 409


async def test_update_category_missing_and_invalid(client, admin_headers):
    missing = await client.put(
        f"{CATEGORY}/update-category/{ObjectId()}", json={"name": "Toys"}, headers=admin_headers
    )
    invalid = await client.put(
        f"{CATEGORY}/update-category/123", json={"name": "Toys"}, headers=admin_headers
    )

    assert missing.status_code == 404
    assert invalid.status_code == 400


async def test_list_categories_sorted_by_name(client, db):
    await insert_category(db, "Toys")
    await insert_category(db, "Books")

    response = await client.get(f"{CATEGORY}/get-category")

    assert response.status_code == 200
    assert [c["name"] for c in response.json()["category"]] == ["Books", "Toys"]


async def test_single_category_by_slug(client, category):
    response = await client.get(f"{CATEGORY}/single-category/electronics")

    assert response.status_code == 200
    assert response.json()["category"]["id"] == str(category["_id"])


async def test_single_category_unknown_slug(client):
    response = await client.get(f"{CATEGORY}/single-category/nothing-here")

    assert response.status_code == 404


async def test_delete_category(client, db, category, admin_headers):
    response = await client.delete(f"{CATEGORY}/delete-category/{category['_id']}", headers=admin_headers)

    assert response.status_code == 200
    assert await db.categories.count_documents({}) == 0


async def test_delete_unknown_category(client, admin_headers):
    response = await client.delete(f"{CATEGORY}/delete-category/{ObjectId()}", headers=admin_headers)

    assert response.status_code == 404
