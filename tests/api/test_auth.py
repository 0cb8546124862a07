"""Authentication, profile, auth gate and order management endpoints."""

from datetime import datetime, timedelta

import pytest
from bson import ObjectId

from app.core.security import compare_password, create_access_token

from tests.factories import PASSWORD, insert_category, insert_product, insert_user

AUTH = "/api/v1/auth"

REGISTRATION = {
    "name": "Bob Buyer",
    "email": "Bob@Mail.com",
    "password": "hunter22",
    "phone": "555-0199",
    "address": "42 Elm Street",
    "answer": "green",
}


# -- Register / login -----------------------------------------------------------

async def test_register_creates_user_without_secrets(client, db):
    response = await client.post(f"{AUTH}/register", json=REGISTRATION)

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "bob@mail.com"
    assert body["user"]["role"] == 0
    assert "password" not in body["user"]
    assert "answer" not in body["user"]

    stored = await db.users.find_one({"email": "bob@mail.com"})
    assert stored["password"] != "hunter22"
    assert compare_password("hunter22", stored["password"])


@pytest.mark.parametrize(
    "missing, label",
    [("name", "Name"), ("email", "Email"), ("password", "Password"),
     ("phone", "Phone"), ("address", "Address"), ("answer", "Answer")],
)
async def test_register_requires_each_field(client, missing, label):
    payload = {**REGISTRATION, missing: ""}

    response = await client.post(f"{AUTH}/register", json=payload)

    assert response.status_code == 400
    assert response.json() == {"success": False, "message": f"{label} is required"}


async def test_register_rejects_short_password(client):
    response = await client.post(f"{AUTH}/register", json={**REGISTRATION, "password": "abc"})

    assert response.status_code == 400


async def test_register_rejects_password_over_bcrypt_limit(client, db):
    response = await client.post(f"{AUTH}/register", json={**REGISTRATION, "password": "x" * 80})

    assert response.status_code == 400
    assert response.json()["message"] == "Password must be at most 72 bytes long"
    assert await db.users.count_documents({}) == 0


async def test_register_counts_password_limit_in_bytes(client):
    response = await client.post(f"{AUTH}/register", json={**REGISTRATION, "password": "\u00e9" * 40})

    assert response.status_code == 400


async def test_register_rejects_invalid_email(client):
    response = await client.post(f"{AUTH}/register", json={**REGISTRATION, "email": "not-an-email"})

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid email address"


async def test_register_duplicate_email(client, user):
    response = await client.post(f"{AUTH}/register", json={**REGISTRATION, "email": "ALICE@mail.com"})

    assert response.status_code == 409
    assert response.json()["success"] is False


async def test_login_returns_token(client, user):
    response = await client.post(f"{AUTH}/login", json={"email": "alice@mail.com", "password": PASSWORD})

    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["id"] == str(user["_id"])
    assert "password" not in body["user"]


async def test_login_wrong_password(client, user):
    response = await client.post(f"{AUTH}/login", json={"email": "alice@mail.com", "password": "nope-nope"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid password"


async def test_login_unknown_email(client):
    response = await client.post(f"{AUTH}/login", json={"email": "ghost@mail.com", "password": PASSWORD})

    assert response.status_code == 404


async def test_login_missing_credentials(client):
    response = await client.post(f"{AUTH}/login", json={"email": "alice@mail.com"})

    assert response.status_code == 400


async def test_forgot_password_with_correct_answer(client, db, user):
    response = await client.post(
        f"{AUTH}/forgot-password",
        json={"email": "alice@mail.com", "answer": "blue", "newPassword": "brand-new"},
    )

    assert response.status_code == 200
    stored = await db.users.find_one({"_id": user["_id"]})
    assert compare_password("brand-new", stored["password"])

    login = await client.post(f"{AUTH}/login", json={"email": "alice@mail.com", "password": "brand-new"})
    assert login.status_code == 200


async def test_forgot_password_wrong_answer(client, user):
    response = await client.post(
        f"{AUTH}/forgot-password",
        json={"email": "alice@mail.com", "answer": "red", "newPassword": "brand-new"},
    )

    assert response.status_code == 404


async def test_forgot_password_rejects_long_password(client, user):
    response = await client.post(
        f"{AUTH}/forgot-password",
        json={"email": "alice@mail.com", "answer": "blue", "newPassword": "z" * 80},
    )

    assert response.status_code == 400


async def test_login_with_overlong_password(client, user):
    response = await client.post(f"{AUTH}/login", json={"email": "alice@mail.com", "password": "x" * 80})

    assert response.status_code == 401


async def test_forgot_password_requires_new_password(client, user):
    response = await client.post(
        f"{AUTH}/forgot-password",
        json={"email": "alice@mail.com", "answer": "blue"},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "New password is required"


# -- Auth gate ------------------------------------------------------------------

async def test_user_auth_ok_with_valid_token(client, user_headers):
    response = await client.get(f"{AUTH}/user-auth", headers=user_headers)

    assert response.status_code == 200
    assert response.json() == {"ok": True}


async def test_user_auth_accepts_bare_token(client, user):
    token = create_access_token({"sub": str(user["_id"])})

    response = await client.get(f"{AUTH}/user-auth", headers={"Authorization": token})

    assert response.json() == {"ok": True}


async def test_user_auth_without_token(client):
    response = await client.get(f"{AUTH}/user-auth")

    assert response.status_code == 401
    assert response.json()["success"] is False


async def test_user_auth_with_invalid_token(client):
    response = await client.get(f"{AUTH}/user-auth", headers={"Authorization": "Bearer junk"})

    assert response.status_code == 401


async def test_user_auth_with_expired_token(client, user):
    token = create_access_token({"sub": str(user["_id"])}, expires_delta=timedelta(seconds=-1))

    response = await client.get(f"{AUTH}/user-auth", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401


async def test_user_auth_for_deleted_user(client, db, user, user_headers):
    await db.users.delete_one({"_id": user["_id"]})

    response = await client.get(f"{AUTH}/user-auth", headers=user_headers)

    assert response.status_code == 401


async def test_admin_auth_ok_for_admin(client, admin_headers):
    response = await client.get(f"{AUTH}/admin-auth", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"ok": True}


async def test_admin_auth_forbidden_for_user(client, user_headers):
    response = await client.get(f"{AUTH}/admin-auth", headers=user_headers)

    assert response.status_code == 403
    assert response.json() == {"success": False, "message": "Unauthorized access"}


async def test_protected_test_route(client, admin_headers, user_headers):
    assert (await client.get(f"{AUTH}/test", headers=admin_headers)).json() == "Protected Routes"
    assert (await client.get(f"{AUTH}/test", headers=user_headers)).status_code == 403


# -- Profile --------------------------------------------------------------------

async def test_update_profile_keeps_unspecified_fields(client, db, user, user_headers):
    response = await client.put(
        f"{AUTH}/profile",
        json={"name": "Alice Renamed", "address": {"street": "2 Side Road", "city": "Springfield"}},
        headers=user_headers,
    )

    assert response.status_code == 200
    updated = response.json()["updatedUser"]
    assert updated["name"] == "Alice Renamed"
    assert updated["phone"] == "555-0100"
    assert updated["address"]["city"] == "Springfield"

    stored = await db.users.find_one({"_id": user["_id"]})
    assert compare_password(PASSWORD, stored["password"])


async def test_update_profile_password(client, db, user, user_headers):
    response = await client.put(f"{AUTH}/profile", json={"password": "another-pass"}, headers=user_headers)

    assert response.status_code == 200
    stored = await db.users.find_one({"_id": user["_id"]})
    assert compare_password("another-pass", stored["password"])


async def test_update_profile_short_password(client, user_headers):
    response = await client.put(f"{AUTH}/profile", json={"password": "abc"}, headers=user_headers)

    assert response.status_code == 400


async def test_update_profile_rejects_long_password(client, db, user, user_headers):
    response = await client.put(f"{AUTH}/profile", json={"password": "y" * 80}, headers=user_headers)

    assert response.status_code == 400
    stored = await db.users.find_one({"_id": user["_id"]})
    assert compare_password(PASSWORD, stored["password"])


async def test_update_profile_requires_login(client):
    response = await client.put(f"{AUTH}/profile", json={"name": "x"})

    assert response.status_code == 401


# -- Orders ---------------------------------------------------------------------

async def _insert_order(db, buyer, products, status="Not Process", age=0):
    created = datetime.utcnow() - timedelta(minutes=age)
    result = await db.orders.insert_one({
        "products": [p["_id"] for p in products],
        "payment": {"success": True, "transaction_id": "pi_test"},
        "buyer": buyer["_id"],
        "status": status,
        "created_at": created,
        "updated_at": created,
    })
    return result.inserted_id


async def test_orders_lists_only_own_orders_newest_first(client, db, user, admin, user_headers):
    category = await insert_category(db, "Books")
    book = await insert_product(db, category, "Novel", photo={"data": b"img", "content_type": "image/png"})
    older = await _insert_order(db, user, [book], age=10)
    newer = await _insert_order(db, user, [book], age=1)
    await _insert_order(db, admin, [book])

    response = await client.get(f"{AUTH}/orders", headers=user_headers)

    assert response.status_code == 200
    orders = response.json()
    assert [o["id"] for o in orders] == [str(newer), str(older)]
    assert orders[0]["buyer"]["name"] == "Alice Shopper"
    assert orders[0]["products"][0]["name"] == "Novel"
    assert orders[0]["products"][0]["has_photo"] is True


async def test_orders_skip_deleted_products(client, db, user, user_headers):
    category = await insert_category(db, "Books")
    kept = await insert_product(db, category, "Kept")
    gone = await insert_product(db, category, "Gone")
    await _insert_order(db, user, [kept, gone])
    await db.products.delete_one({"_id": gone["_id"]})

    response = await client.get(f"{AUTH}/orders", headers=user_headers)

    assert [p["name"] for p in response.json()[0]["products"]] == ["Kept"]


async def test_all_orders_admin_only(client, db, user, admin_headers, user_headers):
    await _insert_order(db, user, [])

    assert (await client.get(f"{AUTH}/all-orders", headers=user_headers)).status_code == 403

    response = await client.get(f"{AUTH}/all-orders", headers=admin_headers)
    assert response.status_code == 200
    assert len(response.json()) == 1


async def test_order_status_update_persists(client, db, user, admin_headers):
    order_id = await _insert_order(db, user, [])

    response = await client.put(
        f"{AUTH}/order-status/{order_id}",
        json={"status": "Processing"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "Processing"
    stored = await db.orders.find_one({"_id": order_id})
    assert stored["status"] == "Processing"


async def test_order_status_can_skip_ahead(client, db, user, admin_headers):
    order_id = await _insert_order(db, user, [])

    response = await client.put(
        f"{AUTH}/order-status/{order_id}",
        json={"status": "Shipped"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    stored = await db.orders.find_one({"_id": order_id})
    assert stored["status"] == "Shipped"


async def test_order_status_marks_shipped_order_delivered(client, db, user, admin_headers):
    order_id = await _insert_order(db, user, [], status="Shipped")

    response = await client.put(
        f"{AUTH}/order-status/{order_id}",
        json={"status": "deliverd"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "deliverd"
    stored = await db.orders.find_one({"_id": order_id})
    assert stored["status"] == "deliverd"


async def test_order_lists_include_final_orders(client, db, user, admin_headers):
    await _insert_order(db, user, [], status="cancel")
    await _insert_order(db, user, [], status="deliverd", age=5)

    response = await client.get(f"{AUTH}/all-orders", headers=admin_headers)

    assert response.status_code == 200
    assert [o["status"] for o in response.json()] == ["cancel", "deliverd"]


async def test_order_status_rejects_reopening_final_order(client, db, user, admin_headers):
    order_id = await _insert_order(db, user, [], status="cancel")

    response = await client.put(
        f"{AUTH}/order-status/{order_id}",
        json={"status": "Processing"},
        headers=admin_headers,
    )

    assert response.status_code == 409
    stored = await db.orders.find_one({"_id": order_id})
    assert stored["status"] == "cancel"


async def test_order_status_rejects_display_names(client, db, user, admin_headers):
    order_id = await _insert_order(db, user, [])

    response = await client.put(
        f"{AUTH}/order-status/{order_id}",
        json={"status": "Delivered"},
        headers=admin_headers,
    )

    assert response.status_code == 422


async def test_order_status_rejects_unknown_status(client, db, user, admin_headers):
    order_id = await _insert_order(db, user, [])

    response = await client.put(
        f"{AUTH}/order-status/{order_id}",
        json={"status": "Lost"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["message"] == "Validation error"


async def test_order_status_not_found_and_invalid_id(client, admin_headers):
    missing = await client.put(
        f"{AUTH}/order-status/{ObjectId()}", json={"status": "Processing"}, headers=admin_headers
    )
    invalid = await client.put(
        f"{AUTH}/order-status/not-an-id", json={"status": "Processing"}, headers=admin_headers
    )

    assert missing.status_code == 404
    assert invalid.status_code == 400


async def test_order_status_forbidden_for_user(client, db, user, user_headers):
    order_id = await _insert_order(db, user, [])

    response = await client.put(
        f"{AUTH}/order-status/{order_id}", json={"status": "Processing"}, headers=user_headers
    )

    assert response.status_code == 403


async def test_all_users_hides_secrets(client, user, admin_headers):
    response = await client.get(f"{AUTH}/all-users", headers=admin_headers)

    assert response.status_code == 200
    users = response.json()
    assert {u["email"] for u in users} == {"alice@mail.com", "admin@mail.com"}
    assert all("password" not in u and "answer" not in u for u in users)


async def test_second_user_cannot_be_admin_by_token_claims(client, db):
    user = await insert_user(db, "carol@mail.com")
    token = create_access_token({"sub": str(user["_id"]), "role": 1})

    response = await client.get(f"{AUTH}/admin-auth", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 403
