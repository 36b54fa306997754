import asyncio
import datetime as dt

import pytest

from backoffice.models.user import Role, User


pytestmark = pytest.mark.asyncio

LOGIN_URL = "/api/v1/auth/login"


async def login(client, email: str | None, password: str | None):
    body = {}
    if email is not None:
        body["email"] = email
    if password is not None:
        body["password"] = password
    return await client.post(LOGIN_URL, json=body)


async def test_successful_login_returns_token_and_sanitized_user(client, create_user):
    admin, password = await create_user()

    resp = await login(client, admin.email, password)
    body = resp.json()
    assert resp.status_code == 200
    assert body["status"] == "success"
    assert body["data"]["token"]
    assert body["data"]["user"] == {
        "id": str(admin.id),
        "email": admin.email,
        "role": "ADMIN",
        "firstName": admin.first_name,
        "lastName": admin.last_name,
    }
    assert "password" not in resp.text
    assert "password_hash" not in resp.text


async def test_issued_token_carries_principal(client, create_user, token_service):
    admin, password = await create_user()
    resp = await login(client, admin.email, password)
    principal = token_service.verify(resp.json()["data"]["token"])
    assert principal.id == str(admin.id)
    assert principal.role == "ADMIN"


@pytest.mark.parametrize("email,password", [(None, "x"), ("a@example.com", None), ("", ""), (None, None)])
async def test_missing_fields_are_rejected(client, email, password):
    resp = await login(client, email, password)
    assert resp.status_code == 400
    assert resp.json() == {"status": "error", "message": "Email and password are required"}


async def test_unknown_email_and_wrong_password_are_indistinguishable(client, create_user):
    admin, _ = await create_user()

    unknown = await login(client, "nobody@example.com", "whatever123")
    wrong = await login(client, admin.email, "WrongPass!99")

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json() == {"status": "error", "message": "Invalid credentials"}


async def test_non_admin_is_refused_without_touching_login_stats(client, create_user):
    editor, password = await create_user(role=Role.EDITOR)

    resp = await login(client, editor.email, password)
    assert resp.status_code == 403
    assert resp.json()["message"] == "Access denied. Admins only."

    await editor.refresh_from_db()
    assert editor.login_count == 0
    assert editor.last_login_at is None


async def test_non_admin_with_wrong_password_gets_401(client, create_user):
    editor, _ = await create_user(role=Role.EDITOR)
    resp = await login(client, editor.email, "WrongPass!99")
    assert resp.status_code == 401


async def test_deactivated_admin_cannot_log_in(client, create_user):
    admin, password = await create_user(is_active=False)

    resp = await login(client, admin.email, password)
    assert resp.status_code == 401
    assert resp.json() == {"status": "error", "message": "Invalid credentials"}
    assert "token" not in resp.text

    await admin.refresh_from_db()
    assert admin.login_count == 0
    assert admin.last_login_at is None


async def test_login_increments_counter_and_refreshes_timestamp(client, create_user):
    admin, password = await create_user()

    before = dt.datetime.now(dt.timezone.utc).replace(microsecond=0)
    assert (await login(client, admin.email, password)).status_code == 200
    await admin.refresh_from_db()
    assert admin.login_count == 1
    first_login = admin.last_login_at
    assert first_login >= before

    assert (await login(client, admin.email, password)).status_code == 200
    await admin.refresh_from_db()
    assert admin.login_count == 2
    assert admin.last_login_at >= first_login


async def test_failed_logins_do_not_count(client, create_user):
    admin, _ = await create_user()
    await login(client, admin.email, "WrongPass!99")
    await admin.refresh_from_db()
    assert admin.login_count == 0


async def test_concurrent_logins_are_all_counted(client, create_user):
    admin, password = await create_user()

    responses = await asyncio.gather(*[login(client, admin.email, password) for _ in range(5)])
    assert all(r.status_code == 200 for r in responses)

    stored = await User.get(id=admin.id)
    assert stored.login_count == 5


async def test_login_fails_when_stats_write_fails(client, create_user, monkeypatch):
    admin, password = await create_user()

    async def broken_record_login(user):
        raise RuntimeError("database unavailable")

    from backoffice.api.v1.routers import auth as auth_router

    monkeypatch.setattr(auth_router, "_record_login", broken_record_login)
    resp = await login(client, admin.email, password)

    assert resp.status_code == 500
    assert resp.json() == {"status": "error", "message": "Internal server error during login"}
    assert "token" not in resp.text


async def test_malformed_body_is_a_400(client):
    resp = await client.post(LOGIN_URL, content=b"not json", headers={"Content-Type": "application/json"})
    assert resp.status_code == 400
    assert resp.json()["status"] == "error"


async def test_root_reports_running(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "success"
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
