import httpx
import pytest

from shared.security import (
    ApiKeyAdminAuthenticator, api_key, create_access_token, create_admin_token, get_admin_authenticator,
    sign_attachment_key,
)
from shared.storage import get_storage
from services.order_service.main import order_app
from services.order_service.service import get_order_service

from conftest import JPEG_BYTES, ORDER_FIELDS, PNG_BYTES

ADMIN_HEADERS = {"Authorization": "Bearer " + create_admin_token("ops")}


@pytest.fixture
async def client(service, storage):
    order_app.dependency_overrides[get_order_service] = lambda: service
    order_app.dependency_overrides[get_storage] = lambda: storage
    transport = httpx.ASGITransport(app=order_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    order_app.dependency_overrides.clear()


async def submit(client, **overrides):
    data = {k: v for k, v in {**ORDER_FIELDS, **overrides}.items() if v is not None}
    files = {"screenshot": ("cart.png", PNG_BYTES, "image/png")}
    return await client.post("/", data=data, files=files)


async def test_submit_order(client):
    resp = await submit(client)

    assert resp.status_code == 201
    body = resp.json()
    assert body["orderId"].startswith("NB-")
    assert body["payment"]["reference"] == body["orderId"]
    assert body["payment"]["bankName"]


async def test_submit_order_validation_error(client):
    resp = await submit(client, email="nope")

    assert resp.status_code == 422
    assert "email" in resp.json()["detail"]


async def test_submit_order_rejects_non_image(client):
    resp = await client.post(
        "/", data=ORDER_FIELDS, files={"screenshot": ("cart.pdf", b"%PDF-1.4", "application/pdf")}
    )

    assert resp.status_code == 422
    assert resp.json()["detail"].startswith("Invalid file type")


async def test_submit_order_while_closed(client, service):
    await service.set_service_open(False)

    resp = await submit(client)

    assert resp.status_code == 503


async def test_payment_proof_and_status(client):
    order_id = (await submit(client)).json()["orderId"]

    status_before = await client.get(f"/{order_id}/status")
    assert status_before.json() == {
        "orderId": order_id, "state": "created", "hasPaymentProof": False, "isProcessed": False,
    }

    resp = await client.post(
        f"/{order_id}/payment-proof", files={"paymentProof": ("proof.jpg", JPEG_BYTES, "image/jpeg")}
    )
    assert resp.status_code == 200
    assert resp.json()["state"] == "proof_submitted"


async def test_unknown_order_is_404(client):
    assert (await client.get("/NB-1/status")).status_code == 404
    resp = await client.post("/NB-1/payment-proof", files={"paymentProof": ("p.png", PNG_BYTES, "image/png")})
    assert resp.status_code == 404


async def test_admin_routes_require_credentials(client):
    assert (await client.get("/admin/")).status_code == 401

    customer = {"Authorization": "Bearer " + create_access_token({"sub": "42"})}
    assert (await client.get("/admin/", headers=customer)).status_code == 403


async def test_admin_authenticator_is_replaceable(client):
    order_app.dependency_overrides[get_admin_authenticator] = lambda: ApiKeyAdminAuthenticator("k-123")

    assert (await client.get("/admin/", headers={"X-Admin-API-Key": "k-123"})).status_code == 200
    assert (await client.get("/admin/", headers={"X-Admin-API-Key": "wrong"})).status_code == 403


async def test_admin_lists_newest_first(client, clock):
    for created_at in (100, 300, 200):
        clock.now = created_at
        await submit(client)

    resp = await client.get("/admin/", headers=ADMIN_HEADERS)
    assert [o["createdAt"] for o in resp.json()] == [300, 200, 100]

    resp = await client.get("/admin/", params={"order": "asc"}, headers=ADMIN_HEADERS)
    assert [o["createdAt"] for o in resp.json()] == [100, 200, 300]


async def test_admin_process_flow(client):
    order_id = (await submit(client)).json()["orderId"]

    resp = await client.post(f"/admin/{order_id}/process", headers=ADMIN_HEADERS)
    assert resp.status_code == 409
    assert "payment proof" in resp.json()["detail"]

    await client.post(f"/{order_id}/payment-proof", files={"paymentProof": ("p.png", PNG_BYTES, "image/png")})

    for _ in range(2):
        resp = await client.post(f"/admin/{order_id}/process", headers=ADMIN_HEADERS)
        assert resp.status_code == 200
        assert resp.json()["isProcessed"] is True
        assert resp.json()["state"] == "processed"

    detail = (await client.get(f"/admin/{order_id}", headers=ADMIN_HEADERS)).json()
    assert detail["fullName"] == ORDER_FIELDS["fullName"]
    assert detail["paymentProof"]


async def test_admin_attachment_download(client):
    order_id = (await submit(client)).json()["orderId"]

    resp = await client.get(f"/admin/attachments/orders/attachments/{order_id}/screenshot", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert resp.content == PNG_BYTES
    assert resp.headers["content-type"] == "image/png"

    record = await client.get(f"/admin/attachments/orders/records/{order_id}.json", headers=ADMIN_HEADERS)
    assert record.status_code == 404


async def test_signed_attachment_link_needs_no_admin_headers(client):
    order_id = (await submit(client)).json()["orderId"]
    link = sign_attachment_key(f"orders/attachments/{order_id}/screenshot")

    resp = await client.get(f"/attachments/{link}")

    assert resp.status_code == 200
    assert resp.content == PNG_BYTES


async def test_invalid_attachment_links_are_404(client):
    order_id = (await submit(client)).json()["orderId"]
    record_link = sign_attachment_key(f"orders/records/{order_id}.json")
    admin_token = create_admin_token("ops")

    for link in ("not-a-link", record_link, admin_token):
        assert (await client.get(f"/attachments/{link}")).status_code == 404


async def test_storage_failure_is_503(client, storage):
    storage.fail("list")

    resp = await client.get("/admin/", headers=ADMIN_HEADERS)

    assert resp.status_code == 503


async def test_unconfigured_api_key_locks_admin_routes(client, monkeypatch):
    monkeypatch.setattr(api_key, "ADMIN_API_KEY", "")
    order_app.dependency_overrides[get_admin_authenticator] = lambda: ApiKeyAdminAuthenticator()

    resp = await client.get("/admin/", headers={"X-Admin-API-Key": "insecure-default-change-me"})

    assert resp.status_code == 403
