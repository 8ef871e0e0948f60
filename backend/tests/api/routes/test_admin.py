"""Tests for admin routes (routes/admin.py) against mock data."""

from __future__ import annotations

import pytest
from httpx import AsyncClient


@pytest.mark.anyio
async def test_list_customers_with_search(client: AsyncClient, admin_headers):
    response = await client.get("/api/v1/admin/customers", params={"search": "mehta"}, headers=admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["totalElements"] == 1
    assert data["content"][0]["customerId"] == 1003


@pytest.mark.anyio
async def test_admin_routes_need_admin_token(client: AsyncClient, customer_headers):
    anonymous = await client.get("/api/v1/admin/customers")
    customer = await client.get("/api/v1/admin/customers", headers=customer_headers)

    assert anonymous.status_code == 401
    assert customer.status_code == 403
    assert customer.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.anyio
async def test_customer_details(client: AsyncClient, admin_headers):
    data = (await client.get("/api/v1/admin/customers/1002", headers=admin_headers)).json()
    assert data["kycStatus"] == "PENDING"
    assert len(data["kycDocuments"]) == 2


@pytest.mark.anyio
async def test_unknown_customer_is_404(client: AsyncClient, admin_headers):
    response = await client.get("/api/v1/admin/customers/4242", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


@pytest.mark.anyio
async def test_kyc_review_flow(client: AsyncClient, admin_headers):
    pending = (await client.get("/api/v1/admin/kyc/pending", headers=admin_headers)).json()
    assert {d["documentId"] for d in pending["content"]} == {4003, 4004}

    for document_id in (4003, 4004):
        response = await client.post(
            f"/api/v1/admin/kyc/documents/{document_id}/verify",
            json={"status": "VERIFIED", "notes": "Matches records"},
            headers=admin_headers,
        )
        assert response.status_code == 200

    stats = (await client.get("/api/v1/admin/kyc/statistics", headers=admin_headers)).json()
    assert stats["pendingDocuments"] == 0
    assert stats["verifiedDocuments"] == 4
    assert stats["customersPendingReview"] == 0

    details = (await client.get("/api/v1/admin/customers/1002", headers=admin_headers)).json()
    assert details["kycStatus"] == "VERIFIED"


@pytest.mark.anyio
async def test_customer_kyc_details(client: AsyncClient, admin_headers):
    data = (await client.get("/api/v1/admin/kyc/customers/1002", headers=admin_headers)).json()
    assert data["customerName"] == "Priya Sharma"
    assert data["hasAadharDocument"] is True
    assert data["hasPanDocument"] is True
    assert {d["documentId"] for d in data["documents"]} == {4003, 4004}


@pytest.mark.anyio
async def test_view_kyc_document_inline(client: AsyncClient, admin_headers):
    response = await client.get(
        "/api/v1/admin/kyc/documents/4004/file", params={"type": "pan"}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'inline; filename="pan_priya.png"'
    assert b"PAN" in response.content


@pytest.mark.anyio
async def test_view_kyc_document_type_is_validated(client: AsyncClient, admin_headers):
    wrong_type = await client.get("/api/v1/admin/kyc/documents/4004/file", headers=admin_headers)
    unknown_type = await client.get(
        "/api/v1/admin/kyc/documents/4004/file", params={"type": "passport"}, headers=admin_headers
    )

    assert wrong_type.status_code == 404
    assert unknown_type.status_code == 422


@pytest.mark.anyio
async def test_invalid_document_decision(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/admin/kyc/documents/4003/verify",
        json={"status": "MAYBE"},
        headers=admin_headers,
    )
    assert response.status_code == 400


@pytest.mark.anyio
async def test_update_kyc_status(client: AsyncClient, admin_headers):
    response = await client.put(
        "/api/v1/admin/customers/1003/kyc-status",
        json={"status": "UNDER_REVIEW", "notes": "Re-submitted documents"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["kycStatus"] == "UNDER_REVIEW"


@pytest.mark.anyio
async def test_support_queue(client: AsyncClient, admin_headers):
    data = (await client.get("/api/v1/admin/support/tickets", headers=admin_headers)).json()
    assert data["totalElements"] == 4
    assert data["content"][0]["ticketId"] == 5002

    closed = (
        await client.get("/api/v1/admin/support/tickets", params={"status": "CLOSED"}, headers=admin_headers)
    ).json()
    assert [t["ticketId"] for t in closed["content"]] == [5004]
