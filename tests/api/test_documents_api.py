"""HTTP tests for document type and document endpoints (in-memory services)."""

from httpx import AsyncClient

ADMIN = {"X-User-ID": "u-admin"}
CLERK = {"X-User-ID": "u-clerk"}

WO_TYPE = {
    "code": "WO",
    "name": "Work Order",
    "category": "maintenance",
    "status_flow": {
        "initialStatus": "draft",
        "statuses": [
            {"key": "draft", "label": "Draft"},
            {"key": "submitted", "label": "Submitted"},
            {"key": "approved", "label": "Approved"},
        ],
        "transitions": {"draft": ["submitted"], "submitted": ["approved", "draft"]},
    },
    "approval_config": {
        "levels": [{"role": "manager", "level": 1}, {"role": "director", "level": 2}]
    },
    "visible_to_roles": ["manager", "clerk"],
}


async def _create_wo_type(client: AsyncClient) -> dict:
    r = await client.post("/api/v1/document-types", json=WO_TYPE, headers=ADMIN)
    assert r.status_code == 201, r.text
    doc_type = r.json()
    r = await client.post(
        f"/api/v1/document-types/{doc_type['id']}/fields",
        json={"field_key": "title", "label": "Title", "field_type": "text", "is_required": True},
        headers=ADMIN,
    )
    assert r.status_code == 201, r.text
    return doc_type


class TestDocumentTypesApi:
    async def test_create_and_fetch_by_code(self, api_client: AsyncClient) -> None:
        created = await _create_wo_type(api_client)
        assert created["version"] == 1
        assert created["status_flow"]["initialStatus"] == "draft"

        r = await api_client.get("/api/v1/document-types/by-code/WO")
        assert r.status_code == 200
        body = r.json()
        assert [f["field_key"] for f in body["fields"]] == ["title"]
        assert body["approval_config"]["levels"][1]["role"] == "director"

    async def test_create_requires_actor(self, api_client: AsyncClient) -> None:
        r = await api_client.post("/api/v1/document-types", json=WO_TYPE)
        assert r.status_code == 401
        assert r.json()["message"] == "Missing X-User-ID header"

    async def test_invalid_flow_is_400(self, api_client: AsyncClient) -> None:
        bad = {**WO_TYPE, "status_flow": {"initialStatus": "draft", "statuses": []}}
        r = await api_client.post("/api/v1/document-types", json=bad, headers=ADMIN)
        assert r.status_code == 400
        assert r.json()["error"] == "VALIDATION_ERROR"

    async def test_duplicate_code_is_409(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        r = await api_client.post("/api/v1/document-types", json=WO_TYPE, headers=ADMIN)
        assert r.status_code == 409
        assert r.json()["details"]["rule"] == "duplicate_code"

    async def test_patch_null_clears_approval(self, api_client: AsyncClient) -> None:
        created = await _create_wo_type(api_client)
        r = await api_client.patch(
            f"/api/v1/document-types/{created['id']}",
            json={"approval_config": None},
            headers=ADMIN,
        )
        assert r.status_code == 200
        assert r.json()["approval_config"] is None
        assert r.json()["name"] == "Work Order"
        assert r.json()["version"] == 2

    async def test_active_types_need_role(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        r = await api_client.get("/api/v1/document-types/active")
        assert r.status_code == 400
        r = await api_client.get("/api/v1/document-types/active", params={"role": "clerk"})
        assert [t["code"] for t in r.json()] == ["WO"]
        r = await api_client.get(
            "/api/v1/document-types/active", headers={"X-User-Role": "auditor"}
        )
        assert r.json() == []

    async def test_list_includes_counts(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        r = await api_client.get("/api/v1/document-types", params={"search": "work"})
        assert r.status_code == 200
        body = r.json()
        assert body["total"] == 1
        assert body["items"][0]["field_count"] == 1
        assert body["items"][0]["document_count"] == 0

    async def test_unknown_type_is_404(self, api_client: AsyncClient) -> None:
        r = await api_client.get("/api/v1/document-types/missing")
        assert r.status_code == 404
        assert r.json()["error"] == "RESOURCE_NOT_FOUND"


class TestDocumentsApi:
    async def test_create_returns_number_and_etag(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        r = await api_client.post(
            "/api/v1/documents/WO", json={"data": {"title": "Fix pump"}}, headers=CLERK
        )
        assert r.status_code == 201, r.text
        body = r.json()
        assert body["document_number"] == "WO-2026-0001"
        assert body["status"] == "draft"
        assert r.headers["ETag"] == '"1"'

    async def test_validation_errors_are_422(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        r = await api_client.post("/api/v1/documents/WO", json={"data": {}}, headers=CLERK)
        assert r.status_code == 422
        body = r.json()
        assert body["error"] == "DOCUMENT_VALIDATION_FAILED"
        assert body["details"]["errors"] == [{"field": "title", "message": "Title is required"}]

    async def test_approval_flow_over_http(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        doc = (
            await api_client.post(
                "/api/v1/documents/WO", json={"data": {"title": "Fix pump"}}, headers=CLERK
            )
        ).json()
        base = f"/api/v1/documents/WO/{doc['id']}"

        r = await api_client.post(
            f"{base}/transition", json={"to_status": "submitted"}, headers=CLERK
        )
        assert r.status_code == 200, r.text
        assert r.json()["status"] == "submitted"

        r = await api_client.post(
            f"{base}/transition", json={"to_status": "approved"}, headers=CLERK
        )
        assert r.status_code == 409
        assert r.json()["details"]["pending_levels"] == [1, 2]

        r = await api_client.post(f"{base}/approve", json={}, headers={"X-User-ID": "u-manager"})
        assert r.status_code == 200
        assert r.json()["remaining_levels"] == 1

        r = await api_client.post(
            f"{base}/approve", json={"notes": "ok"}, headers={"X-User-ID": "u-director"}
        )
        assert r.json()["all_approved"] is True

        r = await api_client.post(
            f"{base}/transition", json={"to_status": "approved"}, headers=CLERK
        )
        assert r.status_code == 200

        r = await api_client.get(base)
        detail = r.json()
        assert detail["status"] == "approved"
        assert detail["document_type"]["code"] == "WO"
        assert [s["status"] for s in detail["approval_steps"]] == ["approved", "approved"]
        assert detail["history"][-1]["comment"] == "Document created"
        assert r.headers["ETag"] == '"3"'

        r = await api_client.get(f"{base}/history")
        assert len(r.json()) == 5

    async def test_rejection_closes_chain_over_http(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        doc = (
            await api_client.post(
                "/api/v1/documents/WO", json={"data": {"title": "Fix pump"}}, headers=CLERK
            )
        ).json()
        base = f"/api/v1/documents/WO/{doc['id']}"
        await api_client.post(f"{base}/transition", json={"to_status": "submitted"}, headers=CLERK)

        r = await api_client.post(
            f"{base}/reject", json={"notes": "No quote"}, headers={"X-User-ID": "u-manager"}
        )
        assert r.status_code == 200, r.text
        body = r.json()
        assert body["rejected"] is True
        assert [s["status"] for s in body["steps"]] == ["rejected", "skipped"]

        r = await api_client.post(f"{base}/approve", json={}, headers={"X-User-ID": "u-director"})
        assert r.status_code == 409
        assert r.json()["details"]["rule"] == "chain_rejected"

        r = await api_client.post(
            f"{base}/transition", json={"to_status": "approved"}, headers=CLERK
        )
        assert r.status_code == 409
        assert r.json()["details"]["rule"] == "chain_rejected"

    async def test_stale_if_match_is_409(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        doc = (
            await api_client.post(
                "/api/v1/documents/WO", json={"data": {"title": "Fix pump"}}, headers=CLERK
            )
        ).json()
        r = await api_client.patch(
            f"/api/v1/documents/WO/{doc['id']}",
            json={"data": {"title": "Fix pump now"}},
            headers={**CLERK, "If-Match": '"1"'},
        )
        assert r.status_code == 200, r.text
        assert r.headers["ETag"] == '"2"'

        r = await api_client.patch(
            f"/api/v1/documents/WO/{doc['id']}",
            json={"data": {"title": "Too late"}},
            headers={**CLERK, "If-Match": '"1"'},
        )
        assert r.status_code == 409
        assert r.json()["error"] == "DOCUMENT_VERSION_CONFLICT"

    async def test_unauthorized_approver_is_409(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        doc = (
            await api_client.post(
                "/api/v1/documents/WO", json={"data": {"title": "Fix pump"}}, headers=CLERK
            )
        ).json()
        r = await api_client.post(
            f"/api/v1/documents/WO/{doc['id']}/approve", json={}, headers=CLERK
        )
        assert r.status_code == 409
        assert r.json()["details"]["rule"] == "not_authorized"

    async def test_list_and_unknown_document(self, api_client: AsyncClient) -> None:
        await _create_wo_type(api_client)
        for title in ("a", "b"):
            await api_client.post(
                "/api/v1/documents/WO", json={"data": {"title": title}}, headers=CLERK
            )
        r = await api_client.get("/api/v1/documents/WO", params={"search": "0002"})
        assert r.json()["total"] == 1
        r = await api_client.get("/api/v1/documents/WO/missing")
        assert r.status_code == 404
