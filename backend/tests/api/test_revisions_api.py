import uuid
from datetime import datetime, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from app.models.enums import RevisionStatus
from app.models.revision import Revision

PUBLIC_FIELDS = {"id", "field", "old_value", "new_value", "status", "reference", "reference_id", "created_at"}


async def _revision_count(session_maker) -> int:
    async with session_maker() as session:
        return (await session.execute(select(func.count()).select_from(Revision))).scalar_one()


def _payload(owner_id, changes=None, **overrides):
    body = {
        "reference": "plants",
        "reference_id": "42",
        "owner_id": str(owner_id),
        "changes": {"color": "red", "height": "10cm"} if changes is None else changes,
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_create_revisions_from_trusted_origin(client: AsyncClient, plant, trusted_headers):
    owner_id = uuid.uuid4()
    response = await client.post("/api/v1/revisions", json=_payload(owner_id), headers=trusted_headers)

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    by_field = {item["field"]: item for item in data}
    assert by_field["color"]["old_value"] == "green"
    assert by_field["color"]["new_value"] == "red"
    assert by_field["height"]["old_value"] is None
    assert by_field["height"]["new_value"] == "10cm"
    for item in data:
        assert item["status"] == RevisionStatus.PENDING.value
        assert item["owner_id"] == str(owner_id)
        assert item["reference"] == "plants"
        assert item["reference_id"] == "42"
        assert item["id"]
        assert item["created_at"]


@pytest.mark.asyncio
async def test_numeric_reference_id_is_accepted(client, plant, trusted_headers):
    response = await client.post(
        "/api/v1/revisions",
        json=_payload(uuid.uuid4(), {"color": "red"}, reference_id=42),
        headers=trusted_headers,
    )
    assert response.status_code == 200
    assert response.json()[0]["reference_id"] == "42"


@pytest.mark.asyncio
async def test_referer_is_used_when_origin_is_missing(client, plant):
    response = await client.post(
        "/api/v1/revisions",
        json=_payload(uuid.uuid4()),
        headers={"Referer": "http://wiki.test/wiki/42#edit"},
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_create_from_public_origin_is_forbidden(client, plant, public_headers, session_maker):
    response = await client.post("/api/v1/revisions", json=_payload(uuid.uuid4()), headers=public_headers)

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden", "message": "Forbidden"}
    assert await _revision_count(session_maker) == 0


@pytest.mark.asyncio
async def test_create_without_origin_is_forbidden(client, plant):
    response = await client.post("/api/v1/revisions", json=_payload(uuid.uuid4()))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_untrusted_check_comes_before_validation(client, public_headers):
    response = await client.post(
        "/api/v1/revisions",
        json=_payload(uuid.uuid4(), reference=None),
        headers=public_headers,
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_untrusted_malformed_body_is_forbidden(client, public_headers, session_maker):
    body = _payload(uuid.uuid4(), changes="x")
    del body["owner_id"]

    response = await client.post("/api/v1/revisions", json=body, headers=public_headers)

    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden", "message": "Forbidden"}
    assert await _revision_count(session_maker) == 0


@pytest.mark.asyncio
async def test_untrusted_empty_body_is_forbidden(client, public_headers):
    response = await client.post("/api/v1/revisions", json={}, headers=public_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("overrides", [{"reference": None}, {"reference_id": ""}, {"changes": {}}])
async def test_create_bad_request(client, plant, trusted_headers, overrides):
    response = await client.post(
        "/api/v1/revisions",
        json=_payload(uuid.uuid4(), **overrides),
        headers=trusted_headers,
    )
    assert response.status_code == 400
    assert response.json() == {"error": "BadRequest", "message": "Bad Request"}


@pytest.mark.asyncio
async def test_malformed_body_is_bad_request(client, trusted_headers):
    response = await client.post(
        "/api/v1/revisions",
        json={"reference": "plants", "reference_id": "42", "owner_id": "not-a-uuid", "changes": {}},
        headers=trusted_headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == "BadRequest"


@pytest.mark.asyncio
async def test_create_unknown_reference_type(client, trusted_headers):
    response = await client.post(
        "/api/v1/revisions",
        json=_payload(uuid.uuid4(), reference="animals"),
        headers=trusted_headers,
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_create_for_missing_plant(client, plant, trusted_headers, session_maker):
    response = await client.post(
        "/api/v1/revisions",
        json=_payload(uuid.uuid4(), reference_id="999"),
        headers=trusted_headers,
    )
    assert response.status_code == 404
    assert response.json() == {"error": "NotFound", "message": "Not Found"}
    assert await _revision_count(session_maker) == 0


@pytest.mark.asyncio
async def test_list_public_projection(client, plant, trusted_headers, public_headers):
    await client.post("/api/v1/revisions", json=_payload(uuid.uuid4()), headers=trusted_headers)

    response = await client.get(
        "/api/v1/revisions",
        params={"reference": "plants", "reference_id": "42"},
        headers=public_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    for item in data:
        assert set(item) == PUBLIC_FIELDS


@pytest.mark.asyncio
async def test_list_trusted_includes_owner(client, plant, owner, trusted_headers):
    await client.post("/api/v1/revisions", json=_payload(owner.id), headers=trusted_headers)

    response = await client.get(
        "/api/v1/revisions",
        params={"reference": "plants", "reference_id": "42"},
        headers=trusted_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 2
    for item in data:
        assert item["owner_id"] == str(owner.id)
        assert item["approved_on"] is None
        assert item["rejected_on"] is None
        assert item["owner"]["username"] == "gardener"


@pytest.mark.asyncio
async def test_list_empty(client, public_headers):
    response = await client.get(
        "/api/v1/revisions",
        params={"reference": "plants", "reference_id": "1"},
        headers=public_headers,
    )
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{}, {"reference": "plants"}, {"reference_id": "42"}])
async def test_list_requires_both_keys(client, public_headers, params):
    response = await client.get("/api/v1/revisions", params=params, headers=public_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_history_groups_by_day(client, plant, async_session, trusted_headers, public_headers):
    owner_id = uuid.uuid4()
    async_session.add_all([
        Revision(
            field="color", old_value="green", new_value="red", owner_id=owner_id,
            reference="plants", reference_id="42",
            created_at=datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc),
        ),
        Revision(
            field="height", old_value=None, new_value="10cm", owner_id=owner_id,
            status=RevisionStatus.APPROVED, reference="plants", reference_id="42",
            created_at=datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc),
            approved_on=datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc),
        ),
        Revision(
            field="name", old_value="Mint", new_value="Spearmint", owner_id=owner_id,
            reference="plants", reference_id="42",
            created_at=datetime(2024, 3, 1, 23, 0, tzinfo=timezone.utc),
        ),
    ])
    await async_session.commit()

    params = {"reference": "plants", "reference_id": "42"}
    response = await client.get("/api/v1/revisions/history", params=params, headers=trusted_headers)

    assert response.status_code == 200
    data = response.json()
    assert list(data) == ["2024-03-01", "2024-03-05"]
    assert [item["field"] for item in data["2024-03-01"]] == ["color", "name"]
    assert [item["field"] for item in data["2024-03-05"]] == ["height"]

    # Public callers never see approved_on, so only the creation day is available
    response = await client.get("/api/v1/revisions/history", params=params, headers=public_headers)
    data = response.json()
    assert list(data) == ["2024-03-01"]
    assert [item["field"] for item in data["2024-03-01"]] == ["color", "height", "name"]
    assert "approved_on" not in data["2024-03-01"][1]


@pytest.mark.asyncio
async def test_history_requires_both_keys(client):
    response = await client.get("/api/v1/revisions/history", params={"reference": "plants"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_padded_reference_id_is_listed_under_canonical_id(client, plant, trusted_headers):
    created = await client.post(
        "/api/v1/revisions",
        json=_payload(uuid.uuid4(), {"color": "red"}, reference_id="042"),
        headers=trusted_headers,
    )
    assert created.status_code == 200
    assert created.json()[0]["reference_id"] == "42"

    response = await client.get(
        "/api/v1/revisions",
        params={"reference": "plants", "reference_id": "42"},
        headers=trusted_headers,
    )
    assert [item["new_value"] for item in response.json()] == ["red"]
