from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from breedline.infrastructure.db.orm.animal import AnimalORM

MATED_ON = "2025-02-01T08:00:00Z"
BORN_ON = "2025-03-04T06:00:00Z"


async def _mate(client, headers, seeded_farm, dams=("dam", "dam2")):
    response = await client.post(
        "/api/v1/reproduction/mating",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "sire_id": str(seeded_farm["sire"]),
            "dam_ids": [str(seeded_farm[d]) for d in dams],
            "mating_date": MATED_ON,
            "mating_type": "natural",
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


async def _succeed(client, headers, event_id):
    response = await client.patch(
        f"/api/v1/reproduction/mating/{event_id}/outcome",
        json={"outcome": "successful"},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_requests_require_a_bearer_token(client, seeded_farm):
    response = await client.get(
        "/api/v1/reproduction/mating", params={"farm_id": str(seeded_farm["farm"])}
    )
    assert response.status_code == 401
    assert response.json()["code"] == "auth_error"

    health = await client.get("/api/v1/health")
    assert health.status_code == 200


@pytest.mark.asyncio
async def test_other_users_cannot_touch_the_farm(client, seeded_farm, auth_headers):
    response = await client.post(
        "/api/v1/reproduction/mating",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "sire_id": str(seeded_farm["sire"]),
            "dam_ids": [str(seeded_farm["dam"])],
            "mating_date": MATED_ON,
        },
        headers=auth_headers(uuid4()),
    )
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


@pytest.mark.asyncio
async def test_mating_to_weaning_flow(client, seeded_farm, owner_id, auth_headers):
    headers = auth_headers(owner_id)
    event = await _mate(client, headers, seeded_farm)
    assert event["status"] == "planned"
    assert len(event["dam_ids"]) == 2

    outcome = await _succeed(client, headers, event["id"])
    assert outcome["mating_event"]["status"] == "completed"
    pregnancies = outcome["pregnancies"]
    assert len(pregnancies) == 2
    assert {p["expected_gestation_days"] for p in pregnancies} == {31}
    assert all(p["expected_delivery_date"].startswith("2025-03-04") for p in pregnancies)

    # Recording the same outcome again returns the existing pregnancies
    again = await _succeed(client, headers, event["id"])
    assert {p["id"] for p in again["pregnancies"]} == {p["id"] for p in pregnancies}

    pregnancy = next(p for p in pregnancies if p["dam_id"] == str(seeded_farm["dam"]))
    birth = await client.post(
        "/api/v1/reproduction/birth",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "pregnancy_id": pregnancy["id"],
            "dam_id": str(seeded_farm["dam"]),
            "sire_id": str(seeded_farm["sire"]),
            "birth_date": BORN_ON,
            "total_offspring": 4,
            "live_births": 3,
            "stillbirths": 1,
            "male_offspring": 1,
            "female_offspring": 2,
            "birth_weight_kg": 0.06,
        },
        headers=headers,
    )
    assert birth.status_code == 201, birth.text
    body = birth.json()
    assert [o["tag"] for o in body["offspring"]] == ["RAB25001", "RAB25002", "RAB25003"]
    assert body["birth_event"]["success_rate"] == 75.0
    assert body["birth_event"]["stillbirth_rate"] == 25.0

    delivered = await client.get(
        f"/api/v1/reproduction/pregnancy/{pregnancy['id']}", headers=headers
    )
    assert delivered.json()["status"] == "delivered"

    kit_id = body["offspring"][0]["id"]
    tracking = await client.get(
        f"/api/v1/reproduction/offspring/{kit_id}/tracking", headers=headers
    )
    assert tracking.status_code == 200
    assert tracking.json()["status"] == "alive"
    assert tracking.json()["snapshot"]["tag"] == "RAB25001"

    weaned = await client.post(
        f"/api/v1/reproduction/offspring/{kit_id}/wean",
        json={"weight_kg": 1.1},
        headers=headers,
    )
    assert weaned.json()["status"] == "weaned"

    sold = await client.post(
        f"/api/v1/reproduction/offspring/{kit_id}/sell",
        json={"price": 25.0, "buyer": "Market"},
        headers=headers,
    )
    assert sold.json()["status"] == "sold"
    assert sold.json()["sale"]["buyer"] == "Market"

    died = await client.post(
        f"/api/v1/reproduction/offspring/{kit_id}/death", json={}, headers=headers
    )
    assert died.status_code == 409
    assert died.json()["code"] == "already_terminal"

    litter = await client.get(
        "/api/v1/reproduction/offspring",
        params={"parent_id": str(seeded_farm["dam"]), "role": "dam"},
        headers=headers,
    )
    assert litter.json()["total"] == 3
    assert litter.json()["parent_tag"] == "DOE-1"


@pytest.mark.asyncio
async def test_second_mating_for_pregnant_dam_conflicts(
    client, seeded_farm, owner_id, auth_headers
):
    headers = auth_headers(owner_id)
    first = await _mate(client, headers, seeded_farm, dams=("dam",))
    second = await _mate(client, headers, seeded_farm, dams=("dam",))
    await _succeed(client, headers, first["id"])

    blocked = await client.post(
        "/api/v1/reproduction/mating",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "sire_id": str(seeded_farm["sire"]),
            "dam_ids": [str(seeded_farm["dam"])],
            "mating_date": MATED_ON,
        },
        headers=headers,
    )
    assert blocked.status_code == 409
    assert blocked.json()["code"] == "already_pregnant"

    response = await client.patch(
        f"/api/v1/reproduction/mating/{second['id']}/outcome",
        json={"outcome": "successful"},
        headers=headers,
    )
    assert response.status_code == 409
    assert response.json()["code"] == "already_pregnant"

    # The failed outcome was rolled back with the pregnancy
    stored = await client.get(
        f"/api/v1/reproduction/mating/{second['id']}", headers=headers
    )
    assert stored.json()["status"] == "planned"


@pytest.mark.asyncio
async def test_terminated_pregnancy_cannot_deliver(client, seeded_farm, owner_id, auth_headers):
    headers = auth_headers(owner_id)
    event = await _mate(client, headers, seeded_farm, dams=("dam2",))
    [pregnancy] = (await _succeed(client, headers, event["id"]))["pregnancies"]

    terminated = await client.patch(
        f"/api/v1/reproduction/pregnancy/{pregnancy['id']}/terminate",
        json={"status": "aborted", "reason": "accident"},
        headers=headers,
    )
    assert terminated.status_code == 200, terminated.text
    assert terminated.json()["status"] == "aborted"
    assert terminated.json()["termination_reason"] == "accident"

    birth = await client.post(
        "/api/v1/reproduction/birth",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "pregnancy_id": pregnancy["id"],
            "dam_id": str(seeded_farm["dam2"]),
            "sire_id": str(seeded_farm["sire"]),
            "birth_date": BORN_ON,
            "total_offspring": 1,
            "live_births": 1,
        },
        headers=headers,
    )
    assert birth.status_code == 409
    assert birth.json()["code"] == "invalid_transition"


@pytest.mark.asyncio
async def test_mating_rejects_wrong_sex_and_bad_counts(
    client, seeded_farm, owner_id, auth_headers
):
    headers = auth_headers(owner_id)
    response = await client.post(
        "/api/v1/reproduction/mating",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "sire_id": str(seeded_farm["dam"]),
            "dam_ids": [str(seeded_farm["dam2"])],
            "mating_date": MATED_ON,
        },
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_sex"

    empty = await client.post(
        "/api/v1/reproduction/mating",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "sire_id": str(seeded_farm["sire"]),
            "dam_ids": [],
            "mating_date": MATED_ON,
        },
        headers=headers,
    )
    assert empty.status_code == 422


@pytest.mark.asyncio
async def test_mating_list_statistics_and_delete(client, seeded_farm, owner_id, auth_headers):
    headers = auth_headers(owner_id)
    event = await _mate(client, headers, seeded_farm, dams=("dam",))

    listed = await client.get(
        "/api/v1/reproduction/mating",
        params={
            "farm_id": str(seeded_farm["farm"]),
            "animal_id": str(seeded_farm["dam"]),
            "role": "dam",
        },
        headers=headers,
    )
    assert listed.json()["total"] == 1

    stats = await client.get(
        "/api/v1/reproduction/mating/statistics",
        params={"farm_id": str(seeded_farm["farm"]), "period": "year"},
        headers=headers,
    )
    assert stats.status_code == 200

    deleted = await client.delete(
        f"/api/v1/reproduction/mating/{event['id']}", headers=headers
    )
    assert deleted.status_code == 204
    missing = await client.get(f"/api/v1/reproduction/mating/{event['id']}", headers=headers)
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_failed_litter_leaves_pregnancy_open(
    app, client, seeded_farm, owner_id, auth_headers
):
    headers = auth_headers(owner_id)
    # Holds the second kit's tag without counting towards this year's sequence
    async with app.state.session_factory() as session:
        session.add(
            AnimalORM(
                id=uuid4(),
                farm_id=seeded_farm["farm"],
                animal_type_id=seeded_farm["animal_type"],
                tag="RAB25002",
                gender="female",
                birth_date=date(2023, 6, 1),
                status="alive",
                is_active=True,
                health_status="good",
                version=1,
            )
        )
        await session.commit()

    event = await _mate(client, headers, seeded_farm, dams=("dam",))
    pregnancy = (await _succeed(client, headers, event["id"]))["pregnancies"][0]

    response = await client.post(
        "/api/v1/reproduction/birth",
        json={
            "farm_id": str(seeded_farm["farm"]),
            "pregnancy_id": pregnancy["id"],
            "dam_id": str(seeded_farm["dam"]),
            "sire_id": str(seeded_farm["sire"]),
            "birth_date": BORN_ON,
            "total_offspring": 3,
            "live_births": 3,
            "female_offspring": 3,
        },
        headers=headers,
    )
    assert response.status_code == 409, response.text
    assert response.json()["code"] == "conflict"

    current = await client.get(
        f"/api/v1/reproduction/pregnancy/{pregnancy['id']}", headers=headers
    )
    assert current.json()["status"] in {"confirmed", "progressing"}
    assert current.json()["actual_delivery_date"] is None

    births = await client.get(
        "/api/v1/reproduction/birth",
        params={"farm_id": str(seeded_farm["farm"])},
        headers=headers,
    )
    assert births.json()["total"] == 0

    litter = await client.get(
        "/api/v1/reproduction/offspring",
        params={"parent_id": str(seeded_farm["dam"]), "role": "dam"},
        headers=headers,
    )
    assert litter.json()["total"] == 0
