from __future__ import annotations

from uuid import uuid4

import pytest


@pytest.mark.asyncio
async def test_profile_is_built_once_and_cached(client, seeded_farm, owner_id, auth_headers):
    headers = auth_headers(owner_id)
    url = f"/api/v1/genetics/animal/{seeded_farm['dam']}"

    first = await client.get(url, headers=headers)
    assert first.status_code == 200, first.text
    profile = first.json()
    assert profile["animal_id"] == str(seeded_farm["dam"])
    assert profile["breeding_profile"]["is_breeder"] is True
    assert profile["breeding_profile"]["eligibility"] == "eligible"
    assert profile["traits"]["growth_rate"] == 5

    cached = await client.get(url, headers=headers)
    assert cached.json()["computed_at"] == profile["computed_at"]

    refreshed = await client.get(url, params={"force_refresh": "true"}, headers=headers)
    assert refreshed.json()["id"] == profile["id"]
    assert refreshed.json()["computed_at"] >= profile["computed_at"]


@pytest.mark.asyncio
async def test_profile_of_unknown_animal(client, seeded_farm, owner_id, auth_headers):
    response = await client.get(
        f"/api/v1/genetics/animal/{uuid4()}", headers=auth_headers(owner_id)
    )
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


@pytest.mark.asyncio
async def test_unrelated_pair_is_compatible(client, seeded_farm, owner_id, auth_headers):
    headers = auth_headers(owner_id)
    response = await client.get(
        f"/api/v1/genetics/compatibility/{seeded_farm['sire']}/{seeded_farm['dam']}",
        headers=headers,
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["result"]["can_breed"] is True
    assert body["result"]["risk_level"] == "low"
    assert 0 <= body["result"]["compatibility_score"] <= 100
    assert body["risk"]["risk_level"] == "low"

    risk = await client.get(
        f"/api/v1/genetics/inbreeding-risk/{seeded_farm['dam']}/{seeded_farm['sire']}",
        headers=headers,
    )
    assert risk.json()["can_breed"] is True

    itself = await client.get(
        f"/api/v1/genetics/compatibility/{seeded_farm['sire']}/{seeded_farm['sire']}",
        headers=headers,
    )
    assert itself.status_code == 422


@pytest.mark.asyncio
async def test_farm_views_after_batch_compute(client, seeded_farm, owner_id, auth_headers):
    headers = auth_headers(owner_id)
    farm_id = seeded_farm["farm"]

    batch = await client.post(f"/api/v1/genetics/farm/{farm_id}/batch-compute", headers=headers)
    assert batch.status_code == 200, batch.text
    assert batch.json()["total_animals"] == 3
    assert batch.json()["processed"] == 3
    assert batch.json()["failed"] == 0

    suggestions = await client.get(
        f"/api/v1/genetics/farm/{farm_id}/pair-suggestions",
        params={"min_compatibility": 0, "limit": 10},
        headers=headers,
    )
    pairs = {(s["sire_id"], s["dam_id"]) for s in suggestions.json()}
    assert pairs == {
        (str(seeded_farm["sire"]), str(seeded_farm["dam"])),
        (str(seeded_farm["sire"]), str(seeded_farm["dam2"])),
    }

    top = await client.get(f"/api/v1/genetics/farm/{farm_id}/top-breeders", headers=headers)
    assert len(top.json()) == 3

    dashboard = await client.get(f"/api/v1/genetics/farm/{farm_id}/dashboard", headers=headers)
    assert dashboard.status_code == 200
    assert dashboard.json()["total_profiles"] == 3
    assert dashboard.json()["genetic_diversity_score"] == 100


@pytest.mark.asyncio
async def test_pedigree_depth_is_bounded(client, seeded_farm, owner_id, auth_headers):
    headers = auth_headers(owner_id)
    url = f"/api/v1/genetics/animal/{seeded_farm['sire']}/pedigree"

    response = await client.get(url, params={"depth": 2}, headers=headers)
    assert response.status_code == 200
    assert response.json()["tree"]["tag"] == "BUCK-1"
    assert response.json()["tree"]["sire"] is None
    assert response.json()["generations"] == 0

    too_deep = await client.get(url, params={"depth": 9}, headers=headers)
    assert too_deep.status_code == 422


@pytest.mark.asyncio
async def test_farm_views_are_owner_only(client, seeded_farm, auth_headers):
    response = await client.get(
        f"/api/v1/genetics/farm/{seeded_farm['farm']}/dashboard",
        headers=auth_headers(uuid4()),
    )
    assert response.status_code == 403
