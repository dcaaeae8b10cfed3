from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from breedline.application.errors import (
    AlreadyPregnant,
    ImmutableFieldChange,
    InvalidTransition,
    ValidationError,
)
from breedline.application.use_cases.mating import record_mating, record_outcome
from breedline.application.use_cases.pregnancy import (
    create_pregnancy,
    get_pregnancy,
    pregnancy_alerts,
    record_checkup,
    record_complication,
    terminate_pregnancy,
    update_pregnancy,
)

CONCEIVED = datetime(2025, 2, 1, tzinfo=timezone.utc)


async def _mating(uow, owner_id, farm, sire, dams, outcome=None):
    event = await record_mating.execute(
        uow,
        owner_id,
        record_mating.RecordMatingInput(
            farm_id=farm.id,
            sire_id=sire.id,
            mating_date=CONCEIVED,
            dam_ids=[d.id for d in dams],
        ),
    )
    if outcome:
        result = await record_outcome.execute(
            uow,
            owner_id,
            event.id,
            record_outcome.RecordOutcomeInput(outcome=outcome),
            now=CONCEIVED,
        )
        return event, result.pregnancies
    return event, []


async def test_manual_pregnancy_marks_dam_pregnant(uow, owner_id, farm, breeding_trio):
    sire, dam_a, _ = breeding_trio
    event, _ = await _mating(uow, owner_id, farm, sire, [dam_a])

    pregnancy = await create_pregnancy.execute(
        uow,
        owner_id,
        create_pregnancy.CreatePregnancyInput(
            farm_id=farm.id,
            dam_id=dam_a.id,
            sire_id=sire.id,
            mating_event_id=event.id,
            conception_date=CONCEIVED,
            expected_gestation_days=33,
        ),
        now=CONCEIVED,
    )

    assert pregnancy.expected_delivery_date == CONCEIVED + timedelta(days=33)
    assert uow.animals.rows[dam_a.id].reproductive_status == "pregnant"


async def test_manual_pregnancy_requires_matching_parties(uow, owner_id, farm, breeding_trio):
    sire, dam_a, dam_b = breeding_trio
    event, _ = await _mating(uow, owner_id, farm, sire, [dam_a])

    with pytest.raises(ValidationError):
        await create_pregnancy.execute(
            uow,
            owner_id,
            create_pregnancy.CreatePregnancyInput(
                farm_id=farm.id,
                dam_id=dam_b.id,
                sire_id=sire.id,
                mating_event_id=event.id,
                conception_date=CONCEIVED,
            ),
        )


async def test_second_active_pregnancy_is_rejected(uow, owner_id, farm, breeding_trio):
    sire, dam_a, _ = breeding_trio
    event, pregnancies = await _mating(uow, owner_id, farm, sire, [dam_a], outcome="successful")
    assert len(pregnancies) == 1

    with pytest.raises(AlreadyPregnant):
        await create_pregnancy.execute(
            uow,
            owner_id,
            create_pregnancy.CreatePregnancyInput(
                farm_id=farm.id,
                dam_id=dam_a.id,
                sire_id=sire.id,
                mating_event_id=event.id,
                conception_date=CONCEIVED,
            ),
        )


async def test_status_advances_to_progressing_on_read(uow, owner_id, farm, breeding_trio):
    sire, dam_a, _ = breeding_trio
    _, [pregnancy] = await _mating(uow, owner_id, farm, sire, [dam_a], outcome="successful")

    early = await get_pregnancy.execute(
        uow, owner_id, pregnancy.id, now=CONCEIVED + timedelta(days=7)
    )
    later = await get_pregnancy.execute(
        uow, owner_id, pregnancy.id, now=CONCEIVED + timedelta(days=8)
    )

    assert early.status == "confirmed"
    assert later.status == "progressing"
    assert later.days_pregnant(CONCEIVED + timedelta(days=8)) == 8


async def test_terminate_reopens_dam_and_is_final(uow, owner_id, farm, breeding_trio):
    sire, dam_a, _ = breeding_trio
    _, [pregnancy] = await _mating(uow, owner_id, farm, sire, [dam_a], outcome="successful")
    uow.animals.rows[dam_a.id].reproductive_status = "pregnant"

    terminated = await terminate_pregnancy.execute(
        uow,
        owner_id,
        pregnancy.id,
        terminate_pregnancy.TerminatePregnancyInput(status="aborted", reason="medical"),
        now=CONCEIVED + timedelta(days=10),
    )

    assert terminated.status == "aborted"
    assert terminated.abortion_date == CONCEIVED + timedelta(days=10)
    assert terminated.termination_reason == "medical"
    assert uow.animals.rows[dam_a.id].reproductive_status == "open"

    with pytest.raises(InvalidTransition):
        await terminate_pregnancy.execute(
            uow,
            owner_id,
            pregnancy.id,
            terminate_pregnancy.TerminatePregnancyInput(status="failed"),
        )


async def test_terminate_rejects_unknown_status(uow, owner_id, farm, breeding_trio):
    sire, dam_a, _ = breeding_trio
    _, [pregnancy] = await _mating(uow, owner_id, farm, sire, [dam_a], outcome="successful")
    with pytest.raises(ValidationError):
        await terminate_pregnancy.execute(
            uow,
            owner_id,
            pregnancy.id,
            terminate_pregnancy.TerminatePregnancyInput(status="delivered"),
        )


async def test_checkups_and_complications_are_appended(uow, owner_id, farm, breeding_trio):
    sire, dam_a, _ = breeding_trio
    _, [pregnancy] = await _mating(uow, owner_id, farm, sire, [dam_a], outcome="successful")
    now = CONCEIVED + timedelta(days=5)

    await record_checkup.execute(
        uow, owner_id, pregnancy.id, record_checkup.RecordCheckupInput(weight_kg=4.1), now=now
    )
    await record_checkup.execute(
        uow, owner_id, pregnancy.id, record_checkup.RecordCheckupInput(findings="ok"), now=now
    )
    updated = await record_complication.execute(
        uow,
        owner_id,
        pregnancy.id,
        record_complication.RecordComplicationInput(type="bleeding", severity="moderate"),
        now=now,
    )

    assert [c.weight_kg for c in updated.checkups] == [4.1, None]
    assert updated.checkups[1].findings == "ok"
    assert len(updated.complications) == 1
    assert updated.complications[0].date == now


async def test_update_cannot_rebind_dam(uow, owner_id, farm, breeding_trio):
    sire, dam_a, dam_b = breeding_trio
    _, [pregnancy] = await _mating(uow, owner_id, farm, sire, [dam_a], outcome="successful")

    with pytest.raises(ImmutableFieldChange):
        await update_pregnancy.execute(
            uow,
            owner_id,
            pregnancy.id,
            update_pregnancy.UpdatePregnancyInput(dam_id=dam_b.id),
        )

    updated = await update_pregnancy.execute(
        uow,
        owner_id,
        pregnancy.id,
        update_pregnancy.UpdatePregnancyInput(dam_id=dam_a.id, notes="calm doe"),
    )
    assert updated.notes == "calm doe"


async def test_alerts_split_due_soon_and_overdue(uow, owner_id, farm, breeding_trio):
    sire, dam_a, dam_b = breeding_trio
    _, [first] = await _mating(uow, owner_id, farm, sire, [dam_a], outcome="successful")
    _, [second] = await _mating(uow, owner_id, farm, sire, [dam_b], outcome="successful")
    # Push the second delivery date further out
    stored = uow.pregnancies.rows[second.id]
    stored.expected_delivery_date = first.expected_delivery_date + timedelta(days=20)

    now = first.expected_delivery_date - timedelta(days=3)
    alerts = await pregnancy_alerts.execute(uow, owner_id, farm.id, due_soon_days=7, now=now)
    assert [p.id for p in alerts.due_soon] == [first.id]
    assert alerts.overdue == []

    later = first.expected_delivery_date + timedelta(days=2)
    alerts = await pregnancy_alerts.execute(uow, owner_id, farm.id, due_soon_days=7, now=later)
    assert [p.id for p in alerts.overdue] == [first.id]
