from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from breedline.application.use_cases.guards import utcnow
from breedline.application.use_cases.pregnancy import (
    create_pregnancy,
    get_pregnancy,
    list_pregnancies,
    pregnancy_alerts,
    record_checkup,
    record_complication,
    terminate_pregnancy,
    update_pregnancy,
)
from breedline.config.settings import Settings
from breedline.infrastructure.auth.context import AuthContext
from breedline.interfaces.http.deps import get_app_settings, get_auth_context, get_uow
from breedline.interfaces.http.schemas.pregnancy import (
    CheckupInput,
    ComplicationInput,
    PregnancyAlertsResponse,
    PregnancyCreate,
    PregnancyListResponse,
    PregnancyResponse,
    PregnancyUpdate,
    TerminateInput,
)

router = APIRouter(prefix="/reproduction/pregnancy", tags=["reproduction"])


@router.post("", response_model=PregnancyResponse, status_code=status.HTTP_201_CREATED)
async def create_pregnancy_endpoint(
    payload: PregnancyCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    now = utcnow()
    input_data = create_pregnancy.CreatePregnancyInput(
        farm_id=payload.farm_id,
        dam_id=payload.dam_id,
        sire_id=payload.sire_id,
        mating_event_id=payload.mating_event_id,
        conception_date=payload.conception_date,
        expected_gestation_days=payload.expected_gestation_days,
        notes=payload.notes,
    )
    pregnancy = await create_pregnancy.execute(
        uow,
        context.user_id,
        input_data,
        default_gestation_days=settings.default_gestation_days,
        now=now,
    )
    await uow.commit()
    return PregnancyResponse.build(pregnancy, now)


@router.get("", response_model=PregnancyListResponse)
async def list_pregnancies_endpoint(
    farm_id: UUID,
    dam_id: UUID | None = None,
    sire_id: UUID | None = None,
    status: str | None = None,
    limit: int = 50,
    offset: int = 0,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    result = await list_pregnancies.execute(
        uow,
        context.user_id,
        farm_id,
        dam_id=dam_id,
        sire_id=sire_id,
        status=status,
        limit=limit,
        offset=offset,
        now=now,
    )
    return {
        "items": [PregnancyResponse.build(p, now) for p in result.items],
        "total": result.total,
        "limit": limit,
        "offset": offset,
    }


@router.get("/alerts", response_model=PregnancyAlertsResponse)
async def pregnancy_alerts_endpoint(
    farm_id: UUID,
    due_soon_days: int | None = None,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    now = utcnow()
    alerts = await pregnancy_alerts.execute(
        uow,
        context.user_id,
        farm_id,
        due_soon_days=due_soon_days if due_soon_days is not None else settings.due_soon_days,
        now=now,
    )
    return {
        "due_soon": [PregnancyResponse.build(p, now) for p in alerts.due_soon],
        "overdue": [PregnancyResponse.build(p, now) for p in alerts.overdue],
        "with_complications": [
            PregnancyResponse.build(p, now) for p in alerts.with_complications
        ],
    }


@router.get("/{pregnancy_id}", response_model=PregnancyResponse)
async def get_pregnancy_endpoint(
    pregnancy_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    pregnancy = await get_pregnancy.execute(uow, context.user_id, pregnancy_id, now=now)
    return PregnancyResponse.build(pregnancy, now)


@router.patch("/{pregnancy_id}", response_model=PregnancyResponse)
async def update_pregnancy_endpoint(
    pregnancy_id: UUID,
    payload: PregnancyUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = update_pregnancy.UpdatePregnancyInput(**payload.model_dump(exclude_unset=True))
    pregnancy = await update_pregnancy.execute(
        uow, context.user_id, pregnancy_id, input_data, now=now
    )
    await uow.commit()
    return PregnancyResponse.build(pregnancy, now)


@router.patch("/{pregnancy_id}/terminate", response_model=PregnancyResponse)
async def terminate_pregnancy_endpoint(
    pregnancy_id: UUID,
    payload: TerminateInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = terminate_pregnancy.TerminatePregnancyInput(
        status=payload.status,
        reason=payload.reason,
        notes=payload.notes,
        date=payload.date,
    )
    pregnancy = await terminate_pregnancy.execute(
        uow, context.user_id, pregnancy_id, input_data, now=now
    )
    await uow.commit()
    return PregnancyResponse.build(pregnancy, now)


@router.post("/{pregnancy_id}/checkup", response_model=PregnancyResponse)
async def record_checkup_endpoint(
    pregnancy_id: UUID,
    payload: CheckupInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = record_checkup.RecordCheckupInput(
        date=payload.date,
        weight_kg=payload.weight_kg,
        examiner=payload.examiner,
        findings=payload.findings,
        notes=payload.notes,
    )
    pregnancy = await record_checkup.execute(
        uow, context.user_id, pregnancy_id, input_data, now=now
    )
    await uow.commit()
    return PregnancyResponse.build(pregnancy, now)


@router.post("/{pregnancy_id}/complication", response_model=PregnancyResponse)
async def record_complication_endpoint(
    pregnancy_id: UUID,
    payload: ComplicationInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = record_complication.RecordComplicationInput(
        type=payload.type,
        description=payload.description,
        severity=payload.severity,
        treatment=payload.treatment,
        resolved=payload.resolved,
        date=payload.date,
    )
    pregnancy = await record_complication.execute(
        uow, context.user_id, pregnancy_id, input_data, now=now
    )
    await uow.commit()
    return PregnancyResponse.build(pregnancy, now)
