from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from breedline.application.use_cases.guards import utcnow
from breedline.application.use_cases.mating import (
    delete_mating,
    get_mating,
    list_matings,
    mating_statistics,
    record_mating,
    record_outcome,
    update_mating,
)
from breedline.config.settings import Settings
from breedline.infrastructure.auth.context import AuthContext
from breedline.interfaces.http.deps import get_app_settings, get_auth_context, get_uow
from breedline.interfaces.http.schemas.mating import (
    MatingCreate,
    MatingListResponse,
    MatingOutcomeInput,
    MatingOutcomeResponse,
    MatingResponse,
    MatingStatisticsResponse,
    MatingUpdate,
)
from breedline.interfaces.http.schemas.pregnancy import PregnancyResponse

router = APIRouter(prefix="/reproduction/mating", tags=["reproduction"])


@router.post("", response_model=MatingResponse, status_code=status.HTTP_201_CREATED)
async def create_mating_endpoint(
    payload: MatingCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    input_data = record_mating.RecordMatingInput(
        farm_id=payload.farm_id,
        sire_id=payload.sire_id,
        dam_ids=payload.dam_ids,
        mating_date=payload.mating_date,
        mating_type=payload.mating_type,
        expected_conception_date=payload.expected_conception_date,
        location=payload.location,
        notes=payload.notes,
    )
    event = await record_mating.execute(uow, context.user_id, input_data)
    await uow.commit()
    return event


@router.get("", response_model=MatingListResponse)
async def list_matings_endpoint(
    farm_id: UUID,
    animal_id: UUID | None = None,
    role: str = "any",
    status: str | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int = 50,
    offset: int = 0,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await list_matings.execute(
        uow,
        context.user_id,
        farm_id,
        animal_id=animal_id,
        role=role,
        status=status,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )
    return {"items": result.items, "total": result.total, "limit": limit, "offset": offset}


@router.get("/statistics", response_model=MatingStatisticsResponse)
async def mating_statistics_endpoint(
    farm_id: UUID,
    period: str = "month",
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    return await mating_statistics.execute(uow, context.user_id, farm_id, period=period)


@router.get("/{event_id}", response_model=MatingResponse)
async def get_mating_endpoint(
    event_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    return await get_mating.execute(uow, context.user_id, event_id)


@router.patch("/{event_id}", response_model=MatingResponse)
async def update_mating_endpoint(
    event_id: UUID,
    payload: MatingUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    input_data = update_mating.UpdateMatingInput(**payload.model_dump(exclude_unset=True))
    event = await update_mating.execute(uow, context.user_id, event_id, input_data)
    await uow.commit()
    return event


@router.patch("/{event_id}/outcome", response_model=MatingOutcomeResponse)
async def record_outcome_endpoint(
    event_id: UUID,
    payload: MatingOutcomeInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    now = utcnow()
    result = await record_outcome.execute(
        uow,
        context.user_id,
        event_id,
        record_outcome.RecordOutcomeInput(outcome=payload.outcome, notes=payload.notes),
        default_gestation_days=settings.default_gestation_days,
        now=now,
    )
    await uow.commit()
    return {
        "mating_event": MatingResponse.model_validate(result.mating_event),
        "pregnancies": [PregnancyResponse.build(p, now) for p in result.pregnancies],
    }


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mating_endpoint(
    event_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    await delete_mating.execute(uow, context.user_id, event_id)
    await uow.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
