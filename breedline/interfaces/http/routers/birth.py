from __future__ import annotations

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, status

from breedline.application.use_cases.birth import (
    birth_statistics,
    complete_birth,
    get_birth,
    list_births,
    record_birth,
    record_neonatal_death,
    update_birth,
)
from breedline.infrastructure.auth.context import AuthContext
from breedline.interfaces.http.deps import get_auth_context, get_uow
from breedline.interfaces.http.schemas.birth import (
    BirthCreate,
    BirthListResponse,
    BirthRecordedResponse,
    BirthResponse,
    BirthStatisticsResponse,
    BirthUpdate,
    NeonatalDeathCreate,
)

router = APIRouter(prefix="/reproduction/birth", tags=["reproduction"])


@router.post("", response_model=BirthRecordedResponse, status_code=status.HTTP_201_CREATED)
async def record_birth_endpoint(
    payload: BirthCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    input_data = record_birth.RecordBirthInput(
        farm_id=payload.farm_id,
        pregnancy_id=payload.pregnancy_id,
        dam_id=payload.dam_id,
        sire_id=payload.sire_id,
        birth_date=payload.birth_date,
        total_offspring=payload.total_offspring,
        live_births=payload.live_births,
        stillbirths=payload.stillbirths,
        weak_offspring=payload.weak_offspring,
        male_offspring=payload.male_offspring,
        female_offspring=payload.female_offspring,
        assisted_birth=payload.assisted_birth,
        assistance_type=payload.assistance_type,
        complications=payload.complications,
        location=payload.location,
        notes=payload.notes,
        birth_weight_kg=payload.birth_weight_kg,
    )
    result = await record_birth.execute(uow, context.user_id, input_data)
    await uow.commit()
    return {
        "birth_event": BirthResponse.model_validate(result.birth_event),
        "offspring": [
            {
                "id": created.animal.id,
                "tag": created.animal.tag,
                "name": created.animal.name,
                "gender": created.animal.gender,
                "breed": created.animal.breed,
                "birth_date": created.animal.birth_date,
                "tracking_id": created.tracking.id,
            }
            for created in result.offspring
        ],
    }


@router.get("", response_model=BirthListResponse)
async def list_births_endpoint(
    farm_id: UUID,
    dam_id: UUID | None = None,
    sire_id: UUID | None = None,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
    limit: int = 50,
    offset: int = 0,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    result = await list_births.execute(
        uow,
        context.user_id,
        farm_id,
        dam_id=dam_id,
        sire_id=sire_id,
        date_from=date_from,
        date_to=date_to,
        limit=limit,
        offset=offset,
    )
    return {"items": result.items, "total": result.total, "limit": limit, "offset": offset}


@router.get("/statistics", response_model=BirthStatisticsResponse)
async def birth_statistics_endpoint(
    farm_id: UUID,
    period: str = "year",
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    return await birth_statistics.execute(uow, context.user_id, farm_id, period=period)


@router.get("/{event_id}", response_model=BirthResponse)
async def get_birth_endpoint(
    event_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    return await get_birth.execute(uow, context.user_id, event_id)


@router.patch("/{event_id}", response_model=BirthResponse)
async def update_birth_endpoint(
    event_id: UUID,
    payload: BirthUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    input_data = update_birth.UpdateBirthInput(**payload.model_dump(exclude_unset=True))
    event = await update_birth.execute(uow, context.user_id, event_id, input_data)
    await uow.commit()
    return event


@router.patch("/{event_id}/neonatal-death", response_model=BirthResponse)
async def record_neonatal_death_endpoint(
    event_id: UUID,
    payload: NeonatalDeathCreate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    input_data = record_neonatal_death.NeonatalDeathInput(
        offspring_id=payload.offspring_id,
        date=payload.date,
        cause=payload.cause,
        notes=payload.notes,
    )
    event = await record_neonatal_death.execute(uow, context.user_id, event_id, input_data)
    await uow.commit()
    return event


@router.patch("/{event_id}/complete", response_model=BirthResponse)
async def complete_birth_endpoint(
    event_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    event = await complete_birth.execute(uow, context.user_id, event_id)
    await uow.commit()
    return event
