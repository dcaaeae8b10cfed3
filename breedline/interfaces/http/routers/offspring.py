from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from breedline.application.use_cases.guards import utcnow
from breedline.application.use_cases.offspring import (
    get_tracking,
    list_offspring,
    offspring_statistics,
    record_culling,
    record_death,
    record_growth,
    record_sale,
    record_weaning,
    update_tracking,
)
from breedline.infrastructure.auth.context import AuthContext
from breedline.interfaces.http.deps import get_auth_context, get_uow
from breedline.interfaces.http.schemas.offspring import (
    CullingInput,
    DeathInput,
    GrowthInput,
    OffspringListResponse,
    OffspringStatisticsResponse,
    SaleInput,
    TrackingResponse,
    TrackingUpdate,
    WeaningInput,
)

router = APIRouter(prefix="/reproduction/offspring", tags=["reproduction"])


@router.get("", response_model=OffspringListResponse)
async def list_offspring_endpoint(
    parent_id: UUID,
    role: str = "dam",
    status: str | None = None,
    limit: int = 20,
    offset: int = 0,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    result = await list_offspring.execute(
        uow,
        context.user_id,
        parent_id,
        role=role,
        status=status,
        limit=limit,
        offset=offset,
    )
    return {
        "parent_id": result.parent.id,
        "parent_tag": result.parent.tag,
        "role": role,
        "items": [TrackingResponse.build(t, now) for t in result.items],
        "total": result.total,
        "limit": limit,
        "offset": offset,
    }


@router.get("/statistics", response_model=OffspringStatisticsResponse)
async def offspring_statistics_endpoint(
    farm_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    return await offspring_statistics.execute(uow, context.user_id, farm_id)


@router.get("/{animal_id}/tracking", response_model=TrackingResponse)
async def get_tracking_endpoint(
    animal_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    tracking = await get_tracking.execute(uow, context.user_id, animal_id)
    # Reads may backfill a missing record or refresh a stale snapshot
    await uow.commit()
    return TrackingResponse.build(tracking, utcnow())


@router.patch("/{animal_id}/tracking", response_model=TrackingResponse)
async def update_tracking_endpoint(
    animal_id: UUID,
    payload: TrackingUpdate,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = update_tracking.UpdateTrackingInput(**payload.model_dump(exclude_unset=True))
    tracking = await update_tracking.execute(uow, context.user_id, animal_id, input_data, now=now)
    await uow.commit()
    return TrackingResponse.build(tracking, now)


@router.post("/{animal_id}/wean", response_model=TrackingResponse)
async def record_weaning_endpoint(
    animal_id: UUID,
    payload: WeaningInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = record_weaning.RecordWeaningInput(
        date=payload.date, weight_kg=payload.weight_kg, notes=payload.notes
    )
    tracking = await record_weaning.execute(uow, context.user_id, animal_id, input_data, now=now)
    await uow.commit()
    return TrackingResponse.build(tracking, now)


@router.post("/{animal_id}/sell", response_model=TrackingResponse)
async def record_sale_endpoint(
    animal_id: UUID,
    payload: SaleInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = record_sale.RecordSaleInput(
        date=payload.date, price=payload.price, buyer=payload.buyer, notes=payload.notes
    )
    tracking = await record_sale.execute(uow, context.user_id, animal_id, input_data, now=now)
    await uow.commit()
    return TrackingResponse.build(tracking, now)


@router.post("/{animal_id}/death", response_model=TrackingResponse)
async def record_death_endpoint(
    animal_id: UUID,
    payload: DeathInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = record_death.RecordDeathInput(
        date=payload.date, cause=payload.cause, notes=payload.notes
    )
    tracking = await record_death.execute(uow, context.user_id, animal_id, input_data, now=now)
    await uow.commit()
    return TrackingResponse.build(tracking, now)


@router.post("/{animal_id}/cull", response_model=TrackingResponse)
async def record_culling_endpoint(
    animal_id: UUID,
    payload: CullingInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = record_culling.RecordCullingInput(
        date=payload.date, reason=payload.reason, method=payload.method, notes=payload.notes
    )
    tracking = await record_culling.execute(uow, context.user_id, animal_id, input_data, now=now)
    await uow.commit()
    return TrackingResponse.build(tracking, now)


@router.post("/{animal_id}/growth", response_model=TrackingResponse)
async def record_growth_endpoint(
    animal_id: UUID,
    payload: GrowthInput,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    now = utcnow()
    input_data = record_growth.RecordGrowthInput(
        date=payload.date,
        weight_kg=payload.weight_kg,
        height_cm=payload.height_cm,
        notes=payload.notes,
    )
    tracking = await record_growth.execute(uow, context.user_id, animal_id, input_data, now=now)
    await uow.commit()
    return TrackingResponse.build(tracking, now)
