from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from breedline.application.use_cases.genetics import (
    batch_compute,
    check_compatibility,
    compute_profile,
    genetics_dashboard,
    get_pedigree,
    pair_suggestions,
    top_breeders,
)
from breedline.application.use_cases.genetics.compute_profile import ProfileOptions
from breedline.config.settings import Settings
from breedline.infrastructure.auth.context import AuthContext
from breedline.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_profile_flight,
    get_profile_options,
    get_uow,
)
from breedline.interfaces.http.schemas.genetics import (
    BatchComputeResponse,
    CompatibilityResponse,
    GeneticProfileResponse,
    GeneticsDashboardResponse,
    InbreedingRiskResponse,
    PairSuggestionResponse,
    PedigreeResponse,
    RankedBreederResponse,
)

router = APIRouter(prefix="/genetics", tags=["genetics"])


@router.get("/animal/{animal_id}", response_model=GeneticProfileResponse)
async def get_profile_endpoint(
    animal_id: UUID,
    force_refresh: bool = False,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    options: ProfileOptions = Depends(get_profile_options),
    flight=Depends(get_profile_flight),
):
    profile = await compute_profile.execute(
        uow, context.user_id, animal_id, force_refresh, options=options, flight=flight
    )
    # A rebuilt profile is stored as a side effect of the read
    await uow.commit()
    return profile


@router.get("/animal/{animal_id}/pedigree", response_model=PedigreeResponse)
async def get_pedigree_endpoint(
    animal_id: UUID,
    depth: int = 3,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    return await get_pedigree.execute(
        uow,
        context.user_id,
        animal_id,
        depth,
        max_ancestors=settings.pedigree_max_ancestors,
    )


@router.get("/compatibility/{animal_id}/{partner_id}", response_model=CompatibilityResponse)
async def check_compatibility_endpoint(
    animal_id: UUID,
    partner_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    options: ProfileOptions = Depends(get_profile_options),
    flight=Depends(get_profile_flight),
):
    report = await check_compatibility.execute(
        uow, context.user_id, animal_id, partner_id, options=options, flight=flight
    )
    await uow.commit()
    return report


@router.get("/inbreeding-risk/{animal_id}/{partner_id}", response_model=InbreedingRiskResponse)
async def inbreeding_risk_endpoint(
    animal_id: UUID,
    partner_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    options: ProfileOptions = Depends(get_profile_options),
    flight=Depends(get_profile_flight),
):
    report = await check_compatibility.inbreeding_risk(
        uow, context.user_id, animal_id, partner_id, options=options, flight=flight
    )
    await uow.commit()
    return report


@router.get("/farm/{farm_id}/pair-suggestions", response_model=list[PairSuggestionResponse])
async def pair_suggestions_endpoint(
    farm_id: UUID,
    min_compatibility: int | None = None,
    limit: int | None = None,
    animal_type_id: UUID | None = None,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    return await pair_suggestions.execute(
        uow,
        context.user_id,
        farm_id,
        min_compatibility=(
            min_compatibility
            if min_compatibility is not None
            else settings.pair_suggestion_min_compatibility
        ),
        limit=limit if limit is not None else settings.pair_suggestion_limit,
        animal_type_id=animal_type_id,
    )


@router.post("/farm/{farm_id}/batch-compute", response_model=BatchComputeResponse)
async def batch_compute_endpoint(
    farm_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    options: ProfileOptions = Depends(get_profile_options),
):
    result = await batch_compute.execute(uow, context.user_id, farm_id, options=options)
    await uow.commit()
    return result


@router.get("/farm/{farm_id}/top-breeders", response_model=list[RankedBreederResponse])
async def top_breeders_endpoint(
    farm_id: UUID,
    limit: int | None = None,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    return await top_breeders.execute(
        uow,
        context.user_id,
        farm_id,
        limit=limit if limit is not None else settings.recommendation_limit,
    )


@router.get("/farm/{farm_id}/dashboard", response_model=GeneticsDashboardResponse)
async def genetics_dashboard_endpoint(
    farm_id: UUID,
    context: AuthContext = Depends(get_auth_context),
    uow=Depends(get_uow),
):
    return await genetics_dashboard.execute(uow, context.user_id, farm_id)
