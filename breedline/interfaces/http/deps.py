from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import timedelta

from fastapi import Request

from breedline.application.errors import AuthError
from breedline.application.use_cases.genetics.compute_profile import ProfileOptions
from breedline.config.settings import Settings, get_settings
from breedline.domain.models.genetic_profile import GeneticProfile
from breedline.infrastructure.auth.context import AuthContext
from breedline.infrastructure.db.session import SQLAlchemyUnitOfWork
from breedline.utils.single_flight import SingleFlight


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_profile_options(request: Request) -> ProfileOptions:
    settings = get_app_settings(request)
    return ProfileOptions(
        max_age=timedelta(hours=settings.profile_max_age_hours),
        pedigree_max_depth=settings.pedigree_max_depth,
        pedigree_max_ancestors=settings.pedigree_max_ancestors,
        recommendation_limit=settings.recommendation_limit,
    )


def get_profile_flight(request: Request) -> SingleFlight[GeneticProfile]:
    flight = getattr(request.app.state, "profile_flight", None)
    if flight is None:
        raise RuntimeError("Profile single-flight registry not configured")
    return flight
