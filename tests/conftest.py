from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator, Callable
from dataclasses import asdict
from datetime import date
from pathlib import Path
from typing import cast
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from breedline.config.settings import Settings
from breedline.domain.models.animal_type import GeneticsSettings
from breedline.infrastructure.db.base import Base
from breedline.infrastructure.db.orm import (  # noqa: F401
    animal,
    animal_type,
    birth_event,
    farm,
    genetic_profile,
    mating_event,
    offspring_tracking,
    pregnancy,
)
from breedline.infrastructure.db.orm.animal import AnimalORM
from breedline.infrastructure.db.orm.animal_type import AnimalTypeORM
from breedline.infrastructure.db.orm.farm import FarmORM
from breedline.interfaces.http.main import create_app


@pytest.fixture()
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret",
            "log_level": "INFO",
            "environment": "test",
            "default_gestation_days": 30,
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client


@pytest.fixture()
def auth_headers(app) -> Callable[[UUID], dict[str, str]]:
    def build(user_id: UUID) -> dict[str, str]:
        token = app.state.jwt_service.create_access_token(subject=user_id)
        return {"Authorization": f"Bearer {token}"}

    return build


@pytest.fixture()
async def seeded_farm(app, client, owner_id: UUID) -> dict[str, UUID]:
    """A rabbit farm with one buck and two does, all old enough to breed."""
    farm_id = uuid4()
    type_id = uuid4()
    ids = {"farm": farm_id, "animal_type": type_id}
    genetics = GeneticsSettings(
        enable_genetics=True,
        maturity_age_days=120,
        min_breeding_age_days=150,
        max_breeding_age_days=4000,
    )
    async with app.state.session_factory() as session:  # type: ignore[attr-defined]
        async_session = cast(AsyncSession, session)
        async_session.add(FarmORM(id=farm_id, owner_id=owner_id, name="Warren"))
        async_session.add(
            AnimalTypeORM(
                id=type_id,
                name="Rabbit",
                reproduction_enabled=True,
                genetics_breeding_enabled=True,
                gestation_days=31,
                genetics_settings=asdict(genetics),
            )
        )
        await async_session.flush()
        for key, tag, gender in (
            ("sire", "BUCK-1", "male"),
            ("dam", "DOE-1", "female"),
            ("dam2", "DOE-2", "female"),
        ):
            ids[key] = uuid4()
            async_session.add(
                AnimalORM(
                    id=ids[key],
                    farm_id=farm_id,
                    animal_type_id=type_id,
                    tag=tag,
                    gender=gender,
                    breed="Rex",
                    birth_date=date(2023, 1, 1),
                    status="alive",
                    is_active=True,
                    health_status="good",
                    version=1,
                )
            )
        await async_session.commit()
    return ids
