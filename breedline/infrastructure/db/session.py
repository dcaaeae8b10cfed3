from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from breedline.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    engine = create_async_engine(database_url, echo=False, future=True)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_savepoints(engine)
    return engine


def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    # The sqlite driver defers BEGIN on its own; hand transaction control to
    # SQLAlchemy so SAVEPOINT / ROLLBACK TO behave.
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._clear_repositories()

    def _clear_repositories(self) -> None:
        self.farms = None
        self.animals = None
        self.animal_types = None
        self.mating_events = None
        self.pregnancies = None
        self.birth_events = None
        self.offspring_tracking = None
        self.genetic_profiles = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from breedline.infrastructure.repos.animal_types_sqlalchemy import (
            AnimalTypesSQLAlchemyRepository,
        )
        from breedline.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository
        from breedline.infrastructure.repos.birth_events_sqlalchemy import (
            BirthEventsSQLAlchemyRepository,
        )
        from breedline.infrastructure.repos.farms_sqlalchemy import FarmsSQLAlchemyRepository
        from breedline.infrastructure.repos.genetic_profiles_sqlalchemy import (
            GeneticProfilesSQLAlchemyRepository,
        )
        from breedline.infrastructure.repos.mating_events_sqlalchemy import (
            MatingEventsSQLAlchemyRepository,
        )
        from breedline.infrastructure.repos.offspring_tracking_sqlalchemy import (
            OffspringTrackingSQLAlchemyRepository,
        )
        from breedline.infrastructure.repos.pregnancies_sqlalchemy import (
            PregnanciesSQLAlchemyRepository,
        )

        self.farms = FarmsSQLAlchemyRepository(self.session)
        self.animals = AnimalsSQLAlchemyRepository(self.session)
        self.animal_types = AnimalTypesSQLAlchemyRepository(self.session)
        self.mating_events = MatingEventsSQLAlchemyRepository(self.session)
        self.pregnancies = PregnanciesSQLAlchemyRepository(self.session)
        self.birth_events = BirthEventsSQLAlchemyRepository(self.session)
        self.offspring_tracking = OffspringTrackingSQLAlchemyRepository(self.session)
        self.genetic_profiles = GeneticProfilesSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._clear_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        if not self.session:
            raise RuntimeError("Unit of work is not active")
        async with self.session.begin_nested():
            yield
