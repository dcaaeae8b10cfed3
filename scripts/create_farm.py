#!/usr/bin/env python3
"""
Script to create a farm for an owner and print an access token for that owner.

This script:
1. Creates a farm owned by the given user id (or a fresh one)
2. Optionally registers an animal type with reproduction and genetics enabled
3. Issues a JWT access token for the owner so the API can be called right away

Usage:
  python scripts/create_farm.py --name "North Paddock" [--owner-id UUID] [--animal-type Rabbit]
"""

import asyncio
import sys
from pathlib import Path
from uuid import UUID, uuid4

# Add the project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from breedline.config.settings import get_settings
from breedline.domain.models.animal_type import AnimalType, GeneticsSettings
from breedline.domain.models.farm import Farm
from breedline.infrastructure.auth.jwt_service import JWTService
from breedline.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)


async def create_farm(
    name: str,
    owner_id: UUID | None = None,
    animal_type: str | None = None,
    gestation_days: int | None = None,
):
    settings = get_settings()
    engine = create_engine(settings.database_url)
    session_factory = create_session_factory(engine)
    owner_uuid = owner_id or uuid4()

    try:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            farm = await uow.farms.add(Farm(id=uuid4(), owner_id=owner_uuid, name=name))
            created_type = None
            if animal_type:
                created_type = await uow.animal_types.add(
                    AnimalType(
                        id=uuid4(),
                        name=animal_type,
                        reproduction_enabled=True,
                        genetics_breeding_enabled=True,
                        gestation_days=gestation_days,
                        genetics=GeneticsSettings(
                            enable_genetics=True, gestation_period_days=gestation_days
                        ),
                    )
                )
            await uow.commit()

        print("\n✅ Farm created successfully!")
        print(f"   Farm ID: {farm.id}")
        print(f"   Owner ID: {farm.owner_id}")
        if created_type:
            print(f"   Animal type: {created_type.name} ({created_type.id})")

        jwt_service = JWTService(
            secret_key=settings.jwt_secret_key.get_secret_value(),
            algorithm=settings.jwt_algorithm,
            access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )
        token = jwt_service.create_access_token(subject=owner_uuid)
        print("\n🔑 Access token for the owner:")
        print(f"   {token}")
        print(f"\n   Expires in {settings.jwt_access_token_expires_minutes} minutes")

    except Exception as exc:
        print(f"\n❌ Error creating farm: {exc}")
        import traceback

        traceback.print_exc()
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Create a farm and print an owner access token",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create a farm for a new owner
  python scripts/create_farm.py --name "North Paddock"

  # Create a farm for an existing owner, with a rabbit animal type
  python scripts/create_farm.py --name "Warren" --animal-type Rabbit --gestation-days 31
  --owner-id 12345678-1234-5678-1234-567812345678
        """,
    )
    parser.add_argument("--name", required=True, help="Farm name")
    parser.add_argument("--owner-id", help="Owner user ID (optional, auto-generated)")
    parser.add_argument("--animal-type", help="Animal type name to register (optional)")
    parser.add_argument("--gestation-days", type=int, help="Gestation length for the type")

    args = parser.parse_args()

    owner_uuid = None
    if args.owner_id:
        try:
            owner_uuid = UUID(args.owner_id)
        except ValueError:
            print(f"❌ Error: '{args.owner_id}' is not a valid UUID")
            sys.exit(1)

    print("=" * 60)
    print("🚀 Farm Creator - Breedline")
    print("=" * 60)

    asyncio.run(create_farm(args.name, owner_uuid, args.animal_type, args.gestation_days))

    print("\n" + "=" * 60)
    print("✨ Process completed")
    print("=" * 60)
