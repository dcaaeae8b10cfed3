"""Initial schema: farms, animals, reproduction events and genetic profiles

Revision ID: 4f1c2d8e9a01
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4f1c2d8e9a01'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE_PREGNANCY_PREDICATE = "status IN ('confirmed', 'progressing') AND is_active"


def _timestamps(with_updated: bool = True, with_version: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]
    if with_updated:
        columns.append(
            sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    if with_version:
        columns.append(sa.Column('version', sa.Integer(), nullable=False, server_default='1'))
    return columns


def upgrade() -> None:
    """Create every table used by the reproduction and genetics modules."""

    # --- farms ---
    op.create_table(
        'farms',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('owner_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(with_updated=False, with_version=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_farms_owner_id', 'farms', ['owner_id'], unique=False)

    # --- animal_types ---
    op.create_table(
        'animal_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=128), nullable=False),
        sa.Column('reproduction_enabled', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('genetics_breeding_enabled', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('gestation_days', sa.Integer(), nullable=True),
        sa.Column('genetics_settings', sa.JSON(), nullable=False),
        *_timestamps(with_updated=False, with_version=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    # --- animals ---
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_type_id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('gender', sa.String(length=16), nullable=False),
        sa.Column('breed', sa.String(length=255), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=16), server_default='alive', nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('reproductive_status', sa.String(length=16), nullable=True),
        sa.Column('breeding_status', sa.String(length=16), nullable=True),
        sa.Column('health_status', sa.String(length=16), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('dam_id', sa.Uuid(), nullable=True),
        sa.Column('birth_event_id', sa.Uuid(), nullable=True),
        sa.Column('date_of_death', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.ForeignKeyConstraint(['animal_type_id'], ['animal_types.id']),
        sa.ForeignKeyConstraint(['sire_id'], ['animals.id']),
        sa.ForeignKeyConstraint(['dam_id'], ['animals.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('farm_id', 'tag', name='ux_animals_farm_tag'),
    )
    op.create_index('ix_animals_farm_id', 'animals', ['farm_id'], unique=False)
    op.create_index('ix_animals_sire_id', 'animals', ['sire_id'], unique=False)
    op.create_index('ix_animals_dam_id', 'animals', ['dam_id'], unique=False)
    op.create_index(
        'ix_animals_farm_gender_status', 'animals', ['farm_id', 'gender', 'status'],
        unique=False,
    )

    # --- mating_events ---
    op.create_table(
        'mating_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('sire_id', sa.Uuid(), nullable=False),
        sa.Column('dam_ids', sa.JSON(), nullable=False),
        sa.Column('mating_type', sa.String(length=32), nullable=False),
        sa.Column('mating_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expected_conception_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=16), server_default='planned', nullable=False),
        sa.Column('outcome', sa.String(length=16), nullable=True),
        sa.Column('outcome_notes', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.ForeignKeyConstraint(['sire_id'], ['animals.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_mating_events_farm_date', 'mating_events', ['farm_id', 'mating_date'],
        unique=False,
    )
    op.create_index(
        'ix_mating_events_farm_sire', 'mating_events', ['farm_id', 'sire_id'],
        unique=False,
    )

    # --- pregnancies ---
    op.create_table(
        'pregnancies',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('dam_id', sa.Uuid(), nullable=False),
        sa.Column('sire_id', sa.Uuid(), nullable=False),
        sa.Column('mating_event_id', sa.Uuid(), nullable=False),
        sa.Column('conception_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('confirmed_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('expected_gestation_days', sa.Integer(), nullable=False),
        sa.Column('expected_delivery_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='confirmed', nullable=False),
        sa.Column('actual_delivery_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('abortion_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('termination_reason', sa.String(length=16), nullable=True),
        sa.Column('checkups', sa.JSON(), nullable=False),
        sa.Column('complications', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.ForeignKeyConstraint(['dam_id'], ['animals.id']),
        sa.ForeignKeyConstraint(['sire_id'], ['animals.id']),
        sa.ForeignKeyConstraint(['mating_event_id'], ['mating_events.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_pregnancies_sire_id', 'pregnancies', ['sire_id'], unique=False)
    op.create_index(
        'ix_pregnancies_mating_event_id', 'pregnancies', ['mating_event_id'],
        unique=False,
    )
    op.create_index(
        'ix_pregnancies_farm_status', 'pregnancies', ['farm_id', 'status'],
        unique=False,
    )
    op.create_index(
        'ux_pregnancies_active_dam',
        'pregnancies',
        ['dam_id'],
        unique=True,
        postgresql_where=sa.text(ACTIVE_PREGNANCY_PREDICATE),
        sqlite_where=sa.text(ACTIVE_PREGNANCY_PREDICATE),
    )

    # --- birth_events ---
    op.create_table(
        'birth_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('pregnancy_id', sa.Uuid(), nullable=False),
        sa.Column('dam_id', sa.Uuid(), nullable=False),
        sa.Column('sire_id', sa.Uuid(), nullable=False),
        sa.Column('birth_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_offspring', sa.Integer(), nullable=False),
        sa.Column('live_births', sa.Integer(), nullable=False),
        sa.Column('stillbirths', sa.Integer(), server_default='0', nullable=False),
        sa.Column('weak_offspring', sa.Integer(), server_default='0', nullable=False),
        sa.Column('male_offspring', sa.Integer(), server_default='0', nullable=False),
        sa.Column('female_offspring', sa.Integer(), server_default='0', nullable=False),
        sa.Column('status', sa.String(length=16), server_default='in_progress', nullable=False),
        sa.Column('assisted_birth', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('assistance_type', sa.String(length=128), nullable=True),
        sa.Column('complications', sa.Text(), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('offspring_ids', sa.JSON(), nullable=False),
        sa.Column('neonatal_deaths', sa.JSON(), nullable=False),
        sa.Column('requires_followup', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('followup_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('created_by', sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.ForeignKeyConstraint(['pregnancy_id'], ['pregnancies.id']),
        sa.ForeignKeyConstraint(['dam_id'], ['animals.id']),
        sa.ForeignKeyConstraint(['sire_id'], ['animals.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('pregnancy_id'),
    )
    op.create_index('ix_birth_events_dam_id', 'birth_events', ['dam_id'], unique=False)
    op.create_index('ix_birth_events_sire_id', 'birth_events', ['sire_id'], unique=False)
    op.create_index(
        'ix_birth_events_farm_date', 'birth_events', ['farm_id', 'birth_date'],
        unique=False,
    )

    # --- offspring_tracking ---
    op.create_table(
        'offspring_tracking',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('birth_event_id', sa.Uuid(), nullable=False),
        sa.Column('dam_id', sa.Uuid(), nullable=False),
        sa.Column('sire_id', sa.Uuid(), nullable=False),
        sa.Column('offspring_id', sa.Uuid(), nullable=False),
        sa.Column('snapshot', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='alive', nullable=False),
        sa.Column('status_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('birth_weight_kg', sa.Float(), nullable=True),
        sa.Column('weaning_weight_kg', sa.Float(), nullable=True),
        sa.Column('weaning_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('growth_measurements', sa.JSON(), nullable=False),
        sa.Column('sale_details', sa.JSON(), nullable=True),
        sa.Column('death_details', sa.JSON(), nullable=True),
        sa.Column('culling_details', sa.JSON(), nullable=True),
        sa.Column('neonatal_health', sa.String(length=64), nullable=True),
        sa.Column('requires_special_attention', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.ForeignKeyConstraint(['birth_event_id'], ['birth_events.id']),
        sa.ForeignKeyConstraint(['offspring_id'], ['animals.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('offspring_id'),
    )
    op.create_index(
        'ix_offspring_tracking_birth_event_id', 'offspring_tracking', ['birth_event_id'],
        unique=False,
    )
    op.create_index('ix_offspring_tracking_dam_id', 'offspring_tracking', ['dam_id'], unique=False)
    op.create_index('ix_offspring_tracking_sire_id', 'offspring_tracking', ['sire_id'], unique=False)
    op.create_index(
        'ix_offspring_tracking_farm_status', 'offspring_tracking', ['farm_id', 'status'],
        unique=False,
    )

    # --- genetic_profiles ---
    op.create_table(
        'genetic_profiles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_type_id', sa.Uuid(), nullable=False),
        sa.Column('gender', sa.String(length=16), nullable=False),
        sa.Column('is_breeder', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('eligibility', sa.String(length=16), nullable=False),
        sa.Column('breeding_profile', sa.JSON(), nullable=False),
        sa.Column('performance_metrics', sa.JSON(), nullable=False),
        sa.Column('traits', sa.JSON(), nullable=False),
        sa.Column('inbreeding_coefficient', sa.Float(), server_default='0', nullable=False),
        sa.Column('known_close_relatives', sa.JSON(), nullable=False),
        sa.Column('recommended_pairs', sa.JSON(), nullable=False),
        sa.Column('avoid_pairs', sa.JSON(), nullable=False),
        sa.Column('pedigree_generation', sa.Integer(), server_default='0', nullable=False),
        sa.Column('pedigree', sa.JSON(), nullable=False),
        sa.Column('computed_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(with_version=False),
        sa.ForeignKeyConstraint(['animal_id'], ['animals.id']),
        sa.ForeignKeyConstraint(['farm_id'], ['farms.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('animal_id'),
    )
    op.create_index('ix_genetic_profiles_farm_id', 'genetic_profiles', ['farm_id'], unique=False)


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_index('ix_genetic_profiles_farm_id', table_name='genetic_profiles')
    op.drop_table('genetic_profiles')

    op.drop_index('ix_offspring_tracking_farm_status', table_name='offspring_tracking')
    op.drop_index('ix_offspring_tracking_sire_id', table_name='offspring_tracking')
    op.drop_index('ix_offspring_tracking_dam_id', table_name='offspring_tracking')
    op.drop_index('ix_offspring_tracking_birth_event_id', table_name='offspring_tracking')
    op.drop_table('offspring_tracking')

    op.drop_index('ix_birth_events_farm_date', table_name='birth_events')
    op.drop_index('ix_birth_events_sire_id', table_name='birth_events')
    op.drop_index('ix_birth_events_dam_id', table_name='birth_events')
    op.drop_table('birth_events')

    op.drop_index('ux_pregnancies_active_dam', table_name='pregnancies')
    op.drop_index('ix_pregnancies_farm_status', table_name='pregnancies')
    op.drop_index('ix_pregnancies_mating_event_id', table_name='pregnancies')
    op.drop_index('ix_pregnancies_sire_id', table_name='pregnancies')
    op.drop_table('pregnancies')

    op.drop_index('ix_mating_events_farm_sire', table_name='mating_events')
    op.drop_index('ix_mating_events_farm_date', table_name='mating_events')
    op.drop_table('mating_events')

    op.drop_index('ix_animals_farm_gender_status', table_name='animals')
    op.drop_index('ix_animals_dam_id', table_name='animals')
    op.drop_index('ix_animals_sire_id', table_name='animals')
    op.drop_index('ix_animals_farm_id', table_name='animals')
    op.drop_table('animals')

    op.drop_table('animal_types')

    op.drop_index('ix_farms_owner_id', table_name='farms')
    op.drop_table('farms')
