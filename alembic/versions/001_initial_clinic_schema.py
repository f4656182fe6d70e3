"""Initial clinic schema: owners, pets, types, visits, vets, specialties

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Lookup tables
    op.create_table('types',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=80), nullable=False, comment='Kind of animal'),
        sa.PrimaryKeyConstraint('id', name='pk_types')
    )
    op.create_index('ix_types_name', 'types', ['name'])

    op.create_table('specialties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=80), nullable=False, comment='Specialty name'),
        sa.PrimaryKeyConstraint('id', name='pk_specialties')
    )
    op.create_index('ix_specialties_name', 'specialties', ['name'])

    # Owners
    op.create_table('owners',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=30), nullable=False, comment="Owner's first name"),
        sa.Column('last_name', sa.String(length=30), nullable=False, comment="Owner's last name"),
        sa.Column('address_city', sa.String(length=80), nullable=False, comment="City of the owner's address"),
        sa.Column('address_first_line', sa.String(length=255), nullable=False, comment='First street line of the address'),
        sa.Column('telephone', sa.String(length=20), nullable=False, comment='Contact telephone number, digits only'),
        sa.PrimaryKeyConstraint('id', name='pk_owners')
    )
    op.create_index('ix_owners_last_name', 'owners', ['last_name'])
    op.create_index('idx_owners_last_first', 'owners', ['last_name', 'first_name'])

    # Pets
    op.create_table('pets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=30), nullable=False, comment="Pet's name"),
        sa.Column('birth_date', sa.Date(), nullable=True, comment="Pet's birth date"),
        sa.Column('type_id', sa.Integer(), nullable=True, comment='Kind of animal'),
        sa.Column('owner_id', sa.Integer(), nullable=False, comment='Owner of the pet'),
        sa.ForeignKeyConstraint(['type_id'], ['types.id'], name='fk_pets_type_id_types'),
        sa.ForeignKeyConstraint(['owner_id'], ['owners.id'], name='fk_pets_owner_id_owners'),
        sa.PrimaryKeyConstraint('id', name='pk_pets')
    )
    op.create_index('ix_pets_owner_id', 'pets', ['owner_id'])
    op.create_index('idx_pets_owner_name', 'pets', ['owner_id', 'name'])

    # Visits
    op.create_table('visits',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('visit_date', sa.DateTime(), nullable=False, comment='When the visit took place'),
        sa.Column('description', sa.String(length=255), nullable=False, comment='What was done during the visit'),
        sa.Column('pet_id', sa.Integer(), nullable=False, comment='Pet that was seen'),
        sa.CheckConstraint('length(description) > 0', name='ck_visits_description_not_empty'),
        sa.ForeignKeyConstraint(['pet_id'], ['pets.id'], name='fk_visits_pet_id_pets'),
        sa.PrimaryKeyConstraint('id', name='pk_visits')
    )
    op.create_index('ix_visits_pet_id', 'visits', ['pet_id'])

    # Vets
    op.create_table('vets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=30), nullable=False, comment="Vet's first name"),
        sa.Column('last_name', sa.String(length=30), nullable=False, comment="Vet's last name"),
        sa.PrimaryKeyConstraint('id', name='pk_vets')
    )
    op.create_index('ix_vets_last_name', 'vets', ['last_name'])
    op.create_index('idx_vets_last_first', 'vets', ['last_name', 'first_name'])

    op.create_table('vet_specialties',
        sa.Column('vet_id', sa.Integer(), nullable=False),
        sa.Column('specialty_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['vet_id'], ['vets.id'], name='fk_vet_specialties_vet_id_vets'),
        sa.ForeignKeyConstraint(['specialty_id'], ['specialties.id'], name='fk_vet_specialties_specialty_id_specialties'),
        sa.PrimaryKeyConstraint('vet_id', 'specialty_id', name='pk_vet_specialties')
    )


def downgrade() -> None:
    # Drop tables in reverse dependency order
    op.drop_table('vet_specialties')
    op.drop_table('vets')
    op.drop_table('visits')
    op.drop_table('pets')
    op.drop_table('owners')
    op.drop_table('specialties')
    op.drop_table('types')
