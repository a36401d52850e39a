"""create tenants, groups and external_group_mappings tables

Revision ID: 3c9e1a7b5d20
Revises:
Create Date: 2026-10-18 10:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c9e1a7b5d20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_tenants")),
        sa.UniqueConstraint("name", name=op.f("uq_tenants_name")),
    )

    op.create_table(
        "groups",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name=op.f("fk_groups_tenant_id_tenants"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_groups")),
    )
    op.create_index(op.f("ix_groups_tenant_id"), "groups", ["tenant_id"])
    op.create_index(op.f("ix_groups_name"), "groups", ["name"])

    op.create_table(
        "external_group_mappings",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("tenant_id", sa.String(length=26), nullable=False),
        sa.Column("group_id", sa.String(length=26), nullable=False),
        # Stored lower-cased, so uniqueness is case-insensitive on the name
        sa.Column("external_group", sa.String(length=1024), nullable=False),
        sa.Column("origin", sa.String(length=36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["tenant_id"],
            ["tenants.id"],
            name=op.f("fk_external_group_mappings_tenant_id_tenants"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["group_id"],
            ["groups.id"],
            name=op.f("fk_external_group_mappings_group_id_groups"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_external_group_mappings")),
        sa.UniqueConstraint(
            "tenant_id",
            "group_id",
            "external_group",
            "origin",
            name="uq_external_group_mappings_tenant_group_name_origin",
        ),
    )
    op.create_index(
        op.f("ix_external_group_mappings_tenant_id"),
        "external_group_mappings",
        ["tenant_id"],
    )
    op.create_index(
        "ix_external_group_mappings_tenant_name_origin",
        "external_group_mappings",
        ["tenant_id", "external_group", "origin"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(
        "ix_external_group_mappings_tenant_name_origin",
        table_name="external_group_mappings",
    )
    op.drop_index(
        op.f("ix_external_group_mappings_tenant_id"),
        table_name="external_group_mappings",
    )
    op.drop_table("external_group_mappings")
    op.drop_index(op.f("ix_groups_name"), table_name="groups")
    op.drop_index(op.f("ix_groups_tenant_id"), table_name="groups")
    op.drop_table("groups")
    op.drop_table("tenants")
