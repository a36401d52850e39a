"""SQLAlchemy ORM model for the external_group_mappings table."""

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin

EXTERNAL_GROUP_MAPPING_UNIQUE_COLUMNS = (
    "tenant_id",
    "group_id",
    "external_group",
    "origin",
)


class ExternalGroupMappingModel(Base, TimestampMixin):
    """ORM model for external_group_mappings table.

    external_group holds the lower-cased name, so the unique constraint on
    (tenant_id, group_id, external_group, origin) is case-insensitive on
    the name. Rows are removed with their group or tenant (CASCADE).
    """

    __tablename__ = "external_group_mappings"
    __table_args__ = (
        UniqueConstraint(
            *EXTERNAL_GROUP_MAPPING_UNIQUE_COLUMNS,
            name="uq_external_group_mappings_tenant_group_name_origin",
        ),
        Index(
            "ix_external_group_mappings_tenant_name_origin",
            "tenant_id",
            "external_group",
            "origin",
        ),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    tenant_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    group_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
    )
    external_group: Mapped[str] = mapped_column(String(1024), nullable=False)
    origin: Mapped[str] = mapped_column(String(36), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<ExternalGroupMappingModel(id={self.id}, group_id={self.group_id}, "
            f"external_group={self.external_group}, origin={self.origin})>"
        )
