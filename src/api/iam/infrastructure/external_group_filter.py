"""Translation of mapping filters into SQLAlchemy clauses.

Every comparison value becomes a bound parameter of the statement; filter
text is never spliced into SQL. The tenant term is added here and cannot
be expressed by, or removed through, the filter itself.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, and_

from iam.domain.external_group_filter import (
    FilterField,
    FilterOperator,
    MappingFilter,
)
from iam.domain.value_objects import TenantId
from iam.infrastructure.models import ExternalGroupMappingModel

LIKE_ESCAPE = "\\"

_COLUMNS = {
    FilterField.EXTERNAL_GROUP: ExternalGroupMappingModel.external_group,
    FilterField.GROUP_ID: ExternalGroupMappingModel.group_id,
    FilterField.ORIGIN: ExternalGroupMappingModel.origin,
}


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so the value matches literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def tenant_scoped_clause(
    mapping_filter: MappingFilter, tenant_id: TenantId
) -> ColumnElement[bool]:
    """Build the WHERE clause for a filter, confined to one tenant.

    Args:
        mapping_filter: Parsed filter; an empty filter selects the whole tenant
        tenant_id: Tenant the statement is restricted to

    Returns:
        `tenant_id = :tenant AND <comparisons...>`
    """
    clauses: list[ColumnElement[bool]] = [
        ExternalGroupMappingModel.tenant_id == tenant_id.value
    ]

    for comparison in mapping_filter.comparisons:
        column = _COLUMNS[comparison.field]
        if comparison.operator is FilterOperator.EQ:
            clauses.append(column == comparison.value)
        elif comparison.operator is FilterOperator.SW:
            clauses.append(
                column.ilike(escape_like(comparison.value) + "%", escape=LIKE_ESCAPE)
            )
        else:  # pragma: no cover - closed enum
            raise AssertionError(f"Unhandled operator: {comparison.operator}")

    return and_(*clauses)
