"""Filter expressions over external group mappings.

Parses the small comparison language used to list and delete mappings:

    externalGroup sw "cn=eng"
    origin eq "ldap" and group_id eq "01HQ..."

The result is a typed predicate over a closed set of fields and operators.
Values are kept as plain data; turning the predicate into a database
query is the job of the infrastructure layer, which binds every value as
a statement parameter. The tenant is deliberately not a filterable field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from iam.domain.exceptions import InvalidFilterError
from iam.domain.value_objects import normalize_external_group, normalize_group_id


class FilterField(StrEnum):
    """Mapping attributes a filter may reference."""

    EXTERNAL_GROUP = "externalGroup"
    GROUP_ID = "group_id"
    ORIGIN = "origin"

    @classmethod
    def lookup(cls, name: str) -> FilterField:
        """Resolve a field name case-insensitively.

        Raises:
            InvalidFilterError: If the name is not a supported field
        """
        for member in cls:
            if member.value.lower() == name.lower():
                return member
        raise InvalidFilterError(f"Unsupported filter field: '{name}'")


class FilterOperator(StrEnum):
    """Comparison operators a filter may use."""

    EQ = "eq"
    SW = "sw"

    @classmethod
    def lookup(cls, name: str) -> FilterOperator:
        """Resolve an operator case-insensitively.

        Raises:
            InvalidFilterError: If the name is not a supported operator
        """
        try:
            return cls(name.lower())
        except ValueError:
            raise InvalidFilterError(
                f"Unsupported filter operator: '{name}'"
            ) from None


@dataclass(frozen=True)
class Comparison:
    """A single `<field> <operator> "<value>"` term."""

    field: FilterField
    operator: FilterOperator
    value: str


@dataclass(frozen=True)
class MappingFilter:
    """Conjunction of comparisons. No comparisons means "match everything"."""

    comparisons: tuple[Comparison, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.comparisons


_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<string>"(?:[^"\\]|\\.)*")
      | (?P<word>[A-Za-z_][A-Za-z0-9_]*)
      | (?P<other>\S)
    )""",
    re.VERBOSE | re.DOTALL,
)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def _tokenize(expression: str) -> list[tuple[str, str]]:
    tokens: list[tuple[str, str]] = []
    position = 0
    while position < len(expression):
        match = _TOKEN_RE.match(expression, position)
        if match is None:
            # only trailing whitespace is left
            break
        position = match.end()
        kind = match.lastgroup
        if kind is None:
            break
        text = match.group(kind)
        if kind == "other":
            if text == '"':
                raise InvalidFilterError("Unterminated string literal", expression)
            raise InvalidFilterError(f"Unexpected character: '{text}'", expression)
        tokens.append((kind, text))
    return tokens


def _unquote(literal: str) -> str:
    return _ESCAPE_RE.sub(r"\1", literal[1:-1])


def parse_mapping_filter(expression: str | None) -> MappingFilter:
    """Parse a filter expression into a MappingFilter.

    Args:
        expression: Filter text; None, empty or blank selects everything

    Returns:
        The parsed filter

    Raises:
        InvalidFilterError: If the expression is malformed or references an
            unsupported field or operator
    """
    if expression is None or not expression.strip():
        return MappingFilter()

    tokens = _tokenize(expression)
    comparisons: list[Comparison] = []
    index = 0

    while True:
        term = tokens[index : index + 3]
        if len(term) < 3:
            raise InvalidFilterError(
                'Expected <field> <operator> "<value>"', expression
            )
        (field_kind, field_text), (op_kind, op_text), (value_kind, value_text) = term
        if field_kind != "word" or op_kind != "word":
            raise InvalidFilterError(
                'Expected <field> <operator> "<value>"', expression
            )
        if value_kind != "string":
            raise InvalidFilterError(
                f"Filter value must be a double-quoted string, got: {value_text}",
                expression,
            )

        field = FilterField.lookup(field_text)
        operator = FilterOperator.lookup(op_text)
        value = _unquote(value_text)
        if field is FilterField.EXTERNAL_GROUP:
            value = normalize_external_group(value)
        elif field is FilterField.GROUP_ID:
            value = normalize_group_id(value)
        comparisons.append(Comparison(field=field, operator=operator, value=value))
        index += 3

        if index == len(tokens):
            break
        kind, text = tokens[index]
        if kind != "word" or text.lower() != "and":
            raise InvalidFilterError(f"Unexpected token: '{text}'", expression)
        index += 1

    return MappingFilter(comparisons=tuple(comparisons))
