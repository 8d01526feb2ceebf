# fastapi_column_sortable/core.py

import inspect
from dataclasses import dataclass
from typing import Any, Callable, NamedTuple, Optional

import structlog
from sqlalchemy import asc, column as sa_column, desc, inspect as sa_inspect, table as sa_table
from sqlalchemy.orm import aliased
from sqlalchemy.sql import Join, Select

from .config import JoinType
from .exceptions import InvalidSortArgument, UnsupportedRelationKind
from .relations import JOIN_KEYS, RelationDescriptor

logger = structlog.get_logger(__name__)

SORT_COLUMN_ATTR = "__sort_column__"


class RelationReference(NamedTuple):
    relation_name: str
    column: str


@dataclass(frozen=True)
class JoinSpec:
    parent_table: str
    related_table: str
    parent_key: str
    related_key: str
    parent: Any
    related: Any
    onclause: Any


def table_name(model) -> str:
    return model.__table__.name


def explode_sort_parameter(parameter: str, separator: str = "|", strict: bool = False) -> Optional[RelationReference]:
    """Split ``relation|column`` into its parts, or return None for a plain column."""
    if separator not in parameter:
        return None

    parts = parameter.split(separator)
    if len(parts) != 2 or not all(parts):
        if strict:
            raise InvalidSortArgument(parameter)
        logger.debug("Ignoring malformed relation sort parameter", parameter=parameter)
        return None

    return RelationReference(*parts)


def plan_join(relation: RelationDescriptor) -> JoinSpec:
    related_table = table_name(relation.related)
    parent_table = table_name(relation.parent)
    parent = relation.parent

    # self-join: the parent side goes under an alias so both sides stay addressable
    if parent_table == related_table:
        parent_table = f"parent_{parent_table}"
        parent = aliased(relation.parent, name=parent_table)

    try:
        parent_column, related_column = JOIN_KEYS[relation.kind](relation)
    except KeyError as e:
        raise UnsupportedRelationKind(relation.name, e) from e

    onclause = sa_inspect(parent).selectable.c[parent_column] == relation.related.__table__.c[related_column]

    return JoinSpec(
        parent_table=parent_table,
        related_table=related_table,
        parent_key=f"{parent_table}.{parent_column}",
        related_key=f"{related_table}.{related_column}",
        parent=parent,
        related=relation.related,
        onclause=onclause,
    )


def _join_names(element) -> set:
    if isinstance(element, Join):
        return _join_names(element.left) | _join_names(element.right)
    name = getattr(element, "name", None)
    return {name} if name else set()


def is_joined(stmt: Select, spec: JoinSpec) -> bool:
    """True when the statement already joins the parent and related tables of ``spec``."""
    for from_ in stmt.get_final_froms():
        if isinstance(from_, Join) and {spec.parent_table, spec.related_table} <= _join_names(from_):
            return True
    return False


def form_join(stmt: Select, spec: JoinSpec, join_type: JoinType = JoinType.LEFT) -> Select:
    """
    Select only the parent entity and join the related table onto it.

    Args:
        stmt: statement selecting the parent model
        spec: result of ``plan_join``
        join_type: left, inner or right

    Returns:
        the joined statement
    """
    stmt = stmt.with_only_columns(spec.parent)
    logger.debug("Joining relation for sorting", related_table=spec.related_table,
                 parent_key=spec.parent_key, related_key=spec.related_key, join_type=join_type.value)

    if join_type is JoinType.RIGHT:
        return stmt.join_from(spec.related, spec.parent, spec.onclause, isouter=True)
    return stmt.join_from(spec.parent, spec.related, spec.onclause, isouter=join_type is JoinType.LEFT)


def column_exists(model, column: str, bind: Any = None) -> bool:
    sortable = getattr(model, "sortable", None)
    if sortable is not None:
        return column in sortable

    if bind is not None:
        columns = sa_inspect(bind).get_columns(table_name(model), schema=model.__table__.schema)
        return column in {c["name"] for c in columns}

    return column in model.__table__.c


def order_by_direction(expression, direction: str):
    return desc(expression) if direction == "desc" else asc(expression)


def qualified_column(table: str, column: str):
    return sa_table(table, sa_column(column)).c[column]


def sort_strategy(column: str):
    """Register a classmethod or staticmethod as the sort for ``column``.

    The method receives ``(stmt, direction)`` and its return value is used
    as the sorted statement, so it can order by computed expressions or
    several columns at once::

        @classmethod
        @sort_strategy("full_name")
        def sort_full_name(cls, stmt, direction):
            ...
    """
    def decorator(func):
        setattr(func, SORT_COLUMN_ATTR, column)
        return func
    return decorator


def get_sort_strategy(model, column: str) -> Optional[Callable[[Any, str], Any]]:
    explicit = getattr(model, "sort_strategies", None) or {}
    if column in explicit:
        return explicit[column]

    # subclasses come last so their registrations win
    found = None
    for klass in reversed(inspect.getmro(model)):
        for name, attr in vars(klass).items():
            func = attr.__func__ if isinstance(attr, (classmethod, staticmethod)) else attr
            if inspect.isfunction(func) and getattr(func, SORT_COLUMN_ATTR, None) == column:
                found = name
    return getattr(model, found) if found else None
