from typing import Any, Mapping, Optional

import structlog
from sqlalchemy import literal_column, select, Select

from .config import SortableSettings
from .core import (column_exists, explode_sort_parameter, form_join, get_sort_strategy, is_joined,
                   order_by_direction, plan_join, qualified_column, table_name)
from .exceptions import ColumnSortableException, UnsupportedRelationKind
from .params import SortContext, format_to_parameters, parse_parameters
from .relations import describe_relation

logger = structlog.get_logger(__name__)


def build_sortable_query(cls: Any, stmt: Select | None = None, context: SortContext | None = None,
                         default: Any = None) -> Select:
    stmt = select(cls) if stmt is None else stmt
    context = SortContext() if context is None else context

    # Request driven sort
    if context.all_filled("sort", "direction"):
        return query_order_builder(cls, stmt, context.only("sort", "direction", "table"), context)

    # Default sort
    if default is None:
        default = get_default_sortable(cls, context.settings)

    if default is not None:
        default_params = format_to_parameters(default, context.settings)
        if context.settings.allow_request_modification and default_params:
            context.params.update(default_params)
            logger.info("Applied default sort to request parameters", model=cls.__name__, **default_params)
        return query_order_builder(cls, stmt, default_params, context)

    return stmt


def get_default_sortable(cls: Any, settings: SortableSettings) -> Optional[dict]:
    """Return ``{first_sortable_column: default_direction}`` when enabled."""
    if not settings.default_first_column:
        return None

    # sets have no declared order, any member will do
    first = next(iter(getattr(cls, "sortable", None) or ()), None)
    if first is None:
        return None
    return {first: settings.default_direction}


def query_order_builder(cls: Any, stmt: Select, sort_params: Mapping[str, Any], context: SortContext) -> Select:
    model = cls
    settings = context.settings

    column, direction, table = parse_parameters(sort_params, settings)

    if table is not None and table != context.table_name:
        return stmt

    if column is None:
        return stmt

    reference = explode_sort_parameter(column, settings.relation_column_separator)
    if reference is not None:
        relation = describe_relation(model, reference.relation_name)
        try:
            spec = plan_join(relation)
            if not is_joined(stmt, spec):
                stmt = form_join(stmt, spec, settings.join_type)
        except ColumnSortableException:
            raise
        except Exception as e:
            raise UnsupportedRelationKind(reference.relation_name, e) from e
        model = relation.related
        column = reference.column

    strategy = get_sort_strategy(model, column)
    if strategy is not None:
        return strategy(stmt, direction)

    if column in (getattr(model, "sortable_as", None) or ()):
        return stmt.order_by(order_by_direction(literal_column(column), direction))

    if column_exists(model, column, context.bind):
        return stmt.order_by(order_by_direction(qualified_column(table_name(model), column), direction))

    logger.debug("Ignoring unsortable column", model=model.__name__, column=column)
    return stmt
