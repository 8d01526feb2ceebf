from .builder import build_sortable_query, get_default_sortable, query_order_builder
from .config import JoinType, SortableSettings, sortable_settings
from .core import column_exists, explode_sort_parameter, form_join, is_joined, plan_join, sort_strategy
from .dependencies import SortableQuery
from .exceptions import ColumnSortableException, InvalidRelation, InvalidSortArgument, UnsupportedRelationKind
from .params import SortContext, SortParams, SortRequest, format_to_parameters, parse_parameters
from .relations import RelationDescriptor, RelationKind, describe_relation

__all__ = [
    "build_sortable_query",
    "column_exists",
    "ColumnSortableException",
    "describe_relation",
    "explode_sort_parameter",
    "form_join",
    "format_to_parameters",
    "get_default_sortable",
    "InvalidRelation",
    "InvalidSortArgument",
    "is_joined",
    "JoinType",
    "parse_parameters",
    "plan_join",
    "query_order_builder",
    "RelationDescriptor",
    "RelationKind",
    "sort_strategy",
    "SortableQuery",
    "SortableSettings",
    "sortable_settings",
    "SortContext",
    "SortParams",
    "SortRequest",
    "UnsupportedRelationKind",
]
