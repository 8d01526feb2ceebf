# fastapi_column_sortable/params.py

from dataclasses import dataclass, field
from typing import Any, Mapping, NamedTuple, Optional

import structlog
from fastapi import Query

from .config import SortableSettings, sortable_settings

logger = structlog.get_logger(__name__)

DIRECTIONS = ("asc", "desc")
MAX_TABLE_LENGTH = 30


class SortRequest(NamedTuple):
    column: Optional[str]
    direction: Optional[str]
    table: Optional[str]


NO_SORT = SortRequest(None, None, None)


@dataclass
class SortContext:
    """Everything a single sort call needs besides the model and the statement.

    ``params`` is the raw key/value input (usually the request query string)
    and may be updated with the default sort when request modification is
    allowed. ``table_name`` identifies the listing this call sorts, so a
    page with several sortable tables can direct a request at one of them.
    """

    params: dict = field(default_factory=dict)
    settings: SortableSettings = field(default_factory=lambda: sortable_settings)
    table_name: Optional[str] = None
    bind: Any = None

    def all_filled(self, *keys: str) -> bool:
        return all(self.params.get(key) not in (None, "") for key in keys)

    def only(self, *keys: str) -> dict:
        return {key: self.params[key] for key in keys if key in self.params}


class SortParams:
    def __init__(
        self,
        sort: Optional[str] = Query(None, description="Column to sort by, e.g. name or author|name"),
        direction: Optional[str] = Query(None, description="asc or desc"),
        table: Optional[str] = Query(None, description="Name of the listing the sort applies to")
    ):
        self.sort = sort
        self.direction = direction
        self.table = table

    def as_dict(self) -> dict:
        params = {"sort": self.sort, "direction": self.direction, "table": self.table}
        return {key: value for key, value in params.items() if value is not None}


def parse_parameters(parameters: Mapping[str, Any], settings: Optional[SortableSettings] = None) -> SortRequest:
    settings = settings or sortable_settings

    column = parameters.get("sort")
    if not column or not isinstance(column, str):
        return NO_SORT

    direction = parameters.get("direction")
    direction = direction.lower() if isinstance(direction, str) else None
    if direction not in DIRECTIONS:
        logger.debug("Falling back to default sort direction", direction=parameters.get("direction"))
        direction = settings.default_direction

    table = parameters.get("table")
    if table is not None and (not isinstance(table, str) or len(table) > MAX_TABLE_LENGTH):
        table = None

    return SortRequest(column, direction, table)


def format_to_parameters(default: Any, settings: Optional[SortableSettings] = None) -> dict:
    """
    Normalize a default sort declaration into request-shaped parameters.

    Args:
        default: a column name, a ``{"sort": ..., "direction": ...}`` mapping
            or a single ``{column: direction}`` pair

    Returns:
        dict with ``sort`` and ``direction`` keys, or an empty dict
    """
    settings = settings or sortable_settings

    if not default:
        return {}

    if isinstance(default, str):
        return {"sort": default, "direction": settings.default_direction}

    if "sort" in default:
        return {"sort": default["sort"], "direction": default.get("direction", settings.default_direction)}

    column, direction = next(iter(default.items()))
    return {"sort": column, "direction": direction}
