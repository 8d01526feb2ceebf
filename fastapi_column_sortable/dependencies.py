# fastapi_column_sortable/dependencies.py

from fastapi import Depends, Request
from sqlalchemy import select
from .config import SortableSettings, sortable_settings
from .params import SortContext, SortParams
from .builder import build_sortable_query
from typing import Any, Optional, Type


def SortableQuery(
    model: Type,
    table_name: Optional[str] = None,
    default: Any = None,
    settings: Optional[SortableSettings] = None,
    bind: Any = None,
):
    """FastAPI dependency yielding ``select(model)`` sorted by the request.

    The resolved ``SortContext`` is stored on ``request.state.sortable`` so
    handlers can report the effective sort, including a merged default.
    """
    def wrapper(
        request: Request,
        params: SortParams = Depends()
    ):
        context = SortContext(
            params=params.as_dict(),
            settings=settings or sortable_settings,
            table_name=table_name,
            bind=bind,
        )
        request.state.sortable = context
        return build_sortable_query(model, select(model), context, default)
    return Depends(wrapper)
